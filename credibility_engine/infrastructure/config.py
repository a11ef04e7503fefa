"""Runtime configuration loaded from the environment."""

import logging
import os

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class EngineSettings(BaseModel):
    """Settings for the oracle, evidence lookup and caller-side timeouts."""

    openai_api_key: str = Field(default="", description="OpenAI API key")
    oracle_model: str = Field(default="gpt-4o-mini", description="Chat model used by the oracle")
    oracle_timeout: float = Field(default=60.0, gt=0, description="Seconds allowed per oracle call")
    evidence_language: str = Field(default="en", description="Wikipedia language code")
    evidence_user_agent: str = Field(
        default="CredibilityEngine/1.0",
        description="User agent for Wikipedia API",
    )

    @classmethod
    def from_env(cls) -> "EngineSettings":
        """Create settings from environment variables."""
        api_key = os.getenv("OPENAI_API_KEY", "")
        if not api_key:
            logger.warning("⚠️ OPENAI_API_KEY not found in environment variables")
        else:
            logger.info(f"✅ OpenAI API key loaded: {len(api_key)} chars")

        return cls(
            openai_api_key=api_key,
            oracle_model=os.getenv("CREDIBILITY_ORACLE_MODEL", "gpt-4o-mini"),
            oracle_timeout=float(os.getenv("CREDIBILITY_ORACLE_TIMEOUT", "60")),
            evidence_language=os.getenv("CREDIBILITY_EVIDENCE_LANGUAGE", "en"),
            evidence_user_agent=os.getenv("CREDIBILITY_EVIDENCE_USER_AGENT", "CredibilityEngine/1.0"),
        )
