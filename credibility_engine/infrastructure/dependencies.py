"""Dependency injection configuration for hexagonal architecture."""

import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from ..domain.ports.analysis_oracle import AnalysisOracle
from ..domain.ports.evidence_provider import EvidenceProvider
from ..domain.services.research_service import ResearchService
from .ai.factory import OracleFactory
from .config import EngineSettings
from .evidence.wikipedia_adapter import WikipediaConfig, WikipediaEvidenceAdapter

logger = logging.getLogger(__name__)

# Load environment variables from .env file if it exists
load_dotenv()


class ServiceContainer:
    """Service container for dependency injection."""

    def __init__(self, settings: Optional[EngineSettings] = None):
        """Initialize service container."""
        self.settings = settings or EngineSettings.from_env()
        self.oracle_factory = OracleFactory(self.settings)
        self._evidence: Optional[EvidenceProvider] = None
        self._services: Dict[str, Any] = {"research_service": None}
        logger.info("🔧 Service container created")

    async def _setup_evidence_provider(self) -> Optional[EvidenceProvider]:
        """Setup the evidence provider used to ground verification."""
        try:
            logger.info("📚 Setting up evidence provider...")
            provider = WikipediaEvidenceAdapter(
                WikipediaConfig(
                    user_agent=self.settings.evidence_user_agent,
                    language=self.settings.evidence_language,
                )
            )
            await provider.initialize()
            logger.info("✅ Evidence provider ready")
            return provider
        except Exception as e:
            logger.warning(f"⚠️ Failed to setup evidence provider: {e}")
            return None

    async def _setup_oracle(self) -> AnalysisOracle:
        """Setup the analysis oracle, falling back to the unavailable oracle."""
        try:
            logger.info("🤖 Setting up analysis oracle...")
            oracle = await self.oracle_factory.create_oracle(
                "chatgpt", evidence_provider=self._evidence
            )
            logger.info("✅ Analysis oracle ready")
            return oracle
        except Exception as e:
            logger.warning(f"⚠️ Failed to setup analysis oracle: {e}")
            logger.info("🎭 ResearchService will degrade to fallback results")
            return await self.oracle_factory.create_oracle("unavailable", reason=str(e))

    async def get_research_service(self) -> ResearchService:
        """Get the research service, creating it with its providers on first use."""
        if self._services["research_service"] is None:
            logger.info("🔧 Creating ResearchService with providers...")
            self._evidence = await self._setup_evidence_provider()
            oracle = await self._setup_oracle()
            self._services["research_service"] = ResearchService(
                oracle, timeout=self.settings.oracle_timeout
            )
            logger.info("✅ ResearchService created")

        return self._services["research_service"]

    async def shutdown(self) -> None:
        """Shutdown oracles and the evidence provider."""
        await self.oracle_factory.shutdown()
        if self._evidence is not None:
            await self._evidence.shutdown()
            self._evidence = None
        self._services["research_service"] = None


# Global service container instance
@lru_cache()
def get_service_container() -> ServiceContainer:
    """Get global service container instance."""
    return ServiceContainer()


async def get_research_service() -> ResearchService:
    """FastAPI dependency for the research service."""
    return await get_service_container().get_research_service()
