"""Factory for creating and managing analysis oracles."""

import logging
from typing import Any, Callable, Dict, Optional

from ...domain.ports.analysis_oracle import AnalysisOracle
from ...domain.ports.evidence_provider import EvidenceProvider
from ..config import EngineSettings
from .chatgpt_oracle import ChatGPTOracle, ChatGPTOracleConfig
from .unavailable_oracle import UnavailableOracle

logger = logging.getLogger(__name__)

OracleBuilder = Callable[..., AnalysisOracle]


class OracleFactory:
    """Factory for creating and managing analysis oracles."""

    def __init__(self, settings: Optional[EngineSettings] = None):
        """Initialize the factory."""
        self._settings = settings or EngineSettings.from_env()
        self._builders: Dict[str, OracleBuilder] = {}
        self._instances: Dict[str, AnalysisOracle] = {}

        # Register default oracles
        self.register_oracle("chatgpt", self._build_chatgpt)
        self.register_oracle("unavailable", UnavailableOracle)

    def _build_chatgpt(
        self,
        evidence_provider: Optional[EvidenceProvider] = None,
        **kwargs: Any,
    ) -> ChatGPTOracle:
        config = ChatGPTOracleConfig(
            api_key=self._settings.openai_api_key,
            model=self._settings.oracle_model,
            timeout=self._settings.oracle_timeout,
            **kwargs,
        )
        return ChatGPTOracle(config=config, evidence_provider=evidence_provider)

    def register_oracle(self, name: str, builder: OracleBuilder) -> None:
        """Register a new oracle.

        Args:
            name: Oracle name
            builder: Class or callable building an oracle instance
        """
        self._builders[name] = builder

    async def create_oracle(self, name: str, **kwargs: Any) -> AnalysisOracle:
        """Create and initialize an oracle instance.

        Args:
            name: Oracle name
            **kwargs: Oracle-specific configuration

        Returns:
            Initialized oracle instance

        Raises:
            ValueError: If the oracle is not registered
            ConnectionError: If initialization fails
        """
        if name not in self._builders:
            raise ValueError(f"Oracle '{name}' not found")

        if name not in self._instances:
            oracle = self._builders[name](**kwargs)
            await oracle.initialize()
            self._instances[name] = oracle
            logger.info(f"🤖 Oracle '{name}' created")

        return self._instances[name]

    def get_oracle(self, name: str) -> Optional[AnalysisOracle]:
        """Get an existing oracle instance, or None."""
        return self._instances.get(name)

    @property
    def available_oracles(self) -> Dict[str, bool]:
        """Registered oracles and whether an instance is active."""
        return {name: name in self._instances for name in self._builders}

    async def shutdown(self) -> None:
        """Shutdown all oracle instances."""
        for oracle in self._instances.values():
            await oracle.shutdown()
        self._instances.clear()
