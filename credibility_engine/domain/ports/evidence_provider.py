"""Evidence provider interface used to ground claim verification."""

from typing import Any, Dict, List, Protocol

from pydantic import BaseModel, Field


class EvidenceSnippet(BaseModel):
    """A piece of external evidence."""

    title: str = Field(..., description="Article title")
    summary: str = Field(..., description="Article summary")
    url: str = Field(..., description="Article URL")
    relevance_score: float = Field(..., description="Relevance score (0-1)")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Additional metadata")


class EvidenceProvider(Protocol):
    """Protocol for external evidence sources."""

    async def initialize(self) -> None:
        """Initialize the provider and verify connection."""
        ...

    async def search(
        self,
        query: str,
        max_results: int = 3,
        min_score: float = 0.3,
    ) -> List[EvidenceSnippet]:
        """Search for evidence relevant to the query."""
        ...

    async def shutdown(self) -> None:
        """Shutdown the provider and clean up resources."""
        ...

    @property
    def provider_name(self) -> str:
        """Get the provider name."""
        ...

    @property
    def is_available(self) -> bool:
        """Check if the provider is available and ready."""
        ...
