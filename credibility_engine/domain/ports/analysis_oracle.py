"""Protocol for the external analysis oracle."""

import math
from typing import Any, Dict, List, Optional, Protocol

from pydantic import BaseModel, Field, field_validator

from ..models.claim import Claim
from ..models.interaction import Interaction
from ..models.oracle_result import OracleResult
from ..models.report import ReportItem
from ..models.source import Source

# Score assumed when the oracle omits or garbles one.
SAFE_LOW_SCORE = 0.0


class ExtractedClaim(BaseModel):
    """Candidate claim returned by extraction."""

    claim_text: str = Field(..., alias="claimText", min_length=1)
    context: str = Field("")
    bias_analysis: str = Field("", alias="biasAnalysis")
    score: float = Field(SAFE_LOW_SCORE, description="Raw credibility score 0-100")

    class Config:
        """Pydantic model configuration."""
        populate_by_name = True

    @field_validator("context", "bias_analysis", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("score", mode="before")
    @classmethod
    def _safe_score(cls, value: Any) -> float:
        if isinstance(value, bool):
            return SAFE_LOW_SCORE
        try:
            score = float(value)
        except (TypeError, ValueError):
            return SAFE_LOW_SCORE
        if not math.isfinite(score):
            return SAFE_LOW_SCORE
        return score


class VerificationOutcome(BaseModel):
    """Verdict returned by verification."""

    summary: str
    is_verified: bool = Field(False, alias="isVerified")
    source_title: Optional[str] = Field(None, alias="sourceTitle")
    source_url: Optional[str] = Field(None, alias="sourceUrl")

    class Config:
        """Pydantic model configuration."""
        populate_by_name = True


class ClaimDigest(BaseModel):
    """Minimal claim view sent for conflict classification."""

    id: str
    text: str

    @classmethod
    def of(cls, claim: Claim) -> "ClaimDigest":
        return cls(id=claim.id, text=claim.text)


class AnalysisOracle(Protocol):
    """Protocol defining the interface for analysis oracles.

    Every operation reports failure through ``Err`` instead of raising.
    Callers still enforce their own timeout.
    """

    async def initialize(self) -> None:
        """Initialize the oracle."""
        ...

    async def shutdown(self) -> None:
        """Clean up resources."""
        ...

    async def extract_claims(self, text: str, source: Source) -> OracleResult[List[ExtractedClaim]]:
        """Extract candidate claims with bias rationale and initial score."""
        ...

    async def verify_claim(self, claim: Claim) -> OracleResult[VerificationOutcome]:
        """Search external evidence and narrate a verdict."""
        ...

    async def classify_interactions(
        self,
        existing: List[ClaimDigest],
        incoming: List[ClaimDigest],
    ) -> OracleResult[List[Interaction]]:
        """Judge how incoming claims relate to existing ones."""
        ...

    async def synthesize_report(self, items: List[ReportItem]) -> OracleResult[str]:
        """Write a prose report from the given items."""
        ...

    @property
    def provider_name(self) -> str:
        """Get the oracle name."""
        ...

    @property
    def is_available(self) -> bool:
        """Check if the oracle is ready."""
        ...

    @property
    def capabilities(self) -> Dict[str, bool]:
        """Get the oracle's capabilities."""
        ...
