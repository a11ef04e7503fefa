"""Domain models for claims and their verification results."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class CredibilityLevel(str, Enum):
    """Three-band credibility classification derived from a score."""

    HIGH = "HIGH"  # 80-100
    MEDIUM = "MEDIUM"  # 50-79
    LOW = "LOW"  # 0-49, or pinned by a contradiction
    UNKNOWN = "UNKNOWN"  # not yet scored


class ClaimStatus(str, Enum):
    """Lifecycle status of a claim."""

    PENDING = "pending"
    ANALYZING = "analyzing"
    VERIFIED = "verified"
    FLAGGED = "flagged"


class VerificationResult(BaseModel):
    """Outcome of checking a claim against external evidence.

    Replaced wholesale on re-verification, never partially mutated.
    """

    is_verified: bool = Field(..., description="Whether external evidence was found")
    source_url: Optional[str] = Field(None, description="URL of the supporting source")
    source_title: Optional[str] = Field(None, description="Title of the supporting source")
    summary: str = Field(..., description="Narrated verdict")

    class Config:
        """Pydantic model configuration."""
        frozen = True


class Claim(BaseModel):
    """An atomic factual assertion extracted from a source."""

    id: str = Field(..., description="Process-wide unique claim identifier")
    text: str = Field(..., description="Current claim text")
    original_text: str = Field(..., description="Claim text as first extracted")
    source_id: str = Field(..., description="Identifier of the originating source")
    credibility_score: int = Field(..., ge=0, le=100, description="Credibility score 0-100")
    credibility_level: CredibilityLevel = Field(
        CredibilityLevel.UNKNOWN, description="Band derived from the score"
    )
    bias_analysis: str = Field("", description="Append-only bias narrative")
    context: str = Field("", description="Immediate context or speaker intent")
    verification: Optional[VerificationResult] = Field(None, description="Latest verification")
    status: ClaimStatus = Field(ClaimStatus.PENDING, description="Lifecycle status")
    is_new: bool = Field(False, description="Highlights claims from the latest batch")

    class Config:
        """Pydantic model configuration."""
        frozen = True
        json_schema_extra = {
            "example": {
                "id": "src_user-input_3f2a9c1b7d4e_claim_0_1700000000000000000_1",
                "text": "TechCorp achieved 300% growth in its AI sector.",
                "original_text": "TechCorp achieved 300% growth in its AI sector.",
                "source_id": "src_user-input_3f2a9c1b7d4e",
                "credibility_score": 35,
                "credibility_level": "LOW",
                "bias_analysis": "CEO statement on an earnings call, strong promotional bias.",
                "context": "Q3 earnings call opening remarks",
                "status": "flagged",
                "is_new": True,
            }
        }
