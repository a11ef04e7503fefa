"""Domain model for report synthesis inputs."""

from pydantic import BaseModel, Field

NOT_VERIFIED = "Not verified"


class ReportItem(BaseModel):
    """Projection of a claim handed to report synthesis."""

    text: str = Field(..., description="Claim text")
    score: int = Field(..., description="Credibility score")
    verification_summary: str = Field(NOT_VERIFIED, description="Verification verdict")
    is_flagged: bool = Field(..., description="Whether the claim is flagged")
