"""Domain model for judgements between new and existing claims."""

from enum import Enum

from pydantic import BaseModel, Field


class InteractionKind(str, Enum):
    """How a newer claim relates to an existing one."""

    CONTRADICTS = "contradicts"
    REINFORCES = "reinforces"
    NEUTRAL = "neutral"


class Interaction(BaseModel):
    """Ephemeral judgement produced during conflict resolution. Never stored."""

    existing_claim_id: str = Field(..., alias="existingId", description="Id of the existing claim")
    kind: InteractionKind = Field(..., alias="interaction", description="Kind of interaction")
    reason: str = Field("", description="Why the claims interact")

    class Config:
        """Pydantic model configuration."""
        frozen = True
        populate_by_name = True
