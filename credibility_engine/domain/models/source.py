"""Domain model for ingested sources."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


class SourceCategory(str, Enum):
    """Kinds of source text, used to bias interpretation of claims."""

    FINANCIAL_REPORT = "financial-report"
    PRESS_RELEASE = "press-release"
    NEWS_ARTICLE = "news-article"
    ACADEMIC_PAPER = "academic-paper"
    USER_INPUT = "user-input"
    SUPPLEMENTAL_UPDATE = "supplemental-update"

    @property
    def label(self) -> str:
        """Human readable label used in prompts."""
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS = {
    SourceCategory.FINANCIAL_REPORT: "Financial Report",
    SourceCategory.PRESS_RELEASE: "Press Release",
    SourceCategory.NEWS_ARTICLE: "News Article",
    SourceCategory.ACADEMIC_PAPER: "Academic Paper",
    SourceCategory.USER_INPUT: "User Input",
    SourceCategory.SUPPLEMENTAL_UPDATE: "Supplemental Update",
}


class Source(BaseModel):
    """A unit of ingested text. Immutable once created."""

    id: str = Field(..., description="Unique source identifier")
    name: str = Field(..., description="Display name of the source")
    category: SourceCategory = Field(..., description="Source category")
    raw_content: str = Field(..., description="The text that was ingested")
    ingested_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the source was ingested",
    )

    class Config:
        """Pydantic model configuration."""
        frozen = True
        json_schema_extra = {
            "example": {
                "id": "src_user-input_3f2a9c1b7d4e",
                "name": "Q3 Earnings Call - TechCorp CEO",
                "category": "user-input",
                "raw_content": "We have achieved 300% growth in our AI sector.",
            }
        }
