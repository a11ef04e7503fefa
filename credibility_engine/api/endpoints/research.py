"""Research API endpoints: ingestion, verification and reporting."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ...domain.models.claim import Claim
from ...domain.models.source import Source, SourceCategory
from ...domain.services.research_service import (
    DEFAULT_SOURCE_NAME,
    DEFAULT_UPDATE_NAME,
    ResearchService,
)
from ...infrastructure.dependencies import get_research_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/research", tags=["research"])


class SourceRequest(BaseModel):
    """Request model for ingesting a source."""

    text: str = Field(..., description="Source text to analyze")
    name: str = Field(default=DEFAULT_SOURCE_NAME, description="Source display name")
    category: SourceCategory = Field(default=SourceCategory.USER_INPUT, description="Source category")


class UpdateRequest(BaseModel):
    """Request model for ingesting a supplemental update."""

    text: str = Field(..., description="Update text to analyze")
    name: str = Field(default=DEFAULT_UPDATE_NAME, description="Source display name")


class IngestionResponse(BaseModel):
    """Claims extracted from one ingestion and the merged corpus."""

    new_claims: List[Claim] = Field(..., description="Claims extracted from this source")
    claims: List[Claim] = Field(..., description="All claims after merging")


class ResearchStateResponse(BaseModel):
    """Current research state."""

    sources: List[Source]
    claims: List[Claim]
    revision: int
    is_processing: bool
    processing_stage: str


class ReportResponse(BaseModel):
    """Refined report."""

    report: str


@router.post("/sources", response_model=IngestionResponse)
async def analyze_source(
    request: SourceRequest,
    service: ResearchService = Depends(get_research_service),
) -> IngestionResponse:
    """Extract claims from a source and merge them into the corpus."""
    new_claims = await service.analyze_source(request.text, request.name, request.category)
    snapshot = await service.snapshot()
    return IngestionResponse(new_claims=new_claims, claims=snapshot.claims)


@router.post("/updates", response_model=IngestionResponse)
async def apply_update(
    request: UpdateRequest,
    service: ResearchService = Depends(get_research_service),
) -> IngestionResponse:
    """Ingest a supplemental source and resolve conflicts with earlier claims."""
    new_claims = await service.apply_update(request.text, request.name)
    snapshot = await service.snapshot()
    return IngestionResponse(new_claims=new_claims, claims=snapshot.claims)


@router.get("/claims", response_model=ResearchStateResponse)
async def get_state(service: ResearchService = Depends(get_research_service)) -> ResearchStateResponse:
    """Get all sources and claims."""
    snapshot = await service.snapshot()
    return ResearchStateResponse(
        sources=snapshot.sources,
        claims=snapshot.claims,
        revision=snapshot.revision,
        is_processing=service.is_processing,
        processing_stage=service.processing_stage,
    )


@router.post("/claims/{claim_id}/verify", response_model=Claim)
async def verify_claim(
    claim_id: str,
    service: ResearchService = Depends(get_research_service),
) -> Claim:
    """Verify one claim against external evidence.

    Raises:
        HTTPException: If the claim does not exist
    """
    claim = await service.verify_claim(claim_id)
    if claim is None:
        raise HTTPException(status_code=404, detail=f"Claim not found: {claim_id}")
    return claim


@router.post("/report", response_model=ReportResponse)
async def generate_report(
    force: bool = False,
    service: ResearchService = Depends(get_research_service),
) -> ReportResponse:
    """Generate the refined report from the current claims."""
    return ReportResponse(report=await service.generate_report(force=force))
