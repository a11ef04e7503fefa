"""Service coordinating ingestion, verification and reporting over a claim store."""

import logging
from functools import partial
from typing import List, Optional

from ..models.claim import Claim, ClaimStatus, VerificationResult
from ..models.source import SourceCategory
from ..ports.analysis_oracle import AnalysisOracle, VerificationOutcome
from .claim_store import ClaimStore, StoreSnapshot
from .conflict_resolver import ConflictResolver, apply_interaction_to_claim
from .oracle_calls import DEFAULT_ORACLE_TIMEOUT, call_oracle
from .report_filter import EMPTY_REPORT, REPORT_ERROR, ReportFilter
from .score_engine import apply_verification, level_for

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_NAME = "User Input / Document"
DEFAULT_UPDATE_NAME = "Supplemental Source (Audit)"

STAGE_IDLE = "Idle"
STAGE_EXTRACTING = "Extracting Claims & Bias..."
STAGE_RESOLVING = "Resolving Conflicts..."
STAGE_MERGED = "Update Merged"
STAGE_VERIFYING = "Verifying Claim..."
STAGE_SYNTHESIZING = "Synthesizing Final Report..."
STAGE_COMPLETE = "Complete"


def _mark_analyzing(claim: Claim) -> Claim:
    return claim.model_copy(update={"status": ClaimStatus.ANALYZING})


def _mark_flagged(claim: Claim) -> Claim:
    return claim.model_copy(update={"status": ClaimStatus.FLAGGED})


def _apply_outcome(outcome: VerificationOutcome):
    verification = VerificationResult(
        is_verified=outcome.is_verified,
        source_url=outcome.source_url,
        source_title=outcome.source_title,
        summary=outcome.summary,
    )

    def updater(claim: Claim) -> Claim:
        score, status = apply_verification(claim.credibility_score, outcome.summary)
        return claim.model_copy(
            update={
                "verification": verification,
                "credibility_score": score,
                "credibility_level": level_for(score),
                "status": status,
            }
        )

    return updater


class ResearchService:
    """Runs the claim lifecycle for one research session.

    Owns a single ``ClaimStore``. Operations may run concurrently; the store
    serializes their writes.
    """

    def __init__(
        self,
        oracle: AnalysisOracle,
        store: Optional[ClaimStore] = None,
        timeout: float = DEFAULT_ORACLE_TIMEOUT,
    ):
        """Initialize the service.

        Args:
            oracle: Oracle for extraction, verification, classification and synthesis
            store: Claim store to operate on; a fresh one when omitted
            timeout: Seconds to wait for each oracle call
        """
        self.oracle = oracle
        self.store = store or ClaimStore()
        self._timeout = timeout
        self._resolver = ConflictResolver(oracle, timeout=timeout)
        self._report_filter = ReportFilter(oracle, timeout=timeout)
        self._report: Optional[str] = None
        self._report_revision: Optional[int] = None
        self._in_flight = 0
        self.processing_stage = STAGE_IDLE
        logger.info("🔧 ResearchService initialized")

    @property
    def is_processing(self) -> bool:
        """Whether any operation is currently running."""
        return self._in_flight > 0

    def _begin(self, stage: str) -> None:
        self._in_flight += 1
        self.processing_stage = stage

    def _end(self, stage: str) -> None:
        self._in_flight -= 1
        self.processing_stage = stage

    async def analyze_source(
        self,
        text: str,
        name: str = DEFAULT_SOURCE_NAME,
        category: SourceCategory = SourceCategory.USER_INPUT,
    ) -> List[Claim]:
        """Ingest a source and merge its claims into the corpus.

        Returns:
            The claims extracted from this source
        """
        return await self._ingest(text, name, category, STAGE_COMPLETE)

    async def apply_update(
        self,
        text: str,
        name: str = DEFAULT_UPDATE_NAME,
        category: SourceCategory = SourceCategory.SUPPLEMENTAL_UPDATE,
    ) -> List[Claim]:
        """Ingest a supplemental source that may contradict earlier claims."""
        return await self._ingest(text, name, category, STAGE_MERGED)

    async def _ingest(
        self,
        text: str,
        name: str,
        category: SourceCategory,
        final_stage: str,
    ) -> List[Claim]:
        if not text.strip():
            logger.info("Ignoring empty source text")
            return []

        self._begin(STAGE_EXTRACTING)
        try:
            source = await self.store.create_source(name, category, text)
            logger.info(f"🔍 Extracting claims from {source.name}: {text[:100]}...")

            result = await call_oracle(
                "claim extraction",
                self.oracle.extract_claims(text, source),
                timeout=self._timeout,
            )
            new_claims = await self.store.record_extraction(source, result.unwrap_or([]))

            self.processing_stage = STAGE_RESOLVING
            snapshot = await self.store.get_snapshot()
            interactions = await self._resolver.classify(snapshot.claims, new_claims) or {}
            updaters = {
                claim_id: partial(apply_interaction_to_claim, interaction=interaction)
                for claim_id, interaction in interactions.items()
            }
            await self.store.merge_claims(new_claims, updaters)

            logger.info(f"✅ Ingested {len(new_claims)} claims from {source.name}")
            return new_claims
        finally:
            self._end(final_stage)

    async def verify_claim(self, claim_id: str) -> Optional[Claim]:
        """Verify one claim against external evidence.

        Returns:
            The updated claim, or None if no such claim exists
        """
        claim = await self.store.update_claim(claim_id, _mark_analyzing)
        if claim is None:
            logger.warning(f"⚠️ Cannot verify unknown claim {claim_id}")
            return None

        self._begin(STAGE_VERIFYING)
        try:
            logger.info(f"🔍 Verifying claim {claim_id}: {claim.text[:100]}")
            result = await call_oracle(
                "claim verification",
                self.oracle.verify_claim(claim),
                timeout=self._timeout,
            )
            if result.is_ok:
                updated = await self.store.update_claim(claim_id, _apply_outcome(result.value))
            else:
                updated = await self.store.update_claim(claim_id, _mark_flagged)

            if updated is not None:
                logger.info(
                    f"✅ Claim {claim_id} is {updated.status.value} "
                    f"with score {updated.credibility_score}"
                )
            return updated
        finally:
            self._end(STAGE_COMPLETE)

    async def generate_report(self, force: bool = False) -> str:
        """Synthesize the refined report, reusing it while claims are unchanged."""
        snapshot = await self.store.get_snapshot()
        if not force and self._report is not None and self._report_revision == snapshot.revision:
            logger.info("📄 Reusing cached report")
            return self._report

        self._begin(STAGE_SYNTHESIZING)
        try:
            report = await self._report_filter.synthesize(snapshot.claims)
        finally:
            self._end(STAGE_COMPLETE)

        if report not in (REPORT_ERROR, EMPTY_REPORT):
            self._report = report
            self._report_revision = snapshot.revision
        return report

    async def snapshot(self) -> StoreSnapshot:
        """Current state of the research corpus."""
        return await self.store.get_snapshot()
