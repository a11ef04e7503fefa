"""Stand-in oracle used when no real oracle could be initialized."""

import logging
from typing import Dict, List

from ...domain.models.claim import Claim
from ...domain.models.interaction import Interaction
from ...domain.models.oracle_result import Err, OracleResult
from ...domain.models.report import ReportItem
from ...domain.models.source import Source
from ...domain.ports.analysis_oracle import (
    AnalysisOracle,
    ClaimDigest,
    ExtractedClaim,
    VerificationOutcome,
)

logger = logging.getLogger(__name__)


class UnavailableOracle(AnalysisOracle):
    """Answers every request with ``Err`` so callers fall back to safe defaults."""

    def __init__(self, reason: str = "oracle unavailable"):
        self._reason = reason

    async def initialize(self) -> None:
        logger.warning(f"⚠️ Using unavailable oracle: {self._reason}")

    async def shutdown(self) -> None:
        pass

    async def extract_claims(self, text: str, source: Source) -> OracleResult[List[ExtractedClaim]]:
        return Err(self._reason)

    async def verify_claim(self, claim: Claim) -> OracleResult[VerificationOutcome]:
        return Err(self._reason)

    async def classify_interactions(
        self,
        existing: List[ClaimDigest],
        incoming: List[ClaimDigest],
    ) -> OracleResult[List[Interaction]]:
        return Err(self._reason)

    async def synthesize_report(self, items: List[ReportItem]) -> OracleResult[str]:
        return Err(self._reason)

    @property
    def provider_name(self) -> str:
        return "Unavailable"

    @property
    def is_available(self) -> bool:
        return False

    @property
    def capabilities(self) -> Dict[str, bool]:
        return {}
