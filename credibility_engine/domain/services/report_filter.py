"""Service preparing claims for report synthesis."""

import logging
from typing import List, Sequence

from ..models.claim import Claim, ClaimStatus
from ..models.report import NOT_VERIFIED, ReportItem
from ..ports.analysis_oracle import AnalysisOracle
from .oracle_calls import DEFAULT_ORACLE_TIMEOUT, call_oracle

logger = logging.getLogger(__name__)

REPORT_ERROR = "An error occurred while generating the refined report."
EMPTY_REPORT = "Failed to generate report."


def build_report_inputs(claims: Sequence[Claim]) -> List[ReportItem]:
    """Project every claim into a report item, preserving order.

    No claim is dropped here; which claims make it into the prose is decided
    during synthesis, where the verification text can be interpreted.
    """
    return [
        ReportItem(
            text=claim.text,
            score=claim.credibility_score,
            verification_summary=claim.verification.summary if claim.verification else NOT_VERIFIED,
            is_flagged=claim.status == ClaimStatus.FLAGGED,
        )
        for claim in claims
    ]


class ReportFilter:
    """Builds report inputs and delegates prose generation to the oracle."""

    def __init__(self, oracle: AnalysisOracle, timeout: float = DEFAULT_ORACLE_TIMEOUT):
        self._oracle = oracle
        self._timeout = timeout

    async def synthesize(self, claims: Sequence[Claim]) -> str:
        """Generate the refined report for ``claims``. Never raises."""
        items = build_report_inputs(claims)
        logger.info(f"🧾 Synthesizing report from {len(items)} claims")

        result = await call_oracle(
            "report synthesis",
            self._oracle.synthesize_report(items),
            timeout=self._timeout,
        )
        if not result.is_ok:
            return REPORT_ERROR

        return result.value.strip() or EMPTY_REPORT
