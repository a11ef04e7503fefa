"""Test configuration and common fixtures."""

import asyncio
from typing import Callable, List, Optional

import pytest

from credibility_engine.domain.models.claim import Claim, ClaimStatus
from credibility_engine.domain.models.oracle_result import Err, Ok
from credibility_engine.domain.services.score_engine import level_for


class ScriptedOracle:
    """In-memory analysis oracle with scripted answers.

    A scripted answer may be an ``Ok``/``Err`` or an exception instance,
    which is raised instead of returned. Queued ``extraction_results``,
    ``interaction_results`` and ``classification_gates`` are used one per
    call before falling back to the single defaults.
    """

    def __init__(self):
        """Initialize with answers that find nothing."""
        self.extraction_results: List = []
        self.verification_result = Err("verification not scripted")
        self.interaction_result = Ok([])
        self.interaction_results: List = []
        self.report_result = Ok("# Refined Report")
        self.verification_delay = 0.0
        self.classification_gate: Optional[asyncio.Event] = None
        self.classification_gates: List[asyncio.Event] = []
        self.calls: List[tuple] = []

    async def initialize(self) -> None:
        pass

    async def shutdown(self) -> None:
        pass

    @staticmethod
    def _answer(result):
        if isinstance(result, Exception):
            raise result
        return result

    async def extract_claims(self, text, source):
        self.calls.append(("extract", text, source))
        result = self.extraction_results.pop(0) if self.extraction_results else Ok([])
        return self._answer(result)

    async def verify_claim(self, claim):
        self.calls.append(("verify", claim))
        if self.verification_delay:
            await asyncio.sleep(self.verification_delay)
        return self._answer(self.verification_result)

    async def classify_interactions(self, existing, incoming):
        self.calls.append(("classify", existing, incoming))
        result = self.interaction_results.pop(0) if self.interaction_results else self.interaction_result
        gate = self.classification_gates.pop(0) if self.classification_gates else self.classification_gate
        if gate is not None:
            await gate.wait()
        return self._answer(result)

    async def synthesize_report(self, items):
        self.calls.append(("synthesize", items))
        return self._answer(self.report_result)

    def count(self, name: str) -> int:
        return sum(1 for call in self.calls if call[0] == name)

    @property
    def provider_name(self) -> str:
        return "Scripted"

    @property
    def is_available(self) -> bool:
        return True

    @property
    def capabilities(self) -> dict:
        return {}


@pytest.fixture
def oracle() -> ScriptedOracle:
    """Provide a scripted oracle."""
    return ScriptedOracle()


@pytest.fixture
def make_claim() -> Callable[..., Claim]:
    """Provide a builder for claims."""

    def build(
        claim_id: str,
        score: int = 70,
        status: ClaimStatus = ClaimStatus.ANALYZING,
        bias: str = "Original bias note.",
        text: Optional[str] = None,
        source_id: str = "src_test",
    ) -> Claim:
        text = text or f"Claim {claim_id}"
        return Claim(
            id=claim_id,
            text=text,
            original_text=text,
            source_id=source_id,
            credibility_score=score,
            credibility_level=level_for(score),
            bias_analysis=bias,
            context="test context",
            status=status,
        )

    return build
