"""Pure scoring rules for claim credibility.

Maps scores to credibility levels and computes the score, level and status
changes caused by extraction, verification and conflict resolution. Nothing
here touches shared state.
"""

import math
from typing import NamedTuple, Optional, Tuple

from ..models.claim import ClaimStatus, CredibilityLevel
from ..models.interaction import InteractionKind

MIN_SCORE = 0
MAX_SCORE = 100

HIGH_THRESHOLD = 80
MEDIUM_THRESHOLD = 50
FLAG_THRESHOLD = 60

# Keyword groups are checked in this order; the first group that matches wins.
REFUTING_KEYWORDS = ("false", "incorrect", "misleading", "contradicts")
CONFIRMING_KEYWORDS = ("true", "accurate", "supports")

REFUTED_SCORE = 10
CONFIRMED_FLOOR = 80
CONFIRMED_BOOST = 30
UNCLEAR_BOOST = 10

CONTRADICTION_PENALTY = 30
REINFORCEMENT_BOOST = 10

CONTRADICTION_WARNING = "[UPDATE WARNING] Contradicted by newer source: {reason}"
REINFORCEMENT_NOTE = " [UPDATE] Reinforced by newer source."


class InteractionOutcome(NamedTuple):
    """Effect of an interaction on a claim.

    ``level`` and ``status`` of ``None`` leave the claim's values unchanged.
    When ``replaces_bias`` is set, ``bias_text`` overwrites the bias analysis,
    otherwise it is appended.
    """

    score: int
    level: Optional[CredibilityLevel]
    status: Optional[ClaimStatus]
    bias_text: str
    replaces_bias: bool = False


def clamp_score(score: int) -> int:
    """Clamp a score into the valid range."""
    return max(MIN_SCORE, min(MAX_SCORE, score))


def round_score(raw_score: float) -> int:
    """Round half up and clamp. Non-finite input maps to the minimum score."""
    if not math.isfinite(raw_score):
        return MIN_SCORE
    return clamp_score(int(math.floor(raw_score + 0.5)))


def level_for(score: int) -> CredibilityLevel:
    """Map a score to its credibility band. Never returns UNKNOWN."""
    if score >= HIGH_THRESHOLD:
        return CredibilityLevel.HIGH
    if score >= MEDIUM_THRESHOLD:
        return CredibilityLevel.MEDIUM
    return CredibilityLevel.LOW


def apply_extraction(raw_score: float) -> Tuple[int, CredibilityLevel, ClaimStatus]:
    """Initial score, level and status of a freshly extracted claim."""
    score = round_score(raw_score)
    status = ClaimStatus.FLAGGED if score < FLAG_THRESHOLD else ClaimStatus.ANALYZING
    return score, level_for(score), status


def apply_verification(prior_score: int, summary_text: str) -> Tuple[int, ClaimStatus]:
    """Rescore a claim from the wording of its verification summary."""
    summary = summary_text.lower()

    if any(keyword in summary for keyword in REFUTING_KEYWORDS):
        return REFUTED_SCORE, ClaimStatus.FLAGGED

    if any(keyword in summary for keyword in CONFIRMING_KEYWORDS):
        return clamp_score(max(CONFIRMED_FLOOR, prior_score + CONFIRMED_BOOST)), ClaimStatus.VERIFIED

    return clamp_score(prior_score + UNCLEAR_BOOST), ClaimStatus.VERIFIED


def apply_interaction(
    prior_score: int,
    kind: InteractionKind,
    reason: str = "",
) -> InteractionOutcome:
    """Effect of a newer source contradicting or reinforcing a claim."""
    if kind == InteractionKind.CONTRADICTS:
        # Level is pinned to LOW rather than recomputed from the new score.
        return InteractionOutcome(
            score=clamp_score(prior_score - CONTRADICTION_PENALTY),
            level=CredibilityLevel.LOW,
            status=ClaimStatus.FLAGGED,
            bias_text=CONTRADICTION_WARNING.format(reason=reason),
            replaces_bias=True,
        )

    if kind == InteractionKind.REINFORCES:
        score = clamp_score(prior_score + REINFORCEMENT_BOOST)
        return InteractionOutcome(
            score=score,
            level=level_for(score),
            status=None,
            bias_text=REINFORCEMENT_NOTE,
        )

    return InteractionOutcome(score=prior_score, level=None, status=None, bias_text="")
