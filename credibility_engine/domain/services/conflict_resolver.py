"""Service reconciling newly extracted claims with an existing corpus."""

import logging
from typing import Dict, List, Optional, Sequence

from ..models.claim import Claim
from ..models.interaction import Interaction
from ..ports.analysis_oracle import AnalysisOracle, ClaimDigest
from .oracle_calls import DEFAULT_ORACLE_TIMEOUT, call_oracle
from .score_engine import apply_interaction

logger = logging.getLogger(__name__)


def apply_interaction_to_claim(claim: Claim, interaction: Interaction) -> Claim:
    """Return ``claim`` as changed by one interaction."""
    outcome = apply_interaction(claim.credibility_score, interaction.kind, interaction.reason)

    update = {"credibility_score": outcome.score}
    if outcome.level is not None:
        update["credibility_level"] = outcome.level
    if outcome.status is not None:
        update["status"] = outcome.status
    if outcome.replaces_bias:
        update["bias_analysis"] = outcome.bias_text
    elif outcome.bias_text:
        update["bias_analysis"] = claim.bias_analysis + outcome.bias_text

    return claim.model_copy(update=update)


class ConflictResolver:
    """Merges incoming claims into an existing claim list.

    The merged list puts incoming claims first, followed by the existing
    claims in their original order. Claims are never dropped.
    """

    def __init__(self, oracle: AnalysisOracle, timeout: float = DEFAULT_ORACLE_TIMEOUT):
        """Initialize the resolver.

        Args:
            oracle: Oracle used to classify claim interactions
            timeout: Seconds to wait for the classification
        """
        self._oracle = oracle
        self._timeout = timeout

    async def classify(
        self,
        existing: Sequence[Claim],
        incoming: Sequence[Claim],
    ) -> Optional[Dict[str, Interaction]]:
        """Judge how ``incoming`` relates to ``existing``.

        Returns:
            Interactions keyed by existing claim id, the last one winning for
            duplicate ids and unknown ids dropped; None if classification failed
        """
        if not existing or not incoming:
            return {}

        logger.info(f"⚖️ Resolving {len(incoming)} incoming against {len(existing)} existing claims")
        result = await call_oracle(
            "conflict classification",
            self._oracle.classify_interactions(
                [ClaimDigest.of(claim) for claim in existing],
                [ClaimDigest.of(claim) for claim in incoming],
            ),
            timeout=self._timeout,
        )

        if not result.is_ok:
            logger.warning("⚠️ Conflict resolution failed, keeping existing claims unchanged")
            return None

        interactions: Dict[str, Interaction] = {
            interaction.existing_claim_id: interaction for interaction in result.value
        }
        known_ids = {claim.id for claim in existing}
        unknown = [claim_id for claim_id in interactions if claim_id not in known_ids]
        if unknown:
            logger.debug(f"Ignoring interactions for unknown claims: {unknown}")
        return {
            claim_id: interaction
            for claim_id, interaction in interactions.items()
            if claim_id in known_ids
        }

    async def merge(self, existing: Sequence[Claim], incoming: Sequence[Claim]) -> List[Claim]:
        """Merge ``incoming`` into ``existing``.

        On oracle failure the unmodified lists are concatenated,
        incoming first.
        """
        if not existing:
            return list(incoming)
        if not incoming:
            return list(existing)

        interactions = await self.classify(existing, incoming)
        if interactions is None:
            return list(incoming) + list(existing)

        updated = []
        for claim in existing:
            interaction = interactions.get(claim.id)
            if interaction is None:
                updated.append(claim)
                continue
            logger.info(f"🔗 Claim {claim.id} {interaction.kind.value} newer source")
            updated.append(apply_interaction_to_claim(claim, interaction))

        return list(incoming) + updated
