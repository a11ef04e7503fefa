"""In-memory store owning the canonical claim and source collections."""

import asyncio
import itertools
import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional, Sequence
from uuid import uuid4

from ..models.claim import Claim
from ..models.source import Source, SourceCategory
from ..ports.analysis_oracle import ExtractedClaim
from .score_engine import apply_extraction

logger = logging.getLogger(__name__)

ClaimUpdater = Callable[[Claim], Claim]


@dataclass(frozen=True)
class StoreSnapshot:
    """Point-in-time copy of the store."""

    sources: List[Source]
    claims: List[Claim]
    revision: int


class ClaimStore:
    """Authoritative holder of sources and claims.

    All mutations are serialized by one asyncio lock and applied in the order
    they reach the store. Every mutation bumps ``revision`` and records, per
    claim, the revision that last changed it. Ingestion goes through
    ``merge_claims``, which applies its changes to the claims as stored when
    the lock is taken. Callers that compute a whole new list from a snapshot
    pass the snapshot revision back to ``replace_claims`` instead.
    """

    def __init__(self):
        """Initialize an empty store."""
        self._sources: Dict[str, Source] = {}
        self._claims: List[Claim] = []
        self._revision = 0
        # claim id -> revision that last changed it
        self._updated_at: Dict[str, int] = {}
        self._sequence = itertools.count(1)
        self._lock = asyncio.Lock()

    @property
    def revision(self) -> int:
        """Current store revision."""
        return self._revision

    async def create_source(
        self,
        name: str,
        category: SourceCategory,
        raw_content: str,
    ) -> Source:
        """Create and register a source."""
        source = Source(
            id=f"src_{category.value}_{uuid4().hex[:12]}",
            name=name,
            category=category,
            raw_content=raw_content,
        )
        async with self._lock:
            self._sources[source.id] = source
            self._revision += 1
        logger.info(f"📄 Registered source {source.id} ({category.label})")
        return source

    async def record_extraction(
        self,
        source: Source,
        items: Sequence[ExtractedClaim],
    ) -> List[Claim]:
        """Turn extracted items into new claims of ``source``.

        The claims are returned, not inserted. Returns an empty list when the
        source is unknown to the store.
        """
        async with self._lock:
            if source.id not in self._sources:
                logger.warning(f"⚠️ Ignoring extraction for unknown source {source.id}")
                return []

            claims = []
            for index, item in enumerate(items):
                score, level, status = apply_extraction(item.score)
                claims.append(
                    Claim(
                        id=self._next_claim_id(source.id, index),
                        text=item.claim_text,
                        original_text=item.claim_text,
                        source_id=source.id,
                        credibility_score=score,
                        credibility_level=level,
                        bias_analysis=item.bias_analysis,
                        context=item.context,
                        status=status,
                        is_new=True,
                    )
                )

        logger.info(f"📝 Recorded {len(claims)} claims from source {source.id}")
        return claims

    def _next_claim_id(self, source_id: str, index: int) -> str:
        return f"{source_id}_claim_{index}_{time.time_ns()}_{next(self._sequence)}"

    async def get_snapshot(self) -> StoreSnapshot:
        """Copy of the current sources, claims and revision."""
        async with self._lock:
            return StoreSnapshot(
                sources=list(self._sources.values()),
                claims=list(self._claims),
                revision=self._revision,
            )

    async def get_claim(self, claim_id: str) -> Optional[Claim]:
        """Get a claim by id, or None."""
        async with self._lock:
            return self._find(claim_id)

    async def replace_claims(
        self,
        new_claims: Sequence[Claim],
        base_revision: Optional[int] = None,
    ) -> List[Claim]:
        """Swap in a new claim collection.

        Without ``base_revision`` this is a total overwrite. With it, claims
        changed after that revision keep their stored value, and stored claims
        missing from ``new_claims`` are re-attached: new ones in front, the
        rest at the end.
        """
        async with self._lock:
            claims = list(new_claims)

            if base_revision is not None and base_revision < self._revision:
                claims = self._rebase(claims, base_revision)

            self._commit(claims)
            logger.info(f"🔄 Replaced claim set: {len(claims)} claims (revision {self._revision})")
            return list(self._claims)

    def _rebase(self, claims: List[Claim], base_revision: int) -> List[Claim]:
        current = {claim.id: claim for claim in self._claims}
        rebased = []
        for claim in claims:
            if self._updated_at.get(claim.id, 0) > base_revision and claim.id in current:
                logger.info(f"🔀 Keeping newer stored version of claim {claim.id}")
                rebased.append(current[claim.id])
            else:
                rebased.append(claim)

        incoming_ids = {claim.id for claim in claims}
        missing = [claim for claim in self._claims if claim.id not in incoming_ids]
        if missing:
            logger.info(f"🔀 Re-attaching {len(missing)} claims added since revision {base_revision}")
        fresh = [claim for claim in missing if claim.is_new]
        older = [claim for claim in missing if not claim.is_new]
        return fresh + rebased + older

    async def merge_claims(
        self,
        incoming: Sequence[Claim],
        updaters: Optional[Mapping[str, ClaimUpdater]] = None,
    ) -> List[Claim]:
        """Put ``incoming`` in front of the stored claims in one step.

        Each updater is applied to the stored claim with its id as it is at
        this moment, so per-claim changes that landed while the caller was
        waiting are built upon rather than overwritten. Stored claims lose
        their ``is_new`` mark. Updaters for unknown ids are skipped.
        """
        updaters = updaters or {}
        async with self._lock:
            existing = []
            for claim in self._claims:
                claim = claim.model_copy(update={"is_new": False})
                updater = updaters.get(claim.id)
                existing.append(updater(claim) if updater else claim)

            self._commit(list(incoming) + existing)
            logger.info(
                f"🔄 Merged {len(incoming)} new claims into {len(existing)} "
                f"(revision {self._revision})"
            )
            return list(self._claims)

    def _commit(self, claims: List[Claim]) -> None:
        previous = {claim.id: claim for claim in self._claims}
        self._revision += 1
        for claim in claims:
            if previous.get(claim.id) != claim:
                self._updated_at[claim.id] = self._revision
        self._claims = claims

    async def update_claim(self, claim_id: str, updater: ClaimUpdater) -> Optional[Claim]:
        """Apply ``updater`` to one claim.

        Unknown ids are a no-op and return None; the claim may have been
        dropped between a request and its response.
        """
        async with self._lock:
            for position, claim in enumerate(self._claims):
                if claim.id == claim_id:
                    updated = updater(claim)
                    self._claims[position] = updated
                    self._revision += 1
                    self._updated_at[claim_id] = self._revision
                    return updated

        logger.debug(f"Claim {claim_id} not found, update skipped")
        return None

    def _find(self, claim_id: str) -> Optional[Claim]:
        for claim in self._claims:
            if claim.id == claim_id:
                return claim
        return None
