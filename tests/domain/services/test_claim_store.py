"""Tests for the claim store."""

import pytest

from credibility_engine.domain.models.claim import ClaimStatus, CredibilityLevel
from credibility_engine.domain.models.source import Source, SourceCategory
from credibility_engine.domain.ports.analysis_oracle import ExtractedClaim
from credibility_engine.domain.services.claim_store import ClaimStore


def extracted(text: str, score: float = 70.0) -> ExtractedClaim:
    """Build an extracted item."""
    return ExtractedClaim(claim_text=text, context="ctx", bias_analysis="bias", score=score)


@pytest.mark.asyncio
async def test_create_source_registers_it():
    """Created sources appear in the snapshot."""
    store = ClaimStore()
    source = await store.create_source("Earnings call", SourceCategory.PRESS_RELEASE, "text")

    snapshot = await store.get_snapshot()
    assert snapshot.sources == [source]
    assert source.id.startswith("src_press-release_")
    assert source.raw_content == "text"


@pytest.mark.asyncio
async def test_record_extraction_scores_claims():
    """Extracted items become new, scored claims of the source."""
    store = ClaimStore()
    source = await store.create_source("Doc", SourceCategory.USER_INPUT, "text")

    claims = await store.record_extraction(source, [extracted("Growth was 300%", 55)])

    assert len(claims) == 1
    claim = claims[0]
    assert claim.credibility_score == 55
    assert claim.credibility_level == CredibilityLevel.MEDIUM
    assert claim.status == ClaimStatus.FLAGGED
    assert claim.is_new
    assert claim.source_id == source.id
    assert claim.text == claim.original_text == "Growth was 300%"
    assert claim.bias_analysis == "bias"
    assert claim.verification is None


@pytest.mark.asyncio
async def test_record_extraction_ids_are_unique():
    """Ids never collide, even for identical positions extracted back to back."""
    store = ClaimStore()
    source = await store.create_source("Doc", SourceCategory.USER_INPUT, "text")

    ids = []
    for _ in range(50):
        claims = await store.record_extraction(source, [extracted(f"c{i}") for i in range(20)])
        ids.extend(claim.id for claim in claims)

    assert len(ids) == len(set(ids)) == 1000
    assert all(claim_id.startswith(f"{source.id}_claim_") for claim_id in ids)


@pytest.mark.asyncio
async def test_record_extraction_does_not_insert():
    """Recording returns claims without adding them to the store."""
    store = ClaimStore()
    source = await store.create_source("Doc", SourceCategory.USER_INPUT, "text")
    await store.record_extraction(source, [extracted("c")])

    assert (await store.get_snapshot()).claims == []


@pytest.mark.asyncio
async def test_record_extraction_for_unknown_source_is_ignored():
    """Claims are never created for a source the store does not know."""
    store = ClaimStore()
    stranger = Source(id="src_missing", name="Ghost", category=SourceCategory.NEWS_ARTICLE, raw_content="")

    assert await store.record_extraction(stranger, [extracted("c")]) == []


@pytest.mark.asyncio
async def test_replace_claims_overwrites(make_claim):
    """A replace without base revision is a total overwrite."""
    store = ClaimStore()
    await store.replace_claims([make_claim("a"), make_claim("b")])
    revision = store.revision

    result = await store.replace_claims([make_claim("c")])

    assert [claim.id for claim in result] == ["c"]
    assert store.revision == revision + 1


@pytest.mark.asyncio
async def test_update_claim_applies_updater(make_claim):
    """The updater's result replaces the claim in place."""
    store = ClaimStore()
    await store.replace_claims([make_claim("a"), make_claim("b")])

    updated = await store.update_claim(
        "b", lambda claim: claim.model_copy(update={"status": ClaimStatus.VERIFIED})
    )

    assert updated.status == ClaimStatus.VERIFIED
    snapshot = await store.get_snapshot()
    assert [claim.id for claim in snapshot.claims] == ["a", "b"]
    assert snapshot.claims[1].status == ClaimStatus.VERIFIED
    assert (await store.get_claim("b")).status == ClaimStatus.VERIFIED


@pytest.mark.asyncio
async def test_update_unknown_claim_is_noop(make_claim):
    """Updating a missing id neither raises nor changes the store."""
    store = ClaimStore()
    await store.replace_claims([make_claim("a")])
    revision = store.revision

    def explode(claim):
        raise AssertionError("updater must not run")

    assert await store.update_claim("missing", explode) is None
    assert store.revision == revision
    assert await store.get_claim("missing") is None


@pytest.mark.asyncio
async def test_replace_keeps_claims_updated_after_base_revision(make_claim):
    """A per-claim update made after the snapshot survives a stale replace."""
    store = ClaimStore()
    await store.replace_claims([make_claim("a"), make_claim("b")])
    snapshot = await store.get_snapshot()

    await store.update_claim("a", lambda claim: claim.model_copy(update={"credibility_score": 99}))

    stale = [make_claim("new")] + [c.model_copy(update={"is_new": False}) for c in snapshot.claims]
    result = await store.replace_claims(stale, base_revision=snapshot.revision)

    assert [claim.id for claim in result] == ["new", "a", "b"]
    assert result[1].credibility_score == 99


@pytest.mark.asyncio
async def test_replace_reattaches_claims_added_after_base_revision(make_claim):
    """Claims stored after the snapshot are appended rather than lost."""
    store = ClaimStore()
    await store.replace_claims([make_claim("a")])
    snapshot = await store.get_snapshot()

    await store.replace_claims([make_claim("late"), make_claim("a")])
    result = await store.replace_claims([make_claim("mine"), make_claim("a")], base_revision=snapshot.revision)

    assert [claim.id for claim in result] == ["mine", "a", "late"]


@pytest.mark.asyncio
async def test_replace_with_current_revision_is_plain_swap(make_claim):
    """Nothing is rebased when the store has not moved on."""
    store = ClaimStore()
    await store.replace_claims([make_claim("a")])
    snapshot = await store.get_snapshot()

    result = await store.replace_claims([make_claim("b")], base_revision=snapshot.revision)

    assert [claim.id for claim in result] == ["b"]


@pytest.mark.asyncio
async def test_merge_claims_puts_incoming_first_and_clears_is_new(make_claim):
    """Incoming claims lead; stored claims lose their new mark."""
    store = ClaimStore()
    await store.replace_claims([make_claim("a").model_copy(update={"is_new": True}), make_claim("b")])

    result = await store.merge_claims([make_claim("n").model_copy(update={"is_new": True})])

    assert [claim.id for claim in result] == ["n", "a", "b"]
    assert [claim.is_new for claim in result] == [True, False, False]


@pytest.mark.asyncio
async def test_merge_claims_applies_updaters_to_current_values(make_claim):
    """Updaters see the stored claim as it is when the merge lands."""
    store = ClaimStore()
    await store.replace_claims([make_claim("a", score=70)])
    await store.update_claim("a", lambda claim: claim.model_copy(update={"credibility_score": 90}))

    def lower(claim):
        return claim.model_copy(update={"credibility_score": claim.credibility_score - 30})

    result = await store.merge_claims([make_claim("n")], {"a": lower, "ghost": lower})

    assert [claim.id for claim in result] == ["n", "a"]
    assert result[1].credibility_score == 60


@pytest.mark.asyncio
async def test_replace_keeps_claims_changed_by_a_later_replace(make_claim):
    """A change made by another replace after the snapshot is not overwritten."""
    store = ClaimStore()
    await store.replace_claims([make_claim("a", score=70)])
    snapshot = await store.get_snapshot()

    await store.replace_claims([make_claim("a", score=40, status=ClaimStatus.FLAGGED)])
    result = await store.replace_claims(
        [make_claim("mine")] + snapshot.claims, base_revision=snapshot.revision
    )

    assert [claim.id for claim in result] == ["mine", "a"]
    assert result[1].credibility_score == 40
    assert result[1].status == ClaimStatus.FLAGGED


@pytest.mark.asyncio
async def test_replace_reattaches_new_claims_in_front(make_claim):
    """Claims from a batch stored after the snapshot stay ahead of older ones."""
    store = ClaimStore()
    await store.replace_claims([make_claim("old")])
    snapshot = await store.get_snapshot()

    await store.replace_claims([make_claim("theirs").model_copy(update={"is_new": True}), make_claim("old")])
    result = await store.replace_claims(
        [make_claim("mine")] + snapshot.claims, base_revision=snapshot.revision
    )

    assert [claim.id for claim in result] == ["theirs", "mine", "old"]
