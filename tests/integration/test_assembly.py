"""Integration tests for proposal document assembly."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from proposalcraft.errors import NotFoundError
from proposalcraft.models.entities import SectionUpdate
from proposalcraft.proposals import lifecycle
from proposalcraft.proposals.assembly import assemble_document
from tests.seed import SeedData


async def add_section(
    session: AsyncSession,
    proposal_id: int,
    title: str,
    order_index: int,
    content: str | None,
    completed: bool,
) -> None:
    section = await lifecycle.create_section(
        session, proposal_id=proposal_id, title=title, order_index=order_index, content=content
    )
    if completed:
        await lifecycle.update_section(session, section.id, SectionUpdate(is_completed=True))


@pytest.mark.asyncio
async def test_only_completed_sections_in_order(session: AsyncSession, seeded: SeedData) -> None:
    await add_section(session, seeded.proposal.id, "Budget", 3, "ten thousand dollars", True)
    await add_section(session, seeded.proposal.id, "Draft notes", 2, "not ready yet at all", False)
    await add_section(session, seeded.proposal.id, "Summary", 1, "We build wells", True)

    document = await assemble_document(session, seeded.proposal.id)

    assert document.title == "Water Access Grant"
    assert [s.title for s in document.sections] == ["Summary", "Budget"]
    assert document.word_count == 6
    assert document.generated_at is not None


@pytest.mark.asyncio
async def test_empty_content_counts_zero(session: AsyncSession, seeded: SeedData) -> None:
    await add_section(session, seeded.proposal.id, "Appendix", 1, None, True)
    await add_section(session, seeded.proposal.id, "Summary", 2, "two words", True)

    document = await assemble_document(session, seeded.proposal.id)

    assert len(document.sections) == 2
    assert document.word_count == 2


@pytest.mark.asyncio
async def test_no_completed_sections(session: AsyncSession, seeded: SeedData) -> None:
    await add_section(session, seeded.proposal.id, "Summary", 1, "pending text", False)

    document = await assemble_document(session, seeded.proposal.id)

    assert document.sections == []
    assert document.word_count == 0


@pytest.mark.asyncio
async def test_missing_proposal(session: AsyncSession) -> None:
    with pytest.raises(NotFoundError):
        await assemble_document(session, 31337)
