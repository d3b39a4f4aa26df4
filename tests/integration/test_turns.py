"""Integration tests for conversation turn orchestration."""

from unittest.mock import AsyncMock, patch

import pytest
from prometheus_client import REGISTRY
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from proposalcraft.db import conversation, proposals
from proposalcraft.db.models import ChatMessage as ChatMessageDB
from proposalcraft.db.models import MemoryEntry as MemoryEntryDB
from proposalcraft.docs.registration import register_document
from proposalcraft.errors import NotFoundError, TurnFailedError
from proposalcraft.models.common import (
    FileType,
    MemoryType,
    MessageRole,
    MessageType,
    ProposalPhase,
)
from proposalcraft.models.entities import ProposalUpdate
from proposalcraft.orchestration import messages
from proposalcraft.orchestration.turns import process_turn
from proposalcraft.proposals import lifecycle
from tests.seed import SeedData


async def count_messages(session: AsyncSession) -> int:
    return await session.scalar(select(func.count()).select_from(ChatMessageDB))


def turn_errors(reason: str) -> float:
    return REGISTRY.get_sample_value("chat_turn_errors_total", {"reason": reason}) or 0.0


@pytest.mark.asyncio
async def test_turn_persists_user_and_assistant_messages(
    session: AsyncSession, seeded: SeedData
) -> None:
    """A turn appends exactly two messages and returns the assistant one."""
    reply = await process_turn(
        session,
        proposal_id=seeded.proposal.id,
        role=MessageRole.user,
        content="Can you help me?",
    )

    history = await messages.list_chat_messages(session, seeded.proposal.id)

    assert [m.role for m in history] == [MessageRole.user, MessageRole.assistant]
    assert history[0].content == "Can you help me?"
    assert history[1].id == reply.id
    assert reply.role == MessageRole.assistant
    assert reply.message_type == MessageType.chat
    assert "Water Access Grant" in reply.content


@pytest.mark.asyncio
async def test_planning_outline_turn(session: AsyncSession, seeded: SeedData) -> None:
    reply = await process_turn(
        session,
        proposal_id=seeded.proposal.id,
        role=MessageRole.user,
        content="What sections should I include?",
        message_type=MessageType.planning,
    )

    assert reply.message_type == MessageType.planning
    assert "Executive Summary" in reply.content
    assert "For Clean Water Collective, " in reply.content


@pytest.mark.asyncio
async def test_chat_turn_mentions_registered_documents(
    session: AsyncSession, seeded: SeedData
) -> None:
    for name in ["budget.pdf", "narrative.docx"]:
        await register_document(
            session,
            organization_id=seeded.organization.id,
            filename=name,
            file_type=FileType(name.rsplit(".", 1)[1]),
            file_size=2048,
            upload_root="/uploads",
        )

    reply = await process_turn(
        session,
        proposal_id=seeded.proposal.id,
        role=MessageRole.user,
        content="What can you do with my documents?",
    )

    assert "2 document(s)" in reply.content
    assert "During the planning phase" in reply.content


@pytest.mark.asyncio
async def test_feedback_turn_in_drafting_with_memory(
    session: AsyncSession, seeded: SeedData
) -> None:
    await lifecycle.update_proposal(
        session, seeded.proposal.id, ProposalUpdate(phase=ProposalPhase.drafting)
    )
    await messages.create_memory_entry(
        session,
        proposal_id=seeded.proposal.id,
        memory_type=MemoryType.user_feedback,
        content="Keep the budget section short",
        source="chat",
    )

    reply = await process_turn(
        session,
        proposal_id=seeded.proposal.id,
        role=MessageRole.user,
        content="Here is my feedback on the draft",
        message_type=MessageType.feedback,
    )

    assert "I've noted your input" in reply.content
    assert "Since you're in the drafting phase" in reply.content


@pytest.mark.asyncio
async def test_turn_for_missing_proposal_writes_nothing(
    session: AsyncSession, seeded: SeedData
) -> None:
    with pytest.raises(NotFoundError):
        await process_turn(session, proposal_id=999, role=MessageRole.user, content="hello")

    assert await count_messages(session) == 0


@pytest.mark.asyncio
async def test_store_failure_rolls_back_whole_turn(
    session: AsyncSession, seeded: SeedData
) -> None:
    """A failure writing the reply leaves neither message behind."""
    original = conversation.append_chat_message
    calls = 0

    async def flaky_append(*args, **kwargs):
        nonlocal calls
        calls += 1
        if calls == 2:
            raise OperationalError("INSERT INTO chat_messages", {}, Exception("disk I/O error"))
        return await original(*args, **kwargs)

    with patch.object(conversation, "append_chat_message", new=flaky_append):
        with pytest.raises(TurnFailedError) as exc_info:
            await process_turn(
                session, proposal_id=seeded.proposal.id, role=MessageRole.user, content="hi"
            )

    assert isinstance(exc_info.value.__cause__, OperationalError)
    assert calls == 2
    assert await count_messages(session) == 0


@pytest.mark.asyncio
async def test_turns_never_write_memory(session: AsyncSession, seeded: SeedData) -> None:
    for text, message_type in [
        ("outline", MessageType.planning),
        ("feedback", MessageType.feedback),
        ("help", MessageType.chat),
    ]:
        await process_turn(
            session,
            proposal_id=seeded.proposal.id,
            role=MessageRole.user,
            content=text,
            message_type=message_type,
        )

    memory = await session.scalar(select(func.count()).select_from(MemoryEntryDB))
    assert memory == 0
    assert await count_messages(session) == 6


@pytest.mark.asyncio
async def test_consecutive_turns_keep_creation_order(
    session: AsyncSession, seeded: SeedData
) -> None:
    await process_turn(session, proposal_id=seeded.proposal.id, role=MessageRole.user, content="one")
    await process_turn(session, proposal_id=seeded.proposal.id, role=MessageRole.user, content="two")

    history = await messages.list_chat_messages(session, seeded.proposal.id)

    assert [m.role for m in history] == [
        MessageRole.user,
        MessageRole.assistant,
        MessageRole.user,
        MessageRole.assistant,
    ]
    assert history[0].content == "one"
    assert history[2].content == "two"


@pytest.mark.asyncio
async def test_context_failure_after_first_write_rolls_back(
    session: AsyncSession, seeded: SeedData
) -> None:
    """The user message is discarded when context assembly cannot resolve the proposal."""
    errors_before = turn_errors("not_found")

    with patch.object(
        proposals, "get_proposal_with_organization", new=AsyncMock(return_value=None)
    ):
        with pytest.raises(NotFoundError):
            await process_turn(
                session, proposal_id=seeded.proposal.id, role=MessageRole.user, content="hi"
            )

    assert await count_messages(session) == 0
    assert turn_errors("not_found") == errors_before + 1


@pytest.mark.asyncio
async def test_unexpected_failure_rolls_back_and_is_counted(
    session: AsyncSession, seeded: SeedData
) -> None:
    errors_before = turn_errors("unexpected")

    with patch(
        "proposalcraft.orchestration.turns.synthesize",
        side_effect=LookupError("no reply rule"),
    ):
        with pytest.raises(LookupError):
            await process_turn(
                session, proposal_id=seeded.proposal.id, role=MessageRole.user, content="hi"
            )

    assert await count_messages(session) == 0
    assert turn_errors("unexpected") == errors_before + 1
