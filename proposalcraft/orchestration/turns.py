"""Conversation turn orchestration.

A turn persists the incoming message, assembles context, synthesizes a reply
and persists it. Both writes share one transaction: the turn either commits
two messages or none.
"""

import logging
import time

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from proposalcraft.config import get_settings
from proposalcraft.db import conversation
from proposalcraft.errors import NotFoundError, TurnFailedError
from proposalcraft.models.common import MessageRole, MessageType
from proposalcraft.models.entities import ChatMessage
from proposalcraft.orchestration.context import assemble_context
from proposalcraft.orchestration.messages import ensure_proposal_exists
from proposalcraft.orchestration.synth import synthesize
from proposalcraft.utils.logging import StructuredTurnLogger
from proposalcraft.utils.metrics import metrics

logger = logging.getLogger(__name__)
turn_logger = StructuredTurnLogger()


async def process_turn(
    session: AsyncSession,
    *,
    proposal_id: int,
    role: MessageRole,
    content: str,
    message_type: MessageType = MessageType.chat,
) -> ChatMessage:
    """Run one conversational turn and return the assistant's message.

    Steps:
    1. Persist the incoming message (proposal must exist)
    2. Assemble context for the proposal
    3. Synthesize a reply from the original content and message type
    4. Persist the reply as an assistant message with the same message type

    Memory notes are never written here.

    Args:
        session: Database session (the turn commits or rolls it back)
        proposal_id: Proposal the conversation belongs to
        role: Role of the incoming message
        content: Incoming message text
        message_type: chat, planning or feedback

    Returns:
        The persisted assistant ChatMessage

    Raises:
        NotFoundError: If the proposal does not resolve; nothing is persisted
        TurnFailedError: If the store fails mid-turn; nothing is persisted
    """
    settings = get_settings()
    message_type = MessageType(message_type)
    started = time.perf_counter()

    try:
        await ensure_proposal_exists(session, proposal_id)

        incoming = await conversation.append_chat_message(
            session,
            proposal_id=proposal_id,
            role=MessageRole(role).value,
            content=content,
            message_type=message_type.value,
        )
        logger.info(f"[process_turn] proposal_id={proposal_id} message_id={incoming.id}")

        context = await assemble_context(
            session,
            proposal_id,
            message_limit=settings.recent_message_limit,
            memory_limit=settings.recent_memory_limit,
        )
        reply = synthesize(content, message_type, context)

        assistant = await conversation.append_chat_message(
            session,
            proposal_id=proposal_id,
            role=MessageRole.assistant.value,
            content=reply,
            message_type=message_type.value,
        )
        result = ChatMessage.model_validate(assistant)
        await session.commit()

    except NotFoundError:
        await session.rollback()
        _record_failure(proposal_id, message_type, started, "not_found")
        raise

    except SQLAlchemyError as exc:
        await session.rollback()
        _record_failure(proposal_id, message_type, started, "store_error")
        logger.exception(f"[process_turn] store failure, turn rolled back: proposal_id={proposal_id}")
        raise TurnFailedError(
            f"Turn for proposal {proposal_id} could not be persisted",
            context={"proposal_id": proposal_id, "message_type": message_type.value},
        ) from exc

    except Exception:
        await session.rollback()
        _record_failure(proposal_id, message_type, started, "unexpected")
        logger.exception(
            f"[process_turn] unexpected failure, turn rolled back: proposal_id={proposal_id}"
        )
        raise

    latency_ms = (time.perf_counter() - started) * 1000
    metrics.record_turn(message_type.value, "success", latency_ms)
    turn_logger.log_turn(proposal_id, message_type.value, "success", latency_ms)

    return result


def _record_failure(
    proposal_id: int, message_type: MessageType, started: float, reason: str
) -> None:
    latency_ms = (time.perf_counter() - started) * 1000
    metrics.record_turn(message_type.value, "error", latency_ms)
    metrics.inc_turn_error(reason)
    turn_logger.log_turn(
        proposal_id, message_type.value, "error", latency_ms, error_reason=reason
    )
