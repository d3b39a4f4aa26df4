"""Conversation endpoints - messages, assistant turns and memory notes."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from proposalcraft.api.auth import get_current_context
from proposalcraft.db.engine import get_session
from proposalcraft.models.common import MemoryType, MessageRole, MessageType
from proposalcraft.models.entities import ChatMessage, MemoryEntry
from proposalcraft.orchestration import messages
from proposalcraft.orchestration.turns import process_turn

router = APIRouter(
    prefix="/proposals/{proposal_id}",
    tags=["chat"],
    dependencies=[Depends(get_current_context)],
)


class ChatMessageRequest(BaseModel):
    """Request body for POST /messages and POST /turns."""

    role: MessageRole = MessageRole.user
    content: str = Field(..., min_length=1, description="Message text")
    message_type: MessageType = MessageType.chat


class MemoryEntryRequest(BaseModel):
    """Request body for POST /memory."""

    memory_type: MemoryType
    content: str = Field(..., min_length=1)
    source: str | None = Field(None, description="Document name, user input, etc.")


@router.post("/messages", response_model=ChatMessage, status_code=status.HTTP_201_CREATED)
async def create_message(
    proposal_id: int,
    request: ChatMessageRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ChatMessage:
    """Store a message without generating a reply."""
    return await messages.create_chat_message(
        session,
        proposal_id=proposal_id,
        role=request.role,
        content=request.content,
        message_type=request.message_type,
    )


@router.get("/messages", response_model=list[ChatMessage])
async def list_messages(
    proposal_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> list[ChatMessage]:
    """List the conversation, oldest first."""
    return await messages.list_chat_messages(session, proposal_id)


@router.post("/turns", response_model=ChatMessage, status_code=status.HTTP_201_CREATED)
async def create_turn(
    proposal_id: int,
    request: ChatMessageRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ChatMessage:
    """Store a message and return the assistant's reply."""
    return await process_turn(
        session,
        proposal_id=proposal_id,
        role=request.role,
        content=request.content,
        message_type=request.message_type,
    )


@router.post("/memory", response_model=MemoryEntry, status_code=status.HTTP_201_CREATED)
async def create_memory(
    proposal_id: int,
    request: MemoryEntryRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> MemoryEntry:
    """Record a memory note for the proposal."""
    return await messages.create_memory_entry(
        session,
        proposal_id=proposal_id,
        memory_type=request.memory_type,
        content=request.content,
        source=request.source,
    )


@router.get("/memory", response_model=list[MemoryEntry])
async def list_memory(
    proposal_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> list[MemoryEntry]:
    """List memory notes, newest first."""
    return await messages.list_memory_entries(session, proposal_id)
