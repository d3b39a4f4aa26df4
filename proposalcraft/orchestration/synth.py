"""Response synthesis - deterministic, rule-based assistant replies.

Each message type owns an ordered tuple of rules. The first rule whose
predicate matches builds the reply. Synthesis is pure: no store access,
no clock, no randomness.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from proposalcraft.models.common import MessageType, ProposalPhase
from proposalcraft.models.context import ConversationContext

logger = logging.getLogger(__name__)

Predicate = Callable[[str, ConversationContext], bool]
Builder = Callable[[ConversationContext], str]


@dataclass(frozen=True)
class ReplyRule:
    """One (predicate, template) pair. ``text`` given to predicates is lowercased."""

    name: str
    matches: Predicate
    build: Builder


def _contains(*keywords: str) -> Predicate:
    def predicate(text: str, context: ConversationContext) -> bool:
        return any(keyword in text for keyword in keywords)

    return predicate


def _always(text: str, context: ConversationContext) -> bool:
    return True


def _mentions_documents(text: str, context: ConversationContext) -> bool:
    return "document" in text and context.document_count > 0


def _for_organization(context: ConversationContext) -> str:
    if context.organization_name:
        return f"For {context.organization_name}, "
    return ""


def _documents_noted(context: ConversationContext) -> str:
    return f"{context.document_count} document(s)"


# Planning

def _section_outline(context: ConversationContext) -> str:
    return (
        f'Based on your proposal "{context.proposal_title}", I recommend structuring it '
        "with these key sections:\n\n"
        "1. Executive Summary\n"
        "2. Problem Statement\n"
        "3. Proposed Solution\n"
        "4. Implementation Timeline\n"
        "5. Budget and Resources\n"
        "6. Expected Outcomes\n\n"
        f"{_for_organization(context)}I can help you develop content for each section. "
        "Which section would you like to start with?"
    )


def _timeline(context: ConversationContext) -> str:
    documents = ""
    if context.document_count > 0:
        documents = f"I notice you have {_documents_noted(context)} uploaded. "

    return (
        f'{documents}For "{context.proposal_title}", I suggest breaking the timeline '
        "down into phases:\n\n"
        "Phase 1: Research & Analysis (2-3 weeks)\n"
        "Phase 2: Solution Development (3-4 weeks)\n"
        "Phase 3: Implementation Planning (1-2 weeks)\n"
        "Phase 4: Review & Finalization (1 week)\n\n"
        "Would you like me to help you create a detailed timeline for any specific phase?"
    )


def _planning_menu(context: ConversationContext) -> str:
    return (
        f'I\'m here to help you plan your proposal "{context.proposal_title}". '
        f"{_for_organization(context)}I can assist with:\n\n"
        "- Creating section outlines\n"
        "- Developing timelines\n"
        "- Identifying key stakeholders\n"
        "- Structuring your arguments\n\n"
        "What aspect of planning would you like to focus on?"
    )


# Feedback

def _feedback_acknowledgement(context: ConversationContext) -> str:
    noted = "I've noted your input and " if context.recent_memory else ""

    offer = "Would you like me to:"
    if context.phase == ProposalPhase.drafting:
        offer = "Since you're in the drafting phase, would you like me to:"

    return (
        f'Thank you for your feedback on "{context.proposal_title}". '
        f"{noted}I'll help you refine and improve the content.\n\n"
        f"{offer}\n"
        "- Review specific sections for clarity\n"
        "- Suggest improvements to your arguments\n"
        "- Help strengthen your proposal structure\n\n"
        "What specific area would you like feedback on?"
    )


# Chat

def _capability_menu(context: ConversationContext) -> str:
    documents = ""
    if context.document_count > 0:
        documents = (
            f"You have {_documents_noted(context)} that I can reference for context. "
        )

    return (
        f'I\'m here to help you with your proposal "{context.proposal_title}"! '
        f"{_for_organization(context)}I can assist you with:\n\n"
        "- **Planning**: Structure, timeline, and organization\n"
        "- **Drafting**: Content development and writing\n"
        "- **Review**: Feedback and improvements\n\n"
        f"{documents}What would you like to work on today?"
    )


def _document_analysis_offer(context: ConversationContext) -> str:
    question = "Would you like me to analyze your documents for relevant content?"
    if context.phase == ProposalPhase.planning:
        question = (
            "During the planning phase, would you like me to analyze your documents "
            "for relevant content?"
        )

    return (
        f"I see you have {_documents_noted(context)} uploaded for "
        f'"{context.proposal_title}". I can help you:\n\n'
        "- Extract key information from your documents\n"
        "- Use document insights for proposal content\n"
        "- Reference supporting materials in your proposal\n\n"
        f"{question}"
    )


def _contextual_reply(context: ConversationContext) -> str:
    organization = f" for {context.organization_name}" if context.organization_name else ""

    if context.phase == ProposalPhase.drafting:
        phase_note = "In the drafting phase, I can help you develop and refine your content."
    else:
        phase_note = "In the planning phase, I can help you structure and organize your ideas."

    return (
        f'I understand you\'re working on "{context.proposal_title}"{organization}.\n\n'
        f"{phase_note}\n\n"
        "How can I assist you with your proposal today?"
    )


REPLY_RULES: dict[MessageType, tuple[ReplyRule, ...]] = {
    MessageType.planning: (
        ReplyRule("section_outline", _contains("section", "outline"), _section_outline),
        ReplyRule("timeline", _contains("timeline", "schedule"), _timeline),
        ReplyRule("planning_menu", _always, _planning_menu),
    ),
    MessageType.feedback: (
        ReplyRule("feedback_acknowledgement", _always, _feedback_acknowledgement),
    ),
    MessageType.chat: (
        ReplyRule("capability_menu", _contains("help", "assist"), _capability_menu),
        ReplyRule("document_analysis", _mentions_documents, _document_analysis_offer),
        ReplyRule("contextual", _always, _contextual_reply),
    ),
}


def select_rule(
    user_text: str, message_type: MessageType, context: ConversationContext
) -> ReplyRule:
    """Return the first matching rule for the message type."""
    text = user_text.lower()
    for rule in REPLY_RULES[MessageType(message_type)]:
        if rule.matches(text, context):
            return rule

    # Every rule set ends with a catch-all
    raise LookupError(f"No reply rule matched for message type {message_type}")


def synthesize(
    user_text: str, message_type: MessageType, context: ConversationContext
) -> str:
    """Build the assistant reply for a user message.

    ``context.recent_messages`` is part of the input so that conversation-aware
    rules can be added without changing this signature; no current rule reads it.

    Args:
        user_text: The user's message
        message_type: chat, planning or feedback
        context: Assembled conversation context

    Returns:
        Reply text containing the proposal title verbatim
    """
    rule = select_rule(user_text, message_type, context)
    logger.debug(f"[synthesize] message_type={MessageType(message_type).value} rule={rule.name}")
    return rule.build(context)
