"""
Exception hierarchy for ProposalCraft.

Core operations either return a fully valid result or raise one of these.
The HTTP layer maps them onto status codes in ``proposalcraft.main``.
"""

from typing import Any


class ProposalCraftError(Exception):
    """
    Base exception for all ProposalCraft errors.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        """
        Initialize error.
        Args:
            message: Error message
            context: Optional context dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class NotFoundError(ProposalCraftError):
    """
    A referenced entity id does not resolve.

    Also raised when a parent entity is missing at creation time; the check
    happens before any insert is attempted.
    """

    def __init__(self, entity: str, entity_id: int):
        super().__init__(
            f"{entity} with id {entity_id} not found",
            context={"entity": entity, "entity_id": entity_id},
        )
        self.entity = entity
        self.entity_id = entity_id


class ConflictError(ProposalCraftError):
    """
    A write would violate a uniqueness rule.
    """

    pass


class TurnFailedError(ProposalCraftError):
    """
    A conversational turn could not be persisted.
    The turn's unit of work was rolled back before this was raised.
    """

    pass
