"""Request context carrying the caller's identity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RequestContext:
    """Request context containing the acting user.

    Passed explicitly into every operation that needs an identity; there is
    no process-wide current user.
    """

    user_id: int
