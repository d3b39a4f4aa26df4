"""Minimal auth dependency.

Stub implementation that reads the acting user id from a bearer token.
Identity verification belongs to the surrounding platform.
"""

from typing import Annotated

from fastapi import Header, HTTPException, status

from proposalcraft.db.context import RequestContext


async def get_current_context(
    authorization: Annotated[str | None, Header()] = None,
) -> RequestContext:
    """Extract request context from authorization header.

    Expects "Bearer <user_id>" where user_id is an integer.

    Args:
        authorization: Authorization header (e.g., "Bearer 42")

    Returns:
        RequestContext with user_id

    Raises:
        HTTPException: If authorization is missing or invalid
    """
    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = authorization[7:]  # Strip "Bearer "

    try:
        return RequestContext(user_id=int(token))
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token format (expected user id)",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
