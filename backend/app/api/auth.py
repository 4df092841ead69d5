"""Stub bearer-token auth dependency.

Session issuance and role resolution live outside this service. The token
carries the already-resolved identity: ``Bearer <user_id>`` or
``Bearer <user_id>:admin``.
"""

import uuid
from typing import Annotated

from fastapi import Header, HTTPException, status

from backend.app.db.context import RequestContext

ADMIN_MARKER = "admin"


def parse_bearer_token(authorization: str) -> RequestContext:
    """Parse an Authorization header value into a request context.

    Raises:
        HTTPException: If the header is malformed
    """
    if not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = authorization[7:]  # Strip "Bearer "
    user_part, _, role = token.partition(":")

    if role and role != ADMIN_MARKER:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token format (expected user_id or user_id:admin)",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        user_id = uuid.UUID(user_part)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token format (expected user_id or user_id:admin)",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    return RequestContext(user_id=user_id, is_admin=role == ADMIN_MARKER)


async def get_current_context(
    authorization: Annotated[str | None, Header()] = None,
) -> RequestContext:
    """Extract the acting user's context; authentication is required.

    Raises:
        HTTPException: 401 if the header is missing or invalid
    """
    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return parse_bearer_token(authorization)


async def get_optional_context(
    authorization: Annotated[str | None, Header()] = None,
) -> RequestContext | None:
    """Extract the viewer's context if present; anonymous viewers get None."""
    if not authorization:
        return None
    return parse_bearer_token(authorization)
