"""Unit tests for the bearer-token auth dependency."""

import uuid

import pytest
from fastapi import HTTPException

from backend.app.api.auth import get_current_context, get_optional_context, parse_bearer_token


@pytest.mark.asyncio
async def test_get_current_context_requires_header() -> None:
    """Test that a missing auth header raises 401."""
    with pytest.raises(HTTPException) as exc_info:
        await get_current_context(authorization=None)

    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == "Authorization required"


@pytest.mark.asyncio
async def test_get_current_context_user_token() -> None:
    """Test plain user_id token format."""
    user_id = uuid.uuid4()

    ctx = await get_current_context(authorization=f"Bearer {user_id}")

    assert ctx.user_id == user_id
    assert ctx.is_admin is False


@pytest.mark.asyncio
async def test_get_current_context_admin_token() -> None:
    """Test user_id:admin token format."""
    user_id = uuid.uuid4()

    ctx = await get_current_context(authorization=f"Bearer {user_id}:admin")

    assert ctx.user_id == user_id
    assert ctx.is_admin is True


@pytest.mark.asyncio
async def test_get_optional_context_anonymous() -> None:
    """Test that anonymous viewers get no context."""
    assert await get_optional_context(authorization=None) is None


def test_invalid_bearer_format() -> None:
    """Test invalid bearer format raises 401."""
    with pytest.raises(HTTPException) as exc_info:
        parse_bearer_token("NotBearer token")

    assert exc_info.value.status_code == 401
    assert "Invalid authorization header format" in exc_info.value.detail


@pytest.mark.parametrize(
    "token",
    [
        "Bearer not-a-uuid",
        f"Bearer {uuid.uuid4()}:superuser",
        "Bearer eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
    ],
)
def test_invalid_token_rejected(token: str) -> None:
    with pytest.raises(HTTPException) as exc_info:
        parse_bearer_token(token)

    assert exc_info.value.status_code == 401
