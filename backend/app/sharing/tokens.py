"""Share token generation."""

import secrets


def generate_share_token(num_bytes: int = 16) -> str:
    """Return an opaque URL-safe random token.

    16 bytes of entropy make collisions negligible; callers still check
    uniqueness before committing.
    """
    return secrets.token_urlsafe(num_bytes)
