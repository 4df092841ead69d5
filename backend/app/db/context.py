"""Request context carrying the acting user's identity."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class RequestContext:
    """Request context containing actor identity and a pre-resolved admin flag.

    Role resolution happens outside the engine; services only read these
    fields and never consult ambient session state.
    """

    user_id: UUID
    is_admin: bool = False

    def owns(self, owner_id: UUID) -> bool:
        """Return True if the actor is the given owner."""
        return self.user_id == owner_id
