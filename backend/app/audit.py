"""Best-effort audit recording."""

import logging
import uuid

from backend.app.db.repositories import AuditRecorder
from backend.app.utils.metrics import audit_failures_total

logger = logging.getLogger(__name__)


def record_audit_fact(
    recorder: AuditRecorder,
    action: str,
    entity_type: str,
    entity_id: uuid.UUID | str,
    actor_id: uuid.UUID,
    detail: str,
) -> bool:
    """Record an audit fact after its mutation has committed.

    A recorder failure is logged and counted but never propagates: the
    mutation it describes stays in place.

    Returns:
        True if the fact was recorded, False if the recorder failed
    """
    try:
        recorder.record(action, entity_type, str(entity_id), actor_id, detail)
    except Exception as e:
        audit_failures_total.labels(action=action).inc()
        logger.warning(
            f"Audit recording failed: {action}",
            extra={
                "structured": {
                    "action": action,
                    "entity_type": entity_type,
                    "entity_id": str(entity_id),
                    "actor_id": str(actor_id),
                    "error": type(e).__name__,
                }
            },
        )
        return False
    return True
