"""Health check endpoints.

- /health is a liveness check
- /healthz checks database connectivity and reports component status
"""

import json
import logging
from typing import Any

from fastapi import APIRouter, Response
from sqlalchemy import text
from sqlalchemy.orm import Session

from backend.app.api.deps import SessionDep

logger = logging.getLogger(__name__)

router = APIRouter()


def check_db(session: Session) -> tuple[bool, str]:
    """Check database connectivity.

    Returns:
        (is_ok, status_message)
    """
    try:
        session.execute(text("SELECT 1"))
        return (True, "ok")
    except Exception as e:
        logger.warning(
            "Database health check failed",
            extra={"structured": {"error": type(e).__name__}},
        )
        return (False, f"error: {type(e).__name__}")


@router.get("/health")
def health() -> dict[str, str]:
    """Simple health check for Docker/k8s.

    Returns:
        200 OK always (application is running)
    """
    return {"status": "ok"}


@router.get("/healthz", response_model=None)
def healthz(session: SessionDep) -> dict[str, Any] | Response:
    """Readiness check.

    Returns:
        200 with component status if the database answers
        503 otherwise
    """
    db_ok, db_status = check_db(session)

    response_body = {
        "status": "ok" if db_ok else "degraded",
        "components": {"db": db_status},
    }

    if not db_ok:
        return Response(
            content=json.dumps(response_body),
            status_code=503,
            media_type="application/json",
        )

    return response_body
