"""FastAPI application."""

from fastapi import FastAPI

from backend.app.api.errors import register_error_handlers
from backend.app.api.routes.admin import router as admin_router
from backend.app.api.routes.budget import router as budget_router
from backend.app.api.routes.health import router as health_router
from backend.app.api.routes.metrics import router as metrics_router
from backend.app.api.routes.share import router as share_router
from backend.app.api.routes.trips import router as trips_router
from backend.app.config import get_settings
from backend.app.utils.logging import configure_logging

settings = get_settings()
configure_logging(settings.log_level, settings.log_format)

app = FastAPI(title="Itinerary & Budget Engine", version="0.1.0")

register_error_handlers(app)

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(trips_router)
app.include_router(budget_router)
app.include_router(share_router)
app.include_router(admin_router)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Itinerary & Budget Engine", "version": "0.1.0"}
