"""Main FastAPI application for the FlowSpeak backend."""
import logging

from fastapi import FastAPI, Request

from flowspeak.api.routes.adaptive import router as adaptive_router
from flowspeak.api.routes.dashboard import router as dashboard_router
from flowspeak.api.routes.days import router as days_router
from flowspeak.api.routes.mood import router as mood_router
from flowspeak.api.routes.practice import router as practice_router
from flowspeak.api.routes.preferences import router as preferences_router
from flowspeak.api.routes.program import router as program_router
from flowspeak.api.routes.progress import router as progress_router
from flowspeak.api.routes.task import router as task_router
from flowspeak.api.routes.today import router as today_router
from flowspeak.core.config import settings
from flowspeak.core.logging import configure_logging
from flowspeak.core.middleware import RequestIDMiddleware
from flowspeak.observability.client import init_opik
from flowspeak.observability.tracing import trace

configure_logging(log_level=settings.log_level, debug=settings.debug)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, version="0.1.0")
app.add_middleware(RequestIDMiddleware)
app.include_router(today_router)
app.include_router(program_router)
app.include_router(task_router)
app.include_router(practice_router)
app.include_router(mood_router)
app.include_router(preferences_router)
app.include_router(adaptive_router)
app.include_router(days_router)
app.include_router(progress_router)
app.include_router(dashboard_router)


@app.on_event("startup")
async def startup_observability() -> None:
    """Initialize observability backends after the event loop starts."""
    init_opik()


@app.on_event("startup")
async def startup_storage() -> None:
    """Create the key-value table when the SQL storage provider is active."""
    if settings.storage_provider.lower() != "sql":
        return
    from flowspeak.db import Base
    from flowspeak.db.session import engine

    Base.metadata.create_all(bind=engine)
    logger.info("Storage tables ready (%s)", engine.url.render_as_string(hide_password=True))


@app.get("/health", tags=["health"], summary="Readiness probe")
async def health_check(request: Request) -> dict[str, str]:
    """Return a simple status payload so automation can probe the API."""
    with trace("http.health_check", metadata={"route": "/health"}, request_id=request.state.request_id):
        return {"status": "ok"}
