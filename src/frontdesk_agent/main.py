"""FastAPI application entry point."""

import asyncio
import logging
from contextlib import asynccontextmanager, suppress

import uvicorn
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from frontdesk_agent.config import settings
from frontdesk_agent.webhook.handler import dedup_filter, session_store
from frontdesk_agent.webhook.handler import router as webhook_router
from frontdesk_agent.webhook.pairing import router as pairing_router

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle hook."""
    logger.info("Starting %s …", settings.app_name)
    session_store.load()
    clear_task = asyncio.create_task(
        dedup_filter.run_clear_loop(settings.dedup_clear_interval_seconds)
    )
    yield
    clear_task.cancel()
    with suppress(asyncio.CancelledError):
        await clear_task
    logger.info("Shutting down %s …", settings.app_name)


app = FastAPI(
    title=settings.app_name,
    description="WhatsApp front desk for a law office, with human handoff",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(webhook_router)
app.include_router(pairing_router)


@app.get("/", response_class=PlainTextResponse)
async def index() -> str:
    return f"Bot WhatsApp - {settings.office_name} rodando!"


@app.get("/health")
async def health_check():
    """Simple liveness probe."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "sessions": session_store.active_count,
    }


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    uvicorn.run(app, host=settings.host, port=settings.port)
