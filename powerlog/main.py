"""powerlog FastAPI application entry point."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from powerlog import __version__, config
from powerlog.journal import JournalProvider
from powerlog.observability import initialize as initialize_observability, shutdown as shutdown_observability
from powerlog.routers.timeline import timeline_router

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger("powerlog")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle."""
    logger.info("powerlog service starting up")
    initialize_observability(app)
    app.state.log_provider = JournalProvider()

    yield

    logger.info("powerlog service shutting down")
    shutdown_observability(app)


app = FastAPI(
    title="powerlog API",
    description="Boot, suspend and resume sessions reconstructed from the systemd journal",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        config.FRONTEND_ORIGIN,
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(timeline_router)


@app.get("/api/health")
def health():
    """Health check endpoint."""
    return {
        "status": "ok",
        "journalctl": config.JOURNALCTL_BIN,
    }
