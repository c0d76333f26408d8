"""Timeline API router."""
from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import PlainTextResponse

from powerlog.journal import JournalProvider, JournalRetrievalError
from powerlog.models import TimelineReport
from powerlog.pipeline import build_timeline
from powerlog.rendering import render_report

logger = logging.getLogger("powerlog.api")

timeline_router = APIRouter(prefix="/api/timeline", tags=["timeline"])


def _get_provider(request: Request):
    provider = getattr(request.app.state, "log_provider", None)
    return provider or JournalProvider()


def _build(request: Request, boot: str) -> TimelineReport:
    try:
        return build_timeline(_get_provider(request), boot_id=boot or None)
    except JournalRetrievalError as exc:
        logger.error("Timeline unavailable: %s", exc)
        raise HTTPException(status_code=503, detail=str(exc)) from exc


@timeline_router.get("", response_model=TimelineReport)
def get_timeline(
    request: Request,
    boot: str = Query("", description="Restrict sleep history to one boot id"),
):
    return _build(request, boot)


@timeline_router.get("/text", response_class=PlainTextResponse)
def get_timeline_text(
    request: Request,
    boot: str = Query("", description="Restrict sleep history to one boot id"),
):
    return render_report(_build(request, boot))
