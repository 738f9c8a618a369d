from __future__ import annotations

import os

from fastapi import APIRouter, Request
from fastapi.responses import Response

from services.metrics import render_prometheus
from settings import settings

router = APIRouter(tags=["health"])


def _resolve_git_sha() -> str | None:
    return (
        (os.getenv("GIT_SHA") or "").strip()
        or (os.getenv("FLY_IMAGE_REF") or "").strip()
        or None
    )


@router.get("/health")
async def health(request: Request):
    collection = request.app.state.collection
    return {
        "ok": True,
        "env": settings.ENV,
        "profile": collection.config.profile if collection.config else None,
        "scheduler_running": collection.scheduler.running,
        "transactions": len(collection.store),
        "git_sha": _resolve_git_sha(),
    }


@router.get("/metrics")
def metrics():
    body = render_prometheus()
    return Response(content=body, media_type="text/plain; version=0.0.4")
