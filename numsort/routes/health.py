"""Health endpoint.

Reports whether the number store answers a trivial probe. Stores without a
`ping` method (test doubles) are reported healthy.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
def health(request: Request) -> JSONResponse:
    store = request.app.state.number_store
    timeout = float(request.app.state.config.http_server.timeout)
    ping = getattr(store, "ping", None)
    ok = bool(ping(timeout=timeout)) if callable(ping) else True
    if not ok:
        logger.warning("health.degraded store=%s", type(store).__name__)
        return JSONResponse({"status": "degraded", "store": False}, status_code=503)
    return JSONResponse({"status": "ok", "store": True})


__all__ = ["router"]
