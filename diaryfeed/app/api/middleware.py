"""Request logging middleware."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable
from typing import Any, Dict, Optional, Tuple

from fastapi import FastAPI, Request, Response

from ..infra.logging import get_logger

logger = get_logger(__name__)

LATITUDE_HEADER = "cf-iplatitude"
LONGITUDE_HEADER = "cf-iplongitude"
REGION_HEADER = "cf-region"
UNKNOWN_REGION = "unknown region"


def _coordinates(request: Request) -> Optional[Tuple[float, float]]:
    latitude = request.headers.get(LATITUDE_HEADER)
    longitude = request.headers.get(LONGITUDE_HEADER)
    if latitude is None or longitude is None:
        return None
    try:
        return float(latitude), float(longitude)
    except ValueError:
        return None


def request_log_fields(request: Request) -> Dict[str, Any]:
    """Return the metadata logged for every inbound request."""

    return {
        "received_at_ms": int(time.time() * 1000),
        "method": request.method,
        "path": request.url.path,
        "coordinates": _coordinates(request),
        "region": request.headers.get(REGION_HEADER) or UNKNOWN_REGION,
    }


def install(app: FastAPI) -> None:
    @app.middleware("http")
    async def _request_log_mw(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        logger.info("request_received", extra=request_log_fields(request))
        return await call_next(request)
