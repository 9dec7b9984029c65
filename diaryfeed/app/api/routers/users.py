"""Per-user RSS feed endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import PlainTextResponse

from ...api.dependencies import get_feed_assembler
from ...domain.diary_feed import RSS_MEDIA_TYPE, FeedAssembler
from ...infra.diary_api import DiaryApiError
from ...infra.logging import get_logger

router = APIRouter(prefix="/users", tags=["feeds"])
logger = get_logger(__name__)

BAD_REQUEST_BODY = "Bad Request"
BAD_GATEWAY_BODY = "Bad Gateway"


def _bad_request() -> PlainTextResponse:
    return PlainTextResponse(BAD_REQUEST_BODY, status_code=status.HTTP_400_BAD_REQUEST)


@router.get("", include_in_schema=False)
@router.get("/", include_in_schema=False)
async def missing_user_feed() -> PlainTextResponse:
    return _bad_request()


@router.get("/{user_id}")
async def user_feed(
    user_id: str,
    assembler: FeedAssembler = Depends(get_feed_assembler),
) -> Response:
    """Return the RSS 2.0 feed of ``user_id``'s public diaries."""

    if not user_id.strip():
        return _bad_request()

    try:
        body = await assembler.assemble(user_id)
    except DiaryApiError as exc:
        logger.warning(
            "user_feed_upstream_failed",
            extra={
                "user_id": user_id,
                "code": exc.code,
                "retryable": exc.retryable,
                "upstream_status": exc.status_code,
            },
        )
        return PlainTextResponse(
            BAD_GATEWAY_BODY, status_code=status.HTTP_502_BAD_GATEWAY
        )

    return Response(content=body, media_type=RSS_MEDIA_TYPE)
