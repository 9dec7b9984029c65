"""httpx client for the upstream ``fetchPublicDiaries`` function."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from ...config import UpstreamConfig
from ...domain.diary_feed.models import DiaryQueryResult
from ..logging import get_logger

logger = get_logger(__name__)


class DiaryApiError(RuntimeError):
    """Raised when the upstream diary API cannot produce a usable result."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        retryable: bool,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.retryable = retryable
        self.status_code = status_code


def build_request_body(user_id: str) -> Dict[str, Any]:
    return {"data": {"uid": user_id}}


def build_http_client(config: UpstreamConfig) -> httpx.AsyncClient:
    """Return the shared async client used for upstream calls."""

    return httpx.AsyncClient(timeout=httpx.Timeout(config.timeout_seconds))


class DiaryApiClient:
    """Fetch a user's public diaries from the upstream JSON API."""

    def __init__(self, http_client: httpx.AsyncClient, config: UpstreamConfig) -> None:
        self._http = http_client
        self._config = config

    @property
    def endpoint(self) -> str:
        return self._config.endpoint

    def request_headers(self) -> Dict[str, str]:
        # Freshness hint only; intermediate caches may serve a response this old.
        return {
            "content-type": "application/json",
            "cache-control": f"max-age={self._config.cache_ttl_seconds}",
        }

    async def fetch_public_diaries(self, user_id: str) -> DiaryQueryResult:
        """POST ``{"data": {"uid": user_id}}`` and decode the ``result`` list.

        Raises:
            DiaryApiError: On transport failure, a non-2xx status, a body that
                is not JSON, or a body that does not match the entry shape.
        """

        body = json.dumps(build_request_body(user_id), ensure_ascii=False)
        try:
            response = await self._http.post(
                self._config.endpoint,
                content=body.encode("utf-8"),
                headers=self.request_headers(),
            )
        except httpx.HTTPError as exc:
            logger.warning(
                "upstream_request_failed",
                extra={"user_id": user_id, "endpoint": self.endpoint, "error": str(exc)},
            )
            raise DiaryApiError(
                f"upstream request failed: {exc}",
                code="upstream_unreachable",
                retryable=True,
            ) from exc

        if not response.is_success:
            logger.warning(
                "upstream_status_rejected",
                extra={"user_id": user_id, "status_code": response.status_code},
            )
            raise DiaryApiError(
                f"upstream responded with HTTP {response.status_code}",
                code="upstream_status",
                retryable=response.status_code >= 500,
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise DiaryApiError(
                "upstream response is not valid JSON",
                code="upstream_invalid_json",
                retryable=False,
                status_code=response.status_code,
            ) from exc

        try:
            result = DiaryQueryResult.model_validate(payload)
        except ValidationError as exc:
            raise DiaryApiError(
                f"upstream response does not match the diary shape: {exc.error_count()} error(s)",
                code="upstream_invalid_payload",
                retryable=False,
                status_code=response.status_code,
            ) from exc

        logger.debug(
            "upstream_diaries_decoded",
            extra={"user_id": user_id, "num_entries": len(result.result)},
        )
        return result
