"""HTTP alignment-inference provider."""

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from linealign.error_codes import ErrorCode
from linealign.exceptions import ProviderError
from linealign.models.annotation import ExternalAlignmentAnnotation
from linealign.models.serializers import deserialize_external_annotation
from linealign.providers.annotation.base import AlignmentAnnotationProvider

logger = logging.getLogger(__name__)

_WAIT = wait_exponential(min=1, max=10)


class _RetryableAnnotationError(ProviderError):
    pass


def _log_retry(state: RetryCallState) -> None:
    exc = state.outcome.exception() if state.outcome else None
    wait_s = state.next_action.sleep if state.next_action else None
    logger.warning(
        "annotation fetch retrying (attempt=%s, wait_s=%s, error=%s)",
        state.attempt_number,
        wait_s,
        exc,
    )


def _format_http_error(response: httpx.Response) -> str:
    detail = response.text.strip()
    if len(detail) > 500:
        detail = detail[:500] + "…"
    if detail:
        return f"HTTP {response.status_code} {response.reason_phrase}: {detail}"
    return f"HTTP {response.status_code} {response.reason_phrase}"


class HTTPAnnotationProvider(AlignmentAnnotationProvider):
    """Fetches `GET {base_url}/annotations/{text_id}`."""

    provider = "http"

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        timeout: float = 30.0,
        max_attempts: int = 3,
        wait=_WAIT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.max_attempts = max(1, int(max_attempts))
        self._wait = wait
        self._client: httpx.AsyncClient | None = None

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self.timeout))
        return self._client

    async def fetch_annotation(self, text_id: str) -> ExternalAlignmentAnnotation | None:
        retrying = AsyncRetrying(
            retry=retry_if_exception_type(_RetryableAnnotationError),
            stop=stop_after_attempt(self.max_attempts),
            wait=self._wait,
            before_sleep=_log_retry,
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                payload = await self._get(text_id)
        if payload is None:
            return None
        annotation = deserialize_external_annotation(payload)
        logger.info(
            "annotation fetched (text_id=%s, alignment=%s, target=%s)",
            text_id,
            len(annotation.alignment_annotation),
            len(annotation.target_annotation),
        )
        return annotation

    async def _get(self, text_id: str) -> object | None:
        client = await self._get_client()
        url = f"{self.base_url}/annotations/{quote(str(text_id), safe='')}"
        try:
            response = await client.get(url, headers=self._headers())
        except httpx.TimeoutException as exc:
            raise _RetryableAnnotationError(
                self.provider, str(exc) or "timeout", error_code=ErrorCode.ANNOTATION_TIMEOUT
            ) from exc
        except httpx.TransportError as exc:
            raise _RetryableAnnotationError(
                self.provider, str(exc), error_code=ErrorCode.ANNOTATION_FETCH_FAILED
            ) from exc

        if response.status_code == 404:
            logger.info("no annotation for text_id=%s", text_id)
            return None
        if response.status_code == 429 or response.status_code >= 500:
            raise _RetryableAnnotationError(
                self.provider,
                _format_http_error(response),
                error_code=ErrorCode.ANNOTATION_FETCH_FAILED,
            )
        if response.status_code >= 400:
            raise ProviderError(
                self.provider,
                _format_http_error(response),
                error_code=ErrorCode.ANNOTATION_FETCH_FAILED,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise ProviderError(
                self.provider,
                f"invalid JSON response: {exc}",
                error_code=ErrorCode.ANNOTATION_INVALID,
            ) from exc

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HTTPAnnotationProvider":
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()
