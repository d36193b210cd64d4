"""Sync HTTP transport with status classification."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx

from ..config import FtxClientConfig
from .errors import (
    FtxRequestBuildError,
    FtxRequestExecutionError,
    FtxTransportClosedError,
    error_from_status,
)
from .transport_shared import (
    PreparedRequest,
    RawResponse,
    build_default_headers,
    build_default_timeout,
    resolve_timeout,
)

logger = logging.getLogger("ftx_rest_client")


class SyncTransportClient(Protocol):
    def build_request(self, method: str, url: str, **kwargs: Any) -> httpx.Request: ...
    def send(self, request: httpx.Request) -> Any: ...
    def close(self) -> None: ...


class SyncTransport:
    """Synchronous transport for the FTX REST API.

    Sends exactly one HTTP request per call; retry and backoff are left to
    the caller.
    """

    def __init__(
        self,
        config: FtxClientConfig,
        *,
        client: SyncTransportClient | None = None,
    ) -> None:
        self._config = config
        self._closed = False
        self._owns_client = client is None
        self._client = client or httpx.Client(
            headers=build_default_headers(config),
            timeout=build_default_timeout(config),
        )

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_client and hasattr(self._client, "close"):
            self._client.close()

    def send(
        self,
        prepared: PreparedRequest,
        *,
        timeout: float | None = None,
    ) -> RawResponse:
        if self._closed:
            raise FtxTransportClosedError("transport is already closed")

        try:
            request = self._client.build_request(
                prepared.method,
                prepared.url,
                content=prepared.body,
                headers=dict(prepared.headers),
                timeout=resolve_timeout(timeout),
            )
        except (httpx.InvalidURL, ValueError, TypeError) as exc:
            raise FtxRequestBuildError(cause="build", sources=(exc,)) from exc

        logger.debug("request start method=%s path=%s", prepared.method, prepared.path)
        try:
            response = self._client.send(request)
            content = response.content
        except httpx.HTTPError as exc:
            logger.error(
                "request network error method=%s path=%s error=%s",
                prepared.method,
                prepared.path,
                exc.__class__.__name__,
            )
            raise FtxRequestExecutionError(cause="network", sources=(exc,)) from exc

        http_status = response.status_code
        logger.debug(
            "response received method=%s path=%s http_status=%s",
            prepared.method,
            prepared.path,
            http_status,
        )
        mapped_error = error_from_status(http_status)
        if mapped_error is not None:
            if http_status == 429:
                logger.warning(
                    "request rate limited method=%s path=%s",
                    prepared.method,
                    prepared.path,
                )
            else:
                logger.error(
                    "request failed method=%s path=%s http_status=%s",
                    prepared.method,
                    prepared.path,
                    http_status,
                )
            raise mapped_error

        logger.info(
            "request complete method=%s path=%s http_status=%s",
            prepared.method,
            prepared.path,
            http_status,
        )
        return RawResponse(status_code=http_status, content=bytes(content))


__all__ = [
    "SyncTransport",
]
