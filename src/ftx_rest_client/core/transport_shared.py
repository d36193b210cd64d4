"""Shared helpers for sync/async transport implementations."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, SupportsInt
from urllib.parse import urlencode

import httpx

from ..config import FtxClientConfig
from .auth import Authenticator
from .errors import FtxInvalidUrlError
from .request import QueryParams, Request

CONTENT_TYPE_HEADER = "Content-Type"
JSON_CONTENT_TYPE = "application/json"


@dataclass(slots=True, frozen=True)
class PreparedRequest:
    """Everything needed to send one request; ``path`` is what gets signed."""

    method: str
    url: str
    path: str
    body: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(slots=True, frozen=True)
class RawResponse:
    status_code: int
    content: bytes


def build_default_headers(config: FtxClientConfig) -> Mapping[str, str]:
    return {
        "Accept": JSON_CONTENT_TYPE,
        "User-Agent": config.user_agent,
    }


def build_default_timeout(config: FtxClientConfig) -> httpx.Timeout:
    return httpx.Timeout(
        connect=config.transport.timeout_connect_seconds,
        read=config.transport.timeout_read_seconds,
        write=config.transport.timeout_write_seconds,
        pool=config.transport.timeout_pool_seconds,
    )


def build_path_with_params(path: str, params: QueryParams | None) -> str:
    """Append form-encoded params in their declared order; never a bare ``?``."""

    if not params:
        return path
    for key, value in params:
        if not isinstance(key, str) or not isinstance(value, str):
            raise FtxInvalidUrlError(
                f"error generating query string from params {list(params)!r}: "
                "keys and values must be str",
                cause="query",
            )
    try:
        query = urlencode(list(params))
    except (TypeError, UnicodeError) as exc:
        raise FtxInvalidUrlError(
            f"error generating query string from params {list(params)!r}",
            cause="query",
            sources=(exc,),
        ) from exc
    if not query:
        return path
    return f"{path}?{query}"


def prepare_request(
    base_url: str,
    request: Request[Any],
    *,
    authenticator: Authenticator | None = None,
    timestamp: SupportsInt | None = None,
) -> PreparedRequest:
    """Resolve URL, body and headers; sign when an authenticator is given."""

    path = build_path_with_params(request.path(), request.query_params())
    url = f"{base_url.rstrip('/')}{path}"
    body = request.body()
    method = request.METHOD.upper()

    headers: dict[str, str] = {}
    if authenticator is not None:
        if timestamp is None:
            raise ValueError("timestamp is required when signing a request")
        headers.update(authenticator.sign_headers(timestamp, method, path, body))
    if body is not None:
        headers[CONTENT_TYPE_HEADER] = JSON_CONTENT_TYPE

    return PreparedRequest(method=method, url=url, path=path, body=body, headers=headers)


def resolve_timeout(timeout: float | None) -> Any:
    if timeout is None:
        return httpx.USE_CLIENT_DEFAULT
    if timeout <= 0:
        raise ValueError("timeout must be > 0")
    return timeout


__all__ = [
    "CONTENT_TYPE_HEADER",
    "JSON_CONTENT_TYPE",
    "PreparedRequest",
    "RawResponse",
    "build_default_headers",
    "build_default_timeout",
    "build_path_with_params",
    "prepare_request",
    "resolve_timeout",
]
