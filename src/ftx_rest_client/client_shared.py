"""Shared helpers for sync/async client bootstrap and dispatch."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from .config import FtxClientConfig
from .core.auth import Authenticator
from .core.errors import FtxValidationError
from .core.request import PrivateRequest, Request, Response
from .core.transport_shared import PreparedRequest, RawResponse, prepare_request
from .primitives import UnixTimestamp

ResponseT = TypeVar("ResponseT", bound=Response[Any, Any])

Clock = Callable[[], UnixTimestamp]


def validate_client_config(config: FtxClientConfig) -> None:
    try:
        config.validate()
    except ValueError as exc:
        raise FtxValidationError(str(exc)) from exc


def ensure_request(request: object, *, allow_private: bool) -> None:
    if not isinstance(request, Request):
        raise TypeError(f"expected a Request, got {type(request).__name__}")
    if isinstance(request, PrivateRequest) and not allow_private:
        raise TypeError(
            f"{type(request).__name__} is a private request and requires an authenticated client"
        )


def prepare(
    config: FtxClientConfig,
    request: Request[Any],
    *,
    authenticator: Authenticator | None,
    clock: Clock,
) -> PreparedRequest:
    if authenticator is not None:
        return prepare_request(
            config.base_url,
            request,
            authenticator=authenticator,
            timestamp=clock(),
        )
    return prepare_request(config.base_url, request)


def build_response(
    config: FtxClientConfig,
    request: Request[ResponseT],
    raw: RawResponse,
) -> ResponseT:
    response_type: type[ResponseT] = request.RESPONSE  # type: ignore[assignment]
    return response_type(
        raw.content,
        http_status=raw.status_code,
        deny_unknown_fields=config.decoding.deny_unknown_fields,
    )


__all__ = [
    "Clock",
    "validate_client_config",
    "ensure_request",
    "prepare",
    "build_response",
]
