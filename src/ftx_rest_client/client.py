"""Public client entrypoint."""

from __future__ import annotations

from types import TracebackType
from typing import Any, TypeVar

from .client_shared import (
    Clock,
    build_response,
    ensure_request,
    prepare,
    validate_client_config,
)
from .config import FtxClientConfig
from .core.auth import Authenticator
from .core.errors import FtxClientClosedError
from .core.request import PublicRequest, Request, Response
from .core.transport import SyncTransport
from .primitives import UnixTimestamp

ResponseT = TypeVar("ResponseT", bound=Response[Any, Any])


class FtxClient:
    """Unauthenticated FTX REST client.

    Only ``PublicRequest`` values can be executed; private requests need
    :class:`FtxAuthClient`.
    """

    _allow_private = False

    def __init__(
        self,
        *,
        config: FtxClientConfig | None = None,
        transport: SyncTransport | None = None,
    ) -> None:
        self._config = config or FtxClientConfig()
        validate_client_config(self._config)

        self._transport = transport or SyncTransport(self._config)
        self._closed = False

    @property
    def config(self) -> FtxClientConfig:
        return self._config

    def _ensure_open(self) -> None:
        if self._closed:
            raise FtxClientClosedError(f"{type(self).__name__} is already closed")

    def _authenticator(self) -> Authenticator | None:
        return None

    def _clock(self) -> UnixTimestamp:
        return UnixTimestamp.now()

    def execute(
        self,
        request: PublicRequest[ResponseT],
        *,
        timeout: float | None = None,
    ) -> ResponseT:
        """Send ``request`` once and wrap the raw body in its response type."""

        self._ensure_open()
        ensure_request(request, allow_private=self._allow_private)
        prepared = prepare(
            self._config,
            request,
            authenticator=self._authenticator(),
            clock=self._clock,
        )
        raw = self._transport.send(prepared, timeout=timeout)
        return build_response(self._config, request, raw)

    def close(self) -> None:
        if self._closed:
            return
        self._transport.close()
        self._closed = True

    def __enter__(self) -> "FtxClient":
        self._ensure_open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        self.close()
        return False


class FtxAuthClient(FtxClient):
    """Authenticated FTX REST client; every request it sends is signed."""

    _allow_private = True

    def __init__(
        self,
        authenticator: Authenticator,
        *,
        config: FtxClientConfig | None = None,
        transport: SyncTransport | None = None,
        clock: Clock | None = None,
    ) -> None:
        if not isinstance(authenticator, Authenticator):
            raise TypeError("authenticator must be an Authenticator")
        super().__init__(config=config, transport=transport)
        self._auth = authenticator
        self._clock_fn = clock or UnixTimestamp.now

    @property
    def authenticator(self) -> Authenticator:
        return self._auth

    def _authenticator(self) -> Authenticator | None:
        return self._auth

    def _clock(self) -> UnixTimestamp:
        return self._clock_fn()

    def execute(  # type: ignore[override]
        self,
        request: Request[ResponseT],
        *,
        timeout: float | None = None,
    ) -> ResponseT:
        return super().execute(request, timeout=timeout)  # type: ignore[arg-type]

    def __enter__(self) -> "FtxAuthClient":
        self._ensure_open()
        return self


__all__ = [
    "FtxClient",
    "FtxAuthClient",
]
