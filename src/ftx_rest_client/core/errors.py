"""Error types and status mapping."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import ClassVar


class ErrorKind(str, Enum):
    INVALID_KEY_LENGTH = "invalid_key_length"
    INVALID_HEADER_VALUE = "invalid_header_value"
    INVALID_URL = "invalid_url"
    INVALID_PAYLOAD = "invalid_payload"
    REQUEST_BUILD_FAILED = "request_build_failed"
    REQUEST_EXECUTION_FAILED = "request_execution_failed"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    DESERIALIZATION_FAILED = "deserialization_failed"
    REJECTED = "rejected"
    CLIENT_CLOSED = "client_closed"
    INVALID_CONFIG = "invalid_config"


_DEFAULT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.INVALID_KEY_LENGTH: "invalid private key length",
    ErrorKind.INVALID_HEADER_VALUE: "invalid header value",
    ErrorKind.INVALID_URL: "invalid URL",
    ErrorKind.INVALID_PAYLOAD: "failed to serialize request payload",
    ErrorKind.REQUEST_BUILD_FAILED: "failed to build request",
    ErrorKind.REQUEST_EXECUTION_FAILED: "request failed",
    ErrorKind.RATE_LIMIT_EXCEEDED: "rate limits exceeded",
    ErrorKind.DESERIALIZATION_FAILED: "failed to deserialize response",
    ErrorKind.REJECTED: "request rejected by the exchange",
    ErrorKind.CLIENT_CLOSED: "client is already closed",
    ErrorKind.INVALID_CONFIG: "invalid client configuration",
}


class FtxApiError(Exception):
    """Base exception for this package."""

    kind: ClassVar[ErrorKind]

    def __init__(
        self,
        message: str | None = None,
        *,
        http_status: int | None = None,
        cause: str | None = None,
        sources: Sequence[BaseException] = (),
    ) -> None:
        super().__init__(message or _DEFAULT_MESSAGES[self.kind])
        self.http_status = http_status
        self.cause = cause
        self.sources = tuple(sources)


class FtxInvalidKeyLengthError(FtxApiError):
    """Private key cannot key an HMAC-SHA256 instance."""

    kind = ErrorKind.INVALID_KEY_LENGTH


class FtxInvalidHeaderValueError(FtxApiError):
    """A value cannot be sent as an HTTP header value."""

    kind = ErrorKind.INVALID_HEADER_VALUE


class FtxInvalidUrlError(FtxApiError):
    """Query string could not be built from request parameters."""

    kind = ErrorKind.INVALID_URL


class FtxInvalidPayloadError(FtxApiError):
    """Request body could not be serialized to JSON."""

    kind = ErrorKind.INVALID_PAYLOAD


class FtxRequestBuildError(FtxApiError):
    """HTTP request could not be built by the transport."""

    kind = ErrorKind.REQUEST_BUILD_FAILED


class FtxRequestExecutionError(FtxApiError):
    """Network/transport-level failure or unexpected HTTP status."""

    kind = ErrorKind.REQUEST_EXECUTION_FAILED

    def __init__(
        self,
        message: str | None = None,
        *,
        http_status: int | None = None,
        cause: str | None = None,
        sources: Sequence[BaseException] = (),
    ) -> None:
        if message is None and http_status is not None:
            message = f"request failed with status code {http_status}"
        super().__init__(message, http_status=http_status, cause=cause, sources=sources)


class FtxRateLimitError(FtxApiError):
    """HTTP 429 returned by the exchange."""

    kind = ErrorKind.RATE_LIMIT_EXCEEDED


class FtxDeserializationError(FtxApiError):
    """Response envelope or payload field could not be decoded."""

    kind = ErrorKind.DESERIALIZATION_FAILED

    def __init__(
        self,
        message: str | None = None,
        *,
        field: str | None = None,
        http_status: int | None = None,
        cause: str | None = None,
        sources: Sequence[BaseException] = (),
    ) -> None:
        super().__init__(message, http_status=http_status, cause=cause, sources=sources)
        self.field = field


class FtxRejectedError(FtxApiError):
    """Structured business-level error returned by the exchange."""

    kind = ErrorKind.REJECTED

    def __init__(
        self,
        message: str | None = None,
        *,
        http_status: int | None = None,
        cause: str | None = None,
        sources: Sequence[BaseException] = (),
    ) -> None:
        super().__init__(message, http_status=http_status, cause=cause, sources=sources)
        self.exchange_message = message


class FtxClientClosedError(FtxApiError):
    """Raised when client is used after close."""

    kind = ErrorKind.CLIENT_CLOSED


class FtxTransportClosedError(FtxClientClosedError):
    """Raised when transport is used after close."""


class FtxValidationError(FtxApiError):
    """Invalid client configuration."""

    kind = ErrorKind.INVALID_CONFIG


def error_from_status(http_status: int) -> FtxApiError | None:
    """Map an HTTP status to a transport-level exception, if it is one."""

    if http_status == 429:
        return FtxRateLimitError(http_status=http_status, cause="rate_limited")
    if http_status >= 500:
        return FtxRequestExecutionError(http_status=http_status, cause="server")
    return None


__all__ = [
    "ErrorKind",
    "FtxApiError",
    "FtxInvalidKeyLengthError",
    "FtxInvalidHeaderValueError",
    "FtxInvalidUrlError",
    "FtxInvalidPayloadError",
    "FtxRequestBuildError",
    "FtxRequestExecutionError",
    "FtxRateLimitError",
    "FtxDeserializationError",
    "FtxRejectedError",
    "FtxClientClosedError",
    "FtxTransportClosedError",
    "FtxValidationError",
    "error_from_status",
]
