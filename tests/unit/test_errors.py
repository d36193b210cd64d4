from __future__ import annotations

import pytest

from ftx_rest_client.core.errors import (
    ErrorKind,
    FtxApiError,
    FtxClientClosedError,
    FtxDeserializationError,
    FtxRateLimitError,
    FtxRejectedError,
    FtxRequestExecutionError,
    FtxTransportClosedError,
    error_from_status,
)


def test_429_maps_to_rate_limit_error():
    err = error_from_status(429)
    assert isinstance(err, FtxRateLimitError)
    assert err.kind is ErrorKind.RATE_LIMIT_EXCEEDED
    assert err.http_status == 429
    assert str(err) == "rate limits exceeded"


def test_rate_limit_is_not_an_execution_error():
    assert not issubclass(FtxRateLimitError, FtxRequestExecutionError)


@pytest.mark.parametrize("http_status", [500, 502, 503])
def test_server_status_maps_to_execution_error_with_status(http_status):
    err = error_from_status(http_status)
    assert isinstance(err, FtxRequestExecutionError)
    assert err.http_status == http_status
    assert str(err) == f"request failed with status code {http_status}"


@pytest.mark.parametrize("http_status", [200, 400, 401, 404])
def test_non_transport_statuses_pass_through(http_status):
    assert error_from_status(http_status) is None


def test_sources_are_retained():
    first = ValueError("success shape")
    second = ValueError("failure shape")
    err = FtxDeserializationError("neither", sources=(first, second), field="result")
    assert err.sources == (first, second)
    assert err.field == "result"


def test_rejected_error_keeps_exchange_message():
    err = FtxRejectedError("Not enough balances", http_status=400)
    assert err.exchange_message == "Not enough balances"
    assert err.kind is ErrorKind.REJECTED


def test_every_error_is_an_ftx_api_error():
    for error_type in (FtxRateLimitError, FtxRejectedError, FtxTransportClosedError):
        assert issubclass(error_type, FtxApiError)
    assert issubclass(FtxTransportClosedError, FtxClientClosedError)
