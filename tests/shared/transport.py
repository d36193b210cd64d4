from __future__ import annotations

import json
from collections.abc import Sequence

import httpx

from ftx_rest_client.config import DecodingConfig, FtxClientConfig


class Response:
    def __init__(self, status_code: int, content: bytes):
        self.status_code = status_code
        self.content = content


def json_response(status_code: int, payload: object) -> Response:
    return Response(status_code, json.dumps(payload).encode("utf-8"))


Step = Response | Exception


class SyncSequencedClient:
    """Replays canned responses and records every request it builds."""

    def __init__(self, steps: Sequence[Step]):
        self.steps = list(steps)
        self.calls = 0
        self.requests: list[httpx.Request] = []
        self.timeouts: list[object] = []
        self.closed = False

    def build_request(self, method: str, url: str, *, content=None, headers=None, timeout=None):
        self.timeouts.append(timeout)
        return httpx.Request(method, url, content=content, headers=headers)

    def send(self, request: httpx.Request):
        self.calls += 1
        self.requests.append(request)
        step = self.steps.pop(0)
        if isinstance(step, Exception):
            raise step
        return step

    def close(self):
        self.closed = True


class AsyncSequencedClient:
    def __init__(self, steps: Sequence[Step]):
        self.steps = list(steps)
        self.calls = 0
        self.requests: list[httpx.Request] = []
        self.timeouts: list[object] = []
        self.closed = False

    def build_request(self, method: str, url: str, *, content=None, headers=None, timeout=None):
        self.timeouts.append(timeout)
        return httpx.Request(method, url, content=content, headers=headers)

    async def send(self, request: httpx.Request):
        self.calls += 1
        self.requests.append(request)
        step = self.steps.pop(0)
        if isinstance(step, Exception):
            raise step
        return step

    async def aclose(self):
        self.closed = True


def build_config(*, deny_unknown_fields: bool = False) -> FtxClientConfig:
    cfg = FtxClientConfig(
        base_url="https://ftx.test/api",
        decoding=DecodingConfig(deny_unknown_fields=deny_unknown_fields),
    )
    cfg.validate()
    return cfg
