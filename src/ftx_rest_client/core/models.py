"""Core response models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .errors import FtxRejectedError


@dataclass(slots=True, frozen=True)
class Success:
    """Successful envelope; ``payload`` is the raw ``result`` JSON node."""

    payload: object


@dataclass(slots=True, frozen=True)
class Failure:
    """Error envelope carrying the exchange-supplied message."""

    message: str


Envelope = Union[Success, Failure]


def unwrap_payload(envelope: Envelope, *, http_status: int | None = None) -> object:
    if isinstance(envelope, Failure):
        raise FtxRejectedError(envelope.message, http_status=http_status, cause="exchange")
    return envelope.payload


__all__ = [
    "Success",
    "Failure",
    "Envelope",
    "unwrap_payload",
]
