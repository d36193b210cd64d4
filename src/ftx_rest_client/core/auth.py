"""Request signing for private endpoints."""

from __future__ import annotations

import hmac
from dataclasses import dataclass, field
from hashlib import sha256
from typing import SupportsInt
from urllib.parse import quote

from .errors import FtxInvalidHeaderValueError, FtxInvalidKeyLengthError

FTX_KEY_HEADER = "FTX-KEY"
FTX_SIGN_HEADER = "FTX-SIGN"
FTX_TS_HEADER = "FTX-TS"
FTX_SUBACCOUNT_HEADER = "FTX-SUBACCOUNT"


@dataclass(slots=True, frozen=True)
class ApiCredentials:
    """API key pair, optionally scoped to a sub-account."""

    public_key: str
    private_key: str = field(repr=False)
    subaccount: str | None = None


def _check_header_value(header: str, value: str) -> str:
    for char in value:
        if char != "\t" and not " " <= char <= "~":
            raise FtxInvalidHeaderValueError(f"could not parse {header} as header value")
    return value


class Authenticator:
    """Derives the signed header set for one outgoing request.

    The HMAC state is keyed once; every signature works on a copy of it, so
    one instance can be shared by concurrent requests.
    """

    __slots__ = ("_hmac", "_base_headers")

    def __init__(
        self,
        public_key: str,
        private_key: str,
        subaccount: str | None = None,
    ) -> None:
        if not private_key:
            raise FtxInvalidKeyLengthError()
        self._hmac = hmac.new(private_key.encode("utf-8"), digestmod=sha256)

        base_headers = {FTX_KEY_HEADER: _check_header_value(FTX_KEY_HEADER, public_key)}
        if subaccount is not None:
            base_headers[FTX_SUBACCOUNT_HEADER] = _check_header_value(
                FTX_SUBACCOUNT_HEADER,
                quote(subaccount, safe=""),
            )
        self._base_headers = base_headers

    @classmethod
    def from_credentials(cls, credentials: ApiCredentials) -> "Authenticator":
        return cls(
            credentials.public_key,
            credentials.private_key,
            credentials.subaccount,
        )

    @property
    def public_key(self) -> str:
        return self._base_headers[FTX_KEY_HEADER]

    def signature(
        self,
        timestamp: SupportsInt,
        method: str,
        path: str,
        body: str | None = None,
    ) -> str:
        """Hex HMAC-SHA256 of ``{ts}{METHOD}/api{path}{body}``."""

        message = f"{int(timestamp)}{method.upper()}/api{path}{body or ''}"
        digest = self._hmac.copy()
        digest.update(message.encode("utf-8"))
        return digest.hexdigest()

    def sign_headers(
        self,
        timestamp: SupportsInt,
        method: str,
        path: str,
        body: str | None = None,
    ) -> dict[str, str]:
        headers = dict(self._base_headers)
        headers[FTX_SIGN_HEADER] = self.signature(timestamp, method, path, body)
        headers[FTX_TS_HEADER] = str(int(timestamp))
        return headers

    def __repr__(self) -> str:
        subaccount = self._base_headers.get(FTX_SUBACCOUNT_HEADER)
        return f"Authenticator(public_key={self.public_key!r}, subaccount={subaccount!r})"


__all__ = [
    "FTX_KEY_HEADER",
    "FTX_SIGN_HEADER",
    "FTX_TS_HEADER",
    "FTX_SUBACCOUNT_HEADER",
    "ApiCredentials",
    "Authenticator",
]
