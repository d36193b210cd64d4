"""Client configuration."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_BASE_URL = "https://ftx.com/api"


@dataclass(slots=True, frozen=True)
class TransportConfig:
    """Transport-related settings."""

    timeout_connect_seconds: float = 5.0
    timeout_read_seconds: float = 30.0
    timeout_write_seconds: float = 30.0
    timeout_pool_seconds: float = 5.0

    def validate(self) -> None:
        for field_name in (
            "timeout_connect_seconds",
            "timeout_read_seconds",
            "timeout_write_seconds",
            "timeout_pool_seconds",
        ):
            if getattr(self, field_name) <= 0:
                raise ValueError(f"transport.{field_name} must be > 0")


@dataclass(slots=True, frozen=True)
class DecodingConfig:
    """Response decoding settings."""

    deny_unknown_fields: bool = False

    def validate(self) -> None:
        if not isinstance(self.deny_unknown_fields, bool):
            raise ValueError("decoding.deny_unknown_fields must be bool")


@dataclass(slots=True, frozen=True)
class FtxClientConfig:
    """Runtime configuration for FTX clients."""

    base_url: str = DEFAULT_BASE_URL
    user_agent: str = "ftx-rest-client/0.1.0"

    transport: TransportConfig = field(default_factory=TransportConfig)
    decoding: DecodingConfig = field(default_factory=DecodingConfig)

    def validate(self) -> None:
        if not self.base_url:
            raise ValueError("base_url must not be empty")
        if not self.base_url.startswith(("https://", "http://")):
            raise ValueError("base_url must be an http(s) URL")
        self.transport.validate()
        self.decoding.validate()


__all__ = [
    "DEFAULT_BASE_URL",
    "TransportConfig",
    "DecodingConfig",
    "FtxClientConfig",
]
