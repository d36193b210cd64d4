"""Public package exports for the FTX REST client."""

from .async_client import AsyncFtxAuthClient, AsyncFtxClient
from .client import FtxAuthClient, FtxClient
from .config import FtxClientConfig
from .core.auth import ApiCredentials, Authenticator

__all__ = [
    "FtxClient",
    "FtxAuthClient",
    "AsyncFtxClient",
    "AsyncFtxAuthClient",
    "FtxClientConfig",
    "ApiCredentials",
    "Authenticator",
]
