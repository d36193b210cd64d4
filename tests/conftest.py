from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from ftx_rest_client.core.auth import Authenticator  # noqa: E402
from ftx_rest_client.primitives import UnixTimestamp  # noqa: E402

FIXED_TIMESTAMP = UnixTimestamp(1617659558822)


@pytest.fixture
def authenticator() -> Authenticator:
    return Authenticator("test-public-key", "test-private-key")


@pytest.fixture
def subaccount_authenticator() -> Authenticator:
    return Authenticator("test-public-key", "test-private-key", "my sub/account")


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_TIMESTAMP
