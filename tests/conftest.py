"""PyTest configuration and shared test fixtures.

This module provides fixtures shared by the TVM client tests: a fixed clock,
credential blob builders and temporary cache file locations.
"""

import tempfile
from collections.abc import Callable, Generator
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

import pytest

from tvm_client.config import OpenWhiskCredentials, TvmClientConfig

FIXED_NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)


def iso_utc(moment: datetime) -> str:
    """Format an aware datetime the way the TVM does, e.g. 2024-05-01T12:00:00.000Z."""
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


@pytest.fixture
def temp_dir() -> Generator[str, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


@pytest.fixture
def cache_path(temp_dir: str) -> Path:
    """Location of a cache file that does not exist yet."""
    return Path(temp_dir) / ".tvmCache"


@pytest.fixture
def now() -> datetime:
    """The moment every fixed clock reports."""
    return FIXED_NOW


@pytest.fixture
def clock(now: datetime) -> Callable[[], datetime]:
    """A clock frozen at ``now``."""
    return lambda: now


@pytest.fixture
def make_blob(now: datetime) -> Callable[..., dict[str, Any]]:
    """Build a credential blob expiring ``expires_in`` seconds after ``now``."""

    def _make_blob(expires_in: float = 3600, **fields: Any) -> dict[str, Any]:
        return {
            "accessKeyId": "X",
            **fields,
            "expiration": iso_utc(now + timedelta(seconds=expires_in)),
        }

    return _make_blob


@pytest.fixture
def identity() -> OpenWhiskCredentials:
    """OpenWhisk credentials used by the client tests."""
    return OpenWhiskCredentials(namespace="ns1", auth="secret")


@pytest.fixture
def client_config(
    identity: OpenWhiskCredentials, cache_path: Path
) -> TvmClientConfig:
    """Client configuration pointing at a temporary cache file."""
    return TvmClientConfig(
        ow=identity,
        api_url="https://tvm.example/apis/tvm",
        cache_file=str(cache_path),
    )
