"""Tests for credential cache implementations.

This module contains unit tests for the freshness policy, the file backed
cache and the disabled cache.
"""

import json
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from tvm_client.cache import (
    CacheDegraded,
    CacheHit,
    CacheMiss,
    FileCredentialCache,
    NullCredentialCache,
    create_credential_cache,
    is_fresh,
    parse_expiration,
)

KEY_A = "ns1|https://tvm.example/apis/tvm/aws/s3"
KEY_B = "ns1|https://tvm.example/apis/tvm/azure/blob"


class TestFreshness:
    """Test expiration parsing and the freshness buffer."""

    def test_parse_zulu_timestamp(self) -> None:
        assert parse_expiration("2024-05-01T12:00:00.000Z") == datetime(
            2024, 5, 1, 12, 0, 0, tzinfo=UTC
        )

    def test_parse_naive_timestamp_as_utc(self) -> None:
        assert parse_expiration("2024-05-01T12:00:00") == datetime(
            2024, 5, 1, 12, 0, 0, tzinfo=UTC
        )

    @pytest.mark.parametrize("value", [None, 1714564800, "", "tomorrow"])
    def test_parse_invalid(self, value: object) -> None:
        assert parse_expiration(value) is None

    @pytest.mark.parametrize(
        ("expires_in", "expected"),
        [(3600, True), (61, True), (60, False), (59, False), (-1, False)],
    )
    def test_buffer_boundary(
        self,
        make_blob: Callable[..., dict[str, Any]],
        now: datetime,
        expires_in: int,
        expected: bool,
    ) -> None:
        assert is_fresh(make_blob(expires_in), now) is expected

    @pytest.mark.parametrize(
        "expiration", ["0001-01-01T00:00:30Z", "0001-01-01T00:00:00+00:00"]
    )
    def test_earliest_representable_expiration_is_not_fresh(
        self, now: datetime, expiration: str
    ) -> None:
        assert is_fresh({"expiration": expiration}, now) is False

    def test_latest_representable_expiration_is_fresh(self, now: datetime) -> None:
        assert is_fresh({"expiration": "9999-12-31T23:59:59Z"}, now) is True

    def test_missing_expiration_is_not_fresh(self, now: datetime) -> None:
        assert is_fresh({"accessKeyId": "X"}, now) is False

    def test_non_mapping_is_not_fresh(self, now: datetime) -> None:
        assert is_fresh(["not", "a", "blob"], now) is False


class TestFileCredentialCache:
    """Test the file backed credential cache."""

    @pytest.fixture
    def cache(
        self, cache_path: Path, clock: Callable[[], datetime]
    ) -> FileCredentialCache:
        """Create a cache over a file that does not exist yet."""
        return FileCredentialCache(cache_path, clock=clock)

    @pytest.mark.asyncio
    async def test_missing_file_is_a_miss(self, cache: FileCredentialCache) -> None:
        assert await cache.lookup(KEY_A) == CacheMiss()
        assert await cache.get(KEY_A) is None

    @pytest.mark.asyncio
    async def test_set_creates_file_and_get_returns_blob(
        self,
        cache: FileCredentialCache,
        cache_path: Path,
        make_blob: Callable[..., dict[str, Any]],
    ) -> None:
        blob = make_blob(3600)

        assert await cache.set(KEY_A, blob) is True

        assert json.loads(cache_path.read_text()) == {KEY_A: blob}
        assert await cache.get(KEY_A) == blob
        assert await cache.lookup(KEY_A) == CacheHit(blob=blob)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("expires_in", "fresh"), [(61, True), (59, False), (-1, False)]
    )
    async def test_freshness_boundary(
        self,
        cache: FileCredentialCache,
        make_blob: Callable[..., dict[str, Any]],
        expires_in: int,
        fresh: bool,
    ) -> None:
        blob = make_blob(expires_in)
        await cache.set(KEY_A, blob)

        assert (await cache.get(KEY_A) == blob) is fresh
        if not fresh:
            assert await cache.lookup(KEY_A) == CacheMiss()

    @pytest.mark.asyncio
    async def test_unparsable_expiration_is_a_miss(
        self, cache: FileCredentialCache, cache_path: Path
    ) -> None:
        cache_path.write_text(json.dumps({KEY_A: {"expiration": "soon"}}))

        assert await cache.lookup(KEY_A) == CacheMiss()

    @pytest.mark.asyncio
    async def test_unknown_key_is_a_miss(
        self,
        cache: FileCredentialCache,
        make_blob: Callable[..., dict[str, Any]],
    ) -> None:
        await cache.set(KEY_A, make_blob())

        assert await cache.lookup(KEY_B) == CacheMiss()

    @pytest.mark.asyncio
    async def test_corrupt_file_recovery(
        self,
        cache: FileCredentialCache,
        cache_path: Path,
        make_blob: Callable[..., dict[str, Any]],
    ) -> None:
        cache_path.write_text("{not json")

        result = await cache.lookup(KEY_A)
        assert isinstance(result, CacheDegraded)
        assert isinstance(result.cause, ValueError)
        assert await cache.get(KEY_A) is None

        blob = make_blob()
        assert await cache.set(KEY_A, blob) is True
        assert json.loads(cache_path.read_text()) == {KEY_A: blob}

    @pytest.mark.asyncio
    async def test_deeply_nested_file_is_degraded(
        self,
        cache: FileCredentialCache,
        cache_path: Path,
        make_blob: Callable[..., dict[str, Any]],
    ) -> None:
        cache_path.write_text("[" * 200000 + "]" * 200000)

        result = await cache.lookup(KEY_A)
        assert isinstance(result, CacheDegraded)
        assert isinstance(result.cause, RecursionError)
        assert await cache.get(KEY_A) is None

        blob = make_blob()
        assert await cache.set(KEY_A, blob) is True
        assert json.loads(cache_path.read_text()) == {KEY_A: blob}

    @pytest.mark.asyncio
    async def test_out_of_range_expiration_is_a_miss(
        self, cache: FileCredentialCache, cache_path: Path
    ) -> None:
        stale = {KEY_A: {"expiration": "0001-01-01T00:00:30Z"}}
        cache_path.write_text(json.dumps(stale))

        assert await cache.lookup(KEY_A) == CacheMiss()
        assert await cache.get(KEY_A) is None

    @pytest.mark.asyncio
    async def test_non_object_file_is_degraded(
        self,
        cache: FileCredentialCache,
        cache_path: Path,
        make_blob: Callable[..., dict[str, Any]],
    ) -> None:
        cache_path.write_text(json.dumps(["a", "list"]))

        assert isinstance(await cache.lookup(KEY_A), CacheDegraded)

        blob = make_blob()
        await cache.set(KEY_A, blob)
        assert json.loads(cache_path.read_text()) == {KEY_A: blob}

    @pytest.mark.asyncio
    async def test_multi_entry_isolation(
        self,
        cache: FileCredentialCache,
        cache_path: Path,
        make_blob: Callable[..., dict[str, Any]],
    ) -> None:
        blob_b = make_blob(sasURLPrivate="https://azure/private")
        await cache.set(KEY_B, blob_b)

        blob_a = make_blob(accessKeyId="A")
        await cache.set(KEY_A, blob_a)

        assert json.loads(cache_path.read_text()) == {KEY_A: blob_a, KEY_B: blob_b}
        assert await cache.get(KEY_B) == blob_b

    @pytest.mark.asyncio
    async def test_set_overwrites_stale_entry(
        self,
        cache: FileCredentialCache,
        cache_path: Path,
        make_blob: Callable[..., dict[str, Any]],
    ) -> None:
        await cache.set(KEY_A, make_blob(-100, accessKeyId="old"))
        fresh = make_blob(3600, accessKeyId="new")
        await cache.set(KEY_A, fresh)

        assert json.loads(cache_path.read_text()) == {KEY_A: fresh}

    @pytest.mark.asyncio
    async def test_set_creates_parent_directories(
        self,
        temp_dir: str,
        clock: Callable[[], datetime],
        make_blob: Callable[..., dict[str, Any]],
    ) -> None:
        path = Path(temp_dir) / "nested" / "dir" / "cache.json"
        cache = FileCredentialCache(path, clock=clock)

        assert await cache.set(KEY_A, make_blob()) is True
        assert path.exists()

    @pytest.mark.asyncio
    async def test_write_failure_returns_false(
        self,
        temp_dir: str,
        clock: Callable[[], datetime],
        make_blob: Callable[..., dict[str, Any]],
    ) -> None:
        # The cache path is a directory, so it can be neither read nor written
        cache = FileCredentialCache(temp_dir, clock=clock)

        assert isinstance(await cache.lookup(KEY_A), CacheDegraded)
        assert await cache.set(KEY_A, make_blob()) is False

    @pytest.mark.asyncio
    async def test_unserializable_blob_returns_false(
        self, cache: FileCredentialCache, cache_path: Path
    ) -> None:
        assert await cache.set(KEY_A, {"expiration": object()}) is False
        assert not cache_path.exists()

    @pytest.mark.asyncio
    async def test_clear_removes_file(
        self,
        cache: FileCredentialCache,
        cache_path: Path,
        make_blob: Callable[..., dict[str, Any]],
    ) -> None:
        await cache.set(KEY_A, make_blob())

        await cache.clear()
        assert not cache_path.exists()

        # Clearing again is harmless
        await cache.clear()

    @pytest.mark.asyncio
    async def test_uses_real_clock_by_default(self, cache_path: Path) -> None:
        cache = FileCredentialCache(cache_path)
        expiration = datetime.now(tz=UTC) + timedelta(hours=1)
        blob = {"expiration": expiration.isoformat()}

        await cache.set(KEY_A, blob)
        assert await cache.get(KEY_A) == blob

    @pytest.mark.asyncio
    async def test_logs_degraded_cache(
        self, cache: FileCredentialCache, cache_path: Path
    ) -> None:
        cache_path.write_text("garbage")

        with patch("tvm_client.cache.file_cache.logger") as mock_logger:
            await cache.lookup(KEY_A)

        mock_logger.warning.assert_called_once()


class TestNullCredentialCache:
    """Test the cache used when caching is disabled."""

    @pytest.mark.asyncio
    async def test_never_stores(
        self, make_blob: Callable[..., dict[str, Any]]
    ) -> None:
        cache = NullCredentialCache()

        assert cache.enabled is False
        assert await cache.set(KEY_A, make_blob()) is True
        assert await cache.get(KEY_A) is None
        assert await cache.lookup(KEY_A) == CacheMiss()


class TestCreateCredentialCache:
    """Test the cache factory."""

    @pytest.mark.parametrize("cache_file", [None, False, ""])
    def test_falsy_setting_disables_cache(self, cache_file: object) -> None:
        assert isinstance(create_credential_cache(cache_file), NullCredentialCache)

    def test_path_creates_file_cache(self, cache_path: Path) -> None:
        cache = create_credential_cache(str(cache_path))

        assert isinstance(cache, FileCredentialCache)
        assert cache.path == cache_path
        assert cache.enabled is True
