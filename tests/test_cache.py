"""Tests for the memoizing CacheManager."""

from __future__ import annotations

import asyncio

import pytest

from wikilinks.cache import CacheManager


class TestSyncOperations:
    def test_set_returns_value_and_get_reads_it(self) -> None:
        cache = CacheManager()
        assert cache.set("a", 1) == 1
        assert cache.get("a") == 1
        assert cache.has("a")
        assert "a" in cache
        assert len(cache) == 1

    def test_get_missing_returns_default(self) -> None:
        cache = CacheManager()
        assert cache.get("missing") is None
        assert cache.get("missing", "fallback") == "fallback"
        assert not cache.has("missing")

    def test_remember_computes_once(self) -> None:
        cache = CacheManager()
        calls: list[int] = []

        def compute() -> str:
            calls.append(1)
            return "value"

        assert cache.remember("key", compute) == "value"
        assert cache.remember("key", compute) == "value"
        assert len(calls) == 1

    def test_remember_caches_falsy_values(self) -> None:
        cache = CacheManager()
        calls: list[int] = []

        def compute() -> None:
            calls.append(1)

        cache.remember("key", compute)
        cache.remember("key", compute)
        assert len(calls) == 1
        assert cache.has("key")

    def test_clear_removes_everything(self) -> None:
        cache = CacheManager()
        cache.set("a", 1)
        cache.set("b", 2)
        cache.clear()
        assert len(cache) == 0
        assert not cache.has("a")

    def test_forget_reports_whether_key_existed(self) -> None:
        cache = CacheManager()
        cache.set("a", None)
        assert cache.forget("a") is True
        assert cache.forget("a") is False


class TestAsyncRemember:
    @pytest.mark.asyncio
    async def test_async_value_is_cached_after_settling(self) -> None:
        cache = CacheManager()

        async def compute() -> str:
            return "resolved"

        assert await cache.remember("key", compute) == "resolved"
        assert cache.get("key") == "resolved"
        assert cache.remember("key", compute) == "resolved"

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_one_computation(self) -> None:
        cache = CacheManager()
        calls: list[int] = []
        release = asyncio.Event()

        async def compute() -> int:
            calls.append(1)
            await release.wait()
            return 42

        first = cache.remember("key", compute)
        second = cache.remember("key", compute)
        assert first is second
        assert not cache.has("key")

        release.set()
        results = await asyncio.gather(first, second)

        assert results == [42, 42]
        assert len(calls) == 1
        assert cache.get("key") == 42

    @pytest.mark.asyncio
    async def test_failed_computation_is_not_cached(self) -> None:
        cache = CacheManager()

        async def fail() -> int:
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            await cache.remember("key", fail)
        assert not cache.has("key")

        async def succeed() -> int:
            return 1

        assert await cache.remember("key", succeed) == 1
