"""Testes do cache de conversas em memória."""

from __future__ import annotations

import asyncio

import pytest

from app.infra.stores.conversation_cache import MemoryConversationCache
from config.settings import DEFAULT_CACHE_SWEEP_SECONDS


class TestMemoryConversationCache:
    def test_get_returns_none_on_miss(self) -> None:
        cache = MemoryConversationCache()
        assert cache.get("+5215512345678") is None

    def test_put_then_get(self) -> None:
        cache = MemoryConversationCache()
        cache.put("+5215512345678", 42)
        assert cache.get("+5215512345678") == 42
        assert len(cache) == 1

    def test_put_overwrites_previous_conversation(self) -> None:
        cache = MemoryConversationCache()
        cache.put("+5215512345678", 42)
        cache.put("+5215512345678", 43)
        assert cache.get("+5215512345678") == 43

    def test_clear_drops_everything_and_returns_count(self) -> None:
        cache = MemoryConversationCache()
        cache.put("+5215512345678", 1)
        cache.put("+5215599999999", 2)
        assert cache.clear() == 2
        assert len(cache) == 0
        assert cache.get("+5215512345678") is None

    def test_default_interval_is_thirty_minutes(self) -> None:
        cache = MemoryConversationCache()
        assert cache.sweep_interval_seconds == DEFAULT_CACHE_SWEEP_SECONDS == 1800

    def test_invalid_interval_raises(self) -> None:
        with pytest.raises(ValueError, match="sweep_interval_seconds"):
            MemoryConversationCache(sweep_interval_seconds=0)


class TestSweepLifecycle:
    @pytest.mark.asyncio
    async def test_sweep_task_clears_cache_periodically(self) -> None:
        cache = MemoryConversationCache(sweep_interval_seconds=0.01)
        cache.put("+5215512345678", 42)
        await cache.start()
        try:
            await asyncio.sleep(0.05)
            assert cache.get("+5215512345678") is None
        finally:
            await cache.stop()

    @pytest.mark.asyncio
    async def test_start_and_stop_are_idempotent(self) -> None:
        cache = MemoryConversationCache(sweep_interval_seconds=60)
        await cache.start()
        await cache.start()
        assert cache.is_running
        await cache.stop()
        await cache.stop()
        assert not cache.is_running

    @pytest.mark.asyncio
    async def test_stop_keeps_entries(self) -> None:
        cache = MemoryConversationCache(sweep_interval_seconds=60)
        await cache.start()
        cache.put("+5215512345678", 42)
        await cache.stop()
        assert cache.get("+5215512345678") == 42
