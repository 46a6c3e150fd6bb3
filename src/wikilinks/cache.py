"""In-memory memoizing key/value store.

One :class:`CacheManager` lives for a single run. There is no eviction; the
cache only ever holds the links of the documents processed in that run.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Callable, Hashable
from functools import partial
from typing import Any


class CacheManager:
    def __init__(self) -> None:
        self._entries: dict[Hashable, Any] = {}
        self._pending: dict[Hashable, asyncio.Future[Any]] = {}

    def __contains__(self, key: Hashable) -> bool:
        return self.has(key)

    def __len__(self) -> int:
        return len(self._entries)

    def set(self, key: Hashable, value: Any) -> Any:
        self._entries[key] = value
        return value

    def get(self, key: Hashable, default: Any = None) -> Any:
        return self._entries.get(key, default)

    def has(self, key: Hashable) -> bool:
        return key in self._entries

    def remember(self, key: Hashable, compute: Callable[[], Any]) -> Any:
        """Return the cached value for *key*, computing and storing it on a miss.

        When *compute* returns an awaitable, the awaitable is scheduled on the
        running loop and the resulting future is returned instead. Callers
        asking for the same key while it is still pending get that same future,
        and the settled value is stored once it completes. Failed computations
        are not cached.
        """
        if key in self._entries:
            return self._entries[key]
        if key in self._pending:
            return self._pending[key]

        result = compute()
        if inspect.isawaitable(result):
            future = asyncio.ensure_future(result)
            self._pending[key] = future
            future.add_done_callback(partial(self._settle, key))
            return future

        return self.set(key, result)

    def clear(self) -> None:
        self._entries.clear()
        self._pending.clear()

    def forget(self, key: Hashable) -> bool:
        self._pending.pop(key, None)
        return self._entries.pop(key, _MISSING) is not _MISSING

    def _settle(self, key: Hashable, future: asyncio.Future[Any]) -> None:
        if self._pending.get(key) is not future:
            return
        del self._pending[key]
        if future.cancelled() or future.exception() is not None:
            return
        self.set(key, future.result())


_MISSING = object()
