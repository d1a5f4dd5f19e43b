"""Read-through cache with per-entry TTL and single-flight loading.

Concurrent misses for one key share a single loader call. A loader must not
ask the cache for the key it is loading, directly or through other loaders;
that raises ReentrantLoadError instead of deadlocking. Cycles that span
independent callers (A waits on B while B waits on A) are caught the same
way through the wait-for graph between keys.
"""

from __future__ import annotations

import asyncio
import contextvars
import enum
import inspect
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Union

from catalog.services.errors import InvalidConfigurationError, ReentrantLoadError
from catalog.services.metrics import CacheMetrics, NullMetrics

log = logging.getLogger(__name__)

Loader = Callable[[str], Union[Awaitable[Any], Any]]

# Keys whose loaders are running in the current task chain, outermost first.
_loading_chain: contextvars.ContextVar[tuple[str, ...]] = contextvars.ContextVar(
    "catalog_loading_chain", default=()
)


class EntryState(enum.Enum):
    LOADING = "loading"
    READY = "ready"


@dataclass(frozen=True)
class CacheEntry:
    key: str
    state: EntryState
    value: Any = None
    expires_at: float = 0.0
    load: asyncio.Task | None = None


def _check_ttl(ttl: float | None) -> float:
    if ttl is None or ttl <= 0:
        raise InvalidConfigurationError(f"ttl must be positive, got {ttl!r}")
    return float(ttl)


def _retrieve_exception(task: asyncio.Task) -> None:
    # A failed load nobody waited on would otherwise warn at garbage collection.
    if not task.cancelled():
        task.exception()


class ReadThroughCache:
    """In-memory cache that loads missing keys through a loader callable.

    Args:
        ttl: Default time-to-live in seconds. Must be positive.
        loader: Default loader, called as ``loader(key)``. May be a plain
            function or return an awaitable. Blocking loaders should wrap
            their work in ``asyncio.to_thread`` so other keys keep moving.
        metrics: Collector notified of hits, misses, waits and load errors.
        clock: Monotonic clock in seconds, ``time.monotonic`` by default.
    """

    def __init__(
        self,
        ttl: float,
        loader: Loader | None = None,
        metrics: CacheMetrics | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._ttl = _check_ttl(ttl)
        self._loader = loader
        self._metrics = metrics or NullMetrics()
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        # loading key -> keys its loader is awaiting, with counts
        self._waits_on: dict[str, dict[str, int]] = {}
        self._lock = threading.Lock()

    @property
    def ttl(self) -> float:
        return self._ttl

    @property
    def metrics(self) -> CacheMetrics:
        return self._metrics

    @property
    def in_flight(self) -> int:
        with self._lock:
            return sum(
                1 for e in self._entries.values() if e.state is EntryState.LOADING
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _now(self) -> float:
        return self._clock() if self._clock is not None else time.monotonic()

    async def get(
        self,
        key: str,
        loader: Loader | None = None,
        ttl: float | None = None,
    ) -> Any:
        """Return the value for key, loading it if absent or expired.

        All callers that miss while a load for key is running receive that
        load's result or exception. Failures are never cached. Cancelling a
        caller does not cancel the load.
        """
        if not key:
            raise InvalidConfigurationError("cache key must be a non-empty string")
        ttl = self._ttl if ttl is None else _check_ttl(ttl)
        if loader is None:
            loader = self._loader
        if loader is None:
            raise InvalidConfigurationError(f"no loader for key {key!r}")
        chain = _loading_chain.get()
        if key in chain:
            raise ReentrantLoadError(key)

        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry.state is EntryState.READY:
                if self._now() < entry.expires_at:
                    outcome = "hit"
                else:
                    entry = None
            if entry is None:
                task = asyncio.create_task(self._load(key, loader, ttl))
                task.add_done_callback(_retrieve_exception)
                entry = CacheEntry(key=key, state=EntryState.LOADING, load=task)
                self._entries[key] = entry
                outcome = "miss"
            elif entry.state is EntryState.LOADING:
                if chain and self._reaches(key, set(chain)):
                    raise ReentrantLoadError(key)
                outcome = "wait"
            if outcome != "hit" and chain:
                self._add_wait(chain[-1], key)

        if outcome == "hit":
            self._metrics.on_hit(key)
            return entry.value
        if outcome == "miss":
            self._metrics.on_miss(key)
            log.debug("Cache miss for %s, loading", key)
        else:
            self._metrics.on_wait(key)
        try:
            return await asyncio.shield(entry.load)
        finally:
            if chain:
                with self._lock:
                    self._drop_wait(chain[-1], key)

    async def _load(self, key: str, loader: Loader, ttl: float) -> Any:
        _loading_chain.set(_loading_chain.get() + (key,))
        task = asyncio.current_task()
        stored = False
        try:
            value = loader(key)
            if inspect.isawaitable(value):
                value = await value
        except Exception as exc:
            self._metrics.on_load_error(key, exc)
            log.warning("Load failed for %s: %r", key, exc)
            raise
        else:
            with self._lock:
                if self._owns(key, task):
                    self._entries[key] = CacheEntry(
                        key=key,
                        state=EntryState.READY,
                        value=value,
                        expires_at=self._now() + ttl,
                    )
                    stored = True
            if not stored:
                log.debug("Discarding load for %s, invalidated while in flight", key)
            return value
        finally:
            if not stored:
                with self._lock:
                    if self._owns(key, task):
                        del self._entries[key]

    def _owns(self, key: str, task: asyncio.Task | None) -> bool:
        entry = self._entries.get(key)
        return entry is not None and entry.load is task

    # Wait-for graph helpers; callers hold self._lock.

    def _add_wait(self, waiter: str, key: str) -> None:
        edges = self._waits_on.setdefault(waiter, {})
        edges[key] = edges.get(key, 0) + 1

    def _drop_wait(self, waiter: str, key: str) -> None:
        edges = self._waits_on.get(waiter)
        if edges is None:
            return
        edges[key] -= 1
        if edges[key] == 0:
            del edges[key]
        if not edges:
            del self._waits_on[waiter]

    def _reaches(self, start: str, targets: set[str]) -> bool:
        """Whether the load of start is waiting, through any chain, on targets."""
        seen: set[str] = set()
        stack = [start]
        while stack:
            node = stack.pop()
            if node in targets:
                return True
            if node in seen:
                continue
            seen.add(node)
            stack.extend(self._waits_on.get(node, ()))
        return False

    def invalidate(self, key: str) -> None:
        """Drop key, including any load in flight for it."""
        with self._lock:
            self._entries.pop(key, None)

    def invalidate_all(self) -> None:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        log.info("Cleared %d cache entries", count)
