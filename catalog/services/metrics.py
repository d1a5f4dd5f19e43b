"""Cache hit/miss counters passed into the cache at construction."""

from __future__ import annotations

import threading
from typing import Protocol


class CacheMetrics(Protocol):
    """Callbacks the cache invokes on each lookup outcome."""

    def on_hit(self, key: str) -> None: ...

    def on_miss(self, key: str) -> None: ...

    def on_wait(self, key: str) -> None: ...

    def on_load_error(self, key: str, exc: BaseException) -> None: ...


class NullMetrics:
    """Discards every event."""

    def on_hit(self, key: str) -> None:
        pass

    def on_miss(self, key: str) -> None:
        pass

    def on_wait(self, key: str) -> None:
        pass

    def on_load_error(self, key: str, exc: BaseException) -> None:
        pass


class CacheStats:
    """Counts cache outcomes for display and tests.

    A miss is a lookup that started a backing load; a wait is a lookup that
    joined a load already in flight.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0
        self.waits = 0
        self.load_errors = 0

    def on_hit(self, key: str) -> None:
        with self._lock:
            self.hits += 1

    def on_miss(self, key: str) -> None:
        with self._lock:
            self.misses += 1

    def on_wait(self, key: str) -> None:
        with self._lock:
            self.waits += 1

    def on_load_error(self, key: str, exc: BaseException) -> None:
        with self._lock:
            self.load_errors += 1

    def reset(self) -> None:
        with self._lock:
            self.hits = self.misses = self.waits = self.load_errors = 0

    @property
    def lookups(self) -> int:
        return self.hits + self.misses + self.waits

    @property
    def hit_ratio(self) -> float | None:
        """Share of lookups that did not start a load. None before any lookup."""
        if self.lookups == 0:
            return None
        return (self.hits + self.waits) / self.lookups

    @property
    def status_text(self) -> str:
        ratio = self.hit_ratio
        if ratio is None:
            return "Hit ratio: --"
        return f"Hit ratio: {ratio * 100:.1f}%"

    @property
    def summary_text(self) -> str:
        return (
            f"hits {self.hits}  misses {self.misses}  "
            f"waits {self.waits}  errors {self.load_errors}"
        )
