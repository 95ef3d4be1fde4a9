"""Process-local memoization cache and velocity tracker.

Both are bounded: the memo cache evicts least-recently-used entries once
``max_entries`` is reached (and optionally expires them after ``ttl_seconds``);
the velocity tracker keeps at most ``max_events`` timestamps per key and at
most ``max_keys`` keys. Engines receive instances through their constructors,
so tests can inject fresh ones with a fake clock.
"""

import logging
import threading
import time
from collections import OrderedDict, deque
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)

Clock = Callable[[], float]

_MISSING = object()


@dataclass
class MemoCacheEntry:
    key: str
    value: Any
    inserted_at: float


class MemoCache:
    """Bounded LRU key -> value store with optional expiry."""

    def __init__(
        self,
        max_entries: int = 1024,
        ttl_seconds: float | None = None,
        clock: Clock = time.monotonic,
    ) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be positive")
        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds or None
        self._clock = clock
        self._entries: OrderedDict[str, MemoCacheEntry] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return default
            if self._expired(entry):
                del self._entries[key]
                return default
            self._entries.move_to_end(key)
            return entry.value

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._entries[key] = MemoCacheEntry(key, value, self._clock())
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Memo cache evicted %s", evicted)

    def __contains__(self, key: str) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def _expired(self, entry: MemoCacheEntry) -> bool:
        if self.ttl_seconds is None:
            return False
        return self._clock() - entry.inserted_at >= self.ttl_seconds


class VelocityTracker:
    """Per-identifier sliding record of recent attempt timestamps."""

    def __init__(
        self,
        window_seconds: float = 3600.0,
        max_events: int = 10,
        max_keys: int = 10_000,
        clock: Clock = time.time,
    ) -> None:
        self.window_seconds = window_seconds
        self.max_events = max_events
        self.max_keys = max_keys
        self._clock = clock
        self._windows: OrderedDict[str, deque[float]] = OrderedDict()
        self._lock = threading.Lock()

    def count_recent(self, key: str, now: float | None = None) -> int:
        """Number of recorded attempts for ``key`` inside the trailing window."""
        now = self._clock() if now is None else now
        with self._lock:
            window = self._windows.get(key)
            if not window:
                return 0
            return sum(1 for ts in window if now - ts < self.window_seconds)

    def record(self, key: str, now: float | None = None) -> None:
        now = self._clock() if now is None else now
        with self._lock:
            window = self._windows.get(key)
            if window is None:
                window = deque(maxlen=self.max_events)
                self._windows[key] = window
            window.append(now)
            self._windows.move_to_end(key)
            while len(self._windows) > self.max_keys:
                self._windows.popitem(last=False)

    def hit(self, key: str) -> int:
        """Count prior attempts in the window, then record this one."""
        now = self._clock()
        recent = self.count_recent(key, now)
        self.record(key, now)
        return recent

    def window(self, key: str) -> list[float]:
        with self._lock:
            return list(self._windows.get(key, ()))

    def __len__(self) -> int:
        return len(self._windows)

    def clear(self) -> None:
        with self._lock:
            self._windows.clear()
