"""
In-process query cache for data API reads.

Entries are keyed by tuples whose first element names the query family
(``"properties"``, ``"myProperties"``, ``"property"``, ``"myReports"``,
``"userDetails"``). Each family has a stale time; invalidating a key
prefix marks matching entries stale so the next read refetches.

Dependencies: time (stdlib)
System role: Read cache shared by services and trackers
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Hashable

logger = logging.getLogger(__name__)

QueryKey = tuple[Hashable, ...]

DEFAULT_STALE_TIMES: dict[str, float] = {
    "properties": 3 * 60,
    "myProperties": 3 * 60,
    "property": 5 * 60,
    "myReports": 5 * 60,
    "userDetails": 5 * 60,
}


@dataclass
class _Entry:
    value: Any
    fetched_at: float
    stale: bool = False


class QueryCache:
    """Stale-time cache with prefix invalidation."""

    def __init__(
        self,
        stale_times: dict[str, float] | None = None,
        default_stale_time: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._stale_times = dict(DEFAULT_STALE_TIMES if stale_times is None else stale_times)
        self._default_stale_time = default_stale_time
        self._clock = clock
        self._entries: dict[QueryKey, _Entry] = {}

    def _is_fresh(self, key: QueryKey, entry: _Entry) -> bool:
        if entry.stale:
            return False
        stale_time = self._stale_times.get(str(key[0]), self._default_stale_time)
        return self._clock() - entry.fetched_at < stale_time

    def get(self, key: QueryKey) -> Any | None:
        """Fresh cached value for ``key`` or None."""
        entry = self._entries.get(key)
        if entry is None or not self._is_fresh(key, entry):
            return None
        return entry.value

    def set(self, key: QueryKey, value: Any) -> None:
        self._entries[key] = _Entry(value=value, fetched_at=self._clock())

    async def get_or_fetch(self, key: QueryKey, fetcher: Callable[[], Awaitable[Any]]) -> Any:
        """Return the fresh cached value or fetch, store and return a new one."""
        cached = self.get(key)
        if cached is not None:
            return cached
        value = await fetcher()
        self.set(key, value)
        return value

    def is_stale(self, key: QueryKey) -> bool:
        """True when ``key`` is missing, expired or invalidated."""
        entry = self._entries.get(key)
        return entry is None or not self._is_fresh(key, entry)

    def invalidate(self, *prefix: Hashable) -> int:
        """
        Mark every entry whose key starts with ``prefix`` stale.

        Returns:
            int: Number of entries marked
        """
        count = 0
        for key, entry in self._entries.items():
            if key[: len(prefix)] == prefix and not entry.stale:
                entry.stale = True
                count += 1
        logger.debug(f"{__name__}:invalidate - prefix={prefix} marked={count}")
        return count

    def clear(self) -> None:
        self._entries.clear()
