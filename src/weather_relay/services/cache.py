"""TTL cache with bounded capacity and single-flight loading."""

import asyncio
import logging
import time
from collections import OrderedDict
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from weather_relay.domain.weather import WeatherData

_logger = logging.getLogger(__name__)

Loader = Callable[[str], Awaitable[WeatherData]]
Clock = Callable[[], float]


@dataclass(frozen=True)
class _CacheEntry:
    key: str
    value: WeatherData
    inserted_at: float
    expires_at: float


@dataclass(frozen=True)
class CacheStats:
    """Counters describing cache activity."""

    hits: int
    misses: int
    loads: int
    load_failures: int
    evictions: int
    size: int


class WeatherCache:
    """Weather cache keyed by city.

    Entries expire ``ttl_seconds`` after insertion. When full, the oldest
    inserted entry is evicted. Concurrent misses for the same city share one
    call to ``loader``; failed loads are never cached.
    """

    def __init__(
        self,
        capacity: int,
        ttl_seconds: float,
        loader: Loader,
        clock: Clock = time.monotonic,
    ) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.capacity = capacity
        self.ttl_seconds = ttl_seconds
        self._loader = loader
        self._clock = clock
        self._entries: OrderedDict[str, _CacheEntry] = OrderedDict()
        self._in_flight: dict[str, asyncio.Future[WeatherData]] = {}
        self._tasks: set[asyncio.Task[None]] = set()
        self._lock = asyncio.Lock()
        self._hits = 0
        self._misses = 0
        self._loads = 0
        self._load_failures = 0
        self._evictions = 0

    @property
    def size(self) -> int:
        """Number of resident entries, expired ones included until swept."""
        return len(self._entries)

    async def get(self, city: str) -> WeatherData:
        """Return cached weather for a city, loading it on a miss.

        Raises the loader's ``FetchError`` when the load fails.
        """
        async with self._lock:
            entry = self._valid_entry(city)
            if entry is not None:
                self._hits += 1
                return entry.value
            self._misses += 1
            future = self._in_flight.get(city)
            if future is None:
                future = asyncio.get_running_loop().create_future()
                self._in_flight[city] = future
                task = asyncio.create_task(self._load(city, future))
                self._tasks.add(task)
                task.add_done_callback(self._tasks.discard)
        return await asyncio.shield(future)

    async def set(self, city: str, value: WeatherData) -> None:
        """Insert or replace the entry for a city."""
        async with self._lock:
            self._insert(city, value)

    async def invalidate(self, city: str) -> bool:
        """Drop the entry for a city; returns whether one was present."""
        async with self._lock:
            return self._entries.pop(city, None) is not None

    async def invalidate_all(self) -> None:
        """Drop every entry. In-flight loads still complete and are cached."""
        async with self._lock:
            self._entries.clear()

    async def purge_expired(self) -> int:
        """Remove expired entries and return how many were removed."""
        async with self._lock:
            now = self._clock()
            expired = [
                key for key, entry in self._entries.items() if now >= entry.expires_at
            ]
            for key in expired:
                del self._entries[key]
            return len(expired)

    def contains(self, city: str) -> bool:
        """Return whether a valid entry exists, without loading."""
        return self._valid_entry(city) is not None

    def stats(self) -> CacheStats:
        """Return a snapshot of cache counters."""
        return CacheStats(
            hits=self._hits,
            misses=self._misses,
            loads=self._loads,
            load_failures=self._load_failures,
            evictions=self._evictions,
            size=len(self._entries),
        )

    def _valid_entry(self, city: str) -> _CacheEntry | None:
        entry = self._entries.get(city)
        if entry is None or self._clock() < entry.expires_at:
            return entry
        return None

    def _insert(self, city: str, value: WeatherData) -> None:
        now = self._clock()
        self._entries.pop(city, None)
        while len(self._entries) >= self.capacity:
            evicted, _ = self._entries.popitem(last=False)
            self._evictions += 1
            _logger.debug("Evicted cached weather for %s", evicted)
        self._entries[city] = _CacheEntry(
            key=city,
            value=value,
            inserted_at=now,
            expires_at=now + self.ttl_seconds,
        )

    async def _load(self, city: str, future: "asyncio.Future[WeatherData]") -> None:
        self._loads += 1
        try:
            value = await self._loader(city)
        except asyncio.CancelledError:
            async with self._lock:
                self._in_flight.pop(city, None)
            future.cancel()
            raise
        except Exception as exc:
            async with self._lock:
                self._in_flight.pop(city, None)
                self._load_failures += 1
            _logger.info("Weather load for %s failed: %r", city, exc)
            future.set_exception(exc)
            # Mark retrieved so a load nobody awaits does not warn.
            future.exception()
            return
        async with self._lock:
            self._insert(city, value)
            self._in_flight.pop(city, None)
        future.set_result(value)
