"""Cached asynchronous reads over the in-memory stores with simulated latency"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from campus_dashboard.infrastructure.observability.metrics import (
    query_load_counter,
    query_load_error_counter,
    query_latency_histogram,
)

logger = logging.getLogger(__name__)

Loader = Callable[[], Any]


@dataclass(frozen=True)
class QueryResult:
    """Snapshot of one cache key: data, loading flag and captured error"""

    data: Any = None
    is_loading: bool = False
    error: Optional[Exception] = None

    @property
    def is_ready(self) -> bool:
        return self.data is not None and not self.is_loading and self.error is None


class QueryClient:
    """
    Cache-and-revalidate reads keyed by name.

    - The first fetch of a key loads it; later fetches return the cached result
    - Concurrent fetches of a key share one in-flight load
    - refetch() always loads again
    - Loader exceptions are captured into QueryResult.error, never raised
    """

    def __init__(self, latency: Optional[Callable[[str], float]] = None):
        self._latency = latency or (lambda key: 0.0)
        self._results: Dict[str, QueryResult] = {}
        self._in_flight: Dict[str, asyncio.Task] = {}

    def state(self, key: str) -> QueryResult:
        """Current result for key without triggering a load"""
        if key in self._in_flight:
            previous = self._results.get(key, QueryResult())
            return QueryResult(data=previous.data, is_loading=True, error=previous.error)
        return self._results.get(key, QueryResult())

    async def fetch(self, key: str, loader: Loader) -> QueryResult:
        cached = self._results.get(key)
        if cached is not None and cached.is_ready and key not in self._in_flight:
            return cached
        return await self._load(key, loader)

    async def refetch(self, key: str, loader: Loader) -> QueryResult:
        return await self._load(key, loader)

    async def fetch_all(self, loaders: Mapping[str, Loader]) -> Dict[str, QueryResult]:
        """Fetch several keys concurrently"""
        keys = list(loaders)
        results = await asyncio.gather(*(self.fetch(key, loaders[key]) for key in keys))
        return dict(zip(keys, results))

    def is_ready(self, keys: Iterable[str]) -> bool:
        """True only when every key has loaded data"""
        return all(self.state(key).is_ready for key in keys)

    def invalidate(self, key: str) -> None:
        self._results.pop(key, None)

    async def _load(self, key: str, loader: Loader) -> QueryResult:
        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._run(key, loader))
            self._in_flight[key] = task

            def _clear(done: asyncio.Task, key: str = key) -> None:
                if self._in_flight.get(key) is done:
                    del self._in_flight[key]

            task.add_done_callback(_clear)
        # Shield so one cancelled caller does not cancel the load for the others
        return await asyncio.shield(task)

    async def _run(self, key: str, loader: Loader) -> QueryResult:
        previous = self._results.get(key, QueryResult())
        start_time = time.perf_counter()
        try:
            delay = self._latency(key)
            if delay > 0:
                await asyncio.sleep(delay)
            data = loader()
        except Exception as e:
            query_load_error_counter.labels(key=key).inc()
            logger.error(f"Query load failed: {e}", extra={"query_key": key})
            result = QueryResult(data=previous.data, is_loading=False, error=e)
        else:
            result = QueryResult(data=data, is_loading=False, error=None)

        duration = time.perf_counter() - start_time
        query_load_counter.labels(key=key).inc()
        query_latency_histogram.labels(key=key).observe(duration)
        if result.error is None:
            logger.debug("Query loaded", extra={"query_key": key, "duration_ms": duration * 1000})

        self._results[key] = result
        return result
