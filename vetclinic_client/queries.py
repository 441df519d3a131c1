from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Hashable, Iterable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

QueryKey = tuple[Hashable, ...]

# Cache key roots, one per kind of server data a page reads.
USER = "user"
PROFILE = "profile"
CLIENTS = "clients"
CLIENT = "client"
ANIMALS = "animals"
ANIMAL = "animal"
BATCHES = "batches"
BATCH = "batch"
SPECIES = "species"
BREEDS = "breeds"
APPOINTMENTS = "appointments"
APPOINTMENT = "appointment"
SERVICES = "services"
INVOICES = "invoices"
INVOICE = "invoice"
DASHBOARD = "dashboard"
ALERTS = "alerts"
NOTIFICATIONS = "notifications"
SUBSCRIPTION = "subscription"
PLANS = "plans"
VACCINATIONS = "vaccinations"
CAMPAIGNS = "campaigns"
REPRODUCTIVE_STATS = "reproductive_stats"
SANITARY_STATS = "sanitary_stats"
FINANCIAL_STATS = "financial_stats"
PREGNANT_ANIMALS = "pregnant_animals"
RECEIVABLES = "receivables"
PROPERTIES = "properties"
TEAM = "team"


@dataclass
class _Entry:
    value: Any
    fetched_at: float


def _as_key(key: Hashable | QueryKey) -> QueryKey:
    if isinstance(key, tuple):
        return key
    return (key,)


class QueryCache:
    """Keyed cache for read requests with retry and prefix invalidation.

    A read is served from the cache while younger than ``stale_seconds``.
    Failed loads are retried ``retry_attempts`` times before the last error
    is raised; nothing is cached for a failed load. A load that was in flight
    when its key was invalidated returns its result to the caller but does
    not cache it.
    """

    def __init__(
        self,
        stale_seconds: float = 300,
        retry_attempts: int = 2,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._stale_seconds = stale_seconds
        self._retry_attempts = retry_attempts
        self._clock = clock
        self._entries: dict[QueryKey, _Entry] = {}
        # bumped by every invalidate/clear; a load started before a bump is not stored
        self._epoch = 0
        self._invalidated_at: dict[QueryKey, int] = {}
        self._cleared_at = 0
        self._lock = threading.Lock()

    def fetch(self, key: Hashable | QueryKey, loader: Callable[[], T]) -> T:
        key = _as_key(key)
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and now - entry.fetched_at < self._stale_seconds:
                return entry.value
            started = self._epoch

        attempts = self._retry_attempts + 1
        for attempt in range(1, attempts + 1):
            try:
                value = loader()
                break
            except Exception as exc:
                if attempt >= attempts:
                    raise
                logger.debug("Query %r failed (attempt %d/%d): %s", key, attempt, attempts, exc)

        with self._lock:
            if self._superseded(key, started):
                logger.debug("Dropping result for %r, invalidated while loading", key)
            else:
                self._entries[key] = _Entry(value=value, fetched_at=self._clock())
        return value

    def peek(self, key: Hashable | QueryKey) -> Any:
        with self._lock:
            entry = self._entries.get(_as_key(key))
        return entry.value if entry is not None else None

    def invalidate(self, *prefixes: Hashable | QueryKey) -> int:
        normalized = [_as_key(prefix) for prefix in prefixes]
        with self._lock:
            self._epoch += 1
            for prefix in normalized:
                self._invalidated_at[prefix] = self._epoch
            doomed = [
                key
                for key in self._entries
                if any(key[: len(prefix)] == prefix for prefix in normalized)
            ]
            for key in doomed:
                del self._entries[key]
        return len(doomed)

    def mutate(
        self,
        call: Callable[[], T],
        invalidates: Iterable[Hashable | QueryKey] = (),
    ) -> T:
        result = call()
        self.invalidate(*invalidates)
        return result

    def clear(self) -> None:
        with self._lock:
            self._epoch += 1
            self._cleared_at = self._epoch
            self._invalidated_at.clear()
            self._entries.clear()

    def _superseded(self, key: QueryKey, started: int) -> bool:
        if self._cleared_at > started:
            return True
        return any(
            self._invalidated_at.get(key[:size], 0) > started
            for size in range(len(key) + 1)
        )
