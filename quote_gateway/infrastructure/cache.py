"""Process-wide memo caches for premium calculations and quote lookups"""

import threading
from datetime import date
from typing import Any, Callable, Dict, Hashable, Optional

from quote_gateway.domain.models import QuoteRequest
from quote_gateway.infrastructure.observability.metrics import cache_hit_counter, cache_miss_counter

_MISSING = object()


class MemoCache:
    """
    Map-backed cache shared across request threads.

    No in-flight coordination: two threads missing on the same key both run
    compute() and the last put() wins. Optional max_entries evicts the oldest
    insertion first; writes hold a lock so the bound is never exceeded.
    """

    def __init__(self, name: str, max_entries: Optional[int] = None):
        self.name = name
        self.max_entries = max_entries
        self._entries: Dict[Hashable, Any] = {}
        self._write_lock = threading.Lock()

    def get(self, key: Hashable) -> Optional[Any]:
        value = self._entries.get(key, _MISSING)
        if value is _MISSING:
            cache_miss_counter.labels(cache=self.name).inc()
            return None
        cache_hit_counter.labels(cache=self.name).inc()
        return value

    def put(self, key: Hashable, value: Any) -> None:
        if value is None:
            return  # Null results are never cached
        with self._write_lock:
            self._entries[key] = value
            if self.max_entries is not None:
                while len(self._entries) > self.max_entries:
                    del self._entries[next(iter(self._entries))]

    def get_or_compute(self, key: Hashable, compute: Callable[[], Any]) -> Any:
        cached = self.get(key)
        if cached is not None:
            return cached
        value = compute()
        self.put(key, value)
        return value

    def clear(self) -> None:
        with self._write_lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries


def legacy_fingerprint(request: QuoteRequest, as_of: date) -> str:
    """
    VIN, driver count and coverage amount only.

    Requests that differ only in deductible or driver details collide on this
    key and share one cached calculation. The pricing date is ignored too, so
    entries outlive birthdays and model-year rollovers.
    """
    return f"{request.vehicle.vin}-{len(request.drivers)}-{request.coverage_amount}"


def strict_fingerprint(request: QuoteRequest, as_of: date) -> str:
    """
    Every field that feeds the risk or discount calculation, plus the pricing date.

    Driver and vehicle ages derive from as_of, so an entry is only reused on
    the day it was computed.
    """
    drivers = "|".join(
        f"{d.date_of_birth.isoformat()}:{d.years_of_experience}:"
        f"{int(bool(d.safe_driver_discount))}{int(bool(d.multi_policy_discount))}"
        for d in request.drivers
    )
    return (
        f"{as_of.isoformat()}-{request.vehicle.vin}-{request.vehicle.year}-"
        f"{request.coverage_amount}-{request.deductible}-{drivers}"
    )


FINGERPRINTS: Dict[str, Callable[[QuoteRequest, date], str]] = {
    "legacy": legacy_fingerprint,
    "strict": strict_fingerprint,
}
