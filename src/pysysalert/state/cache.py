"""Time-to-live cache around one domain's probe pipeline.

Each domain owns exactly one :class:`DomainCache`.  The cache is the
boundary where probe and parse failures stop: they are logged and
converted into "serve the last good value" or "seed a fallback", never
raised to the collector.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from pysysalert.exceptions import ParseMismatchError, ProbeError, SysAlertConfigError

_logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """Last-known-good value and the monotonic time it was stored.

    ``fallback`` marks a seeded estimate rather than a probed value.
    """

    value: T
    captured_at: float
    ttl: float
    fallback: bool = False

    def age(self, now: float) -> float:
        return now - self.captured_at

    def is_fresh(self, now: float) -> bool:
        return self.age(now) < self.ttl


class DomainCache(Generic[T]):
    """Serve a domain record from cache, refreshing at most once per ttl.

    Parameters
    ----------
    name : str
        Domain name, used for logging.
    ttl : float
        Seconds a stored value is served without calling *refresh*.
    refresh : callable
        Coroutine function running probe → extract → reconcile.  May
        raise :class:`ProbeError` or :class:`ParseMismatchError`.
    fallback : callable
        Builds a conservative value when no entry exists yet and the
        refresh failed.
    clock : callable
        Monotonic seconds; injectable so tests can step time.
    """

    def __init__(
        self,
        name: str,
        *,
        ttl: float,
        refresh: Callable[[], Awaitable[T]],
        fallback: Callable[[], T],
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl < 0:
            raise SysAlertConfigError(f"{name}: ttl must be >= 0")
        self.name = name
        self._ttl = ttl
        self._refresh = refresh
        self._fallback = fallback
        self._clock = clock
        self._entry: CacheEntry[T] | None = None

    @property
    def entry(self) -> CacheEntry[T] | None:
        return self._entry

    def invalidate(self) -> None:
        """Force the next :meth:`get_or_refresh` to probe."""
        self._entry = None

    async def get_or_refresh(self) -> T:
        entry = self._entry
        if entry is not None and entry.is_fresh(self._clock()):
            return entry.value

        try:
            value = await self._refresh()
        except (ProbeError, ParseMismatchError) as exc:
            if entry is not None and not entry.fallback:
                _logger.debug("%s refresh failed (%s); serving previous value", self.name, exc)
                return entry.value
            if entry is None:
                _logger.warning("%s refresh failed (%s); seeding fallback", self.name, exc)
            else:
                _logger.debug("%s refresh failed (%s); re-seeding fallback", self.name, exc)
            return self._seed_fallback()

        self._entry = CacheEntry(value=value, captured_at=self._clock(), ttl=self._ttl)
        return value

    def _seed_fallback(self) -> T:
        # An estimate is rebuilt from current local readings rather than
        # served stale; a probed value is never replaced by one.
        seeded = CacheEntry(value=self._fallback(), captured_at=self._clock(), ttl=self._ttl, fallback=True)
        self._entry = seeded
        return seeded.value
