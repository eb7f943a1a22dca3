# salonbook/services/booking/booking_lock.py
"""
Locks that serialize booking admission per (vendor, date).

The overlap count and the insert must not interleave with another booking
for the same vendor and day. The database row lock on the vendor covers
PostgreSQL; these locks cover stores without it and multi-worker setups.
"""
import logging
import threading
from contextlib import contextmanager
from datetime import date
from functools import lru_cache
from typing import Dict, Optional, Tuple

from redis.exceptions import LockNotOwnedError

from salonbook.config.settings import get_settings
from salonbook.core.exceptions import ConflictError

logger = logging.getLogger(__name__)


class _KeyedLock:
    __slots__ = ("lock", "holders")

    def __init__(self):
        self.lock = threading.Lock()
        self.holders = 0  # holding or waiting


class LocalBookingLock:
    """
    One threading.Lock per (vendor_id, date) within this process.
    An entry lives only while some thread holds or waits on it.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[Tuple[int, date], _KeyedLock] = {}

    def _checkout(self, key: Tuple[int, date]) -> _KeyedLock:
        with self._guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = _KeyedLock()
                self._locks[key] = entry
            entry.holders += 1
            return entry

    def _checkin(self, key: Tuple[int, date], entry: _KeyedLock) -> None:
        with self._guard:
            entry.holders -= 1
            if entry.holders == 0:
                del self._locks[key]

    @contextmanager
    def hold(self, vendor_id: int, booking_date: date):
        key = (vendor_id, booking_date)
        entry = self._checkout(key)
        try:
            with entry.lock:
                yield
        finally:
            self._checkin(key, entry)


class RedisBookingLock:
    """
    Cross-process lock backed by redis-py's Lock.

    `timeout_seconds` bounds the wait for the lock; `ttl_seconds` is how long
    a held lock survives a crashed holder and must outlast the transaction.
    """

    def __init__(self, client, timeout_seconds: int = 10, ttl_seconds: Optional[int] = None):
        self.client = client
        self.timeout_seconds = timeout_seconds
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else timeout_seconds * 3

    @contextmanager
    def hold(self, vendor_id: int, booking_date: date):
        from salonbook.config.redis import RedisKeys

        key = RedisKeys.BOOKING_LOCK.format(vendor_id=vendor_id, booking_date=booking_date.isoformat())
        lock = self.client.lock(
            key,
            timeout=self.ttl_seconds,
            blocking_timeout=self.timeout_seconds,
        )
        if not lock.acquire():
            logger.warning(f"Timed out waiting for booking lock {key}")
            raise ConflictError(
                "Slot is being booked by someone else, please try again",
                details={"vendor_id": vendor_id, "booking_date": booking_date.isoformat()},
            )
        try:
            yield
        finally:
            try:
                lock.release()
            except LockNotOwnedError:
                # The work under the lock has already finished; only the release is late
                logger.warning(f"Booking lock {key} expired before release (ttl {self.ttl_seconds}s)")


@lru_cache()
def get_booking_lock():
    """Process-wide lock instance for the configured backend"""
    settings = get_settings()
    if settings.BOOKING_LOCK_BACKEND == "redis":
        from salonbook.config.redis import get_redis

        return RedisBookingLock(
            get_redis(),
            timeout_seconds=settings.BOOKING_LOCK_TIMEOUT_SECONDS,
            ttl_seconds=settings.BOOKING_LOCK_TTL_SECONDS,
        )
    return LocalBookingLock()
