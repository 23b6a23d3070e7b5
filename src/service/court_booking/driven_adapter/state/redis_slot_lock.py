"""
Slot lock on Redis

One key per court and day. Holders poll until the key frees up or the wait
budget runs out.
"""

from contextlib import asynccontextmanager
from datetime import date
import time
from typing import AsyncIterator

import anyio

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import ConflictError, ErrorCode
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.platform.state.distributed_lock import DistributedLock
from src.platform.state.redis_client import redis_client
from src.service.court_booking.app.interface.i_slot_lock import ISlotLock


def slot_lock_key(*, court_id: int, date: date) -> str:
    return f'lock:court:{court_id}:{date.isoformat()}'


class RedisSlotLock(ISlotLock):
    def __init__(
        self,
        *,
        ttl_seconds: int = settings.SLOT_LOCK_TTL_SECONDS,
        wait_timeout: float = settings.SLOT_LOCK_WAIT_TIMEOUT,
        poll_interval: float = settings.SLOT_LOCK_POLL_INTERVAL,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.wait_timeout = wait_timeout
        self.poll_interval = poll_interval

    @asynccontextmanager
    async def hold(self, *, court_id: int, date: date) -> AsyncIterator[None]:
        key = slot_lock_key(court_id=court_id, date=date)
        # A fresh lock per holder, the token lives on the instance
        lock = DistributedLock(redis_client.get_client())

        started = time.perf_counter()
        deadline = started + self.wait_timeout
        while not await lock.acquire_lock(key=key, ttl=self.ttl_seconds):
            if time.perf_counter() >= deadline:
                metrics.record_slot_lock_wait(
                    duration=time.perf_counter() - started, acquired=False
                )
                Logger.base.warning(f'⏳ [SLOT-LOCK] Timed out waiting for {key}')
                raise ConflictError(
                    'Another booking for this court and date is being processed, try again',
                    ErrorCode.SLOT_LOCKED,
                    {'court_id': court_id, 'date': date.isoformat()},
                )
            await anyio.sleep(self.poll_interval)

        metrics.record_slot_lock_wait(duration=time.perf_counter() - started, acquired=True)
        try:
            yield
        finally:
            await lock.release_lock(key=key)
