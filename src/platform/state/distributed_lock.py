"""
Distributed Lock on Redis

SET NX EX to acquire, an ownership-checked Lua script to release.
"""

from typing import Optional
from uuid import uuid4

from redis.asyncio import Redis as AsyncRedis
from redis.exceptions import RedisError

from src.platform.logging.loguru_io import Logger


_RELEASE_SCRIPT = """
if redis.call("get", KEYS[1]) == ARGV[1] then
    return redis.call("del", KEYS[1])
else
    return 0
end
"""


class DistributedLock:
    """One lock holder per instance. The token proves ownership on release."""

    def __init__(self, client: AsyncRedis) -> None:
        self._client = client
        self.lock_value: Optional[str] = None

    async def acquire_lock(self, *, key: str, ttl: int = 10) -> bool:
        """
        Try once to take the lock.

        Args:
            key: Lock key (e.g., "lock:court:3:2026-10-20")
            ttl: Time-to-live in seconds, so a crashed holder can't block the key forever

        Returns:
            True if lock acquired, False if someone else holds it
        """
        token = str(uuid4())
        result = await self._client.set(key, token, nx=True, ex=ttl)
        if result:
            self.lock_value = token
            Logger.base.debug(f'🔒 [LOCK] Acquired lock: {key} (ttl={ttl}s)')
            return True
        return False

    async def release_lock(self, *, key: str) -> bool:
        if not self.lock_value:
            Logger.base.warning(f'⚠️ [LOCK] No lock value to release: {key}')
            return False

        try:
            result = await self._client.eval(_RELEASE_SCRIPT, 1, key, self.lock_value)  # type: ignore[misc]
        except RedisError as e:
            # The TTL frees the key anyway
            Logger.base.error(f'❌ [LOCK] Error releasing lock {key}: {e}')
            return False
        finally:
            self.lock_value = None

        if result:
            Logger.base.debug(f'🔓 [LOCK] Released lock: {key}')
            return True
        Logger.base.warning(f'⚠️ [LOCK] Failed to release lock: {key} (ownership mismatch or expired)')
        return False
