"""
Tier 2: Redis-backed distributed cache.

Architecture:
    RedisTier (DistributedCache implementation)
        ├── Connection lifecycle (from_url, ping with backoff, aclose)
        └── Operations (GET / SETEX / DEL / SCAN / FLUSHDB) with error wrapping

Why Redis?
    - Shared across all application instances
    - Native TTL support, expired keys are cleaned up by the server
    - Survives application restarts

Error Handling Strategy:
    - Catch RedisError on every operation
    - Log with stage and key
    - Raise CacheKeyError (or CacheConnectionError on connect)
    The cache manager treats all of these as recoverable.
"""

import re
from typing import Any

import redis.asyncio as redis
from redis.exceptions import ConnectionError, RedisError, TimeoutError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential_jitter

from hotel_search.core.exceptions import CacheConnectionError, CacheKeyError
from hotel_search.core.logging.logger import get_logger

logger = get_logger(__name__)

# Redis glob metacharacters; escaped so a pattern behaves as a plain substring
_GLOB_SPECIAL = re.compile(r"([*?\[\]\\])")


def substring_glob(pattern: str) -> str:
    """Build a MATCH glob selecting keys that contain ``pattern``."""
    escaped = _GLOB_SPECIAL.sub(r"\\\1", pattern)
    return f"*{escaped}*"


class RedisTier:
    """
    Redis implementation of the DistributedCache protocol.

    STAGE-2.2: L2 Redis cache

    Connection Policy:
    - Up to ``connect_retries`` PING attempts at startup
    - Exponential backoff with jitter, capped at ``retry_max_delay``
    - redis-py reconnects lazily afterwards, so a tier that was down at
      startup starts serving once the server is reachable
    """

    def __init__(
        self,
        url: str,
        socket_timeout: float = 5,
        socket_connect_timeout: float = 5,
        health_check_interval: int = 30,
        connect_retries: int = 3,
        retry_max_delay: float = 2.0,
        client: redis.Redis | None = None,
    ):
        """
        Args:
            url: Redis connection URL (redis://host:port/db)
            client: Pre-built client (tests); built from url otherwise
        """
        self._url = url
        self._socket_timeout = socket_timeout
        self._socket_connect_timeout = socket_connect_timeout
        self._health_check_interval = health_check_interval
        self._connect_retries = connect_retries
        self._retry_max_delay = retry_max_delay
        self._client = client
        self._is_connected = False

    @classmethod
    def from_settings(cls, settings) -> "RedisTier":
        redis_settings = settings.redis
        return cls(
            url=redis_settings.REDIS_URL,
            socket_timeout=redis_settings.REDIS_SOCKET_TIMEOUT,
            socket_connect_timeout=redis_settings.REDIS_SOCKET_CONNECT_TIMEOUT,
            health_check_interval=redis_settings.REDIS_HEALTH_CHECK_INTERVAL,
            connect_retries=redis_settings.REDIS_CONNECT_RETRIES,
            retry_max_delay=redis_settings.REDIS_RETRY_MAX_DELAY,
        )

    # -------------------------------------------------------------------------
    # Connection Lifecycle
    # -------------------------------------------------------------------------

    async def connect(self) -> None:
        """
        Build the client and verify it with PING.

        STAGE-REDIS.2: Connection establishment

        Raises:
            CacheConnectionError: If every attempt fails
        """
        if self._client is None:
            self._client = redis.from_url(
                self._url,
                socket_timeout=self._socket_timeout,
                socket_connect_timeout=self._socket_connect_timeout,
                health_check_interval=self._health_check_interval,
                retry_on_timeout=True,
                decode_responses=True,
            )

        @retry(
            stop=stop_after_attempt(self._connect_retries),
            wait=wait_exponential_jitter(initial=0.05, max=self._retry_max_delay),
            retry=retry_if_exception_type((ConnectionError, TimeoutError)),
            reraise=True,
            before_sleep=lambda retry_state: logger.info(
                "Redis connect retry",
                stage="REDIS.2",
                attempt=retry_state.attempt_number,
                delay=round(retry_state.idle_for, 3),
            ),
        )
        async def _ping():
            await self._client.ping()

        try:
            await _ping()
        except (ConnectionError, TimeoutError) as e:
            logger.error("Failed to connect to Redis", stage="REDIS.2", error=str(e))
            raise CacheConnectionError(
                message=f"Failed to connect to Redis: {e}",
                details={"attempts": self._connect_retries},
            )

        self._is_connected = True
        logger.info("Redis connected successfully", stage="REDIS.2")

    async def disconnect(self) -> None:
        """
        Close the client and its pool.

        STAGE-REDIS.3: Connection cleanup
        """
        if self._client is not None:
            await self._client.aclose()
        self._is_connected = False
        logger.info("Redis disconnected", stage="REDIS.3")

    async def ping(self) -> bool:
        try:
            if self._client is not None:
                return bool(await self._client.ping())
        except RedisError:
            pass
        return False

    def is_connected(self) -> bool:
        return self._is_connected

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def _require_client(self) -> redis.Redis:
        if self._client is None:
            raise CacheConnectionError("Redis tier used before connect()")
        return self._client

    async def get(self, key: str) -> str | None:
        """
        STAGE-REDIS.GET: Redis GET operation
        """
        client = self._require_client()
        try:
            return await client.get(key)
        except RedisError as e:
            logger.error("Redis GET failed", stage="REDIS.GET", key=key, error=str(e))
            raise CacheKeyError(message=f"Redis GET failed: {e}", details={"key": key})

    async def setex(self, key: str, ttl: int, value: str) -> None:
        """
        STAGE-REDIS.SET: Redis SETEX operation
        """
        client = self._require_client()
        try:
            await client.setex(key, ttl, value)
        except RedisError as e:
            logger.error("Redis SETEX failed", stage="REDIS.SET", key=key, error=str(e))
            raise CacheKeyError(message=f"Redis SETEX failed: {e}", details={"key": key})

    async def delete(self, *keys: str) -> int:
        """
        STAGE-REDIS.DEL: Redis DELETE operation
        """
        if not keys:
            return 0
        client = self._require_client()
        try:
            return await client.delete(*keys)
        except RedisError as e:
            logger.error("Redis DELETE failed", stage="REDIS.DEL", keys=keys, error=str(e))
            raise CacheKeyError(message=f"Redis DELETE failed: {e}", details={"keys": keys})

    async def keys(self, pattern: str) -> list[str]:
        """
        Keys containing ``pattern``, found with SCAN rather than KEYS so
        large keyspaces do not block the server.

        STAGE-REDIS.SCAN: Redis SCAN operation
        """
        client = self._require_client()
        match = substring_glob(pattern)
        try:
            return [key async for key in client.scan_iter(match=match, count=500)]
        except RedisError as e:
            logger.error("Redis SCAN failed", stage="REDIS.SCAN", match=match, error=str(e))
            raise CacheKeyError(message=f"Redis SCAN failed: {e}", details={"match": match})

    async def flush(self) -> None:
        """
        Remove every key in the configured database.

        STAGE-REDIS.FLUSH: Redis FLUSHDB operation
        """
        client = self._require_client()
        try:
            await client.flushdb()
        except RedisError as e:
            logger.error("Redis FLUSHDB failed", stage="REDIS.FLUSH", error=str(e))
            raise CacheKeyError(message=f"Redis FLUSHDB failed: {e}")

    async def health_check(self) -> dict[str, Any]:
        """
        Check Redis health.

        Returns:
            Dict with status, connection flag and server round-trip result
        """
        healthy = await self.ping()
        return {
            "status": "healthy" if healthy else "unhealthy",
            "connected": self._is_connected,
            "ping": healthy,
        }
