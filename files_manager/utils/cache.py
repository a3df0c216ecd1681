"""Redis cache service"""

from typing import Optional

import redis.asyncio as redis

from files_manager.utils.logger import get_logger

logger = get_logger(__name__)


class CacheService:
    """Thin async wrapper around a Redis client"""

    def __init__(
        self,
        host: str = "localhost",
        port: int = 6379,
        password: Optional[str] = None,
        db: int = 0,
        client: Optional[redis.Redis] = None,
    ):
        self.host = host
        self.port = port
        self.password = password
        self.db = db
        self.client: Optional[redis.Redis] = client
        # Injected clients are shared and closed by whoever created them
        self._owns_client = client is None
        self._alive = False

    async def initialize(self) -> bool:
        """Create the client (if none was injected) and check the connection"""
        if self.client is None:
            self.client = redis.Redis(
                host=self.host,
                port=self.port,
                password=self.password,
                db=self.db,
                decode_responses=True,
            )
        self._alive = await self.ping()
        if self._alive:
            logger.debug(f"Redis connected at {self.host}:{self.port}")
        else:
            logger.error(f"Redis not reachable at {self.host}:{self.port}")
        return self._alive

    async def ping(self) -> bool:
        """Check Redis liveness"""
        if self.client is None:
            return False
        try:
            return bool(await self.client.ping())
        except Exception as e:
            logger.error(f"Redis ping failed: {e}")
            return False

    def is_alive(self) -> bool:
        """Liveness as of the last ping"""
        return self._alive

    async def get(self, key: str) -> Optional[str]:
        value = await self._require_client().get(key)
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def set(self, key: str, value: str, ttl: int):
        """Store a value that expires after ttl seconds"""
        await self._require_client().set(key, value, ex=ttl)

    async def delete(self, key: str) -> int:
        return await self._require_client().delete(key)

    async def close(self):
        """Close the Redis connection if this service created it"""
        if self.client is not None and self._owns_client:
            await self.client.aclose()
            self.client = None
        self._alive = False
        logger.debug("Redis connection closed")

    def _require_client(self) -> redis.Redis:
        if self.client is None:
            raise RuntimeError("Cache not initialized. Call initialize() first.")
        return self.client
