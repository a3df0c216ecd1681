"""Session store mapping auth tokens to user ids"""

from typing import Optional
from uuid import uuid4

from files_manager.utils.cache import CacheService
from files_manager.utils.logger import get_logger, mask_token

logger = get_logger(__name__)

SESSION_KEY_PREFIX = "auth_"


class SessionStore:
    """Opaque tokens kept in the cache; expiry is left to the cache TTL"""

    def __init__(self, cache: CacheService, ttl_seconds: int):
        self.cache = cache
        self.ttl_seconds = ttl_seconds

    @staticmethod
    def _key(token: str) -> str:
        return f"{SESSION_KEY_PREFIX}{token}"

    async def create(self, user_id: str) -> str:
        """Mint a new token for user_id"""
        token = str(uuid4())
        await self.cache.set(self._key(token), user_id, self.ttl_seconds)
        logger.debug(f"Session created for user {user_id}: {mask_token(token)}")
        return token

    async def get_user_id(self, token: Optional[str]) -> Optional[str]:
        if not token:
            return None
        return await self.cache.get(self._key(token))

    async def delete(self, token: str) -> bool:
        removed = await self.cache.delete(self._key(token))
        logger.debug(f"Session deleted: {mask_token(token)}")
        return bool(removed)
