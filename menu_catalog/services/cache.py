import json
from typing import List, Optional, Sequence

from redis import asyncio as aioredis

from menu_catalog.schemas import Category
from menu_catalog.utils.const import CacheConfig
from menu_catalog.utils.exceptions import CatalogError
from menu_catalog.utils.log import setup_logging
from menu_catalog.utils.redis import get_redis

logger = setup_logging()


class CategoryCache:
    """
    Publishes committed category snapshots to Redis.
    """

    def __init__(self, client: Optional[aioredis.Redis] = None, ttl: int = CacheConfig.TTL_SECONDS):
        self._client = client
        self._ttl = ttl

    async def _get_client(self) -> aioredis.Redis:
        return self._client if self._client is not None else await get_redis()

    @staticmethod
    def key(establishment_id: str) -> str:
        return f"{CacheConfig.KEY_PREFIX}:{establishment_id}"

    async def publish(self, establishment_id: str, categories: Sequence[Category]) -> None:
        """
        Store the snapshot and notify subscribers of the ``categories`` channel.

        Redis failures are logged; the snapshot was already committed.

        :param establishment_id: The establishment the snapshot belongs to.
        :param categories: The committed snapshot.
        """
        key = self.key(establishment_id)

        try:
            payload = json.dumps([category.to_dict() for category in categories], ensure_ascii=False)
            redis_client = await self._get_client()
            await redis_client.set(key, payload, ex=self._ttl)
            await redis_client.publish(CacheConfig.CHANNEL, CacheConfig.UPDATE_MESSAGE)
        except (aioredis.RedisError, ValueError) as e:
            logger.warning(f"Cache '{key}' not updated: {e}")
            return

        logger.debug(f"Cache '{key}' updated with {len(categories)} categories.")

    async def get(self, establishment_id: str) -> Optional[List[Category]]:
        """
        Read a cached snapshot back.

        :return: The categories, or None when nothing usable is cached.
        """
        key = self.key(establishment_id)
        try:
            redis_client = await self._get_client()
            cached = await redis_client.get(key)
        except (aioredis.RedisError, ValueError) as e:
            logger.warning(f"Cache '{key}' not readable: {e}")
            return None

        if not cached:
            return None

        try:
            return [Category.from_dict(item) for item in json.loads(cached)]
        except (ValueError, TypeError, CatalogError) as e:
            logger.warning(f"Cache '{key}' holds a malformed snapshot: {e}")
            return None
