import os
from dotenv import load_dotenv

from redis import asyncio as aioredis

from menu_catalog.utils.singleton import SingletonMeta

load_dotenv()


class RedisCache(metaclass=SingletonMeta):
    def __init__(self):
        self._client = aioredis.from_url(
            os.getenv("REDIS_URL"),
            password=os.getenv("REDIS_PASSWORD")
        )

    @property
    def client(self):
        return self._client


def redis_configured() -> bool:
    """
    Check whether a Redis URL is configured.
    """
    return bool(os.getenv("REDIS_URL"))


async def get_redis() -> aioredis.Redis:
    redis_cache = RedisCache()
    return redis_cache.client


async def close_redis() -> None:
    """
    Close the shared client and forget it.
    """
    if not redis_configured():
        return

    redis_cache = RedisCache()
    await redis_cache.client.aclose()
    RedisCache.reset()
