# logistics/core/db.py
from motor.motor_asyncio import AsyncIOMotorClient
from functools import lru_cache

from logistics.core.config import settings

@lru_cache
def get_client() -> AsyncIOMotorClient:
    return AsyncIOMotorClient(settings.mongo_uri, tz_aware=True)

def get_db():
    return get_client()[settings.mongo_db]

def close_client() -> None:
    if get_client.cache_info().currsize:
        get_client().close()
        get_client.cache_clear()
