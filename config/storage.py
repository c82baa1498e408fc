# config/storage.py
import logging
from typing import Optional
from config.cache import close_redis, get_redis
from config.settings import settings
from repository.memory_substrate import MemorySubstrate
from repository.redis_substrate import RedisSubstrate
from repository.substrate import Substrate
from util.enums import StorageBackend

logger = logging.getLogger(__name__)

_substrate: Optional[Substrate] = None


async def get_substrate() -> Substrate:
    """
    Process-wide substrate for the configured backend.
    The core never imports this; handles are passed in by the controller layer.
    """
    global _substrate
    if _substrate is None:
        if settings.STORAGE_BACKEND == StorageBackend.MEMORY:
            _substrate = MemorySubstrate()
        else:
            _substrate = RedisSubstrate(await get_redis())
        logger.info("storage.ready backend=%s", settings.STORAGE_BACKEND.value)
    return _substrate


async def close_substrate() -> None:
    global _substrate
    if _substrate is not None and settings.STORAGE_BACKEND == StorageBackend.REDIS:
        await close_redis()
    _substrate = None
