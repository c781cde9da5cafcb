import os
import redis
from functools import lru_cache


@lru_cache(maxsize=1)
def get_redis() -> redis.Redis:
    """Shared client for the balance store.

    REDIS_URL wins when set; otherwise REDIS_HOST/REDIS_PORT/REDIS_DB are used.
    """
    url = os.environ.get("REDIS_URL")
    if url:
        return redis.Redis.from_url(url, decode_responses=True)
    host = os.environ.get("REDIS_HOST", "localhost")
    port = int(os.environ.get("REDIS_PORT", "6379"))
    db = int(os.environ.get("REDIS_DB", "0"))
    return redis.Redis(host=host, port=port, db=db, decode_responses=True)
