import logging
from typing import Optional

import redis

from . import redis_client
from .constants import BALANCE_KEY, DEFAULT_BALANCE

logger = logging.getLogger(__name__)


def _parse_balance(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    try:
        value = int(str(raw).strip())
    except ValueError:
        return None
    return value if value >= 0 else None


def load_balance() -> int:
    """Return the persisted balance, or DEFAULT_BALANCE if missing or unusable."""
    try:
        raw = redis_client.get_redis().get(BALANCE_KEY)
    except redis.RedisError as e:
        logger.warning("Failed to load balance, using default: %s", e)
        return DEFAULT_BALANCE
    value = _parse_balance(raw)
    if value is None:
        if raw is not None:
            logger.warning("Ignoring stored balance %r, using default", raw)
        return DEFAULT_BALANCE
    return value


def save_balance(value: int) -> None:
    # Best effort: the in-memory balance stays authoritative for the session
    try:
        redis_client.get_redis().set(BALANCE_KEY, int(value))
    except redis.RedisError as e:
        logger.warning("Failed to save balance %s: %s", value, e)


def reset_balance() -> int:
    save_balance(DEFAULT_BALANCE)
    return DEFAULT_BALANCE
