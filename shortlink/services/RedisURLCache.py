import json
import logging
from typing import Optional, Tuple

import redis.exceptions

from shortlink.core.config import settings
from shortlink.db.Connection import database
from shortlink.db.Models.models import URLItem

logger = logging.getLogger(__name__)


def _cache_key(key: str) -> str:
    return f"url:{key}"


def get(key: str) -> Optional[Tuple[int, str]]:
    """Return (id, original_url) for a code or alias, or None on miss."""
    if database.redis_client is None:
        return None

    try:
        cached = database.redis_client.get(_cache_key(key))
    except redis.exceptions.RedisError:
        logger.warning(f"Redis lookup failed for {key}")
        return None

    if not cached:
        return None

    try:
        data = json.loads(cached)
        return int(data["id"]), data["original_url"]
    except (ValueError, KeyError, TypeError):
        logger.warning(f"Discarding malformed cache entry for {key}")
        return None


def put(key: str, db_url: URLItem):
    if database.redis_client is None:
        return

    value = json.dumps({"id": db_url.id, "original_url": db_url.original_url})
    try:
        database.redis_client.setex(_cache_key(key), settings.CACHE_TTL, value)
        logger.debug(f"Cached {key} -> {db_url.original_url[:50]}")
    except redis.exceptions.RedisError:
        logger.warning(f"Failed to cache {key}, Redis unavailable")
