import logging
import re
from typing import NamedTuple, Optional

from sqlalchemy.orm import Session

from shortlink.core.config import settings
from shortlink.core.errors import (
    AliasConflict,
    InvalidInput,
    NotFound,
    StoreFailure,
    UniquenessViolation,
)
from shortlink.db import repository
from shortlink.db.Models.models import URLItem
from shortlink.services import RedisURLCache
from shortlink.utils.encoding import candidate_codes


logger = logging.getLogger(__name__)

ALIAS_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")
RESERVED_ALIASES = frozenset({"health", "ready", "stats", "shorten"})


class ShortenResult(NamedTuple):
    url_item: URLItem
    created: bool


class URLService:

    @staticmethod
    def validate_alias(alias: Optional[str]) -> Optional[str]:
        if alias is None:
            return None
        if not settings.ALIAS_MIN_LENGTH <= len(alias) <= settings.ALIAS_MAX_LENGTH:
            raise InvalidInput(
                f"Alias must be between {settings.ALIAS_MIN_LENGTH} "
                f"and {settings.ALIAS_MAX_LENGTH} characters"
            )
        if not ALIAS_PATTERN.match(alias):
            raise InvalidInput("Alias may only contain letters, digits, '-' and '_'")
        # /health, /ready, /stats/.. and /shorten would shadow the redirect route
        if alias.lower() in RESERVED_ALIASES:
            raise InvalidInput(f"Alias '{alias}' is reserved")
        return alias

    @staticmethod
    def create_or_reuse(db: Session, original_url: str, alias: Optional[str] = None) -> ShortenResult:
        alias = URLService.validate_alias(alias)

        # Idempotency: return existing mapping if present
        existing = repository.find_by_url(db, original_url)
        if existing:
            logger.info("short URL already existed : '%s' for URL: %s", existing.path, original_url[:50])
            return ShortenResult(existing, False)

        if alias and repository.find_by_code_or_alias(db, alias):
            logger.warning("Alias collision: '%s'", alias)
            raise AliasConflict(alias)

        for short_code in candidate_codes(original_url, settings.SHORT_CODE_LENGTH, settings.SHORT_CODE_MAX_LENGTH):
            taken = repository.find_by_code_or_alias(db, short_code)
            if taken and taken.original_url != original_url:
                logger.info("Short code '%s' already maps elsewhere, extending", short_code)
                continue

            try:
                url_item = repository.insert(db, original_url, short_code, alias)
            except UniquenessViolation:
                # A concurrent request for the same URL won the insert
                winner = repository.find_by_url(db, original_url)
                if winner:
                    logger.info("Concurrent shorten resolved to existing '%s'", winner.path)
                    return ShortenResult(winner, False)
                if alias and repository.find_by_code_or_alias(db, alias):
                    raise AliasConflict(alias)
                logger.info("Short code collision on '%s', extending", short_code)
                continue

            logger.info("Created short code '%s' for URL: %s", url_item.short_code, original_url[:50])
            RedisURLCache.put(url_item.path, url_item)
            return ShortenResult(url_item, True)

        raise StoreFailure(
            f"Failed to allocate a unique short code within {settings.SHORT_CODE_MAX_LENGTH} characters"
        )

    @staticmethod
    def resolve(db: Session, key: str) -> str:
        cached = RedisURLCache.get(key)
        if cached:
            url_id, original_url = cached
            if repository.increment_access(db, url_id):
                logger.info(f"Redirect cache HIT for {key} -> {original_url[:50]}")
                return original_url

        db_url = repository.find_by_code_or_alias(db, key)
        if db_url is None:
            raise NotFound(key)

        original_url = db_url.original_url
        RedisURLCache.put(key, db_url)
        repository.increment_access(db, db_url.id)
        return original_url

    @staticmethod
    def get_stats(db: Session, key: str) -> URLItem:
        db_url = repository.find_by_code_or_alias(db, key)
        if db_url is None:
            raise NotFound(key)
        return db_url
