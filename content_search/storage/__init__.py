"""Storage module -- Redis content repository."""

from content_search.storage.redis_repository import RedisRepository

__all__ = ["RedisRepository"]
