"""Redis-backed content repository: content hashes, child sets and reader ACLs."""

from typing import Any, Dict, Iterable, List, Optional

import redis

from content_search.errors import AccessDenied, ContentNotFound, RepositoryUnavailable
from content_search.search.backend import Repository
from content_search.search.models import Content, Session
from content_search.utils.config import settings
from content_search.utils.logger import get_logger

log = get_logger(__name__)

CONTENT_PREFIX = "content:"
CHILDREN_PREFIX = "children:"
READERS_PREFIX = "readers:"


class RedisRepository(Repository):
    """Thin wrapper around redis-py that stores and resolves :class:`Content`.

    Layout per path::

        content:<path>   hash of properties
        children:<path>  set of child paths
        readers:<path>   optional set of user ids allowed to read (admins bypass)
    """

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        password: str | None = None,
        client: redis.Redis | None = None,
    ):
        self.client = client or redis.Redis(
            host=host or settings.redis_host,
            port=port or settings.redis_port,
            password=password or settings.redis_password or None,
            decode_responses=True,
        )

    # -- Reads --------------------------------------------------------------

    def resolve(self, key: str, session: Session) -> Content:
        try:
            properties = self.client.hgetall(f"{CONTENT_PREFIX}{key}")
            if not properties:
                raise ContentNotFound(f"No content at {key}")
            self._check_access(key, session)
        except redis.RedisError as exc:
            raise RepositoryUnavailable(f"Redis lookup failed for {key}: {exc}") from exc
        return Content(path=key, properties=properties)

    def children(self, key: str, session: Session) -> List[Content]:
        try:
            paths = sorted(self.client.smembers(f"{CHILDREN_PREFIX}{key}"))
        except redis.RedisError as exc:
            raise RepositoryUnavailable(f"Redis lookup failed for {key}: {exc}") from exc
        return [self.resolve(path, session) for path in paths]

    def _check_access(self, key: str, session: Session) -> None:
        if session.is_admin:
            return
        readers_key = f"{READERS_PREFIX}{key}"
        if self.client.exists(readers_key) and not self.client.sismember(
            readers_key, session.user_id
        ):
            log.info("Access denied: %s cannot read %s", session.user_id, key)
            raise AccessDenied(f"{session.user_id} may not read {key}")

    # -- Writes -------------------------------------------------------------

    def store_content(
        self,
        path: str,
        properties: Dict[str, Any],
        parent: Optional[str] = None,
        readers: Optional[Iterable[str]] = None,
    ) -> None:
        """Store one content item, optionally linking it under *parent*."""
        pipe = self.client.pipeline()
        pipe.hset(f"{CONTENT_PREFIX}{path}", mapping=properties)
        if parent is not None:
            pipe.sadd(f"{CHILDREN_PREFIX}{parent}", path)
        if readers:
            pipe.delete(f"{READERS_PREFIX}{path}")
            pipe.sadd(f"{READERS_PREFIX}{path}", *readers)
        pipe.execute()

    # -- Utilities ----------------------------------------------------------

    def flush(self) -> int:
        """Delete every key this repository owns (useful in tests)."""
        deleted = 0
        for prefix in (CONTENT_PREFIX, CHILDREN_PREFIX, READERS_PREFIX):
            keys = list(self.client.scan_iter(match=f"{prefix}*"))
            if keys:
                deleted += self.client.delete(*keys)
        return deleted

    def ping(self) -> bool:
        return self.client.ping()
