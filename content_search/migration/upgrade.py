"""Administrative upgrade entry point: checks the caller, parses options, runs the migration."""

from dataclasses import dataclass
from http import HTTPStatus
from typing import Mapping, TextIO

from content_search.errors import ConfigurationError
from content_search.migration.feedback import MigrationService, StreamFeedback
from content_search.search.models import Session
from content_search.utils.logger import get_logger

log = get_logger(__name__)

MAX_LIMIT = 2**31 - 1


@dataclass(frozen=True)
class UpgradeOptions:
    """Parsed upgrade parameters; a bare request is a full dry run."""

    dry_run: bool = True
    limit: int = MAX_LIMIT
    reindex_all: bool = False

    @classmethod
    def from_params(cls, params: Mapping[str, str]) -> "UpgradeOptions":
        limit = MAX_LIMIT
        raw_limit = params.get("limit")
        if raw_limit is not None:
            try:
                limit = int(raw_limit)
            except ValueError as exc:
                raise ConfigurationError(f"limit is not an integer: {raw_limit!r}") from exc
        return cls(
            dry_run=_bool(params.get("dryRun"), default=True),
            limit=limit,
            reindex_all=_bool(params.get("reindexAll"), default=False),
        )


def run_upgrade(
    session: Session,
    params: Mapping[str, str],
    service: MigrationService,
    stream: TextIO,
) -> HTTPStatus:
    """Run one migration on behalf of *session*, streaming feedback to *stream*."""
    feedback = StreamFeedback(stream)
    if not session.is_admin:
        feedback.write("You must be an admin to run upgrades")
        return HTTPStatus.FORBIDDEN

    try:
        options = UpgradeOptions.from_params(params)
        msg = (
            f"About to call migration service with dryRun = {str(options.dry_run).lower()}; "
            f"limit = {options.limit}; reindexAll = {str(options.reindex_all).lower()}; "
            "check your server log for more detailed information."
        )
        feedback.write(msg)
        log.info(msg)
        service.migrate(options.dry_run, options.limit, options.reindex_all, feedback)
    except Exception as exc:
        log.exception("Got exception processing upgrade")
        feedback.write(f"Upgrade failed: {exc}")
        return HTTPStatus.INTERNAL_SERVER_ERROR
    return HTTPStatus.OK


def _bool(raw: str | None, default: bool) -> bool:
    if raw is None:
        return default
    return raw.strip().lower() == "true"
