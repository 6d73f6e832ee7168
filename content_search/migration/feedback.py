"""Feedback sink and service interface for long-running content migrations."""

from abc import ABC, abstractmethod
from typing import Any, TextIO

from content_search.utils.logger import get_logger

log = get_logger(__name__)


class Feedback(ABC):
    """Receives progress from a running migration.

    Four independent signals, so a test can capture each one on its own.
    """

    @abstractmethod
    def log(self, message: str, *params: Any) -> None:
        ...

    @abstractmethod
    def exception(self, error: BaseException) -> None:
        ...

    @abstractmethod
    def new_output_target(self, name: str) -> None:
        ...

    @abstractmethod
    def progress(self, dry_run: bool, done: int, total: int) -> None:
        ...


class MigrationService(ABC):
    """The migration engine; implemented outside this package."""

    @abstractmethod
    def migrate(self, dry_run: bool, limit: int, reindex_all: bool, feedback: Feedback) -> None:
        ...


class StreamFeedback(Feedback):
    """Writes progress and errors to a client stream, everything else to the log."""

    def __init__(self, stream: TextIO):
        self.stream = stream

    def log(self, message: str, *params: Any) -> None:
        log.info(message, *params)

    def exception(self, error: BaseException) -> None:
        self.write(
            f"An exception occurred while migrating: {type(error).__name__}: {error}; "
            "check server log for more details."
        )

    def new_output_target(self, name: str) -> None:
        log.info("Opening new upgrade log file %s", name)

    def progress(self, dry_run: bool, done: int, total: int) -> None:
        percent = (done * 100) // total if total else 100
        self.write(f"Processed {done} of {total}, {percent}% complete, dryRun={str(dry_run).lower()}")

    def write(self, message: str) -> None:
        """Write one line and flush so the client sees it straight away."""
        try:
            self.stream.write(message + "\n")
            self.stream.flush()
        except OSError:
            log.exception("Could not write migration feedback to the client")
