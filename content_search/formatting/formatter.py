"""Render repository content as JSON, with a link/file policy switch."""

from content_search.errors import FormattingFailure, RepositoryError
from content_search.formatting.json_writer import JSONWriter
from content_search.search.backend import Repository
from content_search.search.models import LINK_TARGET_PROPERTY, Content, Session
from content_search.utils.logger import get_logger

log = get_logger(__name__)

CHILDREN_KEY = "_children"
LINKED_FILE_KEY = "file"


class ResultFormatter:
    """Writes one resolved :class:`Content` item to a :class:`JSONWriter`.

    Link items get the link representation (plus the linked file, flat);
    everything else is written as a file node with children down to *depth*.
    """

    def __init__(self, repository: Repository):
        self.repository = repository

    def write_content(
        self,
        content: Content,
        session: Session,
        writer: JSONWriter,
        depth: int = 0,
    ) -> None:
        if content.is_link:
            self.write_link_node(content, session, writer)
        else:
            self.write_file_node(content, session, writer, depth)

    def write_file_node(
        self,
        content: Content,
        session: Session,
        writer: JSONWriter,
        depth: int = 0,
    ) -> None:
        writer.object()
        _write_properties(content, writer)
        if depth > 0:
            children = self._call(self.repository.children, content.path, session)
            writer.key(CHILDREN_KEY).array()
            for child in children:
                self.write_file_node(child, session, writer, depth - 1)
            writer.end_array()
        writer.end_object()

    def write_link_node(self, content: Content, session: Session, writer: JSONWriter) -> None:
        writer.object()
        _write_properties(content, writer)
        target = content.properties.get(LINK_TARGET_PROPERTY)
        if target:
            linked = self._call(self.repository.resolve, str(target), session)
            writer.key(LINKED_FILE_KEY)
            self.write_file_node(linked, session, writer, depth=0)
        writer.end_object()

    @staticmethod
    def _call(fn, key: str, session: Session):
        try:
            return fn(key, session)
        except RepositoryError as exc:
            log.debug("Repository lookup failed for %s: %s", key, exc)
            raise FormattingFailure(f"Could not read {key}: {exc}") from exc


def _write_properties(content: Content, writer: JSONWriter) -> None:
    writer.key("_path").value(content.path)
    writer.key("_name").value(content.name)
    for name, value in content.properties.items():
        writer.key(name).value(value)
