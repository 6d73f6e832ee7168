"""Error taxonomy shared by processors, backends and repositories."""


class ContentSearchError(Exception):
    """Base class for every typed failure raised by this package."""


class ConfigurationError(ContentSearchError):
    """A required option or setting is missing or unparsable."""


class SearchFailure(ContentSearchError):
    """The search backend could not execute a query."""


class FormattingFailure(ContentSearchError):
    """A single result could not be rendered; the rest of the page is abandoned."""


class RepositoryError(ContentSearchError):
    """Base class for content repository failures."""


class AccessDenied(RepositoryError):
    """The session is not allowed to read the requested content."""


class ContentNotFound(RepositoryError):
    """No content exists at the requested path."""


class RepositoryUnavailable(RepositoryError):
    """The repository could not be reached."""
