"""Exceptions raised by the knowledge-base search engine."""


class KnowledgeBaseError(Exception):
    """Base class for knowledge-base errors."""


class IndexBuildError(KnowledgeBaseError):
    """An index build could not complete. No partial index is returned."""


class ManifestFetchError(IndexBuildError):
    """The manifest could not be fetched or is not an array of entries."""


class DocumentFetchError(KnowledgeBaseError):
    """A single document could not be fetched.

    Recoverable: the builder logs it and continues with the other documents.
    """

    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason


class ManifestFileError(KnowledgeBaseError):
    """A manifest file on disk is unreadable or malformed."""
