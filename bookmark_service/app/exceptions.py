from __future__ import annotations


class BookmarkServiceError(Exception):
    """Base exception for all bookmark-service errors."""


class NotFoundError(BookmarkServiceError):
    """A bookmark or label does not exist in the user's collection."""


class ConflictError(BookmarkServiceError):
    """A label with the same name already exists for the user."""


class NoLabelsError(BookmarkServiceError):
    """The user has never created a label collection."""


class NoBookmarksError(BookmarkServiceError):
    """The user has never saved a bookmark collection."""


class StorageError(BookmarkServiceError):
    """Failures while reading or writing the key-value store (incl. undecodable blobs)."""


class UpstreamLookupError(BookmarkServiceError):
    """Failures while looking up a message on the chat platform."""
