from __future__ import annotations

import logging

from pydantic import ValidationError

from ..exceptions import StorageError
from ..models.bookmark import Bookmarks
from .documents.bookmark_document import BookmarksDocument
from .interfaces import BookmarkRepositoryInterface, KVStoreInterface


logger = logging.getLogger(__name__)

STORE_BOOKMARKS_KEY = "bookmarks"


def get_bookmarks_key(user_id: str) -> str:
    return f"{STORE_BOOKMARKS_KEY}_{user_id}"


class BookmarkRepository(BookmarkRepositoryInterface):
    """bookmarks_<user_id> 키에 대한 KV 저장소 접근 레이어."""

    def __init__(self, store: KVStoreInterface) -> None:
        self._store = store

    def load(self, user_id: str) -> Bookmarks | None:
        key = get_bookmarks_key(user_id)
        try:
            raw = self._store.get(key)
        except Exception as exc:  # noqa: BLE001
            logger.exception("failed to read bookmarks (key=%s)", key)
            raise StorageError(f"failed to read bookmarks: {exc}") from exc

        if raw is None:
            return None

        try:
            return BookmarksDocument.from_bytes(raw).to_domain()
        except ValidationError as exc:
            raise StorageError(f"stored bookmarks are not decodable: {exc}") from exc

    def save(self, user_id: str, bookmarks: Bookmarks) -> None:
        key = get_bookmarks_key(user_id)
        payload = BookmarksDocument.from_domain(bookmarks).to_bytes()
        try:
            self._store.set(key, payload)
        except Exception as exc:  # noqa: BLE001
            logger.exception("failed to store bookmarks (key=%s)", key)
            raise StorageError(f"failed to store bookmarks: {exc}") from exc
