from __future__ import annotations

import logging
from typing import Callable

from fastapi import Depends

from common.types.datetime import now_millis

from ..clients.message_client import get_message_lookup
from ..exceptions import (
    BookmarkServiceError,
    NoBookmarksError,
    NotFoundError,
    UpstreamLookupError,
)
from ..models.bookmark import Bookmark, Bookmarks
from ..repositories.bookmark_repository import BookmarkRepository
from ..repositories.interfaces import (
    BookmarkRepositoryInterface,
    KVStoreInterface,
    MessageLookupInterface,
)
from ..repositories.kv_store import get_kv_store
from .labels_service import LabelsService, get_labels_service


logger = logging.getLogger(__name__)


class BookmarksService:
    """유저 북마크 관리 비즈니스 로직.

    - Repository(BookmarkRepositoryInterface)에만 의존하고, KV 저장소 세부 구현은 알지 않는다.
    - 모든 변경은 "컬렉션 전체 로드 -> 메모리에서 수정 -> 전체 저장" 순서로 처리한다.
      동시 쓰기에 대한 잠금은 없으며 마지막 저장이 이긴다.
    """

    def __init__(
        self,
        repo: BookmarkRepositoryInterface,
        labels: LabelsService,
        messages: MessageLookupInterface | None = None,
        clock: Callable[[], int] = now_millis,
    ) -> None:
        self._repo = repo
        self._labels = labels
        self._messages = messages
        self._clock = clock

    def load_bookmarks(self, user_id: str) -> Bookmarks | None:
        """유저의 북마크 컬렉션을 반환한다.

        한 번도 저장한 적이 없으면 None 을 반환한다. 전부 삭제된 경우(빈 컬렉션)와 구분된다.
        """

        return self._repo.load(user_id)

    def upsert_bookmark(self, user_id: str, bookmark: Bookmark) -> Bookmarks:
        """post_id 기준으로 북마크를 추가하거나 갱신한 뒤 컬렉션 전체를 저장한다.

        - 새 post_id: 그대로 추가하고, create_at 이 비어 있으면 create_at == modified_at 으로 기록한다.
        - 기존 post_id: modified_at 갱신, label_ids 전체 교체, title 은 값이 있을 때만 교체한다.
        """

        bookmarks = self._repo.load(user_id)
        if bookmarks is None:
            bookmarks = Bookmarks()

        now = self._clock()
        existing = bookmarks.get(bookmark.post_id)
        if existing is None:
            saved = bookmark.model_copy(deep=True)
            if saved.create_at == 0:
                saved.create_at = now
            saved.modified_at = now
            bookmarks.add(saved)
        else:
            bookmarks.update_times(bookmark.post_id, now)
            bookmarks.update_labels(bookmark)
            bookmarks.update_title(bookmark)

        self._repo.save(user_id, bookmarks)
        logger.info("bookmark saved (user_id=%s, post_id=%s)", user_id, bookmark.post_id)
        return bookmarks

    def get_bookmark(self, user_id: str, post_id: str) -> Bookmark:
        bookmarks = self._repo.load(user_id)
        bookmark = bookmarks.get(post_id) if bookmarks is not None else None
        if bookmark is None:
            raise NotFoundError(f"Bookmark `{post_id}` does not exist")
        return bookmark

    def delete_bookmark(self, user_id: str, post_id: str) -> Bookmark:
        """북마크를 삭제하고 삭제된 엔티티를 반환한다.

        컬렉션이 없거나 post_id 가 없으면 아무것도 저장하지 않고 예외를 발생시킨다.
        """

        bookmarks = self._repo.load(user_id)
        if bookmarks is None:
            raise NoBookmarksError("User doesn't have any bookmarks")

        bookmark = bookmarks.get(post_id)
        if bookmark is None:
            raise NotFoundError(f"Bookmark `{post_id}` does not exist")

        bookmarks.delete(post_id)
        self._repo.save(user_id, bookmarks)
        logger.info("bookmark deleted (user_id=%s, post_id=%s)", user_id, post_id)
        return bookmark

    def list_by_label_name(self, user_id: str, label_name: str) -> Bookmarks:
        """label_name 라벨이 붙은 북마크만 담은 컬렉션을 반환한다.

        라벨 이름 해석 실패(NoLabelsError/NotFoundError)는 그대로 전파한다.
        """

        label_id = self._labels.resolve_name_to_id(user_id, label_name)
        bookmarks = self._repo.load(user_id)
        if bookmarks is None:
            return Bookmarks()
        return bookmarks.with_label(label_id)

    def order_by_message_time(
        self,
        user_id: str,
        bookmarks: Bookmarks,
    ) -> list[Bookmark]:
        """원본 메시지 생성 시각 오름차순으로 정렬된 북마크 목록을 반환한다.

        - 조회 실패는 UpstreamLookupError 로 전파한다 (삭제된 메시지, 권한 없음 등).
        - 같은 시각이면 컬렉션 순서를 유지한다 (stable sort).
        """

        if self._messages is None:
            raise UpstreamLookupError("message lookup is not configured")

        keyed: list[tuple[int, Bookmark]] = []
        for bookmark in bookmarks:
            try:
                message = self._messages.get_message(bookmark.post_id)
            except BookmarkServiceError:
                raise
            except Exception as exc:  # noqa: BLE001
                logger.warning(
                    "message lookup failed (user_id=%s, post_id=%s): %s",
                    user_id,
                    bookmark.post_id,
                    exc,
                )
                raise UpstreamLookupError(
                    f"failed to fetch message {bookmark.post_id}: {exc}"
                ) from exc
            keyed.append((message.create_at, bookmark))

        keyed.sort(key=lambda item: item[0])
        return [bookmark for _, bookmark in keyed]

    def get_bookmark_label_ids(self, user_id: str, post_id: str) -> list[str]:
        return list(self.get_bookmark(user_id, post_id).label_ids)

    def get_bookmark_label_names(self, user_id: str, bookmark: Bookmark) -> list[str]:
        return self._labels.get_names_from_ids(user_id, bookmark.label_ids)


def get_bookmark_repository(
    store: KVStoreInterface = Depends(get_kv_store),
) -> BookmarkRepositoryInterface:
    """FastAPI DI용 BookmarkRepository 팩토리."""

    return BookmarkRepository(store)


def get_bookmarks_service(
    repo: BookmarkRepositoryInterface = Depends(get_bookmark_repository),
    labels: LabelsService = Depends(get_labels_service),
    messages: MessageLookupInterface | None = Depends(get_message_lookup),
) -> BookmarksService:
    """FastAPI DI용 BookmarksService 팩토리."""

    return BookmarksService(repo, labels, messages)
