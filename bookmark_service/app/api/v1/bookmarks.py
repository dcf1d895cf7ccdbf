from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from ..deps import get_user_id
from ..schemas.bookmarks import (
    BookmarkAddRequest,
    BookmarkDeleteRequest,
    BookmarkItem,
    ViewBookmarksResponse,
)
from ...exceptions import NoBookmarksError
from ...models.bookmark import Bookmark
from ...services.bookmarks_service import BookmarksService, get_bookmarks_service
from ...services.labels_service import LabelsService, get_labels_service


router = APIRouter()


def _to_item(service: BookmarksService, user_id: str, bookmark: Bookmark) -> BookmarkItem:
    label_names = service.get_bookmark_label_names(user_id, bookmark)
    return BookmarkItem.from_domain(bookmark, label_names)


@router.post(
    "/add",
    response_model=BookmarkItem,
    summary="북마크 저장 (이미 있으면 갱신)",
)
def add_bookmark(
    body: BookmarkAddRequest,
    user_id: str = Depends(get_user_id),
    service: BookmarksService = Depends(get_bookmarks_service),
    labels: LabelsService = Depends(get_labels_service),
) -> BookmarkItem:
    # 클라이언트는 라벨을 이름으로 보내므로 ID 로 변환한다 (없는 이름은 새로 생성).
    label_ids = labels.get_ids_from_names(user_id, body.bookmark.label_names)
    incoming = Bookmark(
        post_id=body.bookmark.post_id,
        title=body.bookmark.title,
        label_ids=label_ids,
    )
    bookmarks = service.upsert_bookmark(user_id, incoming)
    saved = bookmarks.get(incoming.post_id)
    assert saved is not None
    return _to_item(service, user_id, saved)


@router.get(
    "/get",
    response_model=BookmarkItem,
    summary="북마크 단건 조회",
)
def get_bookmark(
    post_id: str = Query(..., alias="postID", min_length=1, description="북마크한 메시지 ID"),
    user_id: str = Depends(get_user_id),
    service: BookmarksService = Depends(get_bookmarks_service),
) -> BookmarkItem:
    bookmark = service.get_bookmark(user_id, post_id)
    return _to_item(service, user_id, bookmark)


@router.get(
    "/view",
    response_model=ViewBookmarksResponse,
    summary="북마크 목록 조회 (메시지 생성 시각 순)",
)
def view_bookmarks(
    label: str | None = Query(None, description="이 라벨이 붙은 북마크만 조회"),
    user_id: str = Depends(get_user_id),
    service: BookmarksService = Depends(get_bookmarks_service),
) -> ViewBookmarksResponse:
    if label:
        bookmarks = service.list_by_label_name(user_id, label)
    else:
        loaded = service.load_bookmarks(user_id)
        if loaded is None:
            raise NoBookmarksError("User doesn't have any bookmarks")
        bookmarks = loaded

    ordered = service.order_by_message_time(user_id, bookmarks)
    items = [_to_item(service, user_id, b) for b in ordered]
    return ViewBookmarksResponse(total=len(items), items=items)


@router.post(
    "/delete",
    response_model=BookmarkItem,
    summary="북마크 삭제",
)
def delete_bookmark(
    body: BookmarkDeleteRequest,
    user_id: str = Depends(get_user_id),
    service: BookmarksService = Depends(get_bookmarks_service),
) -> BookmarkItem:
    bookmark = service.delete_bookmark(user_id, body.post_id)
    return BookmarkItem.from_domain(bookmark, label_names=[])
