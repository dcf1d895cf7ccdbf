from __future__ import annotations

from pydantic import BaseModel, Field

from ...models.bookmark import Bookmark


class BookmarkInput(BaseModel):
    """저장 요청에 담기는 북마크. 라벨은 이름으로 전달받는다."""

    post_id: str = Field(min_length=1)
    title: str = ""
    label_names: list[str] = Field(default_factory=list)


class BookmarkAddRequest(BaseModel):
    bookmark: BookmarkInput
    channel_id: str | None = None


class BookmarkDeleteRequest(BaseModel):
    post_id: str = Field(min_length=1)


class BookmarkItem(BaseModel):
    post_id: str
    title: str
    create_at: int
    modified_at: int
    label_ids: list[str]
    label_names: list[str]

    @classmethod
    def from_domain(cls, bookmark: Bookmark, label_names: list[str]) -> "BookmarkItem":
        return cls(
            post_id=bookmark.post_id,
            title=bookmark.title,
            create_at=bookmark.create_at,
            modified_at=bookmark.modified_at,
            label_ids=list(bookmark.label_ids),
            label_names=label_names,
        )


class ViewBookmarksResponse(BaseModel):
    """메시지 생성 시각 오름차순으로 정렬된 북마크 목록."""

    total: int
    items: list[BookmarkItem]
