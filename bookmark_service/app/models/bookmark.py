from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from pydantic import BaseModel, Field, field_validator


class Bookmark(BaseModel):
    """유저가 저장한 메시지 북마크 도메인 모델.

    - post_id 가 곧 북마크의 식별자다 (별도 bookmark id 없음).
    - create_at / modified_at 은 epoch 밀리초이며, 0 은 "아직 기록되지 않음" 을 의미한다.
    """

    post_id: str
    title: str = ""
    create_at: int = 0
    modified_at: int = 0
    label_ids: list[str] = Field(default_factory=list)

    @field_validator("post_id")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("post_id must not be blank")
        return value

    @field_validator("label_ids", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return [] if value is None else value


@dataclass
class Bookmarks:
    """한 유저의 북마크 컬렉션 (post_id -> Bookmark)."""

    by_id: dict[str, Bookmark] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.by_id)

    def __iter__(self) -> Iterator[Bookmark]:
        return iter(self.by_id.values())

    def add(self, bookmark: Bookmark) -> None:
        self.by_id[bookmark.post_id] = bookmark

    def get(self, post_id: str) -> Bookmark | None:
        return self.by_id.get(post_id)

    def delete(self, post_id: str) -> Bookmark | None:
        return self.by_id.pop(post_id, None)

    def update_times(self, post_id: str, now: int) -> Bookmark:
        """기존 북마크의 수정 시각을 갱신한다.

        create_at 이 한 번도 기록되지 않은(0) 레거시 북마크라면 생성 시각도 함께 채운다.
        """

        bookmark = self.by_id[post_id]
        if bookmark.create_at == 0:
            bookmark.create_at = now
        bookmark.modified_at = now
        return bookmark

    def update_labels(self, incoming: Bookmark) -> Bookmark:
        # 병합하지 않고 전체 교체한다.
        bookmark = self.by_id[incoming.post_id]
        bookmark.label_ids = list(incoming.label_ids)
        return bookmark

    def update_title(self, incoming: Bookmark) -> Bookmark:
        bookmark = self.by_id[incoming.post_id]
        if incoming.title:
            bookmark.title = incoming.title
        return bookmark

    def with_label(self, label_id: str) -> "Bookmarks":
        """label_id 가 붙은 북마크만 담은 새 컬렉션을 반환한다."""

        filtered = Bookmarks()
        for bookmark in self.by_id.values():
            if label_id in bookmark.label_ids:
                filtered.add(bookmark)
        return filtered
