from __future__ import annotations

import json
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ...models.bookmark import Bookmark, Bookmarks


class BookmarkEntryDocument(BaseModel):
    """KV 저장소 bookmarks_<user_id> 값 안의 개별 북마크 레코드."""

    model_config = ConfigDict(populate_by_name=True)

    post_id: str = Field(alias="postid")
    title: str = ""
    create_at: int = Field(default=0, alias="createAt")
    modified_at: int = Field(default=0, alias="modifiedAt")
    # 예전 레코드는 "labels:omitempty" 라는 키로 저장되어 있으므로 읽을 때 함께 허용한다.
    label_ids: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("labelIds", "labels:omitempty"),
        serialization_alias="labelIds",
    )

    @field_validator("label_ids", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @classmethod
    def from_domain(cls, bookmark: Bookmark) -> "BookmarkEntryDocument":
        return cls(
            post_id=bookmark.post_id,
            title=bookmark.title,
            create_at=bookmark.create_at,
            modified_at=bookmark.modified_at,
            label_ids=list(bookmark.label_ids),
        )

    def to_domain(self) -> Bookmark:
        return Bookmark(
            post_id=self.post_id,
            title=self.title,
            create_at=self.create_at,
            modified_at=self.modified_at,
            label_ids=list(self.label_ids),
        )

    def to_record(self) -> dict[str, Any]:
        record = self.model_dump(by_alias=True)
        # 빈 라벨 목록은 저장하지 않는다 (omitempty)
        if not record.get("labelIds"):
            record.pop("labelIds", None)
        return record


class BookmarksDocument(BaseModel):
    """bookmarks_<user_id> 키에 저장되는 북마크 컬렉션 전체."""

    model_config = ConfigDict(populate_by_name=True)

    by_id: dict[str, BookmarkEntryDocument] = Field(default_factory=dict, alias="ByID")

    @field_validator("by_id", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @classmethod
    def from_domain(cls, bookmarks: Bookmarks) -> "BookmarksDocument":
        return cls(
            by_id={
                post_id: BookmarkEntryDocument.from_domain(bookmark)
                for post_id, bookmark in bookmarks.by_id.items()
            }
        )

    def to_domain(self) -> Bookmarks:
        bookmarks = Bookmarks()
        for entry in self.by_id.values():
            bookmarks.add(entry.to_domain())
        return bookmarks

    def to_bytes(self) -> bytes:
        record = {"ByID": {key: entry.to_record() for key, entry in self.by_id.items()}}
        return json.dumps(record, ensure_ascii=False).encode("utf-8")

    @classmethod
    def from_bytes(cls, raw: bytes) -> "BookmarksDocument":
        return cls.model_validate_json(raw)
