from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from pydantic import BaseModel


class Label(BaseModel):
    """유저 정의 라벨. id 는 불변, name 은 유저 내에서 유일하다."""

    id: str
    name: str


@dataclass
class Labels:
    """한 유저의 라벨 컬렉션 (label id -> Label)."""

    by_id: dict[str, Label] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.by_id)

    def __iter__(self) -> Iterator[Label]:
        return iter(self.by_id.values())

    def add(self, label: Label) -> None:
        self.by_id[label.id] = label

    def get(self, label_id: str) -> Label | None:
        return self.by_id.get(label_id)

    def delete(self, label_id: str) -> None:
        self.by_id.pop(label_id, None)

    def get_by_name(self, name: str) -> Label | None:
        # 대소문자를 구분하는 완전 일치
        for label in self.by_id.values():
            if label.name == name:
                return label
        return None
