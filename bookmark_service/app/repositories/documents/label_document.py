from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...models.label import Label, Labels


class LabelEntryDocument(BaseModel):
    """KV 저장소 labels_<user_id> 값 안의 개별 라벨 레코드."""

    id: str = ""
    name: str


class LabelsDocument(BaseModel):
    """labels_<user_id> 키에 저장되는 라벨 컬렉션 전체."""

    model_config = ConfigDict(populate_by_name=True)

    by_id: dict[str, LabelEntryDocument] = Field(default_factory=dict, alias="ByID")

    @field_validator("by_id", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @classmethod
    def from_domain(cls, labels: Labels) -> "LabelsDocument":
        return cls(
            by_id={
                label_id: LabelEntryDocument(id=label.id, name=label.name)
                for label_id, label in labels.by_id.items()
            }
        )

    def to_domain(self) -> Labels:
        labels = Labels()
        for label_id, entry in self.by_id.items():
            # 예전 레코드에는 id 필드가 없고 맵 키로만 식별된다.
            labels.add(Label(id=entry.id or label_id, name=entry.name))
        return labels

    def to_bytes(self) -> bytes:
        return json.dumps(self.model_dump(by_alias=True), ensure_ascii=False).encode(
            "utf-8"
        )

    @classmethod
    def from_bytes(cls, raw: bytes) -> "LabelsDocument":
        return cls.model_validate_json(raw)
