from __future__ import annotations

from pydantic import BaseModel, Field

from ...models.label import Label


class LabelCreateRequest(BaseModel):
    name: str = Field(min_length=1)


class LabelDeleteRequest(BaseModel):
    id: str = Field(min_length=1)


class LabelItem(BaseModel):
    id: str
    name: str

    @classmethod
    def from_domain(cls, label: Label) -> "LabelItem":
        return cls(id=label.id, name=label.name)


class ListLabelsResponse(BaseModel):
    total: int
    items: list[LabelItem]
