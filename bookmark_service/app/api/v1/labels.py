from __future__ import annotations

from fastapi import APIRouter, Depends

from ..deps import get_user_id
from ..schemas.labels import (
    LabelCreateRequest,
    LabelDeleteRequest,
    LabelItem,
    ListLabelsResponse,
)
from ...services.labels_service import LabelsService, get_labels_service


router = APIRouter()


@router.get("/get", response_model=ListLabelsResponse, summary="라벨 목록 조회")
def get_labels(
    user_id: str = Depends(get_user_id),
    service: LabelsService = Depends(get_labels_service),
) -> ListLabelsResponse:
    labels = service.load_labels(user_id)
    items = sorted(
        (LabelItem.from_domain(label) for label in labels), key=lambda item: item.name
    )
    return ListLabelsResponse(total=len(items), items=items)


@router.post("/add", response_model=LabelItem, summary="라벨 추가")
def add_label(
    body: LabelCreateRequest,
    user_id: str = Depends(get_user_id),
    service: LabelsService = Depends(get_labels_service),
) -> LabelItem:
    label = service.add_label(user_id, body.name)
    return LabelItem.from_domain(label)


@router.post("/delete", summary="라벨 삭제")
def delete_label(
    body: LabelDeleteRequest,
    user_id: str = Depends(get_user_id),
    service: LabelsService = Depends(get_labels_service),
) -> dict[str, str]:
    service.delete_label(user_id, body.id)
    return {"message": "label_deleted"}
