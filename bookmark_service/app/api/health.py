from __future__ import annotations

from fastapi import APIRouter, Depends

from ..config import BookmarkServiceSettings, get_settings


router = APIRouter()


@router.get("/health", summary="헬스 체크")
def health(
    settings: BookmarkServiceSettings = Depends(get_settings),
) -> dict[str, str]:
    return {"status": "ok", "kv_store": settings.kv_store_backend}
