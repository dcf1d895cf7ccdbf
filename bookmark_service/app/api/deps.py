from __future__ import annotations

from fastapi import Depends, HTTPException, Request, status

from ..config import BookmarkServiceSettings, get_settings


def get_user_id(
    request: Request,
    settings: BookmarkServiceSettings = Depends(get_settings),
) -> str:
    """게이트웨이가 인증 후 전달한 유저 ID 헤더를 읽는다.

    헤더가 없으면 코어에 도달하기 전에 401 로 거절한다.
    """

    user_id = request.headers.get(settings.user_id_header, "").strip()
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authorized")
    return user_id
