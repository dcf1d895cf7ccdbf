from __future__ import annotations

from pydantic import BaseModel


class Message(BaseModel):
    """북마크 대상 채팅 메시지 중 정렬에 필요한 최소 정보."""

    id: str
    create_at: int
