from __future__ import annotations

from typing import Protocol

from ..models.bookmark import Bookmarks
from ..models.label import Labels
from ..models.message import Message


class KVStoreInterface(Protocol):
    """영속화 어댑터가 따라야 할 최소한의 계약 (키 -> 바이트 blob).

    - get 은 키가 없으면 None 을 반환한다.
    - set 은 실패 시 예외를 발생시킨다.
    """

    def get(self, key: str) -> bytes | None:  # pragma: no cover - Protocol
        ...

    def set(self, key: str, value: bytes) -> None:  # pragma: no cover - Protocol
        ...


class MessageLookupInterface(Protocol):
    """채팅 플랫폼에서 메시지를 조회하는 협력자 계약."""

    def get_message(self, post_id: str) -> Message:  # pragma: no cover - Protocol
        ...


class BookmarkRepositoryInterface(Protocol):
    """BookmarkRepository가 따라야 할 최소한의 계약.

    - 유저별 북마크 컬렉션 전체를 하나의 단위로 읽고 쓴다.
    - 저장된 적이 없으면 load 는 None 을 반환한다 (빈 컬렉션과 구분).
    """

    def load(self, user_id: str) -> Bookmarks | None:  # pragma: no cover - Protocol
        ...

    def save(
        self, user_id: str, bookmarks: Bookmarks
    ) -> None:  # pragma: no cover - Protocol
        ...


class LabelRepositoryInterface(Protocol):
    """LabelRepository가 따라야 할 최소한의 계약."""

    def load(self, user_id: str) -> Labels | None:  # pragma: no cover - Protocol
        ...

    def save(self, user_id: str, labels: Labels) -> None:  # pragma: no cover - Protocol
        ...
