from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


KV_STORE_BACKEND_ENV = "KV_STORE_BACKEND"
KV_STORE_COLLECTION_ENV = "KV_STORE_COLLECTION"
MESSAGE_API_URL_ENV = "MESSAGE_API_URL"
MESSAGE_API_TOKEN_ENV = "MESSAGE_API_TOKEN"
MESSAGE_API_TIMEOUT_ENV = "MESSAGE_API_TIMEOUT_SECONDS"
USER_ID_HEADER_ENV = "USER_ID_HEADER"
PORT_ENV = "BOOKMARK_SERVICE_PORT"

SUPPORTED_BACKENDS = ("mongo", "memory")


@dataclass(slots=True)
class MessageApiConfig:
    base_url: str
    token: str | None
    timeout_seconds: float = 10.0


@dataclass(slots=True)
class BookmarkServiceSettings:
    """bookmark-service 전체 설정 루트.

    - 모든 값은 환경 변수에서 읽는다.
    - message_api 가 None 이면 메시지 조회(정렬)가 필요한 요청은 실패한다.
    """

    kv_store_backend: str
    kv_store_collection: str
    user_id_header: str
    port: int
    message_api: MessageApiConfig | None


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise RuntimeError(f"invalid {name}: {raw!r}") from exc


def get_kv_store_backend() -> str:
    value = os.getenv(KV_STORE_BACKEND_ENV, "mongo").strip().lower() or "mongo"
    if value not in SUPPORTED_BACKENDS:
        raise RuntimeError(
            f"{KV_STORE_BACKEND_ENV} must be one of {SUPPORTED_BACKENDS}, got {value!r}",
        )
    return value


def get_message_api_config() -> MessageApiConfig | None:
    """채팅 플랫폼 메시지 API 설정을 반환한다.

    MESSAGE_API_URL 이 없으면 None 을 반환한다.
    """

    base_url = os.getenv(MESSAGE_API_URL_ENV, "").strip()
    if not base_url:
        return None
    token = os.getenv(MESSAGE_API_TOKEN_ENV, "").strip() or None
    timeout = _get_float(MESSAGE_API_TIMEOUT_ENV, 10.0)
    return MessageApiConfig(
        base_url=base_url.rstrip("/"), token=token, timeout_seconds=timeout
    )


def load_settings() -> BookmarkServiceSettings:
    """bookmark-service 설정을 로드하여 BookmarkServiceSettings 로 반환한다."""

    raw_port = os.getenv(PORT_ENV, "8003")
    try:
        port = int(raw_port)
    except ValueError as exc:
        raise RuntimeError(f"invalid {PORT_ENV}: {raw_port!r}") from exc

    return BookmarkServiceSettings(
        kv_store_backend=get_kv_store_backend(),
        kv_store_collection=os.getenv(KV_STORE_COLLECTION_ENV, "kv_store").strip()
        or "kv_store",
        user_id_header=os.getenv(USER_ID_HEADER_ENV, "X-User-Id").strip()
        or "X-User-Id",
        port=port,
        message_api=get_message_api_config(),
    )


@lru_cache(maxsize=1)
def get_settings() -> BookmarkServiceSettings:
    """프로세스 전역 설정 싱글톤 (FastAPI DI 에서도 사용)."""

    return load_settings()
