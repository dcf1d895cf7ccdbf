from __future__ import annotations

import logging

import httpx

from ..config import MessageApiConfig, get_settings
from ..exceptions import UpstreamLookupError
from ..models.message import Message
from ..repositories.interfaces import MessageLookupInterface


logger = logging.getLogger(__name__)


class HttpMessageLookup(MessageLookupInterface):
    """채팅 플랫폼 REST API(GET /api/v4/posts/{post_id})로 메시지를 조회한다.

    타임아웃 이외의 재시도/취소 정책은 두지 않고, 모든 실패를 UpstreamLookupError 로 올린다.
    """

    def __init__(self, config: MessageApiConfig, client: httpx.Client | None = None) -> None:
        self._config = config
        self._client = client

    def _build_client(self) -> httpx.Client:
        headers = {"Accept": "application/json"}
        if self._config.token:
            headers["Authorization"] = f"Bearer {self._config.token}"
        return httpx.Client(
            base_url=self._config.base_url,
            timeout=self._config.timeout_seconds,
            headers=headers,
        )

    def get_message(self, post_id: str) -> Message:
        client = self._client or self._build_client()
        try:
            resp = client.get(f"/api/v4/posts/{post_id}")
        except httpx.RequestError as exc:
            raise UpstreamLookupError(f"failed to fetch message {post_id}: {exc}") from exc
        finally:
            if self._client is None:
                client.close()

        if resp.status_code != 200:
            body_sample = resp.text[:500]
            logger.warning(
                "message lookup failed (post_id=%s, status=%s)", post_id, resp.status_code
            )
            raise UpstreamLookupError(
                f"failed to fetch message {post_id}: status code {resp.status_code}, "
                f"body: {body_sample}",
            )

        try:
            data = resp.json()
            return Message(id=str(data.get("id") or post_id), create_at=int(data["create_at"]))
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise UpstreamLookupError(
                f"unexpected message payload for {post_id}: {exc}"
            ) from exc


def get_message_lookup() -> MessageLookupInterface | None:
    """FastAPI DI용 메시지 조회 클라이언트 팩토리.

    MESSAGE_API_URL 이 설정되지 않았으면 None 을 반환한다.
    """

    config = get_settings().message_api
    if config is None:
        return None
    return HttpMessageLookup(config)
