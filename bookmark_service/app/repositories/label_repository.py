from __future__ import annotations

import logging

from pydantic import ValidationError

from ..exceptions import StorageError
from ..models.label import Labels
from .documents.label_document import LabelsDocument
from .interfaces import KVStoreInterface, LabelRepositoryInterface


logger = logging.getLogger(__name__)

STORE_LABELS_KEY = "labels"


def get_labels_key(user_id: str) -> str:
    return f"{STORE_LABELS_KEY}_{user_id}"


class LabelRepository(LabelRepositoryInterface):
    """labels_<user_id> 키에 대한 KV 저장소 접근 레이어."""

    def __init__(self, store: KVStoreInterface) -> None:
        self._store = store

    def load(self, user_id: str) -> Labels | None:
        key = get_labels_key(user_id)
        try:
            raw = self._store.get(key)
        except Exception as exc:  # noqa: BLE001
            logger.exception("failed to read labels (key=%s)", key)
            raise StorageError(f"failed to read labels: {exc}") from exc

        if raw is None:
            return None

        try:
            return LabelsDocument.from_bytes(raw).to_domain()
        except ValidationError as exc:
            raise StorageError(f"stored labels are not decodable: {exc}") from exc

    def save(self, user_id: str, labels: Labels) -> None:
        key = get_labels_key(user_id)
        payload = LabelsDocument.from_domain(labels).to_bytes()
        try:
            self._store.set(key, payload)
        except Exception as exc:  # noqa: BLE001
            logger.exception("failed to store labels (key=%s)", key)
            raise StorageError(f"failed to store labels: {exc}") from exc
