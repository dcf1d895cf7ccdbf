from __future__ import annotations

import logging
from typing import Callable

from fastapi import Depends

from ..exceptions import ConflictError, NoLabelsError, NotFoundError
from ..ids import new_id
from ..models.label import Label, Labels
from ..repositories.interfaces import KVStoreInterface, LabelRepositoryInterface
from ..repositories.kv_store import get_kv_store
from ..repositories.label_repository import LabelRepository


logger = logging.getLogger(__name__)


class LabelsService:
    """유저 라벨 관리 비즈니스 로직.

    - Repository(LabelRepositoryInterface)에만 의존하고, KV 저장소 세부 구현은 알지 않는다.
    - 라벨 이름은 사람이 쓰는 핸들, ID 는 북마크가 참조하는 저장용 핸들이다.
    """

    def __init__(
        self,
        repo: LabelRepositoryInterface,
        id_factory: Callable[[], str] = new_id,
    ) -> None:
        self._repo = repo
        self._id_factory = id_factory

    def load_labels(self, user_id: str) -> Labels:
        """유저의 라벨 컬렉션을 반환한다. 저장된 적이 없으면 빈 컬렉션을 반환한다."""

        labels = self._repo.load(user_id)
        if labels is None:
            return Labels()
        return labels

    def add_label(self, user_id: str, name: str) -> Label:
        """새 라벨을 생성해 저장한다.

        같은 이름(대소문자 구분)의 라벨이 이미 있으면 ConflictError 를 발생시키고 아무것도 바꾸지 않는다.
        """

        labels = self.load_labels(user_id)
        existing = labels.get_by_name(name)
        if existing is not None:
            raise ConflictError(f"Label with name `{existing.name}` already exists")

        label = Label(id=self._id_factory(), name=name)
        labels.add(label)
        self._repo.save(user_id, labels)
        logger.info("label created (user_id=%s, label_id=%s)", user_id, label.id)
        return label

    def resolve_name_to_id(self, user_id: str, name: str) -> str:
        labels = self._repo.load(user_id)
        if labels is None:
            raise NoLabelsError("User does not have any labels")

        label = labels.get_by_name(name)
        if label is None:
            raise NotFoundError(f"Label: `{name}` does not exist")
        return label.id

    def resolve_id_to_name(self, user_id: str, label_id: str) -> str:
        labels = self.load_labels(user_id)
        label = labels.get(label_id)
        if label is None:
            raise NotFoundError(f"Label with ID `{label_id}` does not exist")
        return label.name

    def delete_label(self, user_id: str, label_id: str) -> None:
        """라벨을 삭제한다. 존재하지 않아도 에러 없이 컬렉션을 다시 저장한다."""

        labels = self.load_labels(user_id)
        labels.delete(label_id)
        self._repo.save(user_id, labels)

    def get_ids_from_names(self, user_id: str, names: list[str]) -> list[str]:
        """라벨 이름 목록을 ID 목록으로 변환한다.

        - 아직 없는 이름은 새 라벨로 생성하고, 컬렉션을 한 번만 저장한다.
        - 결과 순서는 names 순서를 따르며, 중복 이름은 한 번만 포함된다.
        """

        labels = self.load_labels(user_id)
        ids: list[str] = []
        created = False
        for name in names:
            label = labels.get_by_name(name)
            if label is None:
                label = Label(id=self._id_factory(), name=name)
                labels.add(label)
                created = True
                logger.info("label created (user_id=%s, label_id=%s)", user_id, label.id)
            if label.id not in ids:
                ids.append(label.id)

        if created:
            self._repo.save(user_id, labels)
        return ids

    def get_names_from_ids(self, user_id: str, label_ids: list[str]) -> list[str]:
        labels = self.load_labels(user_id)
        names: list[str] = []
        for label_id in label_ids:
            label = labels.get(label_id)
            if label is None:
                raise NotFoundError(f"Label with ID `{label_id}` does not exist")
            names.append(label.name)
        return names


def get_label_repository(
    store: KVStoreInterface = Depends(get_kv_store),
) -> LabelRepositoryInterface:
    """FastAPI DI용 LabelRepository 팩토리."""

    return LabelRepository(store)


def get_labels_service(
    repo: LabelRepositoryInterface = Depends(get_label_repository),
) -> LabelsService:
    """FastAPI DI용 LabelsService 팩토리."""

    return LabelsService(repo)
