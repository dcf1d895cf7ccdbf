from __future__ import annotations

import json
from dataclasses import dataclass

import pytest

from bookmark_service.app.exceptions import (
    NoBookmarksError,
    NoLabelsError,
    NotFoundError,
    StorageError,
    UpstreamLookupError,
)
from bookmark_service.app.models.bookmark import Bookmark, Bookmarks
from bookmark_service.app.models.message import Message
from bookmark_service.app.repositories.bookmark_repository import (
    BookmarkRepository,
    get_bookmarks_key,
)
from bookmark_service.app.repositories.label_repository import LabelRepository
from bookmark_service.app.services.bookmarks_service import BookmarksService
from bookmark_service.app.services.labels_service import LabelsService


USER_ID = "user-001"


class FakeKVStore:
    def __init__(self) -> None:
        self.data: dict[str, bytes] = {}
        self.set_calls: list[str] = []
        self.fail_on_set = False

    def get(self, key: str) -> bytes | None:
        return self.data.get(key)

    def set(self, key: str, value: bytes) -> None:
        if self.fail_on_set:
            raise ConnectionError("kv store unavailable")
        self.set_calls.append(key)
        self.data[key] = value


class FakeMessageLookup:
    def __init__(self, create_at_by_post: dict[str, int]) -> None:
        self.create_at_by_post = create_at_by_post
        self.calls: list[str] = []

    def get_message(self, post_id: str) -> Message:
        self.calls.append(post_id)
        if post_id not in self.create_at_by_post:
            raise LookupError(f"post {post_id} was deleted")
        return Message(id=post_id, create_at=self.create_at_by_post[post_id])


class FakeClock:
    def __init__(self, start: int = 1_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now


@dataclass
class BookmarksServiceFixture:
    service: BookmarksService
    labels: LabelsService
    store: FakeKVStore
    clock: FakeClock
    messages: FakeMessageLookup


def _build_fixture(create_at_by_post: dict[str, int] | None = None) -> BookmarksServiceFixture:
    store = FakeKVStore()
    clock = FakeClock()
    messages = FakeMessageLookup(create_at_by_post or {})
    labels = LabelsService(LabelRepository(store))
    service = BookmarksService(
        BookmarkRepository(store),
        labels,
        messages=messages,
        clock=clock,
    )
    return BookmarksServiceFixture(
        service=service,
        labels=labels,
        store=store,
        clock=clock,
        messages=messages,
    )


def test_load_bookmarks_returns_none_for_user_who_never_saved() -> None:
    fixture = _build_fixture()

    assert fixture.service.load_bookmarks(USER_ID) is None


def test_upsert_new_bookmark_stamps_create_and_modified_time() -> None:
    fixture = _build_fixture()

    bookmarks = fixture.service.upsert_bookmark(
        USER_ID, Bookmark(post_id="post-1", title="첫 북마크")
    )

    saved = bookmarks.get("post-1")
    assert saved is not None
    assert saved.create_at == 1_000
    assert saved.modified_at == saved.create_at
    assert fixture.store.set_calls == [get_bookmarks_key(USER_ID)]


def test_upsert_existing_bookmark_keeps_single_entry_and_create_time() -> None:
    fixture = _build_fixture()
    fixture.service.upsert_bookmark(
        USER_ID, Bookmark(post_id="post-1", title="old", label_ids=["L1"])
    )

    fixture.clock.now = 5_000
    bookmarks = fixture.service.upsert_bookmark(
        USER_ID, Bookmark(post_id="post-1", title="new", label_ids=["L2", "L3"])
    )

    assert len(bookmarks) == 1
    saved = fixture.service.get_bookmark(USER_ID, "post-1")
    assert saved.create_at == 1_000
    assert saved.modified_at == 5_000
    assert saved.label_ids == ["L2", "L3"]
    assert saved.title == "new"


def test_upsert_existing_bookmark_without_title_keeps_previous_title() -> None:
    fixture = _build_fixture()
    fixture.service.upsert_bookmark(USER_ID, Bookmark(post_id="post-1", title="keep me"))

    fixture.service.upsert_bookmark(USER_ID, Bookmark(post_id="post-1", label_ids=[]))

    assert fixture.service.get_bookmark(USER_ID, "post-1").title == "keep me"


def test_upsert_existing_bookmark_replaces_labels_instead_of_merging() -> None:
    fixture = _build_fixture()
    fixture.service.upsert_bookmark(
        USER_ID, Bookmark(post_id="post-1", label_ids=["L1", "L2"])
    )

    fixture.service.upsert_bookmark(USER_ID, Bookmark(post_id="post-1", label_ids=[]))

    assert fixture.service.get_bookmark_label_ids(USER_ID, "post-1") == []


def test_upsert_legacy_bookmark_without_create_time_stamps_both_times() -> None:
    fixture = _build_fixture()
    legacy = {"ByID": {"post-1": {"postid": "post-1", "title": "", "createAt": 0, "modifiedAt": 0}}}
    fixture.store.data[get_bookmarks_key(USER_ID)] = json.dumps(legacy).encode()

    fixture.clock.now = 7_000
    fixture.service.upsert_bookmark(USER_ID, Bookmark(post_id="post-1"))

    saved = fixture.service.get_bookmark(USER_ID, "post-1")
    assert saved.create_at == 7_000
    assert saved.modified_at == 7_000


def test_upsert_raises_storage_error_when_kv_set_fails() -> None:
    fixture = _build_fixture()
    fixture.store.fail_on_set = True

    with pytest.raises(StorageError):
        fixture.service.upsert_bookmark(USER_ID, Bookmark(post_id="post-1"))


def test_get_bookmark_raises_not_found_without_collection_or_entry() -> None:
    fixture = _build_fixture()

    with pytest.raises(NotFoundError):
        fixture.service.get_bookmark(USER_ID, "post-1")

    fixture.service.upsert_bookmark(USER_ID, Bookmark(post_id="post-1"))
    with pytest.raises(NotFoundError):
        fixture.service.get_bookmark(USER_ID, "post-2")


def test_delete_bookmark_without_collection_raises_no_bookmarks() -> None:
    fixture = _build_fixture()

    with pytest.raises(NoBookmarksError):
        fixture.service.delete_bookmark(USER_ID, "post-1")

    assert fixture.store.set_calls == []


def test_delete_unknown_bookmark_raises_not_found_and_does_not_write() -> None:
    fixture = _build_fixture()
    fixture.service.upsert_bookmark(USER_ID, Bookmark(post_id="post-1"))
    before = dict(fixture.store.data)
    fixture.store.set_calls.clear()

    with pytest.raises(NotFoundError):
        fixture.service.delete_bookmark(USER_ID, "post-2")

    assert fixture.store.set_calls == []
    assert fixture.store.data == before


def test_delete_last_bookmark_leaves_empty_collection_not_missing() -> None:
    fixture = _build_fixture()
    fixture.service.upsert_bookmark(USER_ID, Bookmark(post_id="post-1", title="t"))

    removed = fixture.service.delete_bookmark(USER_ID, "post-1")

    assert removed.post_id == "post-1"
    assert removed.title == "t"
    remaining = fixture.service.load_bookmarks(USER_ID)
    assert remaining is not None
    assert len(remaining) == 0


def test_list_by_label_name_returns_only_bookmarks_with_label() -> None:
    fixture = _build_fixture()
    l1 = fixture.labels.add_label(USER_ID, "L1")
    l2 = fixture.labels.add_label(USER_ID, "L2")
    fixture.service.upsert_bookmark(USER_ID, Bookmark(post_id="A", label_ids=[l1.id]))
    fixture.service.upsert_bookmark(USER_ID, Bookmark(post_id="B", label_ids=[]))
    fixture.service.upsert_bookmark(
        USER_ID, Bookmark(post_id="C", label_ids=[l1.id, l2.id])
    )

    filtered = fixture.service.list_by_label_name(USER_ID, "L1")

    assert sorted(b.post_id for b in filtered) == ["A", "C"]


def test_list_by_label_name_returns_empty_collection_when_nothing_matches() -> None:
    fixture = _build_fixture()
    fixture.labels.add_label(USER_ID, "unused")
    fixture.service.upsert_bookmark(USER_ID, Bookmark(post_id="A"))

    filtered = fixture.service.list_by_label_name(USER_ID, "unused")

    assert isinstance(filtered, Bookmarks)
    assert len(filtered) == 0


def test_list_by_label_name_propagates_label_resolution_errors() -> None:
    fixture = _build_fixture()
    fixture.service.upsert_bookmark(USER_ID, Bookmark(post_id="A"))

    with pytest.raises(NoLabelsError):
        fixture.service.list_by_label_name(USER_ID, "L1")

    fixture.labels.add_label(USER_ID, "L2")
    with pytest.raises(NotFoundError):
        fixture.service.list_by_label_name(USER_ID, "L1")


def test_order_by_message_time_sorts_ascending_by_message_create_at() -> None:
    fixture = _build_fixture({"p300": 300, "p100": 100, "p200": 200})
    for post_id in ("p300", "p100", "p200"):
        fixture.service.upsert_bookmark(USER_ID, Bookmark(post_id=post_id))
    bookmarks = fixture.service.load_bookmarks(USER_ID)
    assert bookmarks is not None

    ordered = fixture.service.order_by_message_time(USER_ID, bookmarks)

    assert [b.post_id for b in ordered] == ["p100", "p200", "p300"]


def test_order_by_message_time_keeps_bookmarks_with_equal_timestamps() -> None:
    fixture = _build_fixture({"a": 100, "b": 100, "c": 50})
    bookmarks = Bookmarks()
    for post_id in ("a", "b", "c"):
        bookmarks.add(Bookmark(post_id=post_id))

    ordered = fixture.service.order_by_message_time(USER_ID, bookmarks)

    assert [b.post_id for b in ordered] == ["c", "a", "b"]


def test_order_by_message_time_wraps_lookup_failures() -> None:
    fixture = _build_fixture({"alive": 1})
    bookmarks = Bookmarks()
    bookmarks.add(Bookmark(post_id="alive"))
    bookmarks.add(Bookmark(post_id="deleted"))

    with pytest.raises(UpstreamLookupError):
        fixture.service.order_by_message_time(USER_ID, bookmarks)


def test_order_by_message_time_without_lookup_configured_fails() -> None:
    store = FakeKVStore()
    service = BookmarksService(BookmarkRepository(store), LabelsService(LabelRepository(store)))
    bookmarks = Bookmarks()
    bookmarks.add(Bookmark(post_id="a"))

    with pytest.raises(UpstreamLookupError):
        service.order_by_message_time(USER_ID, bookmarks)


def test_get_bookmark_label_names_resolves_attached_labels() -> None:
    fixture = _build_fixture()
    ids = fixture.labels.get_ids_from_names(USER_ID, ["work", "later"])
    fixture.service.upsert_bookmark(USER_ID, Bookmark(post_id="A", label_ids=ids))

    bookmark = fixture.service.get_bookmark(USER_ID, "A")

    assert fixture.service.get_bookmark_label_names(USER_ID, bookmark) == ["work", "later"]


def test_collections_are_private_per_user() -> None:
    fixture = _build_fixture()
    fixture.service.upsert_bookmark("alice", Bookmark(post_id="A"))

    assert fixture.service.load_bookmarks("bob") is None
    with pytest.raises(NotFoundError):
        fixture.service.get_bookmark("bob", "A")
