from __future__ import annotations

import re
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

# Garante que o pacote chatboard seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from chatboard.core.config import ID_STRATEGY_LENGTH, ID_STRATEGY_SEQUENCE  # noqa: E402
from chatboard.repositories.json_storage import (  # noqa: E402
    JSONMessageStore,
    StorageReadError,
    StorageWriteError,
)
from chatboard.services.message_service import MessageNotFoundError, MessageService  # noqa: E402

ISO_UTC = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


@pytest.fixture()
def store(tmp_path):
    return JSONMessageStore(tmp_path / "data.json")


def _ids(svc: MessageService) -> list:
    return [msg["id"] for msg in svc.list_messages()]


@pytest.mark.parametrize("strategy", [ID_STRATEGY_SEQUENCE, ID_STRATEGY_LENGTH])
def test_ids_increase_from_one_without_deletes(store, strategy):
    svc = MessageService(store, strategy)
    created = [svc.create_message("u", f"m{i}").id for i in range(5)]
    assert created == [1, 2, 3, 4, 5]
    assert _ids(svc) == created


def test_create_sets_timestamp_and_keeps_raw_fields(store):
    svc = MessageService(store)
    message = svc.create_message(None, 42)
    assert message.user is None
    assert message.text == 42
    assert ISO_UTC.match(message.timestamp)
    assert svc.list_messages() == [message.as_dict()]


def test_length_strategy_reissues_surviving_id(store):
    svc = MessageService(store, ID_STRATEGY_LENGTH)
    for text in ("one", "two", "three"):
        svc.create_message("u", text)
    svc.delete_message(2)

    new = svc.create_message("u", "four")

    assert new.id == 3
    assert _ids(svc) == [1, 3, 3]


def test_sequence_strategy_never_reissues_ids(store):
    svc = MessageService(store, ID_STRATEGY_SEQUENCE)
    for text in ("one", "two", "three"):
        svc.create_message("u", text)
    svc.delete_message(3)

    assert svc.create_message("u", "four").id == 4
    assert store.load()["last_id"] == 4


def test_sequence_strategy_derives_counter_from_legacy_file(store):
    store.save({"messages": [{"id": 7, "user": "u", "text": "x", "timestamp": "t"}]})
    svc = MessageService(store, ID_STRATEGY_SEQUENCE)
    assert svc.create_message("u", "y").id == 8


def test_delete_removes_every_duplicate(store):
    store.save(
        {
            "messages": [
                {"id": 1, "user": "a", "text": "x", "timestamp": "t"},
                {"id": 2, "user": "b", "text": "y", "timestamp": "t"},
                {"id": 1, "user": "c", "text": "z", "timestamp": "t"},
            ]
        }
    )
    svc = MessageService(store)
    assert svc.delete_message(1) == 2
    assert _ids(svc) == [2]


@pytest.mark.parametrize("missing", [99, None])
def test_delete_missing_id_raises_and_leaves_file_untouched(store, missing):
    svc = MessageService(store)
    svc.create_message("a", "hi")
    before = store.path.read_bytes()

    with pytest.raises(MessageNotFoundError):
        svc.delete_message(missing)

    assert store.path.read_bytes() == before


def test_list_on_missing_file_is_empty(store):
    assert MessageService(store).list_messages() == []


def test_storage_errors_propagate(store, monkeypatch):
    svc = MessageService(store)
    store.path.write_text("{broken", encoding="utf-8")
    with pytest.raises(StorageReadError):
        svc.list_messages()

    store.save({"messages": []})

    def _fail(collection):
        raise StorageWriteError("disk full", store.path)

    monkeypatch.setattr(store, "save", _fail)
    with pytest.raises(StorageWriteError):
        svc.create_message("a", "hi")


def test_concurrent_creates_are_serialized(store):
    svc = MessageService(store)
    total = 40

    with ThreadPoolExecutor(max_workers=8) as pool:
        created = list(pool.map(lambda i: svc.create_message("u", f"m{i}").id, range(total)))

    stored = svc.list_messages()
    assert len(stored) == total
    assert sorted(created) == list(range(1, total + 1))
    assert len({msg["id"] for msg in stored}) == total
