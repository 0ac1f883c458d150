import json
from datetime import datetime, timezone

from agent.core.memory import ConversationProgress, ProgressStore


def test_load_missing_file_is_empty(tmp_path):
    store = ProgressStore(tmp_path / "progress.json")
    assert store.load() == {}


def test_load_corrupt_file_is_empty(tmp_path):
    path = tmp_path / "progress.json"
    path.write_text("{oops", encoding="utf-8")

    assert ProgressStore(path).load() == {}


def test_load_non_object_is_empty(tmp_path):
    path = tmp_path / "progress.json"
    path.write_text("[1, 2]", encoding="utf-8")

    assert ProgressStore(path).load() == {}


def test_load_drops_malformed_entries(tmp_path):
    path = tmp_path / "progress.json"
    path.write_text(
        json.dumps({"good": {"index": 2, "last_sent": None}, "bad": {"index": -3}, "worse": "x"}),
        encoding="utf-8",
    )

    loaded = ProgressStore(path).load()

    assert list(loaded) == ["good"]
    assert loaded["good"].index == 2


def test_get_creates_default_entry_in_memory_only(store, progress_path):
    progress = store.get("c1")

    assert progress == ConversationProgress(index=0, last_sent=None)
    assert store.peek("c1") is progress
    assert not progress_path.exists()


def test_peek_does_not_create(store):
    assert store.peek("c1") is None
    assert store.snapshot() == {}


def test_save_and_reload_round_trip(store, progress_path):
    sent = datetime(2026, 10, 19, 8, 30, tzinfo=timezone.utc)
    store.get("a").index = 3
    store.get("a").last_sent = sent
    store.get("b").index = 1
    store.save()

    reloaded = ProgressStore(progress_path)
    state = reloaded.load()

    assert state["a"].index == 3
    assert state["a"].last_sent == sent
    assert state["b"].index == 1
    assert state["b"].last_sent is None


def test_save_writes_original_file_format(store, progress_path):
    store.get("chan").index = 4
    store.save()

    document = json.loads(progress_path.read_text(encoding="utf-8"))

    assert document == {"chan": {"index": 4, "last_sent": None}}
    assert not progress_path.with_name("progress.json.tmp").exists()


def test_conversation_lock_is_per_key(store):
    assert store.conversation_lock("a") is store.conversation_lock("a")
    assert store.conversation_lock("a") is not store.conversation_lock("b")
