import json

import pytest

from agent.agent import build_context, handle_event, wants_next_word
from agent.core.catalog import DEFAULT_WORDS


class _FakeSettings:
    def __init__(self, words_file, progress_file) -> None:
        self.words_file = words_file
        self.progress_file = progress_file


@pytest.mark.parametrize("text", ["", "   ", "daily word", "START", "  Help  ", "Daily Word"])
def test_trigger_phrases_request_next_word(text):
    assert wants_next_word(text)


@pytest.mark.parametrize("text", ["hello", "daily words", "start now", "merci beaucoup"])
def test_other_text_is_a_practice_sentence(text):
    assert not wants_next_word(text)


@pytest.mark.parametrize("text", ["", "daily word", " Start ", "HELP"])
def test_trigger_events_advance_rotation(context, text):
    payload = handle_event(context, {"channelId": "c", "text": text})

    assert "bonjour" in payload.text
    assert len(payload.actions) == 2
    assert context.store.peek("c").index == 1


def test_sentence_does_not_touch_progress(context, progress_path):
    payload = handle_event(context, {"channelId": "c", "text": "je mange"})

    assert payload.actions == []
    assert context.store.peek("c") is None
    assert not progress_path.exists()


def test_acknowledges_last_served_word(context):
    for _ in range(5):
        handle_event(context, {"channelId": "c"})

    praised = handle_event(context, {"channelId": "c", "text": "Mon chien est mignon"})
    nudged = handle_event(context, {"channelId": "c", "text": "bonjour"})

    assert 'used the word "chien" correctly' in praised.text
    assert "correctly" not in nudged.text
    assert '"chien"' in nudged.text
    assert "Le chien court dans le parc." in nudged.text
    assert context.store.peek("c").index == 5


def test_conversations_rotate_independently(context):
    handle_event(context, {"channelId": "A"})
    handle_event(context, {"channelId": "A"})
    payload = handle_event(context, {"channelId": "B"})

    assert "bonjour" in payload.text
    assert context.store.peek("A").index == 2
    assert context.store.peek("B").index == 1


def test_build_context_from_settings(tmp_path):
    progress_file = tmp_path / "progress.json"
    progress_file.write_text(json.dumps({"c": {"index": 2, "last_sent": None}}), encoding="utf-8")

    context = build_context(_FakeSettings(tmp_path / "missing.json", progress_file))

    assert context.catalog == DEFAULT_WORDS
    assert context.store.peek("c").index == 2
    assert "s'il vous plaît" in handle_event(context, {"channelId": "c"}).text
