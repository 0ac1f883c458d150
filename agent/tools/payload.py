from __future__ import annotations

"""Tolerant field extraction from loosely shaped chat-platform events.

Telex posts several payload shapes, so identity and text are found by trying
an ordered list of named rules; the first one yielding a value wins.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence, Tuple


DEFAULT_CONVERSATION_ID = "global"


def _dig(document: Any, path: Tuple[str, ...]) -> Any:
    current = document
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def _as_text(value: Any) -> Optional[str]:
    # bool is an int subclass; flags are never identifiers or messages
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value or None
    if isinstance(value, (int, float)):
        return str(value)
    return None


def _first_path_segment(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    return value.split("/")[0] or None


@dataclass(frozen=True)
class ExtractionRule:
    name: str
    path: Tuple[str, ...]
    transform: Callable[[Any], Optional[str]] = _as_text

    def apply(self, document: Any) -> Optional[str]:
        return self.transform(_dig(document, self.path))


CONVERSATION_ID_RULES: Tuple[ExtractionRule, ...] = (
    ExtractionRule("channel.id", ("channel", "id")),
    ExtractionRule("channelId", ("channelId",)),
    ExtractionRule("address", ("address",), _first_path_segment),
    ExtractionRule("metadata.channelId", ("metadata", "channelId")),
)

TEXT_RULES: Tuple[ExtractionRule, ...] = (
    ExtractionRule("text", ("text",)),
    ExtractionRule("message", ("message",)),
    ExtractionRule("content", ("content",)),
    ExtractionRule("message.text", ("message", "text")),
)


def extract_first(document: Any, rules: Sequence[ExtractionRule], default: str) -> str:
    if not isinstance(document, dict):
        return default
    for rule in rules:
        value = rule.apply(document)
        if value:
            return value
    return default


def extract_conversation_id(document: Any) -> str:
    return extract_first(document, CONVERSATION_ID_RULES, DEFAULT_CONVERSATION_ID)


def extract_text(document: Any) -> str:
    return extract_first(document, TEXT_RULES, "")


def normalize_text(text: str) -> str:
    return text.strip().lower()


def describe_event(document: Any) -> Dict[str, Any]:
    """Small summary of an event for log lines."""
    if not isinstance(document, dict):
        return {"shape": type(document).__name__}
    return {"keys": sorted(document.keys())[:10]}
