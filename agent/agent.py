from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, FrozenSet

from agent.core.catalog import Catalog, load_catalog
from agent.core.memory import ProgressStore
from agent.core.prompt import OutboundPayload, compose_acknowledgement, compose_daily_word
from agent.core.rotation import last_served, pick_next
from agent.tools.payload import extract_conversation_id, extract_text, normalize_text
from config.settings import Settings


logger = logging.getLogger(__name__)

TRIGGER_PHRASES: FrozenSet[str] = frozenset({"daily word", "start", "help"})


@dataclass
class AgentContext:
    """Process-wide state, built once at startup and handed to every request."""

    catalog: Catalog
    store: ProgressStore


def build_context(settings: Settings) -> AgentContext:
    catalog = load_catalog(settings.words_file)
    store = ProgressStore(settings.progress_file)
    store.load()
    logger.info(
        "Agent context ready: words=%s conversations=%s",
        len(catalog),
        len(store.snapshot()),
    )
    return AgentContext(catalog=catalog, store=store)


def wants_next_word(text: str) -> bool:
    """Empty input or a trigger phrase asks for a word; anything else is a practice sentence."""
    normalized = normalize_text(text)
    return not normalized or normalized in TRIGGER_PHRASES


def handle_event(context: AgentContext, body: Any) -> OutboundPayload:
    conversation_id = extract_conversation_id(body)
    text = normalize_text(extract_text(body))

    if not wants_next_word(text):
        entry = last_served(context.store, context.catalog, conversation_id)
        logger.info(
            "Acknowledging sentence: conversation=%s last_word=%s text_len=%s",
            conversation_id,
            entry.word if entry else None,
            len(text),
        )
        return compose_acknowledgement(text, entry)

    index, entry = pick_next(context.store, context.catalog, conversation_id)
    logger.info(
        "Serving word: conversation=%s index=%s word=%s",
        conversation_id,
        index,
        entry.word,
    )
    return compose_daily_word(entry)
