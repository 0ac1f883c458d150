from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Tuple

from agent.core.catalog import Catalog, WordEntry
from agent.core.memory import ProgressStore


def pick_next(
    store: ProgressStore,
    catalog: Catalog,
    conversation_id: str,
    now: Optional[datetime] = None,
) -> Tuple[int, WordEntry]:
    """Serve the conversation's current word and advance its cursor by one.

    The cursor is read modulo the catalog length, so a cursor saved against a
    catalog of another size still lands on a valid entry. Progress is saved
    before returning; a failed write propagates to the caller.
    """
    total = len(catalog)
    with store.conversation_lock(conversation_id):
        progress = store.get(conversation_id)
        served = progress.index % total
        progress.index = (progress.index + 1) % total
        progress.last_sent = now or datetime.now(timezone.utc)
        store.save()
    return served, catalog[served]


def last_served(store: ProgressStore, catalog: Catalog, conversation_id: str) -> Optional[WordEntry]:
    # The cursor has already moved past the word that was sent.
    progress = store.peek(conversation_id)
    if progress is None or progress.last_sent is None:
        return None
    return catalog.entry_at(progress.index - 1)
