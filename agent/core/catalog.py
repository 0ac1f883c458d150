from __future__ import annotations

"""Word catalog: the ordered list of vocabulary entries served by the agent.

The list is read once at startup from an optional JSON file. Anything wrong
with that file falls back to the built-in words, so loading never fails.
"""

import json
import logging
from pathlib import Path
from typing import Iterator, List, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError


logger = logging.getLogger(__name__)


class WordEntry(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    word: str = Field(..., min_length=1)
    meaning: str = Field(..., min_length=1)
    example: str = Field(..., min_length=1)
    # Older word files use "pron"
    pronunciation: str = Field(..., min_length=1, alias="pron")


class Catalog(Sequence[WordEntry]):
    """Immutable, non-empty sequence of word entries."""

    def __init__(self, entries: Sequence[WordEntry]) -> None:
        if not entries:
            raise ValueError("Catalog requires at least one word entry")
        self._entries = tuple(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index):
        return self._entries[index]

    def __iter__(self) -> Iterator[WordEntry]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Catalog):
            return self._entries == other._entries
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._entries)

    def entry_at(self, index: int) -> WordEntry:
        return self._entries[index % len(self._entries)]

    def words(self) -> List[str]:
        return [entry.word for entry in self._entries]


DEFAULT_WORDS = Catalog(
    [
        WordEntry(word="bonjour", meaning="hello (good day)", example="Bonjour! Comment ça va?", pronunciation="bohn-zhoor"),
        WordEntry(word="merci", meaning="thank you", example="Merci pour ton aide.", pronunciation="mehr-see"),
        WordEntry(word="s'il vous plaît", meaning="please", example="Un café, s'il vous plaît.", pronunciation="seel voo pleh"),
        WordEntry(word="amour", meaning="love", example="L'amour est beau.", pronunciation="ah-moor"),
        WordEntry(word="chien", meaning="dog", example="Le chien court dans le parc.", pronunciation="shee-en"),
        WordEntry(word="chat", meaning="cat", example="Le chat dort sur la chaise.", pronunciation="sha"),
    ]
)


def load_catalog(path: Path) -> Catalog:
    if not path.exists():
        return DEFAULT_WORDS

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("Could not load %s (%s), using default list.", path.name, exc)
        return DEFAULT_WORDS

    if not isinstance(raw, list) or not raw:
        logger.warning("%s is not a non-empty list, using default list.", path.name)
        return DEFAULT_WORDS

    try:
        entries = [WordEntry.model_validate(item) for item in raw]
    except ValidationError as exc:
        logger.warning(
            "Invalid word entry in %s, using default list: %s",
            path.name,
            " ".join(str(exc).split())[:300],
        )
        return DEFAULT_WORDS

    logger.info("Loaded %s words from %s", len(entries), path.name)
    return Catalog(entries)
