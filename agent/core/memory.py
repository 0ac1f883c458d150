from __future__ import annotations

"""Per-conversation rotation state, mirrored to a JSON file.

The in-memory mapping is the source of truth while the process runs. The
file is rewritten in full after every mutation and re-read at startup.
Entries are never expired.
"""

import json
import logging
import os
import threading
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, Field, ValidationError


logger = logging.getLogger(__name__)


class ConversationProgress(BaseModel):
    index: int = Field(0, ge=0, description="Next catalog index to serve")
    last_sent: Optional[datetime] = Field(None, description="When the last word was delivered")


class ProgressStore:
    def __init__(self, path: Path) -> None:
        self.path = path
        self._progress: Dict[str, ConversationProgress] = {}
        self._lock = threading.RLock()
        self._conversation_locks: Dict[str, threading.Lock] = {}

    def load(self) -> Dict[str, ConversationProgress]:
        with self._lock:
            self._progress = self._read()
            return dict(self._progress)

    def _read(self) -> Dict[str, ConversationProgress]:
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("Could not read %s (%s), starting with empty progress", self.path.name, exc)
            return {}
        if not isinstance(raw, dict):
            logger.warning("%s is not an object, starting with empty progress", self.path.name)
            return {}

        progress: Dict[str, ConversationProgress] = {}
        for conversation_id, item in raw.items():
            try:
                progress[conversation_id] = ConversationProgress.model_validate(item)
            except ValidationError:
                logger.warning("Dropping malformed progress entry for %s", conversation_id)
        return progress

    def get(self, conversation_id: str) -> ConversationProgress:
        with self._lock:
            progress = self._progress.get(conversation_id)
            if progress is None:
                progress = ConversationProgress()
                self._progress[conversation_id] = progress
            return progress

    def peek(self, conversation_id: str) -> Optional[ConversationProgress]:
        with self._lock:
            return self._progress.get(conversation_id)

    def snapshot(self) -> Dict[str, ConversationProgress]:
        with self._lock:
            return {key: value.model_copy() for key, value in self._progress.items()}

    def conversation_lock(self, conversation_id: str) -> threading.Lock:
        with self._lock:
            lock = self._conversation_locks.get(conversation_id)
            if lock is None:
                lock = threading.Lock()
                self._conversation_locks[conversation_id] = lock
            return lock

    def save(self) -> None:
        with self._lock:
            document = {
                conversation_id: progress.model_dump(mode="json")
                for conversation_id, progress in self._progress.items()
            }
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_name(self.path.name + ".tmp")
            tmp_path.write_text(json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8")
            os.replace(tmp_path, self.path)
