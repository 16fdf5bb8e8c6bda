from __future__ import annotations

import logging
import threading
import time
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from resumeiq.core.config import settings
from resumeiq.history.kv_store import KeyValueStore, SqliteKeyValueStore
from resumeiq.schemas.analysis import AnalysisResult, HistoryEntry

logger = logging.getLogger(__name__)


def make_snippet(resume_text: str, limit: int) -> str:
    text = resume_text or ""
    snippet = text[:limit].strip()
    return snippet + "…" if len(text) > limit else snippet


class HistoryStore:
    """Per-user list of past analyses, newest first."""

    def __init__(
        self,
        store: KeyValueStore,
        *,
        max_entries: int = 10,
        snippet_chars: int = 120,
    ) -> None:
        self._store = store
        self._max_entries = max_entries
        self._snippet_chars = snippet_chars
        # Saves and deletes read then rewrite the whole list.
        self._lock = threading.RLock()

    @staticmethod
    def _key(user_id: str) -> str:
        return f"history_{user_id}"

    def _read_raw(self, user_id: str) -> list[Any]:
        raw = self._store.get(self._key(user_id))
        return raw if isinstance(raw, list) else []

    def get_user_history(self, user_id: str) -> list[HistoryEntry]:
        entries: list[HistoryEntry] = []
        for item in self._read_raw(user_id):
            try:
                entries.append(HistoryEntry.model_validate(item))
            except PydanticValidationError:
                logger.warning("history_entry_invalid user=%s", user_id)
        return entries

    def _write(self, user_id: str, entries: list[HistoryEntry]) -> None:
        self._store.put(self._key(user_id), [entry.model_dump(mode="json", by_alias=True) for entry in entries])

    def _next_id(self, existing: list[HistoryEntry]) -> str:
        taken = {entry.id for entry in existing}
        candidate = int(time.time() * 1000)
        while str(candidate) in taken:
            candidate += 1
        return str(candidate)

    def save_to_history(self, user_id: str, resume_text: str, result: AnalysisResult) -> list[HistoryEntry]:
        with self._lock:
            history = self.get_user_history(user_id)
            entry = HistoryEntry(
                id=self._next_id(history),
                created_at=datetime.now(timezone.utc).isoformat(),
                resume_snippet=make_snippet(resume_text, self._snippet_chars),
                result=result,
            )
            updated = [entry, *history][: self._max_entries]
            self._write(user_id, updated)
        return updated

    def delete_from_history(self, user_id: str, entry_id: str) -> list[HistoryEntry]:
        with self._lock:
            history = [entry for entry in self.get_user_history(user_id) if entry.id != entry_id]
            self._write(user_id, history)
        return history

    def clear_history(self, user_id: str) -> None:
        with self._lock:
            self._store.delete(self._key(user_id))

    def close(self) -> None:
        close = getattr(self._store, "close", None)
        if callable(close):
            close()

    def save_best_effort(self, user_id: str, resume_text: str, result: AnalysisResult) -> bool:
        try:
            self.save_to_history(user_id, resume_text, result)
        except Exception as exc:  # noqa: BLE001 - history must not block the analysis result
            logger.warning("history_save_failed user=%s: %s", user_id, exc)
            return False
        return True


@lru_cache(maxsize=1)
def get_history_store() -> HistoryStore:
    return HistoryStore(
        SqliteKeyValueStore(settings.history_db_path),
        max_entries=settings.history_max_entries,
        snippet_chars=settings.history_snippet_chars,
    )
