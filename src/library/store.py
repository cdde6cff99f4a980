"""
Local key-value persistence for the library state.

Layout: one file per key under settings.store_dir. The four JSON payloads
(sites, users, documents, session) live in `<key>.json`; the language key is a
raw text file named exactly like the key holding the language tag.

  indudocs_centers  → list[Site]
  indudocs_users    → list[User]
  indudocs_docs     → list[Document]
  indudocs_auth     → Session
  indudocs_lang     → "es" | "fr" | "ar" | "wo"

Missing or empty keys fall back to the seed dataset. Malformed keys raise
StoreCorruptedError unless reset_corrupt is set, in which case the seed is
used and a warning is logged.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, TypeVar

from pydantic import TypeAdapter, ValidationError

from src.library.errors import StoreCorruptedError
from src.library.models import LANGUAGES, Document, Language, Session, Site, User

logger = logging.getLogger(__name__)

T = TypeVar("T")

SITES_KEY = "indudocs_centers"
USERS_KEY = "indudocs_users"
DOCUMENTS_KEY = "indudocs_docs"
SESSION_KEY = "indudocs_auth"
LANGUAGE_KEY = "indudocs_lang"

SITES_ADAPTER: TypeAdapter[list[Site]] = TypeAdapter(list[Site])
USERS_ADAPTER: TypeAdapter[list[User]] = TypeAdapter(list[User])
DOCUMENTS_ADAPTER: TypeAdapter[list[Document]] = TypeAdapter(list[Document])
SESSION_ADAPTER: TypeAdapter[Session] = TypeAdapter(Session)


class JsonStore:
    """Directory-backed key-value store. Every save rewrites the whole value."""

    def __init__(self, base_dir: str | Path, reset_corrupt: bool = False) -> None:
        self._base_dir = Path(base_dir)
        self._reset_corrupt = reset_corrupt

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def path(self, key: str) -> Path:
        if key == LANGUAGE_KEY:
            return self._base_dir / key
        return self._base_dir / f"{key}.json"

    # ------------------------------------------------------------------
    # Raw access
    # ------------------------------------------------------------------

    def read_raw(self, key: str) -> str | None:
        path = self.path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def write_raw(self, key: str, value: str) -> None:
        self._base_dir.mkdir(parents=True, exist_ok=True)
        self.path(key).write_text(value, encoding="utf-8")

    # ------------------------------------------------------------------
    # Typed access
    # ------------------------------------------------------------------

    def _corrupted(self, key: str, reason: str, default: Callable[[], T]) -> T:
        if not self._reset_corrupt:
            raise StoreCorruptedError(key, reason)
        logger.warning("Discarding corrupt value for '%s' and using seed data: %s", key, reason)
        return default()

    def load(self, key: str, adapter: TypeAdapter[T], default: Callable[[], T]) -> T:
        """Return the stored value for key, or default() when nothing is stored."""
        try:
            raw = self.read_raw(key)
        except UnicodeDecodeError as exc:
            return self._corrupted(key, f"not valid UTF-8 ({exc.reason})", default)
        if not raw:
            logger.debug("No stored value for '%s', using seed data.", key)
            return default()
        try:
            return adapter.validate_json(raw)
        except ValidationError as exc:
            return self._corrupted(key, f"{exc.error_count()} validation error(s)", default)

    def save(self, key: str, adapter: TypeAdapter[T], value: T) -> None:
        self.write_raw(key, adapter.dump_json(value, indent=2).decode("utf-8"))
        logger.debug("Saved '%s'.", key)

    def load_language(self, default: Language) -> Language:
        try:
            raw = self.read_raw(LANGUAGE_KEY)
        except UnicodeDecodeError as exc:
            return self._corrupted(
                LANGUAGE_KEY, f"not valid UTF-8 ({exc.reason})", lambda: default
            )
        if not raw:
            return default
        value = raw.strip()
        if value not in LANGUAGES:
            return self._corrupted(LANGUAGE_KEY, f"unknown language '{value}'", lambda: default)
        return value  # type: ignore[return-value]

    def save_language(self, language: Language) -> None:
        self.write_raw(LANGUAGE_KEY, language)
