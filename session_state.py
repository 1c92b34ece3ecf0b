"""Last chosen target language, kept across runs."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from app_config import APP_DIR
from language_selection import TargetLanguage


logger = logging.getLogger("clipboard_translator.session")

LAST_LANGUAGE_FILE = APP_DIR / "last_language.txt"


class LastLanguageStore:
    """Reads and writes the last target language as an ISO 639-1 code."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = LAST_LANGUAGE_FILE if path is None else Path(path)

    def load(self) -> Optional[TargetLanguage]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.warning("Could not load last language from %s: %s", self.path, exc)
            return None

        language = TargetLanguage.from_code(raw)
        if language is None:
            logger.warning("Invalid language code %r in %s, ignoring it", raw.strip(), self.path)
            return None
        logger.info("Loaded last language: %s", language.code)
        return language

    def save(self, language: TargetLanguage) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self.path.with_name(self.path.name + ".tmp")
        temp_path.write_text(language.code, encoding="utf-8")
        os.replace(temp_path, self.path)
        logger.info("Last language saved to %s: %s", self.path, language.code)


@dataclass
class SessionState:
    last_selected: Optional[TargetLanguage] = None
    store: Optional[LastLanguageStore] = None

    @classmethod
    def restore(cls, store: LastLanguageStore) -> "SessionState":
        return cls(last_selected=store.load(), store=store)

    def record(self, language: TargetLanguage) -> None:
        """Remember ``language`` as the latest target and persist it."""

        if language == self.last_selected:
            return
        self.last_selected = language
        if self.store is None:
            return
        try:
            self.store.save(language)
        except OSError as exc:
            logger.error("Failed to save last language: %s", exc)
