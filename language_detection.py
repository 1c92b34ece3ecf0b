"""Source language detection backed by lingua."""

from __future__ import annotations

import logging
import threading
from typing import Iterable, Optional

from lingua import IsoCode639_1, Language, LanguageDetector as LinguaDetector, LanguageDetectorBuilder

from language_selection import TargetLanguage


logger = logging.getLogger("clipboard_translator.detection")


def from_lingua(language: Optional[Language]) -> Optional[TargetLanguage]:
    if language is None:
        return None
    return TargetLanguage.from_code(language.iso_code_639_1.name)


def to_lingua(language: TargetLanguage) -> Language:
    return Language.from_iso_code_639_1(getattr(IsoCode639_1, language.code))


class LanguageDetector:
    """Detect which supported language a piece of text is written in.

    The lingua models are loaded on first use, so constructing a detector is
    cheap and can happen before the window is shown.
    """

    def __init__(self, languages: Optional[Iterable[TargetLanguage]] = None) -> None:
        self._languages = tuple(languages) if languages is not None else tuple(TargetLanguage)
        if len(self._languages) < 2:
            raise ValueError("At least two languages are required for detection")
        self._detector: Optional[LinguaDetector] = None
        self._lock = threading.Lock()

    @property
    def languages(self) -> tuple[TargetLanguage, ...]:
        return self._languages

    def _get_detector(self) -> LinguaDetector:
        with self._lock:
            if self._detector is None:
                languages = [to_lingua(language) for language in self._languages]
                self._detector = LanguageDetectorBuilder.from_languages(*languages).build()
            return self._detector

    def detect(self, text: str) -> Optional[TargetLanguage]:
        if not text or not text.strip():
            return None
        detected = from_lingua(self._get_detector().detect_language_of(text))
        if detected is None:
            logger.info("Could not detect source language")
        else:
            logger.info("Detected source language: %s", detected.display_name)
        return detected
