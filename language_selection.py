"""Supported languages and the target language selection policy."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union


class InvalidLanguageError(ValueError):
    """Raised when a language code is empty or not supported."""


class TargetLanguage(str, Enum):
    ENGLISH = "EN"
    RUSSIAN = "RU"
    PORTUGUESE = "PT"
    UKRAINIAN = "UK"
    GERMAN = "DE"
    FRENCH = "FR"
    SPANISH = "ES"
    ITALIAN = "IT"
    POLISH = "PL"
    DUTCH = "NL"
    TURKISH = "TR"
    JAPANESE = "JA"
    CHINESE = "ZH"
    KOREAN = "KO"

    @property
    def code(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @classmethod
    def from_code(cls, code: Optional[str]) -> Optional["TargetLanguage"]:
        """Return the language for ``code`` or ``None`` when it is unknown."""

        if not isinstance(code, str):
            return None
        try:
            return cls(code.strip().upper())
        except ValueError:
            return None

    @classmethod
    def parse(cls, code: str) -> "TargetLanguage":
        language = cls.from_code(code)
        if language is None:
            raise InvalidLanguageError(f"Unsupported language code: {code!r}")
        return language

    def __str__(self) -> str:
        return self.value


_DISPLAY_NAMES = {
    TargetLanguage.ENGLISH: "English",
    TargetLanguage.RUSSIAN: "Russian",
    TargetLanguage.PORTUGUESE: "European Portuguese",
    TargetLanguage.UKRAINIAN: "Ukrainian",
    TargetLanguage.GERMAN: "German",
    TargetLanguage.FRENCH: "French",
    TargetLanguage.SPANISH: "Spanish",
    TargetLanguage.ITALIAN: "Italian",
    TargetLanguage.POLISH: "Polish",
    TargetLanguage.DUTCH: "Dutch",
    TargetLanguage.TURKISH: "Turkish",
    TargetLanguage.JAPANESE: "Japanese",
    TargetLanguage.CHINESE: "Chinese",
    TargetLanguage.KOREAN: "Korean",
}

LanguageLike = Union[TargetLanguage, str]


def _coerce(value: Optional[LanguageLike], name: str) -> TargetLanguage:
    if isinstance(value, TargetLanguage):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidLanguageError(f"{name} language must be a non-empty language code")
    language = TargetLanguage.from_code(value)
    if language is None:
        raise InvalidLanguageError(f"{name} language {value!r} is not supported")
    return language


def select_target_language(
    src: Optional[LanguageLike],
    primary: LanguageLike,
    secondary: LanguageLike,
    last: Optional[LanguageLike] = None,
) -> TargetLanguage:
    """Pick the language the clipboard text should be translated into.

    Text that is not written in the primary language goes to the primary
    language. Text written in the primary language goes to the last chosen
    target when that differs from the primary language, and to the secondary
    language otherwise.

    ``src=None`` means the detector could not determine the source language;
    it is treated as foreign text and therefore translated into ``primary``.
    """

    primary_language = _coerce(primary, "Primary")
    secondary_language = _coerce(secondary, "Secondary")
    source_language = None if src is None else _coerce(src, "Source")
    last_language = None if last is None or last == "" else _coerce(last, "Last")

    if source_language != primary_language:
        return primary_language
    if last_language is not None and last_language != primary_language:
        return last_language
    return secondary_language
