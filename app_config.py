"""Persisted configuration for the clipboard translator."""

from __future__ import annotations

import json
import logging
import os
import time
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import List, Optional

from language_selection import InvalidLanguageError, TargetLanguage


logger = logging.getLogger("clipboard_translator.config")

APP_DIR = Path.home() / ".clipboard_translator"
CONFIG_FILE = APP_DIR / "config.json"

DEFAULT_API_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL_VERSION = "openai/gpt-4o"


def default_target_languages() -> List[TargetLanguage]:
    return [
        TargetLanguage.ENGLISH,
        TargetLanguage.RUSSIAN,
        TargetLanguage.PORTUGUESE,
        TargetLanguage.UKRAINIAN,
        TargetLanguage.GERMAN,
        TargetLanguage.FRENCH,
        TargetLanguage.SPANISH,
        TargetLanguage.ITALIAN,
        TargetLanguage.POLISH,
    ]


@dataclass
class AppConfig:
    api_url: str = DEFAULT_API_URL
    model_version: str = DEFAULT_MODEL_VERSION
    primary_language: TargetLanguage = TargetLanguage.RUSSIAN
    secondary_language: TargetLanguage = TargetLanguage.ENGLISH
    all_target_languages: List[TargetLanguage] = field(default_factory=default_target_languages)

    def to_dict(self) -> dict:
        return {
            "api_url": self.api_url,
            "model_version": self.model_version,
            "primary_language": self.primary_language.code,
            "secondary_language": self.secondary_language.code,
            "all_target_languages": [language.code for language in self.all_target_languages],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AppConfig":
        """Build a config from parsed JSON, using defaults for missing keys.

        Raises ``InvalidLanguageError`` for unknown language codes and
        ``ValueError`` when a value has the wrong type.
        """

        if not isinstance(data, dict):
            raise ValueError("Configuration root must be an object")
        defaults = cls()

        def _string(key: str, default: str) -> str:
            value = data.get(key, default)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"'{key}' must be a non-empty string")
            return value.strip()

        def _language(key: str, default: TargetLanguage) -> TargetLanguage:
            value = data.get(key)
            if value is None:
                return default
            return TargetLanguage.parse(value)

        languages = data.get("all_target_languages")
        if languages is None:
            target_languages = default_target_languages()
        elif isinstance(languages, list):
            target_languages = [TargetLanguage.parse(code) for code in languages]
        else:
            raise ValueError("'all_target_languages' must be a list of language codes")

        return cls(
            api_url=_string("api_url", defaults.api_url),
            model_version=_string("model_version", defaults.model_version),
            primary_language=_language("primary_language", defaults.primary_language),
            secondary_language=_language("secondary_language", defaults.secondary_language),
            all_target_languages=target_languages,
        )


def _backup_invalid_file(path: Path) -> None:
    backup_path = path.with_name(f"{path.name}.invalid_{int(time.time())}")
    logger.warning("Backing up invalid config to %s", backup_path)
    try:
        path.replace(backup_path)
    except OSError as exc:
        logger.error("Failed to back up invalid config file: %s", exc)


def _save_defaults(path: Path) -> AppConfig:
    config = AppConfig()
    try:
        save_config(config, path)
    except OSError as exc:
        logger.error("Failed to save default config: %s", exc)
    return config


def load_config(path: Optional[Path] = None) -> AppConfig:
    """Load the configuration file, falling back to defaults on any problem."""

    path = CONFIG_FILE if path is None else Path(path)
    if not path.exists():
        logger.info("Config file not found at %s. Creating with defaults.", path)
        return _save_defaults(path)

    try:
        contents = path.read_text(encoding="utf-8")
    except OSError as exc:
        logger.error("Failed to read config file %s: %s. Using defaults.", path, exc)
        return AppConfig()

    try:
        config = AppConfig.from_dict(json.loads(contents))
    except (json.JSONDecodeError, InvalidLanguageError, ValueError) as exc:
        logger.error("Failed to parse config file %s. Using defaults. (%s)", path, exc)
        _backup_invalid_file(path)
        return _save_defaults(path)

    if not config.all_target_languages:
        logger.warning("'all_target_languages' was empty in config file, using default list.")
        config.all_target_languages = default_target_languages()
    if config.primary_language not in config.all_target_languages:
        logger.warning(
            "Primary language %s from config is not in 'all_target_languages'.",
            config.primary_language.code,
        )
    if config.secondary_language not in config.all_target_languages:
        logger.warning(
            "Secondary language %s from config is not in 'all_target_languages'.",
            config.secondary_language.code,
        )

    logger.info(
        "Loaded config from %s (primary=%s, secondary=%s, targets=%s)",
        path,
        config.primary_language.code,
        config.secondary_language.code,
        [language.code for language in config.all_target_languages],
    )
    return config


def save_config(config: AppConfig, path: Optional[Path] = None) -> None:
    """Write ``config`` atomically. I/O errors are propagated to the caller."""

    path = CONFIG_FILE if path is None else Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    validated = replace(config, all_target_languages=list(config.all_target_languages))
    if not validated.all_target_languages:
        logger.warning("'all_target_languages' is empty during save, restoring defaults.")
        validated.all_target_languages = default_target_languages()
    for language in (validated.primary_language, validated.secondary_language):
        if language not in validated.all_target_languages:
            logger.warning("Language %s not in list during save. Adding it.", language.code)
            validated.all_target_languages.append(language)

    temp_path = path.with_name(path.name + ".tmp")
    with open(temp_path, "w", encoding="utf-8") as handle:
        json.dump(validated.to_dict(), handle, indent=2, ensure_ascii=False)
        handle.flush()
        os.fsync(handle.fileno())
    os.replace(temp_path, path)
    logger.info("Config saved to %s", path)
