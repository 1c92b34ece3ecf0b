"""Translation utilities for the clipboard translator."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

import openai

from language_selection import TargetLanguage


SYSTEM_PROMPT = (
    "You are a helpful assistant that translates text into {language}. "
    "Provide only the translation text and nothing else."
)


class TranslationError(RuntimeError):
    """Raised when the translation service cannot complete a request."""


@dataclass
class TranslationResult:
    text: str
    target: TargetLanguage


class ChatTranslationClient:
    """Translate text with an OpenAI-compatible chat completion endpoint."""

    def __init__(
        self,
        api_key: str,
        api_url: str,
        model: str,
        *,
        timeout: float = 30.0,
        max_tokens: int = 1024,
        client: Optional[openai.OpenAI] = None,
    ) -> None:
        self.api_key = api_key
        self.api_url = api_url
        self.model = model
        self.timeout = timeout
        self.max_tokens = max_tokens
        self._client = client
        self._client_lock = threading.Lock()

    @property
    def client(self) -> openai.OpenAI:
        with self._client_lock:
            if self._client is None:
                self._client = openai.OpenAI(
                    api_key=self.api_key,
                    base_url=self.api_url,
                    timeout=self.timeout,
                )
            return self._client

    @staticmethod
    def build_messages(text: str, target: TargetLanguage) -> list[dict]:
        return [
            {"role": "system", "content": SYSTEM_PROMPT.format(language=target.display_name)},
            {"role": "user", "content": text},
        ]

    def translate(self, text: str, target: TargetLanguage) -> TranslationResult:
        if not text or not text.strip():
            raise TranslationError("Clipboard text is empty.")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=self.build_messages(text, target),
                max_tokens=self.max_tokens,
            )
        except openai.APITimeoutError as exc:
            raise TranslationError("Translation request timed out") from exc
        except openai.APIConnectionError as exc:
            raise TranslationError(f"Network error: {exc}") from exc
        except openai.APIStatusError as exc:
            raise TranslationError(f"API Error: {exc.message} (status {exc.status_code})") from exc
        except openai.OpenAIError as exc:
            raise TranslationError(f"API Error: {exc}") from exc

        choices = getattr(response, "choices", None)
        if not choices:
            raise TranslationError("API returned no choices.")
        content = choices[0].message.content
        if not content:
            raise TranslationError("API returned no translation content.")

        return TranslationResult(text=content.strip(), target=target)
