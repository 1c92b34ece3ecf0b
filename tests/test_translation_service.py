import unittest
import unittest.mock as mock
from types import SimpleNamespace

import httpx
import openai

from language_selection import TargetLanguage
from translation_service import ChatTranslationClient, TranslationError


REQUEST = httpx.Request("POST", "https://example.invalid/api/v1/chat/completions")


def _response(content):
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _client_returning(response=None, error=None):
    create = mock.Mock(return_value=response, side_effect=error)
    return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create))), create


class ChatTranslationClientTests(unittest.TestCase):
    def _translator(self, client) -> ChatTranslationClient:
        return ChatTranslationClient(
            "key", "https://example.invalid/api/v1", "openai/gpt-4o", client=client
        )

    def test_translate_sends_prompt_and_strips_result(self) -> None:
        client, create = _client_returning(_response("  Olá mundo \n"))
        result = self._translator(client).translate("Hello world", TargetLanguage.PORTUGUESE)

        self.assertEqual(result.text, "Olá mundo")
        self.assertIs(result.target, TargetLanguage.PORTUGUESE)
        kwargs = create.call_args.kwargs
        self.assertEqual(kwargs["model"], "openai/gpt-4o")
        self.assertEqual(kwargs["max_tokens"], 1024)
        system, user = kwargs["messages"]
        self.assertEqual(system["role"], "system")
        self.assertIn("translates text into European Portuguese", system["content"])
        self.assertEqual(user, {"role": "user", "content": "Hello world"})

    def test_empty_text_is_rejected_without_request(self) -> None:
        client, create = _client_returning(_response("unused"))
        for text in ("", "   \n\t"):
            with self.assertRaises(TranslationError) as ctx:
                self._translator(client).translate(text, TargetLanguage.ENGLISH)
            self.assertEqual(str(ctx.exception), "Clipboard text is empty.")
        create.assert_not_called()

    def test_translate_timeout_raises_translation_error(self) -> None:
        client, _ = _client_returning(error=openai.APITimeoutError(request=REQUEST))
        with self.assertRaises(TranslationError) as ctx:
            self._translator(client).translate("hello", TargetLanguage.RUSSIAN)
        self.assertIn("timed out", str(ctx.exception))

    def test_connection_error_is_reported_as_network_error(self) -> None:
        client, _ = _client_returning(error=openai.APIConnectionError(request=REQUEST))
        with self.assertRaises(TranslationError) as ctx:
            self._translator(client).translate("hello", TargetLanguage.RUSSIAN)
        self.assertTrue(str(ctx.exception).startswith("Network error"))
        self.assertIsInstance(ctx.exception.__cause__, openai.APIConnectionError)

    def test_status_error_includes_message_and_code(self) -> None:
        response = httpx.Response(429, request=REQUEST)
        error = openai.APIStatusError("Rate limit exceeded", response=response, body=None)
        client, _ = _client_returning(error=error)
        with self.assertRaises(TranslationError) as ctx:
            self._translator(client).translate("hello", TargetLanguage.RUSSIAN)
        self.assertEqual(str(ctx.exception), "API Error: Rate limit exceeded (status 429)")

    def test_no_choices(self) -> None:
        client, _ = _client_returning(SimpleNamespace(choices=[]))
        with self.assertRaises(TranslationError) as ctx:
            self._translator(client).translate("hello", TargetLanguage.RUSSIAN)
        self.assertEqual(str(ctx.exception), "API returned no choices.")

    def test_no_content(self) -> None:
        client, _ = _client_returning(_response(None))
        with self.assertRaises(TranslationError) as ctx:
            self._translator(client).translate("hello", TargetLanguage.RUSSIAN)
        self.assertEqual(str(ctx.exception), "API returned no translation content.")

    def test_openai_client_is_created_once(self) -> None:
        translator = ChatTranslationClient("key", "https://example.invalid/api/v1", "m", timeout=5.0)
        with mock.patch("translation_service.openai.OpenAI") as factory:
            first = translator.client
            second = translator.client
        self.assertIs(first, second)
        factory.assert_called_once_with(
            api_key="key", base_url="https://example.invalid/api/v1", timeout=5.0
        )


if __name__ == "__main__":  # pragma: no cover - allows direct execution
    unittest.main()
