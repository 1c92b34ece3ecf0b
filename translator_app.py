"""Desktop utility that translates the clipboard text with an AI chat API."""

from __future__ import annotations

import argparse
import logging
import os
import queue
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Protocol, Sequence

from dotenv import load_dotenv

from app_config import CONFIG_FILE, AppConfig, load_config
from app_logging import get_logger
from clipboard_utils import ClipboardError, EmptyClipboardError, copy_to_clipboard, read_clipboard_text
from language_detection import LanguageDetector
from language_selection import InvalidLanguageError, TargetLanguage, select_target_language
from session_state import LAST_LANGUAGE_FILE, LastLanguageStore, SessionState
from translation_service import ChatTranslationClient, TranslationError, TranslationResult


logger = logging.getLogger("clipboard_translator.app")

API_KEY_ENV = "OPENROUTER_API_KEY"


@dataclass
class TranslationRequest:
    text: str
    target: TargetLanguage
    generation: int


class TranslatorProtocol(Protocol):  # pragma: no cover - protocol is for type checking only
    def translate(self, text: str, target: TargetLanguage) -> TranslationResult:
        """Translate text and return a result object."""


class DetectorProtocol(Protocol):  # pragma: no cover - protocol is for type checking only
    def detect(self, text: str) -> Optional[TargetLanguage]:
        """Return the language of ``text`` or ``None`` when unknown."""


class TranslationView(Protocol):  # pragma: no cover - protocol is for type checking only
    def set_text(self, text: str) -> None: ...

    def set_active_language(self, language: TargetLanguage) -> None: ...

    def close(self) -> None: ...

    def mainloop(self) -> None: ...


def _default_window_factory(
    languages: Sequence[TargetLanguage],
    language_callback: Callable[[TargetLanguage], None],
    copy_callback: Callable[[str], None],
) -> TranslationView:
    # Imported lazily so the controller stays importable without a display.
    from translation_window import TranslationWindow

    return TranslationWindow(
        languages,
        language_callback=language_callback,
        copy_callback=copy_callback,
    )


class ClipboardTranslatorApp:
    """Reads the clipboard once, picks a target language and shows the translation."""

    def __init__(
        self,
        config: AppConfig,
        *,
        api_key: Optional[str],
        session: Optional[SessionState] = None,
        forced_target: Optional[TargetLanguage] = None,
        translator_factory: Optional[Callable[[], TranslatorProtocol]] = None,
        detector: Optional[DetectorProtocol] = None,
        clipboard_module=None,
        view: Optional[TranslationView] = None,
        window_factory: Callable[..., TranslationView] = _default_window_factory,
    ) -> None:
        self.config = config
        self.api_key = api_key
        self.session = session if session is not None else SessionState()
        self.forced_target = forced_target
        self._translator_factory = translator_factory or self._default_translator_factory
        self._translator: Optional[TranslatorProtocol] = None
        self._translator_lock = threading.Lock()
        self._detector = detector if detector is not None else LanguageDetector()
        self._clipboard = clipboard_module
        self._view = view
        self._window_factory = window_factory
        self._lock = threading.Lock()
        self._request_queue: "queue.Queue[Optional[TranslationRequest]]" = queue.Queue()
        self._worker_thread: Optional[threading.Thread] = None
        self._original_text: Optional[str] = None
        self._generation = 0
        self._user_picks = 0
        self.current_target = self._default_target()

    @property
    def view(self) -> TranslationView:
        if self._view is None:
            self._view = self._window_factory(
                list(self.config.all_target_languages),
                self.select_language,
                self.copy_and_close,
            )
        return self._view

    @property
    def translator(self) -> TranslatorProtocol:
        with self._translator_lock:
            if self._translator is None:
                self._translator = self._translator_factory()
            translator = self._translator
        assert translator is not None  # For type checkers
        return translator

    def _default_translator_factory(self) -> TranslatorProtocol:
        return ChatTranslationClient(
            self.api_key or "",
            self.config.api_url,
            self.config.model_version,
        )

    def _default_target(self) -> TargetLanguage:
        available = self.config.all_target_languages
        last = self.session.last_selected
        if last is not None and last in available:
            return last
        if self.config.primary_language in available or not available:
            return self.config.primary_language
        return available[0]

    def choose_target(self, text: str) -> TargetLanguage:
        """Decide which language ``text`` should be translated into."""

        if self.forced_target is not None:
            logger.info("Target language forced to %s", self.forced_target.code)
            return self.forced_target

        source = self._detector.detect(text)
        target = select_target_language(
            source,
            self.config.primary_language,
            self.config.secondary_language,
            self.session.last_selected,
        )
        logger.info(
            "Source %s, primary %s, secondary %s, last %s -> target %s",
            source.code if source is not None else "unknown",
            self.config.primary_language.code,
            self.config.secondary_language.code,
            self.session.last_selected.code if self.session.last_selected is not None else "none",
            target.code,
        )
        if target not in self.config.all_target_languages:
            fallback = self._default_target()
            logger.warning(
                "Selected target %s is not in 'all_target_languages'. Reverting to %s",
                target.code,
                fallback.code,
            )
            target = fallback
        return target

    def start(self) -> None:
        """Start the background worker that performs translations."""

        if self._worker_thread is None or not self._worker_thread.is_alive():
            self._worker_thread = threading.Thread(
                target=self._process_requests,
                name="TranslationWorker",
                daemon=True,
            )
            self._worker_thread.start()

    def stop(self) -> None:
        if self._worker_thread is not None and self._worker_thread.is_alive():
            self._request_queue.put(None)

    def run(self) -> None:
        """Show the window and block until it is closed."""

        view = self.view
        self.start()
        threading.Thread(target=self.begin, name="ClipboardLoader", daemon=True).start()
        try:
            view.mainloop()
        finally:
            self.stop()

    def begin(self) -> None:
        """Read the clipboard and schedule the first translation."""

        view = self.view
        view.set_text("Reading clipboard...")

        if not self.api_key:
            view.set_text(f"Error: {API_KEY_ENV} environment variable not set.")
            view.set_active_language(self.current_target)
            return

        try:
            text = read_clipboard_text(self._clipboard)
        except EmptyClipboardError:
            view.set_text("Clipboard does not contain text.")
            view.set_active_language(self.current_target)
            return
        except ClipboardError as exc:
            logger.error("Error reading clipboard: %s", exc)
            view.set_text(f"Error reading clipboard: {exc}")
            view.set_active_language(self.current_target)
            return

        with self._lock:
            self._original_text = text
            picks = self._user_picks
            generation = self._generation

        try:
            target = self.choose_target(text)
        except Exception as exc:
            logger.exception("Failed to choose a target language: %s", exc)
            view.set_text(f"Error: {exc}")
            view.set_active_language(self.current_target)
            return

        with self._lock:
            if self._user_picks != picks:
                target = self.current_target
                already_queued = self._generation != generation
            else:
                self.current_target = target
                already_queued = False
        if already_queued:
            logger.info("Keeping target %s chosen during detection", target.code)
            return
        view.set_active_language(target)
        self._enqueue_translation(text, target)

    def select_language(self, language: TargetLanguage) -> None:
        """Handle an explicit target choice made in the window."""

        with self._lock:
            if language == self.current_target:
                return
            self.current_target = language
            self._user_picks += 1
            text = self._original_text
            self.session.record(language)
        logger.info("Target language set by user to %s", language.code)
        self.view.set_active_language(language)

        if text is None or not self.api_key:
            self.view.set_text("Cannot translate: Missing original text or API key.")
            return
        self._enqueue_translation(text, language)

    def copy_and_close(self, text: str) -> None:
        try:
            copy_to_clipboard(text, self._clipboard)
        except ClipboardError as exc:
            logger.error("Copy failed: %s", exc)
            self.view.set_text(str(exc))
            return
        logger.info("Copied translation to clipboard, closing")
        self.view.close()

    def _enqueue_translation(self, text: str, target: TargetLanguage) -> None:
        with self._lock:
            self._generation += 1
            request = TranslationRequest(text=text, target=target, generation=self._generation)
        self.view.set_text(f"Translating to {target.display_name}...")
        self._request_queue.put(request)

    def _is_current(self, request: TranslationRequest) -> bool:
        with self._lock:
            return request.generation == self._generation

    def _process_requests(self) -> None:
        while True:
            request = self._request_queue.get()
            try:
                if request is None:
                    break
                self._process_single_request(request)
            except Exception as exc:
                logger.exception("Error while processing translation request: %s", exc)
                if self._is_current(request):
                    self.view.set_text(f"Error: {exc}")
            finally:
                self._request_queue.task_done()

    def _process_single_request(self, request: TranslationRequest) -> None:
        try:
            result = self.translator.translate(request.text, request.target)
        except TranslationError as exc:
            logger.error("Translation to %s failed: %s", request.target.code, exc)
            if self._is_current(request):
                self.view.set_text(str(exc))
            return

        if not self._is_current(request):
            logger.debug("Discarding superseded translation to %s", request.target.code)
            return
        with self._lock:
            self.session.record(request.target)
        self.view.set_text(result.text)


def _language_argument(value: str) -> TargetLanguage:
    try:
        return TargetLanguage.parse(value)
    except InvalidLanguageError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Translate the clipboard text and show the result in a small window."
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=CONFIG_FILE,
        help=f"Path to the JSON configuration file (default: {CONFIG_FILE}).",
    )
    parser.add_argument(
        "--target",
        type=_language_argument,
        default=None,
        help="Translate into this language code instead of choosing one automatically.",
    )
    parser.add_argument("--api-url", default=None, help="Override the API base URL from the config.")
    parser.add_argument("--model", default=None, help="Override the model name from the config.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    load_dotenv()

    config_path: Path = args.config
    get_logger(config_path.parent, level=logging.DEBUG if args.debug else logging.INFO)

    config = load_config(config_path)
    if args.api_url:
        config.api_url = args.api_url
    if args.model:
        config.model_version = args.model

    session = SessionState.restore(LastLanguageStore(config_path.parent / LAST_LANGUAGE_FILE.name))

    app = ClipboardTranslatorApp(
        config,
        api_key=os.environ.get(API_KEY_ENV),
        session=session,
        forced_target=args.target,
    )
    app.run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
