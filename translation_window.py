"""Tk window that shows a translation with language toggles and Copy & Close."""

from __future__ import annotations

import queue
from typing import Callable, Optional, Sequence

try:
    import tkinter as tk
    from tkinter import font as tkfont, scrolledtext
except ImportError as exc:  # pragma: no cover - tkinter ships with most Python builds
    raise SystemExit("tkinter is required to display the translation window") from exc

from language_selection import TargetLanguage


WINDOW_TITLE = "Clipboard Translator"
WINDOW_GEOMETRY = "450x400"
POLL_INTERVAL_MS = 100


class TranslationWindow:
    """Main window of the application.

    Every public method may be called from any thread: updates are queued and
    applied by the Tk loop, which polls the queue every ``POLL_INTERVAL_MS``.
    """

    def __init__(
        self,
        languages: Sequence[TargetLanguage],
        *,
        language_callback: Callable[[TargetLanguage], None],
        copy_callback: Callable[[str], None],
    ) -> None:
        self._languages = list(languages)
        self._language_callback = language_callback
        self._copy_callback = copy_callback
        self._updates: "queue.Queue[tuple[str, object]]" = queue.Queue()
        self._window: Optional[tk.Tk] = None
        self._selected: Optional[tk.StringVar] = None
        self._text_box: Optional[scrolledtext.ScrolledText] = None
        self._language_buttons: dict[TargetLanguage, tk.Radiobutton] = {}

    def set_text(self, text: str) -> None:
        self._updates.put(("text", text))

    def set_active_language(self, language: TargetLanguage) -> None:
        self._updates.put(("language", language))

    def close(self) -> None:
        self._updates.put(("close", None))

    def mainloop(self) -> None:
        window = self._build()
        self._apply_updates()
        window.mainloop()
        self._window = None
        self._selected = None
        self._text_box = None
        self._language_buttons = {}

    def _build(self) -> tk.Tk:
        window = tk.Tk()
        self._window = window
        window.title(WINDOW_TITLE)
        window.geometry(WINDOW_GEOMETRY)

        base_family = tkfont.nametofont("TkDefaultFont").actual("family")
        button_font = tkfont.Font(family=base_family, size=11)
        text_font = tkfont.Font(family=base_family, size=12)

        main_frame = tk.Frame(window)
        main_frame.pack(fill=tk.BOTH, expand=True, padx=12, pady=12)

        language_frame = tk.Frame(main_frame)
        language_frame.pack(pady=(0, 15))

        self._selected = tk.StringVar(window, value="")
        if not self._languages:
            tk.Label(language_frame, text="No target languages configured").pack()
        for language in self._languages:
            button = tk.Radiobutton(
                language_frame,
                text=language.code,
                value=language.code,
                variable=self._selected,
                indicatoron=False,
                font=button_font,
                width=4,
                cursor="hand2",
                command=lambda lang=language: self._language_callback(lang),
            )
            button.pack(side=tk.LEFT, padx=3)
            self._language_buttons[language] = button

        text_box = scrolledtext.ScrolledText(main_frame, wrap=tk.WORD, height=12)
        text_box.configure(state=tk.DISABLED, font=text_font)
        text_box.pack(fill=tk.BOTH, expand=True, pady=(0, 10))
        self._text_box = text_box

        copy_button = tk.Button(
            main_frame,
            text="Copy & Close",
            font=button_font,
            cursor="hand2",
            command=self._on_copy,
        )
        copy_button.pack()

        window.bind("<Escape>", self._on_escape)
        return window

    def _on_escape(self, event: Optional[tk.Event] = None) -> str:
        if self._window is not None:
            self._window.destroy()
        return "break"

    def _current_text(self) -> str:
        if self._text_box is None:
            return ""
        return self._text_box.get("1.0", "end-1c")

    def _on_copy(self) -> None:
        self._copy_callback(self._current_text())

    def _replace_text(self, text: str) -> None:
        if self._text_box is None:
            return
        self._text_box.configure(state=tk.NORMAL)
        self._text_box.delete("1.0", tk.END)
        self._text_box.insert(tk.END, text)
        self._text_box.configure(state=tk.DISABLED)

    def _apply_updates(self) -> None:
        window = self._window
        if window is None:
            return
        try:
            while True:
                kind, payload = self._updates.get_nowait()
                if kind == "text":
                    self._replace_text(str(payload))
                elif kind == "language" and self._selected is not None:
                    self._selected.set(payload.code)  # type: ignore[union-attr]
                elif kind == "close":
                    window.destroy()
                    return
        except queue.Empty:
            pass
        window.after(POLL_INTERVAL_MS, self._apply_updates)
