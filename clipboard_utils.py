"""Clipboard access through pyperclip."""

from __future__ import annotations

try:  # pragma: no cover - executed during module import
    import pyperclip  # type: ignore
except ImportError:  # pragma: no cover - reported when the clipboard is used
    pyperclip = None  # type: ignore


class ClipboardError(RuntimeError):
    """Raised when the clipboard cannot be read or written."""


class EmptyClipboardError(ClipboardError):
    """Raised when the clipboard holds no text."""


def _resolve(clipboard):
    if clipboard is None:
        clipboard = pyperclip
    if clipboard is None:
        raise ClipboardError(
            "The 'pyperclip' package is required. Install it with 'pip install pyperclip'."
        )
    return clipboard


def read_clipboard_text(clipboard=None) -> str:
    clipboard = _resolve(clipboard)
    try:
        text = clipboard.paste()
    except Exception as exc:
        raise ClipboardError(f"Failed to read from clipboard: {exc}") from exc
    if not isinstance(text, str) or not text.strip():
        raise EmptyClipboardError("Clipboard text is empty.")
    return text


def copy_to_clipboard(text: str, clipboard=None) -> None:
    clipboard = _resolve(clipboard)
    try:
        clipboard.copy(text)
    except Exception as exc:
        raise ClipboardError(f"Failed to write to clipboard: {exc}") from exc
