import unittest

from clipboard_utils import ClipboardError, EmptyClipboardError, copy_to_clipboard, read_clipboard_text


class FakeClipboard:
    def __init__(self, text="") -> None:
        self.text = text
        self.copied = []

    def paste(self):
        return self.text

    def copy(self, text: str) -> None:
        self.copied.append(text)


class BrokenClipboard:
    def paste(self):
        raise RuntimeError("clipboard locked")

    def copy(self, text: str) -> None:
        raise RuntimeError("clipboard locked")


class ClipboardUtilsTests(unittest.TestCase):
    def test_read_returns_text(self) -> None:
        self.assertEqual(read_clipboard_text(FakeClipboard("hello")), "hello")

    def test_read_empty_clipboard(self) -> None:
        with self.assertRaises(EmptyClipboardError) as ctx:
            read_clipboard_text(FakeClipboard("  \n"))
        self.assertEqual(str(ctx.exception), "Clipboard text is empty.")

    def test_read_non_text_clipboard(self) -> None:
        with self.assertRaises(EmptyClipboardError):
            read_clipboard_text(FakeClipboard(None))

    def test_read_backend_error(self) -> None:
        with self.assertRaises(ClipboardError) as ctx:
            read_clipboard_text(BrokenClipboard())
        self.assertNotIsInstance(ctx.exception, EmptyClipboardError)
        self.assertEqual(str(ctx.exception), "Failed to read from clipboard: clipboard locked")
        self.assertIsInstance(ctx.exception.__cause__, RuntimeError)

    def test_copy(self) -> None:
        clipboard = FakeClipboard()
        copy_to_clipboard("Привет", clipboard)
        self.assertEqual(clipboard.copied, ["Привет"])

    def test_copy_backend_error(self) -> None:
        with self.assertRaises(ClipboardError):
            copy_to_clipboard("hello", BrokenClipboard())


if __name__ == "__main__":  # pragma: no cover - allows direct execution
    unittest.main()
