import logging
import tempfile
import unittest
from pathlib import Path

from app_logging import LOG_FILE_NAME, LOGGER_NAME, get_logger


class GetLoggerTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.addCleanup(self._reset_handlers)
        self._reset_handlers()

    @staticmethod
    def _reset_handlers() -> None:
        logger = logging.getLogger(LOGGER_NAME)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

    def test_writes_module_records_to_rotating_file(self) -> None:
        log_dir = Path(self._tmp.name) / "logs"
        get_logger(log_dir)
        logging.getLogger(f"{LOGGER_NAME}.config").info("Config saved")
        for handler in logging.getLogger(LOGGER_NAME).handlers:
            handler.flush()

        contents = (log_dir / LOG_FILE_NAME).read_text(encoding="utf-8")
        self.assertIn("[INFO] Config saved", contents)

    def test_handlers_are_attached_once(self) -> None:
        first = get_logger(Path(self._tmp.name))
        count = len(first.handlers)
        second = get_logger(Path(self._tmp.name), level=logging.DEBUG)
        self.assertIs(first, second)
        self.assertEqual(len(second.handlers), count)
        self.assertEqual(second.level, logging.DEBUG)

    def test_unusable_log_dir_keeps_console_handler(self) -> None:
        blocker = Path(self._tmp.name) / "blocker"
        blocker.write_text("file", encoding="utf-8")
        logger = get_logger(blocker / "logs")
        self.assertEqual(len(logger.handlers), 1)
        self.assertIsInstance(logger.handlers[0], logging.StreamHandler)


if __name__ == "__main__":  # pragma: no cover - allows direct execution
    unittest.main()
