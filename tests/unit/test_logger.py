import logging

from cvchat.logging.logger import _ContextFormatter


def _record(message: str, **context: object) -> logging.LogRecord:
    record = logging.LogRecord("cvchat", logging.INFO, __file__, 1, message, None, None)
    record.context = context
    return record


class TestContextFormatter:
    def test_appends_context_pairs(self) -> None:
        formatter = _ContextFormatter("[%(levelname)s] %(message)s")
        line = formatter.format(_record("Processing upload", upload_id="abc", force=False))
        assert line == "[INFO] Processing upload | upload_id=abc force=False"

    def test_plain_message_without_context(self) -> None:
        formatter = _ContextFormatter("[%(levelname)s] %(message)s")
        assert formatter.format(_record("cvchat stopped")) == "[INFO] cvchat stopped"
