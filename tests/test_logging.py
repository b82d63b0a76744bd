"""Tests for the PprintLogger and setup_logging functionality.

This module verifies:
- Strings pass through unchanged
- Dicts and lists are pprint-formatted, pydantic models dumped as JSON
- pprint=False falls back to str()
- Debug messages are skipped cheaply when DEBUG is disabled
- setup_logging names loggers after the calling module and never stacks handlers
"""

import logging
from io import StringIO

from mentionindex.logging import PprintLogger, setup_logging
from mentionindex.mention import Mention


def _capturing_logger(name: str, level: int = logging.DEBUG) -> tuple[logging.Logger, StringIO]:
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers.clear()
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter("%(levelname)s - %(message)s"))
    logger.addHandler(handler)
    return logger, stream


class TestPprintLogger:
    """Tests for PprintLogger formatting and delegation."""

    def test_string_passes_through(self) -> None:
        logger, stream = _capturing_logger("test_string")

        PprintLogger(logger).info("Using mention detector type: rule")

        assert "INFO - Using mention detector type: rule" in stream.getvalue()

    def test_dict_is_pprinted(self) -> None:
        """Structured log records keep every key."""
        logger, stream = _capturing_logger("test_dict")

        PprintLogger(logger).error({"message": "Mention annotation failed", "doc_id": "d1", "error": "boom"})

        output = stream.getvalue()
        assert "'message': 'Mention annotation failed'" in output
        assert "'doc_id': 'd1'" in output

    def test_pydantic_model_uses_model_dump_json(self) -> None:
        logger, stream = _capturing_logger("test_model")
        mention = Mention(sentence_index=0, start_index=0, end_index=2, head_index=1, text="John Smith")

        PprintLogger(logger).info(mention)

        output = stream.getvalue()
        assert '"text": "John Smith"' in output
        assert '"head_index": 1' in output

    def test_pprint_false_uses_str(self) -> None:
        logger, stream = _capturing_logger("test_plain")

        PprintLogger(logger).warning({"key": "value"}, pprint=False)

        assert "WARNING - {'key': 'value'}" in stream.getvalue()

    def test_debug_skipped_when_disabled(self) -> None:
        logger, stream = _capturing_logger("test_debug_off", level=logging.INFO)

        PprintLogger(logger).debug({"message": "not shown"})

        assert stream.getvalue() == ""

    def test_all_levels(self) -> None:
        logger, stream = _capturing_logger("test_all_levels")
        pprint_logger = PprintLogger(logger)

        pprint_logger.debug({"level": "test"})
        pprint_logger.info({"level": "test"})
        pprint_logger.warning({"level": "test"})
        pprint_logger.error({"level": "test"})
        pprint_logger.critical({"level": "test"})

        output = stream.getvalue()
        for level in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            assert level in output

    def test_exception_includes_traceback(self) -> None:
        logger, stream = _capturing_logger("test_exception")

        try:
            raise ValueError("bad span")
        except ValueError:
            PprintLogger(logger).exception({"message": "failed"})

        output = stream.getvalue()
        assert "failed" in output
        assert "ValueError: bad span" in output

    def test_delegates_to_underlying_logger(self) -> None:
        logger = logging.getLogger("test_delegate")
        pprint_logger = PprintLogger(logger)

        pprint_logger.setLevel(logging.WARNING)

        assert logger.level == logging.WARNING
        assert pprint_logger.handlers == logger.handlers


class TestSetupLogging:
    def test_named_after_calling_module(self) -> None:
        logger = setup_logging()

        assert isinstance(logger, PprintLogger)
        assert logger.name == __name__

    def test_explicit_name_and_level(self) -> None:
        logger = setup_logging(level=logging.DEBUG, name="mentionindex.test_explicit")

        assert logger.name == "mentionindex.test_explicit"
        assert logger.level == logging.DEBUG

    def test_does_not_duplicate_handlers(self) -> None:
        first = setup_logging(name="mentionindex.test_handlers")
        second = setup_logging(name="mentionindex.test_handlers")

        assert first._logger is second._logger  # pylint: disable=protected-access
        assert len(second.handlers) == 1
