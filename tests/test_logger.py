"""
Structured logging.
"""

import io
import json

import pytest

from nexaform.utils.logger import (
    FileHandler,
    JsonFormatter,
    LogHandler,
    LogLevel,
    LogRecord,
    Logger,
    MemoryHandler,
    StreamHandler,
    TextFormatter,
)


class Broken(LogHandler):
    def emit(self, record):
        raise OSError("disk full")


def record(**context):
    return LogRecord(level=LogLevel.INFO, message="Form rejected", context=context, logger_name="nexaform.form")


@pytest.mark.parametrize("value, level", [("info", LogLevel.INFO), (" Debug ", LogLevel.DEBUG), (40, LogLevel.ERROR)])
def test_parse_level(value, level):
    assert LogLevel.parse(value) is level


def test_parse_unknown_level():
    with pytest.raises(ValueError):
        LogLevel.parse("loud")


def test_text_formatter():
    line = TextFormatter(format_string="[{level}] {logger}: {message}").format(record(form="login"))

    assert line == "[INFO] nexaform.form: Form rejected form=login"


def test_json_formatter():
    data = json.loads(JsonFormatter().format(record(fields=["email"])))

    assert data["level"] == "INFO"
    assert data["logger"] == "nexaform.form"
    assert data["context"] == {"fields": ["email"]}


def test_level_filtering():
    handler = MemoryHandler()
    logger = Logger("tests", level=LogLevel.WARNING, handlers=[handler])

    logger.info("hidden")
    logger.warning("shown")

    assert handler.messages() == ["shown"]


def test_with_context_shares_handlers():
    handler = MemoryHandler()
    logger = Logger("tests", level=LogLevel.DEBUG, handlers=[handler]).with_context(form="login")

    logger.with_context(field="email").debug("Rule failed", rule="isEmail")

    assert handler.records[0].context == {"form": "login", "field": "email", "rule": "isEmail"}


def test_error_keeps_exception():
    handler = MemoryHandler()
    stream = io.StringIO()
    logger = Logger("tests", handlers=[handler, StreamHandler(stream=stream)])

    try:
        raise ValueError("bad rule")
    except ValueError as exc:
        logger.error("Rule crashed", exception=exc)

    assert isinstance(handler.records[0].exception, ValueError)
    assert "ValueError: bad rule" in stream.getvalue()


def test_broken_handler_does_not_stop_others():
    handler = MemoryHandler()
    logger = Logger("tests", handlers=[Broken(), handler])

    logger.info("still logged")

    assert handler.messages() == ["still logged"]


def test_file_handler(tmp_path):
    path = tmp_path / "logs" / "forms.log"
    logger = Logger("tests", handlers=[FileHandler(path)])

    logger.info("Submitted", form="login")

    assert json.loads(path.read_text(encoding="utf-8"))["context"] == {"form": "login"}
