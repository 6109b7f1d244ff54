"""
Unit tests for MagekitLogger and attribute formatting.
"""

import logging

import pytest

from magekit.services.logging import MagekitLogger, NullLogger, format_attributes


class ListHandler(logging.Handler):
    def __init__(self):
        super().__init__(logging.DEBUG)
        self.records: list[logging.LogRecord] = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def captured():
    """MagekitLogger with console output off and a collecting handler attached."""
    logger = MagekitLogger(name="magekit.test", console_enabled=False)
    handler = ListHandler()
    logging.getLogger("magekit.test").addHandler(handler)
    yield logger, handler
    logging.getLogger("magekit.test").removeHandler(handler)


class TestFormatAttributes:
    def test_pairs(self):
        assert format_attributes({"release": "web", "namespace": "prod"}) == "release=web namespace=prod"

    def test_float_and_list(self):
        assert format_attributes({"duration": 1.23456, "files": ["a.yaml", "b.yaml"]}) == (
            "duration=1.23 files=a.yaml,b.yaml"
        )


class TestMagekitLogger:
    def test_attributes_appended(self, captured):
        logger, handler = captured

        logger.info("Installing Helm chart...", release="web", chart="./charts/web")

        record = handler.records[0]
        assert record.getMessage() == "Installing Helm chart... release=web chart=./charts/web"
        assert record.attrs == {"release": "web", "chart": "./charts/web"}
        assert record.levelno == logging.INFO

    def test_percent_args_with_attributes(self, captured):
        logger, handler = captured

        logger.debug("Process started: pid=%d", 42, note="100%")

        assert handler.records[0].getMessage() == "Process started: pid=42 note=100%"

    def test_plain_message(self, captured):
        logger, handler = captured

        logger.error("oops")

        assert handler.records[0].getMessage() == "oops"
        assert not hasattr(handler.records[0], "attrs")

    def test_exc_info_passed_through(self, captured):
        logger, handler = captured

        try:
            raise RuntimeError("boom")
        except RuntimeError:
            logger.error("failed", exc_info=True, step="tidy")

        record = handler.records[0]
        assert record.exc_info is not None
        assert record.getMessage() == "failed step=tidy"

    def test_file_output_and_level(self, tmp_path):
        log_file = tmp_path / "logs" / "magekit.log"
        logger = MagekitLogger(
            name="magekit.filetest",
            level="warning",
            console_enabled=False,
            file_enabled=True,
            log_file=log_file,
        )

        logger.info("hidden")
        logger.warning("Terminating process", pid=7)
        for handler in logging.getLogger("magekit.filetest").handlers:
            handler.flush()

        content = log_file.read_text()
        assert "hidden" not in content
        assert "[WARNING] magekit.filetest: Terminating process pid=7" in content

    def test_set_level(self, tmp_path):
        log_file = tmp_path / "magekit.log"
        logger = MagekitLogger(
            name="magekit.leveltest", console_enabled=False, file_enabled=True, log_file=log_file
        )

        logger.set_level("error")
        logger.warning("dropped")
        logger.set_level("debug")
        logger.debug("kept")
        for handler in logging.getLogger("magekit.leveltest").handlers:
            handler.flush()

        content = log_file.read_text()
        assert "dropped" not in content
        assert "kept" in content


def test_null_logger_accepts_everything():
    logger = NullLogger()
    logger.info("x", a=1)
    logger.error("y %s", "z")
    logger.set_level("debug")
