"""Unit tests for logging helpers."""

import io
import logging

from sdk_guard.core.manifest import ManifestMutator
from sdk_guard.utils.logging import (
    ContextFormatter,
    configure_logging,
    format_fields,
    get_logger,
    get_logger_with_context,
)


def make_record(message, context=None):
    record = logging.LogRecord("sdk_guard.test", logging.INFO, __file__, 1, message, None, None)
    if context is not None:
        record.context = context
    return record


class TestFormatFields:
    """Tests for key=value rendering."""

    def test_pairs(self):
        """Test fields rendered in insertion order."""
        assert format_fields({"mode": "full", "count": 2}) == "mode=full count=2"

    def test_quotes_whitespace(self):
        """Test that values with spaces or no text are quoted."""
        assert format_fields({"path": "My Game/manifest.json", "key": ""}) == (
            'path="My Game/manifest.json" key=""'
        )


class TestContextFormatter:
    """Tests for ContextFormatter."""

    def test_appends_context(self):
        """Test that context fields follow the message."""
        formatter = ContextFormatter("%(levelname)s: %(message)s")
        line = formatter.format(make_record("Starting validation", {"mode": "full"}))
        assert line == "INFO: Starting validation mode=full"

    def test_without_context(self):
        """Test a record without context fields."""
        formatter = ContextFormatter("%(message)s")
        assert formatter.format(make_record("plain")) == "plain"


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_plain(self):
        """Test the default format and level."""
        stream = io.StringIO()
        configure_logging(level="warning", stream=stream)

        get_logger_with_context("manifest", path="manifest.json").warning("Could not resolve")
        get_logger("manifest").info("hidden")

        assert stream.getvalue() == "WARNING: Could not resolve path=manifest.json\n"
        assert logging.getLogger("sdk_guard").propagate is False

    def test_structured(self):
        """Test that structured lines carry the logger name."""
        stream = io.StringIO()
        configure_logging(level="DEBUG", structured=True, stream=stream)

        get_logger("validator").debug("Starting validation")

        assert "DEBUG sdk_guard.validator Starting validation" in stream.getvalue()


class TestContextLogger:
    """Tests for bound context loggers."""

    def test_prefixes_name(self):
        """Test that module names are placed under sdk_guard."""
        assert get_logger("mode").name == "sdk_guard.mode"
        assert get_logger("sdk_guard.mode").name == "sdk_guard.mode"

    def test_call_context_merged(self, caplog):
        """Test that per-call context is merged over bound fields."""
        caplog.set_level(logging.INFO, logger="sdk_guard")
        log = get_logger_with_context("installer", mode="full")

        log.info("Installing", extra={"context": {"sdk": "Adjust"}})

        assert caplog.records[-1].context == {"mode": "full", "sdk": "Adjust"}

    def test_bind(self, caplog):
        """Test that bind adds fields without changing the original logger."""
        caplog.set_level(logging.INFO, logger="sdk_guard")
        log = get_logger_with_context("installer", mode="full")

        log.bind(sdk="Adjust").info("bound")
        log.info("original")

        assert caplog.records[-2].context == {"mode": "full", "sdk": "Adjust"}
        assert caplog.records[-1].context == {"mode": "full"}

    def test_mutator_logs_path(self, caplog, tmp_path):
        """Test that manifest errors carry the manifest path."""
        caplog.set_level(logging.ERROR, logger="sdk_guard")
        path = tmp_path / "manifest.json"

        ManifestMutator(path).load()

        assert caplog.records[-1].message == "manifest.json not found"
        assert caplog.records[-1].context == {"path": path}
