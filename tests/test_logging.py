"""Tests for structured logging setup."""

from __future__ import annotations

import io
import json

from dual_tracker.config.schema import LoggingConfig
from dual_tracker.engine.normalizer import normalize_batches
from dual_tracker.logging import configure_logging, get_logger, setup_logging

from conftest import raw_record


class TestSetupLogging:
    def test_json_format(self, capsys):
        setup_logging(level="INFO", log_format="json")
        logger = get_logger("test_json")
        logger.info("test message", asset="BTC")

        captured = capsys.readouterr()
        line = json.loads(captured.err.strip())
        assert line["event"] == "test message"
        assert line["asset"] == "BTC"
        assert line["level"] == "info"
        assert "timestamp" in line

    def test_console_format(self, capsys):
        setup_logging(level="INFO", log_format="console")
        logger = get_logger("test_console")
        logger.info("hello console", asset="ETH")

        captured = capsys.readouterr()
        assert "hello console" in captured.err
        assert "ETH" in captured.err

    def test_log_level_filtering(self, capsys):
        setup_logging(level="WARNING", log_format="json")
        logger = get_logger("test_level")
        logger.info("should be hidden")
        logger.warning("should appear")

        captured = capsys.readouterr()
        assert "should be hidden" not in captured.err
        assert "should appear" in captured.err

    def test_get_logger_with_context(self, capsys):
        setup_logging(level="INFO", log_format="json")
        logger = get_logger("test_ctx", asset="ETH", upload_id=3)
        logger.info("context test")

        captured = capsys.readouterr()
        line = json.loads(captured.err.strip())
        assert line["asset"] == "ETH"
        assert line["upload_id"] == 3

    def test_rejected_record_logged(self, capsys):
        setup_logging(level="INFO", log_format="json")
        normalize_batches([[raw_record(id="bad", amount="??")]])

        captured = capsys.readouterr()
        events = [json.loads(line) for line in captured.err.strip().splitlines()]
        rejected = next(e for e in events if e["event"] == "record_rejected")
        assert rejected["kind"] == "UnparsableNumber"
        assert rejected["record_id"] == "bad"
        assert rejected["logger"] == "normalizer"

    def test_custom_stream(self, capsys):
        stream = io.StringIO()
        setup_logging(level="INFO", log_format="json", stream=stream)
        get_logger("test_stream").info("to the buffer")

        assert json.loads(stream.getvalue())["event"] == "to the buffer"
        assert capsys.readouterr().err == ""


class TestConfigureLogging:
    def test_component_bound_to_every_event(self, capsys):
        configure_logging(LoggingConfig(level="INFO", format="json"), component="report")
        get_logger("normalizer").info("batch_normalized", accepted=1)

        line = json.loads(capsys.readouterr().err.strip())
        assert line["component"] == "report"
        assert line["logger"] == "normalizer"

    def test_level_from_config(self, capsys):
        configure_logging(LoggingConfig(level="ERROR", format="json"), component="api")
        get_logger("test_cfg").warning("quiet")

        assert "quiet" not in capsys.readouterr().err

    def test_setup_replaces_bound_context(self):
        setup_logging(component="api")
        stream = io.StringIO()
        setup_logging(stream=stream)
        get_logger("test_reset").info("fresh")

        assert "component" not in json.loads(stream.getvalue())
