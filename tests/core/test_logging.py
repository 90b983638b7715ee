"""Tests for structured logging."""

import json
import logging
from pathlib import Path

import pytest
import structlog

from proplint.config.models import LoggingConfig, LogOutputConfig
from proplint.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)


class TestRunIdCorrelation:
    """Run ID context variable tests."""

    def setup_method(self) -> None:
        """Clear run ID before each test."""
        clear_run_id()

    def test_given_run_id_when_set_then_can_retrieve(self) -> None:
        """Run ID can be set and retrieved."""
        # When
        result = set_run_id("run-123")

        # Then
        assert result == "run-123"
        assert get_run_id() == "run-123"

    def test_given_no_id_when_set_then_generates_uuid(self) -> None:
        """Set generates a UUID-based ID when none provided."""
        # When
        rid = set_run_id()

        # Then
        assert len(rid) == 12  # uuid4().hex[:12]

    def test_given_set_id_when_clear_then_removes_id(self) -> None:
        """Clear removes the current run ID."""
        # Given
        set_run_id("to-clear")

        # When
        clear_run_id()

        # Then
        assert get_run_id() is None


class TestLoggingConfiguration:
    """Logging configuration tests."""

    def setup_method(self) -> None:
        """Reset structlog and stdlib logging before each test."""
        structlog.reset_defaults()
        logging.getLogger().handlers.clear()
        clear_run_id()

    def test_given_json_file_output_when_log_then_valid_json_with_run_id(self, tmp_path: Path) -> None:
        """JSON output carries event, fields, level, timestamp and run ID."""
        # Given
        log_file = tmp_path / "proplint.log"
        config = LoggingConfig(
            level="INFO",
            outputs=[LogOutputConfig(format="json", destination=str(log_file))],
        )
        configure_logging(config=config)
        set_run_id("abc")

        # When
        get_logger("test").info("file_linted", path="a.js")

        # Then
        data = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert data["event"] == "file_linted"
        assert data["path"] == "a.js"
        assert data["level"] == "info"
        assert data["run_id"] == "abc"
        assert "timestamp" in data

    def test_given_config_object_when_configure_then_takes_precedence(self, tmp_path: Path) -> None:
        """LoggingConfig object takes precedence over simple params."""
        # Given
        log_file = tmp_path / "test.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[LogOutputConfig(format="json", destination=str(log_file))],
        )

        # When - config's DEBUG should override the level="ERROR" param
        configure_logging(config=config, json_format=False, level="ERROR")
        get_logger().debug("debug msg")

        # Then
        assert "debug msg" in log_file.read_text()

    def test_given_multi_output_config_when_configure_then_levels_per_output(
        self, tmp_path: Path
    ) -> None:
        """Each output filters by its own level."""
        # Given
        debug_file = tmp_path / "debug.log"
        info_file = tmp_path / "info.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[
                LogOutputConfig(format="json", destination=str(info_file), level="INFO"),
                LogOutputConfig(format="json", destination=str(debug_file)),
            ],
        )

        # When
        configure_logging(config=config)
        logger = get_logger()
        logger.debug("debug only")
        logger.info("info msg")

        # Then
        info_content = info_file.read_text()
        assert "info msg" in info_content
        assert "debug only" not in info_content
        debug_content = debug_file.read_text()
        assert "debug only" in debug_content
        assert "info msg" in debug_content

    def test_given_default_level_when_info_logged_then_suppressed(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """The default WARNING level keeps routine events off stderr."""
        # Given
        configure_logging()

        # When
        get_logger("test").info("routine")

        # Then
        assert "routine" not in capsys.readouterr().err

    def test_given_logger_created_before_configure_when_logged_then_configuration_applies(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Module-level loggers honour configuration done after import."""
        # Given
        logger = get_logger("proplint.lint.ops")
        configure_logging(level="WARNING")

        # When
        logger.info("lint_started", files=1)
        logger.warning("file_skipped", path="a.md")

        # Then
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "lint_started" not in captured.err
        assert "file_skipped" in captured.err
        assert "proplint.lint.ops" in captured.err
