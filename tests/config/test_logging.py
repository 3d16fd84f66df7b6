"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog
from sqlalchemy import text

from typectl.config.logging import configure_logging, logger_levels
from typectl.infrastructure.database.engine import create_db_engine


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    tc = logging.getLogger("typectl")
    tc_level = tc.level
    sql = logging.getLogger("sqlalchemy.engine")
    sql_level = sql.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    tc.setLevel(tc_level)
    sql.setLevel(sql_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("typectl").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("typectl").level == logging.WARNING

    def test_log_sql(self) -> None:
        configure_logging(log_sql=True)
        assert logging.getLogger("sqlalchemy.engine").level == logging.INFO
        configure_logging(log_sql=False)
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("typectl.test")
        log.warning("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "typectl.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)

        logging.getLogger("typectl.infrastructure.scope").debug("Scope rolled back")

        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Scope rolled back"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "typectl.infrastructure.scope"

    def test_third_party_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("pydantic").debug("noise")
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1

    def test_sql_statements_go_to_stderr(
        self, tmp_path: Path, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(log_sql=True, log_json=True)
        engine = create_db_engine(tmp_path / "echo.db")
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 42"))
        finally:
            engine.dispose()
        captured = capfd.readouterr()
        assert captured.out == ""
        assert "SELECT 42" in captured.err


class TestLoggerLevels:
    def test_defaults(self) -> None:
        assert logger_levels() == {
            "": logging.WARNING,
            "typectl": logging.WARNING,
            "sqlalchemy.engine": logging.WARNING,
        }

    def test_verbose_and_sql(self) -> None:
        levels = logger_levels(verbose=True, log_sql=True)
        assert levels["typectl"] == logging.DEBUG
        assert levels["sqlalchemy.engine"] == logging.INFO
        assert levels[""] == logging.WARNING
