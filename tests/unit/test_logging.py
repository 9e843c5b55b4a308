"""
tickrisk: Tests for Logging Setup

Test suite for ``tickrisk.core.logging``. Covers:
- Import leaves the caller's logging configuration alone
- Console and file handlers attached by setup_logging
- Namespaced logger retrieval
"""

from __future__ import annotations

import io
import logging
import os
import subprocess
import sys
from pathlib import Path
from typing import Iterator

import pytest

from tickrisk.core.config import TickriskConfig
from tickrisk.core.logging import get_logger, setup_logging


@pytest.fixture
def clean_package_logger() -> Iterator[logging.Logger]:
    """Restore the ``tickrisk`` logger's handlers and level after a test."""

    package_logger = logging.getLogger("tickrisk")
    saved_handlers = list(package_logger.handlers)
    saved_level = package_logger.level
    yield package_logger
    for handler in list(package_logger.handlers):
        if handler not in saved_handlers:
            package_logger.removeHandler(handler)
            handler.close()
    for handler in saved_handlers:
        if handler not in package_logger.handlers:
            package_logger.addHandler(handler)
    package_logger.setLevel(saved_level)


class TestImportSideEffects:
    """Importing tickrisk must not configure logging for the caller."""

    def test_import_leaves_root_logger_and_cwd_untouched(self, tmp_path: Path) -> None:
        script = (
            "import logging, os\n"
            "before = list(logging.getLogger().handlers)\n"
            "import tickrisk\n"
            "import tickrisk.scripts.show_portfolio_risk\n"
            "tickrisk.RiskEngine(cache_enabled=True)\n"
            "assert logging.getLogger().handlers == before, logging.getLogger().handlers\n"
            "print(sorted(os.listdir('.')))\n"
        )
        env = dict(os.environ)
        env.pop("LOG_FILE", None)

        result = subprocess.run(
            [sys.executable, "-c", script],
            cwd=tmp_path,
            env=env,
            capture_output=True,
            text=True,
        )

        assert result.returncode == 0, result.stderr
        assert result.stdout.strip() == "[]"
        assert not (tmp_path / "tickrisk.log").exists()

    def test_package_logger_has_only_null_handler(self) -> None:
        handlers = logging.getLogger("tickrisk").handlers

        assert any(isinstance(h, logging.NullHandler) for h in handlers)


class TestSetupLogging:
    """Tests for the CLI-facing handler setup."""

    def test_setup_logging_writes_to_log_file(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        clean_package_logger: logging.Logger,
    ) -> None:
        """setup_logging should create the configured log file and write to it."""

        log_file = tmp_path / "test.log"
        monkeypatch.setenv("LOG_FILE", str(log_file))
        monkeypatch.setenv("LOG_LEVEL", "INFO")
        root_before = list(logging.getLogger().handlers)

        setup_logging(TickriskConfig(), stream=io.StringIO())
        get_logger("test.logging").info("Test log message")

        assert log_file.exists()
        assert "Test log message" in log_file.read_text()
        assert logging.getLogger().handlers == root_before

    def test_console_only_without_log_file(
        self,
        monkeypatch: pytest.MonkeyPatch,
        clean_package_logger: logging.Logger,
    ) -> None:
        monkeypatch.delenv("LOG_FILE", raising=False)
        stream = io.StringIO()

        package_logger = setup_logging(TickriskConfig(), stream=stream)
        get_logger("test.console").warning("console only")

        assert "console only" in stream.getvalue()
        assert not any(isinstance(h, logging.FileHandler) for h in package_logger.handlers)

    def test_repeated_setup_does_not_stack_handlers(
        self,
        monkeypatch: pytest.MonkeyPatch,
        clean_package_logger: logging.Logger,
    ) -> None:
        monkeypatch.delenv("LOG_FILE", raising=False)
        config = TickriskConfig()

        setup_logging(config, stream=io.StringIO())
        count = len(clean_package_logger.handlers)
        setup_logging(config, stream=io.StringIO())

        assert len(clean_package_logger.handlers) == count


class TestGetLogger:
    def test_get_logger_returns_namespaced_logger(self) -> None:
        """get_logger should prefix loggers with the 'tickrisk.' namespace."""

        assert get_logger("core.test").name == "tickrisk.core.test"

    def test_get_logger_keeps_module_names(self) -> None:
        """Module ``__name__`` values are not prefixed twice."""

        assert get_logger("tickrisk.risk.engine").name == "tickrisk.risk.engine"
