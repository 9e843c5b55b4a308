"""
tickrisk: Logging Setup

tickrisk is used as a library, so importing it never touches the
caller's logging configuration. Modules obtain loggers in the
``tickrisk`` namespace through :func:`get_logger`; the package logger
carries only a ``NullHandler`` until an entry point (such as the
``show_portfolio_risk`` CLI) calls :func:`setup_logging`.

Key responsibilities:
- Provide a helper to obtain module-specific loggers
- Attach console and optional file handlers for CLI runs

External dependencies:
- logging: Python standard library logging framework

Thread safety: Thread-safe (logging module is process-global and
thread-safe under normal usage)

Author: tickrisk Team
Created: 2026-10-18
Last Modified: 2026-10-18
Status: Development
Version: v0.1.0
"""

# ============================================================================
# Imports
# ============================================================================

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from tickrisk.core.config import TickriskConfig, get_config

# ============================================================================
# Module Setup
# ============================================================================

_PACKAGE_LOGGER = "tickrisk"

# Marks handlers installed by setup_logging so repeated calls can find them.
_HANDLER_TAG = "_tickrisk_handler"

logging.getLogger(_PACKAGE_LOGGER).addHandler(logging.NullHandler())

# ============================================================================
# Public API
# ============================================================================


def setup_logging(
    config: Optional[TickriskConfig] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Attach handlers to the ``tickrisk`` package logger.

    Handlers go on the package logger, never on the root logger, so an
    application embedding tickrisk keeps control of its own logging.
    Calling this again replaces the handlers installed by the previous
    call instead of stacking new ones.

    Args:
        config: Optional configuration object. If omitted, the global
            configuration will be loaded via :func:`get_config`.
        stream: Console stream; defaults to ``sys.stderr`` so that CLI
            report output on stdout stays clean.

    Returns:
        The configured ``tickrisk`` package logger.
    """

    if config is None:
        config = get_config()

    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        if getattr(handler, _HANDLER_TAG, False):
            package_logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(stream or sys.stderr)]
    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file))

    for handler in handlers:
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_TAG, True)
        package_logger.addHandler(handler)

    package_logger.setLevel(getattr(logging, config.log_level.upper(), logging.INFO))
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger in the ``tickrisk`` namespace.

    Module-level ``__name__`` values already carry the ``tickrisk.``
    prefix and are used as-is; other names are prefixed. No handlers are
    configured here.
    """

    if name == _PACKAGE_LOGGER or name.startswith(f"{_PACKAGE_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_PACKAGE_LOGGER}.{name}")
