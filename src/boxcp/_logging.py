"""Structured logging setup using structlog."""

from __future__ import annotations

import logging
import os
import sys

import structlog


def _stderr_logger(*args):
    """Logger factory bound to whatever sys.stderr is at call time."""
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(verbose: bool = False) -> None:
    """Configure structlog to render to stderr.

    Defaults to warnings only; *verbose* (or ``BOXCP_LOG_LEVEL``) lowers
    the threshold.
    """
    if verbose:
        level = logging.DEBUG
    else:
        name = os.environ.get("BOXCP_LOG_LEVEL", "WARNING").upper()
        level = getattr(logging, name, logging.WARNING)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )


if not structlog.is_configured():
    configure_logging()
