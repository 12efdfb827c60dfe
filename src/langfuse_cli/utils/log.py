"""Logging setup — package loggers routed to stderr through rich."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from langfuse_cli.client.errors import err_console

PACKAGE_LOGGER = "langfuse_cli"


def configure_logging(verbose: bool = False) -> None:
    """Attach a stderr handler to the package logger; DEBUG when *verbose*."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=err_console,
            show_time=False,
            show_path=False,
            markup=False,
            rich_tracebacks=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
