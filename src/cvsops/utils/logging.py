"""Logging configuration for the cvsops command line."""

import logging

from rich.logging import RichHandler

ROOT_LOGGER = "cvsops"


def setup_logger(verbose: bool = False) -> logging.Logger:
    """Configure the ``cvsops`` logger with a rich console handler.

    Child stderr is not routed through here; it goes to the log sink as-is.
    Log level is DEBUG when ``verbose`` is set, WARNING otherwise.
    """
    level = logging.DEBUG if verbose else logging.WARNING

    log = logging.getLogger(ROOT_LOGGER)
    log.setLevel(level)
    log.propagate = False

    if log.hasHandlers():
        log.handlers.clear()

    handler = RichHandler(rich_tracebacks=True, show_path=False, log_time_format="[%X]")
    handler.setLevel(level)
    log.addHandler(handler)

    log.debug("Logger configured with level=%s", logging.getLevelName(level))
    return log
