"""
Logging setup for Depend Insight.

All loggers live under the ``depend_insight`` namespace and are rendered by a
single rich handler on stderr, so JSON written to stdout stays parseable.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "depend_insight"

LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}


def setup_logging(verbosity: str = "normal", log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach handlers to the ``depend_insight`` logger.

    Calling it again replaces the handlers installed by the previous call
    instead of stacking them.

    Args:
        verbosity: "quiet" (errors only), "normal" (warnings, e.g. DI301
            cycles) or "verbose" (debug, including unresolved references)
        log_file: Optional file that receives the same records as plain text

    Returns:
        The ``depend_insight`` logger
    """
    if verbosity not in LEVELS:
        raise ValueError(f"Unknown verbosity {verbosity!r}; expected one of {sorted(LEVELS)}")
    level = LEVELS[verbosity]
    verbose = verbosity == "verbose"

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            # DI codes are written as "[DI301]" and must not be read as markup
            markup=False,
            show_time=verbose,
            show_path=verbose,
        )
    ]
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        handlers.append(file_handler)

    logger = logging.getLogger(LOGGER_NAME)
    for old in [h for h in logger.handlers if getattr(h, "_depend_insight", False)]:
        logger.removeHandler(old)
        old.close()
    for handler in handlers:
        handler._depend_insight = True
        handler.setLevel(level)
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger for a module, always nested under ``depend_insight``."""
    if name is None:
        return logging.getLogger(LOGGER_NAME)
    if not name.startswith(LOGGER_NAME):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)
