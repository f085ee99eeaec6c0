"""Logging setup for the viewer.

All modules log through ``logging.getLogger(__name__)``, so configuring the
``RasterScopeViewer`` logger once at startup covers the core, the plugin
loader and the Qt adapter.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

PACKAGE_LOGGER = "RasterScopeViewer"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers that are chatty at DEBUG
_QUIET_LOGGERS = ("pyqtgraph", "PIL")


def resolve_level(level: Union[int, str]) -> int:
    """Turn a level name such as ``"debug"`` or a numeric level into an int.

    Raises:
        ValueError: For an unknown level name.
    """
    if isinstance(level, int):
        return level
    name = str(level).strip().upper()
    if name not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {level!r} (choose from {', '.join(LOG_LEVELS)})")
    return getattr(logging, name)


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[Union[str, Path]] = None) -> logging.Logger:
    """Attach console (and optionally file) handlers to the package logger.

    Calling it again replaces the handlers instead of stacking them.

    Args:
        level: Level name from LOG_LEVELS or a logging constant
        log_file: Also write records to this file (overwritten each run)

    Returns:
        The configured package logger.
    """
    level = resolve_level(level)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")
    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logger.debug("Logging at %s%s", logging.getLevelName(level), f", file {log_file}" if log_file else "")
    return logger
