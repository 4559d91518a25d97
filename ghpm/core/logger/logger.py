"""Logging system with Rich support."""

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from ghpm.core.config.settings import LoggingSettings, get_settings

_loggers: dict[str, logging.Logger] = {}


def setup_logging(settings: LoggingSettings | None = None) -> None:
    """Setup logging configuration.

    Args:
        settings: Logging settings. Uses global settings if not provided.
    """
    if settings is None:
        settings = get_settings().logging

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.level))
    root_logger.handlers.clear()

    handler: RichHandler | logging.StreamHandler
    if settings.use_rich:
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            show_time=False,
            rich_tracebacks=True,
            markup=False,
        )
    else:
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter(settings.format)
        handler.setFormatter(formatter)

    root_logger.addHandler(handler)

    if settings.file:
        settings.file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(settings.file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, settings.level))
        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Get or create a logger by name.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Logger instance.
    """
    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)
    return _loggers[name]
