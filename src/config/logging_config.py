"""
Logging configuration.

INFO/DEBUG go to stdout and WARNING and above to stderr. When a log
directory is configured, errors (with tracebacks) are also written to
``error.log`` and every accepted registration to ``registration.log``.
"""

import logging
import sys
from pathlib import Path

from src.config.settings import Settings

REGISTRATIONS_LOGGER = "registrations"


class InfoFilter(logging.Filter):
    """Filter to only allow INFO and DEBUG logs (exclude WARNING and above)"""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.WARNING


def setup_logging(settings: Settings) -> None:
    """
    Configure root and registration loggers from settings.

    Safe to call more than once; previously installed handlers are replaced.
    Creates the log directory if it does not exist.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    formatter = logging.Formatter("%(levelname)s:%(name)s:%(message)s")
    file_formatter = logging.Formatter("[%(asctime)s] %(name)s: %(message)s", "%Y-%m-%d %H:%M:%S")

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(logging.DEBUG)
    stdout_handler.addFilter(InfoFilter())
    stdout_handler.setFormatter(formatter)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    _replace_handlers(root_logger, stdout_handler, stderr_handler)

    registrations_logger = logging.getLogger(REGISTRATIONS_LOGGER)
    _replace_handlers(registrations_logger)

    if not settings.log_dir:
        return

    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    error_handler = logging.FileHandler(log_dir / "error.log", encoding="utf-8")
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(file_formatter)
    root_logger.addHandler(error_handler)

    registration_handler = logging.FileHandler(log_dir / "registration.log", encoding="utf-8")
    registration_handler.setLevel(logging.INFO)
    registration_handler.setFormatter(logging.Formatter("[%(asctime)s] %(message)s", "%Y-%m-%d %H:%M:%S"))
    registrations_logger.addHandler(registration_handler)
    registrations_logger.setLevel(logging.INFO)


def _replace_handlers(logger: logging.Logger, *handlers: logging.Handler) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)
