"""
Structured logging configuration for the pension-model project.

This module provides a centralized way to configure logging across the application
with different log levels and output files for different concerns.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional, Set

# Define logger names for different concerns. Names within one group are
# siblings, never ancestors of another group's loggers.
PROJECTION_LOGGERS = (
    "pension_model.engines.projection",
    "pension_model.engines.valorization",
    "pension_model.engines.contributions",
    "pension_model.reference",
    "pension_model.data",
)
ADVISOR_LOGGERS = (
    "pension_model.engines.advisor",
    "pension_model.engines.scenarios",
)
DEBUG_LOGGER = "pension_model"

# Standard log format with module name and line number
LOG_FORMAT = "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

DEFAULT_LOG_DIR = Path("output/projection_logs")

LOG_FILES = (
    "projection_events.log",
    "advisor_events.log",
    "warnings_errors.log",
    "debug_detail.log",
    "combined.log",
)

# Track if logging is already configured and log files
_LOGGING_CONFIGURED = False
_log_files_created: Set[Path] = set()


def clear_logs(log_dir: Path) -> None:
    """
    Clear all log files in the specified directory.

    Args:
        log_dir: Directory containing log files to clear
    """
    for name in LOG_FILES:
        log_file = log_dir / name
        if log_file.exists():
            try:
                log_file.unlink()
            except OSError as e:
                logging.getLogger(__name__).warning(f"Could not delete {log_file}: {e}")


def _rotating_handler(path: Path, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
        mode="a",
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    _log_files_created.add(path)
    return handler


def _attach(logger_name: str, handler: logging.Handler, level: int) -> None:
    named = logging.getLogger(logger_name)
    for h in named.handlers[:]:
        named.removeHandler(h)
    named.setLevel(level)
    named.addHandler(handler)
    named.propagate = True  # Allow to bubble up to root


def setup_logging(log_dir: Path = DEFAULT_LOG_DIR, debug: bool = False, clear_existing: bool = True) -> None:
    """
    Configure structured logging for the application.

    Creates separate log files for different concerns:
    - projection_events.log: Projection, valorisation and reference-data events (INFO+)
    - advisor_events.log: Scenario generation and goal advisor events (INFO+)
    - warnings_errors.log: Warnings and errors (WARNING+)
    - debug_detail.log: Detailed debug information (DEBUG, only if debug=True)
    - combined.log: Combined log of all messages (INFO+)

    Args:
        log_dir: Directory where log files will be stored
        debug: If True, enables debug logging and creates debug_detail.log
        clear_existing: If True, clears existing log files before starting
    """
    global _LOGGING_CONFIGURED

    if _LOGGING_CONFIGURED:
        return

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    if clear_existing:
        clear_logs(log_dir)

    # Remove all handlers from the root logger before setup
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    logger_level = logging.DEBUG if debug else logging.INFO
    root_logger.setLevel(logger_level)

    file_formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    console_formatter = logging.Formatter("%(levelname)-8s %(message)s")

    # Console handler (for warnings and above)
    console = logging.StreamHandler()
    console.setLevel(logging.WARNING)
    console.setFormatter(console_formatter)
    root_logger.addHandler(console)

    root_logger.addHandler(_rotating_handler(log_dir / "combined.log", logging.INFO, file_formatter))
    root_logger.addHandler(_rotating_handler(log_dir / "warnings_errors.log", logging.WARNING, file_formatter))

    projection_handler = _rotating_handler(log_dir / "projection_events.log", logging.INFO, file_formatter)
    for name in PROJECTION_LOGGERS:
        _attach(name, projection_handler, logger_level)

    advisor_handler = _rotating_handler(log_dir / "advisor_events.log", logging.INFO, file_formatter)
    for name in ADVISOR_LOGGERS:
        _attach(name, advisor_handler, logger_level)

    if debug:
        debug_handler = _rotating_handler(log_dir / "debug_detail.log", logging.DEBUG, file_formatter)
        _attach(DEBUG_LOGGER, debug_handler, logging.DEBUG)

    _LOGGING_CONFIGURED = True


def reset_logging() -> None:
    """Drop the configured flag so setup_logging can run again (used by tests)."""
    global _LOGGING_CONFIGURED
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
    for name in PROJECTION_LOGGERS + ADVISOR_LOGGERS + (DEBUG_LOGGER,):
        named = logging.getLogger(name)
        for handler in named.handlers[:]:
            named.removeHandler(handler)
            handler.close()
    _log_files_created.clear()
    _LOGGING_CONFIGURED = False


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a properly configured logger instance.

    Args:
        name: Logger name (e.g., __name__). If None, returns root logger.

    Returns:
        Configured logger instance
    """
    if not _LOGGING_CONFIGURED:
        setup_logging(DEFAULT_LOG_DIR, debug=False)
    return logging.getLogger(name)
