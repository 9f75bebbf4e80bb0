# cargo_runner/logging_config.py
"""
Opt-in logging setup for the cargo_runner package logger.

The package only attaches a NullHandler on import; applications call
setup_logging() if they want cargo_runner's records on the console or in a file.
"""

from __future__ import annotations

import logging
from pathlib import Path

PACKAGE_LOGGER = "cargo_runner"
LOG_FILE_NAME = "cargo_runner.log"

FORMATS = {
    "simple": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    "detailed": "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
}

_log_file_path: Path | None = None


def _remove_own_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        if getattr(handler, "_cargo_runner_handler", False):
            logger.removeHandler(handler)
            handler.close()


def setup_logging(
    level: int | str = "INFO",
    console: bool = True,
    file: bool = False,
    format: str = "simple",
    format_string: str | None = None,
    propagate: bool = True,
    log_dir: str | Path | None = None,
) -> logging.Logger:
    """
    Configure the cargo_runner logger.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        level: Logging level name or number
        console: Log to stderr
        file: Also log to <log_dir>/cargo_runner.log
        format: "simple" or "detailed" (adds file:line)
        format_string: Custom format, overrides `format`
        propagate: Pass records on to the root logger as well
        log_dir: Directory for the log file (default: .cargo_runner/logs)
    """
    global _log_file_path

    if format_string is None:
        if format not in FORMATS:
            raise ValueError(f"Unknown log format '{format}': expected one of {sorted(FORMATS)}")
        format_string = FORMATS[format]
    formatter = logging.Formatter(format_string)

    logger = logging.getLogger(PACKAGE_LOGGER)
    _remove_own_handlers(logger)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    logger.propagate = propagate

    handlers: list[logging.Handler] = []
    if console:
        handlers.append(logging.StreamHandler())
    if file:
        directory = Path(log_dir) if log_dir is not None else Path(".cargo_runner") / "logs"
        directory.mkdir(parents=True, exist_ok=True)
        _log_file_path = directory / LOG_FILE_NAME
        handlers.append(logging.FileHandler(_log_file_path, encoding="utf-8"))
    else:
        _log_file_path = None

    for handler in handlers:
        handler.setFormatter(formatter)
        handler._cargo_runner_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger


def disable_logging() -> None:
    """Silence cargo_runner entirely (useful in tests)."""
    global _log_file_path
    logger = logging.getLogger(PACKAGE_LOGGER)
    _remove_own_handlers(logger)
    # Child loggers inherit this level
    logger.setLevel(logging.CRITICAL + 1)
    _log_file_path = None


def get_log_file_path() -> Path | None:
    """Path of the active log file, or None if file logging is off."""
    return _log_file_path
