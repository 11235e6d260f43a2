"""
Logging configuration for the time control.

This module provides centralized logging configuration with support for:
- Console output (development)
- Rotating file logs
- Configurable log levels
- Optional crash-on-error handler for debugging

The crash-on-error handler is off unless `raiseOnError` is set. The control
runs embedded in a host application, where an ERROR record logged from a Qt
event handler must not turn into an exception.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Any

from config_manager import config

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ErrorRaisingHandler(logging.Handler):
    """Handler that raises an exception on ERROR or CRITICAL logs."""

    def emit(self, record):
        if record.levelno >= logging.ERROR:
            raise RuntimeError(f"Logger error: {record.getMessage()}")


def setup_logging(raise_on_error: bool | None = None, cfg: Any = None) -> None:
    """
    Initialize logging configuration for the application.

    Reads the 'logging' section of config.json and sets up:
    - Root logger with configured level
    - Console handler at consoleLevel
    - Rotating file handler for persistent logs
    - Consistent formatting across all handlers

    Keys of the 'logging' section:
    - level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - file: Path to log file
    - maxBytes: Maximum log file size before rotation
    - backupCount: Number of backup files to keep
    - console: Whether to enable console output
    - consoleLevel: Level of the console handler
    - raiseOnError: Whether logger.error raises (overridden by the argument)
    """
    cfg = cfg if cfg is not None else config

    log_level_str = cfg.get_logging_setting("level", "INFO")
    log_file = cfg.get_logging_setting("file", "logs/timecontrol.log")
    max_bytes = cfg.get_logging_setting("maxBytes", 10485760)  # 10MB default
    backup_count = cfg.get_logging_setting("backupCount", 3)
    console_enabled = cfg.get_logging_setting("console", True)
    console_level_str = cfg.get_logging_setting("consoleLevel", "CRITICAL")

    if raise_on_error is None:
        raise_on_error = cfg.get_logging_setting("raiseOnError", False)

    # Convert log level string to logging constant
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)
    console_level = getattr(logging, console_level_str.upper(), logging.CRITICAL)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if console_enabled:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(console_level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    try:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

        root_logger.info("Logging initialized - Level: %s, File: %s", log_level_str, log_file)

    except OSError as e:
        # If file handler fails, continue without file logging
        root_logger.warning("Could not initialize file logging: %s", e)

    if raise_on_error:
        root_logger.addHandler(ErrorRaisingHandler())

