"""
Logging configuration for the application.

This module sets up centralized logging for the CLI and the GUI.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from .paths import get_log_file_path, get_old_log_file_path


DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def rotate_log_files(log_file: Optional[Path] = None) -> None:
    """
    Rotate log files before starting a new logging session.

    - If log.txt exists, move it to log.old.txt
    - If log.old.txt already exists, delete it first
    - This keeps only the last 2 sessions of logging

    Args:
        log_file: Current log file. Defaults to the one in the data directory.
    """
    if log_file is None:
        log_file = get_log_file_path()
        old_log_file = get_old_log_file_path()
    else:
        old_log_file = log_file.with_name(log_file.stem + ".old" + log_file.suffix)

    if not log_file.exists():
        return

    if old_log_file.exists():
        try:
            old_log_file.unlink()
        except OSError as e:
            print(f"Warning: Could not delete old log file: {e}", file=sys.stderr)

    try:
        log_file.rename(old_log_file)
    except OSError as e:
        print(f"Warning: Could not rotate log file: {e}", file=sys.stderr)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None,
    log_to_file: bool = True,
    console_level: Optional[int] = None,
) -> None:
    """
    Configure application-wide logging.

    Console output goes to stderr so it never mixes with table output printed
    by the CLI. On each start the previous log.txt is moved to log.old.txt.

    Args:
        level: Logging level for the file handler and the root logger.
        log_file: Optional path to a log file. If None and log_to_file=True, uses default location.
        format_string: Optional custom format string for log messages.
        log_to_file: Whether to log to a file. Default is True.
        console_level: Level for the console handler. Defaults to `level`.
    """
    if format_string is None:
        format_string = DEFAULT_FORMAT
    if console_level is None:
        console_level = level

    handlers = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter(format_string))
    handlers.append(console_handler)

    if log_to_file:
        if log_file is None:
            log_file = get_log_file_path()

        rotate_log_files(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding="utf-8", mode="w")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(format_string))
        handlers.append(file_handler)

    logging.basicConfig(
        level=min(level, console_level),
        handlers=handlers,
        format=format_string,
        force=True  # Override any existing configuration
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Logger name (typically __name__).

    Returns:
        A configured logger instance.
    """
    return logging.getLogger(name)
