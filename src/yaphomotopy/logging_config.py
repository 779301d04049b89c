"""
Logging Configuration
Helper for applications that want to see yapHomotopy's log output.

The library itself only creates module loggers under the
``yaphomotopy`` namespace and never configures handlers on import.

Copyright (c) 2026 yapHomotopy contributors
MIT License
"""
import logging
import sys
from typing import Optional


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the logger for the 'yaphomotopy' namespace.

    Unlike ``logging.basicConfig`` this leaves the root logger and
    other libraries alone: only the package logger gets handlers, so
    DEBUG output from sampling can be switched on without flooding the
    console with third-party records.  Repeated calls replace the
    handlers installed earlier (closing them) instead of stacking
    duplicates, where a second ``basicConfig`` call is silently ignored.  Console output goes to stdout,
    and an optional log file receives the same records.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to also save logs to a file.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger("yaphomotopy")
    logger.setLevel(level)

    # Avoid duplicate output when called more than once
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
