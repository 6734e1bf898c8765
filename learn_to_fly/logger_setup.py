"""
Loguru sinks for command line runs. Library modules only ever log; sinks
are configured here.
"""
import sys
from typing import Optional

from loguru import logger


def setup_logger(level: str = "INFO", log_file: Optional[str] = None, enable_colors: bool = True) -> None:
    """
    Route log records to stderr and, optionally, to a file.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path of an extra plain-text log file, if any
        enable_colors: Whether to color console output on a TTY
    """
    logger.remove()

    colorize = enable_colors and sys.stderr.isatty()
    if colorize:
        console_format = (
            "<green>{time:HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<level>{message}</level>"
        )
    else:
        console_format = "{time:HH:mm:ss.SSS} | {level: <8} | {message}"

    logger.add(sys.stderr, level=level, format=console_format, colorize=colorize)

    if log_file:
        logger.add(
            log_file,
            level=level,
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}",
            encoding="utf-8",
        )
    logger.debug("Log level: {}, colors: {}", level, colorize)
