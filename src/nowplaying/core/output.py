"""
Logging setup using Loguru.
Replaces stdlib logging with a rotating file sink and an optional console sink.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from .config import LoggingConfig, get_data_dir

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}"


def get_log_file_path(config: Optional[LoggingConfig] = None) -> Path:
    """Get the path to the log file."""
    if config and config.log_file:
        return Path(config.log_file)
    return get_data_dir() / "now-playing.log"


def setup_loguru(config: LoggingConfig, log_file: Optional[Path] = None) -> Path:
    """
    Configure loguru with a rotating file sink.

    Args:
        config: Logging section of the app configuration
        log_file: Override for the log file path

    Returns:
        Path of the log file in use
    """
    log_file = log_file or get_log_file_path(config)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    # Remove default handler
    logger.remove()

    logger.add(
        log_file,
        rotation=f"{config.max_file_size_mb} MB",
        retention=config.backup_count,
        level=config.level.upper(),
        format=LOG_FORMAT,
        enqueue=False,  # Synchronous writes (thread-safe but blocking)
    )

    if config.console_output:
        logger.add(sys.stderr, level=config.level.upper(), format=LOG_FORMAT)

    logger.info(f"Loguru initialized: {log_file} (level={config.level})")
    return log_file
