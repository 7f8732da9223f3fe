# src/solmarket/shared/logging_conf.py
"""
Logging Configuration - Logging Setup and Configuration

This module provides centralized logging configuration for applications that
embed solmarket. Library modules only create their own loggers; the host
process calls setup_logging once to decide where those records go.

Files that USE this module:
- Host applications (dashboard/agent layers call setup_logging at startup)
- tests.test_logging_conf (unit tests)

Files that this module USES:
- solmarket.config (settings for default log destinations)
"""
import logging
import os
import sys
from pathlib import Path
from typing import Optional, Union
from logging.handlers import RotatingFileHandler

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s :: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level=logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    log_dir: Optional[Union[str, Path]] = None,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> None:
    """
    Configure process-wide logging settings.

    Sets up consistent formatting for stdout, a rotating log file, or both.

    Args:
        level: Logging level (default: logging.INFO)
        log_file: Optional path to log file (enables file logging)
        log_dir: Optional directory for log files (file is named solmarket.log)
        max_bytes: Maximum size per log file before rotation (default: 10MB)
        backup_count: Number of backup log files to keep (default: 5)
    """
    handlers = []

    # stdout is on unless a supervisor already captures output
    log_to_stdout = os.environ.get("SOLMARKET_LOG_STDOUT", "true").lower() == "true"

    if log_to_stdout:
        stdout_handler = logging.StreamHandler(sys.stdout)
        stdout_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        handlers.append(stdout_handler)

    log_file_path = None
    if log_file or log_dir:
        if log_dir:
            log_dir = Path(log_dir)
            log_dir.mkdir(parents=True, exist_ok=True)
            log_file_path = log_dir / "solmarket.log"
        else:
            log_file_path = Path(log_file)
            log_file_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        handlers.append(file_handler)

    if not handlers:
        handlers = [logging.StreamHandler(sys.stdout)]

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
        force=True,
    )

    logger = logging.getLogger(__name__)
    if log_file_path is not None:
        logger.info("Logging configured: file=%s, level=%s", log_file_path, level)
    else:
        logger.info("Logging configured: stdout, level=%s", level)


def setup_logging_from_settings() -> None:
    """Configure logging from the LOG_* settings."""
    from solmarket.config import settings

    os.environ.setdefault("SOLMARKET_LOG_STDOUT", "true" if settings.log_stdout else "false")
    setup_logging(
        level=settings.log_level.upper(),
        log_file=settings.log_file,
        log_dir=settings.log_dir,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
    )
