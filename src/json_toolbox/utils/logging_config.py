"""Logging configuration for the JSON toolbox."""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any, Dict, Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Configure the package logger with a console handler and an optional
    rotating file handler.

    Args:
        log_level: Level name such as 'DEBUG' or 'INFO'
        log_file: Path of the log file; no file logging when None
    """
    numeric_level = getattr(logging, str(log_level).upper(), logging.INFO)

    package_logger = logging.getLogger('json_toolbox')
    package_logger.setLevel(numeric_level)

    # Clear existing handlers so repeated app creation doesn't duplicate output
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_path, maxBytes=10*1024*1024, backupCount=5  # 10MB files, keep 5 backups
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)

    package_logger.debug("Logging configured at %s", logging.getLevelName(numeric_level))


def configure_from_settings(config: Dict[str, Any]) -> None:
    """Apply the 'logging' section of the loaded configuration."""
    logging_conf = config.get('logging', {})
    setup_logging(
        log_level=logging_conf.get('level', 'INFO'),
        log_file=logging_conf.get('file')
    )
