import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Optional

from ..config import config


def setup_logger(name: str, log_file: Optional[str]) -> logging.Logger:
    """Configure and return a logger instance."""
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, config.LOG_LEVEL.upper(), logging.INFO))

    # Handlers are attached once per logger
    if logger.handlers:
        return logger

    if log_file:
        # Create logs directory if it doesn't exist
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handler = TimedRotatingFileHandler(
            log_file,
            when='D',  # Daily rotation
            interval=1,
            backupCount=90,  # Keep 90 days of logs
            encoding='utf-8'
        )
    else:
        handler = logging.StreamHandler()

    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


audit_log = setup_logger("table2xml.audit", config.LOG_FILE_PATH)
