from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from core.settings import LOGGING

ROOT_LOGGER = "taskcal"


def configure_logging(path: Optional[Path] = None, level: Optional[int] = None) -> logging.Logger:
    """Attach the rotating file handler to the application root logger once."""

    logger = logging.getLogger(ROOT_LOGGER)
    if not logger.handlers:
        log_path = Path(path or LOGGING.path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            log_path,
            maxBytes=LOGGING.max_bytes,
            backupCount=LOGGING.backup_count,
            encoding="utf-8",
        )
        formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(level if level is not None else LOGGING.level)
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


__all__ = ["ROOT_LOGGER", "configure_logging", "get_logger"]
