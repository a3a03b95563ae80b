"""Loguru sink setup. Called once by the CLI; library code only emits."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def setup_logging(level: str = "INFO", log_file: Path | str | None = None):
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=CONSOLE_FORMAT)
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(log_file),
            rotation="10 MB",
            retention="1 week",
            level=level.upper(),
        )
    return logger
