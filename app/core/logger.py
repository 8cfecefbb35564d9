"""
Logger configuration using loguru.
"""

import os
import sys
from pathlib import Path

from loguru import logger

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()
LOG_TO_FILE = os.getenv("LOG_TO_FILE", "false").lower() == "true"

# Remove default handler
logger.remove()

# Add console handler with custom format
logger.add(
    sys.stderr,
    format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
    level=LOG_LEVEL,
    enqueue=True,  # Thread-safe logging
    backtrace=True,
    diagnose=False,
)

if LOG_TO_FILE:
    log_path = Path("logs")
    log_path.mkdir(exist_ok=True)

    logger.add(
        "logs/usercache_{time}.log",
        rotation="1 day",
        retention="1 week",
        compression="zip",
        level=LOG_LEVEL,
        enqueue=True,
        backtrace=True,
        diagnose=False,
    )


# Export logger instance
get_logger = logger.bind
