"""
Log sinks for applications and the CLI. The SDK itself only emits records.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = "<level>{level:<8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} - {message}"


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> list[int]:
    """Replace loguru's default sink with a stderr sink (and optional rotating file).

    Returns the sink ids so callers can ``logger.remove()`` them again.
    """
    logger.remove()
    sink_ids = [logger.add(sys.stderr, level=level.upper(), format=CONSOLE_FORMAT)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        sink_ids.append(logger.add(
            log_file,
            level=level.upper(),
            format=FILE_FORMAT,
            rotation="10 MB",
            retention=3,
        ))
    return sink_ids
