"""loguru sink setup shared by the CLI and runner."""

from __future__ import annotations

import os
import sys
from typing import Optional

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "{message}"
)


def setup_logging(
    level: str = "INFO",
    logging_dir: Optional[str] = None,
    rotation: str = "2 GB",
) -> None:
    """
    Route loguru output to stderr and, optionally, to a rotating file.

    Args:
        level: Minimum level for every sink
        logging_dir: Directory for ``ppbridge.log``; created if missing
        rotation: Size at which the log file is rotated
    """
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT)

    if logging_dir:
        full_path = os.path.expanduser(logging_dir)
        os.makedirs(full_path, exist_ok=True)
        logger.add(
            os.path.join(full_path, "ppbridge.log"),
            level=level.upper(),
            format=LOG_FORMAT,
            rotation=rotation,
            enqueue=True,
        )
