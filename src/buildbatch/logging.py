from __future__ import annotations

import sys

from loguru import logger


def setup_logging(level: str = "INFO") -> None:
    """
    Route buildbatch logs to stderr at `level`.

    Records logged outside a batch run show `-` in the batch column.
    """
    logger.remove()
    logger.configure(extra={"batch": "-"})

    fmt = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{extra[batch]}</cyan> - "
        "<level>{message}</level>"
    )

    logger.add(sys.stderr, format=fmt, level=level)
    logger.enable("buildbatch")
