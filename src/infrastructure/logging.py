from __future__ import annotations

import logging
import sys

from src.infrastructure.config import get_settings

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str | None = None) -> logging.Logger:
    """Configure the root logger once; repeated calls only update the level."""
    root_logger = logging.getLogger()
    level_name = (level or get_settings().log_level).upper()
    root_logger.setLevel(getattr(logging, level_name, logging.INFO))

    if not any(getattr(h, "_pixelforge", False) for h in root_logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
        handler._pixelforge = True  # type: ignore[attr-defined]
        root_logger.addHandler(handler)

    # Suppress noisy loggers
    logging.getLogger("PIL").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    return root_logger
