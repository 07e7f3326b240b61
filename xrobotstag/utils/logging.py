from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


# Third-party loggers that log every request at INFO.
_NOISY = ("httpx", "httpcore", "hpack")


def setup_logger(level: str = "INFO") -> logging.Logger:
    level_name = level.upper()
    numeric_level = getattr(logging, level_name, logging.INFO)
    console = Console(stderr=True, highlight=False)
    handler = RichHandler(console=console, show_time=False, show_path=False, rich_tracebacks=True)
    logging.basicConfig(level=numeric_level, format="%(message)s", handlers=[handler])
    for name in _NOISY:
        logging.getLogger(name).setLevel(logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING)
    logger = logging.getLogger("xrobotstag")
    logger.setLevel(numeric_level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Package logger, or a child of it for ``name``."""
    if name and not name.startswith("xrobotstag"):
        name = f"xrobotstag.{name}"
    return logging.getLogger(name or "xrobotstag")
