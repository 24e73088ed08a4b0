"""
Logging setup driven by ``Settings``.

Root logger gets a console handler and, when ``LOG_FILE`` is set, a file
handler. An already configured root logger is left alone, so the app factory
and the entry point can both call this.
"""

import logging
from pathlib import Path
from typing import List

from .config import Settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def resolve_level(name: str) -> int:
    level = getattr(logging, (name or "").upper(), None)
    return level if isinstance(level, int) else logging.INFO


def setup_logging(settings: Settings) -> None:
    if logging.getLogger().handlers:
        return
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if settings.log_file:
        handlers.append(logging.FileHandler(Path(settings.log_file).resolve(), encoding="utf-8"))
    logging.basicConfig(level=resolve_level(settings.log_level), format=LOG_FORMAT, handlers=handlers)
