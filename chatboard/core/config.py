"""
Configuration helpers for the Chatboard backend.

Settings are read from environment variables once (see ``get_settings``) so
that routers/services do not fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Tuple
import os

DEFAULT_PORT = 3000
DEFAULT_DATA_FILE_NAME = "data.json"

ID_STRATEGY_SEQUENCE = "sequence"
ID_STRATEGY_LENGTH = "length"
ID_STRATEGIES = {ID_STRATEGY_SEQUENCE, ID_STRATEGY_LENGTH}


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    host: str
    port: int
    data_file: Path
    log_level: str
    log_file: str
    id_strategy: str
    cors_origins: Tuple[str, ...]


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _csv(value: str | None) -> Tuple[str, ...]:
        return tuple(item.strip().rstrip("/") for item in (value or "").split(",") if item.strip())

    strategy = (os.getenv("MESSAGE_ID_STRATEGY") or ID_STRATEGY_SEQUENCE).strip().lower()
    if strategy not in ID_STRATEGIES:
        strategy = ID_STRATEGY_SEQUENCE

    app_env = (os.getenv("APP_ENV") or "dev").lower()
    data_file = (os.getenv("DATA_FILE") or "").strip()

    return Settings(
        app_env=app_env,
        host=os.getenv("HOST", "0.0.0.0"),
        port=_int(os.getenv("PORT", str(DEFAULT_PORT)), DEFAULT_PORT),
        data_file=Path(data_file).expanduser() if data_file else Path.cwd() / DEFAULT_DATA_FILE_NAME,
        log_level=(os.getenv("LOG_LEVEL") or ("DEBUG" if app_env == "dev" else "INFO")).upper(),
        log_file=os.getenv("LOG_FILE", ""),
        id_strategy=strategy,
        cors_origins=_csv(os.getenv("CORS_ORIGINS")),
    )
