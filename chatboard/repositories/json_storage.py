"""
JSON-file persistence adapter for the message board.

The whole collection is loaded from disk on every call and written back in
full after every mutation; nothing is cached between requests.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
import json
import logging
import threading

from chatboard.domain.messages import empty_collection

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Base exception for backing file failures."""

    def __init__(self, message: str, path: Path):
        super().__init__(f"{message}: {path}")
        self.message = message
        self.path = path


class StorageReadError(StorageError):
    """Raised when the backing file is unreadable or malformed."""


class StorageWriteError(StorageError):
    """Raised when the collection could not be persisted."""


class JSONMessageStore:
    """Full-file load/save of the message collection."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        # held by the service around each load -> mutate -> save cycle
        self.lock = threading.RLock()

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> dict:
        if not self.path.exists():
            return empty_collection()
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageReadError("Could not read data file", self.path) from exc
        except json.JSONDecodeError as exc:
            raise StorageReadError("Data file is not valid JSON", self.path) from exc
        if not isinstance(data, dict) or not isinstance(data.get("messages"), list):
            raise StorageReadError("Data file has no messages list", self.path)
        return data

    def save(self, collection: dict) -> None:
        try:
            payload = json.dumps(collection, ensure_ascii=False, indent=2)
            self.path.write_text(payload, encoding="utf-8")
        except (OSError, TypeError, ValueError) as exc:
            raise StorageWriteError("Could not write data file", self.path) from exc

    def initialize(self) -> None:
        """
        Make sure a readable data file exists.

        A missing file is created empty. A corrupt file is moved aside to
        ``<name>.corrupt-<timestamp>`` before an empty one replaces it.
        """
        with self.lock:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise StorageWriteError("Could not create data directory", self.path.parent) from exc
            if not self.path.exists():
                logger.info("Creating empty data file at %s", self.path)
                self.save(empty_collection())
                return
            try:
                self.load()
                return
            except StorageReadError as exc:
                backup = self._quarantine()
                logger.warning("Data file %s is corrupt (%s); moved to %s", self.path, exc.__cause__ or exc, backup)
            self.save(empty_collection())

    def _quarantine(self) -> Path:
        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
        backup = self.path.with_name(f"{self.path.name}.corrupt-{stamp}")
        try:
            self.path.replace(backup)
        except OSError as exc:
            raise StorageWriteError("Could not move corrupt data file aside", self.path) from exc
        return backup
