"""Domain helpers for messages: record shape, id assignment, timestamps."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from chatboard.core.config import ID_STRATEGY_LENGTH


@dataclass
class Message:
    id: int
    user: Any
    text: Any
    timestamp: str

    def as_dict(self) -> dict:
        return asdict(self)


def empty_collection() -> dict:
    return {"messages": []}


def iso_timestamp(now: Optional[datetime] = None) -> str:
    """UTC ISO-8601 with millisecond precision and a ``Z`` suffix."""
    moment = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def last_issued_id(collection: Mapping[str, Any]) -> int:
    """Highest id issued so far: the persisted counter or the largest stored id."""
    stored = collection.get("last_id")
    if not isinstance(stored, int) or isinstance(stored, bool):
        stored = 0
    ids = [
        msg.get("id")
        for msg in collection.get("messages", [])
        if isinstance(msg, dict) and isinstance(msg.get("id"), int)
    ]
    return max(ids + [stored, 0])


def next_message_id(collection: Mapping[str, Any], strategy: str) -> int:
    """
    Id for the next message.

    ``length`` reproduces count+1 numbering, which can reissue an id still held
    by a surviving message after a delete. ``sequence`` never reissues an id.
    """
    if strategy == ID_STRATEGY_LENGTH:
        return len(collection.get("messages", [])) + 1
    return last_issued_id(collection) + 1
