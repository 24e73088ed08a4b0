"""Message use cases: list, create, delete."""

from __future__ import annotations

from typing import Any, List

from chatboard.core.config import ID_STRATEGY_LENGTH, ID_STRATEGY_SEQUENCE
from chatboard.domain.messages import Message, iso_timestamp, last_issued_id, next_message_id
from chatboard.repositories.json_storage import JSONMessageStore


class MessageError(Exception):
    """Base exception for message workflow."""


class MessageNotFoundError(MessageError):
    """Raised when a delete matches no stored message."""

    def __init__(self, message_id: Any):
        super().__init__(f"Message {message_id} not found")
        self.message_id = message_id


class MessageService:
    """
    Each call performs one full load, an optional mutation and an optional
    full save while holding the store lock. Storage errors propagate.
    """

    def __init__(self, store: JSONMessageStore, id_strategy: str = ID_STRATEGY_SEQUENCE) -> None:
        self.store = store
        self.id_strategy = id_strategy

    def list_messages(self) -> List[dict]:
        with self.store.lock:
            return list(self.store.load()["messages"])

    def create_message(self, user: Any = None, text: Any = None) -> Message:
        with self.store.lock:
            collection = self.store.load()
            message = Message(
                id=next_message_id(collection, self.id_strategy),
                user=user,
                text=text,
                timestamp=iso_timestamp(),
            )
            collection["messages"].append(message.as_dict())
            if self.id_strategy != ID_STRATEGY_LENGTH:
                collection["last_id"] = last_issued_id(collection)
            self.store.save(collection)
            return message

    def delete_message(self, message_id: Any) -> int:
        """Remove every message carrying ``message_id``; returns how many went."""
        with self.store.lock:
            collection = self.store.load()
            messages = collection["messages"]
            kept = [msg for msg in messages if not _has_id(msg, message_id)]
            removed = len(messages) - len(kept)
            if not removed:
                raise MessageNotFoundError(message_id)
            collection["messages"] = kept
            self.store.save(collection)
            return removed


def _has_id(message: Any, message_id: Any) -> bool:
    if not isinstance(message, dict) or message_id is None:
        return False
    value = message.get("id")
    return isinstance(value, int) and not isinstance(value, bool) and value == message_id
