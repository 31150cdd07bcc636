from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from itertools import count
from typing import Protocol

from assistant.schemas import ChatReply
from assistant.services.chat_client import ExchangeFailedError

logger = logging.getLogger(__name__)

GREETING_TEXT = "Hello! I'm your AI assistant. How can I help you today?"
ERROR_TEXT = "Sorry, I encountered an error. Please try again."


class Sender(StrEnum):
    USER = "user"
    BOT = "bot"


@dataclass(frozen=True)
class Message:
    id: str
    text: str
    sender: Sender
    timestamp: datetime


class ReplySource(Protocol):
    async def send(self, message: str) -> ChatReply: ...


ChangeListener = Callable[["ChatSession", Message], None]
StateListener = Callable[["ChatSession"], None]


class ChatSession:
    """
    One chat view instance.
    Owns the append-only message sequence and allows one outstanding exchange at a time.
    """

    def __init__(self, *, client: ReplySource) -> None:
        self._client = client
        self._ids = count(1)
        self._messages: list[Message] = []
        self._listeners: list[ChangeListener] = []
        self._state_listeners: list[StateListener] = []
        self.pending_input = ""
        self.awaiting_reply = False
        self._append(text=GREETING_TEXT, sender=Sender.BOT, timestamp=datetime.now(UTC))

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    @property
    def message_count(self) -> int:
        # seed greeting excluded
        return len(self._messages) - 1

    @property
    def can_submit(self) -> bool:
        return bool(self.pending_input.strip()) and not self.awaiting_reply

    def add_listener(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def add_state_listener(self, listener: StateListener) -> None:
        """Called after every change of `awaiting_reply`."""
        self._state_listeners.append(listener)

    async def submit(self, text: str | None = None) -> bool:
        """Run one exchange. Returns False when the submission is rejected."""
        if text is None:
            text = self.pending_input
        if not text.strip() or self.awaiting_reply:
            return False

        self._append(text=text, sender=Sender.USER, timestamp=datetime.now(UTC))
        self.pending_input = ""
        self._set_awaiting(True)
        try:
            reply = await self._client.send(text)
        except ExchangeFailedError as exc:
            logger.warning("chat_exchange_failed error=%s", exc)
            self._append(text=ERROR_TEXT, sender=Sender.BOT, timestamp=datetime.now(UTC))
        else:
            self._append(text=reply.response, sender=Sender.BOT, timestamp=reply.timestamp)
        finally:
            self._set_awaiting(False)
        return True

    def _set_awaiting(self, value: bool) -> None:
        self.awaiting_reply = value
        for listener in self._state_listeners:
            listener(self)

    def _append(self, *, text: str, sender: Sender, timestamp: datetime) -> Message:
        message = Message(
            id=str(next(self._ids)),
            text=text,
            sender=sender,
            timestamp=timestamp,
        )
        self._messages.append(message)
        for listener in self._listeners:
            listener(self, message)
        return message
