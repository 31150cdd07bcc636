from __future__ import annotations

import asyncio
import random
from datetime import UTC, datetime

from assistant.schemas import ChatReply

OPENERS: tuple[str, ...] = (
    "That's an interesting question! Let me think about that...",
    "I understand what you're asking. Here's my perspective...",
    "Thanks for sharing that with me. I'd be happy to help!",
    "That's a great point! Have you considered...",
    "I see what you mean. Let me provide some insights...",
)

DISCLAIMER = (
    "To connect this to a real AI service, you'll need to integrate with an API "
    "like OpenAI's GPT or Anthropic's Claude."
)


class ChatService:
    """Placeholder replier. Replace with real LLM integration in next phase."""

    def __init__(self, *, delay_sec: float = 1.0, rng: random.Random | None = None) -> None:
        self._delay_sec = max(float(delay_sec), 0.0)
        self._rng = rng or random.Random()

    @property
    def delay_sec(self) -> float:
        return self._delay_sec

    def pick_opener(self) -> str:
        return self._rng.choice(OPENERS)

    def compose(self, message: str) -> str:
        return f'{self.pick_opener()} You said: "{message}". {DISCLAIMER}'

    async def reply(self, message: str) -> ChatReply:
        if self._delay_sec > 0:
            await asyncio.sleep(self._delay_sec)
        text = self.compose(message)
        return ChatReply(response=text, timestamp=datetime.now(UTC))
