from __future__ import annotations

import asyncio
import random

from assistant.services.chat_service import DISCLAIMER, OPENERS, ChatService


def test_openers_are_a_closed_set_of_five() -> None:
    assert len(OPENERS) == 5
    assert len(set(OPENERS)) == 5


def test_compose_format() -> None:
    service = ChatService(delay_sec=0, rng=random.Random(7))

    text = service.compose("hello")

    opener = next(item for item in OPENERS if text.startswith(item))
    assert text == f'{opener} You said: "hello". {DISCLAIMER}'


def test_pick_opener_covers_every_template() -> None:
    service = ChatService(delay_sec=0, rng=random.Random(1))

    picked = {service.pick_opener() for _ in range(500)}

    assert picked == set(OPENERS)


def test_reply_returns_utc_timestamp() -> None:
    service = ChatService(delay_sec=0)

    reply = asyncio.run(service.reply("hi"))

    assert 'You said: "hi"' in reply.response
    assert reply.timestamp.utcoffset() is not None
    assert reply.timestamp.utcoffset().total_seconds() == 0


def test_negative_delay_is_clamped() -> None:
    assert ChatService(delay_sec=-3).delay_sec == 0.0
