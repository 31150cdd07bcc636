#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import TextIO


def _bootstrap_path() -> None:
    root_dir = Path(__file__).resolve().parents[1]
    if str(root_dir) not in sys.path:
        sys.path.insert(0, str(root_dir))


_bootstrap_path()

from assistant.container import build_container  # noqa: E402
from assistant.services.chat_client import ChatClient  # noqa: E402
from assistant.services.chat_session import (  # noqa: E402
    ERROR_TEXT,
    ChatSession,
    Message,
    ReplySource,
    Sender,
)

_EXIT_WORDS = {"/quit", "/exit"}


def format_message(message: Message) -> str:
    label = "you" if message.sender is Sender.USER else "bot"
    return f"[{message.timestamp.astimezone().strftime('%H:%M')}] {label}: {message.text}"


def build_session(*, client: ReplySource, out: TextIO) -> ChatSession:
    session = ChatSession(client=client)
    for message in session.messages:
        print(format_message(message), file=out)

    def _print(_session: ChatSession, message: Message) -> None:
        # console equivalent of scrolling to the newest entry
        print(format_message(message), file=out, flush=True)

    def _typing(_session: ChatSession) -> None:
        if _session.awaiting_reply:
            print("bot is typing...", file=out, flush=True)

    session.add_listener(_print)
    session.add_state_listener(_typing)
    return session


async def run_once(*, client: ReplySource, message: str, out: TextIO) -> int:
    session = build_session(client=client, out=out)
    if not await session.submit(message):
        print("nothing to send", file=out)
        return 2
    last = session.messages[-1]
    return 1 if last.sender is Sender.BOT and last.text == ERROR_TEXT else 0


async def run_interactive(*, client: ReplySource, out: TextIO) -> int:
    session = build_session(client=client, out=out)
    while True:
        try:
            line = await asyncio.to_thread(input, "> ")
        except EOFError:
            break
        if line.strip() in _EXIT_WORDS:
            break
        session.pending_input = line
        await session.submit()
    print(f"{session.message_count} messages", file=out)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    container = build_container()
    parser = argparse.ArgumentParser(description="Terminal chat against the assistant endpoint")
    parser.add_argument("--base-url", default=container.api_base_url)
    parser.add_argument("--timeout-sec", type=float, default=container.client_timeout_sec)
    parser.add_argument("--message", default="", help="send one message and exit")
    return parser


def main() -> None:
    args = _build_parser().parse_args()
    client = ChatClient(base_url=args.base_url, timeout_sec=args.timeout_sec)
    if args.message:
        code = asyncio.run(run_once(client=client, message=args.message, out=sys.stdout))
    else:
        code = asyncio.run(run_interactive(client=client, out=sys.stdout))
    raise SystemExit(code)


if __name__ == "__main__":
    main()
