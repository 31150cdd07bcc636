from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import httpx

from assistant.schemas import ChatReply


class ExchangeFailedError(Exception):
    """Any failure of one view-to-endpoint exchange."""


class ChatClient:
    """HTTP client for POST /api/chat."""

    def __init__(
        self,
        *,
        base_url: str,
        timeout_sec: float = 30.0,
        chat_path: str = "/api/chat",
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.strip().rstrip("/")
        self._timeout_sec = max(float(timeout_sec), 0.5)
        normalized_path = (chat_path or "").strip() or "/api/chat"
        if not normalized_path.startswith("/"):
            normalized_path = f"/{normalized_path}"
        self._chat_path = normalized_path
        self._http_client = http_client

    @property
    def url(self) -> str:
        return f"{self._base_url}{self._chat_path}"

    async def send(self, message: str) -> ChatReply:
        if self._http_client is not None:
            return await self._post(self._http_client, message)
        timeout = httpx.Timeout(timeout=self._timeout_sec)
        async with httpx.AsyncClient(timeout=timeout) as client:
            return await self._post(client, message)

    async def _post(self, client: httpx.AsyncClient, message: str) -> ChatReply:
        try:
            resp = await client.post(self.url, json={"message": message})
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise ExchangeFailedError(f"request_error: {exc}") from exc

        if not resp.is_success:
            raise ExchangeFailedError(f"http_{resp.status_code}")

        try:
            payload: Any = resp.json()
        except ValueError as exc:
            raise ExchangeFailedError(f"json_error: {exc}") from exc
        return _parse_reply(payload)


def _parse_reply(payload: Any) -> ChatReply:
    if not isinstance(payload, dict):
        raise ExchangeFailedError("invalid_response")
    text = payload.get("response")
    if not isinstance(text, str):
        raise ExchangeFailedError("invalid_response_text")
    raw_ts = payload.get("timestamp")
    if not isinstance(raw_ts, str):
        raise ExchangeFailedError("invalid_response_timestamp")
    try:
        timestamp = datetime.fromisoformat(raw_ts)
    except ValueError as exc:
        raise ExchangeFailedError(f"invalid_response_timestamp: {raw_ts}") from exc
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=UTC)
    return ChatReply(response=text, timestamp=timestamp)
