from __future__ import annotations

from dataclasses import dataclass
from os import getenv

from assistant.services.chat_service import ChatService

DEFAULT_API_BASE_URL = "http://127.0.0.1:8000"


@dataclass
class ServiceContainer:
    chat_service: ChatService
    api_base_url: str
    client_timeout_sec: float
    web_enabled: bool


def build_container() -> ServiceContainer:
    delay_ms = _parse_int(getenv("ASSISTANT_REPLY_DELAY_MS"), default=1000)
    return ServiceContainer(
        chat_service=ChatService(delay_sec=max(delay_ms, 0) / 1000.0),
        api_base_url=(
            getenv("ASSISTANT_API_BASE_URL", DEFAULT_API_BASE_URL).strip()
            or DEFAULT_API_BASE_URL
        ),
        client_timeout_sec=_parse_float(
            getenv("ASSISTANT_CLIENT_TIMEOUT_SEC"),
            default=30.0,
        ),
        web_enabled=_parse_bool(getenv("ASSISTANT_WEB_ENABLED"), default=True),
    )


def _parse_int(value: str | None, *, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _parse_float(value: str | None, *, default: float) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _parse_bool(value: str | None, *, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default
