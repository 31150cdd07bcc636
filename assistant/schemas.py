from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel


class ChatRequest(BaseModel):
    message: str


class ChatResponse(BaseModel):
    response: str
    timestamp: str


class ChatErrorResponse(BaseModel):
    error: str


@dataclass(frozen=True)
class ChatReply:
    response: str
    timestamp: datetime
