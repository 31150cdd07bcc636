from __future__ import annotations


class ChatEndpointError(Exception):
    """Base for faults surfaced by POST /api/chat as a generic 500."""

    kind = "chat_endpoint_error"


class MalformedRequestError(ChatEndpointError):
    kind = "malformed_request"


class InternalFaultError(ChatEndpointError):
    kind = "internal_fault"
