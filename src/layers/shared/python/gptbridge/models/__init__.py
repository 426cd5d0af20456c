"""Request, event and completion models."""

from gptbridge.models.completion import ChatMessage, ChatRole, CompletionRequest
from gptbridge.models.events import (
    CallbackMention,
    ClassifiedEvent,
    EventKind,
    HandshakeChallenge,
    Ignored,
    PlainChat,
    SlackEventType,
)
from gptbridge.models.request import InboundRequest

__all__ = [
    "CallbackMention",
    "ChatMessage",
    "ChatRole",
    "ClassifiedEvent",
    "CompletionRequest",
    "EventKind",
    "HandshakeChallenge",
    "Ignored",
    "InboundRequest",
    "PlainChat",
    "SlackEventType",
]
