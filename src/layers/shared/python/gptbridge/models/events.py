"""Classified Slack event models.

Every verified request body becomes exactly one of these variants. The
request router dispatches on the variant class; ``kind`` tags each
variant when it is serialised or logged.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel as PydanticBaseModel, ConfigDict, Field, StrictStr


class EventKind(str, Enum):
    """Variant tags for classified events."""

    HANDSHAKE = "handshake"
    MENTION = "mention"
    CHAT = "chat"
    IGNORED = "ignored"


class SlackEventType(str, Enum):
    """Top-level and inner Slack Events API ``type`` values we act on."""

    URL_VERIFICATION = "url_verification"
    EVENT_CALLBACK = "event_callback"
    APP_MENTION = "app_mention"


class _Event(PydanticBaseModel):
    model_config = ConfigDict(frozen=True)


class HandshakeChallenge(_Event):
    """Slack URL verification, answered by echoing ``challenge``."""

    kind: Literal[EventKind.HANDSHAKE] = EventKind.HANDSHAKE
    challenge: StrictStr


class CallbackMention(_Event):
    """The bot was mentioned in ``channel``."""

    kind: Literal[EventKind.MENTION] = EventKind.MENTION
    channel: StrictStr = Field(..., min_length=1)
    text: StrictStr


class PlainChat(_Event):
    """Direct API call, not from Slack."""

    kind: Literal[EventKind.CHAT] = EventKind.CHAT
    message: StrictStr


class Ignored(_Event):
    """Acknowledged with 200 and otherwise dropped."""

    kind: Literal[EventKind.IGNORED] = EventKind.IGNORED
    reason: str = ""


ClassifiedEvent = Annotated[
    Union[HandshakeChallenge, CallbackMention, PlainChat, Ignored],
    Field(discriminator="kind"),
]
