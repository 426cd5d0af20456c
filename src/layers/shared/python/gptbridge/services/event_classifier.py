"""Slack Events API body classification.

Turns a request into one of the ClassifiedEvent variants. Unparsable
JSON, a non-object body, or a recognised event missing its required
fields raises MalformedInputError. Valid JSON with an event type we do
not handle becomes Ignored.
"""

import json
from typing import Any

import structlog
from pydantic import ValidationError as PydanticValidationError

from gptbridge.models.events import (
    CallbackMention,
    ClassifiedEvent,
    HandshakeChallenge,
    Ignored,
    PlainChat,
    SlackEventType,
)
from gptbridge.models.request import RETRY_REASON_HEADER, InboundRequest
from gptbridge.utils.exceptions import MalformedInputError

logger = structlog.get_logger()


def ignore_retry(request: InboundRequest) -> Ignored | None:
    """Return Ignored for Slack redeliveries, None for first deliveries."""
    if not request.is_retry:
        return None

    logger.info(
        "Ignoring Slack retry",
        retry_num=request.retry_num,
        retry_reason=request.header(RETRY_REASON_HEADER),
    )
    return Ignored(reason=f"retry {request.retry_num}")


def parse_body(body: str) -> dict[str, Any]:
    """Parse the raw body as a JSON object.

    Raises:
        MalformedInputError: If the body is not a JSON object.
    """
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, TypeError) as e:
        raise MalformedInputError(f"Request body is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise MalformedInputError("Request body must be a JSON object")

    return payload


def classify(request: InboundRequest) -> ClassifiedEvent:
    """Classify a request body.

    Slack redeliveries are expected to have been filtered out with
    :func:`ignore_retry` before verification.

    Args:
        request: The inbound request.

    Returns:
        The classified event.

    Raises:
        MalformedInputError: If the body cannot be parsed or lacks a field.
    """
    payload = parse_body(request.body)
    event_type = payload.get("type") or ""

    try:
        if event_type == SlackEventType.URL_VERIFICATION.value:
            return HandshakeChallenge(challenge=payload.get("challenge"))

        if event_type == SlackEventType.EVENT_CALLBACK.value:
            return _classify_callback(payload)

        if event_type == "":
            return PlainChat(message=payload.get("message"))

    except PydanticValidationError as e:
        logger.warning("Malformed event body", event_type=event_type, errors=e.error_count())
        raise MalformedInputError.from_pydantic(e) from e

    logger.info("Unhandled event type", event_type=event_type)
    return Ignored(reason=f"unhandled event type {event_type!r}")


def _classify_callback(payload: dict[str, Any]) -> ClassifiedEvent:
    """Classify the inner event of an ``event_callback`` envelope."""
    inner = payload.get("event")
    if not isinstance(inner, dict):
        raise MalformedInputError("event_callback without an event object")

    inner_type = inner.get("type") or ""
    if inner_type == SlackEventType.APP_MENTION.value:
        return CallbackMention(channel=inner.get("channel"), text=inner.get("text"))

    logger.info("Unhandled callback event", inner_type=inner_type)
    return Ignored(reason=f"unhandled callback event {inner_type!r}")
