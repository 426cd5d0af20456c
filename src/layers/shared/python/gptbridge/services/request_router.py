"""Request routing: verify, classify, complete and respond.

One RequestRouter is built per cold start from the immutable Settings and
handles every invocation that container receives.
"""

from typing import Any

import structlog

from gptbridge.config import Settings
from gptbridge.models.events import (
    CallbackMention,
    ClassifiedEvent,
    HandshakeChallenge,
    Ignored,
    PlainChat,
)
from gptbridge.models.request import InboundRequest
from gptbridge.services.completion_service import CompletionService
from gptbridge.services.event_classifier import classify, ignore_retry
from gptbridge.services.mentions import strip_mentions
from gptbridge.services.slack_service import SlackService
from gptbridge.utils import responses
from gptbridge.utils.exceptions import BridgeError, VerificationError
from gptbridge.verification import RequestVerifier, build_verifier

logger = structlog.get_logger()

# Leave the runtime time to serialise the error response.
TIMEOUT_MARGIN_SECONDS = 0.5


class RequestRouter:
    """Routes one inbound request to the matching response path."""

    def __init__(
        self,
        verifier: RequestVerifier,
        completion: CompletionService,
        slack: SlackService,
    ):
        self.verifier = verifier
        self.completion = completion
        self.slack = slack

    @classmethod
    def from_settings(cls, settings: Settings) -> "RequestRouter":
        """Build the router and its collaborators from configuration."""
        return cls(
            verifier=build_verifier(settings),
            completion=CompletionService.from_settings(settings),
            slack=SlackService.from_settings(settings),
        )

    def handle(self, event: dict[str, Any], context: Any = None) -> dict:
        """Handle a Lambda function URL / API Gateway event.

        Args:
            event: Lambda proxy event.
            context: Lambda context, used for the outbound call deadline.

        Returns:
            Lambda proxy response dict.
        """
        try:
            request = InboundRequest.from_lambda_event(event)
            logger.info(
                "Request received",
                headers=sorted(request.headers),
                body_length=len(request.body),
            )

            # Slack redeliveries are acknowledged before verification.
            if ignore_retry(request) is not None:
                return responses.empty()

            try:
                self.verifier.verify(request)
            except VerificationError as e:
                logger.warning("Request verification failed", error_code=e.error_code, error=e.message)
                raise

            classified = classify(request)
            return self.respond(classified, timeout=_remaining_seconds(context))

        except BridgeError as e:
            if not isinstance(e, VerificationError):
                logger.warning(
                    "Request failed",
                    error_code=e.error_code,
                    status_code=e.status_code,
                    error=e.message,
                )
            return responses.from_exception(e)

        except Exception as e:
            logger.exception("Unexpected error handling request", error=str(e))
            return responses.error("Internal server error", 500, "INTERNAL_ERROR")

    def respond(self, event: ClassifiedEvent, timeout: float | None = None) -> dict:
        """Produce the response for a classified event.

        Raises:
            UpstreamError: If the completion or Slack call fails.
        """
        if isinstance(event, HandshakeChallenge):
            logger.info("Answering URL verification challenge")
            return responses.text(event.challenge)

        if isinstance(event, CallbackMention):
            message = strip_mentions(event.text)
            reply = self.completion.complete(message, timeout=timeout)
            self.slack.post_message(event.channel, reply)
            return responses.empty()

        if isinstance(event, PlainChat):
            reply = self.completion.complete(event.message, timeout=timeout)
            return responses.success({"response": reply})

        if isinstance(event, Ignored):
            logger.info("Event ignored", reason=event.reason)
            return responses.empty()

        raise TypeError(f"Unknown event variant: {type(event).__name__}")


def _remaining_seconds(context: Any) -> float | None:
    """Seconds left in this invocation, or None outside Lambda."""
    get_remaining = getattr(context, "get_remaining_time_in_millis", None)
    if get_remaining is None:
        return None
    return max(get_remaining() / 1000 - TIMEOUT_MARGIN_SECONDS, 0.1)
