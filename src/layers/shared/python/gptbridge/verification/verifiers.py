"""Inbound request verification strategies.

Two interchangeable verifiers exist. The bearer verifier is used in ``dev``
and ``local`` mode so the function can be called with curl. The Slack
verifier checks the signing-secret HMAC Slack attaches to every event
delivery and is used in ``prod``.
"""

import hmac
from abc import ABC, abstractmethod

import structlog
from slack_sdk.signature import Clock, SignatureVerifier

from gptbridge.config import Settings
from gptbridge.models.request import InboundRequest
from gptbridge.utils.exceptions import (
    MalformedHeaderError,
    MissingHeaderError,
    SignatureInvalidError,
    TokenMismatchError,
)

logger = structlog.get_logger()

AUTHORIZATION_HEADER = "authorization"
TIMESTAMP_HEADER = "X-Slack-Request-Timestamp"
SIGNATURE_HEADER = "X-Slack-Signature"

# Slack rejects anything signed more than five minutes ago.
REPLAY_WINDOW_SECONDS = 60 * 5


class RequestVerifier(ABC):
    """Authenticates an inbound request or raises a VerificationError."""

    @abstractmethod
    def verify(self, request: InboundRequest) -> None:
        """Verify the request.

        Args:
            request: The inbound request.

        Raises:
            VerificationError: If the request is not authentic.
        """


class BearerTokenVerifier(RequestVerifier):
    """Requires ``Authorization: Bearer <secret>``."""

    def __init__(self, secret: str):
        self._secret = secret

    def verify(self, request: InboundRequest) -> None:
        auth_header = request.header(AUTHORIZATION_HEADER)
        if not auth_header:
            raise MissingHeaderError("Authorization")

        parts = auth_header.split(" ")
        if len(parts) != 2 or parts[0] != "Bearer":
            raise MalformedHeaderError()

        if not hmac.compare_digest(parts[1].encode("utf-8"), self._secret.encode("utf-8")):
            raise TokenMismatchError()


class SlackSignatureVerifier(RequestVerifier):
    """Checks Slack's ``v0`` HMAC-SHA256 signature and replay window."""

    def __init__(self, signing_secret: str, clock: Clock | None = None):
        self._clock = clock or Clock()
        self._verifier = SignatureVerifier(signing_secret=signing_secret, clock=self._clock)

    def verify(self, request: InboundRequest) -> None:
        timestamp = request.header(TIMESTAMP_HEADER)
        if not timestamp:
            raise MissingHeaderError(TIMESTAMP_HEADER)

        signature = request.header(SIGNATURE_HEADER)
        if not signature:
            raise MissingHeaderError(SIGNATURE_HEADER)

        try:
            signed_at = int(timestamp)
        except ValueError:
            raise SignatureInvalidError("Invalid request timestamp") from None

        if abs(self._clock.now() - signed_at) > REPLAY_WINDOW_SECONDS:
            logger.warning("Stale Slack request", timestamp=signed_at)
            raise SignatureInvalidError("Request timestamp outside the replay window")

        if not self._verifier.is_valid(body=request.body, timestamp=timestamp, signature=signature):
            raise SignatureInvalidError()


def build_verifier(settings: Settings) -> RequestVerifier:
    """Select the verifier for the configured boot mode."""
    if settings.uses_signed_secret:
        return SlackSignatureVerifier(settings.auth_secret)
    return BearerTokenVerifier(settings.auth_secret)
