"""Pytest configuration and fixtures."""

import hashlib
import hmac
import json
import os
from unittest.mock import MagicMock

import pytest

# Set environment variables before imports
os.environ["MODE"] = "dev"
os.environ["AUTH_SECRET"] = "test-token"
os.environ["OPENAI_API_KEY"] = "sk-test"
os.environ["SLACK_API_TOKEN"] = "xoxb-test"

SIGNING_SECRET = "test-signing-secret"
FIXED_NOW = 1_700_000_000


def sign_slack_body(body: str, timestamp: int | str, secret: str = SIGNING_SECRET) -> str:
    """Compute the v0 signature Slack sends in X-Slack-Signature."""
    basestring = f"v0:{timestamp}:{body}".encode("utf-8")
    return "v0=" + hmac.new(secret.encode("utf-8"), basestring, hashlib.sha256).hexdigest()


class FixedClock:
    """Clock stub for slack_sdk's SignatureVerifier."""

    def __init__(self, now: float = FIXED_NOW):
        self._now = now

    def now(self) -> float:
        return self._now


@pytest.fixture
def fixed_clock():
    return FixedClock()


@pytest.fixture
def settings():
    """Dev-mode settings matching the seeded environment."""
    from gptbridge.config import load_settings

    return load_settings()


@pytest.fixture
def lambda_event():
    """Create a sample Lambda function URL event."""
    def _create_event(
        body: dict | str | None = None,
        headers: dict | None = None,
        token: str | None = "test-token",
        base64_encoded: bool = False,
    ):
        if headers is None:
            headers = {"content-type": "application/json"}
            if token is not None:
                headers["authorization"] = f"Bearer {token}"

        if body is None or isinstance(body, str):
            raw_body = body or ""
        else:
            raw_body = json.dumps(body)

        if base64_encoded:
            import base64
            raw_body = base64.b64encode(raw_body.encode("utf-8")).decode("ascii")

        return {
            "version": "2.0",
            "rawPath": "/",
            "headers": headers,
            "body": raw_body,
            "isBase64Encoded": base64_encoded,
            "requestContext": {
                "http": {"method": "POST", "path": "/"},
            },
        }

    return _create_event


@pytest.fixture
def mock_completion():
    """Completion service stub that always answers ``hello``."""
    from gptbridge.services.completion_service import CompletionService

    completion = MagicMock(spec=CompletionService)
    completion.complete.return_value = "hello"
    return completion


@pytest.fixture
def mock_slack():
    """Slack service stub."""
    from gptbridge.services.slack_service import SlackService

    return MagicMock(spec=SlackService)


@pytest.fixture
def router(mock_completion, mock_slack):
    """Request router with a bearer verifier and stubbed upstreams."""
    from gptbridge.services.request_router import RequestRouter
    from gptbridge.verification import BearerTokenVerifier

    return RequestRouter(
        verifier=BearerTokenVerifier("test-token"),
        completion=mock_completion,
        slack=mock_slack,
    )


class LambdaContext:
    """Mock Lambda context."""

    def __init__(self, remaining_ms: int = 30000):
        self.function_name = "test-function"
        self.memory_limit_in_mb = 128
        self.invoked_function_arn = "arn:aws:lambda:us-east-1:123456789:function:test"
        self.aws_request_id = "test-request-id"
        self._remaining_ms = remaining_ms

    def get_remaining_time_in_millis(self):
        return self._remaining_ms


@pytest.fixture
def lambda_context():
    """Create a mock Lambda context."""
    return LambdaContext()
