#!/usr/bin/env python3
"""End-to-end smoke check for the bridge.

Runs the same collaborators the Lambda uses, outside Lambda: verifies a
synthetic bearer request, asks the completion API for a reply, and posts
that reply to the debug channel when one is configured.

Usage:
    # Same variables as the deployed function
    export MODE=local AUTH_SECRET=test-token OPENAI_API_KEY=... SLACK_API_TOKEN=...
    export DEBUG_SLACK_CH_ID=C0123456789   # optional

    python scripts/smoke_check.py
    python scripts/smoke_check.py --message "What is a webhook?" --token test-token
"""

import argparse
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src", "layers", "shared", "python"))

import structlog

from gptbridge.config import load_settings
from gptbridge.models.request import InboundRequest
from gptbridge.services.completion_service import CompletionService
from gptbridge.services.slack_service import SlackService
from gptbridge.utils.exceptions import BridgeError
from gptbridge.utils.logging import configure_logging
from gptbridge.verification import BearerTokenVerifier

logger = structlog.get_logger()


def run(message: str, token: str) -> int:
    """Run the smoke check.

    Args:
        message: Message to send to the completion API.
        token: Bearer token for the synthetic request.

    Returns:
        Process exit code.
    """
    try:
        settings = load_settings()
    except BridgeError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        return 1

    request = InboundRequest(headers={"authorization": f"Bearer {token}"})
    try:
        BearerTokenVerifier(settings.auth_secret).verify(request)
    except BridgeError as e:
        print(f"Failed to verify request: {e.message}", file=sys.stderr)
        return 1

    try:
        reply = CompletionService.from_settings(settings).complete(message)
    except BridgeError as e:
        print(f"Completion failed: {e.message}", file=sys.stderr)
        return 1

    print(reply)

    if settings.debug_channel_id:
        try:
            SlackService.from_settings(settings).post_message(settings.debug_channel_id, reply)
        except BridgeError as e:
            print(f"Failed to post to Slack: {e.message}", file=sys.stderr)
            return 1
    else:
        logger.info("No debug channel configured, skipping Slack post")

    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Smoke check the Slack/OpenAI bridge")
    parser.add_argument("--message", default="Hello!", help="Message to send")
    parser.add_argument(
        "--token",
        default="test-token",
        help="Bearer token for the synthetic request (must match AUTH_SECRET)",
    )
    args = parser.parse_args()

    configure_logging(os.environ.get("MODE", "local"))
    sys.exit(run(args.message, args.token))


if __name__ == "__main__":
    main()
