"""Slack Events API webhook handler.

Answers Slack URL verification, replies to app mentions in the channel they
came from, and serves direct ``{"message": ...}`` chat calls with a JSON
body.

Configuration is read once at cold start. A missing variable fails the
Lambda init so the function never serves traffic half-configured.
"""

import os
from typing import Any

import structlog

from gptbridge.config import load_settings
from gptbridge.services.request_router import RequestRouter
from gptbridge.utils.logging import configure_logging

configure_logging(os.environ.get("MODE", "dev"))

logger = structlog.get_logger()

settings = load_settings()
router = RequestRouter.from_settings(settings)

logger.info(
    "Slack events handler initialized",
    mode=settings.mode.value,
    verifier=type(router.verifier).__name__,
)


def handler(event: dict[str, Any], context: Any) -> dict:
    """Handle Slack webhook and direct chat requests.

    Routes:
        POST /  (Lambda function URL)

    Args:
        event: Function URL or API Gateway proxy event.
        context: Lambda context.

    Returns:
        Response dict.
    """
    return router.handle(event, context)
