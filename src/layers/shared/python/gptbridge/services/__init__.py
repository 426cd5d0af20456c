"""Business logic services."""

from gptbridge.services.completion_service import CompletionService
from gptbridge.services.event_classifier import classify
from gptbridge.services.mentions import strip_mentions
from gptbridge.services.request_router import RequestRouter
from gptbridge.services.slack_service import SlackService

__all__ = [
    "CompletionService",
    "RequestRouter",
    "SlackService",
    "classify",
    "strip_mentions",
]
