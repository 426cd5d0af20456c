"""Slack Web API message posting."""

import structlog
from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError, SlackClientError

from gptbridge.config import Settings
from gptbridge.utils.exceptions import UpstreamError

logger = structlog.get_logger()

SERVICE_NAME = "slack"


class SlackService:
    """Posts completion replies into Slack channels."""

    def __init__(self, token: str, client: WebClient | None = None):
        # No retry handlers: a failed post is reported, never repeated.
        self._client = client or WebClient(token=token, retry_handlers=[])

    @classmethod
    def from_settings(cls, settings: Settings) -> "SlackService":
        return cls(settings.slack_api_token)

    def post_message(self, channel: str, text: str) -> None:
        """Post ``text`` to ``channel``.

        Args:
            channel: Slack channel ID.
            text: Message text.

        Raises:
            UpstreamError: If Slack rejects the call or cannot be reached.
        """
        try:
            self._client.chat_postMessage(channel=channel, text=text)
        except SlackApiError as e:
            slack_error = e.response.get("error") if e.response is not None else None
            logger.error("Slack rejected message", channel=channel, slack_error=slack_error)
            raise UpstreamError(SERVICE_NAME, original_error=slack_error or str(e)) from e
        except SlackClientError as e:
            logger.error("Slack request failed", channel=channel, error=str(e))
            raise UpstreamError(SERVICE_NAME, original_error=str(e)) from e

        logger.info("Posted reply to Slack", channel=channel, text_length=len(text))
