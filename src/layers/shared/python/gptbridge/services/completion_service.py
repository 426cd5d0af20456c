"""Completion service for the OpenAI chat API.

Each inbound request makes exactly one completion call. The SDK's own
retries are disabled because Slack expects an answer within three seconds
and redelivers on its own when it does not get one.
"""

import structlog
from openai import OpenAI, OpenAIError

from gptbridge.config import Settings
from gptbridge.models.completion import CompletionRequest
from gptbridge.utils.exceptions import UpstreamError

logger = structlog.get_logger()

SERVICE_NAME = "openai"


class CompletionService:
    """Sends a user message, prefixed by system instructions, to OpenAI."""

    def __init__(
        self,
        api_key: str,
        model: str,
        instructions: tuple[str, ...] = (),
        client: OpenAI | None = None,
    ):
        """Initialize CompletionService.

        Args:
            api_key: OpenAI API key.
            model: Chat model identifier.
            instructions: System messages sent ahead of every user message.
            client: Preconfigured client, mainly for tests.
        """
        self.model = model
        self.instructions = instructions
        self._client = client or OpenAI(api_key=api_key, max_retries=0)

    @classmethod
    def from_settings(cls, settings: Settings) -> "CompletionService":
        return cls(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            instructions=settings.system_instructions,
        )

    def build_request(self, message: str) -> CompletionRequest:
        return CompletionRequest.build(self.model, message, self.instructions)

    def complete(self, message: str, timeout: float | None = None) -> str:
        """Get the first completion choice for ``message``.

        Args:
            message: Sanitized user message.
            timeout: Seconds to wait before giving up, None for the SDK default.

        Returns:
            The text of the first choice.

        Raises:
            UpstreamError: On any transport or API failure, or an empty answer.
        """
        request = self.build_request(message)
        client = self._client if timeout is None else self._client.with_options(timeout=timeout)

        logger.info(
            "Requesting completion",
            model=self.model,
            messages=len(request.messages),
            message_length=len(message),
        )

        try:
            response = client.chat.completions.create(
                model=request.model,
                messages=request.to_api_messages(),
            )
        except OpenAIError as e:
            logger.error("Completion request failed", error=str(e), error_type=type(e).__name__)
            raise UpstreamError(SERVICE_NAME, original_error=str(e)) from e

        if not response.choices:
            logger.error("Completion returned no choices", model=self.model)
            raise UpstreamError(SERVICE_NAME, message="Completion returned no choices")

        content = response.choices[0].message.content or ""
        logger.info("Completion received", response_length=len(content))
        return content
