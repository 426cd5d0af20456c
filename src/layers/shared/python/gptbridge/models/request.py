"""Inbound HTTP request model."""

import base64
import binascii
from typing import Any

from pydantic import BaseModel as PydanticBaseModel, ConfigDict, Field

from gptbridge.utils.exceptions import MalformedInputError

# Slack redelivers events it considers timed out and marks them with these.
RETRY_NUM_HEADER = "X-Slack-Retry-Num"
RETRY_REASON_HEADER = "X-Slack-Retry-Reason"


class InboundRequest(PydanticBaseModel):
    """A single Lambda invocation's headers and raw body.

    Headers are kept as delivered. API Gateway preserves the caller's
    casing while function URLs lowercase everything, so lookups go through
    :meth:`header`.
    """

    model_config = ConfigDict(frozen=True)

    headers: dict[str, str] = Field(default_factory=dict)
    body: str = ""

    @classmethod
    def from_lambda_event(cls, event: dict[str, Any]) -> "InboundRequest":
        """Build a request from a function URL or API Gateway proxy event.

        Raises:
            MalformedInputError: If the headers are not a mapping, the body is
                not a string, or a base64 body is not valid base64 UTF-8.
        """
        headers = event.get("headers", {}) or {}
        if not isinstance(headers, dict):
            raise MalformedInputError("Request headers must be a mapping")

        body = event.get("body", "") or ""
        if not isinstance(body, str):
            raise MalformedInputError("Request body must be a string")

        if event.get("isBase64Encoded") and body:
            try:
                body = base64.b64decode(body, validate=True).decode("utf-8")
            except (binascii.Error, UnicodeDecodeError) as e:
                raise MalformedInputError(f"Request body is not valid base64 UTF-8: {e}") from e

        return cls(
            headers={str(k): str(v) for k, v in headers.items() if v is not None},
            body=body,
        )

    def header(self, name: str, default: str = "") -> str:
        """Case-insensitive header lookup."""
        if name in self.headers:
            return self.headers[name]
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return default

    @property
    def retry_num(self) -> str:
        """Slack redelivery counter, empty for first deliveries."""
        return self.header(RETRY_NUM_HEADER)

    @property
    def is_retry(self) -> bool:
        return self.retry_num != ""
