"""Lambda response helper functions."""

import json
from typing import Any

from pydantic import BaseModel as PydanticBaseModel

from gptbridge.utils.exceptions import BridgeError

JSON_HEADERS = {"Content-Type": "application/json"}
TEXT_HEADERS = {"Content-Type": "text/plain; charset=utf-8"}


def _serialize(data: Any) -> str:
    """Serialize data to JSON string."""
    if isinstance(data, PydanticBaseModel):
        data = data.model_dump(mode="json")
    return json.dumps(data)


def success(data: Any, status_code: int = 200) -> dict:
    """Create a successful JSON response.

    Args:
        data: Response data (dict, list, or Pydantic model).
        status_code: HTTP status code (default 200).

    Returns:
        Lambda proxy response dict.
    """
    return {
        "statusCode": status_code,
        "headers": JSON_HEADERS,
        "body": _serialize(data),
    }


def text(body: str, status_code: int = 200) -> dict:
    """Create a plain-text response carrying ``body`` verbatim."""
    return {
        "statusCode": status_code,
        "headers": TEXT_HEADERS,
        "body": body,
    }


def empty(status_code: int = 200) -> dict:
    """Create a response with a status code and no body."""
    return {
        "statusCode": status_code,
        "body": "",
    }


def error(
    message: str,
    status_code: int = 500,
    error_code: str | None = None,
    details: dict | None = None,
) -> dict:
    """Create an error response.

    Args:
        message: Error message.
        status_code: HTTP status code.
        error_code: Machine-readable error code.
        details: Additional error details.

    Returns:
        Lambda proxy response dict.
    """
    body: dict[str, Any] = {
        "error": True,
        "message": message,
    }

    if error_code:
        body["error_code"] = error_code
    if details:
        body["details"] = details

    return {
        "statusCode": status_code,
        "headers": JSON_HEADERS,
        "body": _serialize(body),
    }


def from_exception(exc: BridgeError) -> dict:
    """Create an error response from a BridgeError."""
    return {
        "statusCode": exc.status_code,
        "headers": JSON_HEADERS,
        "body": _serialize(exc.to_dict()),
    }
