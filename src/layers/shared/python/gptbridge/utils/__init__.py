"""Utility functions and helpers."""

from gptbridge.utils.exceptions import (
    BridgeError,
    ConfigurationError,
    MalformedHeaderError,
    MalformedInputError,
    MissingHeaderError,
    SignatureInvalidError,
    TokenMismatchError,
    UpstreamError,
    VerificationError,
)
from gptbridge.utils.logging import configure_logging

__all__ = [
    # Exceptions
    "BridgeError",
    "ConfigurationError",
    "MalformedHeaderError",
    "MalformedInputError",
    "MissingHeaderError",
    "SignatureInvalidError",
    "TokenMismatchError",
    "UpstreamError",
    "VerificationError",
    # Logging
    "configure_logging",
]
