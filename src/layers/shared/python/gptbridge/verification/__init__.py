"""Inbound request verification."""

from gptbridge.verification.verifiers import (
    BearerTokenVerifier,
    RequestVerifier,
    SlackSignatureVerifier,
    build_verifier,
)

__all__ = [
    "BearerTokenVerifier",
    "RequestVerifier",
    "SlackSignatureVerifier",
    "build_verifier",
]
