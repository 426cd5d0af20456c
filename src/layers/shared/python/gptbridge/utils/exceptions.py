"""Custom exception classes for the bridge."""


class BridgeError(Exception):
    """Base exception for all bridge errors."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        status_code: int = 500,
        details: dict | None = None,
    ):
        """Initialize BridgeError.

        Args:
            message: Human-readable error message.
            error_code: Machine-readable error code.
            status_code: HTTP status code for the Lambda response.
            details: Additional error details.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or "INTERNAL_ERROR"
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert exception to dictionary for the response body."""
        result = {
            "error": True,
            "error_code": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class ConfigurationError(BridgeError):
    """Raised at startup when required configuration is missing or invalid."""

    def __init__(self, message: str, missing: list[str] | None = None):
        """Initialize ConfigurationError."""
        self.missing = missing or []
        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            status_code=500,
            details={"missing": self.missing} if self.missing else None,
        )


class VerificationError(BridgeError):
    """Raised when an inbound request cannot be authenticated."""

    error_code = "UNAUTHORIZED"

    def __init__(self, message: str = "Request verification failed"):
        """Initialize VerificationError."""
        super().__init__(
            message=message,
            error_code=type(self).error_code,
            status_code=401,
        )


class MissingHeaderError(VerificationError):
    """Raised when a required credential header is absent."""

    error_code = "MISSING_HEADER"

    def __init__(self, header: str):
        self.header = header
        super().__init__(f"{header} header is missing")


class MalformedHeaderError(VerificationError):
    """Raised when the Authorization header is not ``Bearer <token>``."""

    error_code = "MALFORMED_HEADER"

    def __init__(self, message: str = "Invalid Authorization header format"):
        super().__init__(message)


class TokenMismatchError(VerificationError):
    """Raised when the bearer token does not match the shared secret."""

    error_code = "TOKEN_MISMATCH"

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class SignatureInvalidError(VerificationError):
    """Raised when a Slack request signature or timestamp is rejected."""

    error_code = "SIGNATURE_INVALID"

    def __init__(self, message: str = "Invalid request signature"):
        super().__init__(message)


class MalformedInputError(BridgeError):
    """Raised when the request body cannot be parsed or lacks a field."""

    def __init__(
        self,
        message: str = "Malformed request body",
        errors: list[dict] | None = None,
    ):
        """Initialize MalformedInputError.

        Args:
            message: Error message.
            errors: List of validation errors with field and message.
        """
        self.errors = errors or []
        super().__init__(
            message=message,
            error_code="MALFORMED_INPUT",
            status_code=400,
            details={"errors": self.errors} if self.errors else None,
        )

    @classmethod
    def from_pydantic(cls, exc: Exception) -> "MalformedInputError":
        """Create MalformedInputError from a Pydantic ValidationError."""
        errors = []
        if hasattr(exc, "errors"):
            for error in exc.errors():
                errors.append(
                    {
                        "field": ".".join(str(loc) for loc in error.get("loc", [])),
                        "message": error.get("msg", "Invalid value"),
                        "type": error.get("type", "unknown"),
                    }
                )
        return cls(message="Malformed request body", errors=errors)


class UpstreamError(BridgeError):
    """Raised when the completion API or Slack API call fails."""

    def __init__(
        self,
        service: str,
        message: str | None = None,
        original_error: str | None = None,
    ):
        """Initialize UpstreamError."""
        self.service = service
        super().__init__(
            message=message or f"External service '{service}' returned an error",
            error_code="UPSTREAM_ERROR",
            status_code=500,
            details={
                "service": service,
                "original_error": original_error,
            },
        )
