"""Process configuration loaded from environment variables.

Settings are read once per cold start and never mutated afterwards. The
handler, verifier and clients all receive the same frozen instance.
"""

import os
from enum import Enum
from typing import Mapping

import structlog
from pydantic import BaseModel as PydanticBaseModel, ConfigDict, Field, ValidationError

from gptbridge.utils.exceptions import ConfigurationError

logger = structlog.get_logger()

DEFAULT_MODEL = "gpt-3.5-turbo"

# Settings field -> environment variable
ENV_VARS = {
    "mode": "MODE",
    "auth_secret": "AUTH_SECRET",
    "openai_api_key": "OPENAI_API_KEY",
    "slack_api_token": "SLACK_API_TOKEN",
    "debug_channel_id": "DEBUG_SLACK_CH_ID",
    "openai_model": "OPENAI_MODEL",
}

PERSONA_PROMPT_VAR = "PERSONA_PROMPT"
ANSWER_FORMAT_PROMPT_VAR = "ANSWER_FORMAT_PROMPT"


class BootMode(str, Enum):
    """Deployment mode, selects the verifier and the log renderer."""

    DEV = "dev"
    LOCAL = "local"
    PROD = "prod"


class Settings(PydanticBaseModel):
    """Immutable bridge configuration."""

    model_config = ConfigDict(frozen=True)

    mode: BootMode = BootMode.DEV
    auth_secret: str = Field(..., min_length=1)
    openai_api_key: str = Field(..., min_length=1)
    slack_api_token: str = Field(..., min_length=1)
    debug_channel_id: str | None = None
    openai_model: str = DEFAULT_MODEL
    system_instructions: tuple[str, ...] = ()

    @property
    def uses_signed_secret(self) -> bool:
        """Whether inbound requests carry Slack signatures instead of a bearer token."""
        return self.mode == BootMode.PROD


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from the environment.

    Args:
        environ: Mapping to read from, defaults to ``os.environ``.

    Returns:
        Validated, frozen Settings.

    Raises:
        ConfigurationError: If a required variable is missing or invalid.
    """
    environ = os.environ if environ is None else environ

    values: dict = {}
    for field, var in ENV_VARS.items():
        value = environ.get(var, "")
        if value:
            values[field] = value

    instructions = [
        environ.get(PERSONA_PROMPT_VAR, "").strip(),
        environ.get(ANSWER_FORMAT_PROMPT_VAR, "").strip(),
    ]
    values["system_instructions"] = tuple(i for i in instructions if i)

    try:
        settings = Settings(**values)
    except ValidationError as e:
        missing = []
        invalid = []
        for err in e.errors():
            field = str(err["loc"][0]) if err.get("loc") else ""
            var = ENV_VARS.get(field, field)
            if err.get("type") in ("missing", "string_too_short"):
                missing.append(var)
            else:
                invalid.append(var)

        if missing:
            message = f"Missing required configuration: {', '.join(missing)}"
        else:
            message = f"Invalid configuration: {', '.join(invalid)}"
        raise ConfigurationError(message, missing=missing) from e

    logger.info(
        "Configuration loaded",
        mode=settings.mode.value,
        model=settings.openai_model,
        system_instructions=len(settings.system_instructions),
        debug_channel=bool(settings.debug_channel_id),
    )
    return settings
