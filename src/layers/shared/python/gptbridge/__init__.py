"""Slack to OpenAI bridge shared layer."""

__version__ = "0.1.0"
