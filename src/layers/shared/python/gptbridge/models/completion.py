"""Chat completion request models."""

from enum import Enum

from pydantic import BaseModel as PydanticBaseModel, Field, model_validator


class ChatRole(str, Enum):
    SYSTEM = "system"
    USER = "user"


class ChatMessage(PydanticBaseModel):
    """One role-tagged entry of a completion request."""

    role: ChatRole
    content: str


class CompletionRequest(PydanticBaseModel):
    """Ordered messages sent to the completion API.

    System instructions come first, followed by exactly one user entry.
    """

    model: str
    messages: list[ChatMessage] = Field(..., min_length=1)

    @model_validator(mode="after")
    def _check_order(self) -> "CompletionRequest":
        *instructions, last = self.messages
        if last.role != ChatRole.USER:
            raise ValueError("last message must have the user role")
        if any(m.role != ChatRole.SYSTEM for m in instructions):
            raise ValueError("only system messages may precede the user message")
        return self

    @classmethod
    def build(
        cls,
        model: str,
        message: str,
        instructions: tuple[str, ...] | list[str] = (),
    ) -> "CompletionRequest":
        """Create a request from system instructions and a user message."""
        messages = [ChatMessage(role=ChatRole.SYSTEM, content=i) for i in instructions]
        messages.append(ChatMessage(role=ChatRole.USER, content=message))
        return cls(model=model, messages=messages)

    def to_api_messages(self) -> list[dict[str, str]]:
        """Messages in the shape the OpenAI SDK expects."""
        return [m.model_dump(mode="json") for m in self.messages]
