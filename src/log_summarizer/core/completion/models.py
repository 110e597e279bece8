"""Chat-completion request/response models and response decoding."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    model: str = Field(min_length=1)
    messages: list[ChatMessage]
    temperature: float = Field(ge=0.0, le=2.0)


class ReplyMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    content: str | None = None


class Choice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: ReplyMessage | None = None


class ApiErrorBody(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: Any = None


@dataclass(frozen=True, slots=True)
class DecodedCompletion:
    """Result of decoding a response body.

    kind:
        "content" - the first choice carries reply text.
        "empty" - well-formed body without reply text.
        "api_error" - the service reported an error.
        "malformed" - JSON that does not follow the completion shape.
    """

    kind: Literal["content", "empty", "api_error", "malformed"]
    content: str | None = None
    error: str | None = None


def decode_completion(payload: Any) -> DecodedCompletion:
    """Classify a decoded JSON body.

    The error field wins over everything else; only the first choice is read.
    """
    if not isinstance(payload, dict):
        return DecodedCompletion(
            kind="malformed", error=f"expected a JSON object, got {type(payload).__name__}"
        )

    # Only object or string errors carry a message; other types are ignored.
    error = payload.get("error")
    if isinstance(error, str):
        return DecodedCompletion(kind="api_error", error=error)
    if isinstance(error, dict):
        msg = ApiErrorBody.model_validate(error).message
        return DecodedCompletion(
            kind="api_error", error=msg if isinstance(msg, str) else "Unknown error"
        )

    choices = payload.get("choices")
    if choices is None:
        return DecodedCompletion(kind="empty")
    if not isinstance(choices, list):
        return DecodedCompletion(
            kind="malformed", error=f"choices: expected a list, got {type(choices).__name__}"
        )
    if not choices:
        return DecodedCompletion(kind="empty")

    try:
        first = Choice.model_validate(choices[0])
    except ValidationError as e:
        return DecodedCompletion(kind="malformed", error=_first_error(e, prefix="choices.0"))

    if first.message is None or first.message.content is None:
        return DecodedCompletion(kind="empty")
    return DecodedCompletion(kind="content", content=first.message.content)


def _first_error(exc: ValidationError, *, prefix: str) -> str:
    err = exc.errors()[0]
    loc = ".".join([prefix, *(str(part) for part in err["loc"])])
    return f"{loc}: {err['msg']}"
