"""Pydantic models and dataclasses for request/response types."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError, field_validator

MIN_TEMPERATURE, MAX_TEMPERATURE = 0.0, 1.0
MIN_MAX_TOKENS, MAX_MAX_TOKENS = 1, 8192
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 2048
DEFAULT_API_ERROR = "Error from API"


@dataclass(frozen=True)
class ModelInfo:
    """An allow-listed model and its one-line description."""
    name: str
    description: str


SUPPORTED_MODELS: tuple[ModelInfo, ...] = (
    ModelInfo("llama3-8b-8192", "Llama 3 8B (8k context) - Fast and efficient for most tasks"),
    ModelInfo("llama3-70b-8192", "Llama 3 70B (8k context) - More powerful but slower"),
)
ALLOWED_MODELS: tuple[str, ...] = tuple(m.name for m in SUPPORTED_MODELS)
DEFAULT_MODEL = ALLOWED_MODELS[0]


def clamp(value, low, high):
    """Force ``value`` into the inclusive range [low, high]."""
    return max(low, min(high, value))


def clamp_temperature(value: float) -> float:
    return float(clamp(float(value), MIN_TEMPERATURE, MAX_TEMPERATURE))


def clamp_max_tokens(value: int) -> int:
    return int(clamp(int(value), MIN_MAX_TOKENS, MAX_MAX_TOKENS))


class GenerationConfig(BaseModel):
    """
    Sampling options for one call.

    Numeric fields are clamped on construction; the model name is checked
    against the allow-list by the request builder, not here.
    """
    model_config = ConfigDict(frozen=True)

    model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS

    @field_validator("temperature")
    @classmethod
    def _clamp_temperature(cls, v: float) -> float:
        return clamp_temperature(v)

    @field_validator("max_tokens")
    @classmethod
    def _clamp_max_tokens(cls, v: int) -> int:
        return clamp_max_tokens(v)

    def merged(self, **overrides: Any) -> "GenerationConfig":
        """
        Return a new config with non-None overrides applied.

        Args:
            overrides: Any of model, temperature, max_tokens.
        """
        data = self.model_dump()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return GenerationConfig(**data)


class ChatMessage(BaseModel):
    role: Literal["user"] = "user"
    content: str


class ChatRequest(BaseModel):
    """Body of POST /openai/v1/chat/completions."""
    model: str
    messages: List[ChatMessage]
    temperature: float
    max_tokens: int

    @field_validator("temperature")
    @classmethod
    def _clamp_temperature(cls, v: float) -> float:
        return clamp_temperature(v)

    @field_validator("max_tokens")
    @classmethod
    def _clamp_max_tokens(cls, v: int) -> int:
        return clamp_max_tokens(v)

    @classmethod
    def for_prompt(cls, prompt: str, config: GenerationConfig) -> "ChatRequest":
        return cls(
            model=config.model,
            messages=[ChatMessage(content=prompt)],
            temperature=config.temperature,
            max_tokens=config.max_tokens,
        )

    def to_bytes(self) -> bytes:
        """Serialize to UTF-8 JSON without escaping non-ASCII text."""
        return self.model_dump_json().encode("utf-8")


# Response decoding. The remote body is decoded into exactly one of the
# three outcomes below before any field is read by the caller.

class _ApiErrorBody(BaseModel):
    message: Optional[StrictStr] = None


class _Message(BaseModel):
    content: StrictStr


class _Choice(BaseModel):
    message: _Message


class _Completion(BaseModel):
    choices: List[Any] = Field(min_length=1)


@dataclass(frozen=True)
class ChatSuccess:
    text: str


@dataclass(frozen=True)
class ChatApiFailure:
    message: str
    payload: Any


@dataclass(frozen=True)
class ChatUnexpected:
    payload: Any


ChatOutcome = Union[ChatSuccess, ChatApiFailure, ChatUnexpected]


def decode_response(payload: Any) -> ChatOutcome:
    """
    Classify a parsed chat-completion response.

    Args:
        payload: Result of ``json.loads`` on the response body.

    Returns:
        ChatApiFailure when an ``error`` object (or any truthy value) is present,
        ChatSuccess when ``choices[0].message.content`` is a string,
        ChatUnexpected otherwise.
    """
    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict) or error:
        message = DEFAULT_API_ERROR
        try:
            body = _ApiErrorBody.model_validate(error)
            if body.message:
                message = body.message
        except ValidationError:
            pass
        return ChatApiFailure(message=message, payload=payload)

    try:
        completion = _Completion.model_validate(payload)
        choice = _Choice.model_validate(completion.choices[0])
    except ValidationError:
        return ChatUnexpected(payload=payload)
    return ChatSuccess(text=choice.message.content)
