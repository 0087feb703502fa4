"""Build and validate a chat-completion request before it touches the network."""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from pydantic import ValidationError as SchemaError

from content_wizard.common.errors import EmptyPromptError, InvalidOptionError, UnsupportedModelError
from content_wizard.common.schema import ALLOWED_MODELS, ChatRequest, GenerationConfig

LOGGER = logging.getLogger("content_wizard.groq.builder")


@dataclass(frozen=True)
class PreparedRequest:
    """Serialized body plus the headers that describe it."""
    body: bytes
    headers: dict[str, str]
    config: GenerationConfig


def build(
    prompt: str,
    overrides: Optional[Mapping[str, Any]] = None,
    defaults: Optional[GenerationConfig] = None,
) -> PreparedRequest:
    """
    Merge options, validate them and serialize the request body.

    Args:
        prompt: User text, sent verbatim.
        overrides: Per-call values for model, temperature or max_tokens.
            ``None`` values keep the default.
        defaults: Process-wide defaults, library defaults when omitted.

    Raises:
        EmptyPromptError: ``prompt`` is empty or whitespace.
        UnsupportedModelError: the merged model is not allow-listed.
        InvalidOptionError: a numeric option cannot be parsed.
    """
    if not isinstance(prompt, str) or not prompt.strip():
        raise EmptyPromptError()

    base = defaults or GenerationConfig()
    options = {k: v for k, v in dict(overrides or {}).items() if v is not None}
    model = options.get("model", base.model)
    if model not in ALLOWED_MODELS:
        raise UnsupportedModelError(model, ALLOWED_MODELS)

    try:
        config = base.merged(**options)
    except SchemaError as e:
        raise InvalidOptionError(_describe(e)) from e

    body = ChatRequest.for_prompt(prompt, config).to_bytes()
    headers = {
        "Content-Type": "application/json",
        "Content-Length": str(len(body)),
    }
    LOGGER.debug(
        "Built request: model=%s temperature=%s max_tokens=%s bytes=%d",
        config.model,
        config.temperature,
        config.max_tokens,
        len(body),
    )
    return PreparedRequest(body=body, headers=headers, config=config)


def _describe(error: SchemaError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in item['loc'])}: {item['msg']}" for item in error.errors()
    )
