"""Facade joining request building and transport for callers such as the CLI."""
from __future__ import annotations
import logging
from typing import Optional

import httpx

from content_wizard.common.errors import InvalidOptionError
from content_wizard.common.schema import SUPPORTED_MODELS, ModelInfo
from content_wizard.common.settings import Settings
from content_wizard.groq.builder import build
from content_wizard.groq.transport import ChatTransport

LOGGER = logging.getLogger("content_wizard.groq.provider")


class GroqProvider:
    """Generates text with the Groq API using one set of read-only settings."""

    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None) -> None:
        self.settings = settings
        self.transport = ChatTransport(settings.api_key, settings.base_url, client=client)
        LOGGER.debug(
            "AI provider initialized: defaults=%s timeout_ms=%s valid_models=%s",
            settings.defaults.model_dump(),
            settings.timeout_ms,
            [m.name for m in SUPPORTED_MODELS],
        )

    @staticmethod
    def models() -> list[ModelInfo]:
        return list(SUPPORTED_MODELS)

    async def generate_text(
        self,
        prompt: str,
        *,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        timeout_ms: Optional[int] = None,
    ) -> str:
        """
        Send one prompt and return the generated text.

        Args:
            prompt: User text.
            model: Allow-listed model name, settings default when omitted.
            temperature: Clamped to [0, 1].
            max_tokens: Clamped to [1, 8192].
            timeout_ms: Deadline for the exchange, settings default when omitted.

        Raises:
            InvalidOptionError: ``timeout_ms`` is zero or negative.
        """
        if timeout_ms is None:
            timeout_ms = self.settings.timeout_ms
        elif timeout_ms <= 0:
            raise InvalidOptionError(f"timeout_ms must be positive, got {timeout_ms}")
        prepared = build(
            prompt,
            {"model": model, "temperature": temperature, "max_tokens": max_tokens},
            defaults=self.settings.defaults,
        )
        return await self.transport.execute(
            prepared.body,
            prepared.headers,
            timeout_ms=timeout_ms,
        )
