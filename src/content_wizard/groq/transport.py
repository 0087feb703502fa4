"""Async transport for the Groq OpenAI-compatible chat-completions endpoint.

One call to `ChatTransport.execute` is one exchange:
- POST the prepared body with bearer auth
- accumulate the streamed response bytes in arrival order
- decode the JSON into text or a typed `TransportError`

The whole exchange runs under a single deadline. Whichever finishes first,
the response or the deadline, decides the outcome; the loser is cancelled
and never observed.
"""
from __future__ import annotations
import asyncio
import json
import logging
from typing import Mapping, Optional

import httpx

from content_wizard.common.errors import (
    ApiError,
    MalformedResponseError,
    NetworkError,
    RequestTimeoutError,
    UnexpectedFormatError,
)
from content_wizard.common.logging_setup import mask_headers, truncate
from content_wizard.common.schema import ChatApiFailure, ChatSuccess, decode_response
from content_wizard.common.settings import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_MS

LOGGER = logging.getLogger("content_wizard.groq.transport")

CHAT_PATH = "/openai/v1/chat/completions"
_MANAGED_HEADERS = {"authorization", "content-length"}


class ChatTransport:
    """
    Executes chat-completion requests against a fixed host and path.

    Args:
        api_key: Bearer credential.
        base_url: Scheme and host, e.g. ``https://api.groq.com``.
        client: Optional shared ``httpx.AsyncClient``. When omitted a client
            is opened and closed per call.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._api_key = api_key
        self.url = f"{base_url.rstrip('/')}{CHAT_PATH}"
        self._client = client

    def request_headers(self, body: bytes, headers: Optional[Mapping[str, str]] = None) -> dict[str, str]:
        """Headers actually sent: caller headers plus auth and a byte-exact length."""
        merged = {k: v for k, v in (headers or {}).items() if k.lower() not in _MANAGED_HEADERS}
        if not any(k.lower() == "content-type" for k in merged):
            merged["Content-Type"] = "application/json"
        merged["Authorization"] = f"Bearer {self._api_key}"
        merged["Content-Length"] = str(len(body))
        return merged

    async def execute(
        self,
        body: bytes,
        headers: Optional[Mapping[str, str]] = None,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
    ) -> str:
        """
        Send ``body`` and return the first choice's message content.

        Raises:
            RequestTimeoutError: no complete response within ``timeout_ms``.
            NetworkError: DNS, connect or read failure.
            MalformedResponseError: body is not JSON.
            ApiError: body carries an ``error`` object.
            UnexpectedFormatError: any other JSON shape.
        """
        sent_headers = self.request_headers(body, headers)
        if LOGGER.isEnabledFor(logging.DEBUG):
            LOGGER.debug("Request: POST %s", self.url)
            LOGGER.debug("Request headers: %s", mask_headers(sent_headers))
            LOGGER.debug("Request body: %s", truncate(body.decode("utf-8", errors="replace")))

        try:
            raw = await asyncio.wait_for(
                self._exchange(body, sent_headers, timeout_ms),
                timeout=timeout_ms / 1000,
            )
        except asyncio.TimeoutError:
            LOGGER.debug("Request timed out after %sms", timeout_ms)
            raise RequestTimeoutError(timeout_ms) from None

        return self._resolve(raw)

    async def _exchange(self, body: bytes, headers: dict[str, str], timeout_ms: int) -> bytes:
        timeout = httpx.Timeout(timeout_ms / 1000)
        if self._client is not None:
            return await self._stream(self._client, body, headers, timeout, timeout_ms)
        async with httpx.AsyncClient(timeout=timeout) as client:
            return await self._stream(client, body, headers, timeout, timeout_ms)

    async def _stream(
        self,
        client: httpx.AsyncClient,
        body: bytes,
        headers: dict[str, str],
        timeout: httpx.Timeout,
        timeout_ms: int,
    ) -> bytes:
        chunks: list[bytes] = []
        try:
            async with client.stream(
                "POST", self.url, content=body, headers=headers, timeout=timeout
            ) as response:
                if LOGGER.isEnabledFor(logging.DEBUG):
                    LOGGER.debug("Response status: %s %s", response.status_code, response.reason_phrase)
                    LOGGER.debug("Response headers: %s", dict(response.headers))
                async for chunk in response.aiter_bytes():
                    chunks.append(chunk)
        except httpx.TimeoutException as e:
            LOGGER.debug("Transport timeout: %r", e)
            raise RequestTimeoutError(timeout_ms) from e
        except httpx.TransportError as e:
            LOGGER.debug("Request error: %s %s", type(e).__name__, e)
            raise NetworkError(type(e).__name__, str(e)) from e
        return b"".join(chunks)

    def _resolve(self, raw: bytes) -> str:
        try:
            payload = json.loads(raw)
        except ValueError:
            if LOGGER.isEnabledFor(logging.DEBUG):
                LOGGER.debug("Raw response that caused error: %s", truncate(raw.decode("utf-8", errors="replace")))
            raise MalformedResponseError(raw) from None

        if LOGGER.isEnabledFor(logging.DEBUG):
            LOGGER.debug("Response body: %s", truncate(json.dumps(payload, ensure_ascii=False)))
        outcome = decode_response(payload)
        if isinstance(outcome, ChatSuccess):
            LOGGER.debug("Successfully processed Groq API response")
            return outcome.text
        if isinstance(outcome, ChatApiFailure):
            LOGGER.debug("API error: %s", outcome.message)
            raise ApiError(outcome.message, outcome.payload)
        LOGGER.debug("Unexpected response format")
        raise UnexpectedFormatError(outcome.payload)
