from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from content_wizard.common.errors import InvalidOptionError, UnsupportedModelError
from content_wizard.common.settings import Settings
from content_wizard.groq.provider import GroqProvider


def _settings(**env: str) -> Settings:
    return Settings.from_env({"GROQ_API_KEY": "test-key", **env})


def test_generate_text_sends_merged_config() -> None:
    sent: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        sent.append(json.loads(request.content))
        return httpx.Response(200, json={"choices": [{"message": {"content": "Hello test"}}]})

    async def go() -> str:
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            provider = GroqProvider(_settings(TEMPERATURE="0.2"), client=client)
            return await provider.generate_text("hi", model="llama3-70b-8192", max_tokens=100000)

    assert asyncio.run(go()) == "Hello test"
    assert sent == [{
        "model": "llama3-70b-8192",
        "messages": [{"role": "user", "content": "hi"}],
        "temperature": 0.2,
        "max_tokens": 8192,
    }]


def test_unsupported_model_makes_no_request() -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={})

    async def go() -> str:
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            provider = GroqProvider(_settings(), client=client)
            return await provider.generate_text("hi", model="gpt-4")

    with pytest.raises(UnsupportedModelError):
        asyncio.run(go())
    assert calls == []


def test_models_lists_allow_list() -> None:
    names = [m.name for m in GroqProvider.models()]
    assert names == ["llama3-8b-8192", "llama3-70b-8192"]


@pytest.mark.parametrize("timeout_ms", [0, -5])
def test_non_positive_timeout_is_rejected(timeout_ms: int) -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"choices": [{"message": {"content": "x"}}]})

    async def go() -> str:
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            provider = GroqProvider(_settings(), client=client)
            return await provider.generate_text("hi", timeout_ms=timeout_ms)

    with pytest.raises(InvalidOptionError, match="timeout_ms must be positive"):
        asyncio.run(go())
    assert calls == []
