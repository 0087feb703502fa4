from __future__ import annotations

import logging
from pathlib import Path

import pytest

import content_wizard.cli.wizard as wizard
from content_wizard.common.errors import ApiError


class _FakeProvider:
    calls: list = []
    error: Exception | None = None

    def __init__(self, settings, client=None) -> None:  # signature-compatible
        self.settings = settings

    async def generate_text(self, prompt: str, **kwargs) -> str:
        _FakeProvider.calls.append((prompt, kwargs))
        if _FakeProvider.error is not None:
            raise _FakeProvider.error
        return "Hello test"


@pytest.fixture(autouse=True)
def _isolate(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("GROQ_API_KEY", "test-key")
    monkeypatch.delenv("DEBUG_GROQ", raising=False)
    monkeypatch.setattr(wizard, "GroqProvider", _FakeProvider)
    _FakeProvider.calls = []
    _FakeProvider.error = None
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_generate_prints_response(capsys: pytest.CaptureFixture[str]) -> None:
    assert wizard.main(["generate", "Tell me a fact", "-t", "0.3", "--max-tokens", "50"]) == 0
    out = capsys.readouterr().out
    assert "PROMPT: Tell me a fact" in out
    assert "Hello test" in out
    assert _FakeProvider.calls == [(
        "Tell me a fact",
        {"model": None, "temperature": 0.3, "max_tokens": 50, "timeout_ms": None},
    )]


def test_generate_failure_exits_non_zero(capsys: pytest.CaptureFixture[str]) -> None:
    _FakeProvider.error = ApiError("rate limited")
    assert wizard.main(["generate", "hi"]) == 1
    assert "Error: rate limited" in capsys.readouterr().err


def test_generate_blank_prompt(capsys: pytest.CaptureFixture[str]) -> None:
    assert wizard.main(["generate", "   "]) == 1
    assert "Please provide a prompt" in capsys.readouterr().err
    assert _FakeProvider.calls == []


def test_generate_without_credential(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.delenv("GROQ_API_KEY")
    assert wizard.main(["generate", "hi"]) == 1
    assert "GROQ_API_KEY is not properly configured" in capsys.readouterr().err


def test_models_lists_both(capsys: pytest.CaptureFixture[str]) -> None:
    assert wizard.main(["models"]) == 0
    out = capsys.readouterr().out
    assert "llama3-8b-8192" in out
    assert "llama3-70b-8192" in out


def test_config_set_and_show(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert wizard.main(["config", "--set", "TEMPERATURE=0.5"]) == 0
    assert wizard.main(["config", "--set", "GROQ_API_KEY=secret"]) == 0
    assert wizard.main(["config", "--set", "TEMPERATURE=0.9"]) == 0
    text = (tmp_path / ".env").read_text(encoding="utf-8")
    assert "TEMPERATURE=0.9" in text
    assert "TEMPERATURE=0.5" not in text
    capsys.readouterr()

    assert wizard.main(["config"]) == 0
    out = capsys.readouterr().out
    assert "TEMPERATURE=0.9" in out
    assert "GROQ_API_KEY=*** (set)" in out
    assert "secret" not in out


def test_config_rejects_bad_assignment(capsys: pytest.CaptureFixture[str]) -> None:
    assert wizard.main(["config", "--set", "NOVALUE"]) == 1
    assert "Use --set KEY=VALUE" in capsys.readouterr().err


def test_config_without_file(capsys: pytest.CaptureFixture[str]) -> None:
    assert wizard.main(["config"]) == 0
    assert "No configuration file found" in capsys.readouterr().out


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert wizard.main([]) == 0
    out = capsys.readouterr().out
    assert "Welcome to AI Content Wizard" in out
    assert "ai-wizard generate" in out
