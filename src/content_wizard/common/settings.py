"""Process-wide settings resolved once from the environment."""
from __future__ import annotations
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from content_wizard.common.errors import CredentialMissingError, InvalidOptionError
from content_wizard.common.schema import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL,
    DEFAULT_TEMPERATURE,
    GenerationConfig,
)

API_KEY_VAR = "GROQ_API_KEY"
API_KEY_PLACEHOLDER = "your_groq_api_key_here"
DEFAULT_BASE_URL = "https://api.groq.com"
DEFAULT_TIMEOUT_MS = 30000
_TRUTHY = {"1", "true", "yes", "on"}


def _env_float(env: Mapping[str, str], name: str, default: float) -> float:
    try:
        return float(env[name])
    except (KeyError, ValueError):
        return default


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    try:
        value = int(env[name])
    except (KeyError, ValueError):
        return default
    return value if value > 0 else default


@dataclass(frozen=True)
class Settings:
    """
    Read-only configuration shared by every call.

    Attributes:
        api_key: Bearer credential for the Groq API.
        defaults: Generation options used when a call does not override them.
        timeout_ms: Deadline for one exchange.
        base_url: Scheme and host of the API.
        debug: Verbose diagnostics on the log stream.
    """
    api_key: str = field(repr=False)
    defaults: GenerationConfig = field(default_factory=GenerationConfig)
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    base_url: str = DEFAULT_BASE_URL
    debug: bool = False

    def __post_init__(self) -> None:
        if not self.api_key or self.api_key == API_KEY_PLACEHOLDER:
            raise CredentialMissingError(API_KEY_VAR)
        if self.timeout_ms <= 0:
            raise InvalidOptionError(f"timeout_ms must be positive, got {self.timeout_ms}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``.

        Raises:
            CredentialMissingError: GROQ_API_KEY is unset or a placeholder.
        """
        env = os.environ if environ is None else environ
        defaults = GenerationConfig(
            model=DEFAULT_MODEL,
            temperature=_env_float(env, "TEMPERATURE", DEFAULT_TEMPERATURE),
            max_tokens=_env_int(env, "MAX_TOKENS", DEFAULT_MAX_TOKENS),
        )
        return cls(
            api_key=env.get(API_KEY_VAR, "").strip(),
            defaults=defaults,
            timeout_ms=_env_int(env, "GROQ_TIMEOUT_MS", DEFAULT_TIMEOUT_MS),
            base_url=env.get("GROQ_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
            debug=env.get("DEBUG_GROQ", "").strip().lower() in _TRUTHY,
        )
