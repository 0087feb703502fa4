"""Read and update the key=value settings file used by `ai-wizard config`."""
from __future__ import annotations
from pathlib import Path
from typing import Optional

from dotenv import dotenv_values, set_key

ENV_FILENAME = ".env"
SECRET_KEYS = {"GROQ_API_KEY"}


def env_path(directory: Optional[Path] = None) -> Path:
    return (directory or Path.cwd()) / ENV_FILENAME


def parse_assignment(text: str) -> tuple[str, str]:
    """
    Split ``KEY=VALUE``.

    Raises:
        ValueError: key or value is missing.
    """
    key, sep, value = text.partition("=")
    key, value = key.strip(), value.strip()
    if not sep or not key or not value:
        raise ValueError("Invalid format. Use --set KEY=VALUE")
    return key, value


def read_settings(path: Path) -> dict[str, str]:
    """Entries of the file, skipping comments and keys without a value."""
    if not path.exists():
        return {}
    return {k: v for k, v in dotenv_values(path).items() if v is not None}


def write_setting(path: Path, key: str, value: str) -> None:
    """Create or update one entry, keeping the rest of the file intact."""
    path.touch(exist_ok=True)
    set_key(str(path), key, value, quote_mode="never")


def render_settings(values: dict[str, str]) -> str:
    lines = []
    for key, value in values.items():
        if key in SECRET_KEYS and value:
            value = "*** (set)"
        lines.append(f"{key}={value}")
    return "\n".join(lines)
