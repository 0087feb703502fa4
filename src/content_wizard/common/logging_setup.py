"""Central logging setup for the project."""
from __future__ import annotations
import logging
import sys
from typing import Optional, TextIO

def setup_logging(level: int = logging.WARNING, stream: Optional[TextIO] = None) -> None:
    """
    Configure root logger with sane defaults.

    Logs go to stderr so that generated text is the only thing on stdout.

    Args:
        level: Logging level.
        stream: Destination stream, stderr when omitted.
    """
    handler = logging.StreamHandler(stream or sys.stderr)
    fmt = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
    handler.setFormatter(logging.Formatter(fmt))
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

def mask_headers(headers: dict[str, str]) -> dict[str, str]:
    """Copy of ``headers`` with the bearer credential hidden."""
    masked = dict(headers)
    for key in masked:
        if key.lower() == "authorization":
            masked[key] = "Bearer ***"
    return masked

def truncate(text: str, limit: int = 2000) -> str:
    if len(text) <= limit:
        return text
    return f"{text[:limit]}... [{len(text) - limit} more chars]"
