"""Exception hierarchy shared by the core and the CLI."""
from __future__ import annotations
from typing import Any, Sequence


class WizardError(Exception):
    """Base class for every error raised by content_wizard."""


class CredentialMissingError(WizardError):
    """The API key is absent or still set to the placeholder value."""

    def __init__(self, variable: str) -> None:
        super().__init__(f"{variable} is not properly configured in .env file.")
        self.variable = variable


class ValidationError(WizardError):
    """A request was rejected before any network activity."""


class EmptyPromptError(ValidationError):
    def __init__(self) -> None:
        super().__init__("Please provide a prompt for content generation")


class UnsupportedModelError(ValidationError):
    def __init__(self, model: str, allowed: Sequence[str]) -> None:
        super().__init__(
            f"Invalid model: {model}. Valid models are: {', '.join(allowed)}"
        )
        self.model = model
        self.allowed = tuple(allowed)


class InvalidOptionError(ValidationError):
    """A generation option has the wrong type or an unusable value."""

    def __init__(self, details: str) -> None:
        super().__init__(f"Invalid option: {details}")
        self.details = details


class TransportError(WizardError):
    """The exchange with the remote API did not produce text."""


class NetworkError(TransportError):
    """Connection-level failure (DNS, refused, reset)."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(f"{code}: {message}" if message else code)
        self.code = code
        self.reason = message


class RequestTimeoutError(TransportError, TimeoutError):
    """No complete response arrived before the deadline."""

    code = "ETIMEDOUT"

    def __init__(self, timeout_ms: int) -> None:
        super().__init__(f"Request timeout after {timeout_ms}ms")
        self.timeout_ms = timeout_ms


class MalformedResponseError(TransportError):
    """The response body is not valid JSON."""

    def __init__(self, raw: bytes) -> None:
        super().__init__("Error parsing Groq API response")
        self.raw = raw


class ApiError(TransportError):
    """The remote service answered with an explicit error object."""

    def __init__(self, message: str, payload: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.payload = payload


class UnexpectedFormatError(TransportError):
    """Valid JSON that is neither a completion nor an error."""

    def __init__(self, payload: Any) -> None:
        super().__init__("Unexpected response format from Groq API")
        self.payload = payload
