"""Exception hierarchy for pages-env."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from pydantic import ValidationError

    from pages_env.document import Environment


class PagesEnvError(Exception):
    """Base class for all pages-env errors."""


class ConfigError(PagesEnvError):
    """Raised for invalid command configuration."""


class MissingConfiguration(ConfigError):
    """Raised when a required setting has no option value and no env fallback."""

    def __init__(self, field: str, env_var: str | None = None) -> None:
        msg = f"missing required setting '{field}'"
        if env_var:
            msg += f" (pass --{field.replace('_', '-')} or set {env_var})"
        super().__init__(msg)
        self.field = field
        self.env_var = env_var


class TransportError(PagesEnvError):
    """Raised when the request never produced an HTTP response."""


class ApiError(PagesEnvError):
    """Raised for a non-2xx response or an unsuccessful Cloudflare envelope."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(f"HTTP {status}: {message}")
        self.status = status
        self.message = message


class DecodeError(PagesEnvError):
    """Raised when a response body is not the JSON we expect."""


class MalformedDocument(PagesEnvError):
    """Raised when a variables file is not a valid variable document."""


class EnvironmentUnavailable(PagesEnvError):
    """Raised when the requested environment is null in the document."""

    def __init__(self, environment: Environment) -> None:
        super().__init__(f"environment '{environment.value}' is not present in the document")
        self.environment = environment


class FileIOError(PagesEnvError):
    """Raised when a local file cannot be read or written."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path


def describe_validation_error(exc: ValidationError) -> str:
    """Collapse a pydantic ``ValidationError`` into one line."""
    return "; ".join(
        f"{'.'.join(str(p) for p in e['loc']) or '<root>'}: {e['msg']}" for e in exc.errors()
    )
