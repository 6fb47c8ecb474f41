"""Map exceptions to clean stderr messages and exit codes."""

from __future__ import annotations

import typer


def _err(msg: str, *, fg: str | None) -> None:
    """Print a styled message to stderr."""
    typer.echo(typer.style(msg, fg=fg), err=True)


def handle_error(exc: Exception, *, color: bool = True) -> int:
    """Print a one-line error message to stderr and return an exit code.

    All errors map to exit code 1.  No tracebacks are printed.
    """
    from pages_env.errors import (
        ApiError,
        ConfigError,
        DecodeError,
        EnvironmentUnavailable,
        FileIOError,
        MalformedDocument,
        TransportError,
    )

    fg = typer.colors.RED if color else None

    if isinstance(exc, ConfigError):
        _err(f"Configuration error: {exc}", fg=fg)
    elif isinstance(exc, ApiError):
        _err(f"Cloudflare API error: {exc}", fg=fg)
    elif isinstance(exc, TransportError):
        _err(f"Network error: {exc}", fg=fg)
    elif isinstance(exc, DecodeError):
        _err(f"Unexpected API response: {exc}", fg=fg)
    elif isinstance(exc, MalformedDocument):
        _err(f"Invalid variables file: {exc}", fg=fg)
    elif isinstance(exc, EnvironmentUnavailable):
        _err(f"Environment unavailable: {exc}", fg=fg)
    elif isinstance(exc, FileIOError):
        _err(f"File error: {exc}", fg=fg)
    else:
        _err(f"Error: {exc}", fg=fg)

    return 1
