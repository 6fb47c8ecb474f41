"""Typer entry point: global flags and log setup for pages-env."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import typer

from pages_env import __version__
from pages_env.config.loader import ENV_MAP, SETTINGS_FILE, ambient_environ

if TYPE_CHECKING:
    from collections.abc import Mapping

LOG_ENV_VAR = "PAGES_ENV_LOG"

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

# Each entry is its own paragraph so help rendering keeps one per line.
_EPILOG = "\n\n".join(
    [
        f"Options fall back to environment variables, then to {SETTINGS_FILE}:",
        *(f"--{field}: {env_var}" for field, env_var in ENV_MAP.items()),
        f"Log level: -v / -vv or {LOG_ENV_VAR}=DEBUG|INFO|WARNING|ERROR.",
    ]
)

app = typer.Typer(
    name="pages-env",
    help="Sync Cloudflare Pages environment variables for CI/CD pipelines.",
    epilog=_EPILOG,
    no_args_is_help=True,
    add_completion=False,
)


def log_level(verbose: int, environ: Mapping[str, str]) -> int | None:
    """Pick the ``pages_env`` log level, or ``None`` to leave logging off.

    ``PAGES_ENV_LOG`` wins over ``-v`` flags; an unknown name falls back to INFO.
    """
    raw = environ.get(LOG_ENV_VAR, "").strip().upper()
    if raw:
        level = logging.getLevelNamesMapping().get(raw)
        if level is None:
            typer.echo(f"Ignoring {LOG_ENV_VAR}={raw!r}: not a log level, using INFO", err=True)
            return logging.INFO
        return level
    if verbose <= 0:
        return None
    return logging.INFO if verbose == 1 else logging.DEBUG


def _configure_logging(level: int) -> None:
    # Root stays at WARNING so httpx/httpcore chatter is only shown on problems.
    logging.basicConfig(level=logging.WARNING, format=_LOG_FORMAT, stream=sys.stderr, force=True)
    logging.getLogger("pages_env").setLevel(level)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"pages-env {__version__}")
        raise typer.Exit


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Log to stderr (-v info, -vv debug).",
    ),
) -> None:
    _ = version
    level = log_level(verbose, ambient_environ())
    if level is not None:
        _configure_logging(level)


from pages_env.cli import commands as _commands  # noqa: E402, F401
