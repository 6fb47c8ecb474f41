"""CLI command implementations."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

from pages_env.cli import app
from pages_env.cli.errors import handle_error
from pages_env.document import Environment

if TYPE_CHECKING:
    from pages_env.config.schema import Credentials
    from pages_env.core.provider import CloudflareProvider

Account = Annotated[
    str | None,
    typer.Option("--account", help="Cloudflare account ID. [env: CLOUDFLARE_ACCOUNT]"),
]

Token = Annotated[
    str | None,
    typer.Option("--token", help="Cloudflare API token. [env: CLOUDFLARE_TOKEN]"),
]

Project = Annotated[
    str | None,
    typer.Option("--project", help="Name of the Pages project. [env: CF_PAGES_PROJECT]"),
]

NoColor = Annotated[
    bool,
    typer.Option("--no-color", help="Disable colored output."),
]


def _use_color(no_color: bool) -> bool:
    """Determine whether to use color output."""
    return not (no_color or os.environ.get("NO_COLOR"))


def _provider(credentials: Credentials) -> CloudflareProvider:
    from pages_env.core import CloudflareProvider

    return CloudflareProvider(credentials=credentials)


def _emit(content: str, output: Path | None, *, color: bool) -> None:
    """Write *content* to *output* atomically, or print it to stdout."""
    from pages_env.cli.formatting import styler
    from pages_env.files import write_atomic

    if output is None:
        typer.echo(content, nl=False)
        return
    write_atomic(output, content)
    typer.echo(styler(color)(f"Environment variables written to: {output}", fg="green"))


@app.command(name="get-env-vars")
def get_env_vars(
    project: Project = None,
    deployment: Annotated[
        str | None,
        typer.Option(
            "--deployment",
            help="Deployment ID; fetch that deployment's snapshot. [env: CF_PAGES_DEPLOYMENT]",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Path to save the JSON file. Prints to stdout if not provided. "
            "[env: CF_PAGES_OUTPUT]",
        ),
    ] = None,
    account: Account = None,
    token: Token = None,
    no_color: NoColor = False,
) -> None:
    """Download environment variables into a local JSON file."""
    from pages_env.config import ambient_environ, resolve_get_env_vars

    color = _use_color(no_color)
    options = {
        "project": project,
        "deployment": deployment,
        "output": output,
        "account": account,
        "token": token,
    }
    try:
        cfg = resolve_get_env_vars(options, ambient_environ())
        with _provider(cfg.credentials) as provider:
            document = provider.pages.fetch_variables(cfg.target)
        _emit(document.dumps(), cfg.output, color=color)
    except Exception as exc:
        raise typer.Exit(handle_error(exc, color=color)) from exc


@app.command(name="set-env-vars")
def set_env_vars(
    project: Project = None,
    file: Annotated[
        Path | None,
        typer.Option(
            "--file",
            "-f",
            help="Path to the JSON file containing the desired variables. [env: CF_PAGES_FILE]",
        ),
    ] = None,
    account: Account = None,
    token: Token = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show the changes without submitting them."),
    ] = False,
    no_color: NoColor = False,
) -> None:
    """Upload environment variables from a local JSON file."""
    from pages_env.cli.formatting import format_changes, format_summary
    from pages_env.config import ambient_environ, resolve_set_env_vars
    from pages_env.document import VariableDocument
    from pages_env.files import read_text

    color = _use_color(no_color)
    options = {"project": project, "file": file, "account": account, "token": token}
    try:
        cfg = resolve_set_env_vars(options, ambient_environ())
        document = VariableDocument.parse(read_text(cfg.file))
        with _provider(cfg.credentials) as provider:
            patch = provider.pages.update_variables(cfg.target, document, dry_run=dry_run)
    except Exception as exc:
        raise typer.Exit(handle_error(exc, color=color)) from exc

    if patch.is_empty():
        typer.echo("No changes detected. Not submitting patch.")
        return

    typer.echo(format_changes(patch, color=color))
    typer.echo()
    typer.echo(format_summary(patch, color=color, applied=not dry_run))
    if dry_run:
        typer.echo("Dry run: patch not submitted.")
    else:
        typer.echo("Environment variables successfully updated")


@app.command(name="to-env-file")
def to_env_file(
    file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON file containing environment variables."),
    ],
    environment: Annotated[
        Environment | None,
        typer.Option(
            "--environment",
            "-e",
            help="Environment to export (default: production). [env: CF_PAGES_ENVIRONMENT]",
        ),
    ] = None,
    empty: Annotated[
        bool | None,
        typer.Option(
            "--empty/--no-empty",
            help="Emit the variable names only, with empty values. [env: CF_PAGES_EMPTY]",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Path to save the .env file. Prints to stdout if not provided. "
            "[env: CF_PAGES_OUTPUT]",
        ),
    ] = None,
    no_color: NoColor = False,
) -> None:
    """Generate a .env file for front-end development."""
    from pages_env.config import ambient_environ, resolve_to_env_file
    from pages_env.document import VariableDocument
    from pages_env.envfile import render, to_env_lines
    from pages_env.files import read_text

    color = _use_color(no_color)
    options = {"file": file, "environment": environment, "empty": empty, "output": output}
    try:
        cfg = resolve_to_env_file(options, ambient_environ())
        document = VariableDocument.parse(read_text(cfg.file))
        lines = to_env_lines(document, cfg.environment, empty=cfg.empty)
        _emit(render(lines), cfg.output, color=color)
    except Exception as exc:
        raise typer.Exit(handle_error(exc, color=color)) from exc
