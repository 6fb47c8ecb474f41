"""Resolve command settings from CLI options, environment variables and defaults."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

from dotenv import dotenv_values
from pydantic import SecretStr
from ruamel.yaml.constructor import SafeConstructor

from pages_env.config.schema import (
    Credentials,
    GetEnvVarsConfig,
    ProjectReference,
    SetEnvVarsConfig,
    ToEnvFileConfig,
)
from pages_env.document import Environment
from pages_env.errors import ConfigError, MissingConfiguration

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

# Field name → environment variable.
ENV_MAP: dict[str, str] = {
    "account": "CLOUDFLARE_ACCOUNT",
    "token": "CLOUDFLARE_TOKEN",
    "project": "CF_PAGES_PROJECT",
    "deployment": "CF_PAGES_DEPLOYMENT",
    "output": "CF_PAGES_OUTPUT",
    "file": "CF_PAGES_FILE",
    "environment": "CF_PAGES_ENVIRONMENT",
    "empty": "CF_PAGES_EMPTY",
}


SETTINGS_FILE = ".pages-env"


def ambient_environ(directory: Path | None = None) -> dict[str, str]:
    """Build the default lookup: process environment over ``<directory>/.pages-env``.

    Priority (highest wins): env var > settings file. The settings file uses
    dotenv syntax but is never a generated ``.env``, so exported variables
    cannot feed back into later runs.
    """
    env_file = (directory or Path.cwd()) / SETTINGS_FILE
    lookup: dict[str, str] = {}
    if env_file.is_file():
        values = dotenv_values(env_file, encoding="utf-8-sig")
        lookup.update({k: v for k, v in values.items() if v is not None})
        logger.debug("Loaded %d value(s) from %s", len(lookup), env_file)
    lookup.update(os.environ)
    return lookup


def _lookup(field: str, options: Mapping[str, Any], environ: Mapping[str, str]) -> Any:
    """Return the option value, else the env value, else ``None``. Empty strings are unset."""
    val = options.get(field)
    if val is None or val == "":
        env_key = ENV_MAP.get(field)
        val = environ.get(env_key) if env_key else None
        if val == "":
            val = None
        elif val is not None:
            logger.debug("Using %s for '%s'", env_key, field)
    return val


def _require(field: str, options: Mapping[str, Any], environ: Mapping[str, str]) -> Any:
    val = _lookup(field, options, environ)
    if val is None:
        raise MissingConfiguration(field, ENV_MAP.get(field))
    return val


def _optional_path(
    field: str, options: Mapping[str, Any], environ: Mapping[str, str]
) -> Path | None:
    val = _lookup(field, options, environ)
    return Path(val) if val is not None else None


def _resolve_credentials(options: Mapping[str, Any], environ: Mapping[str, str]) -> Credentials:
    account = _require("account", options, environ)
    token = _require("token", options, environ)
    return Credentials(account=account, token=SecretStr(token))


def _resolve_environment(options: Mapping[str, Any], environ: Mapping[str, str]) -> Environment:
    val = _lookup("environment", options, environ)
    if val is None:
        return Environment.PRODUCTION
    try:
        return Environment(val)
    except ValueError:
        allowed = ", ".join(e.value for e in Environment)
        raise ConfigError(f"Invalid environment {val!r}, expected one of: {allowed}") from None


def _resolve_bool(field: str, options: Mapping[str, Any], environ: Mapping[str, str]) -> bool:
    val = _lookup(field, options, environ)
    if val is None:
        return False
    if isinstance(val, str):
        if val.lower() not in SafeConstructor.bool_values:
            raise ConfigError(f"Invalid boolean for {ENV_MAP[field]}: {val!r}")
        return SafeConstructor.bool_values[val.lower()]
    return bool(val)


def resolve_get_env_vars(
    options: Mapping[str, Any], environ: Mapping[str, str]
) -> GetEnvVarsConfig:
    """Resolve settings for ``get-env-vars``.

    Raises:
        MissingConfiguration: If account, token or project cannot be resolved.
    """
    return GetEnvVarsConfig(
        credentials=_resolve_credentials(options, environ),
        target=ProjectReference(
            project=_require("project", options, environ),
            deployment=_lookup("deployment", options, environ),
        ),
        output=_optional_path("output", options, environ),
    )


def resolve_set_env_vars(
    options: Mapping[str, Any], environ: Mapping[str, str]
) -> SetEnvVarsConfig:
    """Resolve settings for ``set-env-vars``.

    Raises:
        MissingConfiguration: If account, token, project or file cannot be resolved.
    """
    return SetEnvVarsConfig(
        credentials=_resolve_credentials(options, environ),
        target=ProjectReference(project=_require("project", options, environ)),
        file=Path(_require("file", options, environ)),
    )


def resolve_to_env_file(
    options: Mapping[str, Any], environ: Mapping[str, str]
) -> ToEnvFileConfig:
    """Resolve settings for ``to-env-file``. The input file has no env fallback."""
    file = options.get("file")
    if file is None or file == "":
        raise MissingConfiguration("file")
    return ToEnvFileConfig(
        file=Path(file),
        environment=_resolve_environment(options, environ),
        empty=_resolve_bool("empty", options, environ),
        output=_optional_path("output", options, environ),
    )
