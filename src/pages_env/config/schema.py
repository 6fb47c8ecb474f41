"""Resolved per-command configuration."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, SecretStr

from pages_env.document import Environment


class Credentials(BaseModel):
    """Cloudflare account id and API token."""

    model_config = ConfigDict(frozen=True)

    account: str
    token: SecretStr


class ProjectReference(BaseModel):
    """A Pages project, optionally narrowed to one deployment."""

    model_config = ConfigDict(frozen=True)

    project: str
    deployment: str | None = None


class GetEnvVarsConfig(BaseModel):
    credentials: Credentials
    target: ProjectReference
    output: Path | None = None


class SetEnvVarsConfig(BaseModel):
    credentials: Credentials
    target: ProjectReference
    file: Path


class ToEnvFileConfig(BaseModel):
    file: Path
    environment: Environment = Environment.PRODUCTION
    empty: bool = False
    output: Path | None = None
