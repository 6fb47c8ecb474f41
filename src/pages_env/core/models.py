"""Pydantic models for the Cloudflare Pages API payloads we use."""

from __future__ import annotations

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, Field

from pages_env.document import Environment, VariableMap

T = TypeVar("T")


class EnvVarValue(BaseModel):
    """A single variable as stored by Pages.

    Secret variables come back without their value.
    """

    type: str = "plain_text"
    value: str = ""


class EnvVarValuePatch(BaseModel):
    type: Literal["plain_text"] = "plain_text"
    value: str


class EnvironmentConfig(BaseModel):
    env_vars: dict[str, EnvVarValue | None] | None = None

    def variables(self) -> VariableMap:
        """Flatten to ``name → value``; missing values count as empty strings."""
        if not self.env_vars:
            return {}
        return {
            name: entry.value if entry is not None else ""
            for name, entry in self.env_vars.items()
        }


class DeploymentConfigs(BaseModel):
    production: EnvironmentConfig = Field(default_factory=EnvironmentConfig)
    preview: EnvironmentConfig = Field(default_factory=EnvironmentConfig)

    def for_environment(self, environment: Environment) -> EnvironmentConfig:
        return getattr(self, environment.value)


class PagesProject(BaseModel):
    id: str
    name: str
    deployment_configs: DeploymentConfigs = Field(default_factory=DeploymentConfigs)


class PagesDeployment(BaseModel):
    """A deployment snapshot; its variables sit at the top level."""

    id: str
    environment: Environment
    env_vars: dict[str, EnvVarValue | None] | None = None

    def variables(self) -> VariableMap:
        return EnvironmentConfig(env_vars=self.env_vars).variables()


class ApiMessage(BaseModel):
    code: int | None = None
    message: str


class CloudflareResponse(BaseModel, Generic[T]):
    """Standard Cloudflare v4 response envelope."""

    success: bool
    errors: list[ApiMessage] = Field(default_factory=list)
    result: T | None = None
