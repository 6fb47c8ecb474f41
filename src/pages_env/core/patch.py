"""Minimal PATCH computation for project environment variables."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from pages_env.core.models import EnvVarValuePatch
from pages_env.document import Environment

if TYPE_CHECKING:
    from pages_env.core.models import DeploymentConfigs
    from pages_env.document import VariableDocument


class Action(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class VariableChange(BaseModel):
    environment: Environment
    name: str
    action: Action


class VariablePatch(BaseModel):
    """Per-environment variable updates; ``None`` entries delete the variable.

    Environments absent from ``env_vars`` are not touched by the PATCH.
    """

    env_vars: dict[Environment, dict[str, EnvVarValuePatch | None]] = Field(default_factory=dict)
    changes: list[VariableChange] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.changes

    def summary(self) -> dict[str, int]:
        counts = {a.value: 0 for a in Action}
        for c in self.changes:
            counts[c.action.value] += 1
        return counts

    def body(self) -> dict[str, Any]:
        """Build the ``deployment_configs`` request body."""
        return {
            "deployment_configs": {
                env.value: {
                    "env_vars": {
                        name: value.model_dump() if value is not None else None
                        for name, value in entries.items()
                    }
                }
                for env, entries in self.env_vars.items()
                if entries
            }
        }


def compute_patch(existing: DeploymentConfigs, desired: VariableDocument) -> VariablePatch:
    """Diff the live project settings against *desired*.

    New and changed keys are set, keys missing from *desired* are deleted,
    unchanged keys are skipped. Null environments in *desired* produce nothing.
    """
    patch = VariablePatch()
    for env in desired.environments():
        old = existing.for_environment(env).variables()
        new = desired.get(env)
        entries: dict[str, EnvVarValuePatch | None] = {}

        for name, value in sorted(new.items()):
            if name not in old:
                action = Action.CREATE
            elif old[name] != value:
                action = Action.UPDATE
            else:
                continue
            entries[name] = EnvVarValuePatch(value=value)
            patch.changes.append(VariableChange(environment=env, name=name, action=action))

        for name in sorted(old.keys() - new.keys()):
            entries[name] = None
            patch.changes.append(VariableChange(environment=env, name=name, action=Action.DELETE))

        if entries:
            patch.env_vars[env] = entries
    return patch
