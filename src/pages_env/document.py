"""Local variable document: per-environment variable maps as JSON."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, ValidationError, field_serializer

from pages_env.errors import (
    EnvironmentUnavailable,
    MalformedDocument,
    describe_validation_error,
)

VariableMap = dict[str, str]


class Environment(str, Enum):
    PRODUCTION = "production"
    PREVIEW = "preview"


class VariableDocument(BaseModel):
    """Variables for both Pages environments.

    ``None`` means "no data for this environment" (for example a document
    fetched from a single deployment) and is distinct from an empty map.
    It serializes as JSON ``null``.
    """

    model_config = ConfigDict(strict=True, extra="forbid")

    production: VariableMap | None = None
    preview: VariableMap | None = None

    @classmethod
    def parse(cls, text: str) -> VariableDocument:
        """Parse a JSON document, raising ``MalformedDocument`` on any violation."""
        try:
            return cls.model_validate_json(text)
        except ValidationError as exc:
            raise MalformedDocument(
                f"invalid variables document: {describe_validation_error(exc)}"
            ) from exc

    @classmethod
    def single(cls, environment: Environment, variables: VariableMap) -> VariableDocument:
        """Build a document holding only *environment*; the other stays null."""
        return cls(**{environment.value: variables})

    @field_serializer("production", "preview")
    def _sort_keys(self, value: VariableMap | None) -> VariableMap | None:
        if value is None:
            return None
        return dict(sorted(value.items()))

    def dumps(self) -> str:
        """Serialize as indented JSON with a trailing newline."""
        return self.model_dump_json(indent=2) + "\n"

    def get(self, environment: Environment) -> VariableMap:
        variables: VariableMap | None = getattr(self, environment.value)
        if variables is None:
            raise EnvironmentUnavailable(environment)
        return variables

    def environments(self) -> list[Environment]:
        """Return the environments that carry data, in a fixed order."""
        return [env for env in Environment if getattr(self, env.value) is not None]
