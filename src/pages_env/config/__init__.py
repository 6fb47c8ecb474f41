"""Command configuration resolution."""

from pages_env.config.loader import (
    ENV_MAP,
    ambient_environ,
    resolve_get_env_vars,
    resolve_set_env_vars,
    resolve_to_env_file,
)
from pages_env.config.schema import (
    Credentials,
    GetEnvVarsConfig,
    ProjectReference,
    SetEnvVarsConfig,
    ToEnvFileConfig,
)

__all__ = [
    "ENV_MAP",
    "Credentials",
    "GetEnvVarsConfig",
    "ProjectReference",
    "SetEnvVarsConfig",
    "ToEnvFileConfig",
    "ambient_environ",
    "resolve_get_env_vars",
    "resolve_set_env_vars",
    "resolve_to_env_file",
]
