"""Render a variable document as ``.env`` lines."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pages_env.document import Environment, VariableDocument

logger = logging.getLogger(__name__)

# Values made only of these characters are written bare.
_BARE_VALUE = re.compile(r"[A-Za-z0-9_.,:/@+%^-]*")

_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r"}

# Single quotes keep ${...} literal for dotenv-expand and docker
# compose. Inside them only backslash sequences are decoded, so values with
# these characters cannot be single-quoted.
_NOT_SINGLE_QUOTABLE = frozenset("'\\\n\r")


def quote_value(value: str) -> str:
    """Quote *value* for a ``.env`` file if it is not safe to write bare.

    Values containing ``$`` are wrapped in single quotes, verbatim, so that
    loaders which skip interpolation in single-quoted values read them as
    written. python-dotenv interpolates regardless of quoting, so read such
    files with ``interpolate=False``. Everything else is double-quoted with
    backslash escapes for ``\\``, ``"``, newline and carriage return.
    """
    if _BARE_VALUE.fullmatch(value):
        return value
    if "$" in value and not _NOT_SINGLE_QUOTABLE.intersection(value):
        return f"'{value}'"
    return '"' + "".join(_ESCAPES.get(ch, ch) for ch in value) + '"'


def to_env_lines(
    document: VariableDocument,
    environment: Environment,
    *,
    empty: bool = False,
) -> list[str]:
    """Return ``KEY=VALUE`` lines for *environment*, sorted by key.

    With ``empty=True`` only the names are kept (``KEY=""``), which is handy
    for committing a template next to the real file.

    Raises:
        EnvironmentUnavailable: If the environment is null in the document.
    """
    variables = document.get(environment)
    if empty:
        return [f'{key}=""' for key in sorted(variables)]
    lines = []
    for key, value in sorted(variables.items()):
        quoted = quote_value(value)
        if "$" in value and not quoted.startswith("'"):
            logger.warning(
                "%s contains '$' and had to be double-quoted; loaders may expand it", key
            )
        lines.append(f"{key}={quoted}")
    return lines


def render(lines: list[str]) -> str:
    return "".join(f"{line}\n" for line in lines)
