"""Rendering of pending variable changes."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

import typer

if TYPE_CHECKING:
    from collections.abc import Callable

    from pages_env.core.patch import VariablePatch


class _ActionStyle(NamedTuple):
    color: str
    symbol: str


_ACTION_STYLES: dict[str, _ActionStyle] = {
    "create": _ActionStyle("green", "+"),
    "update": _ActionStyle("yellow", "~"),
    "delete": _ActionStyle("red", "-"),
}

_PLAN_VERBS = ("to add", "to change", "to remove")
_APPLY_VERBS = ("added", "changed", "removed")
_SUMMARY_COLORS = ("green", "yellow", "red")


def styler(color: bool) -> Callable[..., str]:
    """Return ``typer.style`` when *color* is True, otherwise a passthrough."""
    if color:
        return typer.style
    return lambda text, **_kw: text


def format_changes(patch: VariablePatch, *, color: bool = True) -> str:
    """Render one ``<symbol> <environment>.<NAME>`` line per change.

    Values are never shown; they are often secrets.
    """
    style = styler(color)
    lines = []
    for change in patch.changes:
        s = _ACTION_STYLES[change.action.value]
        lines.append(style(f"  {s.symbol} {change.environment.value}.{change.name}", fg=s.color))
    return "\n".join(lines)


def format_summary(patch: VariablePatch, *, color: bool = True, applied: bool = False) -> str:
    """Build ``Variables: N to add, N to change, N to remove.``"""
    style = styler(color)
    summary = patch.summary()
    counts = (summary["create"], summary["update"], summary["delete"])
    verbs = _APPLY_VERBS if applied else _PLAN_VERBS
    parts = [
        style(f"{n} {verb}", fg=fg) if n else f"{n} {verb}"
        for n, verb, fg in zip(counts, verbs, _SUMMARY_COLORS, strict=True)
    ]
    return f"Variables: {', '.join(parts)}."
