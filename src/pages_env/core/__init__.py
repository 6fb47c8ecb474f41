"""Cloudflare API access."""

from pages_env.core.client import API_BASE_URL, PagesClient
from pages_env.core.patch import Action, VariableChange, VariablePatch, compute_patch
from pages_env.core.provider import CloudflareProvider

__all__ = [
    "API_BASE_URL",
    "Action",
    "CloudflareProvider",
    "PagesClient",
    "VariableChange",
    "VariablePatch",
    "compute_patch",
]
