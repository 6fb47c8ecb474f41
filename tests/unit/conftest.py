"""Shared fixtures for unit tests."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import httpx
import pytest
from pydantic import SecretStr

from pages_env.config.loader import ENV_MAP
from pages_env.config.schema import Credentials
from pages_env.core.provider import CloudflareProvider

if TYPE_CHECKING:
    from pathlib import Path

PROJECT_PATH = "/client/v4/accounts/acc-123/pages/projects/site"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Remove pages-env env vars and run from an empty directory (no stray .pages-env)."""
    for var in (*ENV_MAP.values(), "PAGES_ENV_LOG", "NO_COLOR"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


def envelope(result: Any, *, success: bool = True) -> dict[str, Any]:
    return {"success": success, "errors": [], "messages": [], "result": result}


def project_payload(
    production: dict[str, str] | None = None,
    preview: dict[str, str] | None = None,
) -> dict[str, Any]:
    """Build a Pages project body with plain-text variables."""

    def _env(values: dict[str, str] | None) -> dict[str, Any]:
        if values is None:
            return {"env_vars": None}
        return {
            "env_vars": {k: {"type": "plain_text", "value": v} for k, v in values.items()}
        }

    return {
        "id": "proj-1",
        "name": "site",
        "deployment_configs": {"production": _env(production), "preview": _env(preview)},
    }


class FakeCloudflare:
    """Route table behind an ``httpx.MockTransport`` that records requests."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], httpx.Response | Exception] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        *,
        status: int = 200,
        json: Any = None,
        content: bytes | None = None,
    ) -> None:
        if content is not None:
            self.routes[(method, path)] = httpx.Response(status, content=content)
        else:
            self.routes[(method, path)] = httpx.Response(status, json=json)

    def fail(self, method: str, path: str, exc: Exception) -> None:
        self.routes[(method, path)] = exc

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": f"no route for {request.url.path}"})
        if isinstance(route, Exception):
            raise route
        return route

    def sent_json(self, method: str) -> list[Any]:
        return [json.loads(r.content) for r in self.requests if r.method == method]

    def methods(self) -> list[str]:
        return [r.method for r in self.requests]


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(account="acc-123", token=SecretStr("tok-secret"))


@pytest.fixture
def fake_api() -> FakeCloudflare:
    return FakeCloudflare()


@pytest.fixture
def provider(credentials: Credentials, fake_api: FakeCloudflare) -> CloudflareProvider:
    http = httpx.Client(transport=httpx.MockTransport(fake_api.handler))
    return CloudflareProvider.from_client(credentials, http)
