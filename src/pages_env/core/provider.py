"""Cloudflare provider - HTTP connection for a Cloudflare account."""

from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING, Any, Self

import httpx
from pydantic import BaseModel, ConfigDict

from pages_env import __version__
from pages_env.config.schema import Credentials  # noqa: TC001 - Pydantic needs this at runtime

if TYPE_CHECKING:
    from pages_env.core.client import PagesClient

DEFAULT_TIMEOUT = 10.0


class CloudflareProvider(BaseModel):
    """Connection configuration for the Cloudflare API.

    Normally the provider owns its ``httpx.Client``. Tests (or callers that
    need custom transports) can inject one with ``from_client``; an injected
    client is never closed by the provider.

    Examples:
        with CloudflareProvider(credentials=creds) as provider:
            document = provider.pages.fetch_variables(ref)
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    credentials: Credentials

    _injected_client: httpx.Client | None = None

    @classmethod
    def from_client(cls, credentials: Credentials, client: httpx.Client) -> Self:
        """Create a provider around an existing ``httpx.Client``."""
        provider = cls(credentials=credentials)
        provider._injected_client = client
        return provider

    @cached_property
    def client(self) -> httpx.Client:
        if self._injected_client is not None:
            return self._injected_client
        return httpx.Client(
            timeout=DEFAULT_TIMEOUT,
            headers={"User-Agent": f"pages-env/{__version__}"},
        )

    @cached_property
    def pages(self) -> PagesClient:
        from pages_env.core.client import PagesClient

        return PagesClient(self.client, self.credentials)

    def close(self) -> None:
        if self._injected_client is None and "client" in self.__dict__:
            self.client.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
