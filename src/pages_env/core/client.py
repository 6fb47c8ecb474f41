"""Cloudflare Pages API client for project environment variables."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from pages_env.core.models import CloudflareResponse, PagesDeployment, PagesProject
from pages_env.core.patch import compute_patch
from pages_env.document import VariableDocument
from pages_env.errors import ApiError, DecodeError, TransportError, describe_validation_error

if TYPE_CHECKING:
    from pages_env.config.schema import Credentials, ProjectReference
    from pages_env.core.patch import VariablePatch

logger = logging.getLogger(__name__)

API_BASE_URL = "https://api.cloudflare.com/client/v4"

M = TypeVar("M", bound=BaseModel)


def _error_message(response: httpx.Response) -> str:
    """Extract a readable message from an error response body."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
        errors = body.get("errors")
        if isinstance(errors, list) and errors and isinstance(errors[0], dict):
            message = errors[0].get("message")
            if isinstance(message, str) and message:
                return message
    return response.reason_phrase or f"HTTP {response.status_code}"


class PagesClient:
    """Read and update Pages project variables.

    Every call issues its requests on the given ``httpx.Client`` with a
    bearer token; nothing is retried.
    """

    def __init__(
        self,
        http: httpx.Client,
        credentials: Credentials,
        *,
        base_url: str = API_BASE_URL,
    ) -> None:
        self.http = http
        self.credentials = credentials
        self.base_url = base_url.rstrip("/")

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.credentials.token.get_secret_value()}"}

    def _project_url(self, project: str) -> str:
        account = quote(self.credentials.account, safe="")
        return f"{self.base_url}/accounts/{account}/pages/projects/{quote(project, safe='')}"

    def _request(
        self,
        method: str,
        url: str,
        model: type[M],
        *,
        json: dict[str, Any] | None = None,
    ) -> M:
        logger.debug("%s %s", method, url)
        try:
            response = self.http.request(method, url, headers=self._headers(), json=json)
        except httpx.TransportError as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc

        logger.debug("%s %s -> %d", method, url, response.status_code)
        if not response.is_success:
            raise ApiError(response.status_code, _error_message(response))

        try:
            envelope = CloudflareResponse[model].model_validate_json(response.content)
        except ValidationError as exc:
            raise DecodeError(
                f"Unexpected response from {method} {url}: {describe_validation_error(exc)}"
            ) from exc

        if not envelope.success:
            message = (
                envelope.errors[0].message if envelope.errors else "unsuccessful Cloudflare request"
            )
            raise ApiError(response.status_code, message)
        if envelope.result is None:
            raise DecodeError(f"Response from {method} {url} has no result")
        return envelope.result

    def get_project(self, project: str) -> PagesProject:
        return self._request("GET", self._project_url(project), PagesProject)

    def get_deployment(self, project: str, deployment: str) -> PagesDeployment:
        url = f"{self._project_url(project)}/deployments/{quote(deployment, safe='')}"
        return self._request("GET", url, PagesDeployment)

    def fetch_variables(self, target: ProjectReference) -> VariableDocument:
        """Fetch variables for a project or for one of its deployments.

        A deployment only carries variables for the environment it was built
        for, so the other environment is left null.
        """
        if target.deployment:
            deployment = self.get_deployment(target.project, target.deployment)
            logger.info(
                "Fetched deployment %s (%s) of %s",
                deployment.id,
                deployment.environment.value,
                target.project,
            )
            return VariableDocument.single(deployment.environment, deployment.variables())

        configs = self.get_project(target.project).deployment_configs
        logger.info("Fetched project settings of %s", target.project)
        return VariableDocument(
            production=configs.production.variables(),
            preview=configs.preview.variables(),
        )

    def update_variables(
        self,
        target: ProjectReference,
        document: VariableDocument,
        *,
        dry_run: bool = False,
    ) -> VariablePatch:
        """Make the project's variables match *document*.

        Only environments that are non-null in *document* are sent; a null
        environment is left untouched on the remote. Returns the computed
        patch, which is not submitted when it is empty or *dry_run* is set.
        """
        current = self.get_project(target.project)
        patch = compute_patch(current.deployment_configs, document)
        if patch.is_empty():
            logger.info("No variable changes for %s", target.project)
            return patch
        if dry_run:
            logger.info("Dry run: skipping PATCH for %s", target.project)
            return patch

        self._request("PATCH", self._project_url(target.project), PagesProject, json=patch.body())
        logger.info("Patched %d variable(s) on %s", len(patch.changes), target.project)
        return patch
