"""HTTP client for the Brand Site API."""
from typing import Any

import httpx
from pydantic import ValidationError

from brandsite.core.config import settings
from brandsite.core.logging import get_logger
from brandsite.modules.config.defaults import fallback_brand
from brandsite.modules.config.schemas import BrandConfig, PageConfig, ProjectConfig

logger = get_logger(__name__)


class ApiError(Exception):
    """A failed API call, carrying the status and the server's error message."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"API call failed: {response.reason_phrase}"
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"API call failed: {response.reason_phrase}"


class SiteApiClient:
    """
    Client for the Brand Site REST API.

    Reads degrade instead of raising: a missing or unreachable brand yields
    the fallback brand, a missing project yields None and failed listings
    yield empty lists. Writes raise ``ApiError``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 30.0,
    ):
        """Initialize the client."""
        self.base_url = (base_url or settings.SITE_API_URL).rstrip("/") + settings.API_PREFIX
        self.headers = {"Content-Type": "application/json", **(headers or {})}
        self.transport = transport
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self.headers,
                timeout=self.timeout,
                transport=self.transport,
            )
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "SiteApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _call(self, method: str, path: str, **kwargs) -> httpx.Response:
        client = await self._get_client()
        return await client.request(method, path, **kwargs)

    async def _write(self, method: str, path: str, operation: str, **kwargs) -> Any:
        try:
            response = await self._call(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Failed to {operation}", error=str(e))
            raise ApiError(503, f"Failed to {operation}: {e}") from e
        if response.is_error:
            message = _error_message(response)
            logger.error(f"Failed to {operation}", status_code=response.status_code, error=message)
            raise ApiError(response.status_code, message)
        return response.json()

    # =========================================================================
    # Config reads
    # =========================================================================

    async def fetch_brand_config(self) -> BrandConfig:
        """Brand record, or the fallback brand when it is missing or unreachable."""
        try:
            response = await self._call("GET", "/config/brand")
            if response.status_code == 404:
                logger.warning("Brand config not found, using fallback")
                return fallback_brand()
            response.raise_for_status()
            return BrandConfig.model_validate(response.json())
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            logger.error("Error fetching brand config, using fallback", error=str(e))
            return fallback_brand()

    async def fetch_project_config(self, project_key: str) -> ProjectConfig | None:
        """One project record, or None."""
        try:
            response = await self._call("GET", f"/config/project/{project_key}")
            if response.status_code == 404:
                return None
            response.raise_for_status()
            body = response.json()
            return ProjectConfig.model_validate(body) if body else None
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            logger.error("Error fetching project config", project_key=project_key, error=str(e))
            return None

    async def fetch_all_project_configs(self) -> list[ProjectConfig]:
        """Every project record; records that fail validation are skipped."""
        try:
            response = await self._call("GET", "/config/projects")
            response.raise_for_status()
            items = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Error fetching project configs", error=str(e))
            return []

        projects = []
        for item in items or []:
            try:
                projects.append(ProjectConfig.model_validate(item))
            except ValidationError as e:
                logger.warning("Skipping invalid project config", error=str(e))
        return projects

    async def fetch_project_pages(self, project_key: str) -> list[PageConfig]:
        """A project's pages; records that fail validation are skipped."""
        try:
            response = await self._call("GET", f"/config/pages/{project_key}")
            response.raise_for_status()
            items = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Error fetching project pages", project_key=project_key, error=str(e))
            return []

        pages = []
        for item in items or []:
            try:
                pages.append(PageConfig.model_validate(item))
            except ValidationError as e:
                logger.warning("Skipping invalid page config", project_key=project_key, error=str(e))
        return pages

    # =========================================================================
    # Admin writes
    # =========================================================================

    async def save_project_config(self, project: ProjectConfig) -> None:
        """Create or update a project record."""
        await self._write(
            "POST", "/admin/projects", "save project config", json=project.to_item()
        )

    async def save_page_config(self, page: PageConfig) -> None:
        """Create or update a page record."""
        await self._write("POST", "/admin/pages", "save page config", json=page.to_item())

    async def delete_project(self, project_key: str) -> None:
        """Delete a project and its pages."""
        await self._write("DELETE", f"/admin/projects/{project_key}", "delete project")

    # =========================================================================
    # User settings
    # =========================================================================

    async def get_user_settings(self) -> dict[str, Any] | None:
        """The caller's settings, or None when no record exists yet."""
        try:
            return await self._write("GET", "/user/settings", "get user settings")
        except ApiError as e:
            if e.status_code == 404:
                return None
            raise

    async def update_user_settings(self, changes: dict[str, Any]) -> dict[str, Any]:
        """Update the caller's settings."""
        return await self._write("PUT", "/user/settings", "update user settings", json=changes)

    async def create_user_record(self, data: dict[str, Any]) -> dict[str, Any]:
        """Create the caller's record (returns the existing one if present)."""
        return await self._write("POST", "/user/create", "create user", json=data)
