"""Public config routes and admin write routes."""
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from brandsite.core.auth import IdentityContext, require_admin
from brandsite.core.database import get_db
from brandsite.core.logging import get_logger
from .defaults import fallback_brand
from .services import ConfigService, InvalidRecordError
from .store import ConfigStore, StoreUnavailableError

logger = get_logger(__name__)

router = APIRouter(tags=["Config"])


def get_config_service(db: AsyncSession = Depends(get_db)) -> ConfigService:
    """Build the config service for this request's session."""
    return ConfigService(ConfigStore(db))


# =============================================================================
# Public Config Routes
# =============================================================================

@router.get("/config/brand")
async def get_brand_config(service: ConfigService = Depends(get_config_service)):
    """Get the brand record. Falls back to the built-in brand if the store is down."""
    try:
        brand = await service.get_brand()
    except StoreUnavailableError as e:
        logger.warning("Brand config unavailable, serving fallback", error=str(e))
        return fallback_brand().to_item()

    if brand is None:
        raise HTTPException(status_code=404, detail="Brand config not found")
    return brand


@router.get("/config/projects")
async def get_all_projects(service: ConfigService = Depends(get_config_service)):
    """List all project configs (brand record excluded)."""
    try:
        return await service.list_projects()
    except StoreUnavailableError as e:
        logger.warning("Project listing unavailable", error=str(e))
        return []


@router.get("/config/project/{project_key}")
async def get_project_config(
    project_key: str,
    service: ConfigService = Depends(get_config_service),
):
    """
    Get one project config.

    404 when the record does not exist; 200 with null when the store is
    unreachable, so readers fall back to the placeholder project.
    """
    try:
        project = await service.get_project(project_key)
    except StoreUnavailableError as e:
        logger.warning("Project config unavailable", project_key=project_key, error=str(e))
        return None

    if project is None:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


@router.get("/config/pages/{project_key}")
async def get_project_pages(
    project_key: str,
    service: ConfigService = Depends(get_config_service),
):
    """List a project's pages (its Config record excluded)."""
    try:
        return await service.list_pages(project_key)
    except StoreUnavailableError as e:
        logger.warning("Project pages unavailable", project_key=project_key, error=str(e))
        return []


# =============================================================================
# Admin Routes
# =============================================================================

@router.post("/admin/projects")
async def save_project_config(
    body: dict[str, Any] = Body(...),
    service: ConfigService = Depends(get_config_service),
    admin: IdentityContext = Depends(require_admin),
):
    """Create or update a project config (admin only)."""
    try:
        await service.save_project(body)
    except InvalidRecordError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StoreUnavailableError:
        raise HTTPException(status_code=500, detail="Failed to save project config")
    return {"success": True}


@router.post("/admin/pages")
async def save_page_config(
    body: dict[str, Any] = Body(...),
    service: ConfigService = Depends(get_config_service),
    admin: IdentityContext = Depends(require_admin),
):
    """Create or update a page config (admin only)."""
    try:
        await service.save_page(body)
    except InvalidRecordError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StoreUnavailableError:
        raise HTTPException(status_code=500, detail="Failed to save page config")
    return {"success": True}


@router.delete("/admin/projects/{project_key}")
async def delete_project(
    project_key: str,
    service: ConfigService = Depends(get_config_service),
    admin: IdentityContext = Depends(require_admin),
):
    """Delete a project and cascade to its pages (admin only)."""
    try:
        await service.delete_project(project_key)
    except InvalidRecordError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StoreUnavailableError:
        raise HTTPException(status_code=500, detail="Failed to delete project")
    return {"success": True}
