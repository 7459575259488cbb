"""User settings routes (authenticated callers only)."""
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from brandsite.core.auth import IdentityContext, require_user
from brandsite.core.database import get_db
from brandsite.modules.config.store import StoreUnavailableError, UserStore
from .schemas import UserCreate
from .services import DisplayNameTakenError, UserNotFoundError, UserService

router = APIRouter(prefix="/user", tags=["Users"])


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    """Build the user service for this request's session."""
    return UserService(UserStore(db))


@router.get("/settings")
async def get_user_settings(
    identity: IdentityContext = Depends(require_user),
    service: UserService = Depends(get_user_service),
):
    """Get the caller's settings."""
    try:
        record = await service.get_settings(identity)
    except StoreUnavailableError:
        raise HTTPException(status_code=500, detail="Failed to get user settings")

    if record is None:
        raise HTTPException(status_code=404, detail="User settings not found")
    return record


@router.put("/settings")
async def update_user_settings(
    body: dict[str, Any] = Body(...),
    identity: IdentityContext = Depends(require_user),
    service: UserService = Depends(get_user_service),
):
    """Update the caller's settings; immutable fields are kept server-side."""
    try:
        return await service.update(identity, body)
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DisplayNameTakenError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StoreUnavailableError:
        raise HTTPException(status_code=500, detail="Failed to update user settings")


@router.post("/create")
async def create_user(
    body: UserCreate | None = None,
    identity: IdentityContext = Depends(require_user),
    service: UserService = Depends(get_user_service),
):
    """Create the caller's record; returns the existing one if already created."""
    try:
        record, created = await service.create(identity, body or UserCreate())
    except DisplayNameTakenError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StoreUnavailableError:
        raise HTTPException(status_code=500, detail="Failed to create user")

    return JSONResponse(status_code=201 if created else 200, content=record)
