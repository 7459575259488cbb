"""Identity context and authorization tiers.

Token verification happens upstream: the gateway verifies the caller's
token and forwards the verified claims as request headers. This module
only turns those claims into an ``IdentityContext`` and gates routes on
the public / authenticated-user / admin tiers.
"""
from typing import Any, Mapping

from fastapi import Depends, HTTPException, Request
from pydantic import BaseModel

from .config import settings
from .logging import get_logger

logger = get_logger(__name__)


class IdentityContext(BaseModel):
    """Caller identity for one request."""
    subject: str
    email: str | None = None
    groups: list[str] = []

    @property
    def is_admin(self) -> bool:
        return settings.ADMIN_GROUP in self.groups

    def has_any_role(self, roles: list[str] | None) -> bool:
        """Whether the caller holds at least one of ``roles``."""
        if not roles:
            return False
        return any(role in self.groups for role in roles)


def _split_groups(raw: Any) -> list[str]:
    if not raw:
        return []
    if isinstance(raw, str):
        return [g.strip() for g in raw.split(",") if g.strip()]
    return [str(g) for g in raw]


def identity_from_claims(claims: Mapping[str, Any] | None) -> IdentityContext | None:
    """
    Build an identity from a verified claims bag.

    Accepts either ``groups`` or the identity provider's ``cognito:groups``
    key. Returns None when there are no claims or no subject.
    """
    if not claims:
        return None
    subject = claims.get("sub")
    if not subject:
        return None
    groups = claims.get("groups", claims.get("cognito:groups"))
    return IdentityContext(
        subject=str(subject),
        email=claims.get("email"),
        groups=_split_groups(groups),
    )


def claims_from_headers(headers: Mapping[str, str]) -> dict[str, Any]:
    """Read the claims bag the gateway forwarded as headers."""
    claims: dict[str, Any] = {}
    subject = headers.get(settings.CLAIMS_SUBJECT_HEADER)
    if subject:
        claims["sub"] = subject
    email = headers.get(settings.CLAIMS_EMAIL_HEADER)
    if email:
        claims["email"] = email
    groups = headers.get(settings.CLAIMS_GROUPS_HEADER)
    if groups:
        claims["groups"] = groups
    return claims


# ── FastAPI Dependencies ───────────────────────────────────────────────


async def get_identity(request: Request) -> IdentityContext | None:
    """Get the caller's identity if claims were forwarded, None otherwise."""
    if not settings.auth_enabled:
        return IdentityContext(
            subject="local-dev",
            email="dev@localhost",
            groups=[settings.ADMIN_GROUP],
        )
    return identity_from_claims(claims_from_headers(request.headers))


async def require_user(
    identity: IdentityContext | None = Depends(get_identity),
) -> IdentityContext:
    """Require an authenticated caller. Raises 401 otherwise."""
    if identity is None:
        raise HTTPException(
            status_code=401,
            detail="Unauthorized: Authentication required",
        )
    return identity


async def require_admin(
    identity: IdentityContext | None = Depends(get_identity),
) -> IdentityContext:
    """Require the admin group claim. 401 without identity, 403 without the group."""
    if identity is None:
        raise HTTPException(
            status_code=401,
            detail="Unauthorized: Admin access required",
        )
    if not identity.is_admin:
        logger.warning("Admin route denied", subject=identity.subject)
        raise HTTPException(
            status_code=403,
            detail="Forbidden: Admin access required",
        )
    return identity
