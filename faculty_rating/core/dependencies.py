"""
Request-scoped dependencies shared by the routers.

Each has an Annotated alias (DBSessionDep, SettingsDep, AuthClientDep,
AccessTokenDep, CurrentUserDep, AdminUserDep) so route signatures stay short:

    @router.get("/students/me")
    async def my_dashboard(db: DBSessionDep, user: CurrentUserDep):
        ...

Tests swap any of them through app.dependency_overrides.
"""

from typing import Annotated, AsyncGenerator, Optional

from asyncpg import Connection
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from faculty_rating.core.auth import AuthError, CurrentUser, SupabaseAuthClient, verify_access_token
from faculty_rating.core.config import Settings, get_settings
from faculty_rating.core.database import get_db_pool
from faculty_rating.core.errors import PermissionDeniedError


# auto_error=False so a missing header becomes our own 401 notification
bearer_scheme = HTTPBearer(auto_error=False)


# =============================================================================
# Database
# =============================================================================

async def get_db_session() -> AsyncGenerator[Connection, None]:
    """
    One pooled connection per request, returned when the response is sent.

    The connection is released back to the pool when the endpoint completes,
    whether it succeeded or raised.
    """
    pool = await get_db_pool()
    async with pool.acquire() as connection:
        yield connection


# =============================================================================
# Settings and Auth Client Dependencies
# =============================================================================

def get_settings_dependency() -> Settings:
    """Return the Settings singleton (overridable in tests)."""
    return get_settings()


SettingsDep = Annotated[Settings, Depends(get_settings_dependency)]


def get_auth_client(settings: SettingsDep) -> SupabaseAuthClient:
    """Return an auth API client bound to the configured project."""
    return SupabaseAuthClient.from_settings(settings)


# =============================================================================
# Authentication Dependencies
# =============================================================================

async def get_access_token(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> str:
    """Return the bearer token of the request or raise a 401 notification."""
    if credentials is None or not credentials.credentials:
        raise AuthError("Please log in to continue", status_code=401, title="Not authenticated")
    return credentials.credentials


async def get_current_user(
    token: Annotated[str, Depends(get_access_token)],
    settings: SettingsDep,
) -> CurrentUser:
    """Verify the session token and return the user it belongs to."""
    return verify_access_token(token, settings)


async def require_admin(
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Allow only administrators through."""
    if not user.is_admin:
        raise PermissionDeniedError("Administrator access is required")
    return user


# =============================================================================
# Annotated aliases
# =============================================================================

DBSessionDep = Annotated[Connection, Depends(get_db_session)]
AuthClientDep = Annotated[SupabaseAuthClient, Depends(get_auth_client)]
AccessTokenDep = Annotated[str, Depends(get_access_token)]
CurrentUserDep = Annotated[CurrentUser, Depends(get_current_user)]
AdminUserDep = Annotated[CurrentUser, Depends(require_admin)]
