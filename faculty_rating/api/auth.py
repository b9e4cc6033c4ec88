"""
FastAPI router module for authentication.

Implements POST /auth/signup, POST /auth/login, POST /auth/logout and
GET /auth/session on top of the hosted auth API.

Every outcome is reported as a notification:
- signup: "Sign Up successful" / "Sign Up Failed"
- login: "Login successful" / "Login Failed"
- logout: "Logged out successfully" / "Error logging out"
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, HTTPException
from pydantic import BaseModel, Field

from faculty_rating.core.auth import AuthError, extract_user
from faculty_rating.core.dependencies import (
    AccessTokenDep,
    AuthClientDep,
    CurrentUserDep,
    SettingsDep,
)
from faculty_rating.core.errors import toast_error
from faculty_rating.models.schemas import (
    ActionResult,
    AuthCredentials,
    AuthResult,
    Notification,
    SessionOut,
    UserOut,
)


logger = logging.getLogger(__name__)

VERIFY_EMAIL_MESSAGE = "Please check your email for verification instructions."


class SessionResponse(BaseModel):
    """Response model for the current session."""
    user: UserOut = Field(..., description="Identity from the verified access token")
    details: Dict[str, Any] = Field(
        default_factory=dict,
        description="User record as returned by the auth API"
    )


router = APIRouter()


def _session_from_payload(payload: Dict[str, Any]) -> Optional[SessionOut]:
    if not payload.get("access_token"):
        return None
    return SessionOut(
        access_token=payload["access_token"],
        refresh_token=payload.get("refresh_token"),
        token_type=payload.get("token_type") or "bearer",
        expires_in=payload.get("expires_in"),
        expires_at=payload.get("expires_at"),
    )


@router.post("/signup", response_model=AuthResult)
async def sign_up(
    auth_client: AuthClientDep,
    settings: SettingsDep,
    credentials: AuthCredentials = Body(...),
) -> AuthResult:
    """
    Create an account. The confirmation e-mail links back to the site root.
    """
    try:
        payload = await auth_client.sign_up(
            credentials.email,
            credentials.password,
            redirect_to=f"{settings.site_url.rstrip('/')}/",
        )
        logger.info(f"Sign up requested for {credentials.email}")
        return AuthResult(
            notification=Notification(title="Sign Up successful", description=VERIFY_EMAIL_MESSAGE),
            session=_session_from_payload(payload),
            user=extract_user(payload),
        )

    except AuthError as e:
        e.title = "Sign Up Failed"
        raise
    except Exception as e:
        logger.error(f"Error signing up {credentials.email}: {e}", exc_info=True)
        raise toast_error(500, "Sign Up Failed", "Could not reach the authentication service")


@router.post("/login", response_model=AuthResult)
async def login(
    auth_client: AuthClientDep,
    credentials: AuthCredentials = Body(...),
) -> AuthResult:
    """Exchange e-mail and password for a session."""
    try:
        payload = await auth_client.sign_in_with_password(credentials.email, credentials.password)
        logger.info(f"User {credentials.email} logged in")
        return AuthResult(
            notification=Notification(title="Login successful"),
            session=_session_from_payload(payload),
            user=extract_user(payload),
        )

    except AuthError as e:
        e.title = "Login Failed"
        raise
    except Exception as e:
        logger.error(f"Error logging in {credentials.email}: {e}", exc_info=True)
        raise toast_error(500, "Login Failed", "Could not reach the authentication service")


@router.post("/logout", response_model=ActionResult)
async def logout(
    auth_client: AuthClientDep,
    token: AccessTokenDep,
) -> ActionResult:
    """Revoke the current session."""
    try:
        await auth_client.sign_out(token)
        return ActionResult(notification=Notification(title="Logged out successfully"))

    except AuthError as e:
        e.title = "Error logging out"
        raise
    except Exception as e:
        logger.error(f"Error logging out: {e}", exc_info=True)
        raise toast_error(500, "Error logging out", "Could not reach the authentication service")


@router.get("/session", response_model=SessionResponse)
async def get_session(
    user: CurrentUserDep,
    auth_client: AuthClientDep,
    token: AccessTokenDep,
) -> SessionResponse:
    """
    Current session: the identity carried by the token plus the user record
    held by the auth API.
    """
    try:
        details = await auth_client.get_user(token)
        return SessionResponse(
            user=UserOut(id=user.id, email=user.email, role=user.role, is_admin=user.is_admin),
            details=details,
        )

    except (AuthError, HTTPException):
        raise
    except Exception as e:
        logger.error(f"Error retrieving session for {user.id}: {e}", exc_info=True)
        raise toast_error(500, "Error", "Could not reach the authentication service")
