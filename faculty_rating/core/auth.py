"""
Supabase authentication module.

Two concerns live here:

1. SupabaseAuthClient: a thin async client for the hosted GoTrue REST API
   (sign-up, password sign-in, sign-out, user retrieval) built on httpx.
2. verify_access_token(): local verification of the session access token
   (HS256 JWT signed with the project's JWT secret) using python-jose, so
   that authenticated endpoints do not need a round-trip to the auth API.

GoTrue endpoints used (relative to {SUPABASE_URL}/auth/v1):
    POST /signup                      body {email, password}; ?redirect_to=
    POST /token?grant_type=password   body {email, password}
    POST /logout                      Authorization: Bearer <access token>
    GET  /user                        Authorization: Bearer <access token>

Every request carries the project's anon key in the `apikey` header.
"""

import logging
from typing import Any, Dict, Optional
from uuid import UUID

import httpx
from jose import JWTError, jwt
from pydantic import BaseModel

from faculty_rating.core.config import Settings
from faculty_rating.core.errors import ServiceError


logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"


class AuthError(ServiceError):
    """Error returned by the auth API, or an invalid session token."""

    title = "Authentication failed"

    def __init__(
        self,
        description: str,
        status_code: int = 400,
        title: Optional[str] = None,
    ) -> None:
        super().__init__(description, title=title)
        self.status_code = status_code


class CurrentUser(BaseModel):
    """Identity extracted from a verified access token."""

    id: UUID
    email: Optional[str] = None
    role: Optional[str] = None
    is_admin: bool = False


def _error_message(response: httpx.Response) -> str:
    """Pull the human-readable message out of a GoTrue error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"Auth service returned HTTP {response.status_code}"

    if isinstance(body, dict):
        for key in ("msg", "error_description", "message", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return f"Auth service returned HTTP {response.status_code}"


class SupabaseAuthClient:
    """Async client for the Supabase auth (GoTrue) REST API."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "SupabaseAuthClient":
        return cls(
            base_url=settings.auth_url,
            api_key=settings.supabase_anon_key,
            timeout=settings.auth_timeout_seconds,
        )

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers={"apikey": self.api_key, "Content-Type": "application/json"},
            timeout=self.timeout,
            transport=self._transport,
        )

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, str]] = None,
        access_token: Optional[str] = None,
    ) -> Dict[str, Any]:
        headers = {"Authorization": f"Bearer {access_token}"} if access_token else None
        async with self._client() as client:
            response = await client.request(
                method, path, json=json, params=params, headers=headers
            )

        if response.is_error:
            message = _error_message(response)
            logger.warning(f"Auth API {method} {path} failed ({response.status_code}): {message}")
            raise AuthError(message, status_code=response.status_code)

        if not response.content:
            return {}
        return response.json()

    async def sign_up(
        self, email: str, password: str, redirect_to: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Create a user account.

        Returns the GoTrue payload: the user object itself when e-mail
        confirmation is required, or a session carrying a `user` key when
        it is not.
        """
        params = {"redirect_to": redirect_to} if redirect_to else None
        return await self._request(
            "POST", "/signup", json={"email": email, "password": password}, params=params
        )

    async def sign_in_with_password(self, email: str, password: str) -> Dict[str, Any]:
        """Exchange e-mail and password for a session (access + refresh token)."""
        return await self._request(
            "POST",
            "/token",
            json={"email": email, "password": password},
            params={"grant_type": "password"},
        )

    async def sign_out(self, access_token: str) -> None:
        """Revoke the session behind an access token."""
        await self._request("POST", "/logout", access_token=access_token)

    async def get_user(self, access_token: str) -> Dict[str, Any]:
        """Retrieve the user owning an access token."""
        return await self._request("GET", "/user", access_token=access_token)


def extract_user(payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Return the user object from a sign-up or sign-in payload, if any."""
    if isinstance(payload.get("user"), dict):
        return payload["user"]
    if payload.get("id"):
        return payload
    return None


def verify_access_token(token: str, settings: Settings) -> CurrentUser:
    """
    Verify a Supabase session access token and build the CurrentUser.

    The signature, expiry and audience are checked. A user is an
    administrator when their e-mail is listed in ADMIN_EMAILS or the token's
    app_metadata carries role "admin".

    Raises:
        AuthError: 401 if the token is missing, malformed, expired or forged.
    """
    if not settings.supabase_jwt_secret:
        logger.error("SUPABASE_JWT_SECRET is not configured; rejecting token")
        raise AuthError("Authentication is not configured", status_code=401)

    try:
        claims = jwt.decode(
            token,
            settings.supabase_jwt_secret,
            algorithms=[JWT_ALGORITHM],
            audience=settings.supabase_jwt_audience,
        )
    except JWTError as e:
        logger.info(f"Rejected access token: {e}")
        raise AuthError("Could not validate credentials", status_code=401)

    subject = claims.get("sub")
    if not subject:
        raise AuthError("Could not validate credentials", status_code=401)

    email = claims.get("email")
    app_metadata = claims.get("app_metadata") or {}
    is_admin = settings.is_admin_email(email) or app_metadata.get("role") == "admin"

    try:
        return CurrentUser(
            id=subject,
            email=email,
            role=claims.get("role"),
            is_admin=is_admin,
        )
    except ValueError:
        raise AuthError("Could not validate credentials", status_code=401)
