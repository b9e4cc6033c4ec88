"""
Tests for authentication: access token verification, the auth API client
and the admin role.

The auth API is replaced by an httpx.MockTransport; tokens are signed
locally with the test JWT secret.
"""

import json
from datetime import timedelta
from uuid import uuid4

import httpx
import pytest

from faculty_rating.core.auth import AuthError, SupabaseAuthClient, extract_user, verify_access_token
from faculty_rating.core.database import affected_rows
from faculty_rating.tests.conftest import ADMIN_EMAIL, make_access_token


def auth_client(handler) -> SupabaseAuthClient:
    return SupabaseAuthClient(
        base_url="http://supabase.test/auth/v1",
        api_key="test-anon-key",
        transport=httpx.MockTransport(handler),
    )


class TestVerifyAccessToken:

    def test_valid_token(self, test_settings) -> None:
        user_id = uuid4()
        token = make_access_token(user_id, "student@university.edu")

        user = verify_access_token(token, test_settings)

        assert user.id == user_id
        assert user.email == "student@university.edu"
        assert user.role == "authenticated"
        assert user.is_admin is False

    def test_admin_by_email(self, test_settings) -> None:
        token = make_access_token(uuid4(), ADMIN_EMAIL.upper())
        assert verify_access_token(token, test_settings).is_admin is True

    def test_admin_by_app_metadata(self, test_settings) -> None:
        token = make_access_token(uuid4(), "dean@university.edu", app_metadata={"role": "admin"})
        assert verify_access_token(token, test_settings).is_admin is True

    def test_expired_token(self, test_settings) -> None:
        token = make_access_token(uuid4(), "student@university.edu", expires_in=timedelta(minutes=-5))

        with pytest.raises(AuthError) as exc_info:
            verify_access_token(token, test_settings)
        assert exc_info.value.status_code == 401

    def test_token_signed_with_other_secret(self, test_settings) -> None:
        token = make_access_token(uuid4(), "student@university.edu", secret="another-secret-value")

        with pytest.raises(AuthError) as exc_info:
            verify_access_token(token, test_settings)
        assert exc_info.value.description == "Could not validate credentials"

    def test_missing_secret_rejects_everything(self, test_settings) -> None:
        settings = test_settings.model_copy(update={"supabase_jwt_secret": ""})
        token = make_access_token(uuid4(), "student@university.edu")

        with pytest.raises(AuthError) as exc_info:
            verify_access_token(token, settings)
        assert exc_info.value.status_code == 401


class TestExtractUser:

    def test_user_payload(self) -> None:
        payload = {"id": "abc", "email": "a@b.c"}
        assert extract_user(payload) == payload

    def test_session_payload(self) -> None:
        assert extract_user({"access_token": "t", "user": {"id": "abc"}}) == {"id": "abc"}

    def test_no_user(self) -> None:
        assert extract_user({}) is None


@pytest.mark.asyncio
class TestSupabaseAuthClient:

    async def test_sign_up_sends_redirect_and_api_key(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen['path'] = request.url.path
            seen['redirect_to'] = request.url.params.get('redirect_to')
            seen['apikey'] = request.headers.get('apikey')
            seen['body'] = json.loads(request.content)
            return httpx.Response(200, json={"id": "user-1", "email": "a@university.edu"})

        result = await auth_client(handler).sign_up(
            "a@university.edu", "secret123", redirect_to="http://localhost:8080/"
        )

        assert result["id"] == "user-1"
        assert seen == {
            'path': "/auth/v1/signup",
            'redirect_to': "http://localhost:8080/",
            'apikey': "test-anon-key",
            'body': {"email": "a@university.edu", "password": "secret123"},
        }

    async def test_sign_in_uses_password_grant(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/auth/v1/token"
            assert request.url.params.get('grant_type') == "password"
            return httpx.Response(200, json={"access_token": "tok", "user": {"id": "user-1"}})

        result = await auth_client(handler).sign_in_with_password("a@university.edu", "pw")
        assert result["access_token"] == "tok"

    async def test_error_message_is_surfaced(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"error_description": "Invalid login credentials"})

        with pytest.raises(AuthError) as exc_info:
            await auth_client(handler).sign_in_with_password("a@university.edu", "wrong")

        assert exc_info.value.description == "Invalid login credentials"
        assert exc_info.value.status_code == 400

    async def test_sign_out_sends_bearer_token(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.headers.get('authorization') == "Bearer tok"
            return httpx.Response(204)

        assert await auth_client(handler).sign_out("tok") is None


class TestAffectedRows:

    def test_parses_command_status(self) -> None:
        assert affected_rows("UPDATE 3") == 3
        assert affected_rows("DELETE 0") == 0
        assert affected_rows("INSERT 0 1") == 1

    def test_unparseable_status(self) -> None:
        assert affected_rows("") == 0
        assert affected_rows(None) == 0
