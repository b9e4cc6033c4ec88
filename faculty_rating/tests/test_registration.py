"""
Tests for student registration and profiles.

Verifies the registration flow: field validation, the registration number
checks, the auth sign-up, and the transactional profile insert plus claim
on the registration number.
"""

from typing import Any, Dict
from unittest.mock import AsyncMock
from uuid import uuid4

import asyncpg
import pytest

from faculty_rating.core.auth import AuthError
from faculty_rating.core.errors import ConflictError, NotFoundError, ServiceError, ValidationFailedError
from faculty_rating.models.schemas import StudentRegistration
from faculty_rating.services.students import (
    INVALID_EMAIL_MESSAGE,
    MISSING_FIELDS_MESSAGE,
    REGISTRATION_FAILED,
    get_student_profile,
    register_student,
    validate_registration,
)
from faculty_rating.sql.academic_queries import MARK_REGISTRATION_NUMBER_USED_COMMAND
from faculty_rating.tests.conftest import SECTION_ID, SEMESTER_ID, STUDENT_USER_ID, YEAR_ID, utc


pytestmark = pytest.mark.asyncio


def registration(**overrides: Any) -> StudentRegistration:
    data: Dict[str, Any] = {
        "name": "Asha Rao",
        "email": "asha@university.edu",
        "password": "secret123",
        "registration_number": "21CS001",
        "year_id": YEAR_ID,
        "semester_id": SEMESTER_ID,
        "section_id": SECTION_ID,
    }
    data.update(overrides)
    return StudentRegistration(**data)


def number_row(is_used: bool = False) -> Dict[str, Any]:
    return {"id": uuid4(), "registration_number": "21CS001", "is_used": is_used}


def inserted_profile_row() -> Dict[str, Any]:
    return {
        "id": uuid4(),
        "user_id": STUDENT_USER_ID,
        "name": "Asha Rao",
        "registration_number": "21CS001",
        "year_id": YEAR_ID,
        "semester_id": SEMESTER_ID,
        "section_id": SECTION_ID,
        "created_at": utc(2024, 1, 1),
    }


@pytest.fixture
def signup_client() -> AsyncMock:
    client = AsyncMock()
    client.sign_up = AsyncMock(return_value={"id": str(STUDENT_USER_ID), "email": "asha@university.edu"})
    return client


class TestValidateRegistration:

    async def test_complete_form_passes(self) -> None:
        validate_registration(registration())

    @pytest.mark.parametrize('field', ["name", "email", "password", "registration_number"])
    async def test_blank_text_field(self, field: str) -> None:
        with pytest.raises(ValidationFailedError) as exc_info:
            validate_registration(registration(**{field: "   "}))
        assert exc_info.value.description == MISSING_FIELDS_MESSAGE

    async def test_missing_section(self) -> None:
        with pytest.raises(ValidationFailedError):
            validate_registration(registration(section_id=None))

    @pytest.mark.parametrize('email', ["asha", "asha@", "asha@university", "asha university.edu"])
    async def test_malformed_email(self, email: str) -> None:
        with pytest.raises(ValidationFailedError) as exc_info:
            validate_registration(registration(email=email))
        assert exc_info.value.description == INVALID_EMAIL_MESSAGE

    async def test_blank_fields_reported_before_email_format(self) -> None:
        with pytest.raises(ValidationFailedError) as exc_info:
            validate_registration(registration(email="asha", name=""))
        assert exc_info.value.description == MISSING_FIELDS_MESSAGE

    async def test_malformed_email_never_reaches_database(self, mock_conn, signup_client, test_settings) -> None:
        with pytest.raises(ValidationFailedError):
            await register_student(mock_conn, signup_client, test_settings, registration(email="asha@"))
        mock_conn.fetchrow.assert_not_awaited()
        signup_client.sign_up.assert_not_awaited()


class TestRegisterStudent:

    async def test_successful_registration(self, mock_conn, signup_client, test_settings) -> None:
        mock_conn.fetchrow.side_effect = [number_row(), inserted_profile_row()]
        mock_conn.execute.return_value = "UPDATE 1"

        profile = await register_student(mock_conn, signup_client, test_settings, registration())

        assert profile.user_id == STUDENT_USER_ID
        assert profile.section_id == SECTION_ID

        signup_client.sign_up.assert_awaited_once_with(
            "asha@university.edu",
            "secret123",
            redirect_to="http://localhost:8080/student-dashboard",
        )
        mock_conn.transaction.assert_called_once()
        mock_conn.execute.assert_awaited_once_with(MARK_REGISTRATION_NUMBER_USED_COMMAND, "21CS001")

        insert_args = mock_conn.fetchrow.await_args_list[1].args
        assert insert_args[1] == STUDENT_USER_ID
        assert insert_args[2] == "Asha Rao"

    async def test_unknown_registration_number(self, mock_conn, signup_client, test_settings) -> None:
        mock_conn.fetchrow.return_value = None

        with pytest.raises(ValidationFailedError) as exc_info:
            await register_student(mock_conn, signup_client, test_settings, registration())

        assert exc_info.value.title == REGISTRATION_FAILED
        signup_client.sign_up.assert_not_awaited()

    async def test_used_registration_number(self, mock_conn, signup_client, test_settings) -> None:
        mock_conn.fetchrow.return_value = number_row(is_used=True)

        with pytest.raises(ConflictError):
            await register_student(mock_conn, signup_client, test_settings, registration())
        signup_client.sign_up.assert_not_awaited()

    async def test_auth_rejection_keeps_message(self, mock_conn, signup_client, test_settings) -> None:
        mock_conn.fetchrow.return_value = number_row()
        signup_client.sign_up.side_effect = AuthError("User already registered", status_code=422)

        with pytest.raises(AuthError) as exc_info:
            await register_student(mock_conn, signup_client, test_settings, registration())

        assert exc_info.value.title == REGISTRATION_FAILED
        assert exc_info.value.description == "User already registered"
        assert exc_info.value.status_code == 422
        mock_conn.transaction.assert_not_called()

    async def test_signup_without_user(self, mock_conn, signup_client, test_settings) -> None:
        mock_conn.fetchrow.return_value = number_row()
        signup_client.sign_up.return_value = {}

        with pytest.raises(ServiceError):
            await register_student(mock_conn, signup_client, test_settings, registration())
        mock_conn.transaction.assert_not_called()

    async def test_number_claimed_concurrently(self, mock_conn, signup_client, test_settings) -> None:
        mock_conn.fetchrow.side_effect = [number_row(), inserted_profile_row()]
        mock_conn.execute.return_value = "UPDATE 0"

        with pytest.raises(ConflictError):
            await register_student(mock_conn, signup_client, test_settings, registration())

        # The transaction context saw the exception and rolls back
        exit_args = mock_conn.transaction.return_value.__aexit__.await_args.args
        assert exit_args[0] is ConflictError

    async def test_duplicate_profile(self, mock_conn, signup_client, test_settings) -> None:
        mock_conn.fetchrow.side_effect = [
            number_row(),
            asyncpg.UniqueViolationError("duplicate key value violates unique constraint"),
        ]

        with pytest.raises(ConflictError) as exc_info:
            await register_student(mock_conn, signup_client, test_settings, registration())
        assert exc_info.value.status_code == 409

    async def test_incomplete_form_never_reaches_database(
        self, mock_conn, signup_client, test_settings
    ) -> None:
        with pytest.raises(ValidationFailedError):
            await register_student(mock_conn, signup_client, test_settings, registration(name=""))
        mock_conn.fetchrow.assert_not_awaited()


class TestGetStudentProfile:

    async def test_profile_found(self, mock_conn, student_profile_row) -> None:
        mock_conn.fetchrow.return_value = student_profile_row

        profile = await get_student_profile(mock_conn, STUDENT_USER_ID)

        assert profile.section_name == "A"
        assert profile.year_name == "2024"

    async def test_no_profile(self, mock_conn) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            await get_student_profile(mock_conn, STUDENT_USER_ID)
        assert exc_info.value.status_code == 404
