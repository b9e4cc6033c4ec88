"""
Student registration and profile service.

Registration ties three things together: an account on the auth API, a row
in student_profiles, and a registration number taken from the pool of
unused numbers. The account is created first (the auth API is not part of
the database transaction); the profile insert and the claim on the
registration number then commit together or not at all.

Key Functions:
- validate_registration: every field present ("Please fill in all fields")
- register_student: full registration flow
- get_student_profile: profile of the logged-in user with year, semester
  and section names
"""

import logging
from typing import Any, Dict
from uuid import UUID

from asyncpg import Connection
from pydantic import EmailStr, TypeAdapter, ValidationError

from faculty_rating.core.auth import AuthError, SupabaseAuthClient, extract_user
from faculty_rating.core.config import Settings
from faculty_rating.core.database import affected_rows
from faculty_rating.core.errors import (
    INTEGRITY_ERRORS,
    ConflictError,
    NotFoundError,
    ServiceError,
    ValidationFailedError,
    from_database_error,
)
from faculty_rating.models.schemas import StudentProfileOut, StudentRegistration
from faculty_rating.sql.academic_queries import (
    GET_REGISTRATION_NUMBER_QUERY,
    MARK_REGISTRATION_NUMBER_USED_COMMAND,
)
from faculty_rating.sql.faculty_queries import (
    GET_STUDENT_PROFILE_QUERY,
    INSERT_STUDENT_PROFILE_QUERY,
)


logger = logging.getLogger(__name__)

REGISTRATION_FAILED = "Registration Failed"
MISSING_FIELDS_MESSAGE = "Please fill in all fields"
INVALID_EMAIL_MESSAGE = "Please enter a valid email address"
NO_PROFILE_MESSAGE = "No student profile found. Please complete registration."
STUDENT_DASHBOARD_PATH = "/student-dashboard"

REQUIRED_FIELDS = (
    "name",
    "email",
    "password",
    "registration_number",
    "year_id",
    "semester_id",
    "section_id",
)

_email_adapter = TypeAdapter(EmailStr)


def validate_registration(payload: StudentRegistration) -> None:
    """Raise ValidationFailedError unless every field is filled in and the e-mail is well formed."""
    for field_name in REQUIRED_FIELDS:
        value = getattr(payload, field_name)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationFailedError(MISSING_FIELDS_MESSAGE, title="Error")
    try:
        _email_adapter.validate_python(payload.email)
    except ValidationError:
        raise ValidationFailedError(INVALID_EMAIL_MESSAGE, title="Error") from None


def _profile_from_row(row: Any) -> StudentProfileOut:
    data: Dict[str, Any] = dict(row)
    return StudentProfileOut(
        id=data['id'],
        user_id=data['user_id'],
        name=data['name'],
        registration_number=data['registration_number'],
        year_id=data['year_id'],
        semester_id=data['semester_id'],
        section_id=data['section_id'],
        year_name=data.get('year_name'),
        semester_name=data.get('semester_name'),
        section_name=data.get('section_name'),
        created_at=data.get('created_at'),
    )


async def register_student(
    conn: Connection,
    auth_client: SupabaseAuthClient,
    settings: Settings,
    payload: StudentRegistration,
) -> StudentProfileOut:
    """
    Register a student.

    Steps:
        1. Every field must be filled in.
        2. The registration number must exist and be unused.
        3. Create the account through the auth API; the confirmation e-mail
           redirects to the student dashboard.
        4. In one transaction, insert the profile and mark the number used.
           If another registration claimed the number in the meantime the
           transaction is rolled back.

    Returns:
        The created StudentProfileOut.

    Raises:
        ValidationFailedError: missing fields or unknown registration number.
        ConflictError: registration number already used.
        AuthError: the auth API refused the sign-up.
    """
    validate_registration(payload)

    number = await conn.fetchrow(GET_REGISTRATION_NUMBER_QUERY, payload.registration_number)
    if number is None:
        raise ValidationFailedError(
            f"Registration number {payload.registration_number} is not recognised",
            title=REGISTRATION_FAILED,
        )
    if number['is_used']:
        raise ConflictError(
            f"Registration number {payload.registration_number} has already been used",
            title=REGISTRATION_FAILED,
        )

    try:
        signup = await auth_client.sign_up(
            payload.email,
            payload.password,
            redirect_to=f"{settings.site_url.rstrip('/')}{STUDENT_DASHBOARD_PATH}",
        )
    except AuthError as e:
        e.title = REGISTRATION_FAILED
        raise

    user = extract_user(signup)
    if not user or not user.get("id"):
        raise ServiceError("Sign up did not return a user account", title=REGISTRATION_FAILED)

    try:
        async with conn.transaction():
            row = await conn.fetchrow(
                INSERT_STUDENT_PROFILE_QUERY,
                UUID(str(user["id"])),
                payload.name.strip(),
                payload.registration_number,
                payload.year_id,
                payload.semester_id,
                payload.section_id,
            )
            status = await conn.execute(
                MARK_REGISTRATION_NUMBER_USED_COMMAND, payload.registration_number
            )
            if affected_rows(status) == 0:
                raise ConflictError(
                    f"Registration number {payload.registration_number} has already been used",
                    title=REGISTRATION_FAILED,
                )
    except INTEGRITY_ERRORS as e:
        logger.error(f"Failed to store student profile for {payload.email}: {e}", exc_info=True)
        raise from_database_error(e, REGISTRATION_FAILED)

    logger.info(
        f"Registered student {payload.registration_number} (user {user['id']})"
    )
    return _profile_from_row(row)


async def get_student_profile(conn: Connection, user_id: UUID) -> StudentProfileOut:
    """
    Profile of the given auth user, with year, semester and section names.

    Raises:
        NotFoundError: the user has not completed registration.
    """
    row = await conn.fetchrow(GET_STUDENT_PROFILE_QUERY, user_id)
    if row is None:
        raise NotFoundError(NO_PROFILE_MESSAGE, title="Profile not found")
    return _profile_from_row(row)
