"""
FastAPI router module for students.

Implements student registration, the student dashboard, the list of faculty
assigned to the student's section, and the eight-criteria rating form:

    POST /students/register
    GET  /students/me                  dashboard (profile, history, stats)
    GET  /students/me/profile
    GET  /students/me/faculty          assignments of the student's section
    GET  /students/me/charts           Plotly figures of the dashboard
    GET  /students/rate/{assignment_id}
    POST /students/ratings             insert or replace a rating

Everything except registration requires a logged-in student with a profile.
"""

import logging
from typing import Any, Dict, List
from uuid import UUID

from fastapi import APIRouter, Body, HTTPException

from faculty_rating.api.auth import VERIFY_EMAIL_MESSAGE
from faculty_rating.core.dependencies import (
    AuthClientDep,
    CurrentUserDep,
    DBSessionDep,
    SettingsDep,
)
from faculty_rating.core.errors import ServiceError, toast_error
from faculty_rating.models.schemas import (
    AssignedFaculty,
    CredentialRatingResult,
    CredentialRatingSubmit,
    Notification,
    RatingContext,
    RegistrationResult,
    StudentDashboard,
    StudentProfileOut,
    StudentRegistration,
)
from faculty_rating.services import analytics, charts, ratings, students


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=RegistrationResult, status_code=201)
async def register(
    db: DBSessionDep,
    auth_client: AuthClientDep,
    settings: SettingsDep,
    payload: StudentRegistration = Body(...),
) -> RegistrationResult:
    """
    Register a student account, profile and registration number claim.

    Returns "Registration Successful!" with the created profile.
    """
    try:
        profile = await students.register_student(db, auth_client, settings, payload)
        return RegistrationResult(
            notification=Notification(
                title="Registration Successful!",
                description=VERIFY_EMAIL_MESSAGE,
            ),
            profile=profile,
        )

    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(f"Error registering student {payload.registration_number}: {e}", exc_info=True)
        raise toast_error(500, students.REGISTRATION_FAILED, "An unexpected error occurred")


@router.get("/me", response_model=StudentDashboard)
async def my_dashboard(db: DBSessionDep, user: CurrentUserDep) -> StudentDashboard:
    """Profile, rating history, per-faculty stats and distribution."""
    try:
        profile = await students.get_student_profile(db, user.id)
        return await analytics.get_student_dashboard(db, profile)

    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(f"Error building dashboard for {user.id}: {e}", exc_info=True)
        raise toast_error(500, "Error", "Failed to fetch rating history.")


@router.get("/me/profile", response_model=StudentProfileOut)
async def my_profile(db: DBSessionDep, user: CurrentUserDep) -> StudentProfileOut:
    try:
        return await students.get_student_profile(db, user.id)

    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(f"Error fetching profile for {user.id}: {e}", exc_info=True)
        raise toast_error(500, "Error", "An unexpected error occurred while fetching data.")


@router.get("/me/faculty", response_model=List[AssignedFaculty])
async def my_faculty(db: DBSessionDep, user: CurrentUserDep) -> List[AssignedFaculty]:
    """Faculty assigned to the student's section with their rating status."""
    try:
        profile = await students.get_student_profile(db, user.id)
        return await ratings.list_assigned_faculty(db, profile)

    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(f"Error listing assigned faculty for {user.id}: {e}", exc_info=True)
        raise toast_error(500, "Error fetching faculty", "Failed to load assigned faculty")


@router.get("/me/charts")
async def my_charts(db: DBSessionDep, user: CurrentUserDep) -> Dict[str, Any]:
    """Plotly figures for the student dashboard."""
    try:
        profile = await students.get_student_profile(db, user.id)
        dashboard = await analytics.get_student_dashboard(db, profile)
        return charts.student_dashboard_charts(dashboard)

    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(f"Error building charts for {user.id}: {e}", exc_info=True)
        raise toast_error(500, "Error", "Failed to build dashboard charts")


@router.get("/rate/{assignment_id}", response_model=RatingContext)
async def rating_form(
    assignment_id: UUID,
    db: DBSessionDep,
    user: CurrentUserDep,
) -> RatingContext:
    """Faculty and subject of the assignment with the student's current scores."""
    try:
        profile = await students.get_student_profile(db, user.id)
        return await ratings.get_rating_context(db, profile, assignment_id)

    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(f"Error loading rating form {assignment_id}: {e}", exc_info=True)
        raise toast_error(500, "Error", "Failed to load the rating form")


@router.post("/ratings", response_model=CredentialRatingResult)
async def submit_rating(
    db: DBSessionDep,
    user: CurrentUserDep,
    payload: CredentialRatingSubmit = Body(...),
) -> CredentialRatingResult:
    """Insert or replace the student's rating of a faculty assignment."""
    try:
        profile = await students.get_student_profile(db, user.id)
        rating = await ratings.submit_credential_rating(db, profile, payload)
        return CredentialRatingResult(
            notification=Notification(title="Rating submitted successfully"),
            rating=rating,
        )

    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(
            f"Error submitting rating for assignment {payload.faculty_assignment_id}: {e}",
            exc_info=True,
        )
        raise toast_error(500, "Error submitting rating", "An unexpected error occurred")
