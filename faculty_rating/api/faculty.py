"""
FastAPI router module for faculty management.

    GET    /faculty                 any logged-in user, newest first
    GET    /faculty/{faculty_id}    any logged-in user
    POST   /faculty                 administrators
    PUT    /faculty/{faculty_id}    administrators, partial update
    DELETE /faculty/{faculty_id}    administrators
"""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Body, HTTPException

from faculty_rating.core.dependencies import AdminUserDep, CurrentUserDep, DBSessionDep
from faculty_rating.core.errors import ServiceError, toast_error
from faculty_rating.models.schemas import (
    ActionResult,
    FacultyCreate,
    FacultyOut,
    FacultyResult,
    FacultyUpdate,
    Notification,
)
from faculty_rating.services import faculty as faculty_service


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[FacultyOut])
async def list_faculty(db: DBSessionDep, user: CurrentUserDep) -> List[FacultyOut]:
    try:
        return await faculty_service.list_faculty(db)
    except Exception as e:
        logger.error(f"Error fetching faculty: {e}", exc_info=True)
        raise toast_error(500, "Error fetching faculty", "Failed to load faculty")


@router.get("/{faculty_id}", response_model=FacultyOut)
async def get_faculty(faculty_id: UUID, db: DBSessionDep, user: CurrentUserDep) -> FacultyOut:
    try:
        return await faculty_service.get_faculty(db, faculty_id)

    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(f"Error fetching faculty {faculty_id}: {e}", exc_info=True)
        raise toast_error(500, "Error fetching faculty", "Failed to load faculty")


@router.post("", response_model=FacultyResult, status_code=201)
async def create_faculty(
    db: DBSessionDep,
    admin: AdminUserDep,
    payload: FacultyCreate = Body(...),
) -> FacultyResult:
    try:
        faculty = await faculty_service.create_faculty(db, payload)
        return FacultyResult(
            notification=Notification(title="Faculty added successfully"),
            faculty=faculty,
        )

    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(f"Error adding faculty {payload.email}: {e}", exc_info=True)
        raise toast_error(500, "Error adding faculty", "An unexpected error occurred")


@router.put("/{faculty_id}", response_model=FacultyResult)
async def update_faculty(
    faculty_id: UUID,
    db: DBSessionDep,
    admin: AdminUserDep,
    payload: FacultyUpdate = Body(...),
) -> FacultyResult:
    try:
        faculty = await faculty_service.update_faculty(db, faculty_id, payload)
        return FacultyResult(
            notification=Notification(title="Faculty updated successfully"),
            faculty=faculty,
        )

    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(f"Error updating faculty {faculty_id}: {e}", exc_info=True)
        raise toast_error(500, "Error updating faculty", "An unexpected error occurred")


@router.delete("/{faculty_id}", response_model=ActionResult)
async def delete_faculty(faculty_id: UUID, db: DBSessionDep, admin: AdminUserDep) -> ActionResult:
    try:
        await faculty_service.delete_faculty(db, faculty_id)
        return ActionResult(notification=Notification(title="Faculty deleted successfully"))

    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(f"Error deleting faculty {faculty_id}: {e}", exc_info=True)
        raise toast_error(500, "Error deleting faculty", "An unexpected error occurred")
