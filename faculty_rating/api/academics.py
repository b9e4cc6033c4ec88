"""
FastAPI router module for the academic structure lookups.

Public endpoints feeding the cascading dropdowns of the registration form:

    GET /academics/years
    GET /academics/years/{year_id}/semesters
    GET /academics/semesters/{semester_id}/sections
    GET /academics/sections/{section_id}/subjects
    GET /academics/subjects
    GET /academics/registration-numbers?search=
"""

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Query

from faculty_rating.core.dependencies import DBSessionDep
from faculty_rating.core.errors import toast_error
from faculty_rating.models.schemas import (
    RegistrationNumberOut,
    SectionOut,
    SemesterOut,
    SubjectOut,
    YearOut,
)
from faculty_rating.services import academics


logger = logging.getLogger(__name__)

LOOKUP_ERROR_TITLE = "Error loading options"

router = APIRouter()


@router.get("/years", response_model=List[YearOut])
async def list_years(db: DBSessionDep) -> List[YearOut]:
    try:
        return await academics.list_years(db)
    except Exception as e:
        logger.error(f"Error listing years: {e}", exc_info=True)
        raise toast_error(500, LOOKUP_ERROR_TITLE, "Failed to load years")


@router.get("/years/{year_id}/semesters", response_model=List[SemesterOut])
async def list_semesters(year_id: UUID, db: DBSessionDep) -> List[SemesterOut]:
    try:
        return await academics.list_semesters(db, year_id)
    except Exception as e:
        logger.error(f"Error listing semesters of year {year_id}: {e}", exc_info=True)
        raise toast_error(500, LOOKUP_ERROR_TITLE, "Failed to load semesters")


@router.get("/semesters/{semester_id}/sections", response_model=List[SectionOut])
async def list_sections(semester_id: UUID, db: DBSessionDep) -> List[SectionOut]:
    try:
        return await academics.list_sections(db, semester_id)
    except Exception as e:
        logger.error(f"Error listing sections of semester {semester_id}: {e}", exc_info=True)
        raise toast_error(500, LOOKUP_ERROR_TITLE, "Failed to load sections")


@router.get("/sections/{section_id}/subjects", response_model=List[SubjectOut])
async def list_section_subjects(section_id: UUID, db: DBSessionDep) -> List[SubjectOut]:
    try:
        return await academics.list_subjects(db, section_id)
    except Exception as e:
        logger.error(f"Error listing subjects of section {section_id}: {e}", exc_info=True)
        raise toast_error(500, LOOKUP_ERROR_TITLE, "Failed to load subjects")


@router.get("/subjects", response_model=List[SubjectOut])
async def list_subjects(db: DBSessionDep) -> List[SubjectOut]:
    try:
        return await academics.list_subjects(db)
    except Exception as e:
        logger.error(f"Error listing subjects: {e}", exc_info=True)
        raise toast_error(500, LOOKUP_ERROR_TITLE, "Failed to load subjects")


@router.get("/registration-numbers", response_model=List[RegistrationNumberOut])
async def list_registration_numbers(
    db: DBSessionDep,
    search: Optional[str] = Query(default=None, max_length=64, description="Case-insensitive substring"),
) -> List[RegistrationNumberOut]:
    """Registration numbers still available for sign-up."""
    try:
        return await academics.list_unused_registration_numbers(db, search)
    except Exception as e:
        logger.error(f"Error listing registration numbers: {e}", exc_info=True)
        raise toast_error(500, LOOKUP_ERROR_TITLE, "Failed to load registration numbers")
