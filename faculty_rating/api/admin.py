"""
FastAPI router module for the administrator dashboard.

All endpoints require the administrator role.

    GET  /admin/dashboard                      KPIs, faculty, trends, departments
    GET  /admin/dashboard/charts               Plotly figures of the dashboard
    GET  /admin/faculty/{faculty_id}           faculty performance detail
    GET  /admin/faculty/{faculty_id}/charts    Plotly figures of the detail view
    POST /admin/faculty                        add faculty with an assignment
    GET  /admin/form-options                   dropdown data for the form above
"""

import logging
from typing import Any, Dict
from uuid import UUID

from fastapi import APIRouter, Body, HTTPException

from faculty_rating.core.dependencies import AdminUserDep, DBSessionDep
from faculty_rating.core.errors import ServiceError, toast_error
from faculty_rating.models.schemas import (
    AdminDashboard,
    FacultyDetail,
    FacultyResult,
    FacultyWithAssignmentCreate,
    FormOptions,
    Notification,
)
from faculty_rating.services import academics, analytics, charts
from faculty_rating.services import faculty as faculty_service


logger = logging.getLogger(__name__)

ANALYTICS_ERROR = "Failed to fetch analytics data."

router = APIRouter()


@router.get("/dashboard", response_model=AdminDashboard)
async def dashboard(db: DBSessionDep, admin: AdminUserDep) -> AdminDashboard:
    try:
        return await analytics.get_admin_dashboard(db)
    except Exception as e:
        logger.error(f"Error fetching analytics: {e}", exc_info=True)
        raise toast_error(500, "Error", ANALYTICS_ERROR)


@router.get("/dashboard/charts")
async def dashboard_charts(db: DBSessionDep, admin: AdminUserDep) -> Dict[str, Any]:
    try:
        data = await analytics.get_admin_dashboard(db)
        return charts.admin_dashboard_charts(data)
    except Exception as e:
        logger.error(f"Error building dashboard charts: {e}", exc_info=True)
        raise toast_error(500, "Error", ANALYTICS_ERROR)


@router.get("/faculty/{faculty_id}", response_model=FacultyDetail)
async def faculty_detail(faculty_id: UUID, db: DBSessionDep, admin: AdminUserDep) -> FacultyDetail:
    """Criteria averages, timeline and subject breakdown of one faculty member."""
    try:
        faculty = await faculty_service.get_faculty(db, faculty_id)
        return await analytics.get_faculty_detail(db, faculty)

    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(f"Error fetching faculty details {faculty_id}: {e}", exc_info=True)
        raise toast_error(500, "Error", "Failed to fetch faculty details")


@router.get("/faculty/{faculty_id}/charts")
async def faculty_detail_charts(
    faculty_id: UUID,
    db: DBSessionDep,
    admin: AdminUserDep,
) -> Dict[str, Any]:
    try:
        faculty = await faculty_service.get_faculty(db, faculty_id)
        detail = await analytics.get_faculty_detail(db, faculty)
        return charts.faculty_detail_charts(detail)

    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(f"Error building charts for faculty {faculty_id}: {e}", exc_info=True)
        raise toast_error(500, "Error", "Failed to fetch faculty details")


@router.post("/faculty", response_model=FacultyResult, status_code=201)
async def add_faculty(
    db: DBSessionDep,
    admin: AdminUserDep,
    payload: FacultyWithAssignmentCreate = Body(...),
) -> FacultyResult:
    """Create a faculty member and assign them to a subject in a section."""
    try:
        faculty, assignment = await faculty_service.add_faculty_with_assignment(db, payload)
        return FacultyResult(
            notification=Notification(title="Success", description="Faculty added successfully!"),
            faculty=faculty,
            assignment=assignment,
        )

    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(f"Error adding faculty {payload.email}: {e}", exc_info=True)
        raise toast_error(500, "Error", "Failed to add faculty")


@router.get("/form-options", response_model=FormOptions)
async def form_options(db: DBSessionDep, admin: AdminUserDep) -> FormOptions:
    try:
        return await academics.get_form_options(db)
    except Exception as e:
        logger.error(f"Error fetching form data: {e}", exc_info=True)
        raise toast_error(500, "Error", "Failed to load form options")
