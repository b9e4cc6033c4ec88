"""
Faculty Rating API package initialization.

This package contains the FastAPI router modules of the Faculty Rating backend:
- auth: sign up, login, logout and the current session
- academics: years, semesters, sections, subjects and registration numbers
- students: registration, the student dashboard and criteria ratings
- faculty: faculty listing and administrator CRUD
- ratings: star ratings and the faculty_stats view
- admin: analytics dashboard, faculty detail and the add-faculty form
"""

from fastapi import APIRouter

# Import router modules
from faculty_rating.api.auth import router as auth_router
from faculty_rating.api.academics import router as academics_router
from faculty_rating.api.students import router as students_router
from faculty_rating.api.faculty import router as faculty_router
from faculty_rating.api.ratings import router as ratings_router
from faculty_rating.api.admin import router as admin_router

# Create main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(academics_router, prefix="/academics", tags=["academics"])
api_router.include_router(students_router, prefix="/students", tags=["students"])
api_router.include_router(faculty_router, prefix="/faculty", tags=["faculty"])
api_router.include_router(ratings_router, prefix="/ratings", tags=["ratings"])
api_router.include_router(admin_router, prefix="/admin", tags=["admin"])

# Individual routers, for apps that mount a subset
__all__ = [
    "api_router",
    "auth_router",
    "academics_router",
    "students_router",
    "faculty_router",
    "ratings_router",
    "admin_router",
]
