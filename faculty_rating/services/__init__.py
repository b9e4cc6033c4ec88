"""
Faculty Rating Services Module

This module contains the business logic of the Faculty Rating backend. Each
service is stateless: functions take the request-scoped asyncpg connection
(and, where needed, the auth client or settings) as arguments, which keeps
them easy to test with mocks.

Services:
- academics: years, semesters, sections, subjects, registration numbers
- students: student registration and profiles
- faculty: faculty CRUD and the admin "add faculty" flow
- ratings: criteria ratings, star ratings and faculty_stats
- analytics: pandas aggregation behind the admin and student dashboards
- charts: Plotly figures for the dashboards

All services are consumed by the API layer (faculty_rating/api/).
"""

# =============================================================================
# Academic Lookup Exports
# =============================================================================

from faculty_rating.services.academics import (
    list_years,
    list_semesters,
    list_sections,
    list_subjects,
    list_unused_registration_numbers,
    get_form_options,
)

# =============================================================================
# Student Registration Exports
# =============================================================================

from faculty_rating.services.students import (
    register_student,
    validate_registration,
    get_student_profile,
)

# =============================================================================
# Faculty Management Exports
# =============================================================================

from faculty_rating.services.faculty import (
    list_faculty,
    get_faculty,
    create_faculty,
    update_faculty,
    delete_faculty,
    add_faculty_with_assignment,
)

# =============================================================================
# Rating Exports
# =============================================================================

from faculty_rating.services.ratings import (
    list_assigned_faculty,
    get_rating_context,
    submit_credential_rating,
    submit_star_rating,
    list_recent_star_ratings,
    list_faculty_stats,
)

# =============================================================================
# Analytics and Chart Exports
# =============================================================================

from faculty_rating.services.analytics import (
    get_admin_dashboard,
    get_faculty_detail,
    get_student_dashboard,
    build_admin_dashboard,
    build_faculty_detail,
    build_student_dashboard,
)

from faculty_rating.services.charts import (
    admin_dashboard_charts,
    faculty_detail_charts,
    student_dashboard_charts,
)


__all__ = [
    # Academics
    'list_years',
    'list_semesters',
    'list_sections',
    'list_subjects',
    'list_unused_registration_numbers',
    'get_form_options',
    # Students
    'register_student',
    'validate_registration',
    'get_student_profile',
    # Faculty
    'list_faculty',
    'get_faculty',
    'create_faculty',
    'update_faculty',
    'delete_faculty',
    'add_faculty_with_assignment',
    # Ratings
    'list_assigned_faculty',
    'get_rating_context',
    'submit_credential_rating',
    'submit_star_rating',
    'list_recent_star_ratings',
    'list_faculty_stats',
    # Analytics
    'get_admin_dashboard',
    'get_faculty_detail',
    'get_student_dashboard',
    'build_admin_dashboard',
    'build_faculty_detail',
    'build_student_dashboard',
    # Charts
    'admin_dashboard_charts',
    'faculty_detail_charts',
    'student_dashboard_charts',
]
