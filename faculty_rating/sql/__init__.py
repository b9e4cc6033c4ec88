"""
SQL Query Module for the Faculty Rating backend.

Provides parameterized ($n placeholder) PostgreSQL queries for:
- Academic lookups and registration numbers (academic_queries)
- Faculty, assignments and student profiles (faculty_queries)
- Criteria ratings, star ratings and the faculty_stats view (rating_queries)

schema.sql alongside holds the reference DDL of the hosted database.

Example usage:
    from faculty_rating.sql import LIST_YEARS_QUERY, get_update_faculty_query

    rows = await conn.fetch(LIST_YEARS_QUERY)
    sql, values = get_update_faculty_query({"name": "Dr. Rao"})
    row = await conn.fetchrow(sql, faculty_id, *values)
"""

# =============================================================================
# ACADEMIC QUERIES - years, semesters, sections, subjects, registration numbers
# =============================================================================

from faculty_rating.sql.academic_queries import (
    LIST_YEARS_QUERY,
    LIST_SEMESTERS_QUERY,
    LIST_SEMESTERS_BY_YEAR_QUERY,
    LIST_SECTIONS_QUERY,
    LIST_SECTIONS_BY_SEMESTER_QUERY,
    LIST_SUBJECTS_QUERY,
    LIST_SUBJECTS_BY_SECTION_QUERY,
    GET_REGISTRATION_NUMBER_QUERY,
    MARK_REGISTRATION_NUMBER_USED_COMMAND,
    get_unused_registration_numbers_query,
)

# =============================================================================
# FACULTY QUERIES - faculty CRUD, assignments, student profiles
# =============================================================================

from faculty_rating.sql.faculty_queries import (
    FACULTY_COLUMNS,
    UPDATABLE_FACULTY_FIELDS,
    LIST_FACULTY_QUERY,
    GET_FACULTY_QUERY,
    INSERT_FACULTY_QUERY,
    DELETE_FACULTY_COMMAND,
    INSERT_ASSIGNMENT_QUERY,
    GET_ASSIGNMENT_CONTEXT_QUERY,
    LIST_SECTION_ASSIGNMENTS_QUERY,
    GET_STUDENT_PROFILE_QUERY,
    INSERT_STUDENT_PROFILE_QUERY,
    COUNT_STUDENTS_QUERY,
    get_update_faculty_query,
)

# =============================================================================
# RATING QUERIES - credential ratings, star ratings, faculty_stats
# =============================================================================

from faculty_rating.sql.rating_queries import (
    UPSERT_CREDENTIAL_RATING_QUERY,
    GET_STUDENT_ASSIGNMENT_RATING_QUERY,
    ALL_CREDENTIAL_RATINGS_QUERY,
    FACULTY_CREDENTIAL_RATINGS_QUERY,
    STUDENT_CREDENTIAL_RATINGS_QUERY,
    COUNT_CREDENTIAL_RATINGS_QUERY,
    COUNT_FACULTY_QUERY,
    INSERT_STAR_RATING_QUERY,
    RECENT_STAR_RATINGS_QUERY,
    FACULTY_STATS_QUERY,
)


__all__ = [
    # Academic
    'LIST_YEARS_QUERY',
    'LIST_SEMESTERS_QUERY',
    'LIST_SEMESTERS_BY_YEAR_QUERY',
    'LIST_SECTIONS_QUERY',
    'LIST_SECTIONS_BY_SEMESTER_QUERY',
    'LIST_SUBJECTS_QUERY',
    'LIST_SUBJECTS_BY_SECTION_QUERY',
    'GET_REGISTRATION_NUMBER_QUERY',
    'MARK_REGISTRATION_NUMBER_USED_COMMAND',
    'get_unused_registration_numbers_query',
    # Faculty
    'FACULTY_COLUMNS',
    'UPDATABLE_FACULTY_FIELDS',
    'LIST_FACULTY_QUERY',
    'GET_FACULTY_QUERY',
    'INSERT_FACULTY_QUERY',
    'DELETE_FACULTY_COMMAND',
    'INSERT_ASSIGNMENT_QUERY',
    'GET_ASSIGNMENT_CONTEXT_QUERY',
    'LIST_SECTION_ASSIGNMENTS_QUERY',
    'GET_STUDENT_PROFILE_QUERY',
    'INSERT_STUDENT_PROFILE_QUERY',
    'COUNT_STUDENTS_QUERY',
    'get_update_faculty_query',
    # Ratings
    'UPSERT_CREDENTIAL_RATING_QUERY',
    'GET_STUDENT_ASSIGNMENT_RATING_QUERY',
    'ALL_CREDENTIAL_RATINGS_QUERY',
    'FACULTY_CREDENTIAL_RATINGS_QUERY',
    'STUDENT_CREDENTIAL_RATINGS_QUERY',
    'COUNT_CREDENTIAL_RATINGS_QUERY',
    'COUNT_FACULTY_QUERY',
    'INSERT_STAR_RATING_QUERY',
    'RECENT_STAR_RATINGS_QUERY',
    'FACULTY_STATS_QUERY',
]
