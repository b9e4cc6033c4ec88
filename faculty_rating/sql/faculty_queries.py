"""
Faculty SQL query module.

Queries over the faculty and faculty_assignments tables, plus the student
profile lookups that decide which assignments a student may see and rate.
"""

from typing import Any, Dict, List, Tuple


FACULTY_COLUMNS = "id, name, email, department, position, created_at"

# Columns a partial update may touch, in statement order
UPDATABLE_FACULTY_FIELDS: List[str] = ["name", "email", "department", "position"]


# =============================================================================
# FACULTY CRUD
# =============================================================================

LIST_FACULTY_QUERY = f"""
    SELECT {FACULTY_COLUMNS}
    FROM faculty
    ORDER BY created_at DESC
"""

GET_FACULTY_QUERY = f"""
    SELECT {FACULTY_COLUMNS}
    FROM faculty
    WHERE id = $1
"""

INSERT_FACULTY_QUERY = f"""
    INSERT INTO faculty (name, email, department, position)
    VALUES ($1, $2, $3, $4)
    RETURNING {FACULTY_COLUMNS}
"""

DELETE_FACULTY_COMMAND = """
    DELETE FROM faculty
    WHERE id = $1
"""


def get_update_faculty_query(changes: Dict[str, Any]) -> Tuple[str, list]:
    """
    Build a partial UPDATE for the faculty row with id $1.

    Only keys listed in UPDATABLE_FACULTY_FIELDS are used; others are ignored.

    Returns:
        (sql, values) where values start at $2.

    Raises:
        ValueError: if no updatable field is present.
    """
    fields = [f for f in UPDATABLE_FACULTY_FIELDS if f in changes]
    if not fields:
        raise ValueError("No faculty fields to update")

    assignments = ", ".join(f"{field} = ${i}" for i, field in enumerate(fields, start=2))
    sql = f"""
    UPDATE faculty
    SET {assignments}
    WHERE id = $1
    RETURNING {FACULTY_COLUMNS}
    """
    return sql, [changes[f] for f in fields]


# =============================================================================
# ASSIGNMENTS
# =============================================================================

INSERT_ASSIGNMENT_QUERY = """
    INSERT INTO faculty_assignments (faculty_id, subject_id, section_id)
    VALUES ($1, $2, $3)
    RETURNING id, faculty_id, subject_id, section_id
"""

GET_ASSIGNMENT_CONTEXT_QUERY = """
    SELECT
        fa.id AS faculty_assignment_id,
        fa.faculty_id,
        fa.subject_id,
        fa.section_id,
        f.name AS faculty_name,
        s.name AS subject_name,
        sec.name AS section_name
    FROM faculty_assignments fa
    JOIN faculty f ON f.id = fa.faculty_id
    JOIN subjects s ON s.id = fa.subject_id
    LEFT JOIN sections sec ON sec.id = fa.section_id
    WHERE fa.id = $1
"""

# $1 section, $2 student (auth user id)
LIST_SECTION_ASSIGNMENTS_QUERY = """
    SELECT
        fa.id AS faculty_assignment_id,
        f.id AS faculty_id,
        f.name AS faculty_name,
        f.department,
        f.position,
        s.id AS subject_id,
        s.name AS subject_name,
        EXISTS (
            SELECT 1
            FROM faculty_credentials_ratings r
            WHERE r.faculty_assignment_id = fa.id
              AND r.student_id = $2
        ) AS already_rated
    FROM faculty_assignments fa
    JOIN faculty f ON f.id = fa.faculty_id
    JOIN subjects s ON s.id = fa.subject_id
    WHERE fa.section_id = $1
    ORDER BY f.name, s.name
"""


# =============================================================================
# STUDENT PROFILES
# =============================================================================

GET_STUDENT_PROFILE_QUERY = """
    SELECT
        sp.id,
        sp.user_id,
        sp.name,
        sp.registration_number,
        sp.year_id,
        sp.semester_id,
        sp.section_id,
        sp.created_at,
        y.name AS year_name,
        sem.name AS semester_name,
        sec.name AS section_name
    FROM student_profiles sp
    LEFT JOIN years y ON y.id = sp.year_id
    LEFT JOIN semesters sem ON sem.id = sp.semester_id
    LEFT JOIN sections sec ON sec.id = sp.section_id
    WHERE sp.user_id = $1
"""

INSERT_STUDENT_PROFILE_QUERY = """
    INSERT INTO student_profiles (
        user_id, name, registration_number, year_id, semester_id, section_id
    )
    VALUES ($1, $2, $3, $4, $5, $6)
    RETURNING id, user_id, name, registration_number,
              year_id, semester_id, section_id, created_at
"""

COUNT_STUDENTS_QUERY = """
    SELECT COUNT(*) FROM student_profiles
"""
