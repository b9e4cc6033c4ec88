"""
Academic structure SQL query module for the Faculty Rating backend.

Parameterized ($n placeholder) PostgreSQL queries for the lookup tables
that drive the registration and faculty forms: years, semesters, sections,
subjects and the pool of registration numbers.

Every list is ordered by name (registration numbers by number) so dropdowns
render in a stable order.
"""

from typing import Optional, Tuple


# =============================================================================
# LOOKUP LISTS
# =============================================================================

LIST_YEARS_QUERY = """
    SELECT id, name
    FROM years
    ORDER BY name
"""

LIST_SEMESTERS_QUERY = """
    SELECT id, name, year_id
    FROM semesters
    ORDER BY name
"""

LIST_SEMESTERS_BY_YEAR_QUERY = """
    SELECT id, name, year_id
    FROM semesters
    WHERE year_id = $1
    ORDER BY name
"""

LIST_SECTIONS_QUERY = """
    SELECT id, name, semester_id
    FROM sections
    ORDER BY name
"""

LIST_SECTIONS_BY_SEMESTER_QUERY = """
    SELECT id, name, semester_id
    FROM sections
    WHERE semester_id = $1
    ORDER BY name
"""

LIST_SUBJECTS_QUERY = """
    SELECT id, name, section_id
    FROM subjects
    ORDER BY name
"""

LIST_SUBJECTS_BY_SECTION_QUERY = """
    SELECT id, name, section_id
    FROM subjects
    WHERE section_id = $1
    ORDER BY name
"""


# =============================================================================
# REGISTRATION NUMBERS
# =============================================================================

def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def get_unused_registration_numbers_query(search: Optional[str] = None) -> Tuple[str, tuple]:
    """
    Build the query listing registration numbers not yet claimed by a student.

    Args:
        search: Optional case-insensitive substring filter.

    Returns:
        (sql, args) ready for conn.fetch(sql, *args).
    """
    sql = """
    SELECT id, registration_number
    FROM registration_numbers
    WHERE is_used = false
    """
    args: tuple = ()
    if search:
        sql += "  AND registration_number ILIKE $1 ESCAPE '\\'\n"
        args = (f"%{escape_like(search)}%",)
    sql += "    ORDER BY registration_number"
    return sql, args


GET_REGISTRATION_NUMBER_QUERY = """
    SELECT id, registration_number, is_used
    FROM registration_numbers
    WHERE registration_number = $1
"""

# Guarded by is_used = false so a number can only ever be claimed once
MARK_REGISTRATION_NUMBER_USED_COMMAND = """
    UPDATE registration_numbers
    SET is_used = true
    WHERE registration_number = $1
      AND is_used = false
"""
