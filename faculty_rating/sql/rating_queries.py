"""
Rating SQL query module.

Covers both rating tables:
- faculty_credentials_ratings: one eight-criteria submission per
  (faculty_assignment_id, student_id), upserted on resubmission.
- ratings: single 1-5 star ratings with an optional comment.

And the faculty_stats view computed by the database.
"""

from faculty_rating.models.enums import CRITERIA_COLUMNS


_CRITERIA_SELECT = ",\n        ".join(f"r.{c}" for c in CRITERIA_COLUMNS)
_CRITERIA_INSERT = ", ".join(CRITERIA_COLUMNS)
# $1..$5 are assignment, student, subject, section, feedback
_CRITERIA_VALUES = ", ".join(f"${i}" for i in range(6, 6 + len(CRITERIA_COLUMNS)))
_CRITERIA_UPDATE = ",\n        ".join(f"{c} = EXCLUDED.{c}" for c in CRITERIA_COLUMNS)


# =============================================================================
# CREDENTIAL RATINGS: WRITE
# =============================================================================

UPSERT_CREDENTIAL_RATING_QUERY = f"""
    INSERT INTO faculty_credentials_ratings (
        faculty_assignment_id, student_id, subject_id, section_id, feedback,
        {_CRITERIA_INSERT}
    )
    VALUES ($1, $2, $3, $4, $5, {_CRITERIA_VALUES})
    ON CONFLICT (faculty_assignment_id, student_id) DO UPDATE SET
        subject_id = EXCLUDED.subject_id,
        section_id = EXCLUDED.section_id,
        feedback = EXCLUDED.feedback,
        {_CRITERIA_UPDATE}
    RETURNING id, faculty_assignment_id, student_id, subject_id, section_id,
              feedback, created_at, {_CRITERIA_INSERT}
"""


# =============================================================================
# CREDENTIAL RATINGS: READ
# =============================================================================

GET_STUDENT_ASSIGNMENT_RATING_QUERY = f"""
    SELECT
        r.id,
        r.feedback,
        {_CRITERIA_SELECT}
    FROM faculty_credentials_ratings r
    WHERE r.faculty_assignment_id = $1
      AND r.student_id = $2
"""

# Every rating joined to its faculty member, oldest first
ALL_CREDENTIAL_RATINGS_QUERY = f"""
    SELECT
        r.id,
        r.created_at,
        r.feedback,
        {_CRITERIA_SELECT},
        f.id AS faculty_id,
        f.name AS faculty_name,
        f.department,
        f.position,
        s.name AS subject_name
    FROM faculty_credentials_ratings r
    JOIN faculty_assignments fa ON fa.id = r.faculty_assignment_id
    JOIN faculty f ON f.id = fa.faculty_id
    LEFT JOIN subjects s ON s.id = r.subject_id
    ORDER BY r.created_at ASC
"""

FACULTY_CREDENTIAL_RATINGS_QUERY = f"""
    SELECT
        r.id,
        r.created_at,
        r.feedback,
        {_CRITERIA_SELECT},
        s.name AS subject_name,
        sec.name AS section_name
    FROM faculty_credentials_ratings r
    JOIN faculty_assignments fa ON fa.id = r.faculty_assignment_id
    LEFT JOIN subjects s ON s.id = r.subject_id
    LEFT JOIN sections sec ON sec.id = r.section_id
    WHERE fa.faculty_id = $1
    ORDER BY r.created_at ASC
"""

STUDENT_CREDENTIAL_RATINGS_QUERY = f"""
    SELECT
        r.id,
        r.created_at,
        r.feedback,
        {_CRITERIA_SELECT},
        f.name AS faculty_name,
        s.name AS subject_name
    FROM faculty_credentials_ratings r
    JOIN faculty_assignments fa ON fa.id = r.faculty_assignment_id
    JOIN faculty f ON f.id = fa.faculty_id
    LEFT JOIN subjects s ON s.id = r.subject_id
    WHERE r.student_id = $1
    ORDER BY r.created_at DESC
"""

COUNT_CREDENTIAL_RATINGS_QUERY = """
    SELECT COUNT(*) FROM faculty_credentials_ratings
"""

COUNT_FACULTY_QUERY = """
    SELECT COUNT(*) FROM faculty
"""


# =============================================================================
# STAR RATINGS AND faculty_stats
# =============================================================================

INSERT_STAR_RATING_QUERY = """
    INSERT INTO ratings (faculty_id, user_id, rating, comment)
    VALUES ($1, $2, $3, $4)
    RETURNING id, faculty_id, user_id, rating, comment, created_at
"""

RECENT_STAR_RATINGS_QUERY = """
    SELECT
        r.id,
        r.rating,
        r.comment,
        r.created_at,
        f.id AS faculty_id,
        f.name AS faculty_name,
        f.department,
        f.position
    FROM ratings r
    JOIN faculty f ON f.id = r.faculty_id
    ORDER BY r.created_at DESC
    LIMIT $1
"""

FACULTY_STATS_QUERY = """
    SELECT faculty_id, faculty_name, department, position,
           average_rating, total_ratings
    FROM faculty_stats
    ORDER BY average_rating DESC NULLS FIRST
"""
