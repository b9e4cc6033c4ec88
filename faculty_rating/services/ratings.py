"""
Rating service.

Two rating flavours share this module:

1. Criteria ratings (faculty_credentials_ratings): a student scores a
   faculty assignment in their own section on the eight teaching criteria
   (1-5 each) with optional feedback. There is exactly one row per
   (faculty_assignment_id, student_id); resubmitting replaces the scores.
2. Star ratings (ratings): any logged-in user gives a faculty member 1-5
   stars with an optional comment. The database aggregates these into the
   faculty_stats view.

Key Functions:
- list_assigned_faculty: assignments in the student's section, with
  whether the student already rated each one
- get_rating_context: what the rating form shows (names, existing scores)
- submit_credential_rating: validate section membership, then upsert
- submit_star_rating / list_recent_star_ratings / list_faculty_stats
"""

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from asyncpg import Connection

from faculty_rating.core.auth import CurrentUser
from faculty_rating.core.errors import (
    INTEGRITY_ERRORS,
    NotFoundError,
    PermissionDeniedError,
    ValidationFailedError,
    from_database_error,
)
from faculty_rating.models.enums import CRITERIA_COLUMNS, RatingCriterion, StarRating
from faculty_rating.models.schemas import (
    AssignedFaculty,
    CredentialRatingOut,
    CredentialRatingSubmit,
    CriteriaScores,
    CriterionField,
    FacultyStatsOut,
    RatingContext,
    StarRatingOut,
    StarRatingSubmit,
    StudentProfileOut,
)
from faculty_rating.services.analytics import overall_score
from faculty_rating.sql.faculty_queries import (
    GET_ASSIGNMENT_CONTEXT_QUERY,
    LIST_SECTION_ASSIGNMENTS_QUERY,
)
from faculty_rating.sql.rating_queries import (
    FACULTY_STATS_QUERY,
    GET_STUDENT_ASSIGNMENT_RATING_QUERY,
    INSERT_STAR_RATING_QUERY,
    RECENT_STAR_RATINGS_QUERY,
    UPSERT_CREDENTIAL_RATING_QUERY,
)


logger = logging.getLogger(__name__)

ASSIGNMENT_NOT_FOUND = "Faculty assignment not found"
SELECT_FACULTY_AND_RATING = "Please select faculty and rating"
DEFAULT_RECENT_LIMIT = 100


def criteria_form_fields() -> List[CriterionField]:
    """Key and label of each criterion, in form order."""
    return [CriterionField(key=c.value, label=c.label) for c in RatingCriterion]


# =============================================================================
# Criteria ratings
# =============================================================================


async def _get_assignment(conn: Connection, assignment_id: UUID) -> Any:
    row = await conn.fetchrow(GET_ASSIGNMENT_CONTEXT_QUERY, assignment_id)
    if row is None:
        raise NotFoundError(ASSIGNMENT_NOT_FOUND)
    return row


def _ensure_same_section(assignment: Any, profile: StudentProfileOut) -> None:
    if assignment['section_id'] != profile.section_id:
        raise PermissionDeniedError(
            "You can only rate faculty assigned to your section",
            title="Error submitting rating",
        )


async def list_assigned_faculty(
    conn: Connection,
    profile: StudentProfileOut,
) -> List[AssignedFaculty]:
    """Faculty assignments of the student's section, by faculty then subject."""
    rows = await conn.fetch(LIST_SECTION_ASSIGNMENTS_QUERY, profile.section_id, profile.user_id)
    return [
        AssignedFaculty(
            faculty_assignment_id=row['faculty_assignment_id'],
            faculty_id=row['faculty_id'],
            faculty_name=row['faculty_name'],
            department=row['department'],
            position=row['position'],
            subject_id=row['subject_id'],
            subject_name=row['subject_name'],
            already_rated=bool(row['already_rated']),
        )
        for row in rows
    ]


async def get_rating_context(
    conn: Connection,
    profile: StudentProfileOut,
    assignment_id: UUID,
) -> RatingContext:
    """
    Faculty, subject and section of an assignment with the student's current
    scores. A student who has not rated it yet gets the default score (3)
    for every criterion.
    """
    assignment = await _get_assignment(conn, assignment_id)
    _ensure_same_section(assignment, profile)

    existing = await conn.fetchrow(
        GET_STUDENT_ASSIGNMENT_RATING_QUERY, assignment_id, profile.user_id
    )
    if existing is None:
        scores = CriteriaScores()
        feedback = ""
    else:
        scores = CriteriaScores(**{c: existing[c] for c in CRITERIA_COLUMNS})
        feedback = existing['feedback'] or ""

    return RatingContext(
        faculty_assignment_id=assignment['faculty_assignment_id'],
        faculty_name=assignment['faculty_name'],
        subject_id=assignment['subject_id'],
        subject_name=assignment['subject_name'],
        section_id=assignment['section_id'],
        section_name=assignment['section_name'],
        criteria=criteria_form_fields(),
        scores=scores,
        feedback=feedback,
        already_rated=existing is not None,
    )


async def submit_credential_rating(
    conn: Connection,
    profile: StudentProfileOut,
    payload: CredentialRatingSubmit,
) -> CredentialRatingOut:
    """
    Insert or replace the student's rating of a faculty assignment.

    The subject and section stored with the rating come from the assignment,
    never from the client.

    Raises:
        NotFoundError: unknown assignment.
        PermissionDeniedError: assignment belongs to another section.
    """
    assignment = await _get_assignment(conn, payload.faculty_assignment_id)
    _ensure_same_section(assignment, profile)

    scores = [getattr(payload, c) for c in CRITERIA_COLUMNS]
    try:
        row = await conn.fetchrow(
            UPSERT_CREDENTIAL_RATING_QUERY,
            payload.faculty_assignment_id,
            profile.user_id,
            assignment['subject_id'],
            assignment['section_id'],
            (payload.feedback or "").strip(),
            *scores,
        )
    except INTEGRITY_ERRORS as e:
        logger.error(
            f"Failed to store rating for assignment {payload.faculty_assignment_id}: {e}",
            exc_info=True,
        )
        raise from_database_error(e, "Error submitting rating")

    logger.info(
        f"Student {profile.user_id} rated assignment {payload.faculty_assignment_id} "
        f"(overall {overall_score(payload.model_dump()):.2f})"
    )
    return CredentialRatingOut(
        id=row['id'],
        faculty_assignment_id=row['faculty_assignment_id'],
        student_id=row['student_id'],
        subject_id=row['subject_id'],
        section_id=row['section_id'],
        feedback=row['feedback'],
        created_at=row['created_at'],
        **{c: row[c] for c in CRITERIA_COLUMNS},
    )


# =============================================================================
# Star ratings
# =============================================================================


async def submit_star_rating(
    conn: Connection,
    user: CurrentUser,
    payload: StarRatingSubmit,
) -> Dict[str, Any]:
    """
    Store a 1-5 star rating of a faculty member by the current user.

    Raises:
        ValidationFailedError: no faculty selected or rating left at 0.
    """
    if payload.faculty_id is None or payload.rating == 0:
        raise ValidationFailedError(SELECT_FACULTY_AND_RATING, title=SELECT_FACULTY_AND_RATING)

    try:
        row = await conn.fetchrow(
            INSERT_STAR_RATING_QUERY,
            payload.faculty_id,
            user.id,
            payload.rating,
            (payload.comment or "").strip() or None,
        )
    except INTEGRITY_ERRORS as e:
        raise from_database_error(e, "Error submitting rating")

    logger.info(f"User {user.id} gave faculty {payload.faculty_id} {payload.rating} stars")
    result = dict(row)
    result['label'] = StarRating(payload.rating).label
    return result


async def list_recent_star_ratings(
    conn: Connection,
    limit: int = DEFAULT_RECENT_LIMIT,
) -> List[StarRatingOut]:
    """Star ratings newest first, joined to the faculty member rated."""
    rows = await conn.fetch(RECENT_STAR_RATINGS_QUERY, limit)
    return [
        StarRatingOut(
            id=row['id'],
            rating=row['rating'],
            label=StarRating(row['rating']).label,
            comment=row['comment'],
            created_at=row['created_at'],
            faculty_id=row['faculty_id'],
            faculty_name=row['faculty_name'],
            department=row['department'],
            position=row['position'],
        )
        for row in rows
    ]


def _optional_float(value: Optional[Any]) -> Optional[float]:
    return float(value) if value is not None else None


async def list_faculty_stats(conn: Connection) -> List[FacultyStatsOut]:
    """Rows of the faculty_stats view, best average first."""
    rows = await conn.fetch(FACULTY_STATS_QUERY)
    return [
        FacultyStatsOut(
            faculty_id=row['faculty_id'],
            faculty_name=row['faculty_name'],
            department=row['department'],
            position=row['position'],
            average_rating=_optional_float(row['average_rating']),
            total_ratings=int(row['total_ratings']) if row['total_ratings'] is not None else None,
        )
        for row in rows
    ]
