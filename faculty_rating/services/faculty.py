"""
Faculty management service.

CRUD over the faculty table plus the administrator "add faculty" flow, which
creates a faculty member together with the faculty assignment linking them
to a subject and section. Both rows are written in one transaction.

Key Functions:
- list_faculty: all faculty, newest first
- get_faculty: one faculty member (404 when missing)
- create_faculty / update_faculty / delete_faculty
- add_faculty_with_assignment: faculty row + faculty_assignments row
"""

import logging
from typing import Any, List, Tuple
from uuid import UUID

from asyncpg import Connection

from faculty_rating.core.database import affected_rows
from faculty_rating.core.errors import (
    INTEGRITY_ERRORS,
    NotFoundError,
    ValidationFailedError,
    from_database_error,
)
from faculty_rating.models.schemas import (
    FacultyAssignmentOut,
    FacultyCreate,
    FacultyOut,
    FacultyUpdate,
    FacultyWithAssignmentCreate,
)
from faculty_rating.sql.faculty_queries import (
    DELETE_FACULTY_COMMAND,
    GET_FACULTY_QUERY,
    INSERT_ASSIGNMENT_QUERY,
    INSERT_FACULTY_QUERY,
    LIST_FACULTY_QUERY,
    get_update_faculty_query,
)


logger = logging.getLogger(__name__)

FACULTY_NOT_FOUND = "Faculty member not found"


def faculty_from_row(row: Any) -> FacultyOut:
    return FacultyOut(
        id=row['id'],
        name=row['name'],
        email=row['email'],
        department=row['department'],
        position=row['position'],
        created_at=row['created_at'],
    )


async def list_faculty(conn: Connection) -> List[FacultyOut]:
    """All faculty ordered by created_at descending."""
    rows = await conn.fetch(LIST_FACULTY_QUERY)
    return [faculty_from_row(row) for row in rows]


async def get_faculty(conn: Connection, faculty_id: UUID) -> FacultyOut:
    row = await conn.fetchrow(GET_FACULTY_QUERY, faculty_id)
    if row is None:
        raise NotFoundError(FACULTY_NOT_FOUND)
    return faculty_from_row(row)


async def create_faculty(conn: Connection, payload: FacultyCreate) -> FacultyOut:
    try:
        row = await conn.fetchrow(
            INSERT_FACULTY_QUERY,
            payload.name,
            str(payload.email),
            payload.department,
            payload.position,
        )
    except INTEGRITY_ERRORS as e:
        raise from_database_error(e, "Error adding faculty")

    faculty = faculty_from_row(row)
    logger.info(f"Created faculty {faculty.id} ({faculty.name})")
    return faculty


async def update_faculty(
    conn: Connection,
    faculty_id: UUID,
    payload: FacultyUpdate,
) -> FacultyOut:
    """
    Apply a partial update. Fields left unset keep their stored values.

    Raises:
        ValidationFailedError: nothing to update.
        NotFoundError: no faculty member with this id.
    """
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    if "email" in changes:
        changes["email"] = str(changes["email"])

    try:
        sql, values = get_update_faculty_query(changes)
    except ValueError:
        raise ValidationFailedError("No changes to save", title="Error updating faculty")

    try:
        row = await conn.fetchrow(sql, faculty_id, *values)
    except INTEGRITY_ERRORS as e:
        raise from_database_error(e, "Error updating faculty")

    if row is None:
        raise NotFoundError(FACULTY_NOT_FOUND)

    logger.info(f"Updated faculty {faculty_id}: {sorted(changes)}")
    return faculty_from_row(row)


async def delete_faculty(conn: Connection, faculty_id: UUID) -> None:
    try:
        status = await conn.execute(DELETE_FACULTY_COMMAND, faculty_id)
    except INTEGRITY_ERRORS as e:
        raise from_database_error(e, "Error deleting faculty")

    if affected_rows(status) == 0:
        raise NotFoundError(FACULTY_NOT_FOUND)
    logger.info(f"Deleted faculty {faculty_id}")


async def add_faculty_with_assignment(
    conn: Connection,
    payload: FacultyWithAssignmentCreate,
) -> Tuple[FacultyOut, FacultyAssignmentOut]:
    """
    Create a faculty member and assign them to a subject in a section.

    The semester is part of the form (it narrows the section dropdown) but
    is not stored on the assignment.

    Returns:
        (faculty, assignment)
    """
    try:
        async with conn.transaction():
            faculty_row = await conn.fetchrow(
                INSERT_FACULTY_QUERY,
                payload.name,
                str(payload.email),
                payload.department,
                payload.position,
            )
            assignment_row = await conn.fetchrow(
                INSERT_ASSIGNMENT_QUERY,
                faculty_row['id'],
                payload.subject_id,
                payload.section_id,
            )
    except INTEGRITY_ERRORS as e:
        logger.error(f"Failed to add faculty {payload.email}: {e}", exc_info=True)
        raise from_database_error(e, "Error")

    faculty = faculty_from_row(faculty_row)
    assignment = FacultyAssignmentOut(
        id=assignment_row['id'],
        faculty_id=assignment_row['faculty_id'],
        subject_id=assignment_row['subject_id'],
        section_id=assignment_row['section_id'],
    )
    logger.info(
        f"Added faculty {faculty.id} ({faculty.name}) to subject {payload.subject_id} "
        f"in section {payload.section_id}"
    )
    return faculty, assignment
