"""
Academic structure lookup service.

Read-only views over years, semesters, sections, subjects and the unused
registration numbers. These feed the cascading dropdowns of the student
registration form (year -> semester -> section) and the admin "add faculty"
form.

Key Functions:
- list_years / list_semesters / list_sections / list_subjects
- list_unused_registration_numbers: optional case-insensitive search
- get_form_options: every lookup list in one bundle
"""

import logging
from typing import List, Optional
from uuid import UUID

from asyncpg import Connection

from faculty_rating.models.schemas import (
    FormOptions,
    RegistrationNumberOut,
    SectionOut,
    SemesterOut,
    SubjectOut,
    YearOut,
)
from faculty_rating.sql.academic_queries import (
    LIST_SECTIONS_BY_SEMESTER_QUERY,
    LIST_SECTIONS_QUERY,
    LIST_SEMESTERS_BY_YEAR_QUERY,
    LIST_SEMESTERS_QUERY,
    LIST_SUBJECTS_BY_SECTION_QUERY,
    LIST_SUBJECTS_QUERY,
    LIST_YEARS_QUERY,
    get_unused_registration_numbers_query,
)


logger = logging.getLogger(__name__)


async def list_years(conn: Connection) -> List[YearOut]:
    rows = await conn.fetch(LIST_YEARS_QUERY)
    return [YearOut(id=row['id'], name=row['name']) for row in rows]


async def list_semesters(conn: Connection, year_id: Optional[UUID] = None) -> List[SemesterOut]:
    """Semesters of one year, or all of them when year_id is None."""
    if year_id is None:
        rows = await conn.fetch(LIST_SEMESTERS_QUERY)
    else:
        rows = await conn.fetch(LIST_SEMESTERS_BY_YEAR_QUERY, year_id)
    return [SemesterOut(id=row['id'], name=row['name'], year_id=row['year_id']) for row in rows]


async def list_sections(conn: Connection, semester_id: Optional[UUID] = None) -> List[SectionOut]:
    """Sections of one semester, or all of them when semester_id is None."""
    if semester_id is None:
        rows = await conn.fetch(LIST_SECTIONS_QUERY)
    else:
        rows = await conn.fetch(LIST_SECTIONS_BY_SEMESTER_QUERY, semester_id)
    return [
        SectionOut(id=row['id'], name=row['name'], semester_id=row['semester_id'])
        for row in rows
    ]


async def list_subjects(conn: Connection, section_id: Optional[UUID] = None) -> List[SubjectOut]:
    """Subjects of one section, or all of them when section_id is None."""
    if section_id is None:
        rows = await conn.fetch(LIST_SUBJECTS_QUERY)
    else:
        rows = await conn.fetch(LIST_SUBJECTS_BY_SECTION_QUERY, section_id)
    return [
        SubjectOut(id=row['id'], name=row['name'], section_id=row['section_id'])
        for row in rows
    ]


async def list_unused_registration_numbers(
    conn: Connection,
    search: Optional[str] = None,
) -> List[RegistrationNumberOut]:
    """
    Registration numbers no student has claimed yet.

    Args:
        conn: Database connection.
        search: Optional case-insensitive substring; blank means no filter.
    """
    term = search.strip() if search else None
    sql, args = get_unused_registration_numbers_query(term or None)
    rows = await conn.fetch(sql, *args)
    return [
        RegistrationNumberOut(id=row['id'], registration_number=row['registration_number'])
        for row in rows
    ]


async def get_form_options(conn: Connection) -> FormOptions:
    """All years, semesters, sections and subjects for the admin faculty form."""
    options = FormOptions(
        years=await list_years(conn),
        semesters=await list_semesters(conn),
        sections=await list_sections(conn),
        subjects=await list_subjects(conn),
    )
    logger.debug(
        f"Form options: {len(options.years)} years, {len(options.semesters)} semesters, "
        f"{len(options.sections)} sections, {len(options.subjects)} subjects"
    )
    return options
