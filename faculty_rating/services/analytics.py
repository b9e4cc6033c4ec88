"""
Rating analytics service for the admin and student dashboards.

All aggregation happens in memory with pandas over the (small) result sets
fetched from faculty_credentials_ratings. The per-submission overall score
is the arithmetic mean of the eight criteria; every dashboard figure is
derived from it.

Key Functions:
- ratings_frame: DataFrame of rating rows with the derived overall score
- summarize_faculty: per-faculty averages, consistency and improvement
- monthly_trends: month-by-month averages with growth versus prior month
- department_insights: per-department rollup of the faculty summaries
- performance_distribution: band counts and percentages
- dashboard_kpis: headline figures of the admin dashboard
- build_faculty_detail / build_student_dashboard: single-entity views
- get_admin_dashboard / get_faculty_detail / get_student_dashboard:
  fetch from the database, then build

Metric definitions:
- consistency_score = 5 - mean |overall[i] - overall[i-1]| (5 with < 2 ratings)
- improvement_trend = mean(last 3 overalls) - mean(first 3) (0 with < 3)
- growth = (month avg - previous month avg) * 100, one decimal
- participation_rate = round(department ratings / faculty count * 10)
- response_rate = round(total ratings / total students * 100)
- satisfaction_rate = round(faculty with overall >= 4.0 / faculty * 100)

Rounding follows the half-up convention of the dashboards (2.5 -> 3).
"""

import logging
import math
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from asyncpg import Connection

from faculty_rating.models.enums import (
    AVERAGE_THRESHOLD,
    CRITERIA_COLUMNS,
    EXCELLENT_THRESHOLD,
    GOOD_THRESHOLD,
    PerformanceBand,
    RatingCriterion,
    detail_badge,
)
from faculty_rating.models.schemas import (
    AdminDashboard,
    CriterionAverage,
    DashboardKpis,
    DepartmentInsight,
    DistributionBucket,
    FacultyDetail,
    FacultyOut,
    FacultyPerformance,
    PerformanceTrend,
    RatingDetail,
    RatingHistoryItem,
    StudentDashboard,
    StudentFacultyStat,
    StudentProfileOut,
    SubjectPerformance,
    TimelinePoint,
)
from faculty_rating.sql.faculty_queries import COUNT_STUDENTS_QUERY
from faculty_rating.sql.rating_queries import (
    ALL_CREDENTIAL_RATINGS_QUERY,
    COUNT_CREDENTIAL_RATINGS_QUERY,
    COUNT_FACULTY_QUERY,
    FACULTY_CREDENTIAL_RATINGS_QUERY,
    STUDENT_CREDENTIAL_RATINGS_QUERY,
)


logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

MAX_SCORE: float = 5.0
IMPROVEMENT_WINDOW: int = 3
PARTICIPATION_FACTOR: int = 10
MAX_EFFICIENCY: int = 100
UNKNOWN_SUBJECT = "Unknown"

MONTH_KEY_FORMAT = "%Y-%m"
MONTH_LABEL_FORMAT = "%b %Y"

# Band -> (bucket name, colour, description)
ADMIN_DISTRIBUTION_STYLE: Dict[PerformanceBand, Tuple[str, str, str]] = {
    PerformanceBand.EXCELLENT: (
        "Excellent (4.5+)", "#10b981",
        "Outstanding performance, student satisfaction is very high",
    ),
    PerformanceBand.GOOD: (
        "Good (4.0-4.4)", "#3b82f6",
        "Good performance with room for improvement",
    ),
    PerformanceBand.AVERAGE: (
        "Average (3.5-3.9)", "#f59e0b",
        "Satisfactory performance, needs focused improvement",
    ),
    PerformanceBand.NEEDS_IMPROVEMENT: (
        "Needs Improvement (<3.5)", "#ef4444",
        "Immediate attention and support required",
    ),
}

STUDENT_DISTRIBUTION_STYLE: Dict[PerformanceBand, Tuple[str, str, str]] = {
    PerformanceBand.EXCELLENT: ("Excellent (4.5+)", "#22c55e", ""),
    PerformanceBand.GOOD: ("Good (4.0-4.4)", "#3b82f6", ""),
    PerformanceBand.AVERAGE: ("Average (3.5-3.9)", "#eab308", ""),
    PerformanceBand.NEEDS_IMPROVEMENT: ("Below Average (<3.5)", "#ef4444", ""),
}


# =============================================================================
# Helpers
# =============================================================================

def round_half_up(value: float, digits: int = 0) -> float:
    """Round ties away from zero (2.25 -> 2.3, -6.25 -> -6.3 at one digit)."""
    factor = 10 ** digits
    magnitude = math.floor(abs(value) * factor + 0.5) / factor
    return -magnitude if value < 0 and magnitude else magnitude


def round_int(value: float) -> int:
    return int(round_half_up(value))


def percentage(part: float, whole: float) -> int:
    """round(part / whole * 100), 0 when whole is 0."""
    if not whole:
        return 0
    return round_int(part / whole * 100)


def overall_score(scores: Dict[str, Any]) -> float:
    """Mean of the eight criteria of one submission."""
    return float(np.mean([float(scores[c]) for c in CRITERIA_COLUMNS]))


def ratings_frame(rows: Iterable[Any]) -> pd.DataFrame:
    """
    Build a DataFrame from rating rows, adding:
    - overall: mean of the eight criteria
    - month_key / month_label: calendar month of created_at

    Row order is preserved.
    """
    df = pd.DataFrame([dict(row) for row in rows])
    if df.empty:
        return df

    for column in CRITERIA_COLUMNS:
        df[column] = df[column].astype(float)
    df['overall'] = df[CRITERIA_COLUMNS].mean(axis=1)

    df['created_at'] = pd.to_datetime(df['created_at'], utc=True)
    df['month_key'] = df['created_at'].dt.strftime(MONTH_KEY_FORMAT)
    df['month_label'] = df['created_at'].dt.strftime(MONTH_LABEL_FORMAT)

    if 'feedback' in df.columns:
        df['feedback'] = df['feedback'].fillna("")
    if 'subject_name' in df.columns:
        df['subject_name'] = df['subject_name'].fillna(UNKNOWN_SUBJECT)
    return df


def consistency_score(overalls: Sequence[float]) -> float:
    if len(overalls) < 2:
        return MAX_SCORE
    diffs = np.abs(np.diff(np.asarray(overalls, dtype=float)))
    return float(MAX_SCORE - diffs.mean())


def improvement_trend(overalls: Sequence[float]) -> float:
    if len(overalls) < IMPROVEMENT_WINDOW:
        return 0.0
    values = np.asarray(overalls, dtype=float)
    return float(values[-IMPROVEMENT_WINDOW:].mean() - values[:IMPROVEMENT_WINDOW].mean())


# =============================================================================
# Admin dashboard
# =============================================================================

def summarize_faculty(df: pd.DataFrame) -> List[FacultyPerformance]:
    """
    One FacultyPerformance per faculty member, in order of first rating.

    Ratings are taken in created_at order so the consistency and
    improvement figures follow the submission timeline.
    """
    if df.empty:
        return []

    ordered = df.sort_values('created_at', kind='stable')
    summaries: List[FacultyPerformance] = []

    for faculty_id, group in ordered.groupby('faculty_id', sort=False):
        overalls = group['overall'].tolist()
        overall_average = float(np.mean(overalls))
        first = group.iloc[0]

        summaries.append(FacultyPerformance(
            faculty_id=faculty_id,
            faculty_name=first['faculty_name'],
            department=first['department'],
            position=first['position'],
            total_ratings=len(group),
            subjects_taught=list(dict.fromkeys(group['subject_name'])),
            feedbacks=[f for f in group['feedback'] if str(f).strip()],
            criteria_averages={c: float(group[c].mean()) for c in CRITERIA_COLUMNS},
            overall_average=overall_average,
            consistency_score=consistency_score(overalls),
            improvement_trend=improvement_trend(overalls),
            student_satisfaction=PerformanceBand.from_score(overall_average),
        ))

    return summaries


def monthly_trends(df: pd.DataFrame) -> List[PerformanceTrend]:
    """Per-month averages in chronological order."""
    if df.empty:
        return []

    frame = df.assign(
        satisfaction=(df[RatingCriterion.COMMUNICATION_SKILLS.value]
                      + df[RatingCriterion.CLASS_DECORUM.value]) / 2
    )
    monthly = (
        frame.groupby('month_key', sort=True)
        .agg(
            month=('month_label', 'first'),
            total_ratings=('overall', 'size'),
            avg_rating=('overall', 'mean'),
            avg_engagement=(RatingCriterion.ENGAGEMENT.value, 'mean'),
            avg_satisfaction=('satisfaction', 'mean'),
        )
    )

    trends: List[PerformanceTrend] = []
    previous: Optional[float] = None
    for _, row in monthly.iterrows():
        avg_rating = float(row['avg_rating'])
        growth = 0.0 if previous is None else round_half_up((avg_rating - previous) * 100, 1)
        trends.append(PerformanceTrend(
            month=row['month'],
            total_ratings=int(row['total_ratings']),
            avg_rating=avg_rating,
            avg_engagement=float(row['avg_engagement']),
            avg_satisfaction=float(row['avg_satisfaction']),
            growth=growth,
        ))
        previous = avg_rating

    return trends


def department_insights(faculty: List[FacultyPerformance]) -> List[DepartmentInsight]:
    """Roll faculty summaries up by department, in order of first appearance."""
    departments: Dict[str, List[FacultyPerformance]] = {}
    for summary in faculty:
        departments.setdefault(summary.department, []).append(summary)

    insights: List[DepartmentInsight] = []
    for department, members in departments.items():
        total_ratings = sum(m.total_ratings for m in members)
        weighted = sum(m.overall_average * m.total_ratings for m in members)
        avg_rating = weighted / total_ratings if total_ratings else 0.0
        # max() keeps the first member on ties
        top = max(members, key=lambda m: m.overall_average)
        participation = round_int(total_ratings / len(members) * PARTICIPATION_FACTOR)

        insights.append(DepartmentInsight(
            department=department,
            faculty_count=len(members),
            total_ratings=total_ratings,
            avg_rating=avg_rating,
            top_performer=top.faculty_name,
            improvement_needed=sum(1 for m in members if m.overall_average < AVERAGE_THRESHOLD),
            excellent_performers=sum(1 for m in members if m.overall_average >= EXCELLENT_THRESHOLD),
            participation_rate=participation,
            efficiency=min(MAX_EFFICIENCY, participation),
        ))

    return insights


def performance_distribution(
    scores: Sequence[float],
    style: Dict[PerformanceBand, Tuple[str, str, str]] = ADMIN_DISTRIBUTION_STYLE,
) -> List[DistributionBucket]:
    """Count of scores per band (always all four bands, best first)."""
    counts = {band: 0 for band in PerformanceBand}
    for score in scores:
        counts[PerformanceBand.from_score(score)] += 1

    buckets: List[DistributionBucket] = []
    for band in PerformanceBand:
        name, fill, description = style[band]
        buckets.append(DistributionBucket(
            name=name,
            band=band,
            value=counts[band],
            percentage=percentage(counts[band], len(scores)),
            fill=fill,
            description=description,
        ))
    return buckets


def dashboard_kpis(
    faculty: List[FacultyPerformance],
    total_faculty: int,
    total_ratings: int,
    total_students: int,
) -> DashboardKpis:
    averages = [f.overall_average for f in faculty]
    return DashboardKpis(
        total_faculty=total_faculty,
        total_ratings=total_ratings,
        total_students=total_students,
        overall_average=float(np.mean(averages)) if averages else 0.0,
        excellent_performers=sum(1 for a in averages if a >= EXCELLENT_THRESHOLD),
        needs_improvement=sum(1 for a in averages if a < AVERAGE_THRESHOLD),
        response_rate=percentage(total_ratings, total_students),
        satisfaction_rate=percentage(sum(1 for a in averages if a >= GOOD_THRESHOLD), len(averages)),
    )


def build_admin_dashboard(
    rows: Iterable[Any],
    total_faculty: int,
    total_ratings: int,
    total_students: int,
) -> AdminDashboard:
    df = ratings_frame(rows)
    faculty = summarize_faculty(df)
    return AdminDashboard(
        kpis=dashboard_kpis(faculty, total_faculty, total_ratings, total_students),
        faculty=faculty,
        trends=monthly_trends(df),
        departments=department_insights(faculty),
        distribution=performance_distribution([f.overall_average for f in faculty]),
    )


async def get_admin_dashboard(conn: Connection) -> AdminDashboard:
    """Fetch every criteria rating plus the headline counts and aggregate them."""
    rows = await conn.fetch(ALL_CREDENTIAL_RATINGS_QUERY)
    total_faculty = await conn.fetchval(COUNT_FACULTY_QUERY)
    total_ratings = await conn.fetchval(COUNT_CREDENTIAL_RATINGS_QUERY)
    total_students = await conn.fetchval(COUNT_STUDENTS_QUERY)

    dashboard = build_admin_dashboard(
        rows,
        total_faculty=int(total_faculty or 0),
        total_ratings=int(total_ratings or 0),
        total_students=int(total_students or 0),
    )
    logger.info(
        f"Admin dashboard: {len(rows)} ratings over {len(dashboard.faculty)} rated faculty"
    )
    return dashboard


# =============================================================================
# Faculty detail
# =============================================================================

def criteria_averages(df: pd.DataFrame, digits: Optional[int] = None) -> List[CriterionAverage]:
    """Average per criterion (0 without ratings), optionally rounded."""
    averages: List[CriterionAverage] = []
    for criterion in RatingCriterion:
        score = float(df[criterion.value].mean()) if not df.empty else 0.0
        if digits is not None:
            score = round_half_up(score, digits)
        averages.append(CriterionAverage(
            key=criterion.value, label=criterion.short_label, score=score
        ))
    return averages


def best_criterion(averages: List[CriterionAverage]) -> Optional[CriterionAverage]:
    best: Optional[CriterionAverage] = None
    for average in averages:
        if best is None or average.score > best.score:
            best = average
    return best


def build_faculty_detail(faculty: FacultyOut, rows: Iterable[Any]) -> FacultyDetail:
    """
    Detailed analytics for one faculty member.

    The overall average here is the mean of the eight criteria averages.
    The best criterion is the highest average, the earliest one on ties.
    """
    df = ratings_frame(rows)
    averages = criteria_averages(df)
    overall = float(np.mean([a.score for a in averages]))

    ratings: List[RatingDetail] = []
    timeline: List[TimelinePoint] = []
    subjects: List[SubjectPerformance] = []

    if not df.empty:
        ordered = df.sort_values('created_at', kind='stable').reset_index(drop=True)
        for index, row in ordered.iterrows():
            ratings.append(RatingDetail(
                id=row['id'],
                subject_name=row['subject_name'],
                section_name=row.get('section_name'),
                criteria={c: int(row[c]) for c in CRITERIA_COLUMNS},
                overall=float(row['overall']),
                feedback=row['feedback'] or None,
                created_at=row['created_at'].to_pydatetime(),
            ))
            timeline.append(TimelinePoint(
                rating=int(index) + 1,
                overall=float(row['overall']),
                date=row['created_at'].date().isoformat(),
            ))

        by_subject = ordered.groupby('subject_name', sort=False)['overall'].agg(['mean', 'size'])
        subjects = [
            SubjectPerformance(subject=subject, average=float(stats['mean']), ratings=int(stats['size']))
            for subject, stats in by_subject.iterrows()
        ]

    return FacultyDetail(
        faculty=faculty,
        ratings=ratings,
        criteria_averages=averages,
        overall_average=overall,
        band=PerformanceBand.from_score(overall),
        badge=detail_badge(overall),
        best_criterion=best_criterion(averages),
        timeline=timeline,
        subjects=subjects,
    )


async def get_faculty_detail(conn: Connection, faculty: FacultyOut) -> FacultyDetail:
    rows = await conn.fetch(FACULTY_CREDENTIAL_RATINGS_QUERY, faculty.id)
    return build_faculty_detail(faculty, rows)


# =============================================================================
# Student dashboard
# =============================================================================

def build_student_dashboard(profile: StudentProfileOut, rows: Iterable[Any]) -> StudentDashboard:
    """
    Dashboard of one student's own ratings.

    Rows are expected newest first; the history keeps that order and the
    student's rating of each (faculty, subject) pair is the most recent one.
    """
    df = ratings_frame(rows)
    if df.empty:
        return StudentDashboard(
            profile=profile,
            criteria_averages=[],
            distribution=performance_distribution([], STUDENT_DISTRIBUTION_STYLE),
        )

    history = [
        RatingHistoryItem(
            id=row['id'],
            faculty_name=row['faculty_name'],
            subject_name=row['subject_name'],
            overall_rating=float(row['overall']),
            criteria={c: int(row[c]) for c in CRITERIA_COLUMNS},
            feedback=row['feedback'],
            created_at=row['created_at'].to_pydatetime(),
        )
        for _, row in df.iterrows()
    ]

    faculty_stats = [
        StudentFacultyStat(
            faculty_name=faculty_name,
            subject_name=subject_name,
            avg_rating=float(group['overall'].mean()),
            total_ratings=len(group),
            my_rating=float(group['overall'].iloc[0]),
        )
        for (faculty_name, subject_name), group in df.groupby(
            ['faculty_name', 'subject_name'], sort=False
        )
    ]

    overalls = df['overall'].tolist()
    return StudentDashboard(
        profile=profile,
        total_ratings=len(history),
        average_rating=float(np.mean(overalls)),
        history=history,
        faculty_stats=faculty_stats,
        criteria_averages=criteria_averages(df, digits=1),
        distribution=performance_distribution(overalls, STUDENT_DISTRIBUTION_STYLE),
    )


async def get_student_dashboard(conn: Connection, profile: StudentProfileOut) -> StudentDashboard:
    rows = await conn.fetch(STUDENT_CREDENTIAL_RATINGS_QUERY, profile.user_id)
    return build_student_dashboard(profile, rows)
