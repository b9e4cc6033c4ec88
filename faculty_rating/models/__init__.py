"""
Package initialization file for models.

Re-exports the enumerations and Pydantic schemas so other modules can write:

    from faculty_rating.models import RatingCriterion, FacultyPerformance
"""

from faculty_rating.models.enums import (
    RatingCriterion,
    PerformanceBand,
    StarRating,
    CRITERIA_COLUMNS,
    CRITERION_LABELS,
    CRITERION_SHORT_LABELS,
    EXCELLENT_THRESHOLD,
    GOOD_THRESHOLD,
    AVERAGE_THRESHOLD,
    detail_badge,
)

from faculty_rating.models.schemas import (
    # Notifications and auth
    Notification,
    ActionResult,
    AuthCredentials,
    SessionOut,
    UserOut,
    AuthResult,
    # Academic structure
    YearOut,
    SemesterOut,
    SectionOut,
    SubjectOut,
    RegistrationNumberOut,
    FormOptions,
    # Students
    StudentRegistration,
    StudentProfileOut,
    RegistrationResult,
    # Faculty
    FacultyCreate,
    FacultyUpdate,
    FacultyWithAssignmentCreate,
    FacultyOut,
    FacultyAssignmentOut,
    FacultyResult,
    # Ratings
    CriteriaScores,
    CredentialRatingSubmit,
    CredentialRatingOut,
    CredentialRatingResult,
    CriterionField,
    RatingContext,
    AssignedFaculty,
    StarRatingSubmit,
    StarRatingOut,
    StarRatingResult,
    FacultyStatsOut,
    # Analytics
    FacultyPerformance,
    PerformanceTrend,
    DepartmentInsight,
    DistributionBucket,
    DashboardKpis,
    AdminDashboard,
    CriterionAverage,
    RatingDetail,
    TimelinePoint,
    SubjectPerformance,
    FacultyDetail,
    RatingHistoryItem,
    StudentFacultyStat,
    StudentDashboard,
    RATING_MIN,
    RATING_MAX,
    DEFAULT_CRITERION_SCORE,
)


__all__ = [
    'RatingCriterion',
    'PerformanceBand',
    'StarRating',
    'CRITERIA_COLUMNS',
    'CRITERION_LABELS',
    'CRITERION_SHORT_LABELS',
    'EXCELLENT_THRESHOLD',
    'GOOD_THRESHOLD',
    'AVERAGE_THRESHOLD',
    'detail_badge',
    'Notification',
    'ActionResult',
    'AuthCredentials',
    'SessionOut',
    'UserOut',
    'AuthResult',
    'YearOut',
    'SemesterOut',
    'SectionOut',
    'SubjectOut',
    'RegistrationNumberOut',
    'FormOptions',
    'StudentRegistration',
    'StudentProfileOut',
    'RegistrationResult',
    'FacultyCreate',
    'FacultyUpdate',
    'FacultyWithAssignmentCreate',
    'FacultyOut',
    'FacultyAssignmentOut',
    'FacultyResult',
    'CriteriaScores',
    'CredentialRatingSubmit',
    'CredentialRatingOut',
    'CredentialRatingResult',
    'CriterionField',
    'RatingContext',
    'AssignedFaculty',
    'StarRatingSubmit',
    'StarRatingOut',
    'StarRatingResult',
    'FacultyStatsOut',
    'FacultyPerformance',
    'PerformanceTrend',
    'DepartmentInsight',
    'DistributionBucket',
    'DashboardKpis',
    'AdminDashboard',
    'CriterionAverage',
    'RatingDetail',
    'TimelinePoint',
    'SubjectPerformance',
    'FacultyDetail',
    'RatingHistoryItem',
    'StudentFacultyStat',
    'StudentDashboard',
    'RATING_MIN',
    'RATING_MAX',
    'DEFAULT_CRITERION_SCORE',
]
