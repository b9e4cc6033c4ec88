"""
Pydantic request/response models for the Faculty Rating backend.

Covers notifications, auth payloads, academic lookups, student registration
and profiles, faculty management, both rating flavours (eight-criteria
credential ratings and single star ratings), and the analytics views served
to the admin and student dashboards.

All models use Pydantic v2 syntax.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from faculty_rating.models.enums import PerformanceBand


RATING_MIN = 1
RATING_MAX = 5
DEFAULT_CRITERION_SCORE = 3


# =============================================================================
# Notifications
# =============================================================================


class Notification(BaseModel):
    """A toast shown by the client after an action."""
    title: str
    description: Optional[str] = None
    variant: str = "default"


class ActionResult(BaseModel):
    """Envelope returned by write endpoints."""
    success: bool = True
    notification: Notification


# =============================================================================
# Auth
# =============================================================================


class AuthCredentials(BaseModel):
    """E-mail/password pair for sign-up and sign-in."""
    model_config = ConfigDict(str_strip_whitespace=True)

    email: EmailStr
    password: str = Field(..., min_length=1)


class SessionOut(BaseModel):
    """Session issued by the auth API."""
    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    expires_in: Optional[int] = None
    expires_at: Optional[int] = None


class UserOut(BaseModel):
    id: UUID
    email: Optional[str] = None
    role: Optional[str] = None
    is_admin: bool = False


class AuthResult(ActionResult):
    session: Optional[SessionOut] = None
    user: Optional[Dict[str, Any]] = None


# =============================================================================
# Academic structure
# =============================================================================


class YearOut(BaseModel):
    id: UUID
    name: str


class SemesterOut(BaseModel):
    id: UUID
    name: str
    year_id: UUID


class SectionOut(BaseModel):
    id: UUID
    name: str
    semester_id: UUID


class SubjectOut(BaseModel):
    id: UUID
    name: str
    section_id: UUID


class RegistrationNumberOut(BaseModel):
    id: UUID
    registration_number: str


class FormOptions(BaseModel):
    """Everything the admin "add faculty" form needs for its dropdowns."""
    years: List[YearOut] = Field(default_factory=list)
    semesters: List[SemesterOut] = Field(default_factory=list)
    sections: List[SectionOut] = Field(default_factory=list)
    subjects: List[SubjectOut] = Field(default_factory=list)


# =============================================================================
# Students
# =============================================================================


class StudentRegistration(BaseModel):
    """
    Student sign-up form.

    Fields default to empty so a partially filled form reaches the service,
    which reports "Please fill in all fields" rather than a schema error.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "name": "Asha Rao",
                "email": "asha@example.edu",
                "password": "secret123",
                "registration_number": "21CS001",
                "year_id": "2b1f4c36-3a8e-4f0e-9a43-0d1e0f6a9b10",
                "semester_id": "a1f0c1b2-6f1e-4a8e-8a3b-93f1a3b0c2d4",
                "section_id": "c7e2d3f4-1b2a-4c5d-9e8f-0a1b2c3d4e5f",
            }
        },
    )

    name: str = ""
    email: str = ""
    password: str = ""
    registration_number: str = ""
    year_id: Optional[UUID] = None
    semester_id: Optional[UUID] = None
    section_id: Optional[UUID] = None


class StudentProfileOut(BaseModel):
    id: UUID
    user_id: UUID
    name: str
    registration_number: str
    year_id: UUID
    semester_id: UUID
    section_id: UUID
    year_name: Optional[str] = None
    semester_name: Optional[str] = None
    section_name: Optional[str] = None
    created_at: Optional[datetime] = None


class RegistrationResult(ActionResult):
    profile: StudentProfileOut


# =============================================================================
# Faculty
# =============================================================================


class FacultyCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=2, description="Name must be at least 2 characters")
    email: EmailStr
    department: str = Field(..., min_length=1, description="Department is required")
    position: str = Field(..., min_length=1, description="Position is required")


class FacultyUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(default=None, min_length=2)
    email: Optional[EmailStr] = None
    department: Optional[str] = Field(default=None, min_length=1)
    position: Optional[str] = Field(default=None, min_length=1)


class FacultyWithAssignmentCreate(FacultyCreate):
    """Admin form: a new faculty member and the subject/section they teach."""
    semester_id: UUID
    section_id: UUID
    subject_id: UUID


class FacultyOut(BaseModel):
    id: UUID
    name: str
    email: str
    department: str
    position: str
    created_at: Optional[datetime] = None


class FacultyAssignmentOut(BaseModel):
    id: UUID
    faculty_id: UUID
    subject_id: UUID
    section_id: UUID


class FacultyResult(ActionResult):
    faculty: FacultyOut
    assignment: Optional[FacultyAssignmentOut] = None


# =============================================================================
# Criteria ratings
# =============================================================================


class CriteriaScores(BaseModel):
    """The eight criteria, each an integer on the 1-5 scale."""
    engagement: int = Field(default=DEFAULT_CRITERION_SCORE, ge=RATING_MIN, le=RATING_MAX)
    concept_understanding: int = Field(default=DEFAULT_CRITERION_SCORE, ge=RATING_MIN, le=RATING_MAX)
    content_spread_depth: int = Field(default=DEFAULT_CRITERION_SCORE, ge=RATING_MIN, le=RATING_MAX)
    application_oriented_teaching: int = Field(default=DEFAULT_CRITERION_SCORE, ge=RATING_MIN, le=RATING_MAX)
    pedagogy_techniques_tools: int = Field(default=DEFAULT_CRITERION_SCORE, ge=RATING_MIN, le=RATING_MAX)
    communication_skills: int = Field(default=DEFAULT_CRITERION_SCORE, ge=RATING_MIN, le=RATING_MAX)
    class_decorum: int = Field(default=DEFAULT_CRITERION_SCORE, ge=RATING_MIN, le=RATING_MAX)
    teaching_aids: int = Field(default=DEFAULT_CRITERION_SCORE, ge=RATING_MIN, le=RATING_MAX)


class CredentialRatingSubmit(CriteriaScores):
    faculty_assignment_id: UUID
    feedback: Optional[str] = ""


class CredentialRatingOut(CriteriaScores):
    id: UUID
    faculty_assignment_id: UUID
    student_id: UUID
    subject_id: UUID
    section_id: UUID
    feedback: Optional[str] = None
    created_at: Optional[datetime] = None


class CredentialRatingResult(ActionResult):
    rating: CredentialRatingOut


class CriterionField(BaseModel):
    """Form metadata for one criterion."""
    key: str
    label: str
    min: int = RATING_MIN
    max: int = RATING_MAX


class RatingContext(BaseModel):
    """Everything the rating form shows for one faculty assignment."""
    faculty_assignment_id: UUID
    faculty_name: str
    subject_id: UUID
    subject_name: str
    section_id: UUID
    section_name: Optional[str] = None
    criteria: List[CriterionField]
    scores: CriteriaScores
    feedback: str = ""
    already_rated: bool = False


class AssignedFaculty(BaseModel):
    """A faculty assignment in the student's section."""
    faculty_assignment_id: UUID
    faculty_id: UUID
    faculty_name: str
    department: str
    position: str
    subject_id: UUID
    subject_name: str
    already_rated: bool = False


# =============================================================================
# Star ratings and faculty_stats view
# =============================================================================


class StarRatingSubmit(BaseModel):
    faculty_id: Optional[UUID] = None
    rating: int = Field(default=0, ge=0, le=RATING_MAX)
    comment: Optional[str] = ""


class StarRatingOut(BaseModel):
    id: UUID
    rating: int
    label: str
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    faculty_id: UUID
    faculty_name: str
    department: str
    position: str


class StarRatingResult(ActionResult):
    rating: Dict[str, Any]


class FacultyStatsOut(BaseModel):
    faculty_id: Optional[UUID] = None
    faculty_name: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    average_rating: Optional[float] = None
    total_ratings: Optional[int] = None


# =============================================================================
# Analytics: admin dashboard
# =============================================================================


class FacultyPerformance(BaseModel):
    """Aggregated credential ratings for one faculty member."""
    faculty_id: UUID
    faculty_name: str
    department: str
    position: str
    total_ratings: int
    subjects_taught: List[str] = Field(default_factory=list)
    feedbacks: List[str] = Field(default_factory=list)
    criteria_averages: Dict[str, float] = Field(default_factory=dict)
    overall_average: float
    consistency_score: float
    improvement_trend: float
    student_satisfaction: PerformanceBand


class PerformanceTrend(BaseModel):
    month: str
    total_ratings: int
    avg_rating: float
    avg_engagement: float
    avg_satisfaction: float
    growth: float = 0.0


class DepartmentInsight(BaseModel):
    department: str
    faculty_count: int
    total_ratings: int
    avg_rating: float
    top_performer: str
    improvement_needed: int
    excellent_performers: int
    participation_rate: int
    efficiency: int


class DistributionBucket(BaseModel):
    name: str
    band: PerformanceBand
    value: int
    percentage: int
    fill: str
    description: str = ""


class DashboardKpis(BaseModel):
    total_faculty: int = 0
    total_ratings: int = 0
    total_students: int = 0
    overall_average: float = 0.0
    excellent_performers: int = 0
    needs_improvement: int = 0
    response_rate: int = 0
    satisfaction_rate: int = 0


class AdminDashboard(BaseModel):
    kpis: DashboardKpis
    faculty: List[FacultyPerformance] = Field(default_factory=list)
    trends: List[PerformanceTrend] = Field(default_factory=list)
    departments: List[DepartmentInsight] = Field(default_factory=list)
    distribution: List[DistributionBucket] = Field(default_factory=list)


# =============================================================================
# Analytics: faculty detail
# =============================================================================


class CriterionAverage(BaseModel):
    key: str
    label: str
    score: float


class RatingDetail(BaseModel):
    id: UUID
    subject_name: Optional[str] = None
    section_name: Optional[str] = None
    criteria: Dict[str, int]
    overall: float
    feedback: Optional[str] = None
    created_at: Optional[datetime] = None


class TimelinePoint(BaseModel):
    rating: int
    overall: float
    date: str


class SubjectPerformance(BaseModel):
    subject: str
    average: float
    ratings: int


class FacultyDetail(BaseModel):
    faculty: FacultyOut
    ratings: List[RatingDetail] = Field(default_factory=list)
    criteria_averages: List[CriterionAverage] = Field(default_factory=list)
    overall_average: float = 0.0
    band: PerformanceBand
    badge: str = "Needs Improvement"
    best_criterion: Optional[CriterionAverage] = None
    timeline: List[TimelinePoint] = Field(default_factory=list)
    subjects: List[SubjectPerformance] = Field(default_factory=list)


# =============================================================================
# Analytics: student dashboard
# =============================================================================


class RatingHistoryItem(BaseModel):
    id: UUID
    faculty_name: str
    subject_name: str
    overall_rating: float
    criteria: Dict[str, int]
    feedback: str = ""
    created_at: Optional[datetime] = None


class StudentFacultyStat(BaseModel):
    faculty_name: str
    subject_name: str
    avg_rating: float
    total_ratings: int
    my_rating: float


class StudentDashboard(BaseModel):
    profile: StudentProfileOut
    total_ratings: int = 0
    average_rating: float = 0.0
    history: List[RatingHistoryItem] = Field(default_factory=list)
    faculty_stats: List[StudentFacultyStat] = Field(default_factory=list)
    criteria_averages: List[CriterionAverage] = Field(default_factory=list)
    distribution: List[DistributionBucket] = Field(default_factory=list)
