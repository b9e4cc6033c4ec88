"""
Enumeration definitions for the Faculty Rating backend.

All enums inherit from both `str` and `Enum` so they serialize as plain
strings in Pydantic models and JSON responses.
"""

from enum import Enum
from typing import Dict, List


class RatingCriterion(str, Enum):
    """
    The eight teaching criteria a student scores (1-5) for a faculty assignment.

    Values are the column names of faculty_credentials_ratings.
    """
    ENGAGEMENT = "engagement"
    CONCEPT_UNDERSTANDING = "concept_understanding"
    CONTENT_SPREAD_DEPTH = "content_spread_depth"
    APPLICATION_ORIENTED_TEACHING = "application_oriented_teaching"
    PEDAGOGY_TECHNIQUES_TOOLS = "pedagogy_techniques_tools"
    COMMUNICATION_SKILLS = "communication_skills"
    CLASS_DECORUM = "class_decorum"
    TEACHING_AIDS = "teaching_aids"

    @property
    def label(self) -> str:
        """Full label shown on the rating form."""
        return CRITERION_LABELS[self]

    @property
    def short_label(self) -> str:
        """Compact label used on chart axes."""
        return CRITERION_SHORT_LABELS[self]


CRITERION_LABELS: Dict[RatingCriterion, str] = {
    RatingCriterion.ENGAGEMENT: "Student Engagement & Building Challenge",
    RatingCriterion.CONCEPT_UNDERSTANDING: "Concept - Understanding & Elaboration",
    RatingCriterion.CONTENT_SPREAD_DEPTH: "Content - Spread and Depth of Content",
    RatingCriterion.APPLICATION_ORIENTED_TEACHING: "Application Oriented Teaching",
    RatingCriterion.PEDAGOGY_TECHNIQUES_TOOLS: "Pedagogy - Techniques & Tools",
    RatingCriterion.COMMUNICATION_SKILLS: "Communication Skills and Confidence",
    RatingCriterion.CLASS_DECORUM: "Class Decorum",
    RatingCriterion.TEACHING_AIDS: "Use of Teaching Aids",
}

CRITERION_SHORT_LABELS: Dict[RatingCriterion, str] = {
    RatingCriterion.ENGAGEMENT: "Engagement",
    RatingCriterion.CONCEPT_UNDERSTANDING: "Concept Understanding",
    RatingCriterion.CONTENT_SPREAD_DEPTH: "Content Depth",
    RatingCriterion.APPLICATION_ORIENTED_TEACHING: "Application Teaching",
    RatingCriterion.PEDAGOGY_TECHNIQUES_TOOLS: "Pedagogy Tools",
    RatingCriterion.COMMUNICATION_SKILLS: "Communication",
    RatingCriterion.CLASS_DECORUM: "Class Decorum",
    RatingCriterion.TEACHING_AIDS: "Teaching Aids",
}

# Column order used everywhere criteria are read, written or averaged
CRITERIA_COLUMNS: List[str] = [c.value for c in RatingCriterion]


class PerformanceBand(str, Enum):
    """
    Banding of an average score on the 1-5 scale.

    - Excellent: score >= 4.5
    - Good: 4.0 <= score < 4.5
    - Average: 3.5 <= score < 4.0
    - Needs Improvement: score < 3.5
    """
    EXCELLENT = "Excellent"
    GOOD = "Good"
    AVERAGE = "Average"
    NEEDS_IMPROVEMENT = "Needs Improvement"

    @classmethod
    def from_score(cls, score: float) -> "PerformanceBand":
        if score >= EXCELLENT_THRESHOLD:
            return cls.EXCELLENT
        if score >= GOOD_THRESHOLD:
            return cls.GOOD
        if score >= AVERAGE_THRESHOLD:
            return cls.AVERAGE
        return cls.NEEDS_IMPROVEMENT


EXCELLENT_THRESHOLD: float = 4.5
GOOD_THRESHOLD: float = 4.0
AVERAGE_THRESHOLD: float = 3.5

# Faculty detail badge uses a coarser three-label scale
DETAIL_EXCELLENT_THRESHOLD: float = 4.0
DETAIL_GOOD_THRESHOLD: float = 3.5


def detail_badge(score: float) -> str:
    """Badge text on the faculty detail page: Excellent, Good or Needs Improvement."""
    if score >= DETAIL_EXCELLENT_THRESHOLD:
        return PerformanceBand.EXCELLENT.value
    if score >= DETAIL_GOOD_THRESHOLD:
        return PerformanceBand.GOOD.value
    return PerformanceBand.NEEDS_IMPROVEMENT.value


class StarRating(int, Enum):
    """Single 1-5 star rating with its display word."""
    POOR = 1
    FAIR = 2
    GOOD = 3
    VERY_GOOD = 4
    EXCELLENT = 5

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()
