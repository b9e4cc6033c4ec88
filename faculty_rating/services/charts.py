"""
Plotly chart builders for the dashboards.

Each builder takes analytics models, lays them out in a small pandas
DataFrame and returns the Plotly figure as a JSON-ready dict (the same
structure `plotly.js` consumes). An empty input yields an empty figure
that still carries its title.

Bundles:
- admin_dashboard_charts: comparison, trend, distribution, departments
- faculty_detail_charts: criteria bars, criteria radar, timeline, subjects
- student_dashboard_charts: criteria, distribution, my rating vs average,
  rating trend
"""

import json
from typing import Any, Dict, List

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from faculty_rating.models.enums import RatingCriterion
from faculty_rating.models.schemas import (
    AdminDashboard,
    CriterionAverage,
    DepartmentInsight,
    DistributionBucket,
    FacultyDetail,
    FacultyPerformance,
    PerformanceTrend,
    RatingHistoryItem,
    StudentDashboard,
    StudentFacultyStat,
    SubjectPerformance,
    TimelinePoint,
)
from faculty_rating.services.analytics import round_half_up


ChartJSON = Dict[str, Any]

SCORE_RANGE = [0, 5]
NO_DATA_TEXT = "No ratings yet"


def figure_json(fig: go.Figure) -> ChartJSON:
    return json.loads(fig.to_json())


def empty_figure(title: str) -> ChartJSON:
    fig = go.Figure()
    fig.update_layout(
        title=title,
        xaxis={"visible": False},
        yaxis={"visible": False},
        annotations=[{
            "text": NO_DATA_TEXT,
            "xref": "paper",
            "yref": "paper",
            "showarrow": False,
            "font": {"size": 16},
        }],
    )
    return figure_json(fig)


def _one_decimal(value: float) -> float:
    return round_half_up(value, 1)


# =============================================================================
# Admin dashboard
# =============================================================================

def faculty_comparison_chart(faculty: List[FacultyPerformance]) -> ChartJSON:
    title = "Faculty Performance Comparison"
    if not faculty:
        return empty_figure(title)

    df = pd.DataFrame([
        {
            "Faculty": f.faculty_name,
            "Overall": _one_decimal(f.overall_average),
            "Engagement": _one_decimal(f.criteria_averages.get(RatingCriterion.ENGAGEMENT.value, 0.0)),
            "Communication": _one_decimal(
                f.criteria_averages.get(RatingCriterion.COMMUNICATION_SKILLS.value, 0.0)
            ),
            "Pedagogy": _one_decimal(
                f.criteria_averages.get(RatingCriterion.PEDAGOGY_TECHNIQUES_TOOLS.value, 0.0)
            ),
            "Consistency": _one_decimal(f.consistency_score),
        }
        for f in faculty
    ])
    fig = px.bar(
        df,
        x="Faculty",
        y=["Overall", "Engagement", "Communication", "Pedagogy", "Consistency"],
        barmode="group",
        title=title,
        range_y=SCORE_RANGE,
    )
    fig.update_layout(yaxis_title="Score", legend_title_text="Metric")
    return figure_json(fig)


def performance_trend_chart(trends: List[PerformanceTrend]) -> ChartJSON:
    title = "Performance Trends"
    if not trends:
        return empty_figure(title)

    df = pd.DataFrame([
        {
            "Month": t.month,
            "Performance": _one_decimal(t.avg_rating),
            "Engagement": _one_decimal(t.avg_engagement),
            "Satisfaction": _one_decimal(t.avg_satisfaction),
            "Participation": t.total_ratings,
            "Growth %": t.growth,
        }
        for t in trends
    ])
    fig = px.line(
        df,
        x="Month",
        y=["Performance", "Engagement", "Satisfaction"],
        markers=True,
        hover_data=["Participation", "Growth %"],
        title=title,
        range_y=SCORE_RANGE,
    )
    fig.update_layout(yaxis_title="Average score", legend_title_text="Metric")
    return figure_json(fig)


def distribution_chart(buckets: List[DistributionBucket], title: str) -> ChartJSON:
    """Pie of band counts coloured with each bucket's fill."""
    if not buckets or sum(b.value for b in buckets) == 0:
        return empty_figure(title)

    df = pd.DataFrame([{"Band": b.name, "Count": b.value} for b in buckets])
    fig = px.pie(
        df,
        names="Band",
        values="Count",
        color="Band",
        color_discrete_map={b.name: b.fill for b in buckets},
        title=title,
    )
    return figure_json(fig)


def department_chart(departments: List[DepartmentInsight]) -> ChartJSON:
    title = "Department Performance"
    if not departments:
        return empty_figure(title)

    df = pd.DataFrame([
        {
            "Department": d.department,
            "Score": _one_decimal(d.avg_rating),
            "Faculty": d.faculty_count,
            "Efficiency": d.efficiency,
            "Excellent": d.excellent_performers,
            "Needs Improvement": d.improvement_needed,
        }
        for d in departments
    ])
    fig = px.bar(
        df,
        x="Department",
        y="Score",
        text_auto=True,
        hover_data=["Faculty", "Efficiency", "Excellent", "Needs Improvement"],
        title=title,
        range_y=SCORE_RANGE,
    )
    return figure_json(fig)


def admin_dashboard_charts(dashboard: AdminDashboard) -> Dict[str, ChartJSON]:
    return {
        "faculty_comparison": faculty_comparison_chart(dashboard.faculty),
        "performance_trends": performance_trend_chart(dashboard.trends),
        "performance_distribution": distribution_chart(
            dashboard.distribution, "Performance Distribution"
        ),
        "department_performance": department_chart(dashboard.departments),
    }


# =============================================================================
# Faculty detail
# =============================================================================

def criteria_bar_chart(averages: List[CriterionAverage], title: str = "Criteria Scores") -> ChartJSON:
    if not averages:
        return empty_figure(title)

    df = pd.DataFrame([{"Criterion": a.label, "Score": a.score} for a in averages])
    fig = px.bar(df, x="Criterion", y="Score", text_auto=".1f", title=title, range_y=SCORE_RANGE)
    return figure_json(fig)


def criteria_radar_chart(averages: List[CriterionAverage]) -> ChartJSON:
    title = "Criteria Profile"
    if not averages:
        return empty_figure(title)

    df = pd.DataFrame([{"Criterion": a.label, "Score": a.score} for a in averages])
    fig = px.line_polar(df, r="Score", theta="Criterion", line_close=True, range_r=SCORE_RANGE, title=title)
    fig.update_traces(fill="toself")
    return figure_json(fig)


def timeline_chart(timeline: List[TimelinePoint]) -> ChartJSON:
    title = "Performance Over Time"
    if not timeline:
        return empty_figure(title)

    df = pd.DataFrame([
        {"Rating": p.rating, "Overall": p.overall, "Date": p.date} for p in timeline
    ])
    fig = px.line(df, x="Rating", y="Overall", markers=True, hover_data=["Date"], title=title, range_y=SCORE_RANGE)
    return figure_json(fig)


def subject_chart(subjects: List[SubjectPerformance]) -> ChartJSON:
    title = "Subject-wise Performance"
    if not subjects:
        return empty_figure(title)

    df = pd.DataFrame([
        {"Subject": s.subject, "Average": s.average, "Ratings": s.ratings} for s in subjects
    ])
    fig = px.bar(
        df, x="Subject", y="Average", text_auto=".2f", hover_data=["Ratings"],
        title=title, range_y=SCORE_RANGE,
    )
    return figure_json(fig)


def faculty_detail_charts(detail: FacultyDetail) -> Dict[str, ChartJSON]:
    has_ratings = bool(detail.ratings)
    averages = detail.criteria_averages if has_ratings else []
    return {
        "criteria_scores": criteria_bar_chart(averages),
        "criteria_radar": criteria_radar_chart(averages),
        "timeline": timeline_chart(detail.timeline),
        "subject_performance": subject_chart(detail.subjects),
    }


# =============================================================================
# Student dashboard
# =============================================================================

def student_criteria_chart(averages: List[CriterionAverage]) -> ChartJSON:
    title = "My Average Scores by Criterion"
    if not averages:
        return empty_figure(title)

    df = pd.DataFrame([{"Criterion": a.label, "Average": a.score} for a in averages])
    fig = px.bar(
        df, x="Average", y="Criterion", orientation="h", text_auto=True,
        title=title, range_x=SCORE_RANGE,
    )
    return figure_json(fig)


def my_rating_comparison_chart(stats: List[StudentFacultyStat]) -> ChartJSON:
    """The student's rating of each faculty/subject against its average."""
    title = "My Rating vs Average"
    if not stats:
        return empty_figure(title)

    df = pd.DataFrame([
        {
            # Last word of the name keeps the axis compact
            "Faculty": s.faculty_name.split(" ")[-1],
            "Subject": s.subject_name,
            "My Rating": _one_decimal(s.my_rating),
            "Average Rating": _one_decimal(s.avg_rating),
            "Ratings": s.total_ratings,
        }
        for s in stats
    ])
    fig = px.bar(
        df,
        x="Faculty",
        y=["My Rating", "Average Rating"],
        barmode="group",
        hover_data=["Subject", "Ratings"],
        title=title,
        range_y=SCORE_RANGE,
    )
    fig.update_layout(yaxis_title="Score", legend_title_text="")
    return figure_json(fig)


def rating_trend_chart(history: List[RatingHistoryItem]) -> ChartJSON:
    """Student's submissions oldest first."""
    title = "My Rating Trend"
    if not history:
        return empty_figure(title)

    rows = []
    for index, item in enumerate(reversed(history), start=1):
        rows.append({
            "Rating": index,
            "Overall": _one_decimal(item.overall_rating),
            "Engagement": item.criteria.get(RatingCriterion.ENGAGEMENT.value),
            "Communication": item.criteria.get(RatingCriterion.COMMUNICATION_SKILLS.value),
            "Understanding": item.criteria.get(RatingCriterion.CONCEPT_UNDERSTANDING.value),
            "Date": item.created_at.date().isoformat() if item.created_at else "",
        })
    df = pd.DataFrame(rows)
    fig = px.line(
        df,
        x="Rating",
        y=["Overall", "Engagement", "Communication", "Understanding"],
        markers=True,
        hover_data=["Date"],
        title=title,
        range_y=SCORE_RANGE,
    )
    return figure_json(fig)


def student_dashboard_charts(dashboard: StudentDashboard) -> Dict[str, ChartJSON]:
    return {
        "criteria_averages": student_criteria_chart(dashboard.criteria_averages),
        "rating_distribution": distribution_chart(dashboard.distribution, "My Rating Distribution"),
        "faculty_comparison": my_rating_comparison_chart(dashboard.faculty_stats),
        "rating_trend": rating_trend_chart(dashboard.history),
    }
