"""
FastAPI router module for star ratings and the faculty_stats view.

    GET  /ratings                  recent star ratings, newest first
    POST /ratings                  rate a faculty member 1-5 stars
    GET  /ratings/faculty-stats    average and count per faculty member
"""

import logging
from typing import List

from fastapi import APIRouter, Body, HTTPException, Query

from faculty_rating.core.dependencies import CurrentUserDep, DBSessionDep
from faculty_rating.core.errors import ServiceError, toast_error
from faculty_rating.models.schemas import (
    FacultyStatsOut,
    Notification,
    StarRatingOut,
    StarRatingResult,
    StarRatingSubmit,
)
from faculty_rating.services import ratings as rating_service


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[StarRatingOut])
async def list_ratings(
    db: DBSessionDep,
    user: CurrentUserDep,
    limit: int = Query(default=rating_service.DEFAULT_RECENT_LIMIT, ge=1, le=500),
) -> List[StarRatingOut]:
    try:
        return await rating_service.list_recent_star_ratings(db, limit)
    except Exception as e:
        logger.error(f"Error fetching ratings: {e}", exc_info=True)
        raise toast_error(500, "Error fetching ratings", "Failed to load ratings")


@router.post("", response_model=StarRatingResult, status_code=201)
async def submit_rating(
    db: DBSessionDep,
    user: CurrentUserDep,
    payload: StarRatingSubmit = Body(...),
) -> StarRatingResult:
    try:
        rating = await rating_service.submit_star_rating(db, user, payload)
        return StarRatingResult(
            notification=Notification(title="Rating submitted successfully"),
            rating=rating,
        )

    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.error(f"Error submitting rating for faculty {payload.faculty_id}: {e}", exc_info=True)
        raise toast_error(500, "Error submitting rating", "An unexpected error occurred")


@router.get("/faculty-stats", response_model=List[FacultyStatsOut])
async def faculty_stats(db: DBSessionDep, user: CurrentUserDep) -> List[FacultyStatsOut]:
    try:
        return await rating_service.list_faculty_stats(db)
    except Exception as e:
        logger.error(f"Error fetching faculty stats: {e}", exc_info=True)
        raise toast_error(500, "Error fetching ratings", "Failed to load faculty statistics")
