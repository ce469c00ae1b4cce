# Backend/evaluator/routers/leaderboard.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from evaluator.config import settings
from evaluator.db.session import get_db
from evaluator.schemas.leaderboard import LeaderboardEntry, LeaderboardPage
from evaluator.services.ranking_service import get_leaderboard_page, get_top_candidates

router = APIRouter(
    prefix="/leaderboard",
    tags=["Leaderboard"],
)


def parse_positive_int(value: Optional[str], fallback: int) -> int:
    """Parse a query value, falling back when it is missing, unparsable or not positive."""
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return fallback
    return parsed if parsed > 0 else fallback


@router.get("/top", response_model=List[LeaderboardEntry])
def get_top_leaderboard(
    n: Optional[str] = Query(None, description="Number of candidates to return"),
    db: Session = Depends(get_db),
):
    """Returns the top N ranked candidates (default LEADERBOARD_TOP_N)."""
    limit = min(parse_positive_int(n, settings.LEADERBOARD_TOP_N), settings.MAX_PAGE_SIZE)
    return get_top_candidates(db, limit)


@router.get("", response_model=LeaderboardPage)
def get_leaderboard(
    page: Optional[str] = Query(None, description="1-based page number"),
    limit: Optional[str] = Query(None, description="Page size"),
    db: Session = Depends(get_db),
):
    """
    Returns one page of the full ranking. Requesting a page past the end
    yields an empty list with the pagination totals still filled in.
    """
    page_number = parse_positive_int(page, 1)
    page_size = min(parse_positive_int(limit, settings.DEFAULT_PAGE_SIZE), settings.MAX_PAGE_SIZE)
    return get_leaderboard_page(db, page_number, page_size)
