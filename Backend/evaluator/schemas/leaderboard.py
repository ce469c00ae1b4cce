# Backend/evaluator/schemas/leaderboard.py

from pydantic import BaseModel
from typing import List, Optional


class LeaderboardEntry(BaseModel):
    """One ranked candidate as shown on the leaderboard."""
    rank: int
    id: int
    first_name: str
    last_name: str
    email: str
    primary_skill: str
    avatar_url: Optional[str] = None
    location: Optional[str] = None
    years_experience: Optional[int] = None
    overall_score: float
    crisis_score: float
    sustainability_score: float
    team_score: float
    percentile: float


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class LeaderboardPage(BaseModel):
    items: List[LeaderboardEntry]
    pagination: Pagination
