# Backend/evaluator/schemas/candidate.py

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Any, Dict, List, Optional
from datetime import datetime

from evaluator.db.json_fields import loads_or_default
from evaluator.services.rubric_catalog import total_possible


# ===========================
# Schemas for Candidate
# ===========================

class CandidateBase(BaseModel):
    """Profile fields shared by intake and responses."""
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    years_experience: Optional[int] = None
    primary_skill: str
    secondary_skills: List[str] = []
    linkedin_url: Optional[str] = None
    github_url: Optional[str] = None
    website_url: Optional[str] = None


class CandidateCreate(CandidateBase):
    """Schema for admin intake of a candidate."""
    pass


class Candidate(CandidateBase):
    """Response schema with full candidate profile."""
    id: int
    created_at: Optional[datetime] = None

    @field_validator("secondary_skills", mode="before")
    @classmethod
    def decode_secondary_skills(cls, v: Any) -> List[str]:
        skills = loads_or_default(v, [], "secondary_skills")
        return [str(skill) for skill in skills]

    class Config:
        from_attributes = True


# ===========================
# Schemas for Evaluation
# ===========================

class EvaluationCreate(BaseModel):
    """Schema for recording one candidate's scored response to a scenario."""
    prompt_id: str
    response: str = Field(min_length=1)
    rubric_scores: Dict[str, Any]
    evaluator_notes: Optional[str] = None


class Evaluation(BaseModel):
    id: int
    prompt_type: str
    response: str
    rubric_scores: Dict[str, Any] = {}
    total_score: float
    max_possible: Optional[int] = None
    evaluator_notes: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("rubric_scores", mode="before")
    @classmethod
    def decode_rubric_scores(cls, v: Any) -> Dict[str, Any]:
        return loads_or_default(v, {}, "rubric_scores")

    @model_validator(mode="after")
    def fill_max_possible(self):
        if self.max_possible is None:
            self.max_possible = total_possible(self.prompt_type)
        return self

    class Config:
        from_attributes = True


# ===========================
# Schemas for Ranking
# ===========================

class RankingSummary(BaseModel):
    overall_score: float
    crisis_score: float
    sustainability_score: float
    team_score: float
    percentile: float
    rank: int
    is_shared: bool = False
    last_shared_at: Optional[datetime] = None


class CandidateDetail(Candidate):
    """Profile, every evaluation and the current ranking (null when unranked)."""
    evaluations: List[Evaluation] = []
    ranking: Optional[RankingSummary] = None


class CandidateSearchResult(Candidate):
    overall_score: Optional[float] = None
    rank: Optional[int] = None


class CandidateRank(BaseModel):
    candidate_id: int
    rank: int
    total: int


# ===========================
# Schemas for Profile Sharing
# ===========================

class ShareLink(BaseModel):
    share_token: str
    share_url: str
