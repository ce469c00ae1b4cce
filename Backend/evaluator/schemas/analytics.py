# Backend/evaluator/schemas/analytics.py

from pydantic import BaseModel
from typing import Optional


class SkillStat(BaseModel):
    skill: str
    count: int
    avg_score: float


class EvaluationStat(BaseModel):
    prompt_type: str
    count: int
    avg_score: Optional[float] = None
    min_score: Optional[float] = None
    max_score: Optional[float] = None
    max_possible: int
