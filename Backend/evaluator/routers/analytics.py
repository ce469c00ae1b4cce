# Backend/evaluator/routers/analytics.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from evaluator.db.session import get_db
from evaluator.schemas.analytics import EvaluationStat, SkillStat
from evaluator.services.analytics_service import evaluation_metrics, skill_distribution

router = APIRouter(
    prefix="/analytics",
    tags=["Analytics"],
)


@router.get("/skills", response_model=List[SkillStat])
def get_skill_distribution(db: Session = Depends(get_db)):
    """Skill distribution for the dashboard heatmap."""
    return skill_distribution(db)


@router.get("/evaluations", response_model=List[EvaluationStat])
def get_evaluation_metrics(db: Session = Depends(get_db)):
    return evaluation_metrics(db)
