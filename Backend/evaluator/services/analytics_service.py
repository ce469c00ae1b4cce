# Backend/evaluator/services/analytics_service.py
from typing import List

from sqlalchemy import func
from sqlalchemy.orm import Session

from evaluator.models import Candidate, Evaluation, Ranking
from evaluator.schemas.analytics import EvaluationStat, SkillStat
from .rubric_catalog import total_possible


def skill_distribution(db: Session) -> List[SkillStat]:
    """Candidates per primary skill with their mean overall score (unranked count as 0)."""
    rows = (
        db.query(
            Candidate.primary_skill,
            func.count(Candidate.id).label("count"),
            func.avg(func.coalesce(Ranking.overall_score, 0)).label("avg_score"),
        )
        .outerjoin(Ranking, Ranking.candidate_id == Candidate.id)
        .group_by(Candidate.primary_skill)
        .order_by(func.count(Candidate.id).desc(), Candidate.primary_skill.asc())
        .all()
    )
    return [
        SkillStat(skill=skill, count=count, avg_score=float(avg_score or 0))
        for skill, count, avg_score in rows
    ]


def evaluation_metrics(db: Session) -> List[EvaluationStat]:
    """Count and avg/min/max total per prompt, with the prompt's maximum."""
    rows = (
        db.query(
            Evaluation.prompt_type,
            func.count(Evaluation.id),
            func.avg(Evaluation.total_score),
            func.min(Evaluation.total_score),
            func.max(Evaluation.total_score),
        )
        .group_by(Evaluation.prompt_type)
        .order_by(Evaluation.prompt_type.asc())
        .all()
    )
    return [
        EvaluationStat(
            prompt_type=prompt_type,
            count=count,
            avg_score=avg_score,
            min_score=min_score,
            max_score=max_score,
            max_possible=total_possible(prompt_type),
        )
        for prompt_type, count, avg_score, min_score, max_score in rows
    ]
