# Backend/evaluator/routers/candidates.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from evaluator.config import settings
from evaluator.db.session import get_db
from evaluator.errors import NotFoundError
from evaluator.schemas.candidate import (
    CandidateDetail,
    CandidateRank,
    CandidateSearchResult,
    Evaluation,
    EvaluationCreate,
    ShareLink,
)
from evaluator.services.candidate_service import (
    candidates_by_skill,
    get_candidate_detail,
    get_candidate_or_404,
)
from evaluator.services.evaluation_service import record_evaluation
from evaluator.services.ranking_service import get_standing
from evaluator.services.share_service import issue_share_token

router = APIRouter(
    prefix="/candidates",
    tags=["Candidates"],
)


# Declared before /{candidate_id} so "skill" is never parsed as an id
@router.get("/skill/{skill}", response_model=List[CandidateSearchResult])
def get_candidates_by_skill(skill: str, db: Session = Depends(get_db)):
    """
    Candidates whose primary skill is `skill` or whose secondary skills include it,
    best overall score first.
    """
    return candidates_by_skill(db, skill, settings.SKILL_RESULT_LIMIT)


@router.get("/{candidate_id}", response_model=CandidateDetail)
def get_candidate(candidate_id: int, db: Session = Depends(get_db)):
    """
    Fetch a candidate's profile with every evaluation and their current ranking.
    """
    return get_candidate_detail(db, candidate_id)


@router.get("/{candidate_id}/rank", response_model=CandidateRank)
def get_candidate_rank(candidate_id: int, db: Session = Depends(get_db)):
    get_candidate_or_404(db, candidate_id)
    standing = get_standing(db, candidate_id)
    if standing is None:
        raise NotFoundError(f"Candidate {candidate_id} is not ranked yet")
    rank, total = standing
    return CandidateRank(candidate_id=candidate_id, rank=rank, total=total)


@router.post(
    "/{candidate_id}/evaluations",
    response_model=Evaluation,
    status_code=status.HTTP_201_CREATED,
)
def create_evaluation(
    candidate_id: int,
    body: EvaluationCreate,
    db: Session = Depends(get_db),
):
    """
    Record a candidate's scored response to one scenario.
    The candidate's ranking is recomputed before this returns.
    """
    evaluation = record_evaluation(
        db,
        candidate_id=candidate_id,
        prompt_id=body.prompt_id,
        response=body.response,
        rubric_scores=body.rubric_scores,
        evaluator_notes=body.evaluator_notes,
    )
    return Evaluation.model_validate(evaluation)


@router.post("/{candidate_id}/share", response_model=ShareLink)
def share_candidate(candidate_id: int, db: Session = Depends(get_db)):
    """
    Create a shareable link for a candidate's profile. Re-sharing replaces
    the previous link.
    """
    return issue_share_token(db, candidate_id)
