# Backend/evaluator/routers/share.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from evaluator.db.session import get_db
from evaluator.schemas.candidate import CandidateDetail
from evaluator.services.candidate_service import get_candidate_detail
from evaluator.services.share_service import resolve_share_token

router = APIRouter(
    prefix="/share",
    tags=["Sharing"],
)


@router.get("/{token}", response_model=CandidateDetail)
def get_shared_candidate(token: str, db: Session = Depends(get_db)):
    """
    Read-only candidate profile for anyone holding a share token.
    """
    candidate_id = resolve_share_token(db, token)
    return get_candidate_detail(db, candidate_id)
