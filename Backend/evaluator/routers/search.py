# Backend/evaluator/routers/search.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List

from evaluator.config import settings
from evaluator.db.session import get_db
from evaluator.schemas.candidate import CandidateSearchResult
from evaluator.services.candidate_service import search_candidates

router = APIRouter(tags=["Search"])


@router.get("/search", response_model=List[CandidateSearchResult])
def search(
    q: str = Query(..., min_length=1, description="Matches name, email or primary skill"),
    db: Session = Depends(get_db),
):
    term = q.strip()
    if not term:
        return []
    return search_candidates(db, term, settings.SEARCH_RESULT_LIMIT)
