# Backend/evaluator/services/candidate_service.py
import logging
from typing import Iterable, List, Tuple

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from evaluator.db.json_fields import dumps
from evaluator.errors import AlreadyExistsError, NotFoundError
from evaluator.models import Candidate, Ranking
from evaluator.schemas.candidate import (
    Candidate as CandidateOut,
    CandidateCreate,
    CandidateDetail,
    CandidateSearchResult,
    Evaluation as EvaluationOut,
    RankingSummary,
)
from .ranking_service import compute_percentile, get_standing, ranked_subquery

logger = logging.getLogger(__name__)


def create_candidate(db: Session, data: CandidateCreate) -> Candidate:
    """Admin intake of a single candidate. Emails are unique."""
    fields = data.model_dump()
    fields["secondary_skills"] = dumps(fields["secondary_skills"])
    candidate = Candidate(**fields)
    db.add(candidate)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise AlreadyExistsError(f"A candidate with email {data.email} already exists")
    db.refresh(candidate)
    return candidate


def import_candidates(db: Session, rows: Iterable[CandidateCreate]) -> Tuple[int, int]:
    """Bulk intake; duplicate emails are skipped. Returns (inserted, skipped)."""
    inserted = skipped = 0
    for row in rows:
        try:
            create_candidate(db, row)
            inserted += 1
        except AlreadyExistsError:
            logger.warning("Skipping duplicate candidate %s", row.email)
            skipped += 1
    return inserted, skipped


def get_candidate_or_404(db: Session, candidate_id: int) -> Candidate:
    candidate = db.get(Candidate, candidate_id)
    if candidate is None:
        raise NotFoundError(f"Candidate {candidate_id} not found")
    return candidate


def get_candidate_detail(db: Session, candidate_id: int) -> CandidateDetail:
    """Profile, all evaluations (with response text) and ranking with rank."""
    candidate = (
        db.query(Candidate)
        .options(selectinload(Candidate.evaluations), selectinload(Candidate.ranking))
        .filter(Candidate.id == candidate_id)
        .one_or_none()
    )
    if candidate is None:
        raise NotFoundError(f"Candidate {candidate_id} not found")

    ranking = None
    if candidate.ranking is not None:
        r = candidate.ranking
        rank, total = get_standing(db, candidate.id)
        ranking = RankingSummary(
            overall_score=r.overall_score,
            crisis_score=r.crisis_score,
            sustainability_score=r.sustainability_score,
            team_score=r.team_score,
            percentile=compute_percentile(rank, total),
            rank=rank,
            is_shared=r.is_shared,
            last_shared_at=r.last_shared_at,
        )

    profile = CandidateOut.model_validate(candidate)
    return CandidateDetail(
        **profile.model_dump(),
        evaluations=[EvaluationOut.model_validate(e) for e in candidate.evaluations],
        ranking=ranking,
    )


def _search_results(rows) -> List[CandidateSearchResult]:
    results = []
    for candidate, overall_score, rank in rows:
        profile = CandidateOut.model_validate(candidate)
        results.append(CandidateSearchResult(**profile.model_dump(), overall_score=overall_score, rank=rank))
    return results


def _like_escape(text: str) -> str:
    """Make ``text`` match literally inside a LIKE pattern escaped with a backslash."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def search_candidates(db: Session, query: str, limit: int) -> List[CandidateSearchResult]:
    """Case-insensitive substring match over name, email and primary skill."""
    pattern = f"%{_like_escape(query)}%"
    ranked = ranked_subquery(db)
    rows = (
        db.query(Candidate, Ranking.overall_score, ranked.c.rank_position)
        .outerjoin(Ranking, Ranking.candidate_id == Candidate.id)
        .outerjoin(ranked, ranked.c.candidate_id == Candidate.id)
        .filter(
            or_(
                Candidate.first_name.ilike(pattern, escape="\\"),
                Candidate.last_name.ilike(pattern, escape="\\"),
                Candidate.email.ilike(pattern, escape="\\"),
                Candidate.primary_skill.ilike(pattern, escape="\\"),
            )
        )
        .order_by(Candidate.id.asc())
        .limit(limit)
        .all()
    )
    return _search_results(rows)


def candidates_by_skill(db: Session, skill: str, limit: int) -> List[CandidateSearchResult]:
    """Candidates whose primary skill is ``skill`` or whose secondary skills list it."""
    ranked = ranked_subquery(db)
    rows = (
        db.query(Candidate, Ranking.overall_score, ranked.c.rank_position)
        .outerjoin(Ranking, Ranking.candidate_id == Candidate.id)
        .outerjoin(ranked, ranked.c.candidate_id == Candidate.id)
        .filter(
            or_(
                Candidate.primary_skill == skill,
                Candidate.secondary_skills.like(f"%{_like_escape(dumps(skill))}%", escape="\\"),
            )
        )
        .order_by(Ranking.overall_score.desc().nulls_last(), Candidate.id.asc())
        .limit(limit)
        .all()
    )
    return _search_results(rows)
