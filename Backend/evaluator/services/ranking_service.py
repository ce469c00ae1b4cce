# Backend/evaluator/services/ranking_service.py
"""
Derived candidate rankings.

Ordering contract: ``overall_score`` descending, ties broken by candidate id
ascending. Rank positions and percentiles are never stored; both come from a
``ROW_NUMBER()`` window over that ordering at query time, so they always
agree with the rows actually ranked.
"""
import logging
import math
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from evaluator.models import Candidate, Evaluation, Ranking
from evaluator.schemas.leaderboard import LeaderboardEntry, LeaderboardPage, Pagination
from .rubric_catalog import total_possible

logger = logging.getLogger(__name__)

# Per-scenario columns on the rankings table
SCENARIO_COLUMNS: Dict[str, str] = {
    "crisis": "crisis_score",
    "sustainability": "sustainability_score",
    "team": "team_score",
}

ORDERING = (Ranking.overall_score.desc(), Ranking.candidate_id.asc())


def ranked_subquery(db: Session):
    """(candidate_id, rank_position, ranked_total) for every ranked candidate."""
    rank_position = func.row_number().over(order_by=ORDERING).label("rank_position")
    ranked_total = func.count().over().label("ranked_total")
    return (
        db.query(Ranking.candidate_id.label("candidate_id"), rank_position, ranked_total)
        .subquery("ranked")
    )


def compute_percentile(rank: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return 100.0 * (1 - (rank - 1) / total)


def compute_overall_score(evaluations: List[Evaluation]) -> float:
    """Mean of the per-scenario totals, each normalised to a 100-point scale."""
    if not evaluations:
        return 0.0
    normalised = [
        100.0 * float(e.total_score) / total_possible(e.prompt_type)
        for e in evaluations
    ]
    return sum(normalised) / len(normalised)


def recompute_ranking(db: Session, candidate_id: int) -> Optional[Ranking]:
    """
    Rebuild the ranking row of one candidate from their evaluations. Runs inside the caller's transaction so
    the commit that stores an evaluation also stores its ranking.
    """
    evaluations = db.query(Evaluation).filter(Evaluation.candidate_id == candidate_id).all()
    ranking = db.query(Ranking).filter(Ranking.candidate_id == candidate_id).one_or_none()

    if not evaluations:
        # Unevaluated candidates are left out of the ranked set entirely
        if ranking is not None:
            db.delete(ranking)
            db.flush()
        return None

    if ranking is None:
        ranking = Ranking(candidate_id=candidate_id, is_shared=False)
        db.add(ranking)

    scenario_scores = {column: 0.0 for column in SCENARIO_COLUMNS.values()}
    for e in evaluations:
        column = SCENARIO_COLUMNS.get(e.prompt_type)
        if column:
            scenario_scores[column] = float(e.total_score)
    for column, value in scenario_scores.items():
        setattr(ranking, column, value)
    ranking.overall_score = compute_overall_score(evaluations)

    db.flush()
    logger.debug(
        "Recomputed ranking for candidate %s: overall=%.2f over %d evaluations",
        candidate_id, ranking.overall_score, len(evaluations),
    )
    return ranking


def count_ranked(db: Session) -> int:
    return db.query(func.count(Ranking.id)).scalar() or 0


def get_standing(db: Session, candidate_id: int) -> Optional[Tuple[int, int]]:
    """(rank, ranked_total) for ``candidate_id``, or None when the candidate is unranked."""
    ranked = ranked_subquery(db)
    row = (
        db.query(ranked.c.rank_position, ranked.c.ranked_total)
        .filter(ranked.c.candidate_id == candidate_id)
        .one_or_none()
    )
    return (row[0], row[1]) if row is not None else None


def get_rank(db: Session, candidate_id: int) -> Optional[int]:
    """1-based rank of ``candidate_id``, or None when the candidate is unranked."""
    standing = get_standing(db, candidate_id)
    return standing[0] if standing else None


def _ranked_rows(db: Session, offset: int, limit: int) -> List[Tuple[Candidate, Ranking, int, int]]:
    ranked = ranked_subquery(db)
    return (
        db.query(Candidate, Ranking, ranked.c.rank_position, ranked.c.ranked_total)
        .join(Ranking, Ranking.candidate_id == Candidate.id)
        .join(ranked, ranked.c.candidate_id == Candidate.id)
        .order_by(ranked.c.rank_position.asc())
        .offset(offset)
        .limit(limit)
        .all()
    )


def _to_entry(candidate: Candidate, ranking: Ranking, rank: int, total: int) -> LeaderboardEntry:
    return LeaderboardEntry(
        rank=rank,
        id=candidate.id,
        first_name=candidate.first_name,
        last_name=candidate.last_name,
        email=candidate.email,
        primary_skill=candidate.primary_skill,
        avatar_url=candidate.avatar_url,
        location=candidate.location,
        years_experience=candidate.years_experience,
        overall_score=ranking.overall_score,
        crisis_score=ranking.crisis_score,
        sustainability_score=ranking.sustainability_score,
        team_score=ranking.team_score,
        percentile=compute_percentile(rank, total),
    )


def get_top_candidates(db: Session, n: int) -> List[LeaderboardEntry]:
    """The first ``min(n, ranked)`` candidates in rank order."""
    if n <= 0:
        return []
    return [_to_entry(*row) for row in _ranked_rows(db, 0, n)]


def get_leaderboard_page(db: Session, page: int, limit: int) -> LeaderboardPage:
    """
    One page of the full ranking. Pages past the end come back empty with
    the pagination totals still filled in.
    """
    if page < 1 or limit < 1:
        raise ValueError("page and limit must be positive")
    total = count_ranked(db)
    rows = _ranked_rows(db, (page - 1) * limit, limit)
    return LeaderboardPage(
        items=[_to_entry(*row) for row in rows],
        pagination=Pagination(
            page=page,
            limit=limit,
            total=total,
            pages=math.ceil(total / limit),
        ),
    )
