# Backend/evaluator/services/evaluation_service.py
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from evaluator.db.json_fields import dumps
from evaluator.errors import AlreadyExistsError, NotFoundError, ScoreValidationError
from evaluator.models import Candidate, Evaluation
from .ranking_service import recompute_ranking
from .rubric_catalog import get_rubric
from .scoring import calculate_total_score, score_errors

logger = logging.getLogger(__name__)


def record_evaluation(
    db: Session,
    candidate_id: int,
    prompt_id: str,
    response: str,
    rubric_scores: Dict[str, Any],
    evaluator_notes: Optional[str] = None,
) -> Evaluation:
    """
    Store one scored response and synchronously recompute the candidate's
    ranking in the same transaction, so a ranking read right after this call
    already reflects the new score.

    Raises NotFoundError for an unknown candidate or prompt,
    ScoreValidationError when the scores do not fit the rubric and
    AlreadyExistsError when the candidate was already evaluated on the prompt.
    """
    if get_rubric(prompt_id) is None:
        raise NotFoundError(f"Prompt '{prompt_id}' not found")
    if db.get(Candidate, candidate_id) is None:
        raise NotFoundError(f"Candidate {candidate_id} not found")

    errors = score_errors(prompt_id, rubric_scores)
    if errors:
        raise ScoreValidationError(f"Invalid scores for prompt '{prompt_id}'", errors)

    evaluation = Evaluation(
        candidate_id=candidate_id,
        prompt_type=prompt_id,
        response=response,
        rubric_scores=dumps(rubric_scores),
        total_score=calculate_total_score(prompt_id, rubric_scores),
        evaluator_notes=evaluator_notes,
    )
    db.add(evaluation)
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        raise AlreadyExistsError(
            f"Candidate {candidate_id} already has an evaluation for prompt '{prompt_id}'"
        )

    recompute_ranking(db, candidate_id)
    db.commit()
    db.refresh(evaluation)
    return evaluation


@dataclass
class BulkLoadResult:
    created: int = 0
    duplicates: int = 0
    rejected: int = 0
    errors: List[str] = field(default_factory=list)


def bulk_record_evaluations(db: Session, rows: Iterable[Dict[str, Any]]) -> BulkLoadResult:
    """
    Load many evaluations. Each row commits on its own; duplicates are logged
    and skipped, invalid rows are reported and skipped. Storage failures
    propagate to the caller.

    A row is ``{candidate_id | email, prompt_id, response, rubric_scores,
    evaluator_notes?}``.
    """
    result = BulkLoadResult()
    for index, row in enumerate(rows):
        try:
            if not isinstance(row, Mapping):
                raise TypeError(f"expected an object, got {type(row).__name__}")
            candidate_id = _resolve_candidate_id(db, row)
            record_evaluation(
                db,
                candidate_id=candidate_id,
                prompt_id=row.get("prompt_id"),
                response=row.get("response") or "",
                rubric_scores=row.get("rubric_scores") or {},
                evaluator_notes=row.get("evaluator_notes"),
            )
            result.created += 1
        except AlreadyExistsError as e:
            logger.warning("Row %d skipped: %s", index, e.message)
            result.duplicates += 1
        except (NotFoundError, ScoreValidationError) as e:
            reasons = getattr(e, "reasons", [])
            detail = f"{e.message}: {'; '.join(reasons)}" if reasons else e.message
            logger.warning("Row %d rejected: %s", index, detail)
            result.errors.append(f"row {index}: {detail}")
            result.rejected += 1
        except (TypeError, ValueError) as e:
            detail = f"malformed row ({e})"
            logger.warning("Row %d rejected: %s", index, detail)
            result.errors.append(f"row {index}: {detail}")
            result.rejected += 1
    return result


def _resolve_candidate_id(db: Session, row: Dict[str, Any]) -> int:
    if row.get("candidate_id") is not None:
        return int(row["candidate_id"])
    email = row.get("email")
    if email:
        candidate_id = db.query(Candidate.id).filter(Candidate.email == email).scalar()
        if candidate_id is not None:
            return candidate_id
    raise NotFoundError(f"No candidate matches {email or 'row without candidate_id or email'}")
