# Backend/evaluator/routers/prompts.py
from fastapi import APIRouter
from typing import List

from evaluator.errors import NotFoundError
from evaluator.schemas.rubric import PromptDetail, PromptSummary, ScoreCheckResult, ScoreSet
from evaluator.services.rubric_catalog import get_rubric, list_rubrics, total_possible
from evaluator.services.scoring import calculate_total_score, score_errors

router = APIRouter(
    prefix="/prompts",
    tags=["Prompts & Rubrics"],
)


@router.get("", response_model=List[PromptSummary])
def get_all_prompts():
    """
    Lists every scenario with its rubric, in catalog order.
    The prompt text itself is only returned by the single-prompt endpoint.
    """
    return [PromptSummary.from_rubric(r) for r in list_rubrics()]


@router.get("/{prompt_id}", response_model=PromptDetail)
def get_prompt(prompt_id: str):
    rubric = get_rubric(prompt_id)
    if rubric is None:
        raise NotFoundError(f"Prompt '{prompt_id}' not found")
    return PromptDetail.from_rubric(rubric)


@router.post("/{prompt_id}/score", response_model=ScoreCheckResult)
def check_scores(prompt_id: str, body: ScoreSet):
    """
    Validates a score set against the prompt's rubric and totals it.
    The total is returned even when the set is invalid, so partially
    scored responses can show progress.
    """
    if get_rubric(prompt_id) is None:
        raise NotFoundError(f"Prompt '{prompt_id}' not found")
    reasons = score_errors(prompt_id, body.scores)
    return ScoreCheckResult(
        prompt_id=prompt_id,
        valid=not reasons,
        reasons=reasons,
        total_score=calculate_total_score(prompt_id, body.scores),
        max_possible=total_possible(prompt_id),
    )
