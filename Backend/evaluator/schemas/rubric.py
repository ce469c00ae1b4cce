# Backend/evaluator/schemas/rubric.py

from pydantic import BaseModel, Field
from typing import Any, Dict, List

from evaluator.services.rubric_catalog import Rubric


class RubricCategoryOut(BaseModel):
    name: str
    max_score: int
    criteria: List[str] = []


class PromptSummary(BaseModel):
    """A scenario and its rubric, without the prompt text."""
    id: str
    name: str
    description: str
    max_possible: int
    rubric: Dict[str, RubricCategoryOut]

    @classmethod
    def from_rubric(cls, rubric: Rubric) -> "PromptSummary":
        return cls(
            id=rubric.prompt_id,
            name=rubric.name,
            description=rubric.description,
            max_possible=rubric.total_max,
            rubric=_categories_out(rubric),
        )


class PromptDetail(PromptSummary):
    """A scenario with the full prompt shown to candidates."""
    prompt: str

    @classmethod
    def from_rubric(cls, rubric: Rubric) -> "PromptDetail":
        return cls(
            id=rubric.prompt_id,
            name=rubric.name,
            description=rubric.description,
            max_possible=rubric.total_max,
            rubric=_categories_out(rubric),
            prompt=rubric.prompt_text,
        )


def _categories_out(rubric: Rubric) -> Dict[str, RubricCategoryOut]:
    return {
        key: RubricCategoryOut(name=c.name, max_score=c.max_score, criteria=list(c.criteria))
        for key, c in rubric.categories.items()
    }


# --- Score checking ---
class ScoreSet(BaseModel):
    # Values are left untyped so non-numeric scores are reported as validation reasons
    scores: Dict[str, Any] = Field(default_factory=dict)


class ScoreCheckResult(BaseModel):
    prompt_id: str
    valid: bool
    reasons: List[str] = []
    total_score: float
    max_possible: int
