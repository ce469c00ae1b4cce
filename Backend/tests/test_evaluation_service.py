"""
Test: recording evaluations, duplicates, and bulk loading.
"""
import json

import pytest

from evaluator.errors import AlreadyExistsError, NotFoundError, ScoreValidationError
from evaluator.models import Evaluation, Ranking
from evaluator.services.evaluation_service import bulk_record_evaluations, record_evaluation


class TestRecordEvaluation:
    def test_stores_scores_and_total(self, db, make_candidate, scores_for):
        candidate = make_candidate()
        scores = scores_for("sustainability", 0.4)
        evaluation = record_evaluation(db, candidate.id, "sustainability", "My plan", scores, "solid")

        assert evaluation.id is not None
        assert evaluation.total_score == pytest.approx(40.0)
        assert json.loads(evaluation.rubric_scores) == scores
        assert evaluation.evaluator_notes == "solid"
        assert db.query(Ranking).filter_by(candidate_id=candidate.id).count() == 1

    def test_duplicate_is_conflict(self, db, make_candidate, scores_for):
        candidate = make_candidate()
        record_evaluation(db, candidate.id, "crisis", "first", scores_for("crisis", 0.5))
        with pytest.raises(AlreadyExistsError):
            record_evaluation(db, candidate.id, "crisis", "second", scores_for("crisis", 1.0))

        stored = db.query(Evaluation).filter_by(candidate_id=candidate.id).all()
        assert [e.response for e in stored] == ["first"]

    def test_invalid_scores_carry_reasons(self, db, make_candidate, scores_for):
        candidate = make_candidate()
        scores = {**scores_for("crisis"), "decisionMaking": 25}
        with pytest.raises(ScoreValidationError) as exc_info:
            record_evaluation(db, candidate.id, "crisis", "answer", scores)
        assert any("decisionMaking" in r for r in exc_info.value.reasons)
        assert db.query(Evaluation).count() == 0

    def test_unknown_prompt(self, db, make_candidate):
        with pytest.raises(NotFoundError):
            record_evaluation(db, make_candidate().id, "negotiation", "answer", {})

    def test_unknown_candidate(self, db, scores_for):
        with pytest.raises(NotFoundError):
            record_evaluation(db, 42, "crisis", "answer", scores_for("crisis"))


class TestBulkRecordEvaluations:
    def test_counts_created_duplicates_and_rejected(self, db, make_candidate, scores_for):
        alice = make_candidate(email="alice@example.com")
        bob = make_candidate(email="bob@example.com")
        rows = [
            {"candidate_id": alice.id, "prompt_id": "crisis", "response": "a", "rubric_scores": scores_for("crisis", 0.5)},
            {"email": "bob@example.com", "prompt_id": "team", "response": "b", "rubric_scores": scores_for("team", 0.7)},
            {"candidate_id": alice.id, "prompt_id": "crisis", "response": "again", "rubric_scores": scores_for("crisis", 0.9)},
            {"email": "nobody@example.com", "prompt_id": "team", "response": "c", "rubric_scores": scores_for("team")},
            {"candidate_id": bob.id, "prompt_id": "crisis", "response": "d", "rubric_scores": {"leadership": 5}},
            {"candidate_id": "not-a-number", "prompt_id": "crisis", "response": "e", "rubric_scores": {}},
        ]

        result = bulk_record_evaluations(db, rows)

        assert result.created == 2
        assert result.duplicates == 1
        assert result.rejected == 3
        assert len(result.errors) == 3
        assert db.query(Evaluation).count() == 2
        assert db.query(Ranking).count() == 2

    def test_duplicate_does_not_undo_earlier_rows(self, db, make_candidate, scores_for):
        candidate = make_candidate()
        rows = [
            {"candidate_id": candidate.id, "prompt_id": "crisis", "response": "a", "rubric_scores": scores_for("crisis", 0.5)},
            {"candidate_id": candidate.id, "prompt_id": "crisis", "response": "a", "rubric_scores": scores_for("crisis", 0.5)},
            {"candidate_id": candidate.id, "prompt_id": "team", "response": "b", "rubric_scores": scores_for("team", 0.5)},
        ]
        result = bulk_record_evaluations(db, rows)
        assert (result.created, result.duplicates) == (2, 1)
        ranking = db.query(Ranking).filter_by(candidate_id=candidate.id).one()
        assert ranking.crisis_score == 50
        assert ranking.team_score == 50

    def test_non_object_rows_are_rejected(self, db, make_candidate, scores_for):
        candidate = make_candidate()
        rows = [
            "not a row",
            ["also", "not"],
            {"candidate_id": candidate.id, "prompt_id": "crisis", "response": "a", "rubric_scores": scores_for("crisis", 0.5)},
        ]
        result = bulk_record_evaluations(db, rows)
        assert result.created == 1
        assert result.rejected == 2
        assert result.errors[0] == "row 0: malformed row (expected an object, got str)"
        assert db.query(Evaluation).count() == 1
