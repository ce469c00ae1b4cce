"""
Test: candidate detail, search, skill lookup, intake, and stored-JSON recovery.
"""
import pytest

from evaluator.db.json_fields import loads_or_default
from evaluator.errors import AlreadyExistsError, NotFoundError
from evaluator.models import Evaluation
from evaluator.schemas.candidate import CandidateCreate
from evaluator.services.candidate_service import (
    candidates_by_skill,
    create_candidate,
    get_candidate_detail,
    import_candidates,
    search_candidates,
)
from evaluator.services.evaluation_service import record_evaluation


class TestLoadsOrDefault:
    def test_valid_list(self):
        assert loads_or_default('["a", "b"]', [], "skills") == ["a", "b"]

    def test_corrupt(self):
        assert loads_or_default("[not json", [], "skills") == []

    def test_wrong_container_type(self):
        assert loads_or_default('{"a": 1}', [], "skills") == []

    def test_missing(self):
        assert loads_or_default(None, {}, "scores") == {}
        assert loads_or_default("", {}, "scores") == {}

    def test_already_decoded(self):
        assert loads_or_default({"x": 1}, {}, "scores") == {"x": 1}


class TestCandidateDetail:
    def test_profile_evaluations_and_ranking(self, db, make_candidate, scores_for):
        candidate = make_candidate(first_name="Ada")
        record_evaluation(db, candidate.id, "crisis", "Declare an incident", scores_for("crisis", 0.9))

        detail = get_candidate_detail(db, candidate.id)
        assert detail.first_name == "Ada"
        assert detail.secondary_skills == ["SQL", "Docker"]
        assert len(detail.evaluations) == 1
        assert detail.evaluations[0].response == "Declare an incident"
        assert detail.evaluations[0].max_possible == 100
        assert detail.ranking.rank == 1
        assert detail.ranking.overall_score == pytest.approx(90.0)

    def test_unranked_candidate_has_null_ranking(self, db, make_candidate):
        detail = get_candidate_detail(db, make_candidate().id)
        assert detail.ranking is None
        assert detail.evaluations == []

    def test_unknown_candidate(self, db):
        with pytest.raises(NotFoundError):
            get_candidate_detail(db, 404)

    def test_corrupt_json_fields_do_not_fail_the_record(self, db, make_candidate, scores_for):
        candidate = make_candidate(secondary_skills="{{oops")
        record_evaluation(db, candidate.id, "team", "answer", scores_for("team", 0.5))
        evaluation = db.query(Evaluation).filter_by(candidate_id=candidate.id).one()
        evaluation.rubric_scores = "not-json"
        db.commit()

        detail = get_candidate_detail(db, candidate.id)
        assert detail.secondary_skills == []
        assert detail.evaluations[0].rubric_scores == {}
        assert detail.evaluations[0].total_score == pytest.approx(50.0)


class TestSearchCandidates:
    def test_case_insensitive_substring(self, db, make_candidate):
        make_candidate(first_name="Grace", last_name="Hopper", email="grace@navy.mil")
        make_candidate(first_name="Alan", last_name="Turing", email="alan@bletchley.uk")

        assert [c.first_name for c in search_candidates(db, "hOpP", 20)] == ["Grace"]
        assert [c.first_name for c in search_candidates(db, "BLETCH", 20)] == ["Alan"]

    def test_matches_primary_skill(self, db, make_candidate):
        make_candidate(primary_skill="Kubernetes")
        make_candidate(primary_skill="Design")
        results = search_candidates(db, "kube", 20)
        assert [c.primary_skill for c in results] == ["Kubernetes"]

    def test_wildcards_match_literally(self, db, make_candidate):
        make_candidate(first_name="Ada")
        make_candidate(first_name="100%")
        make_candidate(email="under_score@example.com")

        assert [c.first_name for c in search_candidates(db, "%", 20)] == ["100%"]
        assert [c.email for c in search_candidates(db, "_", 20)] == ["under_score@example.com"]
        assert search_candidates(db, "\\", 20) == []

    def test_capped(self, db, make_candidate):
        for _ in range(25):
            make_candidate()
        assert len(search_candidates(db, "example.com", 20)) == 20

    def test_includes_rank_when_ranked(self, db, make_candidate, scores_for):
        ranked = make_candidate(first_name="Ranked")
        make_candidate(first_name="Rankless")
        record_evaluation(db, ranked.id, "crisis", "answer", scores_for("crisis", 0.5))

        results = {c.first_name: c for c in search_candidates(db, "rank", 20)}
        assert results["Ranked"].rank == 1
        assert results["Ranked"].overall_score == pytest.approx(50.0)
        assert results["Rankless"].rank is None


class TestCandidatesBySkill:
    def test_primary_or_secondary(self, db, make_candidate, scores_for):
        primary = make_candidate(primary_skill="Go", secondary_skills='["Rust"]')
        secondary = make_candidate(primary_skill="Java", secondary_skills='["Go", "AWS"]')
        make_candidate(primary_skill="Java", secondary_skills='["Golang"]')
        record_evaluation(db, secondary.id, "crisis", "answer", scores_for("crisis", 0.9))
        record_evaluation(db, primary.id, "crisis", "answer", scores_for("crisis", 0.3))

        results = candidates_by_skill(db, "Go", 50)
        assert [c.id for c in results] == [secondary.id, primary.id]

    def test_skill_wildcards_match_literally(self, db, make_candidate):
        make_candidate(primary_skill="Java", secondary_skills='["Go"]')
        assert candidates_by_skill(db, "G_", 50) == []
        assert candidates_by_skill(db, "%", 50) == []


class TestIntake:
    def test_duplicate_email(self, db):
        data = CandidateCreate(first_name="A", last_name="B", email="dup@example.com", primary_skill="Go")
        create_candidate(db, data)
        with pytest.raises(AlreadyExistsError):
            create_candidate(db, data)

    def test_import_skips_duplicates(self, db):
        rows = [
            CandidateCreate(first_name="A", last_name="B", email="one@example.com", primary_skill="Go",
                            secondary_skills=["Rust"]),
            CandidateCreate(first_name="C", last_name="D", email="one@example.com", primary_skill="Go"),
            CandidateCreate(first_name="E", last_name="F", email="two@example.com", primary_skill="SQL"),
        ]
        assert import_candidates(db, rows) == (2, 1)
        first = search_candidates(db, "one@", 20)[0]
        assert first.secondary_skills == ["Rust"]
