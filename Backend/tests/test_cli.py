"""
Test: command-line intake against a temporary database.
"""
import json
from contextlib import contextmanager

import pytest
from sqlalchemy import create_engine, inspect
from sqlalchemy.pool import StaticPool

from evaluator import cli
from evaluator.db.session import init_db
from evaluator.models import Candidate, Evaluation


@pytest.fixture
def cli_db(monkeypatch, session_factory):
    @contextmanager
    def scope():
        session = session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    monkeypatch.setattr(cli, "session_scope", scope)
    return session_factory


def write_json(tmp_path, name, data):
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


class TestImportCommands:
    def test_candidates_then_evaluations(self, tmp_path, cli_db, db, scores_for, capsys):
        candidates = write_json(tmp_path, "candidates.json", [
            {"first_name": "Ada", "last_name": "L", "email": "ada@example.com", "primary_skill": "Python"},
            {"first_name": "Ada", "last_name": "L", "email": "ada@example.com", "primary_skill": "Python"},
        ])
        assert cli.main(["import-candidates", candidates]) == 0
        assert "Inserted 1 candidates, skipped 1 duplicates." in capsys.readouterr().out

        evaluations = write_json(tmp_path, "evaluations.json", [
            {"email": "ada@example.com", "prompt_id": "crisis", "response": "r", "rubric_scores": scores_for("crisis", 0.5)},
            {"email": "ada@example.com", "prompt_id": "crisis", "response": "r", "rubric_scores": scores_for("crisis", 0.5)},
        ])
        assert cli.main(["import-evaluations", evaluations]) == 0
        assert "Created 1 evaluations, skipped 1 duplicates, rejected 0." in capsys.readouterr().out

        assert db.query(Candidate).count() == 1
        assert db.query(Evaluation).count() == 1

        assert cli.main(["leaderboard", "--top", "5"]) == 0
        assert "Ada" in capsys.readouterr().out

    def test_rejected_rows_set_exit_code(self, tmp_path, cli_db):
        evaluations = write_json(tmp_path, "evaluations.json", [
            {"candidate_id": 1, "prompt_id": "crisis", "response": "r", "rubric_scores": {}},
        ])
        assert cli.main(["import-evaluations", evaluations]) == 2

    def test_invalid_candidate_file(self, tmp_path, cli_db):
        path = write_json(tmp_path, "candidates.json", [{"first_name": "No email"}])
        assert cli.main(["import-candidates", path]) == 1

    def test_non_object_evaluation_rows(self, tmp_path, cli_db, capsys):
        path = write_json(tmp_path, "evaluations.json", ["not a row", 42])
        assert cli.main(["import-evaluations", path]) == 2
        assert "rejected 2" in capsys.readouterr().out

    def test_file_must_be_a_list(self, tmp_path, cli_db):
        path = write_json(tmp_path, "candidates.json", {"not": "a list"})
        assert cli.main(["import-candidates", path]) == 1

    def test_empty_leaderboard(self, cli_db, capsys):
        assert cli.main(["leaderboard"]) == 0
        assert "No ranked candidates yet." in capsys.readouterr().out


class TestInitDb:
    def test_creates_tables(self, monkeypatch, capsys):
        fresh = create_engine("sqlite://", poolclass=StaticPool)
        monkeypatch.setattr(cli, "init_db", lambda: init_db(bind=fresh))
        assert cli.main(["init-db"]) == 0
        assert "Database initialised." in capsys.readouterr().out
        assert {"candidates", "evaluations", "rankings"} <= set(inspect(fresh).get_table_names())
        fresh.dispose()
