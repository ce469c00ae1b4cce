# Backend/evaluator/cli.py
"""
Command-line intake and inspection for the evaluator database.

Examples:
  python -m evaluator.cli init-db
  python -m evaluator.cli import-candidates candidates.json
  python -m evaluator.cli import-evaluations evaluations.json
  python -m evaluator.cli leaderboard --top 10
"""
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from evaluator.config import settings
from evaluator.db.session import init_db, session_scope
from evaluator.logging_config import get_logger
from evaluator.schemas.candidate import CandidateCreate
from evaluator.services.candidate_service import import_candidates
from evaluator.services.evaluation_service import bulk_record_evaluations
from evaluator.services.ranking_service import get_top_candidates

logger = get_logger()


def _load_json_list(path: str) -> List[Any]:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON list")
    return data


def cmd_init_db(args: argparse.Namespace) -> int:
    init_db()
    print("Database initialised.")
    return 0


def cmd_import_candidates(args: argparse.Namespace) -> int:
    rows = _load_json_list(args.file)
    try:
        candidates = [CandidateCreate.model_validate(row) for row in rows]
    except ValidationError as e:
        logger.error(f"Invalid candidate file {args.file}: {e}")
        return 1

    with session_scope() as db:
        inserted, skipped = import_candidates(db, candidates)
    print(f"Inserted {inserted} candidates, skipped {skipped} duplicates.")
    return 0


def cmd_import_evaluations(args: argparse.Namespace) -> int:
    rows = _load_json_list(args.file)
    with session_scope() as db:
        result = bulk_record_evaluations(db, rows)
    print(
        f"Created {result.created} evaluations, "
        f"skipped {result.duplicates} duplicates, rejected {result.rejected}."
    )
    for error in result.errors:
        print(f"  - {error}")
    return 0 if result.rejected == 0 else 2


def cmd_leaderboard(args: argparse.Namespace) -> int:
    with session_scope() as db:
        entries = get_top_candidates(db, args.top)
    if not entries:
        print("No ranked candidates yet.")
        return 0
    print(f"\n TOP {len(entries)} CANDIDATES")
    print("=" * 72)
    for e in entries:
        print(
            f"{e.rank:>3}. {e.first_name} {e.last_name:<20} "
            f"overall {e.overall_score:6.2f}  "
            f"(crisis {e.crisis_score:.0f} / sustainability {e.sustainability_score:.0f} / team {e.team_score:.0f})"
        )
    return 0


def create_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="evaluator",
        description="Candidate evaluator: database intake and leaderboard inspection",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("--quiet", action="store_true", help="Suppress non-essential output")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("init-db", help="Create database tables")
    p.set_defaults(func=cmd_init_db)

    p = sub.add_parser("import-candidates", help="Load candidate profiles from a JSON list")
    p.add_argument("file", help="Path to a JSON file")
    p.set_defaults(func=cmd_import_candidates)

    p = sub.add_parser("import-evaluations", help="Load scored evaluations from a JSON list")
    p.add_argument("file", help="Path to a JSON file")
    p.set_defaults(func=cmd_import_evaluations)

    p = sub.add_parser("leaderboard", help="Print the current top candidates")
    p.add_argument("--top", type=int, default=settings.LEADERBOARD_TOP_N,
                   help=f"Number of candidates to show (default: {settings.LEADERBOARD_TOP_N})")
    p.set_defaults(func=cmd_leaderboard)

    return parser


def _set_level(level: int) -> None:
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI application."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        _set_level(logging.DEBUG)
    elif args.quiet:
        _set_level(logging.WARNING)

    try:
        return args.func(args)
    except (OSError, ValueError) as e:
        logger.error(f"Could not read input: {e}")
        return 1
    except SQLAlchemyError as e:
        logger.error(f"Storage unavailable: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
