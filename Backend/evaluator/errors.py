# Backend/evaluator/errors.py
"""
Error taxonomy shared by services, routers and the CLI.

Each error carries the ``kind`` reported to API callers and the HTTP status the
top-level handlers in ``main.py`` translate it into.
"""
from typing import List, Optional


class EvaluatorError(Exception):
    kind = "Error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(EvaluatorError):
    """Unknown prompt id, candidate id or share token."""
    kind = "NotFound"
    status_code = 404


class ScoreValidationError(EvaluatorError):
    """A score set does not match its rubric's categories or bounds."""
    kind = "ValidationFailure"
    status_code = 400

    def __init__(self, message: str, reasons: Optional[List[str]] = None):
        super().__init__(message)
        self.reasons = reasons or []


class AlreadyExistsError(EvaluatorError):
    """An evaluation for the same (candidate, prompt) pair is already stored."""
    kind = "ConflictAlreadyExists"
    status_code = 409


class StorageUnavailableError(EvaluatorError):
    kind = "StorageUnavailable"
    status_code = 500
