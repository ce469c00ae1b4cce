# Backend/evaluator/models/__init__.py

# This file imports all the models, making them available
# to the SQLAlchemy Base and resolving relationship targets.

from .candidate import Candidate
from .evaluation import Evaluation
from .ranking import Ranking

__all__ = ["Candidate", "Evaluation", "Ranking"]
