# Backend/evaluator/__init__.py
"""Candidate evaluation dashboard backend."""

__version__ = "0.1.0"
