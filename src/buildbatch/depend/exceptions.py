from __future__ import annotations


class DependencyError(Exception):
    """Base exception for the depend module."""


class DependencyEvaluationError(DependencyError):
    """Raised when the dependency cache cannot be read or compared."""
