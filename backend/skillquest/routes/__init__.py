"""Aggregate import for all API route modules."""

from . import (
    users,
    modules,
    lessons,
    progress,
    quizzes,
    learning,
)

__all__ = [
    "users",
    "modules",
    "lessons",
    "progress",
    "quizzes",
    "learning",
]
