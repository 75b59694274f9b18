"""Repositories module for data access layer."""

from .vocabulary_repository import (
    VocabularyRepository,
    VocabularyNotFoundError,
    get_vocabulary_repository,
)
from .progress_repository import (
    ProgressRepository,
    ProgressConflictError,
    get_progress_repository,
)

__all__ = [
    "VocabularyRepository",
    "VocabularyNotFoundError",
    "get_vocabulary_repository",
    "ProgressRepository",
    "ProgressConflictError",
    "get_progress_repository",
]
