"""Models module for Pydantic schemas."""

from .vocabulary import (
    Vocabulary,
    VocabularyBase,
    VocabularyCreate,
    VocabularyUpdate,
    VocabularyResponse,
    VocabularyListResponse,
)
from .progress import (
    UserVocabulary,
    UserVocabularyResponse,
    UserVocabularyListResponse,
    progress_id,
)
from .learn import (
    LearnNextResponse,
    LearnReviewRequest,
    LearnReviewResponse,
    LearnStatsResponse,
)

__all__ = [
    "Vocabulary",
    "VocabularyBase",
    "VocabularyCreate",
    "VocabularyUpdate",
    "VocabularyResponse",
    "VocabularyListResponse",
    "UserVocabulary",
    "UserVocabularyResponse",
    "UserVocabularyListResponse",
    "progress_id",
    "LearnNextResponse",
    "LearnReviewRequest",
    "LearnReviewResponse",
    "LearnStatsResponse",
]
