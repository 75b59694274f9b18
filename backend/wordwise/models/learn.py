"""Models for the learning loop endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field, StrictInt, StrictStr

from wordwise.models.progress import UserVocabularyResponse
from wordwise.models.vocabulary import VocabularyResponse


class LearnNextResponse(BaseModel):
    """Response for GET /learn/next."""

    vocabulary: VocabularyResponse | None = Field(None, description="Word to study now")
    progress: UserVocabularyResponse | None = Field(
        None,
        description="Current memory state, null when the word has never been rated",
    )
    isNew: bool = Field(False, description="True when the word has never been rated by this learner")
    nextDueDate: str | None = Field(
        None,
        description="Earliest upcoming dueDate when nothing is available now",
    )


class LearnReviewRequest(BaseModel):
    """Request body for POST /learn/review."""

    vocabularyId: str = Field(..., min_length=1)
    # Validated by the scheduler so out-of-range values surface as an invalid rating.
    rating: StrictInt | StrictStr = Field(..., description="1-4 or again/hard/good/easy")


class LearnReviewResponse(BaseModel):
    """Response for POST /learn/review."""

    progress: UserVocabularyResponse
    isNew: bool = Field(..., description="True when this review created the progress record")


class LearnStatsResponse(BaseModel):
    """Response for GET /learn/stats."""

    reviewedToday: int = Field(..., description="Words rated since 00:00 UTC")
    dueNow: int
    totalLearned: int = Field(..., description="Words with a progress record")
    inReview: int = Field(..., description="Words whose last rating was good or easy")
    nextDueDate: str | None = None
