"""Per-learner progress models (persisted memory state)."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from wordwise.srs.errors import InvalidState
from wordwise.srs.scheduler import INITIAL_DIFFICULTY, INITIAL_STABILITY, MemoryState, ReviewState
from wordwise.srs.time import parse_iso_z, utc_datetime_to_iso_z, utc_now_iso


ReviewStateValue = Literal["new", "review"]


def progress_id(user_id: str, vocabulary_id: str) -> str:
    """Document id of a learner's record for a word (one record per pair)."""
    return f"{user_id}:{vocabulary_id}"


class UserVocabulary(BaseModel):
    """A learner's memory state for one vocabulary item (partition key: userId)."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="'{userId}:{vocabularyId}'")
    userId: str = Field(..., description="Learner ID (partition key)")
    vocabularyId: str = Field(..., description="Catalogue entry ID")

    stability: float = Field(INITIAL_STABILITY, description="Days until recall decays past threshold")
    difficulty: float = Field(INITIAL_DIFFICULTY, description="Intrinsic item difficulty")
    dueDate: str = Field(default_factory=utc_now_iso, description="Next due timestamp (UTC ISO Z)")
    lastReviewedAt: str | None = Field(None, description="Last review timestamp (UTC ISO Z)")
    reviewCount: int = Field(0, ge=0, description="Number of reviews so far")
    state: ReviewStateValue = Field("new", description="'review' once the last rating was good or easy")
    lastRating: int | None = Field(None, ge=1, le=4, description="Most recent rating (1-4)")

    createdAt: str = Field(default_factory=utc_now_iso, description="Creation timestamp")
    updatedAt: str = Field(default_factory=utc_now_iso, description="Last update timestamp")

    # Cosmos system property, used for optimistic concurrency on replace; never written back.
    etag: str | None = Field(None, alias="_etag", exclude=True)

    def to_memory_state(self) -> MemoryState:
        """Convert to the scheduler's value object.

        Raises:
            InvalidState: If a stored timestamp is not a valid ISO-8601 string.
        """
        try:
            due_date = parse_iso_z(self.dueDate)
            last_reviewed_at = parse_iso_z(self.lastReviewedAt) if self.lastReviewedAt else None
        except ValueError as e:
            raise InvalidState(f"stored timestamp is not ISO-8601: {e}") from e

        return MemoryState(
            stability=self.stability,
            difficulty=self.difficulty,
            due_date=due_date,
            last_reviewed_at=last_reviewed_at,
            review_count=self.reviewCount,
            state=ReviewState(self.state),
        )

    def apply_memory_state(self, memory: MemoryState, rating: int) -> "UserVocabulary":
        """Return a copy carrying `memory`; id, owner, createdAt and etag are kept."""
        reviewed_at = memory.last_reviewed_at
        return self.model_copy(
            update={
                "stability": memory.stability,
                "difficulty": memory.difficulty,
                "dueDate": utc_datetime_to_iso_z(memory.due_date),
                "lastReviewedAt": utc_datetime_to_iso_z(reviewed_at) if reviewed_at else None,
                "reviewCount": memory.review_count,
                "state": memory.state.value,
                "lastRating": int(rating),
                "updatedAt": utc_datetime_to_iso_z(reviewed_at) if reviewed_at else utc_now_iso(),
            }
        )


class UserVocabularyResponse(BaseModel):
    """Progress record returned by API."""

    id: str
    userId: str
    vocabularyId: str
    stability: float
    difficulty: float
    dueDate: str
    lastReviewedAt: str | None
    reviewCount: int
    state: ReviewStateValue
    lastRating: int | None
    createdAt: str
    updatedAt: str


class UserVocabularyListResponse(BaseModel):
    """Response containing a learner's progress records."""

    progress: list[UserVocabularyResponse]
    count: int
