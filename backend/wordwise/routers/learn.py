"""Learn (review loop) API router."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from wordwise.auth import CurrentUser, get_current_user
from wordwise.models import (
    LearnNextResponse,
    LearnReviewRequest,
    LearnReviewResponse,
    LearnStatsResponse,
    UserVocabulary,
    UserVocabularyListResponse,
    UserVocabularyResponse,
    VocabularyResponse,
    progress_id,
)
from wordwise.repositories import (
    ProgressConflictError,
    ProgressRepository,
    VocabularyNotFoundError,
    get_progress_repository,
    get_vocabulary_repository,
)
from wordwise.srs import (
    InvalidRating,
    InvalidState,
    Rating,
    ReviewState,
    parse_rating,
    review,
    start_of_utc_day,
    utc_datetime_to_iso_z,
    utc_now,
)

logger = logging.getLogger(__name__)


router = APIRouter(prefix="/learn", tags=["learn"])


def apply_review(
    progress: UserVocabulary | None,
    user_id: str,
    vocabulary_id: str,
    rating: Rating,
    now: datetime,
) -> UserVocabulary:
    """Run the scheduler for one rating and return the record to persist.

    `progress` is None when the learner has never rated the word; a new
    record is built from the scheduler's default seed in that case.

    Raises:
        InvalidRating: If the rating is not 1-4.
        InvalidState: If the stored record is out of bounds or its timestamps are unreadable.
    """
    memory = progress.to_memory_state() if progress is not None else None
    new_memory = review(memory, rating, now)

    if progress is None:
        progress = UserVocabulary(
            id=progress_id(user_id, vocabulary_id),
            userId=user_id,
            vocabularyId=vocabulary_id,
            createdAt=utc_datetime_to_iso_z(now),
        )
    return progress.apply_memory_state(new_memory, rating)


def submit_review(
    user_id: str,
    vocabulary_id: str,
    rating: Rating,
    progress_repo: ProgressRepository,
    now: datetime,
) -> tuple[UserVocabulary, bool]:
    """Load, reschedule and persist a learner's record for one word.

    Returns:
        The stored record and whether this review created it.

    Raises:
        InvalidState: If the stored record is corrupt (nothing is written).
        ProgressConflictError: If the record was written concurrently.
    """
    existing = progress_repo.get(user_id, vocabulary_id)
    updated = apply_review(existing, user_id, vocabulary_id, rating, now)

    if existing is None:
        saved = progress_repo.create(updated)
    else:
        saved = progress_repo.replace(updated)

    logger.info(
        f"Review applied: user={user_id}, vocabulary={vocabulary_id}, "
        f"rating={rating.label}, reviews={saved.reviewCount}, "
        f"stability={saved.stability:.2f}, difficulty={saved.difficulty:.2f}, "
        f"due_date={saved.dueDate}"
    )
    return saved, existing is None


@router.get("/next", response_model=LearnNextResponse)
async def learn_next(user: Annotated[CurrentUser, Depends(get_current_user)]) -> LearnNextResponse:
    """Return the next word to study.

    Due words come first (earliest due date first); otherwise the oldest
    catalogue word the learner has never rated.
    """
    vocabulary_repo = get_vocabulary_repository()
    progress_repo = get_progress_repository()
    now_iso = utc_datetime_to_iso_z(utc_now())

    for progress in progress_repo.list_due(user.user_id, now_iso):
        try:
            vocabulary = vocabulary_repo.get_by_id(progress.vocabularyId)
        except VocabularyNotFoundError:
            logger.warning(
                f"Skipping progress {progress.id}: vocabulary {progress.vocabularyId} no longer exists"
            )
            continue
        return LearnNextResponse(
            vocabulary=VocabularyResponse(**vocabulary.model_dump()),
            progress=UserVocabularyResponse(**progress.model_dump()),
            isNew=False,
        )

    learned_ids = progress_repo.learned_vocabulary_ids(user.user_id)
    vocabulary = vocabulary_repo.get_first_unlearned(learned_ids)
    if vocabulary is not None:
        return LearnNextResponse(vocabulary=VocabularyResponse(**vocabulary.model_dump()), isNew=True)

    return LearnNextResponse(nextDueDate=progress_repo.get_next_due_date(user.user_id))


@router.post("/review", response_model=LearnReviewResponse)
async def learn_review(
    body: LearnReviewRequest, user: Annotated[CurrentUser, Depends(get_current_user)]
) -> LearnReviewResponse:
    """Rate a word (1 again, 2 hard, 3 good, 4 easy) and reschedule it."""
    try:
        rating = parse_rating(body.rating)
    except InvalidRating as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    if not get_vocabulary_repository().exists(body.vocabularyId):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Vocabulary with ID {body.vocabularyId} not found",
        )

    try:
        saved, is_new = submit_review(
            user.user_id,
            body.vocabularyId,
            rating,
            get_progress_repository(),
            utc_now(),
        )
    except InvalidState as e:
        logger.error(f"Stored progress is invalid: user={user.user_id}, vocabulary={body.vocabularyId}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Stored progress for this word is invalid",
        )
    except ProgressConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    return LearnReviewResponse(progress=UserVocabularyResponse(**saved.model_dump()), isNew=is_new)


@router.get("/progress", response_model=UserVocabularyListResponse)
async def learn_progress(
    user: Annotated[CurrentUser, Depends(get_current_user)]
) -> UserVocabularyListResponse:
    """List the learner's progress records, earliest due first."""
    records = get_progress_repository().list_by_user(user.user_id)
    return UserVocabularyListResponse(
        progress=[UserVocabularyResponse(**record.model_dump()) for record in records],
        count=len(records),
    )


@router.get("/stats", response_model=LearnStatsResponse)
async def learn_stats(user: Annotated[CurrentUser, Depends(get_current_user)]) -> LearnStatsResponse:
    """Study statistics for the dashboard."""
    progress_repo = get_progress_repository()
    now = utc_now()

    return LearnStatsResponse(
        reviewedToday=progress_repo.count_reviewed_since(
            user.user_id, utc_datetime_to_iso_z(start_of_utc_day(now))
        ),
        dueNow=progress_repo.count_due(user.user_id, utc_datetime_to_iso_z(now)),
        totalLearned=progress_repo.count_by_user(user.user_id),
        inReview=progress_repo.count_by_state(user.user_id, ReviewState.REVIEW.value),
        nextDueDate=progress_repo.get_next_due_date(user.user_id),
    )
