"""Vocabulary catalogue API router."""

from typing import Annotated
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import ValidationError
from wordwise.models import (
    VocabularyCreate,
    VocabularyUpdate,
    VocabularyResponse,
    VocabularyListResponse,
)
from wordwise.repositories import get_vocabulary_repository, VocabularyNotFoundError
from wordwise.auth import get_current_user, require_admin, CurrentUser

router = APIRouter(prefix="/vocabulary", tags=["vocabulary"])


def _not_found(vocabulary_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Vocabulary with ID {vocabulary_id} not found",
    )


@router.get("", response_model=VocabularyListResponse)
async def list_vocabulary(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    category: str | None = None,
) -> VocabularyListResponse:
    """List the catalogue, oldest entries first."""
    entries = get_vocabulary_repository().list_all(category)
    return VocabularyListResponse(
        vocabulary=[VocabularyResponse(**entry.model_dump()) for entry in entries],
        count=len(entries),
    )


@router.get("/{vocabulary_id}", response_model=VocabularyResponse)
async def get_vocabulary(
    vocabulary_id: str, user: Annotated[CurrentUser, Depends(get_current_user)]
) -> VocabularyResponse:
    """Get a single catalogue entry."""
    try:
        entry = get_vocabulary_repository().get_by_id(vocabulary_id)
    except VocabularyNotFoundError:
        raise _not_found(vocabulary_id)
    return VocabularyResponse(**entry.model_dump())


@router.post("", response_model=VocabularyResponse, status_code=status.HTTP_201_CREATED)
async def create_vocabulary(
    vocabulary_create: VocabularyCreate, admin: Annotated[CurrentUser, Depends(require_admin)]
) -> VocabularyResponse:
    """Add a word to the catalogue (admin only)."""
    entry = get_vocabulary_repository().create(vocabulary_create)
    return VocabularyResponse(**entry.model_dump())


@router.put("/{vocabulary_id}", response_model=VocabularyResponse)
async def update_vocabulary(
    vocabulary_id: str,
    vocabulary_update: VocabularyUpdate,
    admin: Annotated[CurrentUser, Depends(require_admin)],
) -> VocabularyResponse:
    """Edit a catalogue entry (admin only)."""
    try:
        entry = get_vocabulary_repository().update(vocabulary_id, vocabulary_update)
    except VocabularyNotFoundError:
        raise _not_found(vocabulary_id)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    return VocabularyResponse(**entry.model_dump())


@router.delete("/{vocabulary_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vocabulary(
    vocabulary_id: str, admin: Annotated[CurrentUser, Depends(require_admin)]
) -> None:
    """Remove a catalogue entry (admin only)."""
    try:
        get_vocabulary_repository().delete(vocabulary_id)
    except VocabularyNotFoundError:
        raise _not_found(vocabulary_id)
