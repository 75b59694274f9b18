"""Seed API router for populating the vocabulary catalogue."""

import logging
from typing import Annotated
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from wordwise.models import VocabularyCreate
from wordwise.repositories import get_vocabulary_repository
from wordwise.auth import require_admin, CurrentUser

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/seed", tags=["seed"])


SAMPLE_VOCABULARY = [
    VocabularyCreate(
        word="abandon",
        pronunciation="/əˈbændən/",
        definitionCn="放弃；抛弃",
        definitionEn="to leave behind or give up completely",
        exampleSentence="They had to abandon the car in the snow.",
        translation="他们不得不把车丢弃在雪地里。",
        difficultyLevel=2,
        category="daily",
    ),
    VocabularyCreate(
        word="brief",
        pronunciation="/briːf/",
        definitionCn="简短的；短暂的",
        definitionEn="lasting only a short time",
        exampleSentence="She gave a brief speech after dinner.",
        translation="晚饭后她做了简短的讲话。",
        difficultyLevel=1,
        category="daily",
    ),
    VocabularyCreate(
        word="curious",
        pronunciation="/ˈkjʊəriəs/",
        definitionCn="好奇的",
        definitionEn="eager to know or learn something",
        exampleSentence="Children are naturally curious about the world.",
        translation="孩子们天生对世界充满好奇。",
        difficultyLevel=1,
        category="daily",
    ),
    VocabularyCreate(
        word="itinerary",
        pronunciation="/aɪˈtɪnərəri/",
        definitionCn="行程；旅行路线",
        definitionEn="a planned route or journey",
        exampleSentence="Our itinerary includes three days in Rome.",
        translation="我们的行程包括在罗马的三天。",
        difficultyLevel=3,
        category="travel",
    ),
    VocabularyCreate(
        word="luggage",
        pronunciation="/ˈlʌɡɪdʒ/",
        definitionCn="行李",
        definitionEn="bags and cases carried by a traveller",
        exampleSentence="Please keep your luggage with you at all times.",
        translation="请随时看管好您的行李。",
        difficultyLevel=1,
        category="travel",
    ),
    VocabularyCreate(
        word="negotiate",
        pronunciation="/nɪˈɡəʊʃieɪt/",
        definitionCn="谈判；协商",
        definitionEn="to try to reach an agreement by discussion",
        exampleSentence="The union is negotiating a new contract.",
        translation="工会正在协商一份新合同。",
        difficultyLevel=3,
        category="business",
    ),
    VocabularyCreate(
        word="deadline",
        pronunciation="/ˈdedlaɪn/",
        definitionCn="截止日期",
        definitionEn="a time by which something must be finished",
        exampleSentence="The deadline for applications is Friday.",
        translation="申请的截止日期是星期五。",
        difficultyLevel=2,
        category="business",
    ),
    VocabularyCreate(
        word="ubiquitous",
        pronunciation="/juːˈbɪkwɪtəs/",
        definitionCn="无处不在的",
        definitionEn="present or found everywhere",
        exampleSentence="Smartphones have become ubiquitous.",
        translation="智能手机已经无处不在。",
        difficultyLevel=5,
        category="academic",
    ),
]


class SeedResponse(BaseModel):
    """Response from seed operation."""

    message: str
    vocabulary_created: int


@router.post("", response_model=SeedResponse, status_code=status.HTTP_201_CREATED)
async def seed_vocabulary(admin: Annotated[CurrentUser, Depends(require_admin)]) -> SeedResponse:
    """Add the sample words to the catalogue, skipping words already present."""
    repo = get_vocabulary_repository()

    created = 0
    for entry in SAMPLE_VOCABULARY:
        if repo.find_by_word(entry.word) is not None:
            continue
        repo.create(entry)
        created += 1

    logger.info(f"Seeded vocabulary: created={created}, skipped={len(SAMPLE_VOCABULARY) - created}")
    return SeedResponse(
        message="Sample vocabulary created successfully",
        vocabulary_created=created,
    )
