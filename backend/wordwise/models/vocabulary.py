"""Vocabulary catalogue models for API requests and responses."""

from pydantic import BaseModel, Field
from uuid import uuid4

from wordwise.srs.time import utc_now_iso


def generate_uuid() -> str:
    """Generate a new UUID string."""
    return str(uuid4())


class VocabularyBase(BaseModel):
    """Fields shared by every vocabulary payload."""

    word: str = Field(..., min_length=1, max_length=200, description="The English word or phrase")
    pronunciation: str | None = Field(None, max_length=200, description="IPA or phonetic spelling")
    definitionCn: str = Field(..., min_length=1, max_length=1000, description="Chinese definition")
    definitionEn: str | None = Field(None, max_length=1000, description="English definition")
    exampleSentence: str | None = Field(None, max_length=2000, description="Example sentence")
    translation: str | None = Field(None, max_length=2000, description="Translation of the example sentence")
    audioUrl: str | None = Field(None, max_length=2000, description="Native speaker recording")
    imageUrl: str | None = Field(None, max_length=2000, description="Illustration")
    difficultyLevel: int = Field(1, ge=1, le=5, description="Editorial level (1 = beginner)")
    category: str | None = Field(None, max_length=100, description="Topic, e.g. 'daily', 'travel'")


class VocabularyCreate(VocabularyBase):
    """Model for adding a word to the catalogue."""

    pass


class VocabularyUpdate(BaseModel):
    """Model for a partial catalogue update."""

    word: str | None = Field(None, min_length=1, max_length=200)
    pronunciation: str | None = Field(None, max_length=200)
    definitionCn: str | None = Field(None, min_length=1, max_length=1000)
    definitionEn: str | None = Field(None, max_length=1000)
    exampleSentence: str | None = Field(None, max_length=2000)
    translation: str | None = Field(None, max_length=2000)
    audioUrl: str | None = Field(None, max_length=2000)
    imageUrl: str | None = Field(None, max_length=2000)
    difficultyLevel: int | None = Field(None, ge=1, le=5)
    category: str | None = Field(None, max_length=100)


class Vocabulary(VocabularyBase):
    """Catalogue entry as stored in the database (partition key: id)."""

    id: str = Field(default_factory=generate_uuid, description="Unique identifier")
    createdAt: str = Field(default_factory=utc_now_iso, description="Creation timestamp")
    updatedAt: str = Field(default_factory=utc_now_iso, description="Last update timestamp")

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": "5b0c3f7e-7f3a-4f5e-9c51-0f7d3b1f6a10",
                "word": "abandon",
                "pronunciation": "/əˈbændən/",
                "definitionCn": "放弃；抛弃",
                "definitionEn": "to leave behind or give up completely",
                "exampleSentence": "They had to abandon the car in the snow.",
                "translation": "他们不得不把车丢弃在雪地里。",
                "difficultyLevel": 2,
                "category": "daily",
                "createdAt": "2025-01-01T00:00:00Z",
                "updatedAt": "2025-01-01T00:00:00Z",
            }
        }
    }


class VocabularyResponse(VocabularyBase):
    """Vocabulary response model returned by API."""

    id: str
    createdAt: str
    updatedAt: str


class VocabularyListResponse(BaseModel):
    """Response containing a list of vocabulary entries."""

    vocabulary: list[VocabularyResponse]
    count: int
