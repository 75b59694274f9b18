"""Pytest configuration and fixtures."""

import os
from dataclasses import dataclass, field
from datetime import datetime, timezone

import pytest

# Ensure auth is disabled during tests by default
os.environ.setdefault("AUTH_ENABLED", "false")

from wordwise.auth import get_auth_settings  # noqa: E402
from wordwise.models import UserVocabulary, Vocabulary  # noqa: E402
from wordwise.repositories import ProgressConflictError, VocabularyNotFoundError  # noqa: E402


FIXED_NOW = datetime(2025, 12, 13, 8, 30, 0, tzinfo=timezone.utc)


@dataclass
class StubVocabularyRepo:
    """In-memory stand-in for VocabularyRepository."""

    entries: dict[str, dict] = field(default_factory=dict)

    def _sorted(self) -> list[Vocabulary]:
        return sorted((Vocabulary(**raw) for raw in self.entries.values()), key=lambda v: v.createdAt)

    def list_all(self, category=None):
        return [v for v in self._sorted() if category is None or v.category == category]

    def get_by_id(self, vocabulary_id: str):
        if vocabulary_id not in self.entries:
            raise VocabularyNotFoundError("not found")
        return Vocabulary(**self.entries[vocabulary_id])

    def exists(self, vocabulary_id: str) -> bool:
        return vocabulary_id in self.entries

    def find_by_word(self, word: str):
        return next((v for v in self._sorted() if v.word == word), None)

    def get_first_unlearned(self, learned_ids):
        return next((v for v in self._sorted() if v.id not in learned_ids), None)

    def create(self, vocabulary_create):
        vocabulary = Vocabulary(**vocabulary_create.model_dump())
        self.entries[vocabulary.id] = vocabulary.model_dump()
        return vocabulary

    def update(self, vocabulary_id: str, vocabulary_update):
        existing = self.get_by_id(vocabulary_id)
        updated = Vocabulary(**{**existing.model_dump(), **vocabulary_update.model_dump(exclude_unset=True)})
        self.entries[vocabulary_id] = updated.model_dump()
        return updated

    def delete(self, vocabulary_id: str) -> None:
        if self.entries.pop(vocabulary_id, None) is None:
            raise VocabularyNotFoundError("not found")


@dataclass
class StubProgressRepo:
    """In-memory stand-in for ProgressRepository."""

    records: dict[str, dict] = field(default_factory=dict)
    replace_error: Exception | None = None

    def _for_user(self, user_id: str) -> list[UserVocabulary]:
        records = [UserVocabulary(**raw) for raw in self.records.values() if raw["userId"] == user_id]
        return sorted(records, key=lambda r: r.dueDate)

    def get(self, user_id: str, vocabulary_id: str):
        for record in self._for_user(user_id):
            if record.vocabularyId == vocabulary_id:
                return record
        return None

    def list_by_user(self, user_id: str):
        return self._for_user(user_id)

    def list_due(self, user_id: str, now_iso: str):
        return [r for r in self._for_user(user_id) if r.dueDate <= now_iso]

    def get_next_due_date(self, user_id: str):
        records = self._for_user(user_id)
        return records[0].dueDate if records else None

    def count_due(self, user_id: str, now_iso: str) -> int:
        return len(self.list_due(user_id, now_iso))

    def count_reviewed_since(self, user_id: str, since_iso: str) -> int:
        return sum(1 for r in self._for_user(user_id) if r.lastReviewedAt and r.lastReviewedAt >= since_iso)

    def count_by_user(self, user_id: str) -> int:
        return len(self._for_user(user_id))

    def count_by_state(self, user_id: str, state: str) -> int:
        return sum(1 for r in self._for_user(user_id) if r.state == state)

    def learned_vocabulary_ids(self, user_id: str) -> set[str]:
        return {r.vocabularyId for r in self._for_user(user_id)}

    def create(self, progress):
        if progress.id in self.records:
            raise ProgressConflictError("exists")
        self.records[progress.id] = progress.model_dump()
        return progress

    def replace(self, progress):
        if self.replace_error is not None:
            raise self.replace_error
        self.records[progress.id] = progress.model_dump()
        return progress


def vocabulary_doc(vocabulary_id: str, word: str, created_at: str, **extra) -> dict:
    return {
        "id": vocabulary_id,
        "word": word,
        "definitionCn": f"{word} 的释义",
        "createdAt": created_at,
        "updatedAt": created_at,
        **extra,
    }


def progress_doc(user_id: str, vocabulary_id: str, **extra) -> dict:
    return {
        "id": f"{user_id}:{vocabulary_id}",
        "userId": user_id,
        "vocabularyId": vocabulary_id,
        "createdAt": "2025-12-01T00:00:00Z",
        "updatedAt": "2025-12-01T00:00:00Z",
        **extra,
    }


@pytest.fixture
def vocabulary_repo():
    return StubVocabularyRepo()


@pytest.fixture
def progress_repo():
    return StubProgressRepo()


@pytest.fixture
def auth_disabled_env(monkeypatch):
    """Fixture that ensures AUTH_ENABLED is false."""
    monkeypatch.setenv("AUTH_ENABLED", "false")
    get_auth_settings.cache_clear()
    yield
    get_auth_settings.cache_clear()


@pytest.fixture
def auth_enabled_env(monkeypatch):
    """Fixture that enables auth with test configuration."""
    monkeypatch.setenv("AUTH_ENABLED", "true")
    monkeypatch.setenv("AUTH_ISSUER", "https://auth.test/auth/v1")
    monkeypatch.setenv("AUTH_AUDIENCE", "authenticated")
    get_auth_settings.cache_clear()
    yield
    get_auth_settings.cache_clear()
