"""Repository for per-learner memory state records."""

from azure.core import MatchConditions
from azure.cosmos import ContainerProxy
from azure.cosmos.exceptions import (
    CosmosAccessConditionFailedError,
    CosmosResourceExistsError,
    CosmosResourceNotFoundError,
)

from wordwise.db import get_progress_container
from wordwise.models import UserVocabulary, progress_id


class ProgressConflictError(Exception):
    """Raised when a record changed (or appeared) between read and write."""

    pass


class ProgressRepository:
    """Repository for learner progress operations (partition key: userId)."""

    def __init__(self, container: ContainerProxy | None = None):
        """Initialize the repository with an optional container."""
        self._container = container

    @property
    def container(self) -> ContainerProxy:
        """Get the container, lazily initializing if needed."""
        if self._container is None:
            self._container = get_progress_container()
        return self._container

    def _query(self, user_id: str, query: str, **params) -> list:
        parameters = [{"name": "@userId", "value": user_id}]
        parameters += [{"name": f"@{name}", "value": value} for name, value in params.items()]
        return list(
            self.container.query_items(
                query=query,
                parameters=parameters,
                partition_key=user_id,
            )
        )

    def get(self, user_id: str, vocabulary_id: str) -> UserVocabulary | None:
        """Return the learner's record for a word, or None if never rated."""
        try:
            item = self.container.read_item(
                item=progress_id(user_id, vocabulary_id),
                partition_key=user_id,
            )
        except CosmosResourceNotFoundError:
            return None
        return UserVocabulary(**item)

    def list_by_user(self, user_id: str) -> list[UserVocabulary]:
        """All of a learner's records, earliest due first."""
        items = self._query(user_id, "SELECT * FROM c WHERE c.userId = @userId ORDER BY c.dueDate ASC")
        return [UserVocabulary(**item) for item in items]

    def list_due(self, user_id: str, now_iso: str) -> list[UserVocabulary]:
        """Every record with dueDate <= now, earliest first."""
        items = self._query(
            user_id,
            "SELECT * FROM c WHERE c.userId = @userId AND c.dueDate <= @nowIso ORDER BY c.dueDate ASC",
            nowIso=now_iso,
        )
        return [UserVocabulary(**item) for item in items]

    def get_next_due_date(self, user_id: str) -> str | None:
        """Earliest dueDate across the learner's records (or None if there are none)."""
        items = self._query(
            user_id,
            "SELECT TOP 1 VALUE c.dueDate FROM c WHERE c.userId = @userId ORDER BY c.dueDate ASC",
        )
        return items[0] if items else None

    def count_due(self, user_id: str, now_iso: str) -> int:
        return self._query(
            user_id,
            "SELECT VALUE COUNT(1) FROM c WHERE c.userId = @userId AND c.dueDate <= @nowIso",
            nowIso=now_iso,
        )[0]

    def count_reviewed_since(self, user_id: str, since_iso: str) -> int:
        return self._query(
            user_id,
            "SELECT VALUE COUNT(1) FROM c WHERE c.userId = @userId AND c.lastReviewedAt >= @sinceIso",
            sinceIso=since_iso,
        )[0]

    def count_by_user(self, user_id: str) -> int:
        return self._query(user_id, "SELECT VALUE COUNT(1) FROM c WHERE c.userId = @userId")[0]

    def count_by_state(self, user_id: str, state: str) -> int:
        return self._query(
            user_id,
            "SELECT VALUE COUNT(1) FROM c WHERE c.userId = @userId AND c.state = @state",
            state=state,
        )[0]

    def learned_vocabulary_ids(self, user_id: str) -> set[str]:
        """IDs of every word the learner has rated at least once."""
        return set(
            self._query(user_id, "SELECT VALUE c.vocabularyId FROM c WHERE c.userId = @userId")
        )

    def create(self, progress: UserVocabulary) -> UserVocabulary:
        """Insert a first-review record.

        Raises:
            ProgressConflictError: If a record for the same learner and word already exists.
        """
        try:
            created_item = self.container.create_item(body=progress.model_dump())
        except CosmosResourceExistsError:
            raise ProgressConflictError(
                f"Progress for vocabulary {progress.vocabularyId} was created concurrently"
            )
        return UserVocabulary(**created_item)

    def replace(self, progress: UserVocabulary) -> UserVocabulary:
        """Persist an updated record.

        When the record carries the etag it was read with, the write only
        succeeds if nobody else has written it since.

        Raises:
            ProgressConflictError: If the stored record changed or disappeared.
        """
        kwargs = {}
        if progress.etag:
            kwargs = {"etag": progress.etag, "match_condition": MatchConditions.IfNotModified}
        try:
            updated_item = self.container.replace_item(
                item=progress.id,
                body=progress.model_dump(),
                **kwargs,
            )
        except (CosmosAccessConditionFailedError, CosmosResourceNotFoundError):
            raise ProgressConflictError(
                f"Progress for vocabulary {progress.vocabularyId} was modified concurrently"
            )
        return UserVocabulary(**updated_item)


# Singleton instance
_progress_repository: ProgressRepository | None = None


def get_progress_repository() -> ProgressRepository:
    """Get the progress repository singleton."""
    global _progress_repository
    if _progress_repository is None:
        _progress_repository = ProgressRepository()
    return _progress_repository
