"""Repository for the shared vocabulary catalogue."""

from collections.abc import Collection

from azure.cosmos import ContainerProxy
from azure.cosmos.exceptions import CosmosResourceNotFoundError

from wordwise.db import get_vocabulary_container
from wordwise.models import Vocabulary, VocabularyCreate, VocabularyUpdate
from wordwise.srs.time import utc_now_iso


class VocabularyNotFoundError(Exception):
    """Raised when a catalogue entry is not found."""

    pass


class VocabularyRepository:
    """Repository for catalogue database operations.

    Entries are partitioned by their own id, so listing queries span partitions.
    """

    def __init__(self, container: ContainerProxy | None = None):
        """Initialize the repository with an optional container."""
        self._container = container

    @property
    def container(self) -> ContainerProxy:
        """Get the container, lazily initializing if needed."""
        if self._container is None:
            self._container = get_vocabulary_container()
        return self._container

    def list_all(self, category: str | None = None) -> list[Vocabulary]:
        """List catalogue entries, oldest first, optionally limited to one category."""
        if category:
            query = "SELECT * FROM c WHERE c.category = @category ORDER BY c.createdAt ASC"
            parameters = [{"name": "@category", "value": category}]
        else:
            query = "SELECT * FROM c ORDER BY c.createdAt ASC"
            parameters = []

        items = self.container.query_items(
            query=query,
            parameters=parameters,
            enable_cross_partition_query=True,
        )
        return [Vocabulary(**item) for item in items]

    def get_by_id(self, vocabulary_id: str) -> Vocabulary:
        """Get a catalogue entry by ID."""
        try:
            item = self.container.read_item(item=vocabulary_id, partition_key=vocabulary_id)
            return Vocabulary(**item)
        except CosmosResourceNotFoundError:
            raise VocabularyNotFoundError(f"Vocabulary with ID {vocabulary_id} not found")

    def exists(self, vocabulary_id: str) -> bool:
        try:
            self.get_by_id(vocabulary_id)
            return True
        except VocabularyNotFoundError:
            return False

    def find_by_word(self, word: str) -> Vocabulary | None:
        """Return the entry spelled exactly `word`, if any."""
        items = list(
            self.container.query_items(
                query="SELECT TOP 1 * FROM c WHERE c.word = @word",
                parameters=[{"name": "@word", "value": word}],
                enable_cross_partition_query=True,
            )
        )
        return Vocabulary(**items[0]) if items else None

    def get_first_unlearned(self, learned_ids: Collection[str]) -> Vocabulary | None:
        """Return the oldest entry whose id is not in `learned_ids`."""
        items = list(
            self.container.query_items(
                query=(
                    "SELECT TOP 1 * FROM c WHERE NOT ARRAY_CONTAINS(@learnedIds, c.id) "
                    "ORDER BY c.createdAt ASC"
                ),
                parameters=[{"name": "@learnedIds", "value": sorted(learned_ids)}],
                enable_cross_partition_query=True,
            )
        )
        return Vocabulary(**items[0]) if items else None

    def create(self, vocabulary_create: VocabularyCreate) -> Vocabulary:
        """Add a new entry to the catalogue."""
        vocabulary = Vocabulary(**vocabulary_create.model_dump())
        created_item = self.container.create_item(body=vocabulary.model_dump())
        return Vocabulary(**created_item)

    def update(self, vocabulary_id: str, vocabulary_update: VocabularyUpdate) -> Vocabulary:
        """Apply a partial update to an existing entry."""
        existing = self.get_by_id(vocabulary_id)

        update_data = vocabulary_update.model_dump(exclude_unset=True)
        if not update_data:
            return existing

        # Re-validate: a null on a required field must not reach the store
        updated = Vocabulary(**{**existing.model_dump(), **update_data, "updatedAt": utc_now_iso()})
        updated_item = self.container.replace_item(item=vocabulary_id, body=updated.model_dump())
        return Vocabulary(**updated_item)

    def delete(self, vocabulary_id: str) -> None:
        """Remove an entry from the catalogue.

        Learner progress records pointing at it are left in place.
        """
        try:
            self.container.delete_item(item=vocabulary_id, partition_key=vocabulary_id)
        except CosmosResourceNotFoundError:
            raise VocabularyNotFoundError(f"Vocabulary with ID {vocabulary_id} not found")


# Singleton instance
_vocabulary_repository: VocabularyRepository | None = None


def get_vocabulary_repository() -> VocabularyRepository:
    """Get the vocabulary repository singleton."""
    global _vocabulary_repository
    if _vocabulary_repository is None:
        _vocabulary_repository = VocabularyRepository()
    return _vocabulary_repository
