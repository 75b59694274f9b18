"""
Cosmos DB client and connection management.

Two containers back the service:
- vocabulary: the shared word catalogue, partitioned by /id
- user_vocabulary: one memory-state record per learner and word, partitioned by /userId

Authentication:
- COSMOS_EMULATOR=true uses the local emulator with its well-known key
- otherwise DefaultAzureCredential (Managed Identity in Azure, `az login` locally)
"""

import os
import logging
from functools import lru_cache
from azure.cosmos import CosmosClient, DatabaseProxy, ContainerProxy, PartitionKey
from azure.core.exceptions import AzureError
from azure.identity import DefaultAzureCredential

logger = logging.getLogger(__name__)

# Cosmos DB Emulator well-known key (public, not a secret)
# https://learn.microsoft.com/en-us/azure/cosmos-db/emulator#authentication
EMULATOR_KEY = "C2y6yDjf5/R+ob0N8A7Cgv30VRDJIWEHLM+4QDU5DE2nQ9nDuVTqobD4b8mGGyPMbIZnqyMsEcaGQy67XIw/Jw=="
EMULATOR_ENDPOINT = "https://localhost:8081"

VOCABULARY_PARTITION_KEY = "/id"
PROGRESS_PARTITION_KEY = "/userId"


class CosmosDBSettings:
    """Settings for Cosmos DB connection."""

    def __init__(self):
        self.endpoint = os.getenv("COSMOS_ENDPOINT", "")
        self.database_name = os.getenv("COSMOS_DB_NAME", "wordwise")
        self.vocabulary_container = os.getenv("COSMOS_VOCABULARY_CONTAINER", "vocabulary")
        self.progress_container = os.getenv("COSMOS_PROGRESS_CONTAINER", "user_vocabulary")
        self.use_emulator = os.getenv("COSMOS_EMULATOR", "false").lower() == "true"

    def is_configured(self) -> bool:
        """Check if Cosmos DB is configured."""
        if self.use_emulator:
            return True
        return bool(self.endpoint)


@lru_cache()
def get_settings() -> CosmosDBSettings:
    """Get cached Cosmos DB settings."""
    return CosmosDBSettings()


_client: CosmosClient | None = None
_database: DatabaseProxy | None = None


def get_client() -> CosmosClient:
    """Get or create the Cosmos DB client."""
    global _client
    if _client is None:
        settings = get_settings()
        if not settings.is_configured():
            raise RuntimeError(
                "Cosmos DB is not configured. "
                "Set COSMOS_ENDPOINT environment variable, or COSMOS_EMULATOR=true for local emulator."
            )

        if settings.use_emulator:
            logger.info("Using Cosmos DB Emulator at %s", EMULATOR_ENDPOINT)
            _client = CosmosClient(
                EMULATOR_ENDPOINT,
                credential=EMULATOR_KEY,
                connection_verify=False,  # Emulator uses self-signed cert
            )
        else:
            logger.info("Using DefaultAzureCredential for Cosmos DB at %s", settings.endpoint)
            _client = CosmosClient(settings.endpoint, credential=DefaultAzureCredential())

    return _client


def get_database() -> DatabaseProxy:
    """Get or create the database proxy."""
    global _database
    if _database is None:
        settings = get_settings()
        _database = get_client().get_database_client(settings.database_name)
    return _database


def get_container(container_name: str) -> ContainerProxy:
    """Get a container proxy by name."""
    return get_database().get_container_client(container_name)


def get_vocabulary_container() -> ContainerProxy:
    """Get the vocabulary catalogue container."""
    return get_container(get_settings().vocabulary_container)


def get_progress_container() -> ContainerProxy:
    """Get the learner progress container."""
    return get_container(get_settings().progress_container)


def ensure_containers() -> None:
    """Create the database and both containers if they do not exist yet."""
    settings = get_settings()
    database = get_client().create_database_if_not_exists(id=settings.database_name)
    database.create_container_if_not_exists(
        id=settings.vocabulary_container,
        partition_key=PartitionKey(path=VOCABULARY_PARTITION_KEY),
    )
    database.create_container_if_not_exists(
        id=settings.progress_container,
        partition_key=PartitionKey(path=PROGRESS_PARTITION_KEY),
    )


def verify_connection() -> bool:
    """Verify the Cosmos DB connection is working."""
    settings = get_settings()
    if not settings.is_configured():
        return False
    try:
        get_database().read()
        return True
    except AzureError as e:
        logger.warning("Cosmos DB connection check failed: %s", e)
        return False


def close_client():
    """Drop the cached client and database proxies."""
    global _client, _database
    # CosmosClient manages its connections internally; clearing references is enough
    _client = None
    _database = None
