"""Tests for Cosmos DB settings, client creation and connection checks."""

import pytest
from unittest.mock import patch, MagicMock
from azure.core.exceptions import ServiceRequestError

from wordwise.db.cosmos import (
    CosmosDBSettings,
    get_settings,
    get_client,
    verify_connection,
    ensure_containers,
    close_client,
    EMULATOR_KEY,
    EMULATOR_ENDPOINT,
    VOCABULARY_PARTITION_KEY,
    PROGRESS_PARTITION_KEY,
)


@pytest.fixture(autouse=True)
def cleanup():
    """Reset cached client and settings around each test."""
    close_client()
    get_settings.cache_clear()
    yield
    close_client()
    get_settings.cache_clear()


class TestCosmosDBSettings:
    def test_default_settings(self, monkeypatch):
        for name in (
            "COSMOS_ENDPOINT",
            "COSMOS_DB_NAME",
            "COSMOS_VOCABULARY_CONTAINER",
            "COSMOS_PROGRESS_CONTAINER",
            "COSMOS_EMULATOR",
        ):
            monkeypatch.delenv(name, raising=False)

        settings = CosmosDBSettings()

        assert settings.endpoint == ""
        assert settings.database_name == "wordwise"
        assert settings.vocabulary_container == "vocabulary"
        assert settings.progress_container == "user_vocabulary"
        assert settings.use_emulator is False
        assert settings.is_configured() is False

    def test_settings_from_environment(self, monkeypatch):
        monkeypatch.setenv("COSMOS_ENDPOINT", "https://test.documents.azure.com:443/")
        monkeypatch.setenv("COSMOS_DB_NAME", "testdb")
        monkeypatch.setenv("COSMOS_VOCABULARY_CONTAINER", "words")
        monkeypatch.setenv("COSMOS_PROGRESS_CONTAINER", "progress")
        monkeypatch.setenv("COSMOS_EMULATOR", "false")

        settings = CosmosDBSettings()

        assert settings.database_name == "testdb"
        assert settings.vocabulary_container == "words"
        assert settings.progress_container == "progress"
        assert settings.is_configured() is True

    def test_emulator_mode_is_configured(self, monkeypatch):
        monkeypatch.delenv("COSMOS_ENDPOINT", raising=False)
        monkeypatch.setenv("COSMOS_EMULATOR", "TRUE")

        settings = CosmosDBSettings()

        assert settings.use_emulator is True
        assert settings.is_configured() is True


class TestCosmosDBClient:
    @patch("wordwise.db.cosmos.CosmosClient")
    def test_get_client_emulator_mode(self, mock_cosmos_client, monkeypatch):
        monkeypatch.setenv("COSMOS_EMULATOR", "true")
        monkeypatch.delenv("COSMOS_ENDPOINT", raising=False)

        get_client()

        mock_cosmos_client.assert_called_once_with(
            EMULATOR_ENDPOINT, credential=EMULATOR_KEY, connection_verify=False
        )

    @patch("wordwise.db.cosmos.DefaultAzureCredential")
    @patch("wordwise.db.cosmos.CosmosClient")
    def test_get_client_azure_mode(self, mock_cosmos_client, mock_credential, monkeypatch):
        monkeypatch.setenv("COSMOS_EMULATOR", "false")
        monkeypatch.setenv("COSMOS_ENDPOINT", "https://test.documents.azure.com:443/")

        get_client()

        mock_credential.assert_called_once()
        mock_cosmos_client.assert_called_once_with(
            "https://test.documents.azure.com:443/", credential=mock_credential.return_value
        )

    @patch("wordwise.db.cosmos.CosmosClient")
    def test_client_is_reused(self, mock_cosmos_client, monkeypatch):
        monkeypatch.setenv("COSMOS_EMULATOR", "true")

        assert get_client() is get_client()
        mock_cosmos_client.assert_called_once()

    def test_get_client_not_configured(self, monkeypatch):
        monkeypatch.setenv("COSMOS_EMULATOR", "false")
        monkeypatch.delenv("COSMOS_ENDPOINT", raising=False)

        with pytest.raises(RuntimeError) as exc_info:
            get_client()

        assert "not configured" in str(exc_info.value)


class TestEnsureContainers:
    @patch("wordwise.db.cosmos.CosmosClient")
    def test_creates_database_and_both_containers(self, mock_cosmos_client, monkeypatch):
        monkeypatch.setenv("COSMOS_EMULATOR", "true")
        monkeypatch.delenv("COSMOS_DB_NAME", raising=False)
        monkeypatch.delenv("COSMOS_VOCABULARY_CONTAINER", raising=False)
        monkeypatch.delenv("COSMOS_PROGRESS_CONTAINER", raising=False)
        client = mock_cosmos_client.return_value
        database = client.create_database_if_not_exists.return_value

        ensure_containers()

        client.create_database_if_not_exists.assert_called_once_with(id="wordwise")
        calls = database.create_container_if_not_exists.call_args_list
        assert [c.kwargs["id"] for c in calls] == ["vocabulary", "user_vocabulary"]
        assert calls[0].kwargs["partition_key"].path == VOCABULARY_PARTITION_KEY
        assert calls[1].kwargs["partition_key"].path == PROGRESS_PARTITION_KEY


class TestCosmosDBConnection:
    @patch("wordwise.db.cosmos.get_database")
    @patch("wordwise.db.cosmos.get_settings")
    def test_verify_connection_success(self, mock_settings, mock_database):
        mock_settings.return_value = MagicMock(is_configured=lambda: True)
        mock_db = MagicMock()
        mock_database.return_value = mock_db

        assert verify_connection() is True
        mock_db.read.assert_called_once()

    @patch("wordwise.db.cosmos.get_settings")
    def test_verify_connection_not_configured(self, mock_settings):
        mock_settings.return_value = MagicMock(is_configured=lambda: False)

        assert verify_connection() is False

    @patch("wordwise.db.cosmos.get_database")
    @patch("wordwise.db.cosmos.get_settings")
    def test_verify_connection_failure(self, mock_settings, mock_database):
        mock_settings.return_value = MagicMock(is_configured=lambda: True)
        mock_database.return_value.read.side_effect = ServiceRequestError("Connection refused")

        assert verify_connection() is False
