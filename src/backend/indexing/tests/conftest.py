"""Fixtures for tests in the search indexing application"""
# pylint: disable=redefined-outer-name

from unittest import mock

import pytest
from elasticsearch import NotFoundError


@pytest.fixture(autouse=True)
def mock_es_client():
    """Mock the Elasticsearch client."""
    with mock.patch("indexing.index.get_es_client") as mock_get_es_client:
        mock_es = mock.MagicMock()
        # Setup standard mock returns
        mock_es.indices.exists.return_value = False
        mock_es.indices.create.return_value = {"acknowledged": True}
        mock_es.indices.delete.return_value = {"acknowledged": True}
        mock_es.indices.refresh.return_value = {"_shards": {"failed": 0}}
        mock_es.index.return_value = {"result": "created"}
        mock_es.update.return_value = {"result": "updated"}
        mock_es.delete.return_value = {"result": "deleted"}

        mock_get_es_client.return_value = mock_es
        yield mock_es


@pytest.fixture
def not_found_error():
    """Build the error raised by Elasticsearch for a missing index or document."""

    def build(message="index_not_found_exception"):
        return NotFoundError(message, meta=mock.Mock(status=404), body={})

    return build
