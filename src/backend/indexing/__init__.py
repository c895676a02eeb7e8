"""Keep Django models in sync with Elasticsearch indices."""

from indexing.documents import DocumentManager, IndexedDocument
from indexing.index import SearchIndex, get_es_client
from indexing.mapping import Mapping, Settings

__all__ = [
    # Mapping
    "Mapping",
    "Settings",
    # Client & Index management
    "get_es_client",
    "SearchIndex",
    # Documents
    "DocumentManager",
    "IndexedDocument",
]
