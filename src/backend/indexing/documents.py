"""Document indexing for model instances."""

import logging
from typing import Any, Dict, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class IndexedDocument(Protocol):
    """Objects able to produce their full indexed document."""

    def as_indexed_json(self) -> Dict[str, Any]:
        """Return the document sent to the index."""


class DocumentManager:
    """
    Index, update and delete the document of a single object.

    Field changes recorded with :meth:`record_changes` make the next
    :meth:`update_document` send a partial update of those fields only.
    Without recorded changes, the whole document is reindexed.
    """

    def __init__(self, instance, search_index):
        self.instance = instance
        self.search_index = search_index
        self.changes: Optional[Dict[str, Any]] = None

    @property
    def client(self):
        """Elasticsearch client of the bound index."""
        return self.search_index.client

    @property
    def document_id(self):
        """Identifier of the document in the index."""
        return str(self.instance.pk)

    def _request(self, options, **body):
        """Build the request for this document; ``options`` override its keys."""
        return {
            "index": self.search_index.name,
            "id": self.document_id,
            **body,
            **options,
        }

    def record_changes(self, changes):
        """Keep the new value of each changed field.

        ``changes`` maps field names to ``(old, new)`` pairs. Values recorded
        by an earlier, unconsumed save are kept unless overwritten.
        """
        latest = {field: values[-1] for field, values in changes.items()}
        self.changes = {**(self.changes or {}), **latest}

    def changed_attributes(self):
        """Return the indexed attributes affected by the recorded changes."""
        if isinstance(self.instance, IndexedDocument):
            changed = {str(field) for field in self.changes}
            document = self.instance.as_indexed_json()
            return {
                key: value for key, value in document.items() if str(key) in changed
            }
        return dict(self.changes)

    def index_document(self, **options):
        """Index the full document of the object."""
        document = self.instance.as_indexed_json()
        response = self.client.index(**self._request(options, document=document))
        logger.debug(
            "Indexed document %s in %s", self.document_id, self.search_index.name
        )
        return response

    def delete_document(self, **options):
        """Delete the document of the object from the index."""
        response = self.client.delete(**self._request(options))
        logger.debug(
            "Deleted document %s from %s", self.document_id, self.search_index.name
        )
        return response

    def update_document(self, changes=None, **options):
        """Update the document from the recorded changes.

        Only the changed fields that are part of the indexed document are
        sent. Nothing is sent if none of them are. Without recorded changes,
        the full document is indexed instead.
        """
        if changes:
            self.record_changes(changes)

        if not self.changes:
            return self.index_document(**options)

        attributes = self.changed_attributes()
        if not attributes:
            self.changes = None
            return None

        response = self.update_document_attributes(attributes, **options)
        self.changes = None
        return response

    def update_document_attributes(self, attributes, **options):
        """Partially update the document with ``attributes``."""
        response = self.client.update(**self._request(options, doc=attributes))
        logger.debug(
            "Updated %s of document %s in %s",
            sorted(attributes),
            self.document_id,
            self.search_index.name,
        )
        return response
