"""Abstract model for objects kept in sync with a search index."""

import copy
from functools import cached_property

from django.apps import apps
from django.db import models

from indexing.documents import DocumentManager


class SearchableModel(models.Model):
    """
    Base model for objects indexed in Elasticsearch.

    Subclasses declare a ``search_index`` (see :class:`indexing.index.SearchIndex`).
    Field values are snapshotted when an instance is loaded or saved, so that
    ``get_changes`` can report what changed before the next save.
    """

    search_index = None

    class Meta:
        abstract = True

    @cached_property
    def search_document(self):
        """Document manager of this instance."""
        return DocumentManager(self, self.search_index)

    def as_indexed_json(self):
        """Return the document indexed for this instance."""
        return {
            field.attname: field.value_from_object(self)
            for field in self._meta.concrete_fields
            if not field.primary_key
        }

    def _tracked_values(self):
        """Return the loaded concrete field values, by attname."""
        return {
            field.attname: self.__dict__[field.attname]
            for field in self._meta.concrete_fields
            if field.attname in self.__dict__
        }

    def snapshot_tracked_fields(self):
        """Remember the current field values as the persisted state."""
        self._search_snapshot = copy.deepcopy(self._tracked_values())

    def get_changes(self):
        """Return ``{attname: (old, new)}`` for fields changed since the snapshot."""
        snapshot = getattr(self, "_search_snapshot", {})
        return {
            attname: (snapshot[attname], value)
            for attname, value in self._tracked_values().items()
            if attname in snapshot and snapshot[attname] != value
        }


def get_searchable_models(model_label=None):
    """Return the searchable models, or only the one labelled ``model_label``."""
    if model_label:
        model = apps.get_model(model_label)
        if not issubclass(model, SearchableModel):
            raise LookupError(f"Model {model_label} is not searchable")
        return [model]
    return [
        model
        for model in apps.get_models()
        if issubclass(model, SearchableModel) and model.search_index is not None
    ]
