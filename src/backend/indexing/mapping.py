"""Index settings and mapping builders."""

from contextlib import contextmanager

# Field types whose children are declared as embedded "properties"
TYPES_WITH_EMBEDDED_PROPERTIES = ("object", "nested")

DEFAULT_FIELD_TYPE = "text"
DEFAULT_CONTAINER_TYPE = "object"


class Settings:
    """Wraps the index settings (shards, replicas, analysis...)."""

    def __init__(self, settings=None):
        self.settings = dict(settings or {})

    def update(self, settings):
        """Merge ``settings`` into the current ones."""
        self.settings.update(settings)

    def to_dict(self):
        """Return the settings as sent to Elasticsearch."""
        return self.settings


class Mapping:
    """
    Builder for index mappings.

    Fields are declared with :meth:`indexes`. Passing a ``block`` declares
    children: every ``indexes`` call made by the block lands inside the
    parent field, under ``properties`` for object/nested fields and under
    ``fields`` (multi-fields) for every other type::

        mapping = Mapping(dynamic="strict")
        mapping.indexes("title", lambda m: m.indexes("raw", type="keyword"))
        mapping.indexes("author", lambda m: m.indexes("name"))
    """

    def __init__(self, doc_type=None, **options):
        self.doc_type = doc_type
        self.options = options
        self._mapping = {}
        self._current = self._mapping

    @contextmanager
    def _scope(self, children):
        """Redirect declarations to ``children`` until the block exits."""
        previous = self._current
        self._current = children
        try:
            yield self
        finally:
            self._current = previous

    def indexes(self, name, block=None, **options):
        """Declare the ``name`` field, returning the builder for chaining."""
        entry = self._current.setdefault(name, {})
        entry.update(options)

        # Untyped fields only become text on serialization, so that a later
        # block can still declare them as objects
        if block is not None:
            entry.setdefault("type", DEFAULT_CONTAINER_TYPE)

        field_type = str(entry.get("type", DEFAULT_FIELD_TYPE)).lower()
        if field_type in TYPES_WITH_EMBEDDED_PROPERTIES:
            key, stale_key = "properties", "fields"
        else:
            key, stale_key = "fields", "properties"
        # Children declared under a previous type are dropped
        entry.pop(stale_key, None)

        if block is not None:
            with self._scope(entry.setdefault(key, {})):
                block(self)

        return self

    @classmethod
    def _serialize(cls, fields):
        """Copy ``fields``, typing every untyped field as text."""
        serialized = {}
        for name, entry in fields.items():
            entry = {"type": DEFAULT_FIELD_TYPE, **entry}
            for key in ("properties", "fields"):
                if key in entry:
                    entry[key] = cls._serialize(entry[key])
            serialized[name] = entry
        return serialized

    def to_dict(self):
        """Return the mapping as sent to Elasticsearch."""
        mapping = {**self.options, "properties": self._serialize(self._mapping)}
        if self.doc_type:
            return {self.doc_type: mapping}
        return mapping
