"""Elasticsearch client and index administration."""

import logging

from django.conf import settings as django_settings
from django.core.exceptions import ImproperlyConfigured
from django.utils.text import slugify

import yaml
from elasticsearch import Elasticsearch, NotFoundError
from elasticsearch.helpers import bulk

from indexing.mapping import Mapping, Settings

logger = logging.getLogger(__name__)


# Elasticsearch client instantiation
def get_es_client():
    """Get Elasticsearch client instance."""
    if not hasattr(get_es_client, "cached_client"):
        get_es_client.cached_client = Elasticsearch(
            hosts=django_settings.ELASTICSEARCH_HOSTS
        )
    return get_es_client.cached_client


class SearchIndex:
    """
    Binds index settings and mappings to a logical index name, and exposes
    the index administration calls for it.

    Declared as a class attribute of a model, the index is bound to that
    model and takes its name from the model when none is given::

        class Article(SearchableModel):
            search_index = SearchIndex("articles")

        Article.search_index.settings(number_of_shards=1)
        Article.search_index.mapping(lambda m: m.indexes("title"))
    """

    def __init__(self, name=None, client=None, doc_type=None):
        self._name = name
        self._client = client
        self.doc_type = doc_type
        self.model = None
        self._mapping = None
        self._settings = None

    def contribute_to_class(self, cls, name):
        """Bind the index to the model class it is declared on."""
        self.model = cls
        setattr(cls, name, self)

    @property
    def name(self):
        """Name of the index, prefixed with ``SEARCH_INDEX_PREFIX``."""
        name = self._name
        if name is None:
            if self.model is None:
                raise ImproperlyConfigured(
                    "SearchIndex needs a name when it is not bound to a model."
                )
            name = slugify(str(self.model._meta.verbose_name_plural)).replace(
                "-", "_"
            )
        prefix = getattr(django_settings, "SEARCH_INDEX_PREFIX", "")
        return f"{prefix}{name}"

    @property
    def client(self):
        """Elasticsearch client used for every call on this index."""
        return self._client or get_es_client()

    def mapping(self, block=None, **options):
        """
        Return the index mapping, creating it on first use.

        ``options`` are merged into the mapping options. When ``block`` is
        given it is called with the mapping and the index is returned, so
        declarations can be chained.
        """
        if self._mapping is None:
            self._mapping = Mapping(doc_type=self.doc_type, **options)
        elif options:
            self._mapping.options.update(options)

        if block is not None:
            block(self._mapping)
            return self
        return self._mapping

    mappings = mapping

    def settings(self, source=None, block=None, **options):
        """
        Return the index settings, creating them on first use.

        ``source`` is either a dict or a readable object (e.g. an open file)
        holding YAML or JSON. It is merged into the existing settings along
        with ``options``. When ``block`` is given it is called with the index,
        and the index is returned.
        """
        if source is not None and hasattr(source, "read"):
            source = yaml.safe_load(source.read()) or {}
            if not isinstance(source, dict):
                raise ImproperlyConfigured(
                    "Index settings must be a mapping, "
                    f"got {type(source).__name__}."
                )
        values = {**(source or {}), **options}

        if self._settings is None:
            self._settings = Settings(values)
        elif values:
            self._settings.update(values)

        if block is not None:
            block(self)
            return self
        return self._settings

    def create_index(
        self, force=False, index=None, settings=None, mappings=None, **options
    ):
        """Create the index with its settings and mappings if it doesn't exist.

        With ``force``, the index is deleted first.
        """
        target_index = index or self.name
        if settings is None:
            settings = self.settings().to_dict()
        if mappings is None:
            mappings = self.mapping().to_dict()

        if force:
            self.delete_index(force=True, index=target_index)

        if self.index_exists(index=target_index):
            return None

        response = self.client.indices.create(
            index=target_index, settings=settings, mappings=mappings, **options
        )
        logger.info("Created Elasticsearch index: %s", target_index)
        return response

    def index_exists(self, index=None):
        """Return True if the index exists."""
        return bool(self.client.indices.exists(index=index or self.name))

    def delete_index(self, force=False, index=None):
        """Delete the index. A missing index is only tolerated with ``force``."""
        target_index = index or self.name
        try:
            response = self.client.indices.delete(index=target_index)
        except NotFoundError as e:
            if not force:
                raise
            logger.debug("Index %s does not exist (%s)", target_index, e)
            return None
        logger.info("Deleted Elasticsearch index: %s", target_index)
        return response

    def refresh_index(self, force=False, index=None):
        """Refresh the index. A missing index is only tolerated with ``force``."""
        target_index = index or self.name
        try:
            return self.client.indices.refresh(index=target_index)
        except NotFoundError as e:
            if not force:
                raise
            logger.debug("Index %s does not exist (%s)", target_index, e)
            return None

    def import_documents(
        self,
        queryset=None,
        batch_size=500,
        force=False,
        refresh=False,
        transform=None,
        index=None,
    ):
        """Bulk index every object of ``queryset`` and return the error count.

        ``queryset`` defaults to all the objects of the bound model. With
        ``force`` the index is recreated before importing.
        ``transform`` turns an object into a bulk action.
        """
        target_index = index or self.name
        if queryset is None:
            if self.model is None:
                raise ImproperlyConfigured(
                    "import_documents needs a queryset when the index is not "
                    "bound to a model."
                )
            queryset = self.model.objects.all()

        if force:
            self.create_index(force=True, index=target_index)

        def default_transform(instance):
            """Build an index action from the object's indexed document."""
            return {
                "_index": target_index,
                "_id": str(instance.pk),
                "_source": instance.as_indexed_json(),
            }

        transform = transform or default_transform
        actions = (transform(obj) for obj in queryset.iterator(chunk_size=batch_size))
        success_count, errors = bulk(
            self.client, actions, chunk_size=batch_size, raise_on_error=False
        )
        logger.info(
            "Imported %s documents into %s (%s errors)",
            success_count,
            target_index,
            len(errors),
        )

        if refresh:
            self.refresh_index(index=target_index)

        return len(errors)
