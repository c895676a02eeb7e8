"""
Declare the models of the blog application and their search index
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from indexing.index import SearchIndex
from indexing.models import SearchableModel


class Author(models.Model):
    """Author of articles."""

    name = models.CharField(_("name"), max_length=255)
    email = models.EmailField(_("email"), blank=True)

    class Meta:
        verbose_name = _("author")
        verbose_name_plural = _("authors")

    def __str__(self):
        return self.name


class Article(SearchableModel):
    """Article indexed for full-text search."""

    author = models.ForeignKey(
        Author, on_delete=models.CASCADE, related_name="articles"
    )
    title = models.CharField(_("title"), max_length=255)
    body = models.TextField(_("body"), blank=True)
    tags = models.JSONField(_("tags"), default=list, blank=True)
    is_published = models.BooleanField(_("is published"), default=False)
    published_at = models.DateTimeField(_("published at"), null=True, blank=True)
    view_count = models.PositiveIntegerField(_("view count"), default=0)
    created_at = models.DateTimeField(_("created on"), auto_now_add=True)
    updated_at = models.DateTimeField(_("updated on"), auto_now=True)

    search_index = SearchIndex()

    class Meta:
        verbose_name = _("article")
        verbose_name_plural = _("articles")

    def __str__(self):
        return self.title

    def as_indexed_json(self):
        """Return the document indexed for this article."""
        return {
            "title": self.title,
            "body": self.body,
            "tags": self.tags,
            "author_id": str(self.author_id),
            "author": {"name": self.author.name, "email": self.author.email},
            "is_published": self.is_published,
            "published_at": (
                self.published_at.isoformat() if self.published_at else None
            ),
        }


def article_mapping(mapping):
    """Declare the fields of the article index."""
    mapping.indexes(
        "title",
        lambda title: title.indexes("raw", type="keyword", ignore_above=256),
    )
    mapping.indexes("body", analyzer="english")
    mapping.indexes("tags", type="keyword")
    mapping.indexes("author_id", type="keyword")
    mapping.indexes(
        "author",
        lambda author: author.indexes("name").indexes("email", type="keyword"),
    )
    mapping.indexes("is_published", type="boolean")
    mapping.indexes("published_at", type="date")


Article.search_index.settings(
    {"number_of_shards": 1, "number_of_replicas": 0},
    block=lambda index: index.mapping(article_mapping, dynamic="strict"),
)
