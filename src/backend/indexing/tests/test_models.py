"""Tests for the searchable model base class."""

import pytest

from blog.factories import ArticleFactory
from blog.models import Article, Author
from indexing.documents import DocumentManager
from indexing.models import SearchableModel, get_searchable_models


def test_get_changes_against_snapshot():
    """Changes are reported as (old, new) pairs from the last snapshot."""
    article = Article(title="Old", body="Body", tags=["a"])
    assert article.get_changes() == {}

    article.title = "New"
    article.tags.append("b")

    assert article.get_changes() == {
        "title": ("Old", "New"),
        "tags": (["a"], ["a", "b"]),
    }

    article.snapshot_tracked_fields()
    assert article.get_changes() == {}


def test_search_document_is_cached():
    """Each instance keeps a single document manager."""
    article = Article(title="Title")

    assert isinstance(article.search_document, DocumentManager)
    assert article.search_document is article.search_document
    assert article.search_document.search_index is Article.search_index


@pytest.mark.django_db
def test_default_indexed_document():
    """By default every concrete field but the primary key is indexed."""
    article = ArticleFactory(title="Title", view_count=3)

    document = SearchableModel.as_indexed_json(article)

    assert "id" not in document
    assert document["title"] == "Title"
    assert document["view_count"] == 3
    assert document["author_id"] == article.author_id


def test_get_searchable_models():
    """Only searchable models are returned."""
    assert get_searchable_models() == [Article]
    assert get_searchable_models("blog.Article") == [Article]

    with pytest.raises(LookupError):
        get_searchable_models("blog.Author")

    assert Author not in get_searchable_models()
