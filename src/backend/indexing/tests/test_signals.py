"""Tests keeping searchable models in sync with their index on save/delete."""

from unittest import mock

from django.test import override_settings

import pytest

from blog.factories import ArticleFactory, AuthorFactory
from blog.models import Article

pytestmark = pytest.mark.django_db


def test_created_article_is_fully_indexed(mock_es_client):
    """A new article is indexed with its full document."""
    article = ArticleFactory(title="Hello", tags=["news"])

    mock_es_client.index.assert_called_once()
    kwargs = mock_es_client.index.call_args.kwargs
    assert kwargs["index"] == "articles"
    assert kwargs["id"] == str(article.pk)
    assert kwargs["document"]["title"] == "Hello"
    assert kwargs["document"]["tags"] == ["news"]
    assert kwargs["document"]["author"] == {
        "name": article.author.name,
        "email": article.author.email,
    }
    mock_es_client.update.assert_not_called()


def test_changed_article_is_partially_updated(mock_es_client):
    """Saving changes of indexed fields sends only those fields."""
    article = ArticleFactory(title="Old title")
    mock_es_client.reset_mock()

    article.title = "New title"
    article.save()

    mock_es_client.update.assert_called_once_with(
        index="articles", id=str(article.pk), doc={"title": "New title"}
    )
    mock_es_client.index.assert_not_called()


def test_change_of_fields_not_indexed_sends_nothing(mock_es_client):
    """Changes of fields absent from the index don't reach Elasticsearch."""
    article = ArticleFactory(view_count=1)
    mock_es_client.reset_mock()

    article.view_count = 2
    article.save()

    mock_es_client.update.assert_not_called()
    mock_es_client.index.assert_not_called()


def test_save_without_changes_reindexes(mock_es_client):
    """Saving an unchanged article indexes its full document."""
    article = ArticleFactory()
    mock_es_client.reset_mock()

    article.save()

    mock_es_client.index.assert_called_once()
    mock_es_client.update.assert_not_called()


def test_changes_are_tracked_on_loaded_articles(mock_es_client):
    """Articles loaded from the database track their changes too."""
    article = ArticleFactory(body="Old body", is_published=False)
    mock_es_client.reset_mock()

    loaded = Article.objects.get(pk=article.pk)
    loaded.body = "New body"
    loaded.is_published = True
    loaded.save()

    mock_es_client.update.assert_called_once_with(
        index="articles",
        id=str(article.pk),
        doc={"body": "New body", "is_published": True},
    )


def test_changed_foreign_key_is_sent(mock_es_client):
    """Changing the author sends the author id."""
    article = ArticleFactory()
    other_author = AuthorFactory()
    mock_es_client.reset_mock()

    article.author = other_author
    article.save()

    mock_es_client.update.assert_called_once_with(
        index="articles", id=str(article.pk), doc={"author_id": str(other_author.pk)}
    )


def test_consecutive_saves_send_their_own_changes(mock_es_client):
    """Each save sends the changes made since the previous one."""
    article = ArticleFactory(title="First", body="Body")
    mock_es_client.reset_mock()

    article.title = "Second"
    article.save()
    article.body = "Other body"
    article.save()

    assert mock_es_client.update.call_args_list == [
        mock.call(index="articles", id=str(article.pk), doc={"title": "Second"}),
        mock.call(index="articles", id=str(article.pk), doc={"body": "Other body"}),
    ]


def test_failed_update_is_retried_with_next_save(mock_es_client):
    """Changes not sent because of an error are sent with the next save."""
    article = ArticleFactory(title="First", body="Body")
    mock_es_client.reset_mock()
    mock_es_client.update.side_effect = [ConnectionError("down"), {"result": "ok"}]

    article.title = "Second"
    article.save()
    article.body = "Other body"
    article.save()

    assert mock_es_client.update.call_args == mock.call(
        index="articles",
        id=str(article.pk),
        doc={"title": "Second", "body": "Other body"},
    )


def test_deleted_article_is_removed(mock_es_client):
    """Deleting an article deletes its document."""
    article = ArticleFactory()
    pk = article.pk

    article.delete()

    mock_es_client.delete.assert_called_once_with(index="articles", id=str(pk))


def test_deleted_article_not_indexed(mock_es_client, not_found_error):
    """A missing document doesn't prevent deleting the article."""
    article = ArticleFactory()
    mock_es_client.delete.side_effect = not_found_error("not_found")

    article.delete()

    assert not Article.objects.exists()


def test_client_errors_dont_break_saves(mock_es_client):
    """Indexing errors are logged, the article is saved anyway."""
    mock_es_client.index.side_effect = ConnectionError("down")

    article = ArticleFactory()

    assert Article.objects.filter(pk=article.pk).exists()


@override_settings(SEARCH_INDEXING_ENABLED=False)
def test_indexing_disabled(mock_es_client):
    """Nothing is sent when indexing is disabled."""
    article = ArticleFactory()
    article.title = "New title"
    article.save()
    article.delete()

    mock_es_client.index.assert_not_called()
    mock_es_client.update.assert_not_called()
    mock_es_client.delete.assert_not_called()


@override_settings(SEARCH_INDEXING_ASYNC=True)
def test_async_indexing_schedules_tasks():
    """With async indexing, tasks are scheduled instead."""
    with mock.patch.multiple(
        "indexing.signals",
        index_document_task=mock.DEFAULT,
        update_document_task=mock.DEFAULT,
        delete_document_task=mock.DEFAULT,
    ) as tasks:
        index_task = tasks["index_document_task"]
        update_task = tasks["update_document_task"]
        delete_task = tasks["delete_document_task"]

        article = ArticleFactory(title="Old title")
        index_task.delay.assert_called_once_with("blog.Article", str(article.pk))

        article.title = "New title"
        article.view_count += 1
        article.save()
        update_task.delay.assert_called_once_with(
            "blog.Article", str(article.pk), ["title", "view_count"]
        )
        assert article.search_document.changes is None

        pk = article.pk
        article.delete()
        delete_task.delay.assert_called_once_with("blog.Article", str(pk))
