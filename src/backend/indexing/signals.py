"""Signal handlers keeping searchable models in sync with their index."""
# pylint: disable=unused-argument

import logging

from django.conf import settings
from django.db.models.signals import post_delete, post_init, post_save, pre_save
from django.dispatch import receiver

from elasticsearch import NotFoundError

from indexing.models import SearchableModel
from indexing.tasks import (
    delete_document_task,
    index_document_task,
    update_document_task,
)

logger = logging.getLogger(__name__)


def _indexing_enabled(instance):
    """Return True if ``instance`` should be synced with its index."""
    return isinstance(instance, SearchableModel) and getattr(
        settings, "SEARCH_INDEXING_ENABLED", False
    )


def _model_label(instance):
    """Return the ``app_label.ModelName`` label of the instance's model."""
    return instance._meta.label


@receiver(post_init)
def snapshot_post_init(sender, instance, **kwargs):
    """Remember the field values of a searchable object when it is loaded."""
    if isinstance(instance, SearchableModel):
        instance.snapshot_tracked_fields()


@receiver(pre_save)
def record_changes_pre_save(sender, instance, raw=False, **kwargs):
    """Record the changed fields of a searchable object before it's saved."""
    if raw or not _indexing_enabled(instance) or instance._state.adding:
        return

    changes = instance.get_changes()
    if changes:
        instance.search_document.record_changes(changes)


@receiver(post_save)
def update_document_post_save(sender, instance, created, raw=False, **kwargs):
    """Send the changes of a searchable object to the index after it's saved."""
    if raw or not _indexing_enabled(instance):
        return

    document = instance.search_document
    try:
        if getattr(settings, "SEARCH_INDEXING_ASYNC", False):
            # Schedule the indexing task asynchronously
            if document.changes:
                update_document_task.delay(
                    _model_label(instance), str(instance.pk), sorted(document.changes)
                )
                document.changes = None
            else:
                index_document_task.delay(_model_label(instance), str(instance.pk))
        else:
            document.update_document()

    # pylint: disable=broad-exception-caught
    except Exception as e:
        logger.exception(
            "Error updating document for %s %s: %s",
            _model_label(instance),
            instance.pk,
            e,
        )
    finally:
        instance.snapshot_tracked_fields()


@receiver(post_delete)
def delete_document_post_delete(sender, instance, **kwargs):
    """Remove the document of a searchable object after it's deleted."""
    if not _indexing_enabled(instance):
        return

    try:
        if getattr(settings, "SEARCH_INDEXING_ASYNC", False):
            delete_document_task.delay(_model_label(instance), str(instance.pk))
        else:
            instance.search_document.delete_document()
    except NotFoundError:
        logger.debug(
            "Document for %s %s was not indexed", _model_label(instance), instance.pk
        )

    # pylint: disable=broad-exception-caught
    except Exception as e:
        logger.exception(
            "Error removing document for %s %s from index: %s",
            _model_label(instance),
            instance.pk,
            e,
        )
