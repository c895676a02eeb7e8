"""Indexing tasks."""

# pylint: disable=unused-argument, broad-exception-caught
from django.apps import apps
from django.core.exceptions import ObjectDoesNotExist

from celery.utils.log import get_task_logger
from elasticsearch import NotFoundError

from searchmodel.celery_app import app as celery_app

logger = get_task_logger(__name__)


def _get_instance(model_label, pk):
    """Load the object ``pk`` of the model labelled ``model_label``."""
    model = apps.get_model(model_label)
    return model.objects.get(pk=pk)


@celery_app.task(bind=True)
def index_document_task(self, model_label, pk):
    """Index the full document of an object."""
    try:
        instance = _get_instance(model_label, pk)
        instance.search_document.index_document()
        return {"model": model_label, "id": str(pk), "success": True}
    except ObjectDoesNotExist:
        logger.error("%s %s does not exist", model_label, pk)
        return {
            "model": model_label,
            "id": str(pk),
            "success": False,
            "error": f"{model_label} {pk} does not exist",
        }
    except Exception as e:
        logger.exception(
            "Error in index_document_task for %s %s: %s", model_label, pk, e
        )
        raise


@celery_app.task(bind=True)
def update_document_task(self, model_label, pk, changed_fields):
    """Send the current value of ``changed_fields`` as a partial update.

    The object is reloaded, so the values sent are the ones stored in the
    database when the task runs.
    """
    try:
        instance = _get_instance(model_label, pk)
        values = instance.__dict__
        instance.search_document.record_changes(
            {field: (None, values.get(field)) for field in changed_fields}
        )
        response = instance.search_document.update_document()
        return {
            "model": model_label,
            "id": str(pk),
            "success": True,
            "updated": response is not None,
        }
    except ObjectDoesNotExist:
        logger.error("%s %s does not exist", model_label, pk)
        return {
            "model": model_label,
            "id": str(pk),
            "success": False,
            "error": f"{model_label} {pk} does not exist",
        }
    except Exception as e:
        logger.exception(
            "Error in update_document_task for %s %s: %s", model_label, pk, e
        )
        raise


@celery_app.task(bind=True)
def delete_document_task(self, model_label, pk):
    """Remove the document of a deleted object from the index."""
    model = apps.get_model(model_label)
    # The object is gone from the database, only its primary key is needed
    instance = model(pk=pk)
    try:
        instance.search_document.delete_document()
        return {"model": model_label, "id": str(pk), "success": True}
    except NotFoundError:
        logger.info("Document %s of %s was not indexed", pk, model_label)
        return {"model": model_label, "id": str(pk), "success": False}
    except Exception as e:
        logger.exception(
            "Error in delete_document_task for %s %s: %s", model_label, pk, e
        )
        raise


def _reindex_model_base(model_label, force=False):
    """Base function for reindexing every object of a model.

    Args:
        model_label: ``app_label.ModelName`` of a searchable model
        force: Whether to recreate the index before importing
    """
    model = apps.get_model(model_label)
    search_index = model.search_index

    try:
        if not force:
            # Ensure index exists first
            search_index.create_index()

        total = model.objects.count()
        failure_count = search_index.import_documents(force=force, refresh=True)

        return {
            "model": model_label,
            "success": True,
            "total": total,
            "success_count": total - failure_count,
            "failure_count": failure_count,
        }
    except Exception as e:
        logger.exception("Error reindexing %s: %s", model_label, e)
        raise


@celery_app.task(bind=True)
def reindex_model_task(self, model_label, force=False):
    """Celery task wrapper for reindexing every object of a model."""
    return _reindex_model_base(model_label, force=force)
