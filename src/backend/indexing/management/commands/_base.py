"""Shared helpers of the index management commands."""

from django.core.management.base import BaseCommand, CommandError

from indexing.models import get_searchable_models


class SearchIndexCommand(BaseCommand):
    """Base command acting on the index of one or every searchable model."""

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--model",
            type=str,
            help="Only act on the index of this model (app_label.ModelName)",
        )

    def get_models(self, options):
        """Return the models selected by the ``--model`` option."""
        try:
            return get_searchable_models(options.get("model"))
        except (LookupError, ValueError) as e:
            raise CommandError(str(e)) from e
