"""Management command to reindex content in Elasticsearch."""

from indexing.management.commands._base import SearchIndexCommand
from indexing.tasks import _reindex_model_base, reindex_model_task


class Command(SearchIndexCommand):
    """Reindex content in Elasticsearch."""

    help = "Reindex content in Elasticsearch"

    def add_arguments(self, parser):
        """Add command arguments."""
        super().add_arguments(parser)

        # Async option
        parser.add_argument(
            "--async",
            action="store_true",
            help="Run task asynchronously",
            dest="async_mode",
        )

        # Whether to recreate the index
        parser.add_argument(
            "--recreate-index",
            action="store_true",
            help="Recreate the index before reindexing",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        failures = 0
        for model in self.get_models(options):
            model_label = model._meta.label
            self.stdout.write(f"Reindexing {model_label}...")

            if options["async_mode"]:
                task = reindex_model_task.delay(
                    model_label, force=options["recreate_index"]
                )
                self.stdout.write(
                    self.style.SUCCESS(f"Reindexing task scheduled (ID: {task.id})")
                )
                continue

            result = _reindex_model_base(model_label, force=options["recreate_index"])
            failures += result["failure_count"]
            self.stdout.write(
                self.style.SUCCESS(
                    f"Reindexing {model_label} completed: "
                    f"{result['success_count']} succeeded, "
                    f"{result['failure_count']} failed"
                )
            )

        if failures:
            self.stderr.write(self.style.ERROR(f"{failures} documents failed"))
