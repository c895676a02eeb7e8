"""Management command to delete Elasticsearch indices."""

from elasticsearch import NotFoundError

from indexing.management.commands._base import SearchIndexCommand


class Command(SearchIndexCommand):
    """Delete Elasticsearch indices."""

    help = "Delete Elasticsearch indices"

    def add_arguments(self, parser):
        """Add command arguments."""
        super().add_arguments(parser)
        parser.add_argument(
            "--force",
            action="store_true",
            help="Force deletion without confirmation",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        models = self.get_models(options)
        names = ", ".join(model.search_index.name for model in models)

        if not options["force"]:
            confirm = input(
                f"Are you sure you want to delete the Elasticsearch indices {names}? "
                "This cannot be undone. [y/N] "
            )
            if confirm.lower() != "y":
                self.stdout.write(self.style.WARNING("Operation cancelled"))
                return

        for model in models:
            search_index = model.search_index
            self.stdout.write(f"Deleting Elasticsearch index {search_index.name}...")
            try:
                search_index.delete_index()
            except NotFoundError:
                self.stdout.write(
                    self.style.WARNING(
                        f"Elasticsearch index {search_index.name} not found "
                        "or already deleted"
                    )
                )
                continue
            self.stdout.write(
                self.style.SUCCESS(
                    f"Elasticsearch index {search_index.name} deleted successfully"
                )
            )
