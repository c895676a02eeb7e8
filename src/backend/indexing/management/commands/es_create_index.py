"""Management command to create Elasticsearch indices."""

from indexing.management.commands._base import SearchIndexCommand


class Command(SearchIndexCommand):
    """Create Elasticsearch indices if they don't exist."""

    help = "Create Elasticsearch indices if they don't exist"

    def add_arguments(self, parser):
        """Add command arguments."""
        super().add_arguments(parser)
        parser.add_argument(
            "--force",
            action="store_true",
            help="Delete the indices first if they exist",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        for model in self.get_models(options):
            search_index = model.search_index
            self.stdout.write(f"Creating Elasticsearch index {search_index.name}...")

            search_index.create_index(force=options["force"])
            self.stdout.write(
                self.style.SUCCESS(
                    f"Elasticsearch index {search_index.name} created or already exists"
                )
            )
