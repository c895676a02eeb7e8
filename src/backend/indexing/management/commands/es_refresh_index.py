"""Management command to refresh Elasticsearch indices."""

from indexing.management.commands._base import SearchIndexCommand


class Command(SearchIndexCommand):
    """Refresh Elasticsearch indices."""

    help = "Refresh Elasticsearch indices so recent changes are searchable"

    def handle(self, *args, **options):
        """Execute the command."""
        for model in self.get_models(options):
            search_index = model.search_index
            if search_index.refresh_index(force=True) is None:
                self.stdout.write(
                    self.style.WARNING(
                        f"Elasticsearch index {search_index.name} does not exist"
                    )
                )
            else:
                self.stdout.write(
                    self.style.SUCCESS(
                        f"Elasticsearch index {search_index.name} refreshed"
                    )
                )
