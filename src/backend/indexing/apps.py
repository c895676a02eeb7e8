"""Search indexing application"""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class IndexingConfig(AppConfig):
    """Configuration class for the search indexing app."""

    name = "indexing"
    app_label = "indexing"
    verbose_name = _("search indexing application")

    def ready(self):
        """Connect the signal handlers."""
        # pylint: disable=import-outside-toplevel, unused-import
        from indexing import signals  # noqa: F401
