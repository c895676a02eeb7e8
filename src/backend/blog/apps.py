"""Blog application"""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class BlogConfig(AppConfig):
    """Configuration class for the blog app."""

    name = "blog"
    app_label = "blog"
    verbose_name = _("blog application")
