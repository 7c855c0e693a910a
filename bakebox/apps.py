"""
Django Bakebox app configuration.
"""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class BakeboxConfig(AppConfig):
    """Bakebox application configuration."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "bakebox"
    verbose_name = _("Baking inspiration box")

    def ready(self):
        """Import signal handlers when app is ready."""
        # Import handlers to register them
        from bakebox.signals import handlers  # noqa: F401
