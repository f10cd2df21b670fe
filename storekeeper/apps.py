"""Django app configuration for Storekeeper."""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class StorekeeperConfig(AppConfig):
    """Configuration for Storekeeper app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "storekeeper"
    verbose_name = _("Storefront Inventory")

    def ready(self):
        # Connect order lifecycle receivers
        from storekeeper import signals  # noqa: F401
