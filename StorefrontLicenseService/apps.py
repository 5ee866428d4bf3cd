"""
App configuration for Storefront License Service.
"""

import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class StorefrontLicenseServiceConfig(AppConfig):
    """App configuration for StorefrontLicenseService."""

    name = "StorefrontLicenseService"
    verbose_name = "Storefront License Service"

    def ready(self):
        """Register domain event handlers once the app registry is loaded."""
        from core.infrastructure.event_handlers import register_event_handlers

        register_event_handlers()
        logger.debug("Storefront License Service ready")
