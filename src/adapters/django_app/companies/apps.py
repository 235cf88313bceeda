"""
Django App configuration for Companies.

On startup the property mapping registry is checked: every listing that
sorts by default must resolve to exactly one mapping, otherwise the
process refuses to serve requests.
"""

import logging

from django.apps import AppConfig
from django.core.exceptions import ImproperlyConfigured

from src.core.companies.property_mappings import REQUIRED_MAPPINGS
from src.core.shared.exceptions import AmbiguousOrMissingMappingError

logger = logging.getLogger(__name__)


class CompaniesConfig(AppConfig):
    """Companies app configuration."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'src.adapters.django_app.companies'
    label = 'companies'
    verbose_name = 'Companies and Employees'

    def ready(self):
        """
        Verify the property mapping registry held by the container.

        Raises:
            ImproperlyConfigured: If a (source, destination) pair is missing,
                registered twice, or cannot order by its default field
        """
        from src.config.container import get_container

        mapping_service = get_container().property_mapping_service()

        for source, destination, default_order_by in REQUIRED_MAPPINGS:
            try:
                valid = mapping_service.valid_mapping_exists_for(source, destination, default_order_by)
            except AmbiguousOrMissingMappingError as e:
                logger.critical(f"Property mapping misconfigured: {e}")
                raise ImproperlyConfigured(str(e)) from e

            if not valid:
                raise ImproperlyConfigured(
                    f"Default ordering '{default_order_by}' is not mapped for <{source},{destination}>"
                )

        logger.debug(f"Property mappings verified: {len(REQUIRED_MAPPINGS)}")
