import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class ScannerConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'scanner'

    def ready(self):
        from scanner.ai.config import ProviderConfig, missing_credentials

        for provider in missing_credentials(ProviderConfig.from_settings()):
            logger.warning('%s API key not found. API calls will fail.', provider.capitalize())
