from __future__ import annotations

import logging
from typing import Any

from django.conf import settings
from django.core.cache import caches

from scanner.ai.providers import DEFAULT_PROVIDER

logger = logging.getLogger(__name__)

CONFIG_KEY = 'umbrella_ai_config'
SCAN_HISTORY_KEY = 'umbrella_scan_history'
DEFAULT_HISTORY_LIMIT = 100


def default_config() -> dict[str, Any]:
    return {'provider': getattr(settings, 'AI_DEFAULT_PROVIDER', '') or DEFAULT_PROVIDER}


class ScanHistoryStore:
    """Provider preference and recent scan results kept in a Django cache.

    Results are kept most recent first and capped; the same URL may appear
    several times. Storage errors are logged and never raised.
    """

    def __init__(self, cache_alias: str = 'default', limit: int | None = None):
        self.cache = caches[cache_alias]
        configured_limit = limit if limit is not None else getattr(settings, 'SCAN_HISTORY_LIMIT', DEFAULT_HISTORY_LIMIT)
        self.limit = max(int(configured_limit), 1)

    def get_config(self) -> dict[str, Any]:
        try:
            stored = self.cache.get(CONFIG_KEY)
        except Exception:
            logger.exception('Error reading scanner config.')
            return default_config()
        return dict(stored) if isinstance(stored, dict) else default_config()

    def save_config(self, config: dict[str, Any]) -> None:
        try:
            self.cache.set(CONFIG_KEY, dict(config), timeout=None)
        except Exception:
            logger.exception('Error saving scanner config.')

    def get_history(self) -> list[dict[str, Any]]:
        try:
            stored = self.cache.get(SCAN_HISTORY_KEY)
        except Exception:
            logger.exception('Error reading scan history.')
            return []
        return list(stored) if isinstance(stored, list) else []

    def save_result(self, record: dict[str, Any]) -> None:
        history = self.get_history()
        updated = [dict(record), *history][: self.limit]
        try:
            self.cache.set(SCAN_HISTORY_KEY, updated, timeout=None)
        except Exception:
            logger.exception('Error saving scan result.')

    def clear_history(self) -> None:
        try:
            self.cache.delete(SCAN_HISTORY_KEY)
        except Exception:
            logger.exception('Error clearing scan history.')
