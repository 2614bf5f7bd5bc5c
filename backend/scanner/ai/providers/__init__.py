from __future__ import annotations

import logging
from typing import Any

from scanner.ai.config import ProviderConfig
from scanner.ai.providers.base import BaseAIProvider
from scanner.ai.providers.deepseek import DeepseekProvider
from scanner.ai.providers.gemini import GeminiProvider
from scanner.ai.types import AIProvider

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER = AIProvider.GEMINI.value

PROVIDERS: dict[str, type[BaseAIProvider]] = {
    AIProvider.GEMINI.value: GeminiProvider,
    AIProvider.DEEPSEEK.value: DeepseekProvider,
}


def resolve_provider_name(name: Any, config: ProviderConfig | None = None) -> str:
    default = config.default_provider if config else DEFAULT_PROVIDER
    if default not in PROVIDERS:
        default = DEFAULT_PROVIDER

    candidate = name.strip().lower() if isinstance(name, str) else ''
    if candidate in PROVIDERS:
        return candidate

    if candidate:
        logger.info('Unknown AI provider %r requested; using %s.', candidate, default)
    return default


def get_provider(name: Any, config: ProviderConfig) -> BaseAIProvider:
    return PROVIDERS[resolve_provider_name(name, config)](config)
