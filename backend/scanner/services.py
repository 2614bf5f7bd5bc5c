from __future__ import annotations

from typing import Any

from django.utils import timezone

from scanner.ai.config import ProviderConfig
from scanner.ai.providers import get_provider
from scanner.ai.types import AnalysisResult, WebsiteContent


def current_timestamp_ms() -> int:
    return int(timezone.now().timestamp() * 1000)


def build_analysis_response(content: WebsiteContent, result: AnalysisResult) -> dict[str, Any]:
    payload = result.to_dict()
    payload['url'] = content.url
    payload['timestamp'] = current_timestamp_ms()
    return payload


def analyze_website(
    content: WebsiteContent,
    provider_name: str | None = None,
    config: ProviderConfig | None = None,
) -> dict[str, Any]:
    provider_config = config or ProviderConfig.from_settings()
    provider = get_provider(provider_name, provider_config)
    result = provider.analyze(content)
    return build_analysis_response(content, result)
