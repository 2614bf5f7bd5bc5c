from __future__ import annotations

from dataclasses import dataclass, field

from django.conf import settings

from scanner.ai.types import AIProvider

DEFAULT_TIMEOUT_SECONDS = 20.0
DEFAULT_GEMINI_ENDPOINT = 'https://generativelanguage.googleapis.com/v1beta/models/gemini-2.0-flash:generateContent'
DEFAULT_DEEPSEEK_ENDPOINT = 'https://api.deepseek.com/v1/chat/completions'
DEFAULT_DEEPSEEK_MODEL = 'deepseek-chat'


@dataclass(frozen=True)
class ProviderCredentials:
    api_key: str = ''
    endpoint: str = ''
    model: str = ''


@dataclass(frozen=True)
class ProviderConfig:
    default_provider: str = AIProvider.GEMINI.value
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    credentials: dict[str, ProviderCredentials] = field(default_factory=dict)

    def for_provider(self, name: str) -> ProviderCredentials:
        return self.credentials.get(name) or ProviderCredentials()

    @classmethod
    def from_settings(cls) -> ProviderConfig:
        timeout = float(getattr(settings, 'AI_PROVIDER_TIMEOUT_SECONDS', DEFAULT_TIMEOUT_SECONDS) or DEFAULT_TIMEOUT_SECONDS)
        return cls(
            default_provider=str(getattr(settings, 'AI_DEFAULT_PROVIDER', '') or AIProvider.GEMINI.value).strip().lower(),
            timeout_seconds=max(timeout, 1.0),
            credentials={
                AIProvider.GEMINI.value: ProviderCredentials(
                    api_key=str(getattr(settings, 'GEMINI_API_KEY', '') or '').strip(),
                    endpoint=str(getattr(settings, 'GEMINI_ENDPOINT', '') or DEFAULT_GEMINI_ENDPOINT),
                ),
                AIProvider.DEEPSEEK.value: ProviderCredentials(
                    api_key=str(getattr(settings, 'DEEPSEEK_API_KEY', '') or '').strip(),
                    endpoint=str(getattr(settings, 'DEEPSEEK_ENDPOINT', '') or DEFAULT_DEEPSEEK_ENDPOINT),
                    model=str(getattr(settings, 'DEEPSEEK_MODEL', '') or DEFAULT_DEEPSEEK_MODEL),
                ),
            },
        )


def missing_credentials(config: ProviderConfig) -> list[str]:
    return [name for name in AIProvider.values if not config.for_provider(name).api_key]
