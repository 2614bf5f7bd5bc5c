from __future__ import annotations

import logging
from typing import Any

import requests

from scanner.ai.config import ProviderConfig, ProviderCredentials
from scanner.ai.prompts import truncate_content
from scanner.ai.types import API_ERROR_REASON, PARSE_ERROR_REASON, AnalysisResult, WebsiteContent, fallback_result

logger = logging.getLogger(__name__)


class BaseAIProvider:
    """One outbound call per analysis, normalized into an ``AnalysisResult``.

    Transport and HTTP failures are never retried; they end in the API-error
    fallback record so callers can treat ``analyze`` as infallible.
    """

    name = ''

    def __init__(self, config: ProviderConfig):
        self.config = config
        self.credentials: ProviderCredentials = config.for_provider(self.name)

    def build_request(self, content: WebsiteContent) -> tuple[dict[str, str], dict[str, Any]]:
        raise NotImplementedError

    def parse_response(self, body: Any) -> AnalysisResult:
        raise NotImplementedError

    def analyze(self, content: WebsiteContent) -> AnalysisResult:
        headers, payload = self.build_request(truncate_content(content))
        if not self.credentials.api_key:
            logger.debug('%s API key is not configured; the call will likely be rejected.', self.name)

        try:
            response = requests.post(
                self.credentials.endpoint,
                json=payload,
                headers={'Content-Type': 'application/json', **headers},
                timeout=self.config.timeout_seconds,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.warning('Error calling %s API (url=%s): %s', self.name, content.url, exc)
            return fallback_result(API_ERROR_REASON)

        try:
            body = response.json()
        except ValueError:
            logger.warning('%s API returned a non-JSON body (status=%s).', self.name, response.status_code)
            return fallback_result(PARSE_ERROR_REASON)

        return self.parse_response(body)
