"""Client side of the analyze endpoint, as used by the browser extension."""
from __future__ import annotations

import logging
from typing import Any

import requests

from scanner.ai.normalizer import result_from_fields
from scanner.ai.types import (
    CLIENT_FAILURE_REASON,
    CLIENT_FALLBACK_CONFIDENCE,
    AnalysisResult,
    RiskLevel,
    WebsiteContent,
)
from scanner.history import ScanHistoryStore
from scanner.services import current_timestamp_ms

logger = logging.getLogger(__name__)

DEFAULT_RELAY_TIMEOUT_SECONDS = 30.0


def client_fallback_record(content: WebsiteContent) -> dict[str, Any]:
    # Zero confidence means "no data"; the backend's 0.5 means an ambiguous AI answer.
    result = AnalysisResult(
        risk=RiskLevel.MEDIUM,
        reasons=(CLIENT_FAILURE_REASON,),
        confidence_score=CLIENT_FALLBACK_CONFIDENCE,
    )
    payload = result.to_dict()
    payload['url'] = content.url
    payload['timestamp'] = current_timestamp_ms()
    return payload


class RelayClient:
    def __init__(
        self,
        backend_url: str,
        provider: str = '',
        api_token: str = '',
        timeout: float = DEFAULT_RELAY_TIMEOUT_SECONDS,
    ):
        self.backend_url = backend_url.rstrip('/')
        self.provider = provider
        self.api_token = api_token
        self.timeout = timeout

    @property
    def analyze_url(self) -> str:
        return f'{self.backend_url}/api/analyze'

    def _headers(self) -> dict[str, str]:
        headers = {'Accept': 'application/json'}
        if self.api_token:
            headers['X-API-Token'] = self.api_token
        return headers

    def analyze(self, content: WebsiteContent) -> dict[str, Any]:
        try:
            response = requests.post(
                self.analyze_url,
                json={'content': content.to_dict(), 'config': {'provider': self.provider}},
                headers=self._headers(),
                timeout=self.timeout,
            )
            response.raise_for_status()
            body = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.warning('Error analyzing website via backend (url=%s): %s', content.url, exc)
            return client_fallback_record(content)

        if not isinstance(body, dict):
            logger.warning('Backend returned a non-object analysis for %s.', content.url)
            return client_fallback_record(content)

        payload = result_from_fields(body).to_dict()
        payload['url'] = str(body.get('url') or content.url)
        timestamp = body.get('timestamp')
        payload['timestamp'] = timestamp if isinstance(timestamp, int) and not isinstance(timestamp, bool) else current_timestamp_ms()
        return payload

    def scan(self, content: WebsiteContent, store: ScanHistoryStore | None = None) -> dict[str, Any]:
        record = self.analyze(content)
        if store is not None:
            store.save_result(record)
        return record
