from __future__ import annotations

import secrets

from django.conf import settings
from rest_framework.permissions import BasePermission

TOKEN_HEADER = 'X-API-Token'
BEARER_SCHEME = 'bearer'


def presented_api_token(request) -> str:
    """Token sent by the caller, from ``X-API-Token`` or an ``Authorization: Bearer`` header."""
    token = (request.headers.get(TOKEN_HEADER) or '').strip()
    if token:
        return token

    scheme, _, credentials = (request.headers.get('Authorization') or '').strip().partition(' ')
    if scheme.lower() != BEARER_SCHEME:
        return ''
    return credentials.strip()


def configured_api_token() -> str:
    return str(getattr(settings, 'API_AUTH_TOKEN', '') or '').strip()


class ApiTokenPermission(BasePermission):
    """Gate analysis requests behind ``API_AUTH_TOKEN`` when one is configured."""

    message = 'A valid API token is required to request an analysis.'

    def has_permission(self, request, view) -> bool:
        expected = configured_api_token()
        if not expected:
            return True
        presented = presented_api_token(request)
        return bool(presented) and secrets.compare_digest(presented.encode(), expected.encode())
