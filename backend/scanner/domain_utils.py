from __future__ import annotations

from urllib.parse import urlparse

import tldextract

# Bundled public suffix snapshot only; no network fetch at runtime.
_extract = tldextract.TLDExtract(suffix_list_urls=())


def hostname_from_url(raw_url: str) -> str:
    value = (raw_url or '').strip().lower()
    if '://' not in value:
        value = f'http://{value}'
    try:
        hostname = urlparse(value).hostname or ''
    except ValueError:
        return ''
    return hostname.strip('.')


def registered_domain(raw_url: str) -> str:
    hostname = hostname_from_url(raw_url)
    if not hostname:
        return ''

    parsed = _extract(hostname)
    if parsed.top_domain_under_public_suffix:
        return parsed.top_domain_under_public_suffix

    return hostname
