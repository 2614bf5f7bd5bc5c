"""Coerce raw provider output into an ``AnalysisResult``.

Every function here is total: malformed input of any shape ends in a
well-formed fallback record instead of an exception.
"""
from __future__ import annotations

import json
import logging
import math
from typing import Any

from scanner.ai.types import (
    FALLBACK_CONFIDENCE,
    NO_REASONS_REASON,
    PARSE_ERROR_REASON,
    UNPARSEABLE_RESPONSE_REASON,
    AnalysisResult,
    RiskLevel,
    fallback_result,
)

logger = logging.getLogger(__name__)


def coerce_risk(value: Any) -> RiskLevel:
    return RiskLevel.coerce(value)


def coerce_reasons(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list) or not value:
        return (NO_REASONS_REASON,)
    if not all(isinstance(item, str) for item in value):
        return (NO_REASONS_REASON,)
    return tuple(value)


def coerce_confidence(value: Any) -> float:
    # No range clamp: out-of-range numbers pass through unchanged.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return FALLBACK_CONFIDENCE
    try:
        score = float(value)
    except OverflowError:
        return FALLBACK_CONFIDENCE
    if not math.isfinite(score):
        return FALLBACK_CONFIDENCE
    return score


def result_from_fields(payload: dict[str, Any]) -> AnalysisResult:
    return AnalysisResult(
        risk=coerce_risk(payload.get('risk')),
        reasons=coerce_reasons(payload.get('reasons')),
        confidence_score=coerce_confidence(payload.get('confidenceScore')),
    )


def _dig(data: Any, *path: str | int) -> Any:
    current = data
    for key in path:
        if isinstance(key, int):
            if not isinstance(current, list) or len(current) <= key:
                return None
            current = current[key]
        else:
            if not isinstance(current, dict):
                return None
            current = current.get(key)
    return current


def extract_json_object(text: str) -> str | None:
    # First "{" through last "}", newlines included.
    text = text or ''
    start = text.find('{')
    end = text.rfind('}')
    if start == -1 or end < start:
        return None
    return text[start:end + 1]


def decode_payload(payload: str, provider: str = '') -> AnalysisResult:
    try:
        decoded = json.loads(payload)
    except (ValueError, RecursionError):
        logger.warning('Could not decode %s analysis payload as JSON.', provider or 'provider')
        return fallback_result(PARSE_ERROR_REASON)

    if not isinstance(decoded, dict):
        logger.warning('%s analysis payload is not a JSON object (%s).', provider or 'Provider', type(decoded).__name__)
        return fallback_result(PARSE_ERROR_REASON)

    return result_from_fields(decoded)


def normalize_chat_completion(body: Any) -> AnalysisResult:
    """Normalize a chat-completion envelope.

    The JSON payload is expected as a string in ``choices[0].message.content``.
    """
    content = _dig(body, 'choices', 0, 'message', 'content')
    if not isinstance(content, str) or not content.strip():
        logger.warning('Chat completion response carried no message content.')
        return fallback_result(UNPARSEABLE_RESPONSE_REASON)
    return decode_payload(content, provider='deepseek')


def normalize_generate_content(body: Any) -> AnalysisResult:
    """Normalize a generate-content envelope.

    The reply is free text in ``candidates[0].content.parts[0].text``; the JSON
    object is located inside it before decoding.
    """
    text = _dig(body, 'candidates', 0, 'content', 'parts', 0, 'text')
    if not isinstance(text, str) or not text.strip():
        logger.warning('Generate-content response carried no text part.')
        return fallback_result(UNPARSEABLE_RESPONSE_REASON)

    located = extract_json_object(text)
    if located is None:
        logger.warning('No JSON object found in generate-content response text.')
        return fallback_result(UNPARSEABLE_RESPONSE_REASON)
    return decode_payload(located, provider='gemini')
