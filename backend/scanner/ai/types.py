from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from django.db import models


class RiskLevel(models.TextChoices):
    SAFE = 'safe', 'Safe'
    LOW = 'low', 'Low'
    MEDIUM = 'medium', 'Medium'
    HIGH = 'high', 'High'
    CRITICAL = 'critical', 'Critical'

    @property
    def rank(self) -> int:
        return _SEVERITY_ORDER.index(self.value)

    def at_least(self, other: RiskLevel) -> bool:
        return self.rank >= RiskLevel(other).rank

    @property
    def badge(self) -> tuple[str, str]:
        return _BADGES[self.value]

    @classmethod
    def coerce(cls, value: Any) -> RiskLevel:
        if not isinstance(value, str):
            return cls.MEDIUM
        token = value.strip().lower()
        for level in cls:
            if level.value == token:
                return level
        return cls.MEDIUM


_SEVERITY_ORDER = ('safe', 'low', 'medium', 'high', 'critical')

_BADGES = {
    'safe': ('SAFE', '#33CC66'),
    'low': ('LOW', '#99CC33'),
    'medium': ('WARN', '#FFCC00'),
    'high': ('RISK', '#FF6633'),
    'critical': ('RISK', '#CC3333'),
}


class AIProvider(models.TextChoices):
    GEMINI = 'gemini', 'Google Gemini'
    DEEPSEEK = 'deepseek', 'Deepseek'


FALLBACK_CONFIDENCE = 0.5
CLIENT_FALLBACK_CONFIDENCE = 0.0

UNPARSEABLE_RESPONSE_REASON = 'Unable to parse AI response properly'
PARSE_ERROR_REASON = 'Error parsing AI analysis'
API_ERROR_REASON = 'Failed to analyze website due to API error'
NO_REASONS_REASON = 'No specific reasons provided'
CLIENT_FAILURE_REASON = 'Failed to analyze website content'


@dataclass(frozen=True)
class WebsiteContent:
    url: str
    text: str
    title: str = ''
    links: tuple[str, ...] = ()
    metadata: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WebsiteContent:
        return cls(
            url=str(data.get('url') or ''),
            text=str(data.get('text') or ''),
            title=str(data.get('title') or ''),
            links=tuple(str(item) for item in (data.get('links') or [])),
            metadata={str(key): str(value) for key, value in dict(data.get('metadata') or {}).items()},
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            'url': self.url,
            'title': self.title,
            'text': self.text,
            'links': list(self.links),
            'metadata': dict(self.metadata),
        }


@dataclass(frozen=True)
class AnalysisResult:
    risk: RiskLevel
    reasons: tuple[str, ...]
    confidence_score: float

    def to_dict(self) -> dict[str, Any]:
        return {
            'risk': str(self.risk.value),
            'reasons': list(self.reasons),
            'confidenceScore': self.confidence_score,
        }


def fallback_result(reason: str) -> AnalysisResult:
    return AnalysisResult(
        risk=RiskLevel.MEDIUM,
        reasons=(reason,),
        confidence_score=FALLBACK_CONFIDENCE,
    )
