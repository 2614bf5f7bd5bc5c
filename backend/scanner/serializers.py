from typing import Any

from rest_framework import serializers

from scanner.ai.types import WebsiteContent

REQUIRED_CONTENT_FIELDS = ('url', 'text')


class WebsiteContentSerializer(serializers.Serializer):
    # No length caps: oversized text and link lists are truncated before the provider call.
    url = serializers.CharField(trim_whitespace=True)
    title = serializers.CharField(required=False, allow_blank=True, default='')
    text = serializers.CharField(trim_whitespace=False)
    links = serializers.ListField(
        child=serializers.CharField(allow_blank=True, trim_whitespace=False),
        required=False,
        default=list,
    )
    metadata = serializers.DictField(
        child=serializers.CharField(allow_blank=True, trim_whitespace=False),
        required=False,
        default=dict,
    )

    def validate_text(self, value: str) -> str:
        if not value.strip():
            raise serializers.ValidationError('This field may not be blank.')
        return value


class AnalyzeRequestSerializer(serializers.Serializer):
    content = WebsiteContentSerializer()
    # Taken raw; the provider dispatcher degrades anything it does not recognise.
    config = serializers.JSONField(required=False, allow_null=True, default=dict)

    def to_website_content(self) -> WebsiteContent:
        return WebsiteContent.from_dict(self.validated_data['content'])

    def provider_name(self) -> Any:
        config = self.validated_data.get('config')
        if not isinstance(config, dict):
            return None
        return config.get('provider')

    def missing_required_content(self) -> bool:
        errors = self.errors
        if 'content' not in errors:
            return False
        content_errors = errors['content']
        if not isinstance(content_errors, dict):
            return True
        return any(name in content_errors for name in REQUIRED_CONTENT_FIELDS)
