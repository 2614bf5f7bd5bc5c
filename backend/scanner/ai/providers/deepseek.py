from scanner.ai.normalizer import normalize_chat_completion
from scanner.ai.prompts import build_chat_messages
from scanner.ai.providers.base import BaseAIProvider
from scanner.ai.types import AIProvider


class DeepseekProvider(BaseAIProvider):
    name = AIProvider.DEEPSEEK.value
    temperature = 0.2

    def build_request(self, content):
        headers = {'Authorization': f'Bearer {self.credentials.api_key}'}
        payload = {
            'model': self.credentials.model,
            'messages': build_chat_messages(content),
            'temperature': self.temperature,
            'response_format': {'type': 'json_object'},
        }
        return headers, payload

    def parse_response(self, body):
        return normalize_chat_completion(body)
