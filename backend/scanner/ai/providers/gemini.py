from scanner.ai.normalizer import normalize_generate_content
from scanner.ai.prompts import build_generate_content_prompt
from scanner.ai.providers.base import BaseAIProvider
from scanner.ai.types import AIProvider


class GeminiProvider(BaseAIProvider):
    name = AIProvider.GEMINI.value

    def build_request(self, content):
        headers = {'X-Goog-Api-Key': self.credentials.api_key}
        payload = {
            'contents': [
                {
                    'parts': [
                        {'text': build_generate_content_prompt(content)},
                    ],
                },
            ],
        }
        return headers, payload

    def parse_response(self, body):
        return normalize_generate_content(body)
