import json
from unittest.mock import MagicMock

import requests

LOW_RISK_PAYLOAD = {'risk': 'LOW', 'reasons': ['a', 'b', 'c'], 'confidenceScore': 0.8}


def gemini_body(text: str) -> dict:
    return {'candidates': [{'content': {'parts': [{'text': text}]}}]}


def deepseek_body(content: str) -> dict:
    return {'choices': [{'message': {'role': 'assistant', 'content': content}}]}


def low_risk_gemini_body() -> dict:
    return gemini_body(f'Here is my assessment:\n```json\n{json.dumps(LOW_RISK_PAYLOAD)}\n```\nStay safe.')


def mock_response(body=None, status_code=200, json_error=None):
    response = MagicMock()
    response.status_code = status_code
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = body
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f'{status_code} Server Error')
    else:
        response.raise_for_status.return_value = None
    return response
