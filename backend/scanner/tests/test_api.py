import secrets
from unittest.mock import patch

import requests
from django.core.cache import cache
from django.test import SimpleTestCase, override_settings
from rest_framework.test import APIClient

from scanner.ai.types import API_ERROR_REASON
from scanner.tests.helpers import low_risk_gemini_body, mock_response
from scanner.throttles import ScannerScopedRateThrottle


class AnalyzeApiTests(SimpleTestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()

    def analyze_payload(self, provider='gemini'):
        return {
            'content': {
                'url': 'https://secure-bank-login.example/verify',
                'title': 'Verify your account',
                'text': 'Your account has been suspended. Enter your card details to restore access.',
                'links': ['https://secure-bank-login.example/help'],
                'metadata': {'description': 'Account verification'},
            },
            'config': {'provider': provider},
        }

    def test_health(self):
        response = self.client.get('/health')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, {'status': 'ok', 'version': '1.0.0'})

    @patch('scanner.ai.providers.base.requests.post')
    def test_analyze_returns_normalized_result(self, mock_post):
        mock_post.return_value = mock_response(low_risk_gemini_body())

        response = self.client.post('/api/analyze', self.analyze_payload(), format='json')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['risk'], 'low')
        self.assertEqual(response.data['reasons'], ['a', 'b', 'c'])
        self.assertEqual(response.data['confidenceScore'], 0.8)
        self.assertEqual(response.data['url'], 'https://secure-bank-login.example/verify')
        self.assertIsInstance(response.data['timestamp'], int)
        self.assertGreater(response.data['timestamp'], 1_600_000_000_000)

    @patch('scanner.views.analyze_website')
    def test_missing_text_is_rejected_before_analysis(self, mock_analyze):
        payload = self.analyze_payload()
        del payload['content']['text']

        response = self.client.post('/api/analyze', payload, format='json')

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['error'], 'Invalid request data')
        self.assertEqual(response.data['details'], 'Missing required website content data')
        mock_analyze.assert_not_called()

    @patch('scanner.views.analyze_website')
    def test_missing_or_blank_required_fields(self, mock_analyze):
        variants = []
        missing_url = self.analyze_payload()
        del missing_url['content']['url']
        variants.append(missing_url)
        blank_text = self.analyze_payload()
        blank_text['content']['text'] = '   '
        variants.append(blank_text)
        variants.append({'config': {'provider': 'gemini'}})

        for payload in variants:
            with self.subTest(payload=payload):
                response = self.client.post('/api/analyze', payload, format='json')
                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.data['details'], 'Missing required website content data')

        mock_analyze.assert_not_called()

    @patch('scanner.views.analyze_website')
    def test_malformed_links_are_rejected(self, mock_analyze):
        payload = self.analyze_payload()
        payload['content']['links'] = 'https://example.com'

        response = self.client.post('/api/analyze', payload, format='json')

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['details'], 'Malformed website content data')
        self.assertIn('content', response.data['fields'])
        mock_analyze.assert_not_called()

    @patch('scanner.ai.providers.base.requests.post', side_effect=requests.ConnectionError('connection refused'))
    def test_provider_transport_failure_still_returns_200(self, _mock_post):
        response = self.client.post('/api/analyze', self.analyze_payload(), format='json')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['risk'], 'medium')
        self.assertEqual(response.data['reasons'], [API_ERROR_REASON])
        self.assertEqual(response.data['confidenceScore'], 0.5)

    @patch('scanner.ai.providers.base.requests.post')
    def test_unknown_provider_uses_default(self, mock_post):
        mock_post.return_value = mock_response(low_risk_gemini_body())

        response = self.client.post('/api/analyze', self.analyze_payload(provider='mystery-ai'), format='json')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(mock_post.call_args.args[0], 'https://gemini.test/v1/generate')

    @patch('scanner.ai.providers.base.requests.post')
    def test_missing_config_uses_default(self, mock_post):
        mock_post.return_value = mock_response(low_risk_gemini_body())
        payload = self.analyze_payload()
        del payload['config']

        response = self.client.post('/api/analyze', payload, format='json')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(mock_post.call_args.args[0], 'https://gemini.test/v1/generate')

    @patch('scanner.ai.providers.base.requests.post')
    def test_deepseek_provider_is_selected(self, mock_post):
        mock_post.return_value = mock_response({'choices': []})

        response = self.client.post('/api/analyze', self.analyze_payload(provider='deepseek'), format='json')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(mock_post.call_args.args[0], 'https://deepseek.test/v1/chat/completions')
        self.assertEqual(response.data['reasons'], ['Unable to parse AI response properly'])

    @patch('scanner.views.analyze_website', side_effect=RuntimeError('database password is hunter2'))
    def test_unexpected_failure_returns_opaque_500(self, _mock_analyze):
        with self.assertLogs('scanner.views', level='ERROR'):
            response = self.client.post('/api/analyze', self.analyze_payload(), format='json')

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.data['error'], 'Server error')
        self.assertNotIn('hunter2', response.data['details'])

    @patch('scanner.ai.providers.base.requests.post')
    def test_api_token_required_when_configured(self, mock_post):
        mock_post.return_value = mock_response(low_risk_gemini_body())
        api_token = secrets.token_urlsafe(24)

        with override_settings(API_AUTH_TOKEN=api_token):
            unauthorized = self.client.post('/api/analyze', self.analyze_payload(), format='json')
            self.assertEqual(unauthorized.status_code, 403)

            authorized = self.client.post(
                '/api/analyze',
                self.analyze_payload(),
                format='json',
                HTTP_AUTHORIZATION=f'Bearer {api_token}',
            )
            self.assertEqual(authorized.status_code, 200)

            self.assertEqual(self.client.get('/health').status_code, 200)

    def test_malformed_json_body_uses_error_envelope(self):
        response = self.client.post('/api/analyze', data='{"content": ', content_type='application/json')

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['error'], 'Invalid request data')
        self.assertIn('details', response.data)

    @patch('scanner.ai.providers.base.requests.post')
    def test_unrecognised_provider_values_use_default(self, mock_post):
        mock_post.return_value = mock_response(low_risk_gemini_body())

        for provider in ('x' * 65, None, 42, ['deepseek']):
            with self.subTest(provider=provider):
                response = self.client.post('/api/analyze', self.analyze_payload(provider=provider), format='json')

                self.assertEqual(response.status_code, 200)
                self.assertEqual(mock_post.call_args.args[0], 'https://gemini.test/v1/generate')

    @patch('scanner.ai.providers.base.requests.post')
    def test_non_object_config_uses_default(self, mock_post):
        mock_post.return_value = mock_response(low_risk_gemini_body())
        payload = self.analyze_payload()
        payload['config'] = 'deepseek'

        response = self.client.post('/api/analyze', payload, format='json')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(mock_post.call_args.args[0], 'https://gemini.test/v1/generate')

    @patch('scanner.ai.providers.base.requests.post')
    def test_long_title_is_accepted(self, mock_post):
        mock_post.return_value = mock_response(low_risk_gemini_body())
        payload = self.analyze_payload()
        payload['content']['title'] = 'T' * 1500

        response = self.client.post('/api/analyze', payload, format='json')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['risk'], 'low')

    @patch('scanner.ai.providers.base.requests.post')
    def test_long_links_beyond_the_prompt_limit_are_accepted(self, mock_post):
        mock_post.return_value = mock_response(low_risk_gemini_body())
        data_link = 'data:text/plain,' + 'a' * 5000
        payload = self.analyze_payload()
        payload['content']['links'] = [f'https://example.com/page/{index}' for index in range(25)] + [data_link]

        response = self.client.post('/api/analyze', payload, format='json')

        self.assertEqual(response.status_code, 200)
        prompt = mock_post.call_args.kwargs['json']['contents'][0]['parts'][0]['text']
        self.assertIn('https://example.com/page/19', prompt)
        self.assertNotIn('https://example.com/page/20', prompt)
        self.assertNotIn(data_link, prompt)

    @patch('scanner.ai.providers.base.requests.post')
    def test_oversized_body_uses_error_envelope(self, mock_post):
        payload = self.analyze_payload()
        payload['content']['text'] = 'a' * 2_000_000

        response = self.client.post('/api/analyze', payload, format='json')

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['error'], 'Invalid request data')
        self.assertEqual(response.data['details'], 'Request body is too large.')
        mock_post.assert_not_called()

    @patch('scanner.views.analyze_website')
    def test_rejected_token_uses_error_envelope(self, mock_analyze):
        with override_settings(API_AUTH_TOKEN=secrets.token_urlsafe(24)):
            response = self.client.post(
                '/api/analyze',
                self.analyze_payload(),
                format='json',
                HTTP_X_API_TOKEN='wrong-token',
            )

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.data['error'], 'Forbidden')
        self.assertEqual(response.data['details'], 'A valid API token is required to request an analysis.')
        self.assertNotIn('detail', response.data)
        mock_analyze.assert_not_called()

    @patch('scanner.views.analyze_website', return_value={'risk': 'low'})
    @patch.object(ScannerScopedRateThrottle, 'THROTTLE_RATES', {'analyze': '1/minute', 'default': '180/minute'})
    def test_throttled_request_uses_error_envelope(self, _mock_analyze):
        first = self.client.post('/api/analyze', self.analyze_payload(), format='json')
        second = self.client.post('/api/analyze', self.analyze_payload(), format='json')

        self.assertEqual(first.status_code, 200)
        self.assertEqual(second.status_code, 429)
        self.assertEqual(second.data['error'], 'Too many requests')
        self.assertIn('throttled', second.data['details'].lower())
        self.assertIn('Retry-After', second)

    def test_unsupported_method_uses_error_envelope(self):
        response = self.client.get('/api/analyze')

        self.assertEqual(response.status_code, 405)
        self.assertEqual(response.data['error'], 'Method not allowed')
        self.assertIn('GET', response.data['details'])
