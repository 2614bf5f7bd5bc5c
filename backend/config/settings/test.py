from .base import *  # noqa: F401,F403

DEBUG = False
APP_VERSION = '1.0.0'
API_AUTH_TOKEN = ''
SECURE_SSL_REDIRECT = False
SECURE_HSTS_SECONDS = 0
SECURE_HSTS_INCLUDE_SUBDOMAINS = False
SECURE_HSTS_PRELOAD = False

# Keep tests isolated from real AI providers and backends.
AI_DEFAULT_PROVIDER = 'gemini'
GEMINI_API_KEY = 'test-gemini-key'
GEMINI_ENDPOINT = 'https://gemini.test/v1/generate'
DEEPSEEK_API_KEY = 'test-deepseek-key'
DEEPSEEK_ENDPOINT = 'https://deepseek.test/v1/chat/completions'
DEEPSEEK_MODEL = 'deepseek-chat'
AI_PROVIDER_TIMEOUT_SECONDS = 20.0
UMBRELLA_BACKEND_URL = ''
SCAN_HISTORY_LIMIT = 100

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'scanner-tests',
    },
}
