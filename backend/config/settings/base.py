import os
from pathlib import Path

import environ

BASE_DIR = Path(__file__).resolve().parents[2]

env = environ.Env(
    DEBUG=(bool, False),
    ALLOWED_HOSTS=(list, ['localhost', '127.0.0.1']),
    CORS_ALLOW_ALL_ORIGINS=(bool, False),
    API_THROTTLE_ANALYZE=(str, '60/minute'),
    API_THROTTLE_DEFAULT=(str, '180/minute'),
    AI_PROVIDER_TIMEOUT_SECONDS=(float, 20.0),
    UMBRELLA_RELAY_TIMEOUT_SECONDS=(float, 30.0),
    SCAN_HISTORY_LIMIT=(int, 100),
)

environ.Env.read_env(os.path.join(BASE_DIR, '.env'))

SECRET_KEY = env('DJANGO_SECRET_KEY', default='django-insecure-change-me')
DEBUG = env('DEBUG')
ALLOWED_HOSTS = env.list('ALLOWED_HOSTS')
APP_VERSION = env('APP_VERSION', default='1.0.0')
API_AUTH_TOKEN = env('API_AUTH_TOKEN', default='')

# AI providers. Missing keys are logged at startup; calls then fail soft.
AI_DEFAULT_PROVIDER = env('AI_DEFAULT_PROVIDER', default='gemini')
AI_PROVIDER_TIMEOUT_SECONDS = env('AI_PROVIDER_TIMEOUT_SECONDS')
GEMINI_API_KEY = env('GEMINI_API_KEY', default='')
GEMINI_ENDPOINT = env(
    'GEMINI_ENDPOINT',
    default='https://generativelanguage.googleapis.com/v1beta/models/gemini-2.0-flash:generateContent',
)
DEEPSEEK_API_KEY = env('DEEPSEEK_API_KEY', default='')
DEEPSEEK_ENDPOINT = env('DEEPSEEK_ENDPOINT', default='https://api.deepseek.com/v1/chat/completions')
DEEPSEEK_MODEL = env('DEEPSEEK_MODEL', default='deepseek-chat')

# Client relay (management commands acting as the extension).
UMBRELLA_BACKEND_URL = env('UMBRELLA_BACKEND_URL', default='')
UMBRELLA_RELAY_TIMEOUT_SECONDS = env('UMBRELLA_RELAY_TIMEOUT_SECONDS')
SCAN_HISTORY_LIMIT = env('SCAN_HISTORY_LIMIT')

INSTALLED_APPS = [
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'corsheaders',
    'rest_framework',
    'scanner',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'config.urls'

WSGI_APPLICATION = 'config.wsgi.application'
ASGI_APPLICATION = 'config.asgi.application'

DATABASES = {
    'default': env.db_url(
        'DATABASE_URL',
        default='sqlite:///db.sqlite3',
    ),
}

CACHES = {
    'default': env.cache_url('CACHE_URL', default='locmemcache://'),
}

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

REST_FRAMEWORK = {
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
    ],
    'DEFAULT_PARSER_CLASSES': [
        'rest_framework.parsers.JSONParser',
    ],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.AllowAny',
    ],
    'DEFAULT_THROTTLE_CLASSES': [
        'scanner.throttles.ScannerScopedRateThrottle',
    ],
    'DEFAULT_THROTTLE_RATES': {
        'analyze': env('API_THROTTLE_ANALYZE'),
        'default': env('API_THROTTLE_DEFAULT'),
    },
    'UNAUTHENTICATED_USER': None,
    'EXCEPTION_HANDLER': 'scanner.exceptions.scanner_exception_handler',
}

CORS_ALLOW_ALL_ORIGINS = env('CORS_ALLOW_ALL_ORIGINS')
CORS_ALLOWED_ORIGINS = env.list('CORS_ALLOWED_ORIGINS', default=[])
CORS_ALLOWED_ORIGIN_REGEXES = env.list('CORS_ALLOWED_ORIGIN_REGEXES', default=[r'^chrome-extension://[a-p]{32}$'])

DATA_UPLOAD_MAX_MEMORY_SIZE = env.int('DATA_UPLOAD_MAX_MEMORY_SIZE', default=1048576)

SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
USE_X_FORWARDED_HOST = True
SECURE_CONTENT_TYPE_NOSNIFF = True
SECURE_REFERRER_POLICY = 'strict-origin-when-cross-origin'
X_FRAME_OPTIONS = 'DENY'

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': env('LOG_LEVEL', default='INFO'),
    },
}
