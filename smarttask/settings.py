# smarttask/settings.py
"""
Django settings for the smart task manager API.

Everything is read from environment variables; a local .env file is loaded
first when present. Nothing secret is required to import this module.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / '.env', override=False)


def _env(name, default=''):
    value = os.getenv(name)
    return default if value is None else value


def _env_bool(name, default):
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {'1', 'true', 'yes', 'y', 'on'}


def _env_int(name, default):
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_list(name, default):
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return list(default)
    return [p.strip() for p in raw.replace(',', ' ').split() if p.strip()]


SECRET_KEY = _env('DJANGO_SECRET_KEY', 'dev-insecure-secret-key-change-me-in-production')
DEBUG = _env_bool('DJANGO_DEBUG', True)
ALLOWED_HOSTS = _env_list('DJANGO_ALLOWED_HOSTS', ['localhost', '127.0.0.1', 'testserver'])

INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.auth',
    'corsheaders',
    'rest_framework',
    'smarttask_user',
    'smarttask_app',
]

MIDDLEWARE = [
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
]

ROOT_URLCONF = 'smarttask.urls'
WSGI_APPLICATION = 'smarttask.wsgi.application'

# Database
if _env('DB_ENGINE', 'sqlite').lower() in {'postgres', 'postgresql'}:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.postgresql',
            'HOST': _env('DB_HOST', 'localhost'),
            'PORT': _env_int('DB_PORT', 5432),
            'NAME': _env('DB_NAME', 'smart_task_manager'),
            'USER': _env('DB_USER', 'postgres'),
            'PASSWORD': _env('DB_PASSWORD', 'postgres'),
            'CONN_MAX_AGE': _env_int('DB_CONN_MAX_AGE', 60),
            'OPTIONS': {'connect_timeout': _env_int('DB_CONNECT_TIMEOUT', 2)},
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': _env('DB_NAME', str(BASE_DIR / 'db.sqlite3')),
        }
    }

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'
AUTH_USER_MODEL = 'smarttask_user.User'

LANGUAGE_CODE = 'en-us'
TIME_ZONE = _env('TIME_ZONE', 'UTC')
USE_TZ = True

# CORS: the single-page client is served from its own origin and sends the
# refresh cookie along with requests.
CORS_ALLOWED_ORIGINS = _env_list('ALLOWED_ORIGINS', ['http://localhost:5173', 'http://localhost:5174'])
CORS_ALLOW_CREDENTIALS = True

REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': ['smarttask.authentication.BearerTokenAuthentication'],
    'DEFAULT_PERMISSION_CLASSES': ['rest_framework.permissions.IsAuthenticated'],
    'DEFAULT_RENDERER_CLASSES': ['rest_framework.renderers.JSONRenderer'],
    'DEFAULT_PARSER_CLASSES': ['rest_framework.parsers.JSONParser'],
    'EXCEPTION_HANDLER': 'smarttask.exceptions.api_exception_handler',
    'TEST_REQUEST_DEFAULT_FORMAT': 'json',
}

# Tokens
JWT_SECRET = _env('JWT_SECRET', 'dev-access-secret-change-me-0123456789abcdef')
JWT_REFRESH_SECRET = _env('JWT_REFRESH_SECRET', 'dev-refresh-secret-change-me-0123456789abcdef')
JWT_ACCESS_TTL_MINUTES = _env_int('JWT_ACCESS_TTL_MINUTES', 15)
JWT_REFRESH_TTL_DAYS = _env_int('JWT_REFRESH_TTL_DAYS', 7)
REFRESH_COOKIE_NAME = 'refresh_token'

# Recurring tasks are projected this many days ahead of today.
RECURRENCE_HORIZON_DAYS = _env_int('RECURRENCE_HORIZON_DAYS', 30)

LOG_LEVEL = _env('LOG_LEVEL', 'INFO').upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'default': {
            'format': '%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S',
        },
    },
    'filters': {
        'console_noise': {
            '()': 'smarttask.logging_filters.ConsoleNoiseFilter',
            'level': LOG_LEVEL,
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'default',
            'filters': ['console_noise'],
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'DEBUG',
    },
}
