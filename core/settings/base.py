"""
Base Django settings shared by every environment.

Values come from the validated pydantic settings in ``core.config``; the
environment modules only override what differs between them.
"""

from core.config import BASE_DIR, get_settings
from core.logging import configure_logging

app_settings = get_settings()

SECRET_KEY = app_settings.secret_key.get_secret_value()

DEBUG = app_settings.debug

ALLOWED_HOSTS = app_settings.allowed_hosts

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "django.contrib.staticfiles",
    # Third party
    "rest_framework",
    "drf_spectacular",
    "corsheaders",
    # Local
    "apps.listings",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "core.middleware.RequestContextMiddleware",
]

ROOT_URLCONF = "core.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
            ],
        },
    },
]

WSGI_APPLICATION = "core.wsgi.application"

# No database: shop sessions live in cookies, images on disk
DATABASES: dict[str, dict[str, str]] = {}

LANGUAGE_CODE = "zh-hant"
TIME_ZONE = "Asia/Taipei"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

# Merchant uploads, served under UPLOAD_URL_PREFIX
MEDIA_URL = app_settings.uploads.url_prefix
MEDIA_ROOT = app_settings.uploads.directory

# Multi-photo uploads from phones easily exceed Django's 2.5 MB default
DATA_UPLOAD_MAX_MEMORY_SIZE = 20 * 1024 * 1024
FILE_UPLOAD_MAX_MEMORY_SIZE = 10 * 1024 * 1024

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
    "UNAUTHENTICATED_USER": None,
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
        "rest_framework.parsers.MultiPartParser",
        "rest_framework.parsers.FormParser",
    ],
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
}

SPECTACULAR_SETTINGS = {
    "TITLE": "Shopee AI Listing API",
    "DESCRIPTION": "Photo upload, Gemini listing copy and Shopee product publishing",
    "VERSION": "0.1.0",
    "SERVE_INCLUDE_SCHEMA": False,
}

CORS_ALLOWED_ORIGINS = [app_settings.public_base_url]
CORS_ALLOW_CREDENTIALS = True

configure_logging(
    json_format=app_settings.is_production,
    log_level=app_settings.log_level,
)
