"""
Development settings for QuorumCal project.

These settings override the base settings for local development environments.
"""

import os

from .base import *

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = env("SECRET_KEY", "django-insecure-development-key-not-for-production")

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = env("DEBUG", "True") == "True"

ALLOWED_HOSTS = ["*"]

if os.environ.get("USE_SQLITE", "True").lower() == "true":
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",
        }
    }

# Local memory cache, no Redis required while developing
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "quorumcal-dev",
    }
}

SECURE_SSL_REDIRECT = False
SESSION_COOKIE_SECURE = False
CSRF_COOKIE_SECURE = False

LOGGING["loggers"]["apps"]["level"] = "DEBUG"
LOGGING["loggers"]["algorithms"]["level"] = "DEBUG"
