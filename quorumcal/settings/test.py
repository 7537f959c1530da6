"""
Test settings for QuorumCal project.

These settings override the base settings for test environments.
"""

from .base import *

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# Disable caching in tests
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.dummy.DummyCache",
    }
}

# Password hashers are slow; use fast ones for tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

# Make tests faster by avoiding real translations
USE_I18N = False

SECURE_SSL_REDIRECT = False
ALLOWED_HOSTS = ["*"]

QUORUMCAL = {
    **QUORUMCAL,
    "APP_DOMAIN": "quorumcal.test",
    "NOREPLY_EMAIL": "noreply@quorumcal.test",
    "CALENDAR_LIMIT_PER_USER": 0,
    "ICS_FEED_CACHE_TTL": 0,
}

# Disable logging during tests to speed them up
LOGGING = {
    "version": 1,
    "disable_existing_loggers": True,
    "handlers": {
        "null": {
            "class": "logging.NullHandler",
        },
    },
    "loggers": {
        "": {
            "handlers": ["null"],
            "level": "CRITICAL",
            "propagate": False,
        },
    },
}
