"""
Production settings for QuorumCal project.

These settings override the base settings for production environments.
"""

import os

from .base import *

DEBUG = os.environ.get("DEBUG", "False").lower() == "true"

SECRET_KEY = os.environ.get("SECRET_KEY")
if not SECRET_KEY:
    raise ValueError("SECRET_KEY environment variable not set!")

ALLOWED_HOSTS = env("ALLOWED_HOSTS", required=True).split(",")

# Feeds are generated behind a reverse proxy; the proxy sets X-Forwarded-Host
USE_X_FORWARDED_HOST = True
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")

SECURE_HSTS_SECONDS = int(env("SECURE_HSTS_SECONDS", "31536000"))
SECURE_HSTS_INCLUDE_SUBDOMAINS = True

CACHES = {
    "default": {
        "BACKEND": "django_redis.cache.RedisCache",
        "LOCATION": env("REDIS_URL", required=True),
        "OPTIONS": {
            "CLIENT_CLASS": "django_redis.client.DefaultClient",
            "SOCKET_CONNECT_TIMEOUT": 5,
            "SOCKET_TIMEOUT": 5,
            # A Redis outage degrades to "no cache" instead of failing feeds
            "IGNORE_EXCEPTIONS": True,
        },
        "KEY_PREFIX": "quorumcal",
    }
}
