"""
Production settings.

Security-hardened settings for deployed environments.
All secrets are read from environment variables.
"""

from .base import *  # noqa: F403

DEBUG = False

# Security settings
SECURE_SSL_REDIRECT = True
SECURE_HSTS_SECONDS = 31536000  # 1 year
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_HSTS_PRELOAD = True
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")

# Codes are only ever delivered out of band
PHONE_OTP_IN_RESPONSE = False
