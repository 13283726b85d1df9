"""
Test settings.

In-memory SQLite and a fast password hasher. SMS delivery stays wired to
the AWS client, which tests patch.
"""

from .base import *  # noqa: F403

DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

PHONE_OTP_IN_RESPONSE = True
SMS_APP_NAME = "TestApp"
AWS_SMS_ORIGINATION_IDENTITY = "+15550000000"
