"""
Base Django settings for the phone number auth service.

Shared configuration for all environments.
"""

from pathlib import Path

from pydantic_settings import BaseSettings

from apps.core.logging import configure_logging


class Settings(BaseSettings):
    """Environment-based configuration using pydantic-settings."""

    SECRET_KEY: str = "django-insecure-change-me-in-production"
    DEBUG: bool = False
    ALLOWED_HOSTS: str = ""

    # Database
    DB_NAME: str = "phone_auth"
    DB_USER: str = "postgres"
    DB_PASSWORD: str = "postgres"
    DB_HOST: str = "localhost"
    DB_PORT: str = "5432"

    # Logging
    LOG_JSON: bool = True
    LOG_LEVEL: str = "INFO"

    # Phone number OTP
    PHONE_OTP_LENGTH: int = 6
    PHONE_OTP_EXPIRES_IN: int = 300  # seconds
    PHONE_OTP_IN_RESPONSE: bool = True
    PHONE_SIGN_UP_ON_VERIFICATION: bool = False
    PHONE_TEMP_EMAIL_DOMAIN: str = "phone.local"
    PHONE_GET_TEMP_EMAIL: str = "apps.phone_number.options.default_temp_email"
    PHONE_GET_TEMP_NAME: str = ""

    # Callbacks as dotted import paths; empty disables
    PHONE_SEND_OTP: str = "apps.phone_number.delivery.send_verification_sms"
    PHONE_SEND_FORGET_PASSWORD_OTP: str = "apps.phone_number.delivery.send_password_reset_sms"
    PHONE_CALLBACK_ON_VERIFICATION: str = ""
    PHONE_NUMBER_VALIDATOR: str = "apps.phone_number.validators.is_e164"

    # Password policy
    MIN_PASSWORD_LENGTH: int = 8
    MAX_PASSWORD_LENGTH: int = 128

    # Sessions
    SESSION_EXPIRES_IN: int = 60 * 60 * 24 * 7  # 7 days
    SESSION_TOKEN_COOKIE_NAME: str = "session_token"

    # AWS End User Messaging SMS
    AWS_SMS_REGION: str = "us-east-1"
    AWS_SMS_ORIGINATION_IDENTITY: str = ""
    SMS_APP_NAME: str = "Phone Auth"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()

configure_logging(json_format=settings.LOG_JSON, log_level=settings.LOG_LEVEL)

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = settings.SECRET_KEY

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = settings.DEBUG

ALLOWED_HOSTS = [h.strip() for h in settings.ALLOWED_HOSTS.split(",") if h.strip()]

# Application definition
INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # Local apps
    "apps.core",
    "apps.accounts",
    "apps.phone_number",
]

AUTH_USER_MODEL = "accounts.User"

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "apps.core.middleware.RequestLoggingMiddleware",
]

ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "config.wsgi.application"

# Database
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": settings.DB_NAME,
        "USER": settings.DB_USER,
        "PASSWORD": settings.DB_PASSWORD,
        "HOST": settings.DB_HOST,
        "PORT": settings.DB_PORT,
    }
}

# Password validation (admin users only; phone flows use MIN/MAX_PASSWORD_LENGTH)
AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# Static files (CSS, JavaScript, Images)
STATIC_URL = "static/"

# Default primary key field type
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Phone number auth
PHONE_OTP_LENGTH = settings.PHONE_OTP_LENGTH
PHONE_OTP_EXPIRES_IN = settings.PHONE_OTP_EXPIRES_IN
PHONE_OTP_IN_RESPONSE = settings.PHONE_OTP_IN_RESPONSE
PHONE_SIGN_UP_ON_VERIFICATION = settings.PHONE_SIGN_UP_ON_VERIFICATION
PHONE_TEMP_EMAIL_DOMAIN = settings.PHONE_TEMP_EMAIL_DOMAIN
PHONE_GET_TEMP_EMAIL = settings.PHONE_GET_TEMP_EMAIL
PHONE_GET_TEMP_NAME = settings.PHONE_GET_TEMP_NAME
PHONE_SEND_OTP = settings.PHONE_SEND_OTP
PHONE_SEND_FORGET_PASSWORD_OTP = settings.PHONE_SEND_FORGET_PASSWORD_OTP
PHONE_CALLBACK_ON_VERIFICATION = settings.PHONE_CALLBACK_ON_VERIFICATION
PHONE_NUMBER_VALIDATOR = settings.PHONE_NUMBER_VALIDATOR
MIN_PASSWORD_LENGTH = settings.MIN_PASSWORD_LENGTH
MAX_PASSWORD_LENGTH = settings.MAX_PASSWORD_LENGTH

# Sessions
SESSION_EXPIRES_IN = settings.SESSION_EXPIRES_IN
SESSION_TOKEN_COOKIE_NAME = settings.SESSION_TOKEN_COOKIE_NAME

# SMS
AWS_SMS_REGION = settings.AWS_SMS_REGION
AWS_SMS_ORIGINATION_IDENTITY = settings.AWS_SMS_ORIGINATION_IDENTITY
SMS_APP_NAME = settings.SMS_APP_NAME
