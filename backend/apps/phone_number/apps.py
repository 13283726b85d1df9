"""
Phone number auth app configuration.
"""

from django.apps import AppConfig


class PhoneNumberConfig(AppConfig):
    """Configuration for phone number auth app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.phone_number"
    verbose_name = "Phone Number Auth"
