"""
Phone number auth configuration.

Options are built once at startup and never mutated. Callbacks are optional;
an absent callback is a valid state that the service checks for.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from django.conf import settings
from django.utils.module_loading import import_string

from apps.phone_number.interfaces import OTPSendResult
from apps.phone_number.models import MAX_OTP_LENGTH

if TYPE_CHECKING:
    from django.http import HttpRequest

    from apps.phone_number.interfaces import PhoneUser

SendOTP = Callable[[str, str, "HttpRequest | None"], OTPSendResult | None]
SendForgetPasswordOTP = Callable[[str, str, "HttpRequest | None"], None]
VerificationCallback = Callable[[str, "PhoneUser", "HttpRequest | None"], None]
PhoneNumberValidator = Callable[[str], bool]

DEFAULT_OTP_LENGTH = 6
DEFAULT_EXPIRES_IN = 300


@dataclass(frozen=True)
class SignUpOnVerification:
    """
    Create a user the first time an unknown number is verified.

    A user record needs an email and a name, so the policy supplies
    placeholders derived from the phone number. ``get_temp_name`` defaults
    to the phone number itself.
    """

    get_temp_email: Callable[[str], str]
    get_temp_name: Callable[[str], str] | None = None


@dataclass(frozen=True)
class PhoneNumberOptions:
    otp_length: int = DEFAULT_OTP_LENGTH
    expires_in: int = DEFAULT_EXPIRES_IN
    send_otp: SendOTP | None = None
    send_forget_password_otp: SendForgetPasswordOTP | None = None
    phone_number_validator: PhoneNumberValidator | None = None
    callback_on_verification: VerificationCallback | None = None
    sign_up_on_verification: SignUpOnVerification | None = None
    min_password_length: int = 8
    max_password_length: int = 128

    def __post_init__(self) -> None:
        if self.otp_length < 1:
            raise ValueError("otp_length must be at least 1")
        if self.otp_length > MAX_OTP_LENGTH:
            raise ValueError(f"otp_length must be at most {MAX_OTP_LENGTH}")
        if self.expires_in <= 0:
            raise ValueError("expires_in must be positive")

    @classmethod
    def from_settings(cls) -> "PhoneNumberOptions":
        """
        Build options from Django settings.

        Callback settings hold dotted import paths; an empty string
        disables the callback.
        """
        sign_up = None
        if settings.PHONE_SIGN_UP_ON_VERIFICATION:
            sign_up = SignUpOnVerification(
                get_temp_email=import_string(settings.PHONE_GET_TEMP_EMAIL),
                get_temp_name=_load_callable(settings.PHONE_GET_TEMP_NAME),
            )

        return cls(
            otp_length=settings.PHONE_OTP_LENGTH,
            expires_in=settings.PHONE_OTP_EXPIRES_IN,
            send_otp=_load_callable(settings.PHONE_SEND_OTP),
            send_forget_password_otp=_load_callable(settings.PHONE_SEND_FORGET_PASSWORD_OTP),
            phone_number_validator=_load_callable(settings.PHONE_NUMBER_VALIDATOR),
            callback_on_verification=_load_callable(settings.PHONE_CALLBACK_ON_VERIFICATION),
            sign_up_on_verification=sign_up,
            min_password_length=settings.MIN_PASSWORD_LENGTH,
            max_password_length=settings.MAX_PASSWORD_LENGTH,
        )


def _load_callable(path: str) -> Any:
    return import_string(path) if path else None


def default_temp_email(phone_number: str) -> str:
    """Placeholder email for users created from a phone number."""
    local_part = re.sub(r"\D", "", phone_number)
    return f"{local_part}@{settings.PHONE_TEMP_EMAIL_DOMAIN}"
