"""
Default delivery callbacks that send codes over AWS SMS.

Point ``PHONE_SEND_OTP`` and ``PHONE_SEND_FORGET_PASSWORD_OTP`` at these
functions to deliver codes by SMS.
"""

from typing import TYPE_CHECKING

from apps.phone_number.aws_client import SMSError, send_otp_message, send_password_reset_message
from apps.phone_number.exceptions import SMSDeliveryError
from apps.phone_number.interfaces import OTPSendResult

if TYPE_CHECKING:
    from django.http import HttpRequest


def send_verification_sms(
    phone_number: str, code: str, request: "HttpRequest | None" = None
) -> OTPSendResult | None:
    try:
        send_otp_message(phone_number, code)
    except SMSError as e:
        raise SMSDeliveryError() from e
    return None


def send_password_reset_sms(
    phone_number: str, code: str, request: "HttpRequest | None" = None
) -> None:
    try:
        send_password_reset_message(phone_number, code)
    except SMSError as e:
        raise SMSDeliveryError() from e
