"""
AWS End User Messaging SMS client wrapper.

Uses boto3 pinpoint-sms-voice-v2 API to send SMS messages.
"""

from functools import lru_cache
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from django.conf import settings

from apps.core.logging import get_logger

logger = get_logger(__name__)


class SMSError(Exception):
    """Exception raised when SMS sending fails."""

    pass


@lru_cache(maxsize=1)
def get_sms_client() -> Any:
    """
    Get AWS SMS client (pinpoint-sms-voice-v2).

    Credentials come from the environment or the IAM role.
    """
    return boto3.client(
        "pinpoint-sms-voice-v2",
        region_name=settings.AWS_SMS_REGION,
    )


def send_sms(phone_number: str, message: str) -> dict[str, Any]:
    """
    Send an SMS message to a phone number.

    Args:
        phone_number: E.164 format phone number (e.g., +14155551234)
        message: The message body to send

    Returns:
        Dict with message_id and success flag

    Raises:
        SMSError: If sending fails
    """
    if not settings.AWS_SMS_ORIGINATION_IDENTITY:
        logger.error("sms_not_configured")
        raise SMSError("SMS service not configured")

    client = get_sms_client()

    try:
        response = client.send_text_message(
            DestinationPhoneNumber=phone_number,
            OriginationIdentity=settings.AWS_SMS_ORIGINATION_IDENTITY,
            MessageBody=message,
            MessageType="TRANSACTIONAL",
        )
    except ClientError as e:
        error_code = e.response.get("Error", {}).get("Code", "Unknown")
        error_message = e.response.get("Error", {}).get("Message", str(e))
        logger.error("sms_client_error", error_code=error_code, error=error_message)
        raise SMSError(f"Failed to send SMS: {error_message}") from e
    except BotoCoreError as e:
        logger.error("sms_botocore_error", error=str(e))
        raise SMSError(f"SMS service error: {e}") from e

    logger.info(
        "sms_sent",
        phone_number=phone_number,
        message_id=response.get("MessageId"),
    )
    return {
        "message_id": response.get("MessageId"),
        "success": True,
    }


def send_otp_message(phone_number: str, otp_code: str) -> dict[str, Any]:
    """Send a phone verification code."""
    message = f"Your {settings.SMS_APP_NAME} verification code is: {otp_code}"
    return send_sms(phone_number, message)


def send_password_reset_message(phone_number: str, otp_code: str) -> dict[str, Any]:
    """Send a password reset code."""
    message = f"Your {settings.SMS_APP_NAME} password reset code is: {otp_code}"
    return send_sms(phone_number, message)
