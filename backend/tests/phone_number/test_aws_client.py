"""
Tests for the AWS SMS client wrapper and default delivery callbacks.
"""

from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from apps.phone_number.aws_client import SMSError, send_otp_message, send_sms
from apps.phone_number.delivery import send_password_reset_sms, send_verification_sms
from apps.phone_number.exceptions import SMSDeliveryError


class TestSendSMS:
    """Tests for send_sms."""

    def test_sends_transactional_message(self) -> None:
        client = MagicMock()
        client.send_text_message.return_value = {"MessageId": "msg-123"}

        with patch("apps.phone_number.aws_client.get_sms_client", return_value=client):
            result = send_sms("+14155551234", "hello")

        assert result == {"message_id": "msg-123", "success": True}
        client.send_text_message.assert_called_once_with(
            DestinationPhoneNumber="+14155551234",
            OriginationIdentity="+15550000000",
            MessageBody="hello",
            MessageType="TRANSACTIONAL",
        )

    def test_client_error_becomes_sms_error(self) -> None:
        client = MagicMock()
        client.send_text_message.side_effect = ClientError(
            {"Error": {"Code": "ThrottlingException", "Message": "Rate exceeded"}},
            "SendTextMessage",
        )

        with patch("apps.phone_number.aws_client.get_sms_client", return_value=client):
            with pytest.raises(SMSError, match="Rate exceeded"):
                send_sms("+14155551234", "hello")

    def test_missing_origination_identity(self, settings) -> None:
        settings.AWS_SMS_ORIGINATION_IDENTITY = ""

        with pytest.raises(SMSError, match="not configured"):
            send_sms("+14155551234", "hello")

    def test_otp_message_names_app(self) -> None:
        with patch("apps.phone_number.aws_client.send_sms") as mock_send:
            send_otp_message("+14155551234", "123456")

        mock_send.assert_called_once_with(
            "+14155551234", "Your TestApp verification code is: 123456"
        )


class TestDeliveryCallbacks:
    """Tests for the default SMS delivery callbacks."""

    def test_verification_sms_returns_none(self) -> None:
        with patch("apps.phone_number.delivery.send_otp_message") as mock_send:
            assert send_verification_sms("+14155551234", "123456") is None

        mock_send.assert_called_once_with("+14155551234", "123456")

    def test_verification_sms_failure(self) -> None:
        with patch("apps.phone_number.delivery.send_otp_message", side_effect=SMSError("boom")):
            with pytest.raises(SMSDeliveryError):
                send_verification_sms("+14155551234", "123456")

    def test_password_reset_sms_failure(self) -> None:
        with patch(
            "apps.phone_number.delivery.send_password_reset_message", side_effect=SMSError("boom")
        ):
            with pytest.raises(SMSDeliveryError):
                send_password_reset_sms("+14155551234", "123456")
