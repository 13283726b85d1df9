"""
Exceptions for phone number authentication.

Each exception carries a stable machine-readable ``code`` and the HTTP
status it maps to. The API layer renders them as ``ErrorResponse``.
"""


class PhoneNumberError(Exception):
    """Base exception for phone number auth operations."""

    code = "UNEXPECTED_ERROR"
    status_code = 400
    default_message = "Unexpected error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class UnexpectedError(PhoneNumberError):
    """State changed underneath the request (e.g. user deleted mid-reset)."""

    pass


class InvalidPhoneNumberError(PhoneNumberError):
    """Phone number rejected by the configured validator."""

    code = "INVALID_PHONE_NUMBER"
    default_message = "Invalid phone number"


class InvalidCredentialsError(PhoneNumberError):
    """
    Sign-in failed.

    Raised for unknown number, missing credential account, missing password
    hash and wrong password alike so callers cannot tell which one it was.
    """

    code = "INVALID_PHONE_NUMBER_OR_PASSWORD"
    status_code = 401
    default_message = "Invalid phone number or password"


class OTPError(PhoneNumberError):
    """Base exception for OTP verification failures."""

    pass


class OTPNotFoundError(OTPError):
    """No live code exists for the identifier."""

    code = "OTP_NOT_FOUND"
    default_message = "OTP not found"


class OTPExpiredError(OTPError):
    """The stored code is past its expiry."""

    code = "OTP_EXPIRED"
    default_message = "OTP expired"


class OTPInvalidError(OTPError):
    """The submitted code does not match the stored one."""

    code = "INVALID_OTP"
    default_message = "Invalid OTP"


class OTPGenerationDeclinedError(PhoneNumberError):
    """The delivery callback vetoed code generation."""

    code = "USER_CHOICE"
    status_code = 401
    default_message = "OTP generation set to false"


class OTPDeliveryNotConfiguredError(PhoneNumberError):
    """No verification delivery callback is configured."""

    code = "NOT_IMPLEMENTED"
    status_code = 501
    default_message = "sendOTP not implemented"


class SMSDeliveryError(PhoneNumberError):
    """The SMS provider failed to deliver a verification code."""

    code = "SMS_DELIVERY_FAILED"
    status_code = 502
    default_message = "Failed to send verification code. Please try again."


class UnauthorizedError(PhoneNumberError):
    """An operation that needs an active session was called without one."""

    code = "UNAUTHORIZED"
    status_code = 401
    default_message = "User not found"


class PhoneNumberNotRegisteredError(PhoneNumberError):
    """Password reset requested for a number with no account."""

    code = "PHONE_NUMBER_NOT_REGISTERED"
    default_message = "phone number isn't registered"


class PasswordTooShortError(PhoneNumberError):
    code = "PASSWORD_TOO_SHORT"
    default_message = "Password too short"


class PasswordTooLongError(PhoneNumberError):
    code = "PASSWORD_TOO_LONG"
    default_message = "Password too long"


class FailedToCreateUserError(PhoneNumberError):
    code = "FAILED_TO_CREATE_USER"
    status_code = 500
    default_message = "Failed to create user"


class FailedToUpdateUserError(PhoneNumberError):
    code = "FAILED_TO_UPDATE_USER"
    status_code = 500
    default_message = "Failed to update user"


class FailedToCreateSessionError(PhoneNumberError):
    code = "FAILED_TO_CREATE_SESSION"
    status_code = 500
    default_message = "Failed to create session"
