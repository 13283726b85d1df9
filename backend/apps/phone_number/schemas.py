"""
Schemas for phone number auth endpoints.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from apps.phone_number.models import MAX_OTP_LENGTH

# --- Request Schemas ---


class SignInPhoneNumberRequest(BaseModel):
    """Request to sign in with phone number and password."""

    phone_number: str = Field(
        ...,
        min_length=1,
        max_length=20,
        description="Phone number to sign in",
        examples=["+14155551234"],
    )
    password: str = Field(..., min_length=1, description="Password to use for sign in")
    remember_me: bool | None = Field(
        default=None,
        description="Remember the session. False issues a short-lived browser-session cookie.",
    )


class SendOTPRequest(BaseModel):
    """Request to send a verification code to a phone number."""

    phone_number: str = Field(
        ...,
        min_length=1,
        max_length=20,
        description="Phone number to send OTP",
        examples=["+14155551234"],
    )


class VerifyPhoneNumberRequest(BaseModel):
    """Request to verify a phone number with the code it received."""

    phone_number: str = Field(
        ...,
        min_length=1,
        max_length=20,
        description="Phone number to verify",
        examples=["+14155551234"],
    )
    code: str = Field(
        ...,
        min_length=1,
        max_length=MAX_OTP_LENGTH,
        description="OTP code",
        examples=["123456"],
    )
    disable_session: bool = Field(
        default=False,
        description="Disable session creation after verification",
    )
    update_phone_number: bool = Field(
        default=False,
        description="Attach the phone number to the user of the current session",
    )


class ForgetPasswordRequest(BaseModel):
    """Request a password reset code."""

    phone_number: str = Field(..., min_length=1, max_length=20, examples=["+14155551234"])


class ResetPasswordRequest(BaseModel):
    """Reset a password with a code from /phone-number/forget-password."""

    otp: str = Field(..., min_length=1, max_length=MAX_OTP_LENGTH, examples=["123456"])
    phone_number: str = Field(..., min_length=1, max_length=20, examples=["+14155551234"])
    new_password: str = Field(..., min_length=1)


# --- Response Schemas ---


class UserWithPhoneNumber(BaseModel):
    """User fields returned by phone number auth endpoints."""

    id: int
    email: str
    email_verified: bool
    name: str
    image: str | None = None
    phone_number: str | None = None
    phone_number_verified: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class SignInPhoneNumberResponse(BaseModel):
    token: str
    user: UserWithPhoneNumber


class SendOTPResponse(BaseModel):
    message: str = "Code sent"
    code: str | None = Field(
        default=None,
        description="The generated code. Only present when PHONE_OTP_IN_RESPONSE is enabled.",
    )


class VerifyPhoneNumberResponse(BaseModel):
    status: bool
    token: str | None = Field(description="Session token, null when session creation is disabled")
    user: UserWithPhoneNumber


class StatusResponse(BaseModel):
    status: bool
