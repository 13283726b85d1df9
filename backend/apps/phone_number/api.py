"""
API endpoints for phone number authentication.

Errors raised by the services are ``PhoneNumberError`` subclasses and are
rendered as ``ErrorResponse`` by the handler registered in ``config.api``.
"""

from django.conf import settings
from django.db import transaction
from django.http import HttpRequest, HttpResponse
from ninja import Router

from apps.core.schemas import ErrorResponse
from apps.phone_number.schemas import (
    ForgetPasswordRequest,
    ResetPasswordRequest,
    SendOTPRequest,
    SendOTPResponse,
    SignInPhoneNumberRequest,
    SignInPhoneNumberResponse,
    StatusResponse,
    UserWithPhoneNumber,
    VerifyPhoneNumberRequest,
    VerifyPhoneNumberResponse,
)
from apps.phone_number.services import get_phone_number_auth

router = Router(tags=["Phone Number"])


@router.post(
    "/sign-in/phone-number",
    response={200: SignInPhoneNumberResponse, 400: ErrorResponse, 401: ErrorResponse},
    operation_id="signInPhoneNumber",
    summary="Sign in with phone number",
)
def sign_in_phone_number(
    request: HttpRequest,
    response: HttpResponse,
    payload: SignInPhoneNumberRequest,
) -> SignInPhoneNumberResponse:
    """
    Sign in with phone number and password.

    Sets the session cookie and returns the session token.
    """
    result = get_phone_number_auth().sign_in(
        payload.phone_number,
        payload.password,
        request=request,
        response=response,
        remember_me=payload.remember_me,
    )
    return SignInPhoneNumberResponse(
        token=result.token,
        user=UserWithPhoneNumber.model_validate(result.user),
    )


@router.post(
    "/phone-number/send-otp",
    response={200: SendOTPResponse, 400: ErrorResponse, 401: ErrorResponse, 501: ErrorResponse},
    operation_id="sendPhoneNumberOTP",
    summary="Send OTP to phone number",
)
def send_phone_number_otp(request: HttpRequest, payload: SendOTPRequest) -> SendOTPResponse:
    """
    Send a verification code to a phone number.

    The code is echoed back only when ``PHONE_OTP_IN_RESPONSE`` is on,
    which is meant for development and tests.
    """
    code = get_phone_number_auth().send_verification_otp(payload.phone_number, request)
    return SendOTPResponse(code=code if settings.PHONE_OTP_IN_RESPONSE else None)


@router.post(
    "/phone-number/verify",
    response={200: VerifyPhoneNumberResponse | None, 400: ErrorResponse, 401: ErrorResponse},
    operation_id="verifyPhoneNumber",
    summary="Verify phone number",
)
def verify_phone_number(
    request: HttpRequest,
    response: HttpResponse,
    payload: VerifyPhoneNumberRequest,
) -> VerifyPhoneNumberResponse | None:
    """
    Verify a phone number with the code it received.

    Returns null when the number belongs to no user and sign-up on
    verification is disabled.
    """
    with transaction.atomic():
        result = get_phone_number_auth().verify_phone_number(
            payload.phone_number,
            payload.code,
            request=request,
            response=response,
            disable_session=payload.disable_session,
            update_phone_number=payload.update_phone_number,
        )

    if result is None:
        return None

    return VerifyPhoneNumberResponse(
        status=result.status,
        token=result.token,
        user=UserWithPhoneNumber.model_validate(result.user),
    )


@router.post(
    "/phone-number/forget-password",
    response={200: StatusResponse, 400: ErrorResponse},
    operation_id="forgetPasswordPhoneNumber",
    summary="Request password reset code",
)
def forget_password_phone_number(
    request: HttpRequest, payload: ForgetPasswordRequest
) -> StatusResponse:
    """Send a password reset code to a registered phone number."""
    get_phone_number_auth().request_password_reset(payload.phone_number, request)
    return StatusResponse(status=True)


@router.post(
    "/phone-number/reset-password",
    response={200: StatusResponse, 400: ErrorResponse},
    operation_id="resetPasswordPhoneNumber",
    summary="Reset password with phone OTP",
)
def reset_password_phone_number(
    request: HttpRequest, payload: ResetPasswordRequest
) -> StatusResponse:
    """Replace the password using a code from the forget-password endpoint."""
    with transaction.atomic():
        get_phone_number_auth().reset_password(
            payload.phone_number,
            payload.otp,
            payload.new_password,
        )
    return StatusResponse(status=True)
