"""
Phone number authentication services.

Issues and verifies one-time codes bound to a phone number, links verified
numbers to user accounts, and handles phone + password sign-in and password
recovery. Storage, password hashing and sessions are injected collaborators
(see ``apps.phone_number.interfaces``).
"""

import secrets
from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache
from typing import TYPE_CHECKING, NoReturn

from django.utils import timezone

from apps.accounts.constants import ProviderId
from apps.core.logging import get_logger
from apps.phone_number.exceptions import (
    FailedToCreateSessionError,
    FailedToCreateUserError,
    FailedToUpdateUserError,
    InvalidCredentialsError,
    InvalidPhoneNumberError,
    OTPDeliveryNotConfiguredError,
    OTPExpiredError,
    OTPGenerationDeclinedError,
    OTPInvalidError,
    OTPNotFoundError,
    PasswordTooLongError,
    PasswordTooShortError,
    PhoneNumberNotRegisteredError,
    SMSDeliveryError,
    UnauthorizedError,
    UnexpectedError,
)
from apps.phone_number.models import FORGET_PASSWORD_SUFFIX, Verification
from apps.phone_number.options import PhoneNumberOptions, SendOTP, SignUpOnVerification

if TYPE_CHECKING:
    from django.http import HttpRequest, HttpResponse

    from apps.phone_number.interfaces import (
        AccountStore,
        AuthSession,
        PasswordHasher,
        PhoneUser,
        SessionService,
        UserStore,
        VerificationStore,
    )

logger = get_logger(__name__)


@dataclass
class SignInResult:
    token: str
    user: "PhoneUser"


@dataclass
class VerifyResult:
    """Outcome of a successful phone verification that resolved to a user."""

    token: str | None
    user: "PhoneUser"
    status: bool = True


def generate_otp_code(length: int) -> str:
    """
    Generate a cryptographically secure numeric code.

    Args:
        length: Number of digits

    Returns:
        String of random digits
    """
    return "".join(secrets.choice("0123456789") for _ in range(length))


def forget_password_identifier(phone_number: str) -> str:
    """Verification identifier for password recovery codes."""
    return f"{phone_number}{FORGET_PASSWORD_SUFFIX}"


class PhoneNumberAuth:
    """
    Phone number sign-in, verification and password recovery.

    Holds no mutable state beyond its collaborators; one instance serves
    all requests.
    """

    def __init__(
        self,
        options: PhoneNumberOptions,
        *,
        users: "UserStore",
        accounts: "AccountStore",
        verifications: "VerificationStore",
        passwords: "PasswordHasher",
        sessions: "SessionService",
    ) -> None:
        self.options = options
        self.users = users
        self.accounts = accounts
        self.verifications = verifications
        self.passwords = passwords
        self.sessions = sessions

    # --- OTP protocol ---

    def issue_otp(
        self,
        identifier: str,
        phone_number: str,
        deliver: SendOTP,
        request: "HttpRequest | None" = None,
    ) -> str:
        """
        Generate, deliver and store a code for ``identifier``.

        The delivery callback runs before the code is stored, so a vetoed
        or failed delivery leaves any previous record untouched.

        Returns:
            The generated code

        Raises:
            InvalidPhoneNumberError: If the validator rejects the number
            OTPGenerationDeclinedError: If the delivery callback vetoes
        """
        self._validate_phone_number(phone_number)

        code = generate_otp_code(self.options.otp_length)

        result = deliver(phone_number, code, request)
        if result is not None and result.generate:
            logger.info("otp_generation_declined", phone_number=phone_number, reason=result.reason)
            raise OTPGenerationDeclinedError(result.reason)

        self._store_code(identifier, code)
        logger.info("otp_issued", identifier=_mask(identifier))
        return code

    def verify_otp(self, identifier: str, code: str) -> None:
        """
        Check a submitted code and consume it.

        Checks run in a fixed order: missing record, then expiry, then
        value. An expired code is reported as expired even if it is also
        wrong.

        Raises:
            OTPNotFoundError: No record, or another request consumed it first
            OTPExpiredError: Record is past ``expires_at``
            OTPInvalidError: Code does not match
        """
        record = self.verifications.find(identifier)
        if record is None:
            logger.info("otp_not_found", identifier=_mask(identifier))
            raise OTPNotFoundError()

        if record.expires_at < timezone.now():
            logger.info("otp_expired", identifier=_mask(identifier))
            raise OTPExpiredError()

        if not secrets.compare_digest(record.value.encode(), code.encode()):
            logger.info("otp_invalid", identifier=_mask(identifier))
            raise OTPInvalidError()

        # Compare-and-delete: only the request that removes the row wins
        if not self.verifications.delete(record.id):
            logger.info("otp_already_consumed", identifier=_mask(identifier))
            raise OTPNotFoundError()

        logger.info("otp_consumed", identifier=_mask(identifier))

    # --- Endpoint operations ---

    def send_verification_otp(self, phone_number: str, request: "HttpRequest | None" = None) -> str:
        """
        Send a verification code to ``phone_number``.

        Raises:
            OTPDeliveryNotConfiguredError: If no ``send_otp`` callback is set
        """
        if self.options.send_otp is None:
            logger.warning("send_otp_not_configured")
            raise OTPDeliveryNotConfiguredError()

        return self.issue_otp(phone_number, phone_number, self.options.send_otp, request)

    def verify_phone_number(
        self,
        phone_number: str,
        code: str,
        *,
        request: "HttpRequest | None" = None,
        response: "HttpResponse | None" = None,
        disable_session: bool = False,
        update_phone_number: bool = False,
    ) -> VerifyResult | None:
        """
        Verify a code and link the number to an account.

        After the code checks out, the first matching branch applies:

        1. ``update_phone_number``: set the number on the session user
           (requires a session) and return the existing session token.
        2. A user already has this number: mark it verified.
        3. Sign-up-on-verification is enabled: create a verified user.
        4. Otherwise: nothing to link, return None.

        For branches 2 and 3 the verification callback runs, then a new
        session is created unless ``disable_session`` is set.
        """
        self.verify_otp(phone_number, code)

        if update_phone_number:
            return self._attach_to_session_user(phone_number, request)

        user = self._find_user_by_phone_number(phone_number)
        if user is not None:
            user = self._mark_verified(user)
        elif self.options.sign_up_on_verification is not None:
            user = self._provision_user(phone_number, self.options.sign_up_on_verification)
        else:
            logger.info("phone_number_verified_without_user", phone_number=phone_number)
            return None

        if self.options.callback_on_verification is not None:
            self.options.callback_on_verification(phone_number, user, request)

        if disable_session:
            return VerifyResult(token=None, user=user)

        session = self._start_session(user, request, response)
        return VerifyResult(token=session.token, user=user)

    def sign_in(
        self,
        phone_number: str,
        password: str,
        *,
        request: "HttpRequest | None" = None,
        response: "HttpResponse | None" = None,
        remember_me: bool | None = None,
    ) -> SignInResult:
        """
        Sign in with phone number and password.

        Every credential failure raises the same InvalidCredentialsError;
        the specific reason is only logged.
        """
        self._validate_phone_number(phone_number)

        user = self._find_user_by_phone_number(phone_number)
        if user is None:
            # Hash anyway so unknown numbers take as long as wrong passwords
            self.passwords.hash(password)
            self._reject_sign_in(phone_number, "user_not_found")

        accounts = self.accounts.find_accounts_by_user_id(user.id)
        credential_account = next(
            (a for a in accounts if a.provider_id == ProviderId.CREDENTIAL), None
        )
        if credential_account is None:
            self._reject_sign_in(phone_number, "credential_account_not_found")
        if not credential_account.password:
            self._reject_sign_in(phone_number, "password_not_set")
        if not self.passwords.verify(credential_account.password, password):
            self._reject_sign_in(phone_number, "invalid_password")

        dont_remember = remember_me is False
        session = self._start_session(user, request, response, dont_remember=dont_remember)
        logger.info("phone_sign_in", phone_number=phone_number, user_id=user.id)
        return SignInResult(token=session.token, user=user)

    def request_password_reset(self, phone_number: str, request: "HttpRequest | None" = None) -> None:
        """
        Send a password reset code to a registered number.

        The code is stored before delivery. Delivery failures are logged
        and do not fail the request.

        Raises:
            PhoneNumberNotRegisteredError: If no user has this number
        """
        user = self._find_user_by_phone_number(phone_number)
        if user is None:
            raise PhoneNumberNotRegisteredError()

        code = generate_otp_code(self.options.otp_length)
        self._store_code(forget_password_identifier(phone_number), code)
        logger.info("password_reset_requested", phone_number=phone_number, user_id=user.id)

        sender = self.options.send_forget_password_otp
        if sender is None:
            logger.warning("send_forget_password_otp_not_configured")
            return

        try:
            sender(phone_number, code, request)
        except SMSDeliveryError as e:
            logger.warning("password_reset_delivery_failed", phone_number=phone_number, error=str(e))

    def reset_password(self, phone_number: str, otp: str, new_password: str) -> None:
        """
        Replace the password of the user owning ``phone_number``.

        Raises:
            PasswordTooShortError / PasswordTooLongError: Policy violation
            OTPNotFoundError / OTPExpiredError / OTPInvalidError: Bad code
            UnexpectedError: The user no longer exists
        """
        if len(new_password) < self.options.min_password_length:
            raise PasswordTooShortError()
        if len(new_password) > self.options.max_password_length:
            raise PasswordTooLongError()

        self.verify_otp(forget_password_identifier(phone_number), otp)

        user = self._find_user_by_phone_number(phone_number)
        if user is None:
            logger.error("password_reset_user_missing", phone_number=phone_number)
            raise UnexpectedError()

        self.accounts.update_password(user.id, self.passwords.hash(new_password))
        logger.info("password_reset_completed", phone_number=phone_number, user_id=user.id)

    # --- Helpers ---

    def _validate_phone_number(self, phone_number: str) -> None:
        validator = self.options.phone_number_validator
        if validator is not None and not validator(phone_number):
            raise InvalidPhoneNumberError()

    def _store_code(self, identifier: str, code: str) -> None:
        expires_at = timezone.now() + timedelta(seconds=self.options.expires_in)
        self.verifications.create(identifier, code, expires_at)

    def _find_user_by_phone_number(self, phone_number: str) -> "PhoneUser | None":
        return self.users.find_user_by_field("phone_number", phone_number)

    def _attach_to_session_user(
        self, phone_number: str, request: "HttpRequest | None"
    ) -> VerifyResult:
        session = self.sessions.get_session(request)
        if session is None:
            raise UnauthorizedError()

        user = self.users.update_user(
            session.user.id,
            {"phone_number": phone_number, "phone_number_verified": True},
        )
        if user is None:
            raise FailedToUpdateUserError()

        logger.info("phone_number_verified", phone_number=phone_number, user_id=user.id)
        return VerifyResult(token=session.token, user=user)

    def _mark_verified(self, user: "PhoneUser") -> "PhoneUser":
        updated = self.users.update_user(user.id, {"phone_number_verified": True})
        if updated is None:
            raise FailedToUpdateUserError()
        logger.info("phone_number_verified", phone_number=updated.phone_number, user_id=updated.id)
        return updated

    def _provision_user(self, phone_number: str, policy: SignUpOnVerification) -> "PhoneUser":
        name = policy.get_temp_name(phone_number) if policy.get_temp_name else phone_number
        user = self.users.create_user(
            {
                "email": policy.get_temp_email(phone_number),
                "name": name,
                "phone_number": phone_number,
                "phone_number_verified": True,
            }
        )
        if user is None:
            raise FailedToCreateUserError()
        logger.info("phone_user_provisioned", phone_number=phone_number, user_id=user.id)
        return user

    def _start_session(
        self,
        user: "PhoneUser",
        request: "HttpRequest | None",
        response: "HttpResponse | None",
        dont_remember: bool = False,
    ) -> "AuthSession":
        session = self.sessions.create_session(user.id, request, dont_remember)
        if session is None:
            logger.error("session_create_failed", user_id=user.id)
            raise FailedToCreateSessionError()
        self.sessions.set_session_cookie(response, session, user, dont_remember)
        return session

    def _reject_sign_in(self, phone_number: str, reason: str) -> NoReturn:
        logger.warning("phone_sign_in_failed", phone_number=phone_number, reason=reason)
        raise InvalidCredentialsError()


def _mask(identifier: str) -> str:
    phone = identifier.removesuffix(FORGET_PASSWORD_SUFFIX)
    return identifier.replace(phone, f"***{phone[-4:]}", 1)


@lru_cache(maxsize=1)
def get_phone_number_auth() -> PhoneNumberAuth:
    """
    Get the process-wide PhoneNumberAuth wired to the Django collaborators.

    Options are read from settings once; call ``cache_clear()`` after
    changing settings in tests.
    """
    from apps.accounts.services import (
        DjangoAccountStore,
        DjangoPasswordHasher,
        DjangoSessionService,
        DjangoUserStore,
    )
    from apps.phone_number.stores import DjangoVerificationStore

    return PhoneNumberAuth(
        PhoneNumberOptions.from_settings(),
        users=DjangoUserStore(),
        accounts=DjangoAccountStore(),
        verifications=DjangoVerificationStore(),
        passwords=DjangoPasswordHasher(),
        sessions=DjangoSessionService(),
    )


def cleanup_expired_verifications(hours: int = 24, dry_run: bool = False) -> int:
    """
    Delete verification records that expired more than ``hours`` ago.

    Intended to be called from a scheduled task.

    Returns:
        Number of records deleted (or that would be deleted on a dry run)
    """
    cutoff = timezone.now() - timedelta(hours=hours)
    expired = Verification.objects.filter(expires_at__lt=cutoff)

    if dry_run:
        return expired.count()

    deleted, _ = expired.delete()
    if deleted:
        logger.info("expired_verifications_deleted", count=deleted)
    return deleted
