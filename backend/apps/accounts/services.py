"""
Accounts services - ORM-backed stores, password hashing and sessions.

These implement the collaborator protocols in ``apps.phone_number.interfaces``.
"""

import secrets
from datetime import timedelta
from typing import Any

from django.conf import settings
from django.contrib.auth.hashers import check_password, make_password
from django.db import IntegrityError, transaction
from django.http import HttpRequest, HttpResponse
from django.utils import timezone

from apps.accounts.constants import ProviderId
from apps.accounts.models import Account, Session, User
from apps.core.logging import get_logger

logger = get_logger(__name__)

# Sessions created without "remember me" last a day and use a browser cookie
SHORT_SESSION_EXPIRES_IN = 60 * 60 * 24


class DjangoUserStore:
    """User store backed by ``accounts.User``."""

    def find_user_by_field(self, field: str, value: Any) -> User | None:
        return User.objects.filter(**{field: value}).first()

    def create_user(self, attributes: dict[str, Any]) -> User | None:
        """
        Create a user, or return None if it conflicts with an existing one.

        Runs in a savepoint so a unique-constraint failure leaves the
        surrounding transaction usable.
        """
        try:
            with transaction.atomic():
                return User.objects.create_user(**attributes)
        except IntegrityError:
            logger.warning("user_create_conflict", phone_number=attributes.get("phone_number"))
            return None

    def update_user(self, user_id: Any, attributes: dict[str, Any]) -> User | None:
        try:
            with transaction.atomic():
                updated = User.objects.filter(pk=user_id).update(
                    **attributes, updated_at=timezone.now()
                )
        except IntegrityError:
            logger.warning("user_update_conflict", user_id=user_id, fields=sorted(attributes))
            return None

        if not updated:
            return None
        return User.objects.get(pk=user_id)


class DjangoAccountStore:
    """Account store backed by ``accounts.Account``."""

    def find_accounts_by_user_id(self, user_id: Any) -> list[Account]:
        return list(Account.objects.filter(user_id=user_id))

    def update_password(self, user_id: Any, password_hash: str) -> None:
        """Set the credential account password, creating the account if needed."""
        Account.objects.update_or_create(
            user_id=user_id,
            provider_id=ProviderId.CREDENTIAL,
            defaults={"password": password_hash, "account_id": str(user_id)},
        )


class DjangoPasswordHasher:
    """Password hashing via ``django.contrib.auth.hashers``."""

    def hash(self, password: str) -> str:
        return make_password(password)

    def verify(self, password_hash: str, password: str) -> bool:
        return check_password(password, password_hash)


class DjangoSessionService:
    """
    Opaque token sessions stored in ``accounts.Session``.

    The token is sent back in a cookie and in the response body. Requests
    authenticate with either the cookie or an ``Authorization: Bearer``
    header.
    """

    def create_session(
        self,
        user_id: Any,
        request: HttpRequest | None,
        dont_remember: bool = False,
    ) -> Session | None:
        lifetime = SHORT_SESSION_EXPIRES_IN if dont_remember else settings.SESSION_EXPIRES_IN
        try:
            return Session.objects.create(
                user_id=user_id,
                token=secrets.token_urlsafe(32),
                expires_at=timezone.now() + timedelta(seconds=lifetime),
                ip_address=_client_ip(request),
                user_agent=request.META.get("HTTP_USER_AGENT", "") if request else "",
            )
        except IntegrityError:
            logger.error("session_create_conflict", user_id=user_id)
            return None

    def set_session_cookie(
        self,
        response: HttpResponse | None,
        session: Session,
        user: User,
        dont_remember: bool = False,
    ) -> None:
        if response is None:
            return
        response.set_cookie(
            settings.SESSION_TOKEN_COOKIE_NAME,
            session.token,
            max_age=None if dont_remember else settings.SESSION_EXPIRES_IN,
            httponly=True,
            secure=settings.SESSION_COOKIE_SECURE,
            samesite="Lax",
        )

    def get_session(self, request: HttpRequest | None) -> Session | None:
        """Return the live session for the request's token, if any."""
        if request is None:
            return None

        token = _session_token(request)
        if not token:
            return None

        return (
            Session.objects.select_related("user")
            .filter(token=token, expires_at__gt=timezone.now(), user__is_active=True)
            .first()
        )


def _session_token(request: HttpRequest) -> str | None:
    auth_header: str = request.META.get("HTTP_AUTHORIZATION", "")
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return token.strip()
    return request.COOKIES.get(settings.SESSION_TOKEN_COOKIE_NAME)


def _client_ip(request: HttpRequest | None) -> str | None:
    """First address in X-Forwarded-For, falling back to REMOTE_ADDR."""
    if request is None:
        return None
    forwarded_for: str | None = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR")
