"""
Collaborator contracts for phone number authentication.

``PhoneNumberAuth`` only talks to storage, password hashing and sessions
through these protocols. The Django ORM implementations live in
``apps.accounts.services`` and ``apps.phone_number.stores``; tests use
in-memory fakes.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from django.http import HttpRequest, HttpResponse


@dataclass(frozen=True)
class OTPSendResult:
    """
    Optional return value of the verification delivery callback.

    A truthy ``generate`` aborts issuance before the code is stored, e.g. for
    phones with no registered delivery channel. ``reason`` becomes the
    error message.
    """

    generate: bool = False
    reason: str | None = None


class VerificationRecord(Protocol):
    id: Any
    identifier: str
    value: str
    expires_at: datetime


class PhoneUser(Protocol):
    id: Any
    email: str
    name: str
    phone_number: str | None
    phone_number_verified: bool


class CredentialAccount(Protocol):
    provider_id: str
    password: str | None


class AuthSession(Protocol):
    token: str
    user: Any


class VerificationStore(Protocol):
    def create(self, identifier: str, value: str, expires_at: datetime) -> VerificationRecord:
        """Store a code, replacing any existing record for ``identifier``."""
        ...

    def find(self, identifier: str) -> VerificationRecord | None: ...

    def delete(self, record_id: Any) -> bool:
        """Delete a record. Returns False if it was already gone."""
        ...


class UserStore(Protocol):
    def find_user_by_field(self, field: str, value: Any) -> PhoneUser | None: ...

    def create_user(self, attributes: dict[str, Any]) -> PhoneUser | None: ...

    def update_user(self, user_id: Any, attributes: dict[str, Any]) -> PhoneUser | None: ...


class AccountStore(Protocol):
    def find_accounts_by_user_id(self, user_id: Any) -> list[CredentialAccount]: ...

    def update_password(self, user_id: Any, password_hash: str) -> None: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...

    def verify(self, password_hash: str, password: str) -> bool: ...


class SessionService(Protocol):
    def create_session(
        self,
        user_id: Any,
        request: HttpRequest | None,
        dont_remember: bool = False,
    ) -> AuthSession | None: ...

    def set_session_cookie(
        self,
        response: HttpResponse | None,
        session: AuthSession,
        user: PhoneUser,
        dont_remember: bool = False,
    ) -> None: ...

    def get_session(self, request: HttpRequest | None) -> AuthSession | None: ...
