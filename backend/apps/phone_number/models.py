"""
Verification code storage.
"""

from django.db import models
from django.utils import timezone

from apps.core.models import TimestampedModel

FORGET_PASSWORD_SUFFIX = "-forget-password"
MAX_OTP_LENGTH = 16


class Verification(TimestampedModel):
    """
    One pending code per identifier.

    The identifier is the phone number for verification codes, or the
    phone number plus ``-forget-password`` for recovery codes. Issuing a
    new code overwrites the row, so only the latest code is ever live.
    Rows are deleted when consumed; expired rows stay until cleanup.
    """

    identifier = models.CharField(
        max_length=64,
        unique=True,
        help_text="Phone number, or phone number with a purpose suffix",
    )
    value = models.CharField(max_length=MAX_OTP_LENGTH, help_text="The OTP code")
    expires_at = models.DateTimeField(db_index=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"Verification for {self.masked_identifier}"

    @property
    def masked_identifier(self) -> str:
        """Identifier with the phone number reduced to its last 4 digits."""
        phone = self.identifier.removesuffix(FORGET_PASSWORD_SUFFIX)
        suffix = FORGET_PASSWORD_SUFFIX if self.is_recovery else ""
        return f"***{phone[-4:]}{suffix}"

    @property
    def is_recovery(self) -> bool:
        return self.identifier.endswith(FORGET_PASSWORD_SUFFIX)

    @property
    def is_expired(self) -> bool:
        """Check if the code has expired."""
        return timezone.now() > self.expires_at
