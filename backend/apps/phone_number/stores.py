"""
Django ORM verification store.
"""

from datetime import datetime

from apps.phone_number.models import Verification


class DjangoVerificationStore:
    """Verification store backed by the ``Verification`` table."""

    def create(self, identifier: str, value: str, expires_at: datetime) -> Verification:
        # Unique identifier column makes this an upsert into a single slot
        verification, _ = Verification.objects.update_or_create(
            identifier=identifier,
            defaults={"value": value, "expires_at": expires_at},
        )
        return verification

    def find(self, identifier: str) -> Verification | None:
        return Verification.objects.filter(identifier=identifier).first()

    def delete(self, record_id: int) -> bool:
        deleted, _ = Verification.objects.filter(pk=record_id).delete()
        return deleted > 0
