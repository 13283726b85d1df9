"""
Tests for cleanup_verifications management command.
"""

from datetime import timedelta
from io import StringIO

import pytest
from django.core.management import call_command
from django.utils import timezone

from apps.phone_number.models import Verification


def _create_verification(identifier: str, hours_expired: int) -> Verification:
    """Helper to create a Verification that expired ``hours_expired`` ago."""
    return Verification.objects.create(
        identifier=identifier,
        value="123456",
        expires_at=timezone.now() - timedelta(hours=hours_expired),
    )


@pytest.mark.django_db
class TestCleanupVerificationsCommand:
    """Tests for the cleanup_verifications management command."""

    def test_deletes_codes_expired_past_threshold(self):
        old = _create_verification("+14155550001", hours_expired=30)
        recent = _create_verification("+14155550002", hours_expired=2)
        out = StringIO()

        call_command("cleanup_verifications", stdout=out)

        assert not Verification.objects.filter(id=old.id).exists()
        assert Verification.objects.filter(id=recent.id).exists()
        assert "Successfully deleted 1 expired verifications" in out.getvalue()

    def test_hours_option(self):
        _create_verification("+14155550001", hours_expired=2)

        call_command("cleanup_verifications", "--hours=1", stdout=StringIO())

        assert not Verification.objects.exists()

    def test_dry_run_keeps_rows(self):
        _create_verification("+14155550001", hours_expired=30)
        out = StringIO()

        call_command("cleanup_verifications", "--dry-run", stdout=out)

        assert Verification.objects.count() == 1
        assert "[DRY RUN] Would delete 1 expired verifications" in out.getvalue()
