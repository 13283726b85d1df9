"""
Admin configuration for phone number verifications.
"""

from django.contrib import admin

from apps.phone_number.models import Verification


@admin.register(Verification)
class VerificationAdmin(admin.ModelAdmin):
    """Admin for pending verification codes."""

    list_display = [
        "id",
        "identifier_masked",
        "is_recovery_display",
        "is_expired_display",
        "expires_at",
        "created_at",
    ]
    list_filter = ["expires_at", "created_at"]
    search_fields = ["identifier"]
    # Codes are never shown in the admin
    exclude = ["value"]
    readonly_fields = ["identifier", "expires_at", "created_at", "updated_at"]

    def identifier_masked(self, obj: Verification) -> str:
        """Show only last 4 digits of phone for privacy."""
        return obj.masked_identifier

    identifier_masked.short_description = "Phone"  # type: ignore[attr-defined]

    def is_recovery_display(self, obj: Verification) -> bool:
        return obj.is_recovery

    is_recovery_display.short_description = "Password reset"  # type: ignore[attr-defined]
    is_recovery_display.boolean = True  # type: ignore[attr-defined]

    def is_expired_display(self, obj: Verification) -> bool:
        """Display expired status."""
        return obj.is_expired

    is_expired_display.short_description = "Expired"  # type: ignore[attr-defined]
    is_expired_display.boolean = True  # type: ignore[attr-defined]

    def has_add_permission(self, request) -> bool:  # type: ignore[no-untyped-def]
        return False
