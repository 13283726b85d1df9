"""
Management command to delete expired verification codes.

Verification flows never purge expired rows themselves; run this
periodically via cron or scheduled task.
Example: ./manage.py cleanup_verifications --hours 24
"""

from django.core.management.base import BaseCommand

from apps.phone_number.services import cleanup_expired_verifications


class Command(BaseCommand):
    help = "Delete verification codes that expired more than the given number of hours ago"

    def add_arguments(self, parser):
        parser.add_argument(
            "--hours",
            type=int,
            default=24,
            help="Delete codes expired for longer than this many hours (default: 24)",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Show what would be deleted without actually deleting",
        )

    def handle(self, *args, **options):
        hours = options["hours"]

        if options["dry_run"]:
            count = cleanup_expired_verifications(hours=hours, dry_run=True)
            self.stdout.write(
                self.style.WARNING(f"[DRY RUN] Would delete {count} expired verifications")
            )
            return

        deleted = cleanup_expired_verifications(hours=hours)
        self.stdout.write(self.style.SUCCESS(f"Successfully deleted {deleted} expired verifications"))
