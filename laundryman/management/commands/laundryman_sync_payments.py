"""Management command to reconcile pending mobile money payments."""

from django.core.management.base import BaseCommand

from laundryman.services import payment


class Command(BaseCommand):
    help = "Ask the payment provider for the status of PENDING transactions"

    def add_arguments(self, parser):
        parser.add_argument(
            "--limit",
            type=int,
            default=None,
            help="Maximum number of transactions to check",
        )

    def handle(self, *args, **options):
        updated = payment.sync_pending(limit=options["limit"])
        self.stdout.write(self.style.SUCCESS(f"Updated {updated} transactions."))
