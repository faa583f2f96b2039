"""Management command to delete a customer's reward ledger."""

from django.core.management.base import BaseCommand, CommandError

from laundryman.contrib.rewards.service import RewardService


class Command(BaseCommand):
    help = "Delete the reward ledger (current cycle and history) of a customer"

    def add_arguments(self, parser):
        parser.add_argument("customer_code", help="Customer code, e.g. PL24")

    def handle(self, *args, **options):
        code = options["customer_code"]
        if not RewardService.reset_ledger(code):
            raise CommandError(f"No reward ledger for customer '{code}'.")
        self.stdout.write(self.style.SUCCESS(f"Reward ledger of {code} deleted."))
