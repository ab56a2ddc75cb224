from django.core.management.base import BaseCommand

from orders.services.factory import build_sweeper


class Command(BaseCommand):
    help = "Expire pending orders whose payment deadline has passed (one sweep)."

    def handle(self, *args, **options):
        result = build_sweeper().sweep()
        for order_number in result.expired:
            self.stdout.write(f"Expired {order_number}")
        for order_number, error in result.failed.items():
            self.stderr.write(f"Failed {order_number}: {error}")
        self.stdout.write(
            self.style.SUCCESS(
                f"Scanned {result.scanned}: {len(result.expired)} expired, "
                f"{len(result.skipped)} skipped, {len(result.failed)} failed"
            )
        )
