# seeds/management/commands/rotate_seeds.py
from django.conf import settings
from django.core.management.base import BaseCommand

from seeds.models import SeedPair
from seeds.services import retire_stale_pairs


class Command(BaseCommand):
    help = "Retire (and reveal) active seed pairs older than the maximum age"

    def add_arguments(self, parser):
        parser.add_argument(
            "--max-age-hours",
            type=int,
            default=settings.SEED_MAX_AGE_HOURS,
            help="Pairs created longer ago than this are rotated",
        )

    def handle(self, *args, **options):
        max_age = options["max_age_hours"]
        rotated = retire_stale_pairs(max_age)

        self.stdout.write(self.style.SUCCESS(
            f"Rotated {rotated} seed pair(s) older than {max_age}h"
        ))
        self.stdout.write(
            f"  active pairs: {SeedPair.objects.filter(status=SeedPair.STATUS_ACTIVE).count()}"
        )
