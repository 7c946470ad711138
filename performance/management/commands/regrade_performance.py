from django.core.management.base import BaseCommand
from django.db import transaction

from performance.grading import grade_for_total
from performance.models import Performance


class Command(BaseCommand):
    help = "Recompute every performance grade from its theory and practical marks"

    def add_arguments(self, parser):
        parser.add_argument("--dry-run", action="store_true", help="Report changes without saving them")

    def handle(self, *args, **options):
        dry_run = options["dry_run"]
        changed = 0
        with transaction.atomic():
            for record in Performance.objects.select_for_update().order_by("id"):
                grade = grade_for_total(record.total)
                if record.grade == grade:
                    continue
                changed += 1
                self.stdout.write(f"Performance {record.pk}: {record.grade or '-'} -> {grade} (total {record.total})")
                if not dry_run:
                    record.grade = grade
                    record.save(update_fields=["grade", "updated_at"])
        verb = "would change" if dry_run else "updated"
        self.stdout.write(self.style.SUCCESS(f"Regrade complete: {changed} record(s) {verb}"))
