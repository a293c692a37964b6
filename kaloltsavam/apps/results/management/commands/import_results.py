from __future__ import annotations

from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from kaloltsavam.apps.results.exceptions import UploadError
from kaloltsavam.apps.results.importer import EXPECTED_COLUMNS, build_preview, commit_rows


class Command(BaseCommand):
    help = (
        "Import results from a .csv/.xlsx/.xls file "
        f"(columns: {', '.join(EXPECTED_COLUMNS)}; optional: category). "
        "Invalid rows are skipped and reported."
    )

    def add_arguments(self, parser):
        parser.add_argument("path", type=str, help="Path to the results file")
        parser.add_argument("--dry-run", action="store_true", help="Validate only, do not write anything")

    def handle(self, *args, **options):
        path = Path(options["path"])
        dry_run = options.get("dry_run", False)

        if not path.exists():
            raise CommandError(f"File not found: {path}")

        try:
            with path.open("rb") as fp:
                preview = build_preview(fp, path.name)
        except UploadError as e:
            raise CommandError(str(e))

        for msg in preview.messages:
            self.stdout.write(self.style.WARNING(msg))

        self.stdout.write(self.style.SUCCESS(f"Rows read: {preview.total}"))
        self.stdout.write(self.style.SUCCESS(f"VALID: {len(preview.valid)}  ·  SKIPPED: {len(preview.errors)}"))

        if not preview.can_preview:
            raise CommandError("Every row failed validation; nothing to import.")

        if dry_run:
            self.stdout.write(self.style.WARNING("Dry-run: no results were written."))
            return

        report = commit_rows(preview.valid)
        for position, msg in report.failures:
            self.stdout.write(self.style.ERROR(f"Row {position} of the valid set: {msg}"))
        self.stdout.write(self.style.SUCCESS(f"Created: {report.created}  ·  FAILED: {len(report.failures)}"))
