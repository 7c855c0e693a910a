"""
Export the whole box to a JSON backup file.

Usage:
    python manage.py bakebox_export
    python manage.py bakebox_export backups/box.json
    python manage.py bakebox_export -   # stdout
"""

import json
from pathlib import Path

from django.core.management.base import BaseCommand

from bakebox.services.backup import backup_filename, export_backup


class Command(BaseCommand):
    help = "Export recipes, categories, knowledge and resources as JSON"

    def add_arguments(self, parser):
        parser.add_argument(
            "path",
            nargs="?",
            help="Output file (default: bakebox-backup_<date>.json, '-' for stdout)",
        )
        parser.add_argument("--indent", type=int, default=2)

    def handle(self, *args, **options):
        data = export_backup()
        text = json.dumps(data, ensure_ascii=False, indent=options["indent"])

        if options["path"] == "-":
            self.stdout.write(text)
            return

        path = Path(options["path"] or backup_filename())
        path.write_text(text, encoding="utf-8")
        self.stdout.write(
            self.style.SUCCESS(f"✓ Exported {len(data['recipes'])} recipes to {path}")
        )
