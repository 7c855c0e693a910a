"""
Import a JSON backup, replacing the collections it contains.

Usage:
    python manage.py bakebox_import backups/box.json
"""

import json
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from bakebox.exceptions import BakeboxError
from bakebox.services.backup import import_backup


class Command(BaseCommand):
    help = "Import a JSON backup (collections in the file replace stored ones)"

    def add_arguments(self, parser):
        parser.add_argument("path", help="Backup file written by bakebox_export")

    def handle(self, *args, **options):
        path = Path(options["path"])
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            raise CommandError(f"File not found: {path}")
        except json.JSONDecodeError as e:
            raise CommandError(f"Not valid JSON: {e}")

        try:
            result = import_backup(data)
        except BakeboxError as e:
            raise CommandError(str(e))

        if result.is_empty:
            self.stdout.write(self.style.WARNING("Nothing to import"))
            return

        for name in ("recipes", "categories", "knowledge", "resources"):
            count = getattr(result, name)
            if count is not None:
                self.stdout.write(f"   {name}: {count}")
        self.stdout.write(self.style.SUCCESS(f"✓ Imported {path}"))
