"""
Load the default categories and a starter knowledge note.

Existing records are kept; only missing ones are created.

Usage:
    python manage.py load_bakebox_defaults
"""

from django.core.management.base import BaseCommand

DEFAULT_CATEGORIES = (
    "Bread",
    "Cake",
    "Pudding",
    "Cookie",
    "Tart",
    "Chinese pastry",
    "Jelly",
    "Candy",
)

STARTER_NOTE = {
    "title": "Baker's percentage",
    "content": (
        "Flour is always 100%. Every other ingredient is expressed as a "
        "percentage of the total flour weight, so 500 g flour and 350 g "
        "water is a 70% hydration dough. Scaling a formula keeps the "
        "percentages and changes only the weights."
    ),
}


class Command(BaseCommand):
    help = "Create default recipe categories and a starter knowledge note"

    def handle(self, *args, **options):
        from bakebox.models import Category, Knowledge

        created = 0
        for name in DEFAULT_CATEGORIES:
            if not Category.objects.filter(name=name).exists():
                Category.append(name)
                created += 1
        self.stdout.write(f"   categories: {created} created")

        if not Knowledge.objects.filter(title=STARTER_NOTE["title"]).exists():
            Knowledge.objects.create(**STARTER_NOTE)
            self.stdout.write("   knowledge: starter note created")

        self.stdout.write(self.style.SUCCESS("✓ Defaults loaded"))
