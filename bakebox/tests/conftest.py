"""
Shared fixtures for Bakebox tests.
"""

from decimal import Decimal

import pytest

from bakebox.conf import reset_image_backend


@pytest.fixture(autouse=True)
def _fresh_image_backend():
    reset_image_backend()
    yield
    reset_image_backend()


@pytest.fixture
def category(db):
    from bakebox.models import Category

    return Category.append("Bread")


@pytest.fixture
def recipe(db, category):
    """Milk loaf: yield 4, main dough with flour 400 / water 280, fixed filling."""
    from bakebox.models import Recipe

    r = Recipe.objects.create(
        title="Milk loaf",
        master="Chef Wu",
        category=category,
        quantity=Decimal("4"),
        instructions=["Mix", "Bulk ferment", "Shape", "Bake"],
    )
    r.replace_ingredients([
        {"section": "main", "name": "flour", "amount": 400, "is_flour": True},
        {"section": "main", "name": "water", "amount": 280},
        {"section": "main", "name": "salt", "amount": "to taste"},
        {"section": "filling", "name": "custard", "amount": 150},
    ])
    return r
