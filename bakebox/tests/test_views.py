"""
Tests for the printable recipe view, template filters and admin pages.
"""

from decimal import Decimal

import pytest
from django.urls import reverse

from bakebox.results import ScaledIngredient
from bakebox.templatetags.bakebox_filters import amount, percent

pytestmark = pytest.mark.urls("bakebox.tests.test_api_urls")


class TestFilters:
    def test_percent(self):
        assert percent(Decimal("70")) == "70.0%"
        assert percent(Decimal("100.0")) == "100.0%"
        assert percent(None) == ""

    def test_amount_with_unit(self):
        assert amount(ScaledIngredient("flour", "600", "g")) == "600 g"

    def test_amount_sentinel_alone(self):
        assert amount(ScaledIngredient("salt", "to taste", "")) == "to taste"
        assert amount(ScaledIngredient("salt", "適量", "g")) == "適量"


@pytest.mark.django_db
class TestPrintView:
    def test_requires_staff(self, client, recipe):
        url = reverse("bakebox:recipe_print", kwargs={"uuid": recipe.uuid})
        response = client.get(url)
        assert response.status_code == 302

    def test_renders_recipe(self, admin_client, recipe):
        url = reverse("bakebox:recipe_print", kwargs={"uuid": recipe.uuid})
        response = admin_client.get(url)

        assert response.status_code == 200
        content = response.content.decode()
        assert "Milk loaf" in content
        assert "400 g" in content
        assert "70.0%" in content
        assert "to taste" in content
        assert response.context["result"].factor == 1
        assert response.context["is_scaled"] is False

    def test_scaled(self, admin_client, recipe):
        url = reverse("bakebox:recipe_print", kwargs={"uuid": recipe.uuid})
        response = admin_client.get(url, {"target_quantity": "6"})

        content = response.content.decode()
        assert "600 g" in content
        assert "420 g" in content
        assert "150 g" in content
        assert response.context["is_scaled"] is True

    def test_scaled_by_mold_presets(self, admin_client, recipe):
        url = reverse("bakebox:recipe_print", kwargs={"uuid": recipe.uuid})
        response = admin_client.get(
            url,
            {"source_mold": "12-tael loaf pan (20x10x10)", "target_mold": "24-tael loaf pan (32x10x10)"},
        )
        assert response.context["result"].mold_factor == Decimal("1.6")

    def test_base_unit_from_ingredient(self, admin_client, recipe):
        recipe.replace_ingredients([
            {"section": "main", "name": "egg", "amount": 3, "unit": "pcs"},
            {"section": "main", "name": "sugar", "amount": 2, "unit": "tbsp"},
        ])
        url = reverse("bakebox:recipe_print", kwargs={"uuid": recipe.uuid})

        content = admin_client.get(url).content.decode()

        assert "100% = 3 pcs egg" in content
        assert " g egg" not in content

    def test_bad_target_ignored(self, admin_client, recipe):
        url = reverse("bakebox:recipe_print", kwargs={"uuid": recipe.uuid})
        response = admin_client.get(url, {"target_quantity": "-3"})

        assert response.status_code == 200
        assert response.context["result"].factor == 1

    def test_unknown_recipe(self, admin_client):
        url = reverse("bakebox:recipe_print", kwargs={"uuid": "00000000-0000-0000-0000-000000000000"})
        assert admin_client.get(url).status_code == 404


@pytest.mark.django_db
class TestAdmin:
    @pytest.mark.parametrize(
        "model", ["recipe", "category", "executionlog", "knowledge", "resource"]
    )
    def test_changelist(self, admin_client, recipe, model):
        response = admin_client.get(reverse(f"admin:bakebox_{model}_changelist"))
        assert response.status_code == 200

    def test_recipe_change_page(self, admin_client, recipe):
        response = admin_client.get(reverse("admin:bakebox_recipe_change", args=[recipe.pk]))

        assert response.status_code == 200
        assert reverse("bakebox:recipe_print", kwargs={"uuid": recipe.uuid}) in response.content.decode()

    def test_recipe_history_page(self, admin_client, recipe):
        response = admin_client.get(reverse("admin:bakebox_recipe_history", args=[recipe.pk]))
        assert response.status_code == 200
