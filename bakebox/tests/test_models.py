"""
Tests for Bakebox models: Recipe, Ingredient, Category, ExecutionLog.
"""

from datetime import date
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError

from bakebox.exceptions import BakeboxError
from bakebox.models import Category, ExecutionLog, Ingredient, Recipe
from bakebox.models.recipe import normalize_amount, parse_tags
from bakebox.services.scaling import DEFAULT_SECTIONS_ORDER, get_mold_preset


# ═══════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════


class TestHelpers:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (500, "500"),
            (12.5, "12.5"),
            (Decimal("12.50"), "12.5"),
            (Decimal("3.000"), "3"),
            ("  to taste ", "to taste"),
            (None, ""),
        ],
    )
    def test_normalize_amount(self, value, expected):
        assert normalize_amount(value) == expected

    def test_parse_tags_handles_full_width_commas(self):
        assert parse_tags("soft, 台式，milk ,") == ["soft", "台式", "milk"]
        assert parse_tags(["a", " ", "b"]) == ["a", "b"]


# ═══════════════════════════════════════════════════════════════════
# Recipe validation
# ═══════════════════════════════════════════════════════════════════


@pytest.mark.django_db
class TestRecipeValidation:
    def test_defaults(self):
        r = Recipe.objects.create(title="Scones")

        assert r.quantity == Decimal("1")
        assert r.sections_order == list(DEFAULT_SECTIONS_ORDER)
        assert r.instructions == []
        assert r.is_baking_recipe is True
        assert r.is_tried is False
        assert r.record_date is not None

    @pytest.mark.parametrize("quantity", [Decimal("0"), Decimal("-1")])
    def test_quantity_must_be_positive(self, quantity):
        with pytest.raises(ValidationError) as exc:
            Recipe.objects.create(title="Bad", quantity=quantity)
        assert "quantity" in exc.value.message_dict

    @pytest.mark.parametrize(
        "order",
        [
            ["main"],
            ["main", "main", "filling", "decoration", "custom"],
            ["main", "liquid_starter", "filling", "decoration", 3],
            "main,filling",
        ],
    )
    def test_sections_order_must_be_permutation(self, order):
        with pytest.raises(ValidationError) as exc:
            Recipe.objects.create(title="Bad", sections_order=order)
        assert "sections_order" in exc.value.message_dict

    def test_instructions_must_be_text(self):
        with pytest.raises(ValidationError) as exc:
            Recipe.objects.create(title="Bad", instructions=["Mix", 2])
        assert "instructions" in exc.value.message_dict

    def test_history_tracks_changes(self, recipe):
        recipe.title = "Hokkaido milk loaf"
        recipe.save()

        assert recipe.history.count() == 2
        assert recipe.history.first().title == "Hokkaido milk loaf"

    def test_history_skips_image(self, recipe):
        historical = recipe.history.model
        assert "image_url" not in [f.name for f in historical._meta.get_fields()]

    def test_tags(self, recipe):
        recipe.tags.set(["soft", "milk"])
        assert sorted(recipe.tags.names()) == ["milk", "soft"]


# ═══════════════════════════════════════════════════════════════════
# Sections and ingredients
# ═══════════════════════════════════════════════════════════════════


@pytest.mark.django_db
class TestSections:
    def test_sections_grouped_in_display_order(self, recipe):
        sections = recipe.sections()

        assert list(sections) == list(DEFAULT_SECTIONS_ORDER)
        assert [i.name for i in sections["main"]] == ["flour", "water", "salt"]
        assert [i.name for i in sections["filling"]] == ["custard"]
        assert sections["liquid_starter"] == []

    def test_replace_ingredients_positions_per_section(self, recipe):
        main = list(recipe.ingredients.filter(section="main"))
        filling = recipe.ingredients.get(section="filling")

        assert [i.position for i in main] == [0, 1, 2]
        assert filling.position == 0
        assert main[0].amount == "400"
        assert main[0].numeric_amount == Decimal("400")
        assert main[2].numeric_amount is None

    def test_replace_ingredients_replaces(self, recipe):
        recipe.replace_ingredients([{"name": "butter", "amount": "12.5"}])

        assert recipe.ingredients.count() == 1
        butter = recipe.ingredients.get()
        assert butter.section == "main"
        assert butter.unit == "g"

    def test_replace_ingredients_rejects_bad_section(self, recipe):
        with pytest.raises(ValidationError):
            recipe.replace_ingredients([{"section": "topping", "name": "x", "amount": 1}])
        assert recipe.ingredients.count() == 4

    def test_ingredient_str_hides_unit_for_sentinels(self, recipe):
        salt = recipe.ingredients.get(name="salt")
        assert str(salt) == "salt (to taste)"

    def test_section_titles_follow_custom_names(self, recipe):
        recipe.main_section_name = "Tangzhong dough"
        titles = recipe.section_titles()
        assert titles["main"] == "Tangzhong dough"
        assert titles["filling"] == "Filling"

    def test_move_section_up(self, recipe):
        order = recipe.move_section(1, "up")

        assert order[:2] == ["main", "liquid_starter"]
        recipe.refresh_from_db()
        assert recipe.sections_order == order

    def test_move_section_edges_are_noops(self, recipe):
        assert recipe.move_section(0, "up") == list(DEFAULT_SECTIONS_ORDER)
        assert recipe.move_section(4, "down") == list(DEFAULT_SECTIONS_ORDER)
        assert recipe.move_section(9, "down") == list(DEFAULT_SECTIONS_ORDER)

    def test_move_section_invalid_direction(self, recipe):
        with pytest.raises(BakeboxError) as exc:
            recipe.move_section(1, "left")
        assert exc.value.code == "INVALID_DIRECTION"

    def test_stages(self, recipe):
        recipe.replace_fermentation_stages([
            {"name": "Bulk", "time": "60", "time_unit": "min", "temperature": "28", "humidity": "75"},
            {"name": "Proof", "time": "1", "time_unit": "hr", "temperature": "35", "humidity": "85"},
        ])
        recipe.replace_baking_stages([{"name": "Bake", "top_heat": "170", "bottom_heat": "200", "time": "30"}])

        assert [s.name for s in recipe.fermentation_stages.all()] == ["Bulk", "Proof"]
        assert [s.position for s in recipe.fermentation_stages.all()] == [0, 1]
        assert recipe.baking_stages.get().bottom_heat == "200"


# ═══════════════════════════════════════════════════════════════════
# Scaling
# ═══════════════════════════════════════════════════════════════════


@pytest.mark.django_db
class TestRecipeScale:
    def test_scale_four_to_six(self, recipe):
        result = recipe.scale(target_quantity=6)

        assert result.factor == Decimal("1.5")
        assert result.source_quantity == Decimal("4")
        main, filling = result.sections
        flour, water, salt = main.ingredients

        assert (flour.display_amount, flour.percent_text) == ("600", "100.0%")
        assert (water.display_amount, water.percent_text) == ("420", "70.0%")
        assert (salt.display_amount, salt.unit, salt.percent) == ("to taste", "", None)
        assert filling.is_fixed
        assert filling.ingredients[0].display_amount == "150"

    def test_scale_without_target_is_identity(self, recipe):
        result = recipe.scale()

        assert result.factor == 1
        assert result.target_quantity == Decimal("4")
        assert result.sections[0].ingredients[0].display_amount == "400"

    @pytest.mark.parametrize("target", [0, -2, "-0.5"])
    def test_scale_non_positive_target_is_identity(self, recipe, target):
        result = recipe.scale(target_quantity=target)

        assert result.factor == 1
        assert result.target_quantity == Decimal("4")
        assert result.sections[0].ingredients[0].display_amount == "400"

    def test_scale_long_amount(self, recipe):
        recipe.replace_ingredients([{"section": "main", "name": "flour", "amount": "1" * 30, "is_flour": True}])

        result = recipe.scale(target_quantity=6)

        assert result.sections[0].ingredients[0].display_amount.startswith("1666666")

    def test_scale_by_molds(self, recipe):
        source = get_mold_preset("12-tael loaf pan (20x10x10)")
        target = get_mold_preset("24-tael loaf pan (32x10x10)")

        result = recipe.scale(target_quantity=99, source_mold=source, target_mold=target)

        assert result.mold_factor == Decimal("1.6")
        assert result.target_quantity == Decimal("6.40")
        assert result.factor == Decimal("1.6")
        assert result.sections[0].ingredients[0].display_amount == "640"

    def test_scale_non_baking_has_no_percentages(self, recipe):
        recipe.is_baking_recipe = False
        result = recipe.scale(target_quantity=8)

        assert result.sections[0].base is None
        assert result.sections[0].ingredients[0].percent_text is None

    def test_scale_follows_section_order(self, recipe):
        recipe.sections_order = ["filling", "main", "liquid_starter", "decoration", "custom"]
        result = recipe.scale()
        assert [s.key for s in result.sections] == ["filling", "main"]

    def test_as_dict(self, recipe):
        data = recipe.scale(target_quantity=6).as_dict()

        assert data["factor"] == "1.5"
        assert data["sections"][0]["ingredients"][1]["percent_text"] == "70.0%"
        assert data["mold_factor"] is None


# ═══════════════════════════════════════════════════════════════════
# Execution journal
# ═══════════════════════════════════════════════════════════════════


@pytest.mark.django_db
class TestExecutionLog:
    def test_add_log(self, recipe):
        log = recipe.add_log("Good oven spring", rating=4, date=date(2026, 1, 24))

        assert log.recipe == recipe
        assert log.rating == 4
        assert log.date == date(2026, 1, 24)
        assert log.feedback == "Good oven spring"

    def test_add_log_marks_recipe_tried(self, recipe):
        assert recipe.is_tried is False
        recipe.add_log("First try")

        recipe.refresh_from_db()
        assert recipe.is_tried is True

    def test_logs_newest_first(self, recipe):
        first = recipe.add_log("First")
        second = recipe.add_log("Second")

        assert list(recipe.execution_logs.all()) == [second, first]

    @pytest.mark.parametrize("feedback", ["", "   ", None])
    def test_empty_feedback_rejected(self, recipe, feedback):
        with pytest.raises(BakeboxError) as exc:
            recipe.add_log(feedback)
        assert exc.value.code == "EMPTY_FEEDBACK"
        assert ExecutionLog.objects.count() == 0

    @pytest.mark.parametrize("rating", [0, 6, True, "5", 4.5])
    def test_invalid_rating_rejected(self, recipe, rating):
        with pytest.raises(BakeboxError) as exc:
            recipe.add_log("ok", rating=rating)
        assert exc.value.code == "INVALID_RATING"

    def test_logs_deleted_with_recipe(self, recipe):
        recipe.add_log("ok")
        recipe.delete()
        assert ExecutionLog.objects.count() == 0
        assert Ingredient.objects.count() == 0


# ═══════════════════════════════════════════════════════════════════
# Category
# ═══════════════════════════════════════════════════════════════════


@pytest.mark.django_db
class TestCategory:
    @pytest.fixture
    def categories(self):
        return [Category.append(name) for name in ("Bread", "Cake", "Cookie")]

    def test_append_goes_last(self, categories):
        assert [c.order for c in categories] == [0, 1, 2]

    def test_move_down(self, categories):
        bread, cake, cookie = categories
        result = bread.move("down")

        assert [c.name for c in result] == ["Cake", "Bread", "Cookie"]
        assert [c.name for c in Category.objects.all()] == ["Cake", "Bread", "Cookie"]
        assert bread.order == 1

    def test_move_up(self, categories):
        bread, cake, cookie = categories
        cookie.move("up")
        assert [c.name for c in Category.objects.all()] == ["Bread", "Cookie", "Cake"]

    def test_move_at_edges_is_noop(self, categories):
        bread, cake, cookie = categories
        bread.move("up")
        cookie.move("down")
        assert [c.name for c in Category.objects.all()] == ["Bread", "Cake", "Cookie"]

    def test_move_renumbers_gaps(self, categories):
        Category.objects.filter(name="Cookie").update(order=10)
        Category.objects.get(name="Bread").move("up")
        assert [c.order for c in Category.objects.all()] == [0, 1, 2]

    def test_move_invalid_direction(self, categories):
        with pytest.raises(BakeboxError) as exc:
            categories[0].move("sideways")
        assert exc.value.code == "INVALID_DIRECTION"

    def test_delete_keeps_recipes(self, recipe, category):
        category.delete()
        recipe.refresh_from_db()
        assert recipe.category is None


# ═══════════════════════════════════════════════════════════════════
# Search
# ═══════════════════════════════════════════════════════════════════


@pytest.mark.django_db
class TestSearch:
    @pytest.fixture
    def recipes(self, category):
        cake = Category.append("Cake")
        return [
            Recipe.objects.create(title="Milk loaf", master="Chef Wu", category=category),
            Recipe.objects.create(title="Chiffon", master="Chef Lin", category=cake),
            Recipe.objects.create(title="Brioche", master="Wu Pao-chun"),
        ]

    def test_title_case_insensitive(self, recipes):
        assert [r.title for r in Recipe.objects.search("chiffon")] == ["Chiffon"]

    def test_matches_master(self, recipes):
        assert {r.title for r in Recipe.objects.search("wu")} == {"Milk loaf", "Brioche"}

    def test_category_filter(self, recipes):
        assert [r.title for r in Recipe.objects.search(category="Cake")] == ["Chiffon"]

    def test_all_categories(self, recipes):
        assert Recipe.objects.search(category="all").count() == 3

    def test_newest_first(self, recipes):
        assert [r.title for r in Recipe.objects.search()] == ["Brioche", "Chiffon", "Milk loaf"]
