"""
Bakebox Admin — Django admin for recipes, categories, journal and notes.

Recipes carry their ingredients and stages as inlines and expose the
change history through django-simple-history.
"""

from django.contrib import admin
from django.urls import reverse
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _
from simple_history.admin import SimpleHistoryAdmin

from bakebox.models import (
    BakingStage,
    Category,
    ExecutionLog,
    FermentationStage,
    Ingredient,
    Knowledge,
    Recipe,
    Resource,
)


# ── Recipe ──


class IngredientInline(admin.TabularInline):
    """Inline for recipe ingredients."""

    model = Ingredient
    extra = 1
    fields = ("section", "position", "name", "amount", "unit", "is_flour")


class FermentationStageInline(admin.TabularInline):
    model = FermentationStage
    extra = 0
    fields = ("position", "name", "time", "time_unit", "temperature", "humidity")


class BakingStageInline(admin.TabularInline):
    model = BakingStage
    extra = 0
    fields = ("position", "name", "top_heat", "bottom_heat", "time", "note")


class ExecutionLogInline(admin.TabularInline):
    model = ExecutionLog
    extra = 0
    fields = ("date", "rating", "feedback")
    readonly_fields = ("date", "rating", "feedback")
    can_delete = False
    show_change_link = True


@admin.register(Recipe)
class RecipeAdmin(SimpleHistoryAdmin):
    """Admin for recipes."""

    list_display = ("title", "master", "category", "quantity", "is_tried", "created_at")
    list_filter = ("category", "is_tried", "is_baking_recipe")
    search_fields = ("title", "master")
    inlines = [IngredientInline, FermentationStageInline, BakingStageInline, ExecutionLogInline]
    readonly_fields = ("uuid", "created_at", "updated_at", "print_link")

    @admin.display(description=_("Print"))
    def print_link(self, obj):
        if not obj.pk:
            return "-"
        url = reverse("bakebox:recipe_print", kwargs={"uuid": obj.uuid})
        return format_html('<a href="{}" target="_blank">{}</a>', url, _("Printable sheet"))


# ── Category ──


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "order")
    list_editable = ("order",)
    ordering = ("order", "name")


# ── ExecutionLog ──


@admin.register(ExecutionLog)
class ExecutionLogAdmin(admin.ModelAdmin):
    """Admin for the execution journal."""

    list_display = ("recipe", "date", "rating", "created_at")
    list_filter = ("rating", "date")
    raw_id_fields = ("recipe",)
    readonly_fields = ("uuid", "created_at")


# ── Knowledge / Resource ──


@admin.register(Knowledge)
class KnowledgeAdmin(admin.ModelAdmin):
    list_display = ("title", "master", "created_at")
    search_fields = ("title", "content", "master")
    readonly_fields = ("uuid",)


@admin.register(Resource)
class ResourceAdmin(admin.ModelAdmin):
    list_display = ("title", "type", "url", "created_at")
    list_filter = ("type",)
    search_fields = ("title", "url")
    readonly_fields = ("uuid",)
