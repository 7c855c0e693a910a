"""
Recipe, Ingredient and stage models.

Recipe = one baking formula with up to five ingredient sections
(liquid starter, main dough, filling, decoration, custom), shown in a
per-recipe order.
Ingredient = one line of a section (amount may be a number or a
sentinel such as "to taste").
FermentationStage / BakingStage = ordered process notes.
"""

import logging
import uuid
from collections import defaultdict
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models, transaction
from django.db.models import Q
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from simple_history.models import HistoricalRecords
from taggit.managers import TaggableManager

from bakebox.exceptions import BakeboxError
from bakebox.services import scaling

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "all"


def default_sections_order() -> list[str]:
    return list(scaling.DEFAULT_SECTIONS_ORDER)


def normalize_amount(value) -> str:
    """Store numbers compactly (500 -> "500", 12.50 -> "12.5"), keep text as typed."""
    if value is None:
        return ""
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        number = scaling.to_decimal(value)
        if number is None:
            return ""
        text = f"{number:f}"
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text or "0"
    return str(value).strip()


def parse_tags(value) -> list[str]:
    """Split free-text tags on ASCII or full-width commas."""
    if isinstance(value, (list, tuple)):
        items = value
    else:
        items = str(value or "").replace("，", ",").split(",")
    return [str(tag).strip() for tag in items if str(tag).strip()]


class SectionKey(models.TextChoices):
    """Ingredient sections."""

    LIQUID_STARTER = scaling.LIQUID_STARTER, _("Liquid starter")
    MAIN = scaling.MAIN, _("Main dough")
    FILLING = scaling.FILLING, _("Filling")
    DECORATION = scaling.DECORATION, _("Decoration / topping")
    CUSTOM = scaling.CUSTOM, _("Other")


class RecipeQuerySet(models.QuerySet):
    def search(self, query: str = "", category: str | None = None):
        """
        Case-insensitive match on title or master, optional category name.

        Newest first.
        """
        qs = self
        query = (query or "").strip()
        if query:
            qs = qs.filter(Q(title__icontains=query) | Q(master__icontains=query))
        if category and category != ALL_CATEGORIES:
            qs = qs.filter(category__name=category)
        return qs.order_by("-created_at")


class Recipe(models.Model):
    """
    Baking formula.

    Define:
    - Ingredient sections and their display order
    - Yield (quantity) used as scaling reference
    - Fermentation and baking stages
    - Execution journal (ExecutionLog)
    """

    # UUID for external references
    uuid = models.UUIDField(
        default=uuid.uuid4,
        editable=False,
        unique=True,
        verbose_name=_("UUID"),
    )

    # Identification
    title = models.CharField(
        max_length=200,
        verbose_name=_("Title"),
    )
    master = models.CharField(
        max_length=200,
        blank=True,
        verbose_name=_("Master"),
        help_text=_("Teacher or author the recipe comes from"),
    )
    source_name = models.CharField(max_length=200, blank=True, verbose_name=_("Source"))
    source_url = models.CharField(max_length=500, blank=True, verbose_name=_("Source URL"))
    source_date = models.DateField(null=True, blank=True, verbose_name=_("Source date"))
    record_date = models.DateField(
        null=True,
        blank=True,
        default=timezone.localdate,
        verbose_name=_("Record date"),
    )

    category = models.ForeignKey(
        "bakebox.Category",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="recipes",
        verbose_name=_("Category"),
    )

    # Yield and geometry
    quantity = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("1"),
        verbose_name=_("Quantity"),
        help_text=_("Pieces or batches produced by this formula"),
    )
    mold_name = models.CharField(max_length=200, blank=True, verbose_name=_("Mold"))
    dough_weight = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0"), verbose_name=_("Dough weight")
    )
    crust_weight = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0"), verbose_name=_("Crust weight")
    )
    oil_paste_weight = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0"), verbose_name=_("Oil paste weight")
    )
    filling_weight = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0"), verbose_name=_("Filling weight")
    )

    # Sections
    main_section_name = models.CharField(
        max_length=100, default="Main dough", blank=True, verbose_name=_("Main section name")
    )
    liquid_starter_name = models.CharField(
        max_length=100,
        default="Liquid starter / old dough",
        blank=True,
        verbose_name=_("Liquid starter name"),
    )
    custom_section_name = models.CharField(
        max_length=100, default="Other", blank=True, verbose_name=_("Custom section name")
    )
    sections_order = models.JSONField(
        default=default_sections_order,
        blank=True,
        verbose_name=_("Sections order"),
        help_text=_("Permutation of: liquid_starter, main, filling, decoration, custom"),
    )

    description = models.TextField(blank=True, verbose_name=_("Description"))
    instructions = models.JSONField(
        default=list,
        blank=True,
        verbose_name=_("Instructions"),
        help_text=_("Ordered list of steps"),
    )
    notes = models.TextField(blank=True, verbose_name=_("Notes"))
    image_url = models.TextField(
        blank=True,
        verbose_name=_("Image"),
        help_text=_("http(s) or data: URL"),
    )

    is_baking_recipe = models.BooleanField(
        default=True,
        verbose_name=_("Baking recipe"),
        help_text=_("Show baker's percentages"),
    )
    is_tried = models.BooleanField(default=False, verbose_name=_("Tried"))

    tags = TaggableManager(blank=True, verbose_name=_("Tags"))

    # Timestamps
    created_at = models.DateTimeField(default=timezone.now, verbose_name=_("created at"))
    updated_at = models.DateTimeField(auto_now=True, verbose_name=_("updated at"))

    # History (data: URLs are large)
    history = HistoricalRecords(excluded_fields=["image_url"])

    objects = RecipeQuerySet.as_manager()

    class Meta:
        db_table = "bakebox_recipe"
        verbose_name = _("Recipe")
        verbose_name_plural = _("Recipes")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["title"], name="bakebox_recipe_title_idx"),
            models.Index(fields=["created_at"], name="bakebox_recipe_created_idx"),
        ]

    def clean(self):
        super().clean()
        if self.quantity is not None and self.quantity <= 0:
            raise ValidationError({"quantity": _("Must be greater than zero.")})
        order = self.sections_order
        if (
            not isinstance(order, list)
            or not all(isinstance(key, str) for key in order)
            or sorted(order) != sorted(scaling.DEFAULT_SECTIONS_ORDER)
        ):
            raise ValidationError({
                "sections_order": _("Must list each section exactly once.")
            })
        if not isinstance(self.instructions, list):
            raise ValidationError({"instructions": _("Must be a list of steps.")})
        for i, step in enumerate(self.instructions):
            if not isinstance(step, str):
                raise ValidationError({
                    "instructions": _(f"Step {i+1} must be text.")
                })

    def save(self, *args, **kwargs):
        self.full_clean()
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return self.title

    # ── Sections ──

    def section_titles(self) -> dict[str, str]:
        return {
            scaling.LIQUID_STARTER: self.liquid_starter_name or str(SectionKey.LIQUID_STARTER.label),
            scaling.MAIN: self.main_section_name or str(SectionKey.MAIN.label),
            scaling.FILLING: str(SectionKey.FILLING.label),
            scaling.DECORATION: str(SectionKey.DECORATION.label),
            scaling.CUSTOM: self.custom_section_name or str(SectionKey.CUSTOM.label),
        }

    def sections(self) -> dict[str, list["Ingredient"]]:
        """Ingredients grouped by section, keys in display order."""
        grouped = defaultdict(list)
        for ingredient in self.ingredients.all():
            grouped[str(ingredient.section)].append(ingredient)
        return {key: grouped.get(key, []) for key in self.sections_order}

    def move_section(self, index: int, direction: str) -> list[str]:
        """Swap the section at ``index`` with its neighbour; edges are no-ops."""
        if direction not in ("up", "down"):
            raise BakeboxError("INVALID_DIRECTION", direction=direction)

        order = list(self.sections_order)
        other = index - 1 if direction == "up" else index + 1
        if 0 <= index < len(order) and 0 <= other < len(order):
            order[index], order[other] = order[other], order[index]
            self.sections_order = order
            self.save(update_fields=["sections_order", "updated_at"])

        return order

    @transaction.atomic
    def replace_ingredients(self, rows) -> list["Ingredient"]:
        """
        Replace all ingredients.

        rows: iterable of dicts with section, name, amount, unit, is_flour.
        Position follows the row order inside each section.
        """
        self.ingredients.all().delete()
        positions = defaultdict(int)
        created = []
        for row in rows:
            section = str(row.get("section") or scaling.MAIN)
            created.append(
                Ingredient(
                    recipe=self,
                    section=section,
                    position=positions[section],
                    name=row.get("name") or "",
                    amount=normalize_amount(row.get("amount")),
                    unit=row.get("unit") if row.get("unit") is not None else "g",
                    is_flour=bool(row.get("is_flour")),
                )
            )
            positions[section] += 1
        for ingredient in created:
            ingredient.full_clean(exclude=["recipe"])
        return Ingredient.objects.bulk_create(created)

    @transaction.atomic
    def replace_fermentation_stages(self, rows) -> list["FermentationStage"]:
        self.fermentation_stages.all().delete()
        return FermentationStage.objects.bulk_create(
            FermentationStage(recipe=self, position=i, **row) for i, row in enumerate(rows)
        )

    @transaction.atomic
    def replace_baking_stages(self, rows) -> list["BakingStage"]:
        self.baking_stages.all().delete()
        return BakingStage.objects.bulk_create(
            BakingStage(recipe=self, position=i, **row) for i, row in enumerate(rows)
        )

    # ── Scaling ──

    def scale(self, target_quantity=None, source_mold=None, target_mold=None):
        """
        Convert ingredients to a new yield.

        With two molds the target quantity comes from their volume ratio
        and ``target_quantity`` is ignored. Without a target the recipe is
        shown at its own yield, as it is for a non-positive target.

        Returns:
            ScalingResult
        """
        from bakebox.results import ScalingResult

        source_quantity = self.quantity or Decimal("1")
        mold_factor = None

        if source_mold is not None and target_mold is not None:
            mold_factor = scaling.compute_mold_factor(source_mold, target_mold)
            target_quantity = scaling.target_quantity_for_mold(source_quantity, mold_factor)
        elif target_quantity is None:
            target_quantity = source_quantity

        target = scaling.to_decimal(target_quantity)
        if target is None or target <= 0:
            target = source_quantity
        factor = scaling.compute_yield_factor(source_quantity, target)

        sections = scaling.scale_sections(
            self.sections(),
            self.sections_order,
            factor,
            show_percentages=self.is_baking_recipe,
            titles=self.section_titles(),
        )

        logger.debug(
            f"Scaled {self.title} x{factor}",
            extra={"recipe": str(self.uuid), "factor": str(factor)},
        )

        return ScalingResult(
            factor=factor,
            source_quantity=source_quantity,
            target_quantity=target,
            sections=sections,
            mold_factor=mold_factor,
        )

    # ── Journal ──

    def add_log(self, feedback: str, rating: int = 5, date=None, photo_url: str = ""):
        """
        Add an execution log entry (newest first).

        Raises:
            BakeboxError: EMPTY_FEEDBACK, INVALID_RATING
        """
        from bakebox.models.log import ExecutionLog
        from bakebox.signals import execution_logged

        feedback = (feedback or "").strip()
        if not feedback:
            raise BakeboxError("EMPTY_FEEDBACK", recipe=str(self.uuid))
        if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
            raise BakeboxError("INVALID_RATING", rating=rating)

        log = ExecutionLog.objects.create(
            recipe=self,
            date=date or timezone.localdate(),
            rating=rating,
            feedback=feedback,
            photo_url=photo_url or "",
        )

        logger.info(
            f"Logged execution of {self.title}",
            extra={"recipe": str(self.uuid), "rating": rating},
        )

        execution_logged.send(sender=self.__class__, recipe=self, log=log)
        return log


class Ingredient(models.Model):
    """
    Ingredient line of a recipe section.

    amount holds what the baker typed: "500", "12.5" or a sentinel such
    as "to taste". Only the numeric part takes part in scaling.
    """

    recipe = models.ForeignKey(
        Recipe,
        on_delete=models.CASCADE,
        related_name="ingredients",
        verbose_name=_("Recipe"),
    )
    section = models.CharField(
        max_length=20,
        choices=SectionKey.choices,
        default=SectionKey.MAIN,
        verbose_name=_("Section"),
    )
    position = models.PositiveSmallIntegerField(default=0, verbose_name=_("Position"))
    name = models.CharField(max_length=200, blank=True, verbose_name=_("Name"))
    amount = models.CharField(
        max_length=50,
        blank=True,
        default="0",
        verbose_name=_("Amount"),
        help_text=_("Number or free text such as 'to taste'"),
    )
    unit = models.CharField(max_length=20, blank=True, default="g", verbose_name=_("Unit"))
    is_flour = models.BooleanField(
        default=False,
        verbose_name=_("Flour"),
        help_text=_("Counts towards the 100% base"),
    )

    class Meta:
        db_table = "bakebox_ingredient"
        verbose_name = _("Ingredient")
        verbose_name_plural = _("Ingredients")
        ordering = ["recipe", "section", "position", "id"]
        indexes = [
            models.Index(fields=["recipe", "section"], name="bakebox_ingr_recipe_sect_idx"),
        ]

    def __str__(self) -> str:
        unit_str = "" if scaling.is_unitless(self.amount) else self.unit
        return f"{self.name} ({self.amount}{unit_str})"

    @property
    def numeric_amount(self) -> Decimal | None:
        return scaling.parse_amount(self.amount)


class TimeUnit(models.TextChoices):
    MINUTES = "min", _("min")
    HOURS = "hr", _("hr")


class FermentationStage(models.Model):
    """Fermentation step (time, temperature, humidity as typed)."""

    recipe = models.ForeignKey(
        Recipe,
        on_delete=models.CASCADE,
        related_name="fermentation_stages",
        verbose_name=_("Recipe"),
    )
    position = models.PositiveSmallIntegerField(default=0, verbose_name=_("Position"))
    name = models.CharField(max_length=100, blank=True, verbose_name=_("Name"))
    time = models.CharField(max_length=50, blank=True, verbose_name=_("Time"))
    time_unit = models.CharField(
        max_length=3,
        choices=TimeUnit.choices,
        default=TimeUnit.MINUTES,
        verbose_name=_("Time unit"),
    )
    temperature = models.CharField(max_length=50, blank=True, verbose_name=_("Temperature"))
    humidity = models.CharField(max_length=50, blank=True, verbose_name=_("Humidity"))

    class Meta:
        db_table = "bakebox_fermentation_stage"
        verbose_name = _("Fermentation stage")
        verbose_name_plural = _("Fermentation stages")
        ordering = ["recipe", "position", "id"]

    def __str__(self) -> str:
        return self.name or f"#{self.position + 1}"


class BakingStage(models.Model):
    """Baking step with top and bottom heat."""

    recipe = models.ForeignKey(
        Recipe,
        on_delete=models.CASCADE,
        related_name="baking_stages",
        verbose_name=_("Recipe"),
    )
    position = models.PositiveSmallIntegerField(default=0, verbose_name=_("Position"))
    name = models.CharField(max_length=100, blank=True, verbose_name=_("Name"))
    top_heat = models.CharField(max_length=50, blank=True, verbose_name=_("Top heat"))
    bottom_heat = models.CharField(max_length=50, blank=True, verbose_name=_("Bottom heat"))
    time = models.CharField(max_length=50, blank=True, verbose_name=_("Time"))
    note = models.CharField(max_length=200, blank=True, verbose_name=_("Note"))

    class Meta:
        db_table = "bakebox_baking_stage"
        verbose_name = _("Baking stage")
        verbose_name_plural = _("Baking stages")
        ordering = ["recipe", "position", "id"]

    def __str__(self) -> str:
        return self.name or f"#{self.position + 1}"
