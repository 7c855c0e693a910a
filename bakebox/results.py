"""
Bakebox Result Types.

Structured results for scaling and backup operations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class SectionBase:
    """100% reference of one ingredient section."""

    value: Decimal
    label: str
    unit: str = ""


@dataclass(frozen=True)
class ScaledIngredient:
    """One ingredient line ready for display."""

    name: str
    display_amount: str
    unit: str
    is_flour: bool = False
    percent: Decimal | None = None

    @property
    def percent_text(self) -> str | None:
        if self.percent is None:
            return None
        return f"{self.percent}%"

    def as_dict(self) -> dict:
        return {
            "name": self.name,
            "display_amount": self.display_amount,
            "unit": self.unit,
            "is_flour": self.is_flour,
            "percent_text": self.percent_text,
        }


@dataclass
class ScaledSection:
    """
    Ingredient section after scaling.

    Fixed sections (filling, decoration, custom) keep factor 1 and
    never carry a base or percentages.
    """

    key: str
    title: str
    factor: Decimal
    is_fixed: bool
    base: SectionBase | None = None
    ingredients: list[ScaledIngredient] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            "key": self.key,
            "title": self.title,
            "factor": str(self.factor),
            "is_fixed": self.is_fixed,
            "base": (
                {"value": str(self.base.value), "label": self.base.label, "unit": self.base.unit}
                if self.base
                else None
            ),
            "ingredients": [line.as_dict() for line in self.ingredients],
        }


@dataclass
class ScalingResult:
    """
    Outcome of converting a recipe to a new yield.

    factor is the yield multiplier applied to scalable sections.
    mold_factor is set only when the target came from two molds.
    """

    factor: Decimal
    source_quantity: Decimal
    target_quantity: Decimal
    sections: list[ScaledSection] = field(default_factory=list)
    mold_factor: Decimal | None = None

    def as_dict(self) -> dict:
        return {
            "factor": str(self.factor),
            "source_quantity": str(self.source_quantity),
            "target_quantity": str(self.target_quantity),
            "mold_factor": None if self.mold_factor is None else str(self.mold_factor),
            "sections": [section.as_dict() for section in self.sections],
        }


@dataclass
class ImportResult:
    """
    Counts of records written by a backup import.

    None means the collection was absent from the payload and left untouched.
    """

    recipes: int | None = None
    categories: int | None = None
    knowledge: int | None = None
    resources: int | None = None

    @property
    def is_empty(self) -> bool:
        return all(
            count is None
            for count in (self.recipes, self.categories, self.knowledge, self.resources)
        )
