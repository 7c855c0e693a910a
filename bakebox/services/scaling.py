"""
Recipe scaling using yield and mold-volume factors.

Pure functions over already-loaded data: no database access, no Django
imports. Every degenerate input (zero yield, zero-volume mold, missing or
non-numeric amounts) resolves to an identity factor, a base of 1 or "no
percentage" instead of an error, so a recipe can always be displayed.

The baker's-percentage base is computed per ingredient section. A
filling or decoration has no relation to the main dough's flour weight,
so each section gets its own 100% reference.

Usage:
    from bakebox.services.scaling import (
        IngredientLine,
        compute_section_base,
        compute_yield_factor,
        scale_sections,
    )

    main = [
        IngredientLine("flour", 400, is_flour=True),
        IngredientLine("water", 280),
    ]
    factor = compute_yield_factor(4, 6)  # Decimal("1.5")
    sections = scale_sections({"main": main}, ["main"], factor)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable, Mapping, Sequence

from bakebox.protocols.ingredient import IngredientLike
from bakebox.results import ScaledIngredient, ScaledSection, SectionBase

# ── Section keys ──

LIQUID_STARTER = "liquid_starter"
MAIN = "main"
FILLING = "filling"
DECORATION = "decoration"
CUSTOM = "custom"

DEFAULT_SECTIONS_ORDER = (LIQUID_STARTER, MAIN, FILLING, DECORATION, CUSTOM)
SCALABLE_SECTIONS = frozenset({LIQUID_STARTER, MAIN})
FIXED_SECTIONS = frozenset({FILLING, DECORATION, CUSTOM})

# ── Labels and sentinels ──

TOTAL_FLOUR_LABEL = "total flour"
MAIN_INGREDIENT_LABEL = "main ingredient"

# Amounts that read as "use as needed": never scaled, shown without unit.
UNITLESS_AMOUNTS = frozenset({"適量", "少許", "to taste", "a pinch"})

CIRCULAR = "circular"
RECTANGULAR = "rectangular"

PI = Decimal("3.141592653589793238462643383")

_ONE = Decimal("1")
_ZERO = Decimal("0")
_TENTH = Decimal("0.1")
_HUNDREDTH = Decimal("0.01")
_HUNDRED = Decimal("100")

# Products and quotients of numbers within 1e+-99 stay inside the default context.
_MAX_MAGNITUDE = 99

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+))")


@dataclass(frozen=True)
class IngredientLine:
    """Detached ingredient, for callers that do not hold model instances."""

    name: str
    amount: object
    unit: str = "g"
    is_flour: bool = False


@dataclass(frozen=True)
class Mold:
    """
    Mold geometry in consistent length units (usually cm).

    Circular molds use diameter, rectangular molds use length and width.
    Height 0/None means unknown and counts as 1, so two molds without
    height compare by area.
    """

    shape: str = CIRCULAR
    diameter: object = 0
    length: object = 0
    width: object = 0
    height: object = 0
    name: str = ""

    @classmethod
    def from_dict(cls, data: Mapping) -> "Mold":
        """Build from an API payload; accepts "type" as alias of "shape"."""
        return cls(
            shape=data.get("shape") or data.get("type") or CIRCULAR,
            diameter=data.get("diameter") or 0,
            length=data.get("length") or 0,
            width=data.get("width") or 0,
            height=data.get("height") or 0,
            name=data.get("name") or "",
        )

    def as_dict(self) -> dict:
        return {
            "name": self.name,
            "shape": self.shape,
            "diameter": str(self.diameter),
            "length": str(self.length),
            "width": str(self.width),
            "height": str(self.height),
        }


MOLD_PRESETS = (
    Mold(CIRCULAR, diameter=10, height=6, name='4" round (D10 H6)'),
    Mold(CIRCULAR, diameter=15, height="7.5", name='6" round (D15 H7.5)'),
    Mold(CIRCULAR, diameter=20, height=8, name='8" round (D20 H8)'),
    Mold(RECTANGULAR, length=20, width=10, height=10, name="12-tael loaf pan (20x10x10)"),
    Mold(RECTANGULAR, length=32, width=10, height=10, name="24-tael loaf pan (32x10x10)"),
    Mold(RECTANGULAR, length=42, width=33, height=2, name="Half sheet pan (42x33x2)"),
)


def get_mold_preset(name: str) -> Mold | None:
    for mold in MOLD_PRESETS:
        if mold.name == name:
            return mold
    return None


# ══════════════════════════════════════════════════════════════
# NUMBERS
# ══════════════════════════════════════════════════════════════


def to_decimal(value) -> Decimal | None:
    """Convert a number or numeric string to Decimal, None if impossible."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return None
    if not result.is_finite():
        return None
    if result and abs(result.adjusted()) > _MAX_MAGNITUDE:
        return None
    return result


def parse_amount(amount) -> Decimal | None:
    """
    Read the numeric part of an ingredient amount.

    Numbers are taken as-is; strings use their leading number
    ("12.5g" -> 12.5). Sentinels like "to taste" give None.
    """
    if isinstance(amount, str):
        match = _LEADING_NUMBER.match(amount)
        if not match:
            return None
        return to_decimal(match.group(1))
    return to_decimal(amount)


def round_one(value: Decimal) -> Decimal:
    """Half-up to one decimal; values too long to quantize come back as-is."""
    try:
        return value.quantize(_TENTH, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return value


def format_amount(value: Decimal) -> str:
    """One decimal place, trailing ".0" stripped: 600.0 -> "600", 1.25 -> "1.3"."""
    text = f"{round_one(value):f}"
    if text.endswith(".0"):
        text = text[:-2]
    if text == "-0":
        text = "0"
    return text


def is_unitless(amount) -> bool:
    return isinstance(amount, str) and amount.strip().lower() in UNITLESS_AMOUNTS


# ══════════════════════════════════════════════════════════════
# FACTORS
# ══════════════════════════════════════════════════════════════


def compute_yield_factor(source_quantity, target_quantity) -> Decimal:
    """
    Multiplier from the recipe's yield to the wanted yield.

    Returns 1 when the source quantity is missing or <= 0.
    """
    source = to_decimal(source_quantity)
    if source is None or source <= 0:
        return _ONE

    target = to_decimal(target_quantity)
    if target is None:
        return _ONE

    return target / source


def compute_mold_volume(mold: Mold) -> Decimal:
    """
    Volume of a mold; 0 for degenerate geometry.

    Circular: pi * (diameter / 2)^2 * height
    Rectangular: length * width * height
    """
    height = to_decimal(mold.height) or _ZERO
    if height == 0:
        height = _ONE
    if height < 0:
        return _ZERO

    if mold.shape == CIRCULAR:
        diameter = to_decimal(mold.diameter) or _ZERO
        if diameter <= 0:
            return _ZERO
        radius = diameter / 2
        return PI * radius * radius * height

    if mold.shape == RECTANGULAR:
        length = to_decimal(mold.length) or _ZERO
        width = to_decimal(mold.width) or _ZERO
        if length <= 0 or width <= 0:
            return _ZERO
        return length * width * height

    return _ZERO


def compute_mold_factor(source: Mold, target: Mold) -> Decimal:
    """Target volume / source volume, or 1 when either volume is <= 0."""
    source_volume = compute_mold_volume(source)
    target_volume = compute_mold_volume(target)
    if source_volume <= 0 or target_volume <= 0:
        return _ONE
    return target_volume / source_volume


def target_quantity_for_mold(source_quantity, mold_factor: Decimal) -> Decimal:
    """Yield that fills the target mold, rounded to two decimals."""
    source = to_decimal(source_quantity)
    if source is None or source <= 0:
        source = _ONE
    quantity = source * mold_factor
    try:
        rounded = quantity.quantize(_HUNDREDTH, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return quantity
    # tiny molds must not round down to a zero yield
    return rounded if rounded > 0 else quantity


# ══════════════════════════════════════════════════════════════
# BAKER'S PERCENTAGE
# ══════════════════════════════════════════════════════════════


def compute_section_base(ingredients: Iterable[IngredientLike]) -> SectionBase:
    """
    100% reference for one section.

    Sum of flour-flagged amounts when positive; otherwise the heaviest
    ingredient (a heuristic for sections without flour); otherwise 1.
    """
    flour_total = _ZERO
    heaviest = _ZERO
    heaviest_name = ""
    heaviest_unit = ""
    flour_unit = ""

    for ingredient in ingredients:
        amount = parse_amount(ingredient.amount) or _ZERO
        if ingredient.is_flour:
            flour_total += amount
            flour_unit = flour_unit or (ingredient.unit or "")
        if amount > heaviest:
            heaviest = amount
            heaviest_name = ingredient.name
            heaviest_unit = ingredient.unit or ""

    if flour_total > 0:
        return SectionBase(value=flour_total, label=TOTAL_FLOUR_LABEL, unit=flour_unit)
    if heaviest > 0:
        return SectionBase(
            value=heaviest,
            label=heaviest_name or MAIN_INGREDIENT_LABEL,
            unit=heaviest_unit,
        )
    return SectionBase(value=_ONE, label=MAIN_INGREDIENT_LABEL)


def compute_percentage(amount, base) -> Decimal | None:
    """amount / base * 100 to one decimal; None when it cannot be shown."""
    value = parse_amount(amount)
    base_value = to_decimal(base.value if isinstance(base, SectionBase) else base)
    if value is None or value <= 0 or base_value is None or base_value <= 0:
        return None
    return round_one(value / base_value * _HUNDRED)


def apply_factor_to_ingredient(
    ingredient: IngredientLike,
    factor: Decimal,
    *,
    base: SectionBase | None = None,
) -> ScaledIngredient:
    """
    Scale one ingredient for display.

    Positive numeric amounts are multiplied and rounded to one decimal.
    Anything else passes through unchanged. The unit is hidden for
    "to taste"/"a pinch" style amounts.
    """
    raw = ingredient.amount
    value = parse_amount(raw)

    if value is not None and value > 0:
        display_amount = format_amount(value * factor)
    else:
        display_amount = "" if raw is None else str(raw)

    unit = "" if is_unitless(raw) else (ingredient.unit or "")
    percent = compute_percentage(raw, base) if base is not None else None

    return ScaledIngredient(
        name=ingredient.name,
        display_amount=display_amount,
        unit=unit,
        is_flour=bool(ingredient.is_flour),
        percent=percent,
    )


def scale_sections(
    sections: Mapping[str, Sequence[IngredientLike]],
    order: Sequence[str],
    factor: Decimal,
    *,
    show_percentages: bool = True,
    titles: Mapping[str, str] | None = None,
) -> list[ScaledSection]:
    """
    Scale every non-empty section, in display order.

    Scalable sections take ``factor`` and, when ``show_percentages``,
    percentages against their own base. Fixed sections keep factor 1.
    """
    titles = titles or {}
    result: list[ScaledSection] = []

    for key in order:
        ingredients = list(sections.get(key) or [])
        if not ingredients:
            continue

        is_fixed = key in FIXED_SECTIONS
        section_factor = _ONE if is_fixed else factor
        base = None
        if show_percentages and not is_fixed:
            base = compute_section_base(ingredients)

        result.append(
            ScaledSection(
                key=key,
                title=titles.get(key, key),
                factor=section_factor,
                is_fixed=is_fixed,
                # reported at the new yield; percentages are factor-invariant
                base=(
                    SectionBase(
                        value=round_one(base.value * section_factor),
                        label=base.label,
                        unit=base.unit,
                    )
                    if base
                    else None
                ),
                ingredients=[
                    apply_factor_to_ingredient(ingredient, section_factor, base=base)
                    for ingredient in ingredients
                ],
            )
        )

    return result
