"""
Ingredient Protocol — what the scaling engine reads from an ingredient.

bakebox.models.Ingredient and bakebox.services.scaling.IngredientLine
both satisfy it.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IngredientLike(Protocol):
    """
    Minimal ingredient shape.

    amount is a number, a numeric string ("12.5") or a sentinel such
    as "to taste" that is excluded from percentage math.
    """

    name: str
    amount: object
    unit: str
    is_flour: bool
