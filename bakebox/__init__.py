"""
Django Bakebox - a baking inspiration box.

Recipes with ingredient sections, baker's percentages and batch/mold
scaling, plus a knowledge base and optional AI recipe photos.

Usage:
    from bakebox import BakeboxError
    from bakebox.models import Recipe

    recipe = Recipe.objects.get(title="Salt butter roll")
    result = recipe.scale(target_quantity=12)

    print(f"x{result.factor}")
    for section in result.sections:
        for line in section.ingredients:
            print(line.name, line.display_amount, line.unit, line.percent_text)

    # Journal
    recipe.add_log(rating=4, feedback="Proofed 10 min longer, better crumb")
"""

from bakebox.exceptions import BakeboxError


def __getattr__(name):
    """Lazy import to avoid AppRegistryNotReady errors."""
    if name == "ScalingResult":
        from bakebox.results import ScalingResult

        return ScalingResult
    if name == "ImportResult":
        from bakebox.results import ImportResult

        return ImportResult
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["BakeboxError", "ScalingResult", "ImportResult"]
__version__ = "0.1.0"
