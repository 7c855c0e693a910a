"""
Bakebox Views.

Printable recipe sheet, optionally scaled to another yield or mold.
"""

from django.contrib.admin.views.decorators import staff_member_required
from django.shortcuts import get_object_or_404, render

from bakebox.models import Recipe
from bakebox.services import scaling


def _scale_params(params) -> dict:
    """
    Read scaling options from the query string.

    ?target_quantity=6, or ?source_mold=<preset>&target_mold=<preset>.
    Unknown presets and invalid numbers are ignored.
    """
    source = scaling.get_mold_preset(params.get("source_mold", ""))
    target = scaling.get_mold_preset(params.get("target_mold", ""))
    if source and target:
        return {"source_mold": source, "target_mold": target}

    quantity = scaling.to_decimal(params.get("target_quantity"))
    if quantity is not None and quantity > 0:
        return {"target_quantity": quantity}
    return {}


@staff_member_required
def recipe_print_view(request, uuid):
    """
    Recipe sheet for printing.
    """
    recipe = get_object_or_404(
        Recipe.objects.select_related("category").prefetch_related(
            "ingredients", "fermentation_stages", "baking_stages", "tags"
        ),
        uuid=uuid,
    )
    result = recipe.scale(**_scale_params(request.GET))

    context = {
        "title": recipe.title,
        "recipe": recipe,
        "result": result,
        "is_scaled": result.factor != 1,
        "tags": sorted(recipe.tags.names()),
    }

    return render(request, "bakebox/recipe_print.html", context)
