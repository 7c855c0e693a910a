"""
Bakebox Signal Handlers.

This module is imported in apps.py to register handlers.
"""

import logging

from django.dispatch import receiver

from bakebox.signals import execution_logged

logger = logging.getLogger(__name__)


@receiver(execution_logged)
def mark_recipe_tried(sender, recipe, log, **kwargs):
    """A recipe with at least one execution log counts as tried."""
    if recipe.is_tried:
        return

    recipe.is_tried = True
    recipe.save(update_fields=["is_tried", "updated_at"])

    logger.info(
        f"Recipe {recipe.title} marked as tried",
        extra={"recipe": str(recipe.uuid), "log": str(log.uuid)},
    )
