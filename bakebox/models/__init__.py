"""
Bakebox Models.

- Category: recipe grouping with explicit order
- Recipe: baking formula with ingredient sections
- Ingredient: one line of a section
- FermentationStage / BakingStage: ordered process notes
- ExecutionLog: journal of each bake
- Knowledge: technique notes
- Resource: reference links
"""

from bakebox.models.category import Category
from bakebox.models.knowledge import Knowledge, Resource, ResourceType
from bakebox.models.log import ExecutionLog
from bakebox.models.recipe import (
    BakingStage,
    FermentationStage,
    Ingredient,
    Recipe,
    SectionKey,
    TimeUnit,
)

__all__ = [
    "Category",
    "Recipe",
    "Ingredient",
    "SectionKey",
    "FermentationStage",
    "BakingStage",
    "TimeUnit",
    "ExecutionLog",
    "Knowledge",
    "Resource",
    "ResourceType",
]
