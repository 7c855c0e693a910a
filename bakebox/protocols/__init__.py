"""
Bakebox Protocols.

Defines interfaces for external integrations.
"""

from bakebox.protocols.imaging import ImageBackend
from bakebox.protocols.ingredient import IngredientLike

__all__ = [
    "ImageBackend",
    "IngredientLike",
]
