"""
Image Backend Protocol — Interface for recipe photo generation.

Bakebox defines this protocol, bakebox.adapters.gemini implements it
with the Google Gemini image models.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ImageBackend(Protocol):
    """
    Protocol for generating and editing recipe photos.

    Both methods return a ``data:<mime>;base64,<payload>`` URL and raise
    BakeboxError on failure. Calls are one-shot: no retry.
    """

    def generate(self, prompt: str, size: str, aspect_ratio: str) -> str:
        """
        Generate a new image from a text prompt.

        Args:
            prompt: Description of the photo
            size: "1K", "2K" or "4K"
            aspect_ratio: "1:1", "3:4", "4:3", "9:16" or "16:9"

        Returns:
            data: URL of the generated image
        """
        ...

    def edit(self, image_url: str, prompt: str) -> str:
        """
        Edit an existing image.

        Args:
            image_url: data: URL of the current photo
            prompt: Edit instruction

        Returns:
            data: URL of the edited image
        """
        ...
