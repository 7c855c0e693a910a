"""
Noop Image Backend -- returns a fixed placeholder image.

Use this adapter for development or testing when no image API key is
available.

Configuration:
    BAKEBOX = {
        "IMAGE_BACKEND": "bakebox.adapters.noop.NoopImageBackend",
    }
"""

from __future__ import annotations

from bakebox.exceptions import BakeboxError
from bakebox.services.images import parse_data_url

# 1x1 transparent PNG
PLACEHOLDER = (
    "data:image/png;base64,"
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


class NoopImageBackend:
    """
    No-operation implementation of the ImageBackend protocol.

    Every generate() call returns the same placeholder. edit() checks the
    input is a data: URL, like a real backend would, then returns it as is.
    """

    def __init__(self):
        self.calls = []

    def generate(self, prompt: str, size: str, aspect_ratio: str) -> str:
        self.calls.append(("generate", prompt, size, aspect_ratio))
        return PLACEHOLDER

    def edit(self, image_url: str, prompt: str) -> str:
        if parse_data_url(image_url) is None:
            raise BakeboxError("INVALID_IMAGE")
        self.calls.append(("edit", prompt))
        return image_url
