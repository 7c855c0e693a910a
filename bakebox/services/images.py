"""
Recipe photo generation and editing.

The actual model call goes through the configured image backend
(BAKEBOX["IMAGE_BACKEND"]); this module validates input, picks defaults
and stores the resulting data: URL on the recipe.
"""

from __future__ import annotations

import base64
import binascii
import logging
import re

from bakebox.conf import ASPECT_RATIOS, IMAGE_SIZES, get_image_backend, get_setting
from bakebox.exceptions import BakeboxError

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "image/png"

_DATA_URL = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?:;[^,;]+)*;base64,(?P<data>.*)$", re.S)


def to_data_url(data: bytes | str, mime_type: str | None = None) -> str:
    """Build ``data:<mime>;base64,<payload>`` from raw bytes or base64 text."""
    if isinstance(data, bytes):
        data = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type or DEFAULT_MIME_TYPE};base64,{data}"


def parse_data_url(url: str) -> tuple[str, bytes] | None:
    """
    Split a base64 data: URL into (mime_type, raw bytes).

    Returns None for anything else (http URLs, broken payloads).
    """
    match = _DATA_URL.match(url or "")
    if not match:
        return None
    try:
        data = base64.b64decode(match.group("data"), validate=True)
    except (binascii.Error, ValueError):
        return None
    if not data:
        return None
    return match.group("mime") or DEFAULT_MIME_TYPE, data


def _backend():
    backend = get_image_backend()
    if backend is None:
        raise BakeboxError("IMAGE_BACKEND_FAILED", reason="no image backend configured")
    return backend


def generate_image(prompt: str, size: str | None = None, aspect_ratio: str | None = None) -> str:
    """
    Generate an image from a prompt.

    Raises:
        BakeboxError: EMPTY_PROMPT, INVALID_SIZE, INVALID_ASPECT_RATIO,
            API_KEY_ERROR, NO_IMAGE_DATA, IMAGE_BACKEND_FAILED
    """
    prompt = (prompt or "").strip()
    if not prompt:
        raise BakeboxError("EMPTY_PROMPT")

    size = size or get_setting("IMAGE_DEFAULT_SIZE")
    aspect_ratio = aspect_ratio or get_setting("IMAGE_DEFAULT_ASPECT_RATIO")
    if size not in IMAGE_SIZES:
        raise BakeboxError("INVALID_SIZE", size=size, allowed=list(IMAGE_SIZES))
    if aspect_ratio not in ASPECT_RATIOS:
        raise BakeboxError(
            "INVALID_ASPECT_RATIO", aspect_ratio=aspect_ratio, allowed=list(ASPECT_RATIOS)
        )

    return _backend().generate(prompt, size, aspect_ratio)


def edit_image(image_url: str, prompt: str) -> str:
    """
    Edit a data: URL image following a text instruction.

    Raises:
        BakeboxError: EMPTY_PROMPT, INVALID_IMAGE, API_KEY_ERROR,
            NO_IMAGE_DATA, IMAGE_BACKEND_FAILED
    """
    prompt = (prompt or "").strip()
    if not prompt:
        raise BakeboxError("EMPTY_PROMPT")
    if parse_data_url(image_url) is None:
        raise BakeboxError("INVALID_IMAGE")

    return _backend().edit(image_url, prompt)


def generate_recipe_image(recipe, prompt: str, size: str | None = None, aspect_ratio: str | None = None):
    """Generate a photo and store it as the recipe image."""
    recipe.image_url = generate_image(prompt, size=size, aspect_ratio=aspect_ratio)
    recipe.save(update_fields=["image_url", "updated_at"])

    logger.info(
        f"Generated image for {recipe.title}",
        extra={"recipe": str(recipe.uuid), "size": size, "aspect_ratio": aspect_ratio},
    )
    return recipe.image_url


def edit_recipe_image(recipe, prompt: str):
    """Edit the current recipe photo in place."""
    if not recipe.image_url:
        raise BakeboxError("INVALID_IMAGE", recipe=str(recipe.uuid), reason="recipe has no image")

    recipe.image_url = edit_image(recipe.image_url, prompt)
    recipe.save(update_fields=["image_url", "updated_at"])

    logger.info(f"Edited image for {recipe.title}", extra={"recipe": str(recipe.uuid)})
    return recipe.image_url
