"""
Bakebox Settings.

Supports two formats (dict takes priority):

    # Option 1: Dict
    BAKEBOX = {
        "IMAGE_BACKEND": "bakebox.adapters.gemini.GeminiImageBackend",
        "IMAGE_API_KEY": "...",
    }

    # Option 2: Flat
    BAKEBOX_IMAGE_BACKEND = "bakebox.adapters.gemini.GeminiImageBackend"
    BAKEBOX_IMAGE_API_KEY = "..."

All settings have sensible defaults — zero configuration required.
When IMAGE_API_KEY is unset the Gemini client reads GOOGLE_API_KEY /
GEMINI_API_KEY from the environment.
"""

import threading

from django.conf import settings


# ── Defaults ──

DEFAULTS = {
    "IMAGE_BACKEND": "bakebox.adapters.gemini.GeminiImageBackend",
    "IMAGE_API_KEY": None,
    "IMAGE_GENERATE_MODEL": "gemini-3-pro-image-preview",
    "IMAGE_EDIT_MODEL": "gemini-2.5-flash-image",
    "IMAGE_DEFAULT_SIZE": "1K",
    "IMAGE_DEFAULT_ASPECT_RATIO": "1:1",
}

IMAGE_SIZES = ("1K", "2K", "4K")
ASPECT_RATIOS = ("1:1", "3:4", "4:3", "9:16", "16:9")


# ── Accessors ──

_sentinel = object()


def get_setting(name, default=_sentinel):
    """
    Get a bakebox setting.

    Looks up in order:
    1. BAKEBOX dict (e.g. BAKEBOX = {"IMAGE_BACKEND": "..."})
    2. Flat setting (e.g. BAKEBOX_IMAGE_BACKEND = "...")
    3. DEFAULTS
    """
    bakebox_dict = getattr(settings, "BAKEBOX", {})
    if name in bakebox_dict:
        return bakebox_dict[name]

    flat_value = getattr(settings, f"BAKEBOX_{name}", _sentinel)
    if flat_value is not _sentinel:
        return flat_value

    if default is not _sentinel:
        return default

    return DEFAULTS.get(name)


_image_backend_lock = threading.Lock()
_image_backend_instance = None


def get_image_backend():
    """
    Return the configured image backend instance, or None.

    The image backend generates and edits recipe photos
    (see bakebox.protocols.imaging.ImageBackend).
    """
    global _image_backend_instance

    path = get_setting("IMAGE_BACKEND")
    if not path:
        return None

    if _image_backend_instance is None:
        with _image_backend_lock:
            if _image_backend_instance is None:  # double-checked
                from django.utils.module_loading import import_string

                _image_backend_instance = import_string(path)()

    return _image_backend_instance


def reset_image_backend() -> None:
    """Reset singleton (for tests)."""
    global _image_backend_instance
    _image_backend_instance = None
