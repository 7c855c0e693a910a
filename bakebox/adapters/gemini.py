"""
Gemini Image Backend -- recipe photos through Google Gemini image models.

Requires the ``google-genai`` package.

Configuration:
    BAKEBOX = {
        "IMAGE_BACKEND": "bakebox.adapters.gemini.GeminiImageBackend",
        "IMAGE_API_KEY": "...",  # or GOOGLE_API_KEY / GEMINI_API_KEY env
        "IMAGE_GENERATE_MODEL": "gemini-3-pro-image-preview",
        "IMAGE_EDIT_MODEL": "gemini-2.5-flash-image",
    }
"""

from __future__ import annotations

import logging

from bakebox.conf import get_setting
from bakebox.exceptions import BakeboxError
from bakebox.services.images import parse_data_url, to_data_url

logger = logging.getLogger(__name__)

# Message the API returns when the selected key cannot reach the model
KEY_NOT_FOUND = "Requested entity was not found"


def _first_image(response) -> str:
    """Return the first inline image of the first candidate as a data: URL."""
    candidates = getattr(response, "candidates", None) or []
    if candidates:
        content = getattr(candidates[0], "content", None)
        for part in getattr(content, "parts", None) or []:
            inline = getattr(part, "inline_data", None)
            if inline is not None and inline.data:
                return to_data_url(inline.data, inline.mime_type)
    raise BakeboxError("NO_IMAGE_DATA")


class GeminiImageBackend:
    """
    ImageBackend implementation over ``google.genai``.

    A client is built lazily on first use and reused afterwards.
    """

    def __init__(self, api_key: str | None = None):
        self.api_key = api_key if api_key is not None else get_setting("IMAGE_API_KEY")
        self._client = None

    @property
    def client(self):
        if self._client is None:
            from google import genai

            self._client = genai.Client(api_key=self.api_key) if self.api_key else genai.Client()
        return self._client

    def _call(self, model: str, contents, config=None):
        from google.genai import errors

        try:
            return self.client.models.generate_content(model=model, contents=contents, config=config)
        except errors.APIError as e:
            if KEY_NOT_FOUND in str(e):
                logger.warning(f"Gemini rejected API key for {model}", extra={"model": model})
                raise BakeboxError("API_KEY_ERROR", model=model) from e
            logger.error(f"Gemini call failed: {e}", extra={"model": model})
            raise BakeboxError("IMAGE_BACKEND_FAILED", model=model, reason=str(e)) from e

    def generate(self, prompt: str, size: str, aspect_ratio: str) -> str:
        from google.genai import types

        model = get_setting("IMAGE_GENERATE_MODEL")
        response = self._call(
            model,
            [prompt],
            types.GenerateContentConfig(
                image_config=types.ImageConfig(aspect_ratio=aspect_ratio, image_size=size),
            ),
        )
        return _first_image(response)

    def edit(self, image_url: str, prompt: str) -> str:
        from google.genai import types

        parsed = parse_data_url(image_url)
        if parsed is None:
            raise BakeboxError("INVALID_IMAGE")
        mime_type, data = parsed

        model = get_setting("IMAGE_EDIT_MODEL")
        response = self._call(
            model,
            [types.Part.from_bytes(data=data, mime_type=mime_type), prompt],
        )
        return _first_image(response)
