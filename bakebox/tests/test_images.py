"""
Tests for recipe photo generation (bakebox.services.images) and the
Gemini / noop image backends.

The google-genai client is mocked: no network.
"""

import base64
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from django.test import override_settings

from bakebox.adapters.gemini import GeminiImageBackend
from bakebox.adapters.noop import PLACEHOLDER, NoopImageBackend
from bakebox.conf import get_image_backend
from bakebox.exceptions import BakeboxError
from bakebox.protocols import ImageBackend
from bakebox.services.images import (
    edit_image,
    edit_recipe_image,
    generate_image,
    generate_recipe_image,
    parse_data_url,
    to_data_url,
)

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"
PNG_URL = "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode()


# ═══════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════


def image_response(data=PNG_BYTES, mime_type="image/png"):
    """Shape of a google.genai GenerateContentResponse with one inline image."""
    parts = [
        SimpleNamespace(inline_data=None, text="Here is your photo"),
        SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type=mime_type)),
    ]
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=parts))])


@pytest.fixture
def gemini():
    backend = GeminiImageBackend(api_key="test-key")
    backend._client = MagicMock()
    return backend


class TestDataUrls:
    def test_round_trip(self):
        url = to_data_url(PNG_BYTES, "image/jpeg")
        assert url.startswith("data:image/jpeg;base64,")
        assert parse_data_url(url) == ("image/jpeg", PNG_BYTES)

    def test_base64_text_kept(self):
        assert to_data_url("QUJD") == "data:image/png;base64,QUJD"

    @pytest.mark.parametrize(
        "url",
        ["", "https://example.com/cake.jpg", "data:image/png;base64,", "data:image/png;base64,@@@", None],
    )
    def test_rejects_non_data_urls(self, url):
        assert parse_data_url(url) is None


# ═══════════════════════════════════════════════════════════════════
# Gemini backend
# ═══════════════════════════════════════════════════════════════════


class TestGeminiBackend:
    def test_satisfies_protocol(self):
        assert isinstance(GeminiImageBackend(api_key="k"), ImageBackend)
        assert isinstance(NoopImageBackend(), ImageBackend)

    def test_generate_uses_pro_model_and_image_config(self, gemini):
        gemini._client.models.generate_content.return_value = image_response()

        url = gemini.generate("A golden brioche", "2K", "4:3")

        assert url == PNG_URL
        kwargs = gemini._client.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-3-pro-image-preview"
        assert kwargs["contents"] == ["A golden brioche"]
        assert kwargs["config"].image_config.image_size == "2K"
        assert kwargs["config"].image_config.aspect_ratio == "4:3"

    def test_edit_sends_inline_image(self, gemini):
        gemini._client.models.generate_content.return_value = image_response(b"edited", "image/webp")

        url = gemini.edit(PNG_URL, "Add powdered sugar")

        assert url == to_data_url(b"edited", "image/webp")
        kwargs = gemini._client.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-2.5-flash-image"
        image_part, prompt = kwargs["contents"]
        assert image_part.inline_data.data == PNG_BYTES
        assert image_part.inline_data.mime_type == "image/png"
        assert prompt == "Add powdered sugar"

    def test_edit_rejects_http_url(self, gemini):
        with pytest.raises(BakeboxError) as exc:
            gemini.edit("https://example.com/a.png", "x")
        assert exc.value.code == "INVALID_IMAGE"
        gemini._client.models.generate_content.assert_not_called()

    def test_no_image_data(self, gemini):
        gemini._client.models.generate_content.return_value = SimpleNamespace(candidates=[])

        with pytest.raises(BakeboxError) as exc:
            gemini.generate("cake", "1K", "1:1")
        assert exc.value.code == "NO_IMAGE_DATA"

    def test_key_not_found_becomes_api_key_error(self, gemini):
        from google.genai import errors

        gemini._client.models.generate_content.side_effect = errors.ClientError(
            404, {"error": {"code": 404, "message": "Requested entity was not found.", "status": "NOT_FOUND"}}
        )

        with pytest.raises(BakeboxError) as exc:
            gemini.generate("cake", "1K", "1:1")
        assert exc.value.code == "API_KEY_ERROR"

    def test_other_api_errors(self, gemini):
        from google.genai import errors

        gemini._client.models.generate_content.side_effect = errors.ServerError(
            503, {"error": {"code": 503, "message": "overloaded", "status": "UNAVAILABLE"}}
        )

        with pytest.raises(BakeboxError) as exc:
            gemini.generate("cake", "1K", "1:1")
        assert exc.value.code == "IMAGE_BACKEND_FAILED"

    @override_settings(BAKEBOX={"IMAGE_GENERATE_MODEL": "gemini-custom"})
    def test_model_from_settings(self, gemini):
        gemini._client.models.generate_content.return_value = image_response()
        gemini.generate("cake", "1K", "1:1")
        assert gemini._client.models.generate_content.call_args.kwargs["model"] == "gemini-custom"

    def test_client_built_with_api_key(self):
        with patch("google.genai.Client") as client_cls:
            backend = GeminiImageBackend(api_key="secret")
            assert backend.client is client_cls.return_value
            assert backend.client is client_cls.return_value
        client_cls.assert_called_once_with(api_key="secret")


# ═══════════════════════════════════════════════════════════════════
# Service
# ═══════════════════════════════════════════════════════════════════


class TestImageService:
    def test_backend_from_settings(self):
        backend = get_image_backend()
        assert isinstance(backend, NoopImageBackend)
        assert get_image_backend() is backend

    def test_generate_defaults(self):
        assert generate_image("Strawberry shortcake") == PLACEHOLDER
        assert get_image_backend().calls[-1] == ("generate", "Strawberry shortcake", "1K", "1:1")

    @pytest.mark.parametrize("prompt", ["", "   ", None])
    def test_empty_prompt(self, prompt):
        with pytest.raises(BakeboxError) as exc:
            generate_image(prompt)
        assert exc.value.code == "EMPTY_PROMPT"

    def test_invalid_size(self):
        with pytest.raises(BakeboxError) as exc:
            generate_image("cake", size="8K")
        assert exc.value.code == "INVALID_SIZE"

    def test_invalid_aspect_ratio(self):
        with pytest.raises(BakeboxError) as exc:
            generate_image("cake", aspect_ratio="2:1")
        assert exc.value.code == "INVALID_ASPECT_RATIO"

    def test_edit_requires_data_url(self):
        with pytest.raises(BakeboxError) as exc:
            edit_image("https://example.com/a.png", "brighter")
        assert exc.value.code == "INVALID_IMAGE"

    @override_settings(BAKEBOX={"IMAGE_BACKEND": None})
    def test_no_backend_configured(self):
        with pytest.raises(BakeboxError) as exc:
            generate_image("cake")
        assert exc.value.code == "IMAGE_BACKEND_FAILED"


@pytest.mark.django_db
class TestRecipeImages:
    def test_generate_stores_image(self, recipe):
        url = generate_recipe_image(recipe, "Milk loaf on a board", size="2K", aspect_ratio="16:9")

        recipe.refresh_from_db()
        assert recipe.image_url == url == PLACEHOLDER

    def test_edit_replaces_image(self, recipe):
        recipe.image_url = PNG_URL
        recipe.save()

        edit_recipe_image(recipe, "Warmer light")

        recipe.refresh_from_db()
        assert recipe.image_url == PNG_URL
        assert get_image_backend().calls[-1] == ("edit", "Warmer light")

    def test_edit_without_image(self, recipe):
        with pytest.raises(BakeboxError) as exc:
            edit_recipe_image(recipe, "Warmer light")
        assert exc.value.code == "INVALID_IMAGE"

    def test_failed_call_keeps_previous_image(self, recipe):
        recipe.image_url = PNG_URL
        recipe.save()

        with patch.object(NoopImageBackend, "generate", side_effect=BakeboxError("NO_IMAGE_DATA")):
            with pytest.raises(BakeboxError):
                generate_recipe_image(recipe, "cake")

        recipe.refresh_from_db()
        assert recipe.image_url == PNG_URL
