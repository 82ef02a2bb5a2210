"""Unit tests for GenerationGateway."""

import asyncio
import base64
import json
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from facescene.core.errors import GenerationFailed, SuggestionParseError
from facescene.core.gateway import GenerationGateway
from facescene.core.images import parse_data_url
from facescene.core.models import ImagePayload
from facescene.core.prompt_builder import SUGGESTIONS_RESPONSE_SCHEMA


def image_response(*images):
    """Build a generate_images response from (bytes, mime) pairs."""
    return SimpleNamespace(
        generated_images=[
            SimpleNamespace(image=SimpleNamespace(image_bytes=data, mime_type=mime))
            for data, mime in images
        ]
    )


def content_response(*parts):
    """Build a generate_content response with one candidate."""
    return SimpleNamespace(
        candidates=[SimpleNamespace(content=SimpleNamespace(parts=list(parts)))]
    )


def image_part(data, mime_type="image/png"):
    return SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type=mime_type), text=None)


def text_part(text):
    return SimpleNamespace(inline_data=None, text=text)


@pytest.fixture
def gateway(fake_client, test_config):
    """Gateway wired to the fake client."""
    return GenerationGateway(fake_client, test_config)


class TestFromConfig:
    """Tests for GenerationGateway.from_config."""

    def test_passes_api_key(self, test_config):
        """Test that a configured key is handed to the client."""
        with patch("facescene.core.gateway.genai.Client") as MockClient:
            gateway = GenerationGateway.from_config(test_config)

        MockClient.assert_called_once_with(api_key="test-key")
        assert gateway.client is MockClient.return_value
        assert gateway.config is test_config

    def test_without_api_key_uses_sdk_lookup(self, test_config):
        """Test that no key lets the SDK read its own environment."""
        cfg = test_config.model_copy(update={"api_key": None})
        with patch("facescene.core.gateway.genai.Client") as MockClient:
            GenerationGateway.from_config(cfg)

        MockClient.assert_called_once_with()


class TestGenerateFace:
    """Tests for generate_face."""

    def test_returns_data_url(self, gateway, fake_client, jpeg_bytes):
        """Test that the first image is returned as a data URL."""
        fake_client.aio.models.generate_images.return_value = image_response(
            (jpeg_bytes, "image/jpeg")
        )

        result = asyncio.run(gateway.generate_face("a face"))

        assert isinstance(result, ImagePayload)
        assert result.mime_type == "image/jpeg"
        assert result.data_url == (
            "data:image/jpeg;base64," + base64.b64encode(jpeg_bytes).decode("ascii")
        )

    def test_request_parameters(self, gateway, fake_client, jpeg_bytes):
        """Test model, prompt and single-image config."""
        fake_client.aio.models.generate_images.return_value = image_response(
            (jpeg_bytes, "image/jpeg")
        )

        asyncio.run(gateway.generate_face("a face"))

        kwargs = fake_client.aio.models.generate_images.call_args.kwargs
        assert kwargs["model"] == "test-face-model"
        assert kwargs["prompt"] == "a face"
        assert kwargs["config"].number_of_images == 1
        assert kwargs["config"].output_mime_type == "image/jpeg"
        assert kwargs["config"].aspect_ratio == "1:1"

    def test_missing_mime_type_uses_configured(self, gateway, fake_client, jpeg_bytes):
        """Test the fallback MIME type when the service omits it."""
        fake_client.aio.models.generate_images.return_value = image_response((jpeg_bytes, None))

        result = asyncio.run(gateway.generate_face("a face"))

        assert result.mime_type == "image/jpeg"

    def test_zero_images_fails(self, gateway, fake_client):
        """Test that an empty response raises GenerationFailed."""
        fake_client.aio.models.generate_images.return_value = image_response()

        with pytest.raises(GenerationFailed, match="No images were returned"):
            asyncio.run(gateway.generate_face("a face"))

    def test_none_images_fails(self, gateway, fake_client):
        """Test that a missing image list raises GenerationFailed."""
        fake_client.aio.models.generate_images.return_value = SimpleNamespace(
            generated_images=None
        )

        with pytest.raises(GenerationFailed):
            asyncio.run(gateway.generate_face("a face"))

    def test_service_error_is_translated(self, gateway, fake_client):
        """Test that SDK exceptions become GenerationFailed with the message."""
        fake_client.aio.models.generate_images.side_effect = RuntimeError("403 PERMISSION_DENIED")

        with pytest.raises(GenerationFailed, match="403 PERMISSION_DENIED") as exc_info:
            asyncio.run(gateway.generate_face("a face"))

        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_single_shot(self, gateway, fake_client):
        """Test that failures are not retried."""
        fake_client.aio.models.generate_images.side_effect = RuntimeError("boom")

        with pytest.raises(GenerationFailed):
            asyncio.run(gateway.generate_face("a face"))

        assert fake_client.aio.models.generate_images.await_count == 1


class TestCompositeScene:
    """Tests for composite_scene."""

    def test_returns_first_image_part(self, gateway, fake_client, face_data_url, png_bytes):
        """Test that the first inline image becomes the result."""
        fake_client.aio.models.generate_content.return_value = content_response(
            text_part("Here you go"),
            image_part(png_bytes, "image/png"),
            image_part(b"second", "image/png"),
        )

        result = asyncio.run(gateway.composite_scene(face_data_url, "image/jpeg", "prompt"))

        data, mime_type = parse_data_url(result)
        assert data == png_bytes
        assert mime_type == "image/png"

    def test_sends_face_and_prompt(self, gateway, fake_client, face_data_url, jpeg_bytes, png_bytes):
        """Test that the face bytes and prompt are both sent."""
        fake_client.aio.models.generate_content.return_value = content_response(
            image_part(png_bytes)
        )

        asyncio.run(gateway.composite_scene(face_data_url, "image/jpeg", "the prompt"))

        kwargs = fake_client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "test-scene-model"
        face_part, prompt = kwargs["contents"]
        assert face_part.inline_data.data == jpeg_bytes
        assert face_part.inline_data.mime_type == "image/jpeg"
        assert prompt == "the prompt"

    def test_text_only_response_carries_explanation(self, gateway, fake_client, face_data_url):
        """Test that the model's text explanation is surfaced."""
        fake_client.aio.models.generate_content.return_value = content_response(
            text_part("I can't edit images of real people.")
        )

        with pytest.raises(GenerationFailed, match="can't edit images of real people"):
            asyncio.run(gateway.composite_scene(face_data_url, "image/jpeg", "prompt"))

    def test_empty_response_fails_generically(self, gateway, fake_client, face_data_url):
        """Test the generic failure when neither image nor text is present."""
        fake_client.aio.models.generate_content.return_value = SimpleNamespace(candidates=[])

        with pytest.raises(GenerationFailed, match="did not return an image"):
            asyncio.run(gateway.composite_scene(face_data_url, "image/jpeg", "prompt"))

    def test_invalid_face_handle_fails_without_call(self, gateway, fake_client):
        """Test that a broken data URL is rejected before calling the service."""
        with pytest.raises(GenerationFailed, match="Invalid base64 image URL"):
            asyncio.run(gateway.composite_scene("not-a-data-url", "image/jpeg", "prompt"))

        fake_client.aio.models.generate_content.assert_not_awaited()

    def test_service_error_is_translated(self, gateway, fake_client, face_data_url):
        """Test that SDK exceptions become GenerationFailed."""
        fake_client.aio.models.generate_content.side_effect = ConnectionError("network down")

        with pytest.raises(GenerationFailed, match="network down"):
            asyncio.run(gateway.composite_scene(face_data_url, "image/jpeg", "prompt"))


class TestGenerateText:
    """Tests for generate_text."""

    def test_structured_request(self, gateway, fake_client):
        """Test that a schema switches the response to JSON."""
        fake_client.aio.models.generate_content.return_value = SimpleNamespace(text='{"a": 1}')
        schema = {"type": "OBJECT", "properties": {"a": {"type": "INTEGER"}}}

        result = asyncio.run(
            gateway.generate_text("prompt", system_instruction="be brief", response_schema=schema)
        )

        assert result == '{"a": 1}'
        kwargs = fake_client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "test-text-model"
        assert kwargs["contents"] == "prompt"
        assert kwargs["config"].response_mime_type == "application/json"
        assert kwargs["config"].system_instruction == "be brief"

    def test_empty_text_becomes_empty_string(self, gateway, fake_client):
        """Test that a missing text body is returned as ''."""
        fake_client.aio.models.generate_content.return_value = SimpleNamespace(text=None)

        assert asyncio.run(gateway.generate_text("prompt")) == ""

    def test_service_error_is_translated(self, gateway, fake_client):
        """Test that SDK exceptions become GenerationFailed."""
        fake_client.aio.models.generate_content.side_effect = TimeoutError("deadline exceeded")

        with pytest.raises(GenerationFailed, match="deadline exceeded"):
            asyncio.run(gateway.generate_text("prompt"))


class TestFetchSuggestions:
    """Tests for fetch_suggestions."""

    def _respond(self, fake_client, payload):
        text = payload if isinstance(payload, str) else json.dumps(payload)
        fake_client.aio.models.generate_content.return_value = SimpleNamespace(text=text)

    def test_returns_suggestions(self, gateway, fake_client):
        """Test that the suggestions array is returned."""
        self._respond(fake_client, {"suggestions": ["one", "two", "three"]})

        assert asyncio.run(gateway.fetch_suggestions("prompt")) == ["one", "two", "three"]

    def test_uses_suggestion_schema(self, gateway, fake_client):
        """Test that the suggestions schema is requested."""
        self._respond(fake_client, {"suggestions": ["one"]})

        asyncio.run(gateway.fetch_suggestions("prompt"))

        config = fake_client.aio.models.generate_content.call_args.kwargs["config"]
        assert config.response_mime_type == "application/json"
        assert config.response_schema is not None
        assert "suggestions" in SUGGESTIONS_RESPONSE_SCHEMA["required"]

    def test_keeps_at_most_three(self, gateway, fake_client):
        """Test that extra suggestions are dropped."""
        self._respond(fake_client, {"suggestions": ["a", "b", "c", "d", "e"]})

        assert asyncio.run(gateway.fetch_suggestions("prompt")) == ["a", "b", "c"]

    def test_skips_blank_and_non_string_items(self, gateway, fake_client):
        """Test that unusable items are filtered out."""
        self._respond(fake_client, {"suggestions": [" a ", "", 7, None, "b"]})

        assert asyncio.run(gateway.fetch_suggestions("prompt")) == ["a", "b"]

    def test_invalid_json_raises(self, gateway, fake_client):
        """Test that malformed JSON surfaces SuggestionParseError."""
        self._respond(fake_client, "Sure! Here are some ideas:")

        with pytest.raises(SuggestionParseError, match="Could not understand"):
            asyncio.run(gateway.fetch_suggestions("prompt"))

    @pytest.mark.parametrize(
        "payload",
        [{}, {"suggestions": "one idea"}, {"ideas": ["a"]}, ["a", "b"]],
    )
    def test_missing_array_raises(self, gateway, fake_client, payload):
        """Test that a missing or non-list field surfaces SuggestionParseError."""
        self._respond(fake_client, payload)

        with pytest.raises(SuggestionParseError):
            asyncio.run(gateway.fetch_suggestions("prompt"))

    def test_service_error_is_generation_failed(self, gateway, fake_client):
        """Test that call failures are reported as GenerationFailed."""
        fake_client.aio.models.generate_content.side_effect = RuntimeError("503 UNAVAILABLE")

        with pytest.raises(GenerationFailed, match="503 UNAVAILABLE"):
            asyncio.run(gateway.fetch_suggestions("prompt"))
