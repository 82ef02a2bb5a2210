"""Gateway to the Google generative image and text services.

Each public coroutine is exactly one request/response exchange with the
service. There is no retry and no client-side timeout. Responses are
unwrapped into plain Python values and every failure is translated into
one of the errors from :mod:`facescene.core.errors`.

Operations
----------
- generate_face: text-to-image synthesis (Imagen)
- composite_scene: place an existing face into a described scene (Gemini image)
- generate_text: structured JSON text generation (Gemini)
- fetch_suggestions: scene ideas built on top of generate_text

Usage Example
-------------
    from facescene.core.config import config
    from facescene.core.gateway import GenerationGateway

    gateway = GenerationGateway.from_config(config)
    face = await gateway.generate_face(prompt)
    scene_url = await gateway.composite_scene(face.data_url, face.mime_type, scene_prompt)
"""

from __future__ import annotations

import json
import logging
from typing import Any

from google import genai
from google.genai import types

from .config import FacesceneConfig
from .errors import GenerationFailed, SuggestionParseError
from .images import parse_data_url, to_data_url
from .models import ImagePayload
from .prompt_builder import SUGGESTIONS_RESPONSE_SCHEMA

logger = logging.getLogger(__name__)


class GenerationGateway:
    """Async wrapper around a ``google.genai.Client``.

    Args:
        client: A ``google.genai.Client`` (or any object exposing the same
            ``aio.models`` coroutines)
        config: Configuration providing model names and output settings
    """

    def __init__(self, client: Any, config: FacesceneConfig):
        self.client = client
        self.config = config

    @classmethod
    def from_config(cls, config: FacesceneConfig) -> GenerationGateway:
        """Create a gateway with a real GenAI client.

        Args:
            config: Configuration instance

        Returns:
            GenerationGateway instance
        """
        logger.info("Creating GenAI client")
        client = genai.Client(api_key=config.api_key) if config.api_key else genai.Client()
        return cls(client, config)

    async def generate_face(self, prompt: str) -> ImagePayload:
        """Synthesize a face from a prompt.

        Args:
            prompt: Full face prompt

        Returns:
            ImagePayload with the image as a data URL

        Raises:
            GenerationFailed: If the call fails or no image is returned
        """
        logger.info(f"Requesting face from {self.config.face_model}")
        try:
            response = await self.client.aio.models.generate_images(
                model=self.config.face_model,
                prompt=prompt,
                config=types.GenerateImagesConfig(
                    number_of_images=1,
                    output_mime_type=self.config.face_output_mime_type,
                    aspect_ratio=self.config.face_aspect_ratio,
                ),
            )
        except Exception as e:
            logger.error(f"Face synthesis call failed: {e}", exc_info=True)
            raise GenerationFailed(f"Image generation failed: {e}") from e

        generated = getattr(response, "generated_images", None) or []
        if not generated:
            raise GenerationFailed("Image generation failed. No images were returned.")

        image = generated[0].image
        if image is None or not image.image_bytes:
            raise GenerationFailed("Image generation failed. No images were returned.")

        mime_type = image.mime_type or self.config.face_output_mime_type
        return ImagePayload(data_url=to_data_url(image.image_bytes, mime_type), mime_type=mime_type)

    async def composite_scene(self, face_image: str, mime_type: str, prompt: str) -> str:
        """Place a face into a scene.

        Args:
            face_image: Face as a data URL
            mime_type: MIME type of the face image
            prompt: Full compositing prompt

        Returns:
            The composited scene as a data URL

        Raises:
            GenerationFailed: If the call fails or no image part is returned.
                When the model answered with text only, that text is included
                in the message.
        """
        try:
            face_bytes, _ = parse_data_url(face_image)
        except ValueError as e:
            raise GenerationFailed(str(e)) from e

        logger.info(f"Requesting scene composite from {self.config.scene_model}")
        try:
            response = await self.client.aio.models.generate_content(
                model=self.config.scene_model,
                contents=[
                    types.Part.from_bytes(data=face_bytes, mime_type=mime_type),
                    prompt,
                ],
                config=types.GenerateContentConfig(
                    response_modalities=[types.Modality.IMAGE, types.Modality.TEXT],
                ),
            )
        except Exception as e:
            logger.error(f"Scene compositing call failed: {e}", exc_info=True)
            raise GenerationFailed(f"Image generation failed: {e}") from e

        parts = _first_candidate_parts(response)

        for part in parts:
            inline = getattr(part, "inline_data", None)
            if inline is not None and inline.data:
                return to_data_url(inline.data, inline.mime_type or "image/png")

        explanation = next((part.text for part in parts if getattr(part, "text", None)), None)
        if explanation:
            raise GenerationFailed(
                f"Image generation failed. The model responded with: {explanation}"
            )
        raise GenerationFailed("Image generation failed. The model did not return an image.")

    async def generate_text(
        self,
        prompt: str,
        *,
        system_instruction: str | None = None,
        response_schema: dict | None = None,
    ) -> str:
        """Run a structured text generation call.

        Args:
            prompt: User prompt
            system_instruction: Optional system instruction
            response_schema: Optional JSON schema; when given the response is JSON

        Returns:
            Raw response text

        Raises:
            GenerationFailed: If the call fails
        """
        gen_config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            response_mime_type="application/json" if response_schema else None,
            response_schema=response_schema,
        )

        try:
            response = await self.client.aio.models.generate_content(
                model=self.config.text_model,
                contents=prompt,
                config=gen_config,
            )
        except Exception as e:
            logger.error(f"Text generation call failed: {e}", exc_info=True)
            raise GenerationFailed(f"Text generation failed: {e}") from e

        return response.text or ""

    async def fetch_suggestions(self, prompt: str) -> list[str]:
        """Ask for lifestyle scene ideas.

        Args:
            prompt: Full suggestion prompt

        Returns:
            Up to ``config.max_suggestions`` suggestion strings

        Raises:
            GenerationFailed: If the call fails
            SuggestionParseError: If the response is not the expected JSON
        """
        text = await self.generate_text(prompt, response_schema=SUGGESTIONS_RESPONSE_SCHEMA)

        try:
            result = json.loads(text.strip())
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse suggestions JSON: {e}; received: {text!r}")
            raise SuggestionParseError("Could not understand the suggestions from the AI.") from e

        suggestions = result.get("suggestions") if isinstance(result, dict) else None
        if not isinstance(suggestions, list):
            logger.error(f"Suggestions field missing from response: {text!r}")
            raise SuggestionParseError("Could not understand the suggestions from the AI.")

        cleaned = [item.strip() for item in suggestions if isinstance(item, str) and item.strip()]
        return cleaned[: self.config.max_suggestions]


def _first_candidate_parts(response: Any) -> list[Any]:
    """Return the content parts of the first candidate, or an empty list."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    content = getattr(candidates[0], "content", None)
    return list(getattr(content, "parts", None) or [])
