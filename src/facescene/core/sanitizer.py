"""Best-effort removal of facial descriptors from scene prompts.

The compositing model is told to keep the face from the input image. Scene
text such as "a red-haired woman with freckles at the beach" fights that
instruction, so the text model is asked to strip such descriptors first.

Sanitization never blocks the pipeline: whenever the call fails or its
answer cannot be used, the original prompt is returned unchanged.
"""

import json
import logging

from .prompt_builder import SANITIZE_RESPONSE_SCHEMA, SANITIZE_SYSTEM_INSTRUCTION

logger = logging.getLogger(__name__)


class SuggestionSanitizer:
    """Strips identity-revealing language from scene prompts.

    Args:
        gateway: GenerationGateway used for the text call
    """

    def __init__(self, gateway):
        self.gateway = gateway

    async def sanitize(self, scene_prompt: str) -> str:
        """Return the scene prompt without facial descriptors.

        Args:
            scene_prompt: Scene text as typed by the user

        Returns:
            Cleaned prompt, or the original prompt if cleaning failed
        """
        try:
            text = await self.gateway.generate_text(
                scene_prompt,
                system_instruction=SANITIZE_SYSTEM_INSTRUCTION,
                response_schema=SANITIZE_RESPONSE_SCHEMA,
            )
        except Exception as e:
            logger.warning(f"Scene prompt sanitization failed, using original prompt: {e}")
            return scene_prompt

        try:
            result = json.loads(text.strip())
        except (json.JSONDecodeError, AttributeError) as e:
            logger.warning(f"Sanitizer returned malformed JSON, using original prompt: {e}")
            return scene_prompt

        cleaned = result.get("cleanedPrompt") if isinstance(result, dict) else None
        if not isinstance(cleaned, str) or not cleaned.strip():
            logger.warning("Sanitizer returned no cleaned prompt, using original prompt")
            return scene_prompt

        logger.info("Scene prompt sanitized")
        return cleaned.strip()
