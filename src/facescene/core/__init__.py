"""Core functionality for face synthesis and scene compositing.

This module provides the core components for Facescene:

- **Prompt builder**: Pure functions that assemble prompts from form fields
- **GenerationGateway**: Async exchanges with the Google GenAI service
- **SuggestionSanitizer**: Best-effort removal of facial descriptors
- **FacesceneConfig**: Configuration management using Pydantic Settings
- **config**: Global configuration instance (loads from environment variables)

Architecture Overview
---------------------
1. **Configuration Layer** (config.py):
   - Environment-based configuration using Pydantic Settings
   - All settings prefixed with FACESCENE_ in .env files

2. **Prompt Layer** (prompt_builder.py, models.py):
   - Closed option sets (age range, gender, style, expression, ...)
   - Deterministic prompt templates

3. **Service Layer** (gateway.py, sanitizer.py):
   - One request/response exchange per operation
   - Failures translated into errors.py exceptions

4. **Support Utilities**:
   - images.py: data URL encoding and upload MIME detection

Usage Example
-------------
    from facescene.core import GenerationGateway, build_face_prompt, config
    from facescene.core.models import FaceAttributes

    gateway = GenerationGateway.from_config(config)
    face = await gateway.generate_face(build_face_prompt(FaceAttributes(gender="Man")))
"""

from facescene.core.config import FacesceneConfig, config
from facescene.core.errors import (
    ConfigurationError,
    FacesceneError,
    GenerationFailed,
    SuggestionParseError,
)
from facescene.core.gateway import GenerationGateway
from facescene.core.prompt_builder import (
    build_face_prompt,
    build_scene_prompt,
    build_suggestion_prompt,
)
from facescene.core.sanitizer import SuggestionSanitizer

__all__ = [
    "ConfigurationError",
    "FacesceneConfig",
    "FacesceneError",
    "GenerationFailed",
    "GenerationGateway",
    "SuggestionParseError",
    "SuggestionSanitizer",
    "build_face_prompt",
    "build_scene_prompt",
    "build_suggestion_prompt",
    "config",
]
