"""Configuration management for Facescene.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the FACESCENE_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (FACESCENE_* prefix)
2. .env file in the project root
3. Default values defined in FacesceneConfig

Example .env file:
    FACESCENE_API_KEY=your-gemini-key
    FACESCENE_FACE_MODEL=imagen-4.0-generate-001
    FACESCENE_GRADIO_SERVER_PORT=7860

Credentials
-----------
``api_key`` is optional. When it is left unset the Google GenAI SDK falls back
to its own environment variables (GEMINI_API_KEY / GOOGLE_API_KEY).

Usage Example
-------------
    from facescene.core.config import config

    print(config.face_model)
    print(config.gradio_server_port)
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FacesceneConfig(BaseSettings):
    """Main configuration for Facescene.

    Attributes
    ----------
    Service Settings:
        api_key : str | None
            Gemini API key (falls back to the SDK's own env lookup)
        face_model : str
            Image model used for face synthesis
        scene_model : str
            Multimodal model used for scene compositing
        text_model : str
            Text model used for suggestions and prompt sanitization

    Face Synthesis Settings:
        face_output_mime_type : Literal["image/jpeg", "image/png"]
            Output format requested from the face model
        face_aspect_ratio : str
            Aspect ratio requested from the face model

    Suggestion Settings:
        max_suggestions : int
            Number of scene ideas kept from a suggestions response

    UI Settings:
        gradio_server_name : str
            Server bind address (0.0.0.0 for local network)
        gradio_server_port : int
            Server port (1024-65535)
        gradio_share : bool
            Create public gradio.live link (keep False for local-only)

    Examples
    --------
        >>> custom_config = FacesceneConfig(
        ...     face_output_mime_type="image/png",
        ...     gradio_server_port=7861,
        ... )
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="FACESCENE_",
        case_sensitive=False,
    )

    # Service settings
    api_key: str | None = Field(
        default=None,
        description="Gemini API key (None lets the SDK read GEMINI_API_KEY/GOOGLE_API_KEY)",
    )
    face_model: str = Field(
        default="imagen-4.0-generate-001",
        description="Image generation model for face synthesis",
    )
    scene_model: str = Field(
        default="gemini-2.5-flash-image-preview",
        description="Image editing model for scene compositing",
    )
    text_model: str = Field(
        default="gemini-2.5-flash",
        description="Text model for suggestions and scene prompt sanitization",
    )

    # Face synthesis settings
    face_output_mime_type: Literal["image/jpeg", "image/png"] = Field(
        default="image/jpeg",
        description="Output format requested from the face model",
    )
    face_aspect_ratio: str = Field(
        default="1:1",
        description="Aspect ratio requested from the face model",
    )

    # Suggestion settings
    max_suggestions: int = Field(
        default=3,
        description="Number of scene ideas kept from a suggestions response",
        ge=1,
        le=10,
    )

    # UI settings
    gradio_server_name: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    gradio_server_port: int = Field(
        default=7860,
        description="Server port",
        ge=1024,
        le=65535,
    )
    gradio_share: bool = Field(
        default=False,
        description="Create public gradio.live link (keep False for local-only)",
    )


# Global configuration instance
config = FacesceneConfig()
