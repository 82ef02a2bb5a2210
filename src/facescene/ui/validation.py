"""Validation utilities for Facescene UI inputs."""

import logging

from facescene.core.models import UPLOAD_MIME_TYPES, FaceAttributes

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """User-friendly validation error.

    This exception is raised when user input fails validation.
    The message is intended to be displayed directly to the user.
    """

    pass


def validate_face_attributes(attrs: FaceAttributes) -> None:
    """Ensure the face form says something about the face.

    Args:
        attrs: Face attributes from the form

    Raises:
        ValidationError: If free text is blank and every choice is "Any"
    """
    if attrs.is_default():
        raise ValidationError("Please provide a description for the face.")


def validate_scene_prompt(prompt: str) -> None:
    """Ensure a scene description was typed.

    Args:
        prompt: Scene text

    Raises:
        ValidationError: If the text is blank
    """
    if not prompt or not prompt.strip():
        raise ValidationError("Please provide a description for the lifestyle scene.")


def validate_upload_mime(mime_type: str | None) -> None:
    """Ensure an uploaded face is a JPEG or PNG.

    Args:
        mime_type: Detected MIME type of the upload

    Raises:
        ValidationError: If the type is missing or not accepted
    """
    if mime_type not in UPLOAD_MIME_TYPES:
        logger.warning(f"Rejected upload with MIME type: {mime_type}")
        raise ValidationError("Please upload a valid image file (JPEG or PNG).")


def validate_suggestion_inputs(attrs: FaceAttributes, topic: str) -> None:
    """Ensure scene ideas can be requested.

    Args:
        attrs: Face attributes (the free-text description is required)
        topic: Topic for the ideas

    Raises:
        ValidationError: If description or topic is blank
    """
    if not attrs.has_description():
        raise ValidationError("Please provide a face description first.")
    if not topic or not topic.strip():
        raise ValidationError("Please enter a topic for scene ideas.")


def validate_choice(value: str, choices: list[str], label: str) -> None:
    """Ensure a dropdown value is one of its options.

    Args:
        value: Selected value
        choices: Allowed values
        label: Field name used in the message

    Raises:
        ValidationError: If the value is not allowed
    """
    if value not in choices:
        raise ValidationError(f"Invalid {label}: {value}")
