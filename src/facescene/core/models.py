"""Domain objects shared by the prompt builder, gateway and workflow."""

from dataclasses import dataclass, field
from enum import Enum

ANY = "Any"

AGE_RANGES = [ANY, "18-25", "26-35", "36-50", "51-65", "65+"]
GENDERS = [ANY, "Woman", "Man", "Non-binary"]
ETHNICITIES = [ANY, "Asian", "Black", "Caucasian", "Hispanic", "Middle Eastern", "Mixed"]
HAIR_COLORS = [ANY, "Black", "Brown", "Blonde", "Red", "Gray", "Other"]

EXPRESSIONS = [
    "Neutral",
    "Smiling",
    "Happy",
    "Excited",
    "Cute",
    "Surprised",
    "Thoughtful",
    "Confused",
    "Sad",
    "Angry",
]
STYLES = [
    "Default",
    "With a Pet",
    "With Food",
    "Playful",
    "Mysterious",
    "Charming",
    "Relaxed",
    "Emotional",
]

DEFAULT_EXPRESSION = "Neutral"
DEFAULT_STYLE = "Default"

# Only these formats are accepted for uploaded faces
UPLOAD_MIME_TYPES = ("image/jpeg", "image/png")


class FaceOrigin(str, Enum):
    """How a face entered the session."""

    GENERATED = "generated"
    UPLOADED = "uploaded"


@dataclass(frozen=True)
class FaceAttributes:
    """Structured description of the face to synthesize.

    Every enum field defaults to ``"Any"`` which means "unconstrained".
    """

    free_text: str = ""
    age_range: str = ANY
    gender: str = ANY
    ethnicity: str = ANY
    hair_color: str = ANY

    def is_default(self) -> bool:
        """Check whether nothing at all has been specified.

        Returns:
            True if free text is blank and every choice is "Any"
        """
        return not self.free_text.strip() and all(
            value == ANY
            for value in (self.age_range, self.gender, self.ethnicity, self.hair_color)
        )

    def has_description(self) -> bool:
        """Check if the free-text description is filled in."""
        return bool(self.free_text.strip())


@dataclass(frozen=True)
class ImagePayload:
    """Image returned by the gateway as a data URL plus its MIME type."""

    data_url: str
    mime_type: str


@dataclass(frozen=True)
class GeneratedFace:
    """A face available for compositing.

    ``image_data`` is a data URL and doubles as the identity used for
    history de-duplication.
    """

    image_data: str
    mime_type: str
    source_attributes: FaceAttributes = field(default_factory=FaceAttributes)
    origin: FaceOrigin = FaceOrigin.GENERATED


@dataclass(frozen=True)
class SceneRequest:
    """One compositing request, as typed by the user."""

    raw_prompt: str
    expression: str = DEFAULT_EXPRESSION
    style: str = DEFAULT_STYLE
