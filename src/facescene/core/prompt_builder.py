"""Prompt templates for face synthesis, scene compositing and scene ideas.

Every function in this module is pure: identical inputs always produce
byte-identical prompts. No randomness, no clock, no I/O.

Face Prompt Structure
---------------------
The subject description is assembled from the face attributes in a fixed
order and then embedded in a photographic template::

    A 26-35, Caucasian Woman with Blonde hair who is wearing glasses
    ^ age + ethnicity  ^ gender  ^ hair clause  ^ free-text clause

Default ("Any") attributes and empty free text are simply left out. When no
gender is chosen the generic word "person" is used.

Scene Prompt Structure
----------------------
The scene prompt lists numbered requirements in priority order: identity
preservation first, then a subtle expression change, body consistency,
natural pose, lighting integration and finally the style clause.

Usage
-----
::

    prompt = build_face_prompt(FaceAttributes(gender="Woman", hair_color="Red"))
    scene = build_scene_prompt("reading in a sunny cafe", "Smiling", "With Food")
"""

from __future__ import annotations

from .errors import ConfigurationError
from .models import ANY, EXPRESSIONS, STYLES, FaceAttributes

# ---------------------------------------------------------------------------
# Fixed template text.
# ---------------------------------------------------------------------------

_FACE_TEMPLATE = (
    'Photorealistic masterpiece, 8K, DSLR studio headshot of a person described as: "{subject}". '
    "Shot with a prime lens, focusing sharply on the eyes. The lighting is soft and natural, "
    "revealing incredibly detailed skin texture, including subtle pores and imperfections. "
    "The hair should have realistic strands and flyaways. Ensure the final image has a natural "
    "human quality and avoids any hint of digital airbrushing, plastic-like skin, or artificial "
    "smoothness. The background is a simple, out-of-focus studio gray."
)

NEUTRAL_STYLE_CLAUSE = (
    "Standard photorealism: a natural, candid lifestyle photograph with no special "
    "stylistic treatment."
)

STYLE_CLAUSES: dict[str, str] = {
    "Default": NEUTRAL_STYLE_CLAUSE,
    "With a Pet": (
        "Incorporate a cute pet like a cat or dog, showing a heartwarming interaction."
    ),
    "With Food": (
        "Use beautifully presented food as a central prop to create a vibrant, natural scene."
    ),
    "Playful": (
        "Capture a sense of movement and energy. The pose should be dynamic and candid, "
        "not static."
    ),
    "Mysterious": (
        "Create intrigue by having the person turn partially or fully away from the camera."
    ),
    "Charming": (
        "Add a touch of coyness by partially obscuring the face, perhaps with a hand, "
        "a prop, or hair."
    ),
    "Relaxed": (
        "The mood should be calm and serene. A pose like looking up towards the sky or "
        "resting comfortably would be appropriate."
    ),
    "Emotional": (
        "Focus on conveying a specific, deep emotion. The expression and body language "
        "are key to telling a story."
    ),
}

_SCENE_TEMPLATE = """Integrate the person from the provided image into the following scene: "{scene}". The final image must be **hyper-realistic**.

Key requirements, in order of priority:
1.  **Identity Preservation (highest priority):** Perfectly maintain the person's unique facial features and identity from the original image. Do not change their face structure, eye shape, nose, or skin tone. If any other instruction conflicts with this one, this one wins.
2.  **Expression:** Change their expression to be subtly and naturally "{expression}". Keep the change small enough that the person is still unmistakably the same individual.
3.  **Body Consistency:** Generate a body that is consistent with the provided face. Pay attention to plausible body type, build, and skin tone that matches the face.
4.  **Natural Pose:** The pose and body language must be natural, relaxed, and appropriate to the activity and emotional tone of the scene. Avoid stiff or artificial postures.
5.  **Lighting & Integration:**
    -   Create a highly detailed environment with fine textures and depth.
    -   The lighting on the face and body must match the ambient lighting of the scene.
    -   Blend skin tones and textures seamlessly with the environment's lighting conditions.
    -   The final composition must look like a single, authentic photograph, not a composite.
6.  **Style ({style}):** {style_clause}"""

_SUGGESTION_TEMPLATE = """Based on the description of a person: "{face_description}", and the topic "{topic}", suggest exactly 3 highly detailed, creative, and aesthetic social media photo ideas.

The suggestions must be diverse, directly related to the provided topic, and each must embody a different photographic style. For each suggestion, provide a rich and inspiring scenario that incorporates:

1.  **Core Concept & Style:** Clearly define the style.
2.  **Specific Activity:** A descriptive action (e.g., "arranging a bouquet of fresh tulips", not just "with flowers").
3.  **Pose & Mood:** The pose and emotional tone (e.g., "captured mid-laugh while turning away", "a quiet moment of contemplation looking out a window").
4.  **Setting & Lighting:** The environment and lighting conditions (e.g., "in a cozy cafe during golden hour", "on a misty morning in a park").

Cover these three styles, one per suggestion:
- **With Props:** Using eye-catching food or a cute pet.
- **Playful & Dynamic:** Capturing movement and energy, such as turning away, partially hiding the face, or looking up at the sky.
- **Deep & Emotional:** A moody, story-driven image that conveys a feeling.

Do not describe the person's face, hair, age, or ethnicity. Each suggestion should be concise enough to be used as a prompt but detailed enough to be inspiring."""

SANITIZE_SYSTEM_INSTRUCTION = (
    "You edit prompts for an image model that places an existing person into a new scene. "
    "Remove every description of the person's face, facial features, hair, eye color, skin tone, "
    "age, gender, ethnicity, and facial expression from the user's text. Keep everything else "
    "unchanged: the activity, setting, clothing, props, pose, lighting, and mood. Do not add new "
    "content. Respond with JSON containing the edited text in the field 'cleanedPrompt'."
)

SANITIZE_RESPONSE_SCHEMA: dict = {
    "type": "OBJECT",
    "properties": {
        "cleanedPrompt": {
            "type": "STRING",
            "description": "The scene prompt with all facial and identity descriptors removed.",
        },
    },
    "required": ["cleanedPrompt"],
}

SUGGESTIONS_RESPONSE_SCHEMA: dict = {
    "type": "OBJECT",
    "properties": {
        "suggestions": {
            "type": "ARRAY",
            "items": {
                "type": "STRING",
                "description": (
                    "A single, detailed lifestyle photo suggestion incorporating activity, "
                    "lighting, and mood."
                ),
            },
            "description": "A list of 3 detailed lifestyle photo suggestions.",
        },
    },
    "required": ["suggestions"],
}


def describe_face(attrs: FaceAttributes) -> str:
    """Assemble the subject description for a face.

    Args:
        attrs: Face attributes; "Any" values and empty text are skipped

    Returns:
        Description such as "A 26-35, Asian Man with Black hair who is smiling"
    """
    parts: list[str] = []

    identity = [value for value in (attrs.age_range, attrs.ethnicity) if value != ANY]
    core = "A"
    if identity:
        core += f" {', '.join(identity)}"
    core += f" {attrs.gender}" if attrs.gender != ANY else " person"
    parts.append(core)

    if attrs.hair_color != ANY:
        parts.append(f"with {attrs.hair_color} hair")

    free_text = attrs.free_text.strip()
    if free_text:
        parts.append(f"who is {free_text}")

    return " ".join(parts)


def build_face_prompt(attrs: FaceAttributes) -> str:
    """Build the full face synthesis prompt.

    Args:
        attrs: Face attributes

    Returns:
        The subject description wrapped in the studio headshot template
    """
    return _FACE_TEMPLATE.format(subject=describe_face(attrs))


def style_clause(style: str) -> str:
    """Return the guidance text for a style.

    Args:
        style: One of the recognized style names

    Returns:
        Style guidance; "Default" maps to NEUTRAL_STYLE_CLAUSE

    Raises:
        ConfigurationError: If the style is not recognized
    """
    try:
        return STYLE_CLAUSES[style]
    except KeyError:
        raise ConfigurationError(
            f"Unknown style '{style}'. Choose one of: {', '.join(STYLES)}"
        ) from None


def check_scene_options(expression: str, style: str) -> None:
    """Reject expressions and styles outside their closed sets.

    Raises:
        ConfigurationError: If expression or style is not recognized
    """
    if expression not in EXPRESSIONS:
        raise ConfigurationError(
            f"Unknown expression '{expression}'. Choose one of: {', '.join(EXPRESSIONS)}"
        )
    style_clause(style)


def build_scene_prompt(sanitized_scene_prompt: str, expression: str, style: str) -> str:
    """Build the compositing prompt for a lifestyle scene.

    Args:
        sanitized_scene_prompt: Scene text with facial descriptors already removed
        expression: One of the recognized expressions
        style: One of the recognized styles

    Returns:
        The compositing prompt

    Raises:
        ConfigurationError: If expression or style is not recognized
    """
    check_scene_options(expression, style)
    clause = style_clause(style)

    return _SCENE_TEMPLATE.format(
        scene=sanitized_scene_prompt.strip(),
        expression=expression.lower(),
        style=style.lower(),
        style_clause=clause,
    )


def build_suggestion_prompt(face_description: str, topic: str) -> str:
    """Build the prompt asking for three scene ideas.

    Args:
        face_description: Description of the person
        topic: Topic the ideas should revolve around

    Returns:
        The instructional prompt
    """
    return _SUGGESTION_TEMPLATE.format(
        face_description=face_description.strip(), topic=topic.strip()
    )
