"""Helpers for image handles.

Images travel through the session as data URLs
(``data:<mime>;base64,<payload>``). This module converts between raw bytes,
data URLs and PIL images, and works out the MIME type of uploaded files.
"""

import base64
import binascii
import logging
from io import BytesIO
from pathlib import Path

from PIL import Image

logger = logging.getLogger(__name__)


def to_data_url(data: bytes, mime_type: str) -> str:
    """Encode raw image bytes as a data URL.

    Args:
        data: Raw image bytes
        mime_type: MIME type of the bytes

    Returns:
        Data URL string
    """
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def parse_data_url(data_url: str) -> tuple[bytes, str]:
    """Split a data URL into raw bytes and MIME type.

    Args:
        data_url: String of the form ``data:<mime>;base64,<payload>``

    Returns:
        Tuple of (raw_bytes, mime_type)

    Raises:
        ValueError: If the string is not a base64 data URL
    """
    header, sep, payload = data_url.partition(",")
    if not sep or not header.startswith("data:") or not header.endswith(";base64"):
        raise ValueError("Invalid base64 image URL provided.")

    mime_type = header[len("data:") : -len(";base64")]
    if not payload:
        raise ValueError("Invalid base64 image URL provided.")

    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid base64 image URL provided: {e}") from e

    return data, mime_type


def data_url_to_image(data_url: str | None) -> Image.Image | None:
    """Decode a data URL into a PIL image for display.

    Args:
        data_url: Data URL or None

    Returns:
        Loaded PIL image, or None when there is nothing to show
    """
    if not data_url:
        return None

    data, _ = parse_data_url(data_url)
    image = Image.open(BytesIO(data))
    image.load()
    return image


def detect_mime_type(path: str | Path) -> str | None:
    """Work out the MIME type of an uploaded file from its content.

    The file is opened and verified with Pillow. The file name is never
    trusted: anything Pillow cannot identify or verify has no MIME type.

    Args:
        path: Path to the uploaded file

    Returns:
        MIME type string, or None if the file is not a readable image
    """
    try:
        with Image.open(path) as image:
            image_format = image.format
            image.verify()
    except Exception as e:  # verify() raises assorted exception types
        logger.warning(f"Uploaded file is not a readable image: {path}: {e}")
        return None

    return Image.MIME.get(image_format or "")


def read_upload(path: str | Path) -> tuple[bytes, str | None]:
    """Read an uploaded file.

    Args:
        path: Path to the uploaded file (as provided by Gradio)

    Returns:
        Tuple of (file_bytes, mime_type)
    """
    path = Path(path)
    return path.read_bytes(), detect_mime_type(path)
