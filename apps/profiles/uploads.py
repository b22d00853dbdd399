"""
Profile photo validation.

Checks the declared content type and size, then sniffs the actual bytes
with Pillow so a renamed text file cannot pass as an image. Accepted files
are written to MEDIA_ROOT by the model's ImageField on save.
"""

import logging

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
ALLOWED_IMAGE_TYPES = frozenset([
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
])
ALLOWED_IMAGE_FORMATS = frozenset(["JPEG", "PNG", "GIF", "WEBP"])
MAX_IMAGE_SIZE = 5 * 1024 * 1024  # 5 MB


class PhotoValidationError(Exception):
    """Raised when an uploaded file fails pre-save checks."""


def sniff_image_format(image_file):
    """
    Return the Pillow format name of ``image_file`` (e.g. ``"PNG"``).

    The file position is restored to the start afterwards so the storage
    backend can read it again.
    """
    try:
        image_file.seek(0)
        with Image.open(image_file) as img:
            fmt = img.format
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as exc:
        raise PhotoValidationError("Uploaded file is not a valid image.") from exc
    finally:
        image_file.seek(0)
    return fmt


def validate_photo(image_file):
    """
    Validate an ``UploadedFile`` before it is stored.

    Raises
    ------
    PhotoValidationError
        If content type, size, or actual image format is unacceptable.
    """
    content_type = getattr(image_file, "content_type", None)
    if content_type not in ALLOWED_IMAGE_TYPES:
        allowed = ", ".join(sorted(ALLOWED_IMAGE_TYPES))
        raise PhotoValidationError(
            f"Unsupported file type '{content_type}'. Allowed: {allowed}"
        )

    if image_file.size > MAX_IMAGE_SIZE:
        mb = MAX_IMAGE_SIZE // (1024 * 1024)
        raise PhotoValidationError(
            f"Image file size ({image_file.size:,} bytes) exceeds "
            f"the {mb} MB limit."
        )

    fmt = sniff_image_format(image_file)
    if fmt not in ALLOWED_IMAGE_FORMATS:
        logger.warning("Rejected upload %r: sniffed format %s", image_file.name, fmt)
        raise PhotoValidationError(f"Unsupported image format '{fmt}'.")
    return image_file
