"""Image processing utilities for the thumbnail pipeline."""

import os
from typing import Tuple

from PIL import Image

IMAGE_EXTENSIONS = ("jpg", "jpeg", "png")

_FORMATS = {
    "jpg": "JPEG",
    "jpeg": "JPEG",
    "png": "PNG",
}


def fit_within(
    size: Tuple[int, int], box: Tuple[int, int], allow_upscale: bool = False
) -> Tuple[int, int]:
    """
    Compute the aspect-preserving size of an image fitted into a bounding box.

    Args:
        size: Source (width, height)
        box: Bounding box (width, height)
        allow_upscale: Whether images smaller than the box are enlarged

    Returns:
        Target (width, height), never larger than the box
    """
    width, height = size
    box_width, box_height = box
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid image size: {width}x{height}")

    scale = min(box_width / width, box_height / height)
    if scale >= 1 and not allow_upscale:
        return width, height

    new_width = max(1, min(box_width, round(width * scale)))
    new_height = max(1, min(box_height, round(height * scale)))
    return new_width, new_height


def resize_to_thumbnail(
    img: "Image.Image", box: Tuple[int, int], allow_upscale: bool = False
) -> "Image.Image":
    """
    Resize an image to fit within the bounding box, keeping its aspect ratio.

    Args:
        img: PIL Image to resize
        box: Bounding box (width, height)
        allow_upscale: Whether images smaller than the box are enlarged

    Returns:
        Resized PIL Image
    """
    target = fit_within(img.size, box, allow_upscale)
    if target == img.size:
        return img.copy()
    return img.resize(target, Image.Resampling.LANCZOS)


def extension_of(name: str) -> str:
    """Return the extension of a file name without the dot."""
    return os.path.splitext(name)[1][1:]


def has_image_extension(name: str) -> bool:
    """Case-sensitive check against the supported image extensions."""
    return extension_of(name) in IMAGE_EXTENSIONS


def can_encode(format_type: str) -> bool:
    """Whether Pillow has an encoder for ``format_type``."""
    Image.init()
    return format_type.upper() in Image.SAVE


def output_format_for(name: str, fallback: str = "PNG") -> str:
    """
    Pillow format used to encode a thumbnail named ``name``.

    Unknown extensions use ``fallback``, or PNG when Pillow can only read
    that format (XPM, PSD, CUR...).
    """
    format_type = _FORMATS.get(extension_of(name).lower())
    if format_type:
        return format_type
    return fallback if can_encode(fallback) else "PNG"


def content_type_for(name: str) -> str:
    """MIME type for a thumbnail named ``name``."""
    return "image/jpeg" if output_format_for(name) == "JPEG" else "image/png"


def calculate_dest_key(name: str, dest_prefix: str) -> str:
    """
    Calculate destination key from a thumbnail name and a prefix.

    Args:
        name: Thumbnail file name
        dest_prefix: Destination prefix to add

    Returns:
        Destination key
    """
    name = name.lstrip("/")
    if dest_prefix:
        return f"{dest_prefix.rstrip('/')}/{name}"
    return name
