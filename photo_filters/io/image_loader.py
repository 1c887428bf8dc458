# Image import functionality using Pillow
import os
from dataclasses import dataclass
from typing import Optional

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from ..utils.errors import ErrorCategory, FileIOError, handle_errors
from ..utils.logger import get_logger

logger = get_logger(__name__)

SUPPORTED_EXTENSIONS = ('.jpg', '.jpeg', '.png', '.tif', '.tiff', '.bmp', '.webp')
ORIENTATION_TAG = 0x0112


@dataclass
class ImageMetadata:
    """Metadata carried from a loaded file to its filtered copy."""
    exif_data: Optional[bytes] = None
    icc_profile: Optional[bytes] = None

    def has_exif(self) -> bool:
        return bool(self.exif_data)

    def has_icc_profile(self) -> bool:
        return bool(self.icc_profile)


def is_supported_file(file_path):
    return os.path.splitext(str(file_path))[1].lower() in SUPPORTED_EXTENSIONS


def load_image(file_path):
    """Loads an image file into an RGBA pixel buffer.

    EXIF orientation is applied and any colour mode (grayscale, palette, RGB,
    CMYK, ...) is converted to RGBA; images without transparency get an opaque
    alpha channel.

    Args:
        file_path (str): The path to the image file.

    Returns:
        numpy.ndarray: (H, W, 4) uint8 RGBA array.

    Raises:
        FileIOError: If the path is invalid, missing, or not a readable image.
    """
    if not isinstance(file_path, (str, os.PathLike)) or not str(file_path):
        raise FileIOError("Invalid file path provided.", file_path=file_path)

    file_path = str(file_path)
    if not os.path.isfile(file_path):
        raise FileIOError(f"File not found: '{file_path}'", file_path=file_path)

    try:
        with Image.open(file_path) as img:
            oriented = ImageOps.exif_transpose(img)
            if oriented.mode != 'RGBA':
                logger.debug("Converting image from mode '%s' to 'RGBA'.", oriented.mode)
                rgba = oriented.convert('RGBA')
            else:
                rgba = oriented
            image_np = np.array(rgba, dtype=np.uint8)
    except UnidentifiedImageError as e:
        raise FileIOError(
            f"Could not identify image file format or file is corrupted: '{file_path}'",
            file_path=file_path,
            original_error=e,
        ) from e
    except OSError as e:
        raise FileIOError(
            f"Error reading image '{file_path}': {e}",
            file_path=file_path,
            original_error=e,
        ) from e

    if image_np.size == 0:
        raise FileIOError(f"Loaded image is empty: '{file_path}'", file_path=file_path)

    logger.info("Loaded image '%s' (%dx%d)", file_path, image_np.shape[1], image_np.shape[0])
    return image_np


@handle_errors(fallback_value=ImageMetadata, category=ErrorCategory.FILE_IO, log_level="debug")
def extract_metadata(file_path):
    """Reads EXIF and ICC profile bytes; returns empty metadata when unreadable."""
    with Image.open(file_path) as img:
        exif = img.getexif()
        # Pixels are already upright after load_image
        if ORIENTATION_TAG in exif:
            exif[ORIENTATION_TAG] = 1
        return ImageMetadata(
            exif_data=exif.tobytes() if exif else None,
            icc_profile=img.info.get('icc_profile'),
        )
