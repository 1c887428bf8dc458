# Export functionality using Pillow
import os
from typing import Optional

import numpy as np
from PIL import Image

from ..config import settings
from ..utils.errors import FileIOError
from ..utils.imaging import check_rgba_image
from ..utils.logger import get_logger
from .image_loader import ImageMetadata

logger = get_logger(__name__)

# Formats that keep the alpha channel; everything else is flattened to RGB
ALPHA_FORMATS = ('.png', '.tif', '.tiff', '.webp')


def save_image(
    image_rgba: np.ndarray,
    file_path: str,
    quality: Optional[int] = None,
    png_compression: Optional[int] = None,
    metadata: Optional[ImageMetadata] = None,
) -> str:
    """Saves an RGBA pixel buffer to ``file_path`` using Pillow.

    The format follows the file extension. Alpha is dropped for formats that
    cannot store it (JPEG, BMP).

    Args:
        image_rgba (numpy.ndarray): (H, W, 4) uint8 image.
        file_path (str): Destination path including extension.
        quality (int): JPEG/WebP quality 1-100, defaults to IO_DEFAULTS.
        png_compression (int): PNG compression 0-9, defaults to IO_DEFAULTS.
        metadata (ImageMetadata): Optional EXIF/ICC data to embed.

    Returns:
        str: The path written.

    Raises:
        FileIOError: If the image cannot be written.
        DimensionMismatchError: If the array is not (H, W, 4) uint8.
    """
    if not file_path:
        raise FileIOError("Invalid file path provided for saving.", file_path=file_path)
    image_rgba = check_rgba_image(image_rgba)
    if image_rgba.size == 0:
        raise FileIOError("Cannot save an empty image.", file_path=file_path)

    if quality is None:
        quality = settings.IO_DEFAULTS["default_jpeg_quality"]
    if png_compression is None:
        png_compression = settings.IO_DEFAULTS["default_png_compression"]

    file_path = str(file_path)
    output_dir = os.path.dirname(file_path)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)

    ext = os.path.splitext(file_path)[1].lower()
    save_kwargs = {}
    if ext in ('.jpg', '.jpeg'):
        save_kwargs['quality'] = max(1, min(100, int(quality)))
        save_kwargs['optimize'] = True
    elif ext == '.png':
        save_kwargs['compress_level'] = max(0, min(9, int(png_compression)))
    elif ext in ('.tif', '.tiff'):
        save_kwargs['compression'] = 'tiff_lzw'
    elif ext == '.webp':
        save_kwargs['quality'] = max(0, min(100, int(quality)))

    if metadata is not None:
        if metadata.has_exif() and ext != '.bmp':
            save_kwargs['exif'] = metadata.exif_data
        if metadata.has_icc_profile() and ext != '.bmp':
            save_kwargs['icc_profile'] = metadata.icc_profile

    try:
        img = Image.fromarray(np.array(image_rgba, dtype=np.uint8))
        if ext not in ALPHA_FORMATS:
            img = img.convert('RGB')
        img.save(file_path, **save_kwargs)
    except (OSError, ValueError, KeyError) as e:
        # Pillow raises KeyError/ValueError for unknown extensions
        raise FileIOError(
            f"Could not save image to '{file_path}': {e}",
            file_path=file_path,
            original_error=e,
        ) from e

    logger.info("Saved image to '%s'", file_path)
    return file_path
