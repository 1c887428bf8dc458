# IO package initialization
from .image_loader import (
    load_image,
    extract_metadata,
    is_supported_file,
    ImageMetadata,
    SUPPORTED_EXTENSIONS,
)
from .image_saver import save_image, ALPHA_FORMATS

__all__ = [
    'load_image',
    'extract_metadata',
    'is_supported_file',
    'ImageMetadata',
    'SUPPORTED_EXTENSIONS',
    'save_image',
    'ALPHA_FORMATS',
]
