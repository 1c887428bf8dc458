# Basic tonal adjustments
import numpy as np

from ..config import settings
from ..utils.imaging import quantize
from ..utils.logger import get_logger
from .color import hue_shift_array
from .params import FilterParams

logger = get_logger(__name__)

TONAL_FIELDS = (
    "brightness",
    "contrast",
    "saturation",
    "temperature",
    "hue",
    "grayscale",
    "sepia",
)


def contrast_factor(contrast):
    """
    Contrast multiplier around mid-grey 128.

    The formula has a pole at contrast == 259; inputs are clamped to
    ENGINE_DEFAULTS['contrast_ceiling'] so the factor stays finite.
    """
    ceiling = settings.ENGINE_DEFAULTS["contrast_ceiling"]
    if contrast > ceiling:
        logger.warning("Contrast %s exceeds ceiling %s; clamping.", contrast, ceiling)
        contrast = ceiling
    return (259 * (contrast + 255)) / (255 * (259 - contrast))


class ImageAdjustments:
    """Per-pixel tonal adjustments, run as one fused stage."""

    @staticmethod
    def apply_tonal(src, dst, params):
        """
        Brightness, contrast, saturation, temperature, hue, grayscale and sepia
        in that order. Every step reads the values left by the previous step
        and channels are quantized once at the end. Neutral steps are skipped.
        """
        rgb = src[..., :3].astype(np.float64)
        r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]

        if params.brightness != settings.FILTER_DEFAULTS["brightness"]:
            factor = params.brightness / 100
            r = r * factor
            g = g * factor
            b = b * factor

        if params.contrast != settings.FILTER_DEFAULTS["contrast"]:
            factor = contrast_factor(params.contrast)
            r = factor * (r - 128) + 128
            g = factor * (g - 128) + 128
            b = factor * (b - 128) + 128

        if params.saturation != settings.FILTER_DEFAULTS["saturation"]:
            gray = 0.299 * r + 0.587 * g + 0.114 * b
            factor = params.saturation / 100
            r = gray + factor * (r - gray)
            g = gray + factor * (g - gray)
            b = gray + factor * (b - gray)

        if params.temperature != settings.FILTER_DEFAULTS["temperature"]:
            temp = params.temperature / 100
            r = r + temp * 30
            b = b - temp * 30

        if params.hue != settings.FILTER_DEFAULTS["hue"]:
            r, g, b = hue_shift_array(r, g, b, params.hue)

        if params.grayscale > 0:
            gray = 0.299 * r + 0.587 * g + 0.114 * b
            factor = params.grayscale / 100
            r = r * (1 - factor) + gray * factor
            g = g * (1 - factor) + gray * factor
            b = b * (1 - factor) + gray * factor

        if params.sepia > 0:
            factor = params.sepia / 100
            tr = 0.393 * r + 0.769 * g + 0.189 * b
            tg = 0.349 * r + 0.686 * g + 0.168 * b
            tb = 0.272 * r + 0.534 * g + 0.131 * b
            r = r * (1 - factor) + tr * factor
            g = g * (1 - factor) + tg * factor
            b = b * (1 - factor) + tb * factor

        dst[..., 0] = quantize(r)
        dst[..., 1] = quantize(g)
        dst[..., 2] = quantize(b)

    @staticmethod
    def adjust_brightness(image, value):
        """Scale RGB by ``value`` percent (100 = unchanged)."""
        return _single(image, brightness=value)

    @staticmethod
    def adjust_contrast(image, value):
        """Contrast around mid-grey (100 = unchanged)."""
        return _single(image, contrast=value)

    @staticmethod
    def adjust_saturation(image, value):
        """Blend toward luminance grey (100 = unchanged, 0 = grey)."""
        return _single(image, saturation=value)

    @staticmethod
    def adjust_temperature(image, value):
        """Warm (positive) or cool (negative) shift of red against blue."""
        return _single(image, temperature=value)

    @staticmethod
    def adjust_hue(image, degrees):
        """Rotate hue by ``degrees``."""
        return _single(image, hue=degrees)


def _single(image, **values):
    params = FilterParams(**values)
    if image is None or image.size == 0 or params.is_identity():
        return None if image is None else image.copy()
    result = image.copy()
    ImageAdjustments.apply_tonal(image, result, params)
    return result
