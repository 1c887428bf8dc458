# Spatial and tone-mapping effects
import numpy as np
import cv2

from ..config import settings
from ..utils.imaging import quantize, radial_distance_ratio


class Effects:
    """
    Effects applied after the tonal stage.

    Every method reads RGB from ``src`` and writes quantized RGB into ``dst``.
    ``src`` is never written, so neighbourhood reads always see the
    unmodified values from before the effect started.
    """

    @staticmethod
    def apply_vignette(src, dst, intensity):
        """Linear radial darkening, 1 at the centre and 1 - intensity at the corners."""
        height, width = src.shape[:2]
        ratio = radial_distance_ratio(height, width)
        if ratio is None:
            dst[..., :3] = src[..., :3]
            return
        vignette = 1 - ratio * intensity
        rgb = src[..., :3].astype(np.float64)
        dst[..., :3] = quantize(rgb * vignette[..., np.newaxis])

    @staticmethod
    def apply_hdr(src, dst, intensity):
        """Power-law tone mapping with exponent 1 + intensity / 2."""
        factor = 1 + intensity * 0.5
        rgb = src[..., :3].astype(np.float64)
        dst[..., :3] = quantize(np.power(rgb / 255, factor) * 255)

    @staticmethod
    def apply_clarify(src, dst, intensity):
        """
        Unsharp mask against the mean of the 8 neighbours.

        Only interior pixels change; the 1-pixel border is copied through.
        """
        dst[..., :3] = src[..., :3]
        height, width = src.shape[:2]
        if height < 3 or width < 3:
            return

        rgb = src[..., :3].astype(np.int32)
        surrounding = (
            rgb[:-2, :-2] + rgb[:-2, 1:-1] + rgb[:-2, 2:]
            + rgb[1:-1, :-2] + rgb[1:-1, 2:]
            + rgb[2:, :-2] + rgb[2:, 1:-1] + rgb[2:, 2:]
        ) / 8
        center = rgb[1:-1, 1:-1].astype(np.float64)
        sharpened = center + (center - surrounding) * intensity
        dst[1:-1, 1:-1, :3] = quantize(sharpened)

    @staticmethod
    def apply_blur(src, dst, radius):
        """Gaussian blur of the colour channels; ``radius`` is the sigma in px units."""
        sigma = radius * settings.ENGINE_DEFAULTS["blur_sigma_per_unit"]
        if src.size == 0 or sigma <= 0:
            dst[..., :3] = src[..., :3]
            return
        rgb = np.ascontiguousarray(src[..., :3])
        dst[..., :3] = cv2.GaussianBlur(rgb, (0, 0), sigmaX=sigma, borderType=cv2.BORDER_REFLECT)
