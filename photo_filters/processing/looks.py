# Preset "look" transforms
"""
The eight compound colour-grading looks.

Each kernel reads RGB from ``src`` and writes quantized RGB into ``dst``
(both (H, W, 4) uint8; alpha is never written). ``intensity`` is the look's
slider value divided by 100. Looks compound: the pipeline feeds the output
of one look into the next in ``settings.LOOK_ORDER``.
"""

import numpy as np

from ..utils.imaging import quantize, radial_distance_ratio


def _channels(src):
    rgb = src[..., :3].astype(np.float64)
    return rgb[..., 0], rgb[..., 1], rgb[..., 2]


def _store(dst, r, g, b):
    dst[..., 0] = quantize(r)
    dst[..., 1] = quantize(g)
    dst[..., 2] = quantize(b)


def apply_vintage(src, dst, intensity):
    """Warm, faded film grade."""
    r, g, b = _channels(src)
    new_r = r * (1 + 0.3 * intensity) - g * 0.1 * intensity
    new_g = g * (1 + 0.1 * intensity) - b * 0.05 * intensity
    new_b = b * (1 - 0.2 * intensity) + r * 0.1 * intensity
    _store(dst, new_r, new_g, new_b)


def apply_drama(src, dst, intensity):
    """High contrast with brightness amplification."""
    r, g, b = _channels(src)
    factor = 1 + intensity * 0.5
    contrast = 1 + intensity * 0.3
    _store(
        dst,
        ((r - 128) * contrast + 128) * factor,
        ((g - 128) * contrast + 128) * factor,
        ((b - 128) * contrast + 128) * factor,
    )


def apply_lomo(src, dst, intensity):
    """Lomography colour shift with a built-in radial vignette."""
    height, width = src.shape[:2]
    ratio = radial_distance_ratio(height, width)
    if ratio is None:
        dst[..., :3] = src[..., :3]
        return
    vignette = 1 - ratio * intensity * 0.7
    r, g, b = _channels(src)
    _store(
        dst,
        r * (1 + intensity * 0.2) * vignette,
        g * (1 - intensity * 0.1) * vignette,
        b * (1 - intensity * 0.3) * vignette,
    )


def apply_cross_process(src, dst, intensity):
    """Slide film developed in negative chemistry."""
    r, g, b = _channels(src)
    new_r = r * (1 + intensity * 0.4) - g * intensity * 0.2
    new_g = g * (1 - intensity * 0.1) + r * intensity * 0.1
    new_b = b * (1 + intensity * 0.3) - r * intensity * 0.1
    _store(dst, new_r, new_g, new_b)


def apply_pinhole(src, dst, intensity):
    """Quadratic corner darkening."""
    height, width = src.shape[:2]
    ratio = radial_distance_ratio(height, width)
    if ratio is None:
        dst[..., :3] = src[..., :3]
        return
    darkening = ratio ** 2 * intensity
    keep = 1 - darkening
    r, g, b = _channels(src)
    _store(dst, np.maximum(0, r * keep), np.maximum(0, g * keep), np.maximum(0, b * keep))


def apply_kodachrome(src, dst, intensity):
    """Warm highlights, cool shadows."""
    r, g, b = _channels(src)
    luminance = 0.299 * r + 0.587 * g + 0.114 * b
    factor = luminance / 255
    _store(
        dst,
        r + intensity * 20 * factor,
        g + intensity * 10 * factor,
        b - intensity * 15 * (1 - factor),
    )


def apply_technicolor(src, dst, intensity):
    """Saturated three-strip colour."""
    r, g, b = _channels(src)
    new_r = r * (1 + intensity * 0.3) + g * intensity * 0.1
    new_g = g * (1 + intensity * 0.2) - r * intensity * 0.05
    new_b = b * (1 + intensity * 0.4) - g * intensity * 0.1
    _store(dst, new_r, new_g, new_b)


def apply_polaroid(src, dst, intensity):
    """Flat warm channel offsets."""
    r, g, b = _channels(src)
    _store(dst, r + intensity * 15, g + intensity * 10, b - intensity * 10)


# Look name -> (kernel, reads pixel coordinates)
LOOK_KERNELS = {
    "vintage": (apply_vintage, False),
    "drama": (apply_drama, False),
    "lomo": (apply_lomo, True),
    "cross": (apply_cross_process, False),
    "pinhole": (apply_pinhole, True),
    "kodachrome": (apply_kodachrome, False),
    "technicolor": (apply_technicolor, False),
    "polaroid": (apply_polaroid, False),
}
