# Hue rotation through HSV
"""
RGB -> HSV -> RGB hue rotation.

Value and saturation are taken straight from the 0-255 channel magnitudes,
so the reconstructed channels come back on the same 0-255 scale without any
rescaling. Achromatic colours (max == min) have no hue and pass through
unchanged.
"""

import math

import numpy as np


def hue_shift(rgb, angle):
    """Rotate the hue of a single (r, g, b) triple by ``angle`` degrees."""
    r, g, b = (float(c) for c in rgb)
    max_c = max(r, g, b)
    min_c = min(r, g, b)
    delta = max_c - min_c

    if delta == 0:
        return r, g, b

    saturation = 0.0 if max_c == 0 else delta / max_c
    value = max_c

    if max_c == r:
        hue = math.fmod((g - b) / delta, 6)
    elif max_c == g:
        hue = (b - r) / delta + 2
    else:
        hue = (r - g) / delta + 4

    hue = math.fmod(hue * 60 + angle, 360)
    if hue < 0:
        hue += 360

    c = value * saturation
    x = c * (1 - abs(math.fmod(hue / 60, 2) - 1))
    m = value - c

    if hue < 60:
        nr, ng, nb = c, x, 0.0
    elif hue < 120:
        nr, ng, nb = x, c, 0.0
    elif hue < 180:
        nr, ng, nb = 0.0, c, x
    elif hue < 240:
        nr, ng, nb = 0.0, x, c
    elif hue < 300:
        nr, ng, nb = x, 0.0, c
    else:
        nr, ng, nb = c, 0.0, x

    return nr + m, ng + m, nb + m


def hue_shift_array(r, g, b, angle):
    """
    Vectorized ``hue_shift`` over float64 channel planes.

    Returns new (r, g, b) arrays; pixels with zero chroma keep their input
    values.
    """
    max_c = np.maximum(np.maximum(r, g), b)
    min_c = np.minimum(np.minimum(r, g), b)
    delta = max_c - min_c
    chromatic = delta != 0

    # Placeholder divisors keep achromatic pixels out of 0/0; they are masked out below
    safe_delta = np.where(chromatic, delta, 1.0)
    safe_max = np.where(max_c == 0, 1.0, max_c)
    saturation = np.where(max_c == 0, 0.0, delta / safe_max)
    value = max_c

    hue = np.where(
        max_c == r,
        np.fmod((g - b) / safe_delta, 6),
        np.where(max_c == g, (b - r) / safe_delta + 2, (r - g) / safe_delta + 4),
    )
    hue = np.fmod(hue * 60 + angle, 360)
    hue = np.where(hue < 0, hue + 360, hue)

    c = value * saturation
    x = c * (1 - np.abs(np.fmod(hue / 60, 2) - 1))
    m = value - c
    zero = np.zeros_like(c)

    sectors = [hue < 60, hue < 120, hue < 180, hue < 240, hue < 300]
    nr = np.select(sectors, [c, x, zero, zero, x], default=c)
    ng = np.select(sectors, [x, c, c, x, zero], default=zero)
    nb = np.select(sectors, [zero, zero, x, c, c], default=x)

    return (
        np.where(chromatic, nr + m, r),
        np.where(chromatic, ng + m, g),
        np.where(chromatic, nb + m, b),
    )
