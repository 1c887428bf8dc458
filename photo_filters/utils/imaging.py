import numpy as np

from .errors import DimensionMismatchError


def as_rgba_array(buffer, width, height):
    """
    Views a caller-owned pixel buffer as a read-only (H, W, 4) uint8 array.

    Accepts bytes, bytearray, memoryview or a NumPy uint8 array (either flat or
    already shaped (H, W, 4)). No pixel data is copied when the input is
    already contiguous uint8, so the returned view is flagged read-only to
    keep the caller's buffer untouched.

    Raises:
        DimensionMismatchError: If the dimensions are negative or the buffer
            length is not width * height * 4.
    """
    width = int(width)
    height = int(height)
    if width < 0 or height < 0:
        raise DimensionMismatchError(
            f"Image dimensions must be non-negative, got {width}x{height}"
        )

    if isinstance(buffer, np.ndarray):
        if buffer.dtype != np.uint8:
            raise DimensionMismatchError(
                f"Pixel buffer must be uint8, got {buffer.dtype}"
            )
        flat = buffer.reshape(-1) if buffer.ndim != 1 else buffer
    else:
        flat = np.frombuffer(buffer, dtype=np.uint8)

    expected = width * height * 4
    if flat.size != expected:
        raise DimensionMismatchError(
            f"Pixel buffer has {flat.size} values, expected {expected} for {width}x{height} RGBA",
            expected=expected,
            actual=flat.size,
        )

    view = flat.reshape(height, width, 4).view()
    view.flags.writeable = False
    return view


def check_rgba_image(image):
    """Validates an (H, W, 4) uint8 image and returns it as a read-only view."""
    if not isinstance(image, np.ndarray) or image.ndim != 3 or image.shape[2] != 4:
        shape = getattr(image, 'shape', None)
        raise DimensionMismatchError(f"Expected an (H, W, 4) RGBA array, got shape {shape}")
    height, width = image.shape[:2]
    return as_rgba_array(np.ascontiguousarray(image), width, height)


def quantize(values):
    """
    Converts float channel values to uint8 the way an 8-bit clamped buffer
    stores them: NaN becomes 0, values are clamped to [0, 255] and rounded
    half to even.
    """
    values = np.nan_to_num(values, nan=0.0, posinf=255.0, neginf=0.0)
    return np.rint(np.clip(values, 0.0, 255.0)).astype(np.uint8)


def radial_distance_ratio(height, width):
    """
    Distance of every pixel from the image centre, divided by the
    centre-to-corner distance.

    Pixel (x, y) is measured at its integer coordinate against the centre
    (width / 2, height / 2).

    Returns:
        A float64 (height, width) array, or None when the centre-to-corner
        distance is zero (empty image).
    """
    center_x = width / 2
    center_y = height / 2
    max_distance = np.sqrt(center_x * center_x + center_y * center_y)
    if max_distance == 0:
        return None

    xs = np.arange(width, dtype=np.float64) - center_x
    ys = np.arange(height, dtype=np.float64) - center_y
    distance = np.sqrt(xs[np.newaxis, :] ** 2 + ys[:, np.newaxis] ** 2)
    return distance / max_distance
