import numpy as np
import pytest

from photo_filters.utils.errors import DimensionMismatchError
from photo_filters.utils.imaging import (
    as_rgba_array,
    check_rgba_image,
    quantize,
    radial_distance_ratio,
)


def test_quantize_rounds_half_to_even():
    """Quantization should match an 8-bit clamped buffer."""
    values = np.array([0.5, 1.5, 2.5, 127.5, 128.5, 254.5])
    assert quantize(values).tolist() == [0, 2, 2, 128, 128, 254]


def test_quantize_clamps_and_handles_nan():
    """Out of range values clamp; NaN becomes 0."""
    values = np.array([-20.0, 300.0, np.nan, np.inf, -np.inf])
    result = quantize(values)
    assert result.dtype == np.uint8
    assert result.tolist() == [0, 255, 0, 255, 0]


def test_as_rgba_array_from_bytes():
    """A flat byte buffer should be viewed as (H, W, 4)."""
    buffer = bytes(range(24))
    view = as_rgba_array(buffer, 3, 2)
    assert view.shape == (2, 3, 4)
    assert view[1, 0].tolist() == [12, 13, 14, 15]


def test_as_rgba_array_is_read_only():
    """The view must not allow writing into the caller's buffer."""
    data = np.zeros(16, dtype=np.uint8)
    view = as_rgba_array(data, 2, 2)
    with pytest.raises(ValueError):
        view[0, 0, 0] = 1
    assert data.flags.writeable


def test_as_rgba_array_length_mismatch():
    """A wrong-length buffer should raise DimensionMismatchError."""
    with pytest.raises(DimensionMismatchError) as exc_info:
        as_rgba_array(bytes(10), 2, 2)
    assert exc_info.value.expected == 16
    assert exc_info.value.actual == 10


def test_as_rgba_array_rejects_negative_and_non_uint8():
    """Negative sizes and wide dtypes are invalid."""
    with pytest.raises(DimensionMismatchError):
        as_rgba_array(b"", -1, 0)
    with pytest.raises(DimensionMismatchError):
        as_rgba_array(np.zeros(16, dtype=np.float32), 2, 2)


def test_check_rgba_image_shape():
    """Only (H, W, 4) arrays are accepted."""
    assert check_rgba_image(np.zeros((3, 5, 4), dtype=np.uint8)).shape == (3, 5, 4)
    with pytest.raises(DimensionMismatchError):
        check_rgba_image(np.zeros((3, 5), dtype=np.uint8))
    with pytest.raises(DimensionMismatchError):
        check_rgba_image([[1, 2, 3, 4]])


def test_radial_ratio_corner_and_centre():
    """Ratio is 0 at the centre pixel and 1 at the top-left corner."""
    ratio = radial_distance_ratio(4, 4)
    assert ratio[2, 2] == 0.0
    assert ratio[0, 0] == pytest.approx(1.0)


def test_radial_ratio_non_square():
    """The grid should be (height, width) and mirror around the centre."""
    ratio = radial_distance_ratio(6, 10)
    assert ratio.shape == (6, 10)
    assert ratio[3, 5] == 0.0
    assert ratio[3, 4] == pytest.approx(ratio[3, 6])
    assert ratio[2, 5] == pytest.approx(ratio[4, 5])


def test_radial_ratio_empty_image():
    """An empty image has no centre-to-corner distance."""
    assert radial_distance_ratio(0, 0) is None
