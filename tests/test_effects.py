"""Tests for the spatial and tone-mapping effects."""

import numpy as np

from photo_filters.processing.effects import Effects
from photo_filters.processing.pipeline import FilterPipeline, apply_filters


def run(method, src, amount):
    dst = src.copy()
    method(src, dst, amount)
    return dst


class TestVignette:
    """Tests for the vignette effect."""

    def test_centre_pixel_unchanged(self, solid):
        """A pixel exactly at the centre should keep its value."""
        img = solid(4, 4, [180, 120, 60, 255])
        result = run(Effects.apply_vignette, img, 1.0)
        assert result[2, 2].tolist() == [180, 120, 60, 255]

    def test_corner_fully_dark(self, solid):
        """Full vignette should black out the farthest corner."""
        result = run(Effects.apply_vignette, solid(2, 2, [200, 200, 200, 255]), 1.0)
        assert result[0, 0].tolist() == [0, 0, 0, 255]

    def test_negative_factor_clamped(self, solid):
        """Intensities above 1 should clamp at black rather than wrap."""
        result = run(Effects.apply_vignette, solid(2, 2, [200, 200, 200, 255]), 2.0)
        assert result[0, 0, :3].tolist() == [0, 0, 0]


class TestHDR:
    """Tests for the power-law tone mapping."""

    def test_endpoints_fixed(self, solid):
        """Black and white should map to themselves."""
        img = solid(1, 2, [0, 0, 0, 255])
        img[0, 1] = [255, 255, 255, 255]
        result = run(Effects.apply_hdr, img, 1.0)
        np.testing.assert_array_equal(result, img)

    def test_midtones_darken(self, solid):
        """Full HDR should apply a 1.5 exponent to midtones."""
        result = run(Effects.apply_hdr, solid(1, 1, [128, 128, 128, 255]), 1.0)
        assert result[0, 0, :3].tolist() == [91, 91, 91]


class TestClarify:
    """Tests for the 8-neighbour unsharp mask."""

    def test_centre_sharpened_against_neighbours(self, solid):
        """The centre should move away from the neighbour mean."""
        img = solid(3, 3, [50, 50, 50, 255])
        img[1, 1] = [100, 100, 100, 255]
        result = run(Effects.apply_clarify, img, 1.0)
        assert result[1, 1, :3].tolist() == [150, 150, 150]

    def test_border_untouched(self, random_rgba):
        """Border pixels should never change."""
        result = run(Effects.apply_clarify, random_rgba, 1.0)
        np.testing.assert_array_equal(result[0], random_rgba[0])
        np.testing.assert_array_equal(result[-1], random_rgba[-1])
        np.testing.assert_array_equal(result[:, 0], random_rgba[:, 0])
        np.testing.assert_array_equal(result[:, -1], random_rgba[:, -1])

    def test_reads_frozen_source(self, random_rgba):
        """Each pixel should be sharpened against unmodified neighbours."""
        result = run(Effects.apply_clarify, random_rgba, 0.5)
        rgb = random_rgba[..., :3].astype(np.float64)
        y, x = 5, 7
        window = rgb[y - 1:y + 2, x - 1:x + 2]
        mean = (window.sum(axis=(0, 1)) - rgb[y, x]) / 8
        expected = np.clip(np.rint(rgb[y, x] + (rgb[y, x] - mean) * 0.5), 0, 255)
        np.testing.assert_array_equal(result[y, x, :3], expected)

    def test_small_images_unchanged(self, solid):
        """Images without interior pixels should be returned as-is."""
        img = solid(2, 5, [10, 20, 30, 40])
        np.testing.assert_array_equal(run(Effects.apply_clarify, img, 1.0), img)


class TestBlur:
    """Tests for the Gaussian blur."""

    def test_blur_keeps_flat_image(self, solid):
        """Blurring a flat image should not change it."""
        img = solid(16, 16, [90, 140, 30, 77])
        result = run(Effects.apply_blur, img, 3.0)
        np.testing.assert_allclose(result.astype(int), img.astype(int), atol=1)
        assert np.all(result[..., 3] == 77)

    def test_blur_smooths_checkerboard(self):
        """Blur should reduce local variance."""
        img = np.zeros((16, 16, 4), dtype=np.uint8)
        img[::2, ::2, :3] = 255
        img[1::2, 1::2, :3] = 255
        img[..., 3] = 255
        result = run(Effects.apply_blur, img, 2.0)
        assert result[..., :3].std() < img[..., :3].std() / 4



class TestPipelineGating:
    """Tests for effect values that must leave the image alone."""

    def test_clarify_zero_is_noop(self, random_rgba):
        """clarify=0 should skip the stage and return the input bytes."""
        result = FilterPipeline().execute(random_rgba, {'clarify': 0})
        assert 'clarify' not in result.stages_executed
        assert result.image.tobytes() == random_rgba.tobytes()
        np.testing.assert_array_equal(apply_filters(random_rgba, {'clarify': 0}), random_rgba)

    def test_sharpen_field_is_ignored(self, random_rgba):
        """A sharpen slider value has no effect on the pixels."""
        result = FilterPipeline().execute(random_rgba, {'sharpen': 50})
        assert result.stages_executed == []
        assert result.image.tobytes() == random_rgba.tobytes()
