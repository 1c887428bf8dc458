"""Tests for the command-line entry point."""

import numpy as np
from PIL import Image

from photo_filters.main import build_parser, main, params_from_args
from photo_filters.processing.pipeline import apply_filters


def test_main_filters_file(tmp_path, random_rgba):
    """The CLI should load, filter and save an image."""
    src = tmp_path / "in.png"
    dst = tmp_path / "out.png"
    Image.fromarray(random_rgba).save(src)

    assert main([str(src), str(dst), "--sepia", "60", "--vignette", "40"]) == 0
    expected = apply_filters(random_rgba, {'sepia': 60, 'vignette': 40})
    np.testing.assert_array_equal(np.array(Image.open(dst)), expected)


def test_main_missing_input(tmp_path):
    """A missing input file should give exit code 1."""
    assert main([str(tmp_path / "missing.png"), str(tmp_path / "out.png")]) == 1
    assert not (tmp_path / "out.png").exists()


def test_main_out_of_range_still_runs(tmp_path, solid):
    """Out-of-range values are warned about but still applied."""
    src = tmp_path / "in.png"
    dst = tmp_path / "out.png"
    Image.fromarray(solid(2, 2, [100, 100, 100, 255])).save(src)
    assert main([str(src), str(dst), "--brightness", "250"]) == 0
    assert np.array(Image.open(dst))[0, 0].tolist() == [250, 250, 250, 255]


def test_look_option():
    """--look should select one look at the given intensity."""
    args = build_parser().parse_args(
        ["in.jpg", "out.jpg", "--vintage", "20", "--look", "lomo", "--look-intensity", "55"]
    )
    params = params_from_args(args)
    assert params.lomo == 55.0
    assert params.vintage == 0.0


def test_unset_options_are_neutral():
    """Options left out should stay neutral."""
    args = build_parser().parse_args(["in.jpg", "out.jpg", "--hue", "-30"])
    assert params_from_args(args).active_fields() == ['hue']
