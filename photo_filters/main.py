# Application entry point
"""
Command-line front end: load an image, filter it, save the result.

Usage:
    python -m photo_filters.main input.jpg output.png --sepia 60 --vignette 40
    python -m photo_filters.main input.jpg output.jpg --look kodachrome
"""

import argparse
import sys

from photo_filters.config import settings
from photo_filters.io import extract_metadata, load_image, save_image
from photo_filters.processing import FilterParams, FilterPipeline
from photo_filters.utils import AppError, ErrorCategory, format_user_error, log_and_continue
from photo_filters.utils.logger import get_logger, set_level

logger = get_logger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="photo_filters",
        description="Apply photographic filters to an image.",
    )
    parser.add_argument("input", help="Source image path")
    parser.add_argument("output", help="Destination image path (format from extension)")

    filters = parser.add_argument_group("filters")
    for name in FilterParams.field_names():
        low, high = settings.FILTER_RANGES[name]
        filters.add_argument(
            f"--{name}",
            type=float,
            default=None,
            metavar="N",
            help=f"{low:g} to {high:g}, neutral {settings.FILTER_DEFAULTS[name]:g}",
        )

    parser.add_argument(
        "--look",
        choices=settings.LOOK_ORDER,
        help="Select a single preset look (resets the other looks)",
    )
    parser.add_argument(
        "--look-intensity",
        type=float,
        default=settings.LOOK_DEFAULT_INTENSITY,
        metavar="N",
        help="Intensity used with --look (default: %(default)g)",
    )
    parser.add_argument(
        "--quality",
        type=int,
        default=settings.IO_DEFAULTS["default_jpeg_quality"],
        help="JPEG/WebP quality (default: %(default)s)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def params_from_args(args):
    """Build FilterParams from parsed CLI arguments."""
    values = {name: getattr(args, name) for name in FilterParams.field_names()}
    params = FilterParams.from_dict(values)
    if args.look:
        params = params.with_look(args.look, args.look_intensity)
    return params


def main(argv=None):
    """Run the CLI; returns the process exit code."""
    args = build_parser().parse_args(argv)
    if args.verbose:
        set_level("DEBUG")

    try:
        params = params_from_args(args)
        for name in params.out_of_range_fields():
            low, high = settings.FILTER_RANGES[name]
            log_and_continue(
                f"{name}={getattr(params, name):g} is outside {low:g}..{high:g}",
                category=ErrorCategory.USER_INPUT,
            )

        image = load_image(args.input)
        result = FilterPipeline().execute(image, params)
        save_image(
            result.image,
            args.output,
            quality=args.quality,
            metadata=extract_metadata(args.input),
        )
    except AppError as e:
        logger.error(format_user_error(e))
        return 1

    logger.info(
        "Applied %s in %.2fs",
        ", ".join(result.stages_executed) or "no filters",
        result.total_time,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
