#!/usr/bin/env python3
"""
ScanDeskew CLI — straighten scanned pages from the terminal.

Usage:
    python -m scandeskew <command> [options]

Commands:
    deskew      Write a deskewed copy of an image
    angle       Print the correction angle for an image
    scores      Print the score of every candidate angle

Examples:
    scandeskew-cli deskew page.jpg -o page_straight.png
    scandeskew-cli deskew page.jpg -o out.png --method hough --preprocessing enhanced
    scandeskew-cli angle page.jpg --min-angle -10 --max-angle 10 --step 0.25
    scandeskew-cli -v scores page.jpg --step 1
"""

import argparse
import logging
import sys
from pathlib import Path

from scandeskew.config import (
    ANGLE_METHODS,
    APP_NAME,
    APP_VERSION,
    CLI_PROG,
    LOG_DATE_FORMAT,
    LOG_FORMAT,
    PREPROCESSING_VARIANTS,
    DeskewConfig,
)
from scandeskew.utils.exceptions import ScanDeskewError
from scandeskew.utils.i18n import _

# ---------------------------------------------------------------------------
# Argument parser construction
# ---------------------------------------------------------------------------


def _add_search_options(p: argparse.ArgumentParser) -> None:
    """Options shared by every command that estimates an angle."""
    defaults = DeskewConfig()
    p.add_argument("input", type=Path, help=_("Input image file"))
    p.add_argument(
        "--method",
        choices=ANGLE_METHODS,
        default=defaults.method,
        help=_("Angle estimator (default: %(default)s)"),
    )
    p.add_argument(
        "--preprocessing",
        choices=PREPROCESSING_VARIANTS,
        default=defaults.preprocessing,
        help=_("Preprocessing variant (default: %(default)s)"),
    )
    p.add_argument(
        "--min-angle",
        type=float,
        default=defaults.min_angle,
        help=_("First candidate angle in degrees (default: %(default)s)"),
    )
    p.add_argument(
        "--max-angle",
        type=float,
        default=defaults.max_angle,
        help=_("Last candidate angle in degrees (default: %(default)s)"),
    )
    p.add_argument(
        "--step",
        type=float,
        default=defaults.step,
        help=_("Candidate spacing in degrees (default: %(default)s)"),
    )
    p.add_argument(
        "--ink-threshold",
        type=int,
        default=defaults.ink_threshold,
        help=_("Gray level above which a pixel counts as ink (default: %(default)s)"),
    )
    p.add_argument(
        "--roi-fraction",
        type=float,
        default=defaults.roi_fraction,
        help=_("Fraction of the page kept for scoring (default: %(default)s)"),
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with subcommands."""
    p = argparse.ArgumentParser(
        prog=CLI_PROG,
        description=f"{APP_NAME} — automatic skew correction for scanned pages.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("-v", "--verbose", action="store_true", help=_("Verbose logging (DEBUG)"))
    p.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")

    sub = p.add_subparsers(dest="command", help=_("Available commands"))

    # --- deskew ---
    deskew_p = sub.add_parser("deskew", help=_("Write a deskewed copy of an image"))
    _add_search_options(deskew_p)
    deskew_p.add_argument("-o", "--output", type=Path, required=True, help=_("Output image file"))

    # --- angle ---
    angle_p = sub.add_parser("angle", help=_("Print the correction angle for an image"))
    _add_search_options(angle_p)

    # --- scores ---
    scores_p = sub.add_parser("scores", help=_("Print the score of every candidate angle"))
    _add_search_options(scores_p)

    return p


def _config_from_args(args: argparse.Namespace) -> DeskewConfig:
    return DeskewConfig(
        method=args.method,
        preprocessing=args.preprocessing,
        min_angle=args.min_angle,
        max_angle=args.max_angle,
        step=args.step,
        ink_threshold=args.ink_threshold,
        roi_fraction=args.roi_fraction,
    )


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def _cmd_deskew(args, logger) -> int:
    """Handle the 'deskew' command."""
    from scandeskew.services.image_buffer import load_image, save_image
    from scandeskew.services.skew import deskew_with_details

    config = _config_from_args(args)
    image = load_image(args.input)
    result = deskew_with_details(image, config)
    output = save_image(result.image, args.output)

    logger.info(f"Saved deskewed image to {output}")
    print(f"Rotated {result.angle:+.2f}°: {output}")
    return 0


def _cmd_angle(args, _logger) -> int:
    """Handle the 'angle' command."""
    from scandeskew.services.image_buffer import load_image
    from scandeskew.services.skew import detect_skew_angle

    config = _config_from_args(args)
    angle = detect_skew_angle(load_image(args.input), config)
    print(f"{angle:.2f}")
    return 0


def _cmd_scores(args, logger) -> int:
    """Handle the 'scores' command."""
    from scandeskew.services.image_buffer import load_image
    from scandeskew.services.skew import get_preprocessor, score_candidates

    config = _config_from_args(args)
    preprocessed = get_preprocessor(config.preprocessing)(load_image(args.input))
    table = score_candidates(preprocessed, config)

    logger.debug(f"Scored {len(table)} candidates")
    print(f"{'angle':>8}  {'score':>8}")
    for angle, score in table:
        print(f"{angle:>8.2f}  {score:>8.0f}")
    return 0


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    # Configure logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    logger = logging.getLogger("scandeskew.cli")

    if not args.input.exists():
        print(f"Error: {args.input} not found", file=sys.stderr)
        return 1

    handlers = {
        "deskew": _cmd_deskew,
        "angle": _cmd_angle,
        "scores": _cmd_scores,
    }

    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args, logger)
    except ScanDeskewError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
