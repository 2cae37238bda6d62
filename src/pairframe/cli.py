"""
Command-line entry point.

    pairframe BEFORE_DIR AFTER_DIR [-o OUTPUT] [--job JOB.json] [label options]

Pairs the photos of the two directories, composites every pair and
writes ``processed_images.zip``.
"""

from __future__ import annotations

import argparse
import locale
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from pairframe import __version__
from pairframe.core.errors import CompositorError
from pairframe.core.models import TextOptions, TextPosition
from pairframe.compositor import (
    CompositorConfig,
    load_job,
    load_photos,
    process_photos,
    write_composites_zip,
)
from pairframe.compositor.output import DEFAULT_ARCHIVE_NAME

logger = logging.getLogger("pairframe")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pairframe",
        description="Combine paired before/after photos into side-by-side composites.",
    )
    parser.add_argument("left_dir", type=Path, help="Folder of 'before' photos (left half)")
    parser.add_argument("right_dir", type=Path, help="Folder of 'after' photos (right half)")
    parser.add_argument(
        "-o", "--output", type=Path, default=Path(DEFAULT_ARCHIVE_NAME),
        help=f"Output .zip file or directory (default: {DEFAULT_ARCHIVE_NAME})",
    )
    parser.add_argument("--job", type=Path, help="JSON job file with label settings and transforms")
    parser.add_argument("--quality", type=float, help="JPEG quality in (0, 1] (default: 0.9)")
    parser.add_argument(
        "--lenient-names", action="store_true",
        help="Accept filenames without the '_01' marker (uses the file stem)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    label = parser.add_argument_group("label")
    label.add_argument("--label", action="store_true", help="Draw a text label on each composite")
    label.add_argument("--text", help="Label text (default: name derived from the left filename)")
    label.add_argument("--font", help="Font family (default: Arial)")
    label.add_argument("--size", type=float, help="Font size in pixels (default: 48)")
    label.add_argument("--bold", action="store_true", default=None)
    label.add_argument("--italic", action="store_true", default=None)
    label.add_argument("--color", help="Fill colour (default: #000000)")
    label.add_argument(
        "--position", choices=[p.value for p in TextPosition],
        help="Corner the label is anchored to",
    )
    label.add_argument("--stroke", action="store_true", default=None, help="Outline the label")
    label.add_argument("--stroke-color", help="Outline colour (default: #FFFFFF)")
    label.add_argument("--stroke-width", type=float, help="Outline width in pixels (default: 2)")
    return parser


def _text_options(args: argparse.Namespace, base: Optional[TextOptions]) -> TextOptions:
    """Command-line label flags override the job file's label settings."""
    options = base or TextOptions()
    overrides = {
        "enabled": True if (args.label or args.text) else None,
        "text": args.text,
        "font": args.font,
        "size_px": args.size,
        "bold": args.bold,
        "italic": args.italic,
        "color": args.color,
        "position": TextPosition(args.position) if args.position else None,
        "stroke": args.stroke,
        "stroke_color": args.stroke_color,
        "stroke_width_px": args.stroke_width,
    }
    return replace(options, **{k: v for k, v in overrides.items() if v is not None})


def run(args: argparse.Namespace) -> int:
    job = load_job(args.job) if args.job else None

    config_kwargs = {"require_name_marker": not args.lenient_names}
    quality = args.quality if args.quality is not None else (job.jpeg_quality if job else None)
    if quality is not None:
        config_kwargs["jpeg_quality"] = quality
    if job and job.name_marker:
        config_kwargs["name_marker"] = job.name_marker
    config = CompositorConfig(**config_kwargs)

    left = load_photos(args.left_dir, job.left_transforms if job else None)
    right = load_photos(args.right_dir, job.right_transforms if job else None)
    text_options = _text_options(args, job.text_options if job else None)

    results = process_photos(
        left,
        right,
        on_progress=lambda percent: logger.info(f"Progress: {percent:.1f}%"),
        text_options=text_options,
        config=config,
    )
    if not results:
        logger.warning("No photo pairs found; nothing written")
        return 0

    archive = write_composites_zip(results, args.output)
    logger.info(f"Wrote {len(results)} composite(s) to {archive}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(message)s",
    )

    # Sort photo names with the user's collation rules
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logger.warning(f"Could not apply the user locale ({e}); sorting by code point")

    try:
        return run(args)
    except CompositorError as e:
        logger.error(str(e))
        return 1
    except ValueError as e:
        # Invalid config values from flags (e.g. --quality 2)
        logger.error(f"Invalid option: {e}")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
