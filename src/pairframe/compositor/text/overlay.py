"""
Module: compositor.text.overlay

Purpose:
    Place and render the composite's text label in one of the four
    canvas corners.

    Placement (margin m, default 20; y is the text baseline):

        top-left      (m,             size + m)
        top-right     (W - width - m, size + m)
        bottom-left   (m,             H - m)
        bottom-right  (W - width - m, H - m)

    When an outline is requested it is drawn first, then the fill at
    the same anchor so the fill sits on top.

Key Classes:
    - TextPlacement: Anchor and style for one label

Key Functions:
    - place_text(): Pure placement from a measured width
    - load_font(): Resolve a TrueType font for family/size/style
    - draw_text(): Measure, place and render onto an image

Dependencies:
    - PIL: Font loading, text measurement and drawing

Used By:
    - compositor.renderer: Once per composite
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Tuple, Union

from PIL import Image, ImageDraw, ImageFont

from pairframe.core.models import TextOptions, TextPosition

from ..config import CompositorConfig

logger = logging.getLogger(__name__)

DEFAULT_MARGIN_PX = 20

# Pillow anchor: left edge, alphabetic baseline
BASELINE_ANCHOR = "ls"

FontType = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]


@dataclass(frozen=True, slots=True)
class TextPlacement:
    """
    Where and how a label is drawn.

    Attributes:
        x: Left edge of the text in canvas pixels
        y: Baseline of the text in canvas pixels
        text: Label text
        text_width: Measured advance width in pixels
        font_style: e.g. "bold 48px Arial"
        fill: Fill colour
        stroke_color: Outline colour, None when no outline is drawn
        stroke_width_px: Outline width, None when no outline is drawn
    """

    x: float
    y: float
    text: str
    text_width: float
    font_style: str
    fill: str
    stroke_color: Optional[str] = None
    stroke_width_px: Optional[float] = None

    @property
    def has_stroke(self) -> bool:
        return self.stroke_color is not None


def place_text(
    options: TextOptions,
    canvas_size: Tuple[int, int],
    text_width: float,
    *,
    margin: int = DEFAULT_MARGIN_PX,
) -> TextPlacement:
    """
    Compute the anchor for a label of known width.

    Args:
        options: Text options with ``text`` already resolved
        canvas_size: (width, height) of the canvas
        text_width: Measured width of the text in the chosen font
        margin: Distance from the canvas edge

    Returns:
        TextPlacement with anchor and rendering style

    Example:
        >>> p = place_text(TextOptions(enabled=True, text="Ann Lee",
        ...                position=TextPosition.BOTTOM_RIGHT), (1920, 1080), 200)
        >>> (p.x, p.y)
        (1700, 1060)
    """
    canvas_width, canvas_height = canvas_size
    position = options.position

    x = canvas_width - text_width - margin if position.is_right else margin
    y = options.size_px + margin if position.is_top else canvas_height - margin

    return TextPlacement(
        x=x,
        y=y,
        text=options.text or "",
        text_width=text_width,
        font_style=options.font_style,
        fill=options.fill_color,
        stroke_color=options.outline_color if options.stroke else None,
        stroke_width_px=options.outline_width_px if options.stroke else None,
    )


def _font_candidates(family: str, bold: bool, italic: bool) -> List[str]:
    """TrueType file names to try, most specific first."""
    style = {
        (True, True): ("Bold Italic", "BoldItalic", "bi", "BoldOblique"),
        (True, False): ("Bold", "Bold", "bd", "Bold"),
        (False, True): ("Italic", "Italic", "i", "Oblique"),
        (False, False): ("", "Regular", "", ""),
    }[(bold, italic)]
    spaced, joined, short, dejavu = style
    compact = family.replace(" ", "")

    candidates = [
        f"{family} {spaced}.ttf" if spaced else f"{family}.ttf",  # Arial Bold.ttf (Mac)
        f"{compact.lower()}{short}.ttf",                        # arialbd.ttf (Windows)
        f"{compact}-{joined}.ttf",                              # Roboto-Bold.ttf
        f"{compact}.ttf",
        f"DejaVuSans-{dejavu}.ttf" if dejavu else "DejaVuSans.ttf",
        "DejaVuSans.ttf",
    ]
    # Drop duplicates, keep order
    return list(dict.fromkeys(candidates))


@lru_cache(maxsize=32)
def load_font(family: str, size: int, bold: bool = False, italic: bool = False) -> FontType:
    """
    Load a TrueType font for the requested family and style.

    Falls back to DejaVu Sans, then to Pillow's built-in font when no
    candidate file can be found.

    Args:
        family: Font family name, e.g. "Arial"
        size: Size in pixels
        bold: Prefer a bold face
        italic: Prefer an italic face

    Returns:
        Font object
    """
    for font_name in _font_candidates(family, bold, italic):
        try:
            return ImageFont.truetype(font_name, size)
        except (IOError, OSError):
            continue

    logger.warning(f"Could not load TrueType font for {family!r}, using default")
    return ImageFont.load_default(size=size)


def measure_text(draw: ImageDraw.ImageDraw, text: str, font: FontType) -> float:
    """Advance width of ``text`` in ``font``."""
    return float(draw.textlength(text, font=font))


def _outline_width(stroke_width_px: float) -> int:
    # Canvas-style strokes straddle the glyph edge; Pillow only grows outward
    return max(1, math.ceil(stroke_width_px / 2))


def draw_text(
    image: Image.Image,
    options: TextOptions,
    config: Optional[CompositorConfig] = None,
) -> Optional[TextPlacement]:
    """
    Render the label onto ``image`` in place.

    Does nothing when the options are disabled or the text is empty.

    Args:
        image: Canvas to draw on
        options: Text options with ``text`` resolved
        config: Supplies the edge margin

    Returns:
        The TextPlacement used, or None if nothing was drawn
    """
    if not options.should_render:
        return None

    config = config or CompositorConfig()
    draw = ImageDraw.Draw(image)
    font = load_font(options.font, max(1, round(options.size_px)), options.bold, options.italic)
    text = options.text or ""

    placement = place_text(
        options,
        image.size,
        measure_text(draw, text, font),
        margin=config.text_margin,
    )

    anchor: Optional[str] = BASELINE_ANCHOR
    xy = (placement.x, placement.y)
    if not isinstance(font, ImageFont.FreeTypeFont):
        # Bitmap fonts have no baseline anchors; approximate with the top edge
        anchor = None
        xy = (placement.x, placement.y - options.size_px)

    if placement.has_stroke:
        width = _outline_width(placement.stroke_width_px)
        draw.text(
            xy,
            text,
            fill=placement.stroke_color,
            font=font,
            anchor=anchor,
            stroke_width=width,
            stroke_fill=placement.stroke_color,
        )

    draw.text(xy, text, fill=placement.fill, font=font, anchor=anchor)

    logger.debug(
        f"Drew text {text!r} at ({placement.x:.1f}, {placement.y:.1f}) "
        f"[{placement.font_style}, {options.position}]"
    )
    return placement
