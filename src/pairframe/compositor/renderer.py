"""
Module: compositor.renderer

Purpose:
    Produce one composite: two photos side by side on a white canvas,
    each in its own half with its own transform, plus an optional label,
    encoded as JPEG.

    Pipeline for one pair:
        Resolve transforms/text -> Allocate surface -> Decode both photos
        -> Draw left half -> Draw right half -> Draw label -> Encode

    All configuration problems are raised before the surface is touched.
    A decode failure on either side aborts the composite; no partial or
    placeholder image is produced.

Key Functions:
    - compose(): Build a CompositeResult for one pair
    - create_surface(): Allocate the background canvas
    - draw_half(): Warp one photo onto the canvas
    - encode_jpeg(): Encode the canvas

Dependencies:
    - PIL: Rasterization and JPEG encoding
    - compositor.layout: Half-plane geometry
    - compositor.text: Label rendering
    - compositor.images: Concurrent decoding

Used By:
    - compositor.controller: process_all()
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor
from io import BytesIO
from typing import Optional

import numpy as np
from PIL import Image

from pairframe.core.errors import ConfigurationError, SurfaceError
from pairframe.core.models import (
    CompositeResult,
    SourcePhoto,
    TextOptions,
    TransformPair,
)

from .config import CompositorConfig
from .images import decode_pair
from .layout import LEFT_HALF, RIGHT_HALF, DrawSpec, layout_half, resolve_transform
from .layout.affine import pillow_coefficients
from .text import draw_text

logger = logging.getLogger(__name__)


def create_surface(config: CompositorConfig) -> Image.Image:
    """
    Allocate the canvas filled with the background colour.

    Raises:
        SurfaceError: If the surface cannot be created
    """
    try:
        return Image.new("RGBA", config.canvas_size, config.background_color)
    except (ValueError, MemoryError, OSError) as e:
        raise SurfaceError(
            f"Could not create {config.canvas_width}x{config.canvas_height} surface: {e}"
        ) from e


def draw_half(canvas: Image.Image, photo: Image.Image, spec: DrawSpec) -> None:
    """
    Draw ``photo`` onto ``canvas`` according to ``spec`` (in place).

    The photo is warped in one step onto a transparent layer the size of
    the canvas and alpha-composited, so memory stays bounded by the
    canvas whatever the photo's aspect ratio. Photos at least twice the
    size of their cover rectangle are box-reduced first to avoid
    aliasing. Nothing is clipped to the half.
    """
    rect = spec.rect
    factor = int(min(photo.width / rect.width, photo.height / rect.height))
    if factor >= 2:
        photo = photo.reduce(factor)

    matrix = spec.source_matrix(photo.size)
    try:
        coefficients = pillow_coefficients(matrix)
    except np.linalg.LinAlgError as e:
        raise ConfigurationError(f"Transform for half {spec.half_index} is degenerate") from e

    layer = photo.transform(
        canvas.size,
        Image.Transform.AFFINE,
        coefficients,
        resample=Image.Resampling.BICUBIC,
        fillcolor=(0, 0, 0, 0),
    )
    canvas.alpha_composite(layer)


def encode_jpeg(canvas: Image.Image, config: CompositorConfig) -> bytes:
    """Encode the canvas as baseline JPEG at the configured quality."""
    buffer = BytesIO()
    canvas.convert("RGB").save(buffer, format="JPEG", quality=config.pillow_quality)
    return buffer.getvalue()


def compose(
    left: SourcePhoto,
    right: SourcePhoto,
    name: str,
    text_options: Optional[TextOptions] = None,
    config: Optional[CompositorConfig] = None,
    *,
    executor: Optional[Executor] = None,
) -> CompositeResult:
    """
    Build the composite for one pair.

    Args:
        left: Photo for the left half
        right: Photo for the right half
        name: Display name of the pair
        text_options: Label settings with ``text`` resolved; None = no label
        config: Canvas and encoding settings
        executor: Thread pool for the two decodes (temporary if None)

    Returns:
        CompositeResult holding the JPEG bytes

    Raises:
        ConfigurationError: Invalid transform or text options
        SurfaceError: Canvas could not be allocated
        DecodeError: Either photo could not be decoded

    Example:
        >>> result = compose(left, right, "John Smith")
        >>> Image.open(BytesIO(result.encoded_image)).size
        (1920, 1080)
    """
    config = config or CompositorConfig()
    text_options = text_options or TextOptions()

    left_transform = resolve_transform(left.transform, label=f"left photo {left.name}")
    right_transform = resolve_transform(right.transform, label=f"right photo {right.name}")
    if text_options.enabled and not text_options.text:
        raise ConfigurationError(f"Text is enabled for {name!r} but no text could be resolved")

    canvas = create_surface(config)
    left_image, right_image = decode_pair(left, right, executor)

    for half_index, image, transform in (
        (LEFT_HALF, left_image, left_transform),
        (RIGHT_HALF, right_image, right_transform),
    ):
        spec = layout_half(image.size, half_index, transform, config)
        draw_half(canvas, image, spec)

    draw_text(canvas, text_options, config)

    encoded = encode_jpeg(canvas, config)
    logger.debug(f"Composed {name!r}: {len(encoded)} bytes")

    return CompositeResult(
        encoded_image=encoded,
        name=name,
        left_source_ref=left.reference,
        right_source_ref=right.reference,
        text_options=text_options,
        transforms=TransformPair(left=left.transform, right=right.transform),
    )
