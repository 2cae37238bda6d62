"""
Module: compositor.layout.half_plane

Purpose:
    Compute where a photo is drawn inside its half of the canvas.

    The canvas is split into two equal vertical halves. Each photo is
    cover-fitted to its half (aspect ratio kept, no letterboxing) and
    centred in it, then adjusted by its Transform about the centre of
    the half. The transform matrix is built in a fixed order:

        T(cx, cy) . R(rotation) . S(scale) . T(offset) . T(-cx, -cy)

    so a point is first moved to the half-centred frame, offset,
    scaled, rotated and moved back. Reordering these changes the
    visible result. No clip region is applied: a photo that overflows
    its half (wide photos, large scales, rotations) bleeds into the
    neighbouring half.

Key Classes:
    - DrawRect: Destination rectangle in canvas space
    - DrawSpec: Matrix + rectangle for one half

Key Functions:
    - layout_half(): Pure layout for one photo
    - half_origin(): Left edge of a half

Dependencies:
    - numpy: Matrices
    - compositor.layout.affine: Matrix helpers
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from pairframe.core.models import Transform

from ..config import CompositorConfig
from . import affine
from .transform import resolve_transform

logger = logging.getLogger(__name__)

LEFT_HALF = 0
RIGHT_HALF = 1


@dataclass(frozen=True, slots=True)
class DrawRect:
    """
    Axis-aligned rectangle before the transform is applied.

    Attributes:
        x: Left edge in canvas pixels (may be negative on overflow)
        y: Top edge in canvas pixels
        width: Drawn width in pixels
        height: Drawn height in pixels
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    @property
    def corners(self) -> Tuple[Tuple[float, float], ...]:
        """Corners clockwise from top-left."""
        right = self.x + self.width
        bottom = self.y + self.height
        return ((self.x, self.y), (right, self.y), (right, bottom), (self.x, bottom))


@dataclass(frozen=True, eq=False)
class DrawSpec:
    """
    How one photo is drawn (immutable).

    Attributes:
        half_index: 0 for the left half, 1 for the right
        matrix: 3x3 canvas-space transform applied to ``rect``
        rect: Cover-fitted rectangle centred in the half
    """

    half_index: int
    matrix: np.ndarray
    rect: DrawRect

    def corners(self) -> np.ndarray:
        """Rectangle corners after the transform, as a 4 x 2 array."""
        return affine.apply(self.matrix, self.rect.corners)

    def bounds(self) -> Tuple[float, float, float, float]:
        """(left, top, right, bottom) of the transformed rectangle."""
        pts = self.corners()
        return (
            float(pts[:, 0].min()),
            float(pts[:, 1].min()),
            float(pts[:, 0].max()),
            float(pts[:, 1].max()),
        )

    def source_matrix(self, source_size: Tuple[int, int]) -> np.ndarray:
        """
        Matrix mapping pixels of an image of ``source_size`` onto the canvas.

        The image is stretched to ``rect`` then transformed.
        """
        width, height = source_size
        return affine.compose(
            self.matrix,
            affine.translation(self.rect.x, self.rect.y),
            affine.scaling(self.rect.width / width, self.rect.height / height),
        )


def half_origin(half_index: int, config: CompositorConfig) -> int:
    if half_index not in (LEFT_HALF, RIGHT_HALF):
        raise ValueError(f"half_index must be 0 or 1: {half_index}")
    return half_index * config.half_width


def cover_fit(
    photo_size: Tuple[int, int],
    target_size: Tuple[int, int],
) -> Tuple[float, float]:
    """
    Scale ``photo_size`` to fill ``target_size`` keeping the aspect ratio.

    Photos relatively wider than the target get the target height and
    overflow horizontally; all others get the target width and overflow
    vertically.

    Example:
        >>> cover_fit((4000, 3000), (960, 1080))
        (1440.0, 1080.0)
    """
    width, height = photo_size
    target_width, target_height = target_size
    if width <= 0 or height <= 0:
        raise ValueError(f"Photo size must be positive: {photo_size}")

    ratio = width / height
    if ratio > target_width / target_height:
        return (target_height * ratio, float(target_height))
    return (float(target_width), target_width / ratio)


def half_matrix(
    half_index: int,
    transform: Transform,
    config: CompositorConfig,
) -> np.ndarray:
    """Transform matrix about the centre of the given half."""
    cx = half_origin(half_index, config) + config.half_width / 2
    cy = config.canvas_height / 2
    return affine.compose(
        affine.translation(cx, cy),
        affine.rotation(transform.rotation_degrees),
        affine.scaling(transform.scale),
        affine.translation(transform.offset.x, transform.offset.y),
        affine.translation(-cx, -cy),
    )


def layout_half(
    photo_size: Tuple[int, int],
    half_index: int,
    transform: Optional[Transform] = None,
    config: Optional[CompositorConfig] = None,
) -> DrawSpec:
    """
    Compute the draw specification for a photo in one half.

    Args:
        photo_size: Native (width, height) of the photo
        half_index: 0 = left, 1 = right
        transform: Optional adjustment (None = identity)
        config: Canvas geometry (defaults to 1920x1080)

    Returns:
        DrawSpec with the transform matrix and the centred cover rectangle

    Raises:
        ConfigurationError: If the transform is invalid
        ValueError: If the half index or photo size is invalid

    Example:
        >>> spec = layout_half((960, 1080), 1)
        >>> spec.rect
        DrawRect(x=960.0, y=0.0, width=960.0, height=1080.0)
    """
    config = config or CompositorConfig()
    resolved = resolve_transform(transform)
    origin = half_origin(half_index, config)

    draw_width, draw_height = cover_fit(photo_size, (config.half_width, config.canvas_height))
    rect = DrawRect(
        x=origin + (config.half_width - draw_width) / 2,
        y=(config.canvas_height - draw_height) / 2,
        width=draw_width,
        height=draw_height,
    )

    logger.debug(
        f"Half {half_index}: photo {photo_size[0]}x{photo_size[1]} -> "
        f"rect ({rect.x:.1f}, {rect.y:.1f}, {rect.width:.1f}x{rect.height:.1f}), "
        f"rotation={resolved.rotation_degrees}, scale={resolved.scale}"
    )

    return DrawSpec(
        half_index=half_index,
        matrix=half_matrix(half_index, resolved, config),
        rect=rect,
    )
