"""
Module: compositor.config

Purpose:
    Configuration for the compositing pipeline. Immutable settings
    with validation on construction.

Key Classes:
    - CompositorConfig: Canvas geometry, encoding and batch pacing

Dependencies:
    - dataclasses (std)

Used By:
    - compositor.layout.half_plane: Canvas and half geometry
    - compositor.renderer: Background, encoding quality
    - compositor.controller: Yield interval, naming rules
"""

from __future__ import annotations

from dataclasses import dataclass


# 1080p landscape canvas, split into two portrait halves
DEFAULT_CANVAS_WIDTH_PX = 1920
DEFAULT_CANVAS_HEIGHT_PX = 1080
DEFAULT_JPEG_QUALITY = 0.9


@dataclass(frozen=True)
class CompositorConfig:
    """
    Configuration for compositing (immutable).

    Attributes:
        canvas_width: Output width in pixels (split into two halves)
        canvas_height: Output height in pixels
        background_color: Fill colour behind the photos
        jpeg_quality: Lossy quality factor in (0, 1]
        text_margin: Distance in pixels between a label and the canvas edge
        yield_interval_s: Pause after each composite in the batch
        name_marker: Substring terminating the name part of a filename
        require_name_marker: Reject filenames without ``name_marker``
        decode_workers: Threads used to decode the two photos of a pair

    Example:
        >>> config = CompositorConfig()
        >>> config.half_width
        960
    """

    # Canvas
    canvas_width: int = DEFAULT_CANVAS_WIDTH_PX
    canvas_height: int = DEFAULT_CANVAS_HEIGHT_PX
    background_color: str = "#FFFFFF"

    # Encoding
    jpeg_quality: float = DEFAULT_JPEG_QUALITY

    # Text
    text_margin: int = 20

    # Batch
    yield_interval_s: float = 0.05
    decode_workers: int = 2

    # Naming
    name_marker: str = "_01"
    require_name_marker: bool = True

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.canvas_width <= 0 or self.canvas_width % 2:
            raise ValueError(f"canvas_width must be positive and even: {self.canvas_width}")
        if self.canvas_height <= 0:
            raise ValueError(f"canvas_height must be positive: {self.canvas_height}")
        if not 0 < self.jpeg_quality <= 1:
            raise ValueError(f"jpeg_quality must be in (0, 1]: {self.jpeg_quality}")
        if self.text_margin < 0:
            raise ValueError(f"text_margin must be non-negative: {self.text_margin}")
        if self.yield_interval_s < 0:
            raise ValueError(f"yield_interval_s must be non-negative: {self.yield_interval_s}")
        if self.decode_workers < 1:
            raise ValueError(f"decode_workers must be at least 1: {self.decode_workers}")
        if not self.name_marker:
            raise ValueError("name_marker must not be empty")

    @property
    def half_width(self) -> int:
        """Width of each half-plane."""
        return self.canvas_width // 2

    @property
    def canvas_size(self) -> tuple[int, int]:
        return (self.canvas_width, self.canvas_height)

    @property
    def pillow_quality(self) -> int:
        """JPEG quality on Pillow's 1-100 scale."""
        return max(1, round(self.jpeg_quality * 100))
