"""
Module: compositor.layout

Purpose:
    Geometry for placing two photos on the split canvas.

Key Functions:
    - layout_half(): Draw specification for one photo
    - resolve_transform(): Validated transform with defaults
    - cover_fit(): Aspect-preserving fill size

Key Classes:
    - DrawSpec: Matrix + rectangle for one half
    - DrawRect: Destination rectangle

Dependencies:
    - numpy: Affine matrices

Used By:
    - compositor.renderer: Drawing each half
"""

from .transform import resolve_transform
from .half_plane import (
    LEFT_HALF,
    RIGHT_HALF,
    DrawRect,
    DrawSpec,
    cover_fit,
    half_origin,
    layout_half,
)

__all__ = [
    "resolve_transform",
    "LEFT_HALF",
    "RIGHT_HALF",
    "DrawRect",
    "DrawSpec",
    "cover_fit",
    "half_origin",
    "layout_half",
]
