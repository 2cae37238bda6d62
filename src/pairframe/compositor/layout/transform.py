"""
Module: compositor.layout.transform

Purpose:
    Resolve the optional per-photo Transform into a complete, validated
    one before any drawing happens.

Key Functions:
    - resolve_transform(): Fill identity defaults and validate
"""

from __future__ import annotations

import math
from typing import Optional

from pairframe.core.errors import ConfigurationError
from pairframe.core.models import Transform


def resolve_transform(transform: Optional[Transform], *, label: str = "photo") -> Transform:
    """
    Return a complete Transform, identity when none was supplied.

    Any finite rotation is accepted (the rotation matrix wraps it mod 360).

    Args:
        transform: Transform supplied with the photo, or None
        label: Used in error messages (e.g. "left photo Smith_John_01.jpg")

    Raises:
        ConfigurationError: If scale is not a positive finite number or
            rotation/offset are not finite
    """
    if transform is None:
        return Transform.identity()

    if not math.isfinite(transform.scale) or transform.scale <= 0:
        raise ConfigurationError(f"Scale for {label} must be > 0, got {transform.scale}")
    values = (transform.rotation_degrees, transform.offset.x, transform.offset.y)
    if not all(math.isfinite(v) for v in values):
        raise ConfigurationError(f"Transform for {label} contains a non-finite value: {transform}")

    return transform
