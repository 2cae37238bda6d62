"""
pairframe Core Package

Shared data models, error taxonomy and job-file schema validation.
Nothing in this package touches pixels; rendering lives in
``pairframe.compositor``.
"""

from .errors import (
    CompositorError,
    ConfigurationError,
    DecodeError,
    SurfaceError,
    BatchError,
    ValidationError,
)
from .models import (
    Offset,
    Transform,
    SourcePhoto,
    TextOptions,
    TextPosition,
    PhotoPair,
    TransformPair,
    CompositeResult,
)

__all__ = [
    "CompositorError",
    "ConfigurationError",
    "DecodeError",
    "SurfaceError",
    "BatchError",
    "ValidationError",
    "Offset",
    "Transform",
    "SourcePhoto",
    "TextOptions",
    "TextPosition",
    "PhotoPair",
    "TransformPair",
    "CompositeResult",
]
