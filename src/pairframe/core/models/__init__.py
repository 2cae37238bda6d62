"""
Core Models Package

Immutable data models passed between pipeline stages.

All models in this package are frozen dataclasses, so a photo, its
transform and a finished composite can be handed between threads
without copying.
"""

from .photos import Offset, Transform, SourcePhoto
from .text import TextOptions, TextPosition
from .results import PhotoPair, TransformPair, CompositeResult

__all__ = [
    "Offset",
    "Transform",
    "SourcePhoto",
    "TextOptions",
    "TextPosition",
    "PhotoPair",
    "TransformPair",
    "CompositeResult",
]
