"""
Module: photos

Purpose:
    Source photo and per-photo transform models. A SourcePhoto is what
    the file acquisition layer hands to the pipeline; its Transform is
    the optional rotate/scale/offset adjustment applied inside its half.

Key Classes:
    - Offset: Translation in the half-centred frame
    - Transform: Rotation (degrees), uniform scale, offset
    - SourcePhoto: Named raster source with optional transform

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - compositor.pairing: Sorting and pairing
    - compositor.layout.transform: Transform resolution
    - compositor.images.decoder: Raster decoding
    - compositor.loading.loader: Building photos from disk
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union


@dataclass(frozen=True, slots=True)
class Offset:
    """Translation (x, y) in pixels of the rotated and scaled half frame."""

    x: float = 0.0
    y: float = 0.0

    def __iter__(self):
        """Allow tuple unpacking: x, y = offset"""
        return iter((self.x, self.y))


@dataclass(frozen=True, slots=True)
class Transform:
    """
    Per-photo affine adjustment (immutable).

    Applied about the centre of the photo's half in the order
    rotate, scale, translate. Because the offset is applied after
    the scale, its on-canvas magnitude is multiplied by ``scale``.

    Attributes:
        rotation_degrees: Clockwise rotation in degrees (any real value)
        scale: Uniform scale factor, must be > 0 when rendered
        offset: Translation in the rotated/scaled frame

    Example:
        >>> t = Transform.from_dict({"rotation": 90, "scale": 1.5,
        ...                          "position": {"x": 10, "y": 0}})
        >>> t.offset.x
        10.0
    """

    rotation_degrees: float = 0.0
    scale: float = 1.0
    offset: Offset = field(default_factory=Offset)

    @classmethod
    def identity(cls) -> Transform:
        return cls()

    @property
    def is_identity(self) -> bool:
        return (
            self.rotation_degrees == 0
            and self.scale == 1
            and self.offset.x == 0
            and self.offset.y == 0
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the job-file keys (rotation/scale/position)."""
        return {
            "rotation": self.rotation_degrees,
            "scale": self.scale,
            "position": {"x": self.offset.x, "y": self.offset.y},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Transform:
        """
        Deserialize from the job-file form.

        Missing keys take identity defaults.

        Raises:
            ValueError: If a value is not numeric
        """
        position = data.get("position") or {}
        try:
            return cls(
                rotation_degrees=float(data.get("rotation", 0.0)),
                scale=float(data.get("scale", 1.0)),
                offset=Offset(
                    x=float(position.get("x", 0.0)),
                    y=float(position.get("y", 0.0)),
                ),
            )
        except (TypeError, AttributeError) as e:
            raise ValueError(f"Invalid transform payload {data!r}: {e}") from e


@dataclass(frozen=True, slots=True)
class SourcePhoto:
    """
    A photo supplied to the pipeline (immutable).

    Attributes:
        name: Filename used for sorting and display-name derivation
        source: Path to the image file, or its encoded bytes
        transform: Optional adjustment; None means identity

    Example:
        >>> photo = SourcePhoto("Smith_John_01.jpg", Path("left/Smith_John_01.jpg"))
        >>> photo.reference
        'left/Smith_John_01.jpg'
    """

    name: str
    source: Union[Path, bytes]
    transform: Optional[Transform] = None

    @property
    def reference(self) -> str:
        """Path string for file-backed photos, the name for in-memory ones."""
        if isinstance(self.source, Path):
            return self.source.as_posix()
        return self.name

    @classmethod
    def from_path(cls, path: Path, transform: Optional[Transform] = None) -> SourcePhoto:
        return cls(name=path.name, source=path, transform=transform)
