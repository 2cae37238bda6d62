"""
Module: compositor.loading.loader

Purpose:
    Build SourcePhoto collections from directories and read job files
    (label settings and per-photo transforms).

    Job file format (validated against job.schema.json):

        {
          "schema_version": 1,
          "jpeg_quality": 0.9,
          "name_marker": "_01",
          "text": {"enabled": true, "font": "Arial", "size": 48,
                   "position": "bottom-right", "stroke": true},
          "transforms": {
            "left":  {"Smith_John_01.jpg": {"rotation": 90, "scale": 1.2,
                                            "position": {"x": 0, "y": -40}}},
            "right": {}
          }
        }

Key Functions:
    - load_photos(): Image files in a directory as SourcePhotos
    - load_job(): Parse and validate a job file

Key Classes:
    - JobSettings: Parsed job file
    - LoaderError: Missing or unreadable inputs

Dependencies:
    - core.schemas: Job-file validation

Used By:
    - cli: Input acquisition
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from pairframe.core.errors import CompositorError, ConfigurationError
from pairframe.core.models import SourcePhoto, TextOptions, Transform
from pairframe.core.schemas import validate_job

logger = logging.getLogger(__name__)

IMAGE_SUFFIXES = frozenset({
    ".jpg", ".jpeg", ".png", ".webp", ".bmp", ".gif", ".tif", ".tiff",
})


class LoaderError(CompositorError):
    """Input directory or job file could not be read."""
    pass


@dataclass(frozen=True)
class JobSettings:
    """
    Parsed job file (immutable; transform maps are read-only views).

    Attributes:
        text_options: Label settings, None when the file has none
        left_transforms: Filename -> Transform for left photos
        right_transforms: Filename -> Transform for right photos
        jpeg_quality: Quality override in (0, 1], or None
        name_marker: Filename marker override, or None
    """

    text_options: Optional[TextOptions] = None
    left_transforms: Mapping[str, Transform] = field(default_factory=dict)
    right_transforms: Mapping[str, Transform] = field(default_factory=dict)
    jpeg_quality: Optional[float] = None
    name_marker: Optional[str] = None

    def __post_init__(self) -> None:
        # Copy so later changes to the caller's dicts cannot leak in
        object.__setattr__(self, "left_transforms", MappingProxyType(dict(self.left_transforms)))
        object.__setattr__(self, "right_transforms", MappingProxyType(dict(self.right_transforms)))


def load_photos(
    directory: Path,
    transforms: Optional[Mapping[str, Transform]] = None,
) -> List[SourcePhoto]:
    """
    Collect the image files in ``directory`` (non-recursive).

    Files are recognised by extension (case-insensitive); decoding is
    deferred to the compositor.

    Args:
        directory: Folder of photos
        transforms: Optional filename -> Transform mapping

    Returns:
        SourcePhotos in directory listing order (pairing sorts them)

    Raises:
        LoaderError: If ``directory`` is not a directory
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise LoaderError(f"Not a directory: {directory}")

    transforms = transforms or {}
    photos = [
        SourcePhoto.from_path(path, transforms.get(path.name))
        for path in directory.iterdir()
        if path.is_file() and path.suffix.lower() in IMAGE_SUFFIXES
    ]

    unused = set(transforms) - {p.name for p in photos}
    if unused:
        logger.warning(f"Transforms for unknown files in {directory}: {sorted(unused)}")

    logger.info(f"Found {len(photos)} photo(s) in {directory}")
    return photos


def _parse_transforms(data: Mapping[str, Any], side: str) -> Dict[str, Transform]:
    try:
        return {name: Transform.from_dict(t) for name, t in data.get(side, {}).items()}
    except ValueError as e:
        raise ConfigurationError(f"Invalid {side} transform: {e}") from e


def parse_job(data: Any) -> JobSettings:
    """
    Build JobSettings from parsed JSON.

    Raises:
        ValidationError: If ``data`` violates the job schema
    """
    validate_job(data)

    text_data = data.get("text")
    transforms = data.get("transforms", {})
    return JobSettings(
        text_options=TextOptions.from_dict(text_data) if text_data is not None else None,
        left_transforms=_parse_transforms(transforms, "left"),
        right_transforms=_parse_transforms(transforms, "right"),
        jpeg_quality=data.get("jpeg_quality"),
        name_marker=data.get("name_marker"),
    )


def load_job(path: Path) -> JobSettings:
    """
    Read and validate a job file.

    Raises:
        LoaderError: If the file cannot be read or is not JSON
        ValidationError: If the content violates the job schema
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise LoaderError(f"Cannot read job file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise LoaderError(f"Job file {path} is not valid JSON: {e}") from e

    settings = parse_job(data)
    logger.info(
        f"Loaded job {path.name}: {len(settings.left_transforms)} left / "
        f"{len(settings.right_transforms)} right transform(s)"
    )
    return settings
