"""
Module: results

Purpose:
    Pairing and composite output models.

Key Classes:
    - PhotoPair: One left/right pairing with its display name
    - TransformPair: Transforms as supplied for the two halves
    - CompositeResult: Encoded composite plus the inputs that produced it

Dependencies:
    - dataclasses (std)

Used By:
    - compositor.pairing: Produces PhotoPairs
    - compositor.renderer: Produces CompositeResults
    - compositor.output.zip_writer: Consumes CompositeResults
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..errors import ConfigurationError
from .photos import SourcePhoto, Transform
from .text import TextOptions

ARCHIVE_ENTRY_SUFFIX = "_combined.jpg"


@dataclass(frozen=True, slots=True)
class PhotoPair:
    """
    Left and right photo at the same rank after sorting.

    A left filename that cannot be turned into a display name does not
    stop pairing; the error is kept on the pair and raised when the pair
    is reached in the batch.

    Attributes:
        index: Zero-based position in the batch
        left: Photo drawn in the left half
        right: Photo drawn in the right half
        display_name: "<first> <last>" derived from the left filename,
            None when it could not be derived
        name_error: Why the display name could not be derived
    """

    index: int
    left: SourcePhoto
    right: SourcePhoto
    display_name: Optional[str]
    name_error: Optional[ConfigurationError] = None

    @property
    def label(self) -> str:
        """Display name, or the left filename when none was derived."""
        return self.display_name or self.left.name

    def require_display_name(self) -> str:
        """
        Raises:
            ConfigurationError: If the display name could not be derived
        """
        if self.display_name is None:
            raise self.name_error or ConfigurationError(
                f"No display name for {self.left.name!r}"
            )
        return self.display_name


@dataclass(frozen=True, slots=True)
class TransformPair:
    left: Optional[Transform] = None
    right: Optional[Transform] = None


@dataclass(frozen=True)
class CompositeResult:
    """
    One finished composite (immutable).

    Attributes:
        encoded_image: JPEG bytes, 1920x1080
        name: Display name of the pair
        left_source_ref: Reference to the left photo
        right_source_ref: Reference to the right photo
        text_options: Text options applied (text always resolved)
        transforms: Transforms as supplied for each half

    Example:
        >>> result.archive_name
        'John Smith_combined.jpg'
    """

    encoded_image: bytes
    name: str
    left_source_ref: str
    right_source_ref: str
    text_options: TextOptions
    transforms: TransformPair

    @property
    def archive_name(self) -> str:
        """Entry name used when the result is packaged."""
        return f"{self.name}{ARCHIVE_ENTRY_SUFFIX}"

    @property
    def size_bytes(self) -> int:
        return len(self.encoded_image)
