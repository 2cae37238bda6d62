"""
Module: compositor.pairing

Purpose:
    Sort the two photo collections and pair them by rank, deriving the
    display name of each pair from the left filename.

    Pairing is by position after sorting, never by matching filenames.
    When the collections differ in length the excess is dropped.

Key Functions:
    - sort_photos(): Locale-aware sort by name
    - pair_photos(): Build ordered PhotoPairs
    - derive_display_name(): "Smith_John_01.jpg" -> "John Smith"

Dependencies:
    - locale (std)
    - core.models: SourcePhoto, PhotoPair

Used By:
    - compositor.controller: process_photos()
"""

from __future__ import annotations

import locale
import logging
from pathlib import PurePath
from typing import List, Sequence

from pairframe.core.errors import ConfigurationError
from pairframe.core.models import PhotoPair, SourcePhoto

logger = logging.getLogger(__name__)

DEFAULT_NAME_MARKER = "_01"


def _sort_key(photo: SourcePhoto) -> tuple[str, str]:
    # Casefolded collation first, raw name breaks ties deterministically
    return (locale.strxfrm(photo.name.casefold()), photo.name)


def sort_photos(photos: Sequence[SourcePhoto]) -> List[SourcePhoto]:
    """
    Return a new list sorted by casefolded name.

    Names are collated with ``locale.strxfrm`` under the process's
    LC_COLLATE setting. The CLI adopts the user's locale; otherwise
    Python starts in the C locale and the order is by code point.
    """
    return sorted(photos, key=_sort_key)


def derive_display_name(
    filename: str,
    *,
    marker: str = DEFAULT_NAME_MARKER,
    require_marker: bool = True,
) -> str:
    """
    Derive "<first> <last>" from a "<last>_<first><marker>..." filename.

    The filename is cut at the first occurrence of ``marker`` and the
    prefix split on "_"; the first token is the last name and the
    second the first name. Further tokens are ignored.

    Args:
        filename: Photo filename, e.g. "Smith_John_01.jpg"
        marker: Substring ending the name portion
        require_marker: If False, a filename without the marker falls
            back to its stem (extension removed)

    Returns:
        Display name, e.g. "John Smith"

    Raises:
        ConfigurationError: If the marker is missing (and required) or
            fewer than two name tokens are found

    Example:
        >>> derive_display_name("Smith_John_01.jpg")
        'John Smith'
    """
    if marker in filename:
        prefix = filename.split(marker, 1)[0]
    elif require_marker:
        raise ConfigurationError(
            f"Filename {filename!r} has no {marker!r} marker; expected '<last>_<first>{marker}...'"
        )
    else:
        prefix = PurePath(filename).stem

    tokens = prefix.split("_")
    if len(tokens) < 2 or not tokens[0] or not tokens[1]:
        raise ConfigurationError(
            f"Filename {filename!r} does not contain '<last>_<first>' before the marker"
        )

    last_name, first_name = tokens[0], tokens[1]
    return f"{first_name} {last_name}"


def pair_photos(
    left: Sequence[SourcePhoto],
    right: Sequence[SourcePhoto],
    *,
    marker: str = DEFAULT_NAME_MARKER,
    require_marker: bool = True,
) -> List[PhotoPair]:
    """
    Pair photos by rank after sorting each side independently.

    A left filename that yields no display name still produces a pair;
    its ConfigurationError is stored on the pair and raised by the batch
    pipeline once the earlier pairs are done.

    Args:
        left: Photos for the left half ("before")
        right: Photos for the right half ("after")
        marker: Name marker passed to derive_display_name()
        require_marker: Passed to derive_display_name()

    Returns:
        min(len(left), len(right)) PhotoPairs in sorted order
    """
    sorted_left = sort_photos(left)
    sorted_right = sort_photos(right)
    count = min(len(sorted_left), len(sorted_right))

    if len(sorted_left) != len(sorted_right):
        logger.warning(
            f"Pairing {count} photos (left={len(sorted_left)}, right={len(sorted_right)}); "
            f"{abs(len(sorted_left) - len(sorted_right))} unmatched photo(s) ignored"
        )

    pairs: List[PhotoPair] = []
    for index in range(count):
        left_photo = sorted_left[index]
        try:
            display_name = derive_display_name(
                left_photo.name, marker=marker, require_marker=require_marker
            )
        except ConfigurationError as e:
            logger.warning(f"Pair {index}: {e}")
            pairs.append(PhotoPair(index, left_photo, sorted_right[index], None, name_error=e))
            continue
        pairs.append(PhotoPair(index, left_photo, sorted_right[index], display_name))
        logger.debug(f"Pair {index}: {left_photo.name} + {sorted_right[index].name} -> {display_name}")

    return pairs
