"""
Module: compositor.output.zip_writer

Purpose:
    Package composites into a single ZIP archive, one entry per result.

    Archive structure:
        processed_images.zip
        ├── John Smith_combined.jpg
        ├── Jane Doe_combined.jpg
        └── ...

    Entry bytes are exactly ``CompositeResult.encoded_image``. Entries
    follow result order; a repeated name gets a " (2)", " (3)" ...
    suffix so no entry is overwritten.

Key Functions:
    - write_composites_zip(): Write the archive to disk
    - build_archive(): Build the archive in memory
    - archive_entry_names(): Deterministic entry names for results

Dependencies:
    - zipfile (std)

Used By:
    - cli: Final packaging step
"""

from __future__ import annotations

import logging
import zipfile
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Dict, List, Sequence, Union

from pairframe.core.models import CompositeResult
from pairframe.core.models.results import ARCHIVE_ENTRY_SUFFIX

logger = logging.getLogger(__name__)

DEFAULT_ARCHIVE_NAME = "processed_images.zip"


def archive_entry_names(results: Sequence[CompositeResult]) -> List[str]:
    """
    Entry name for each result, in order.

    Example:
        >>> archive_entry_names(results)
        ['John Smith_combined.jpg', 'John Smith (2)_combined.jpg']
    """
    seen: Dict[str, int] = {}
    names: List[str] = []
    for result in results:
        count = seen.get(result.name, 0) + 1
        seen[result.name] = count
        if count == 1:
            names.append(result.archive_name)
        else:
            names.append(f"{result.name} ({count}){ARCHIVE_ENTRY_SUFFIX}")
    return names


def _write_entries(target: Union[Path, BinaryIO], results: Sequence[CompositeResult]) -> None:
    # JPEG data is already compressed; store entries as-is
    with zipfile.ZipFile(target, "w", zipfile.ZIP_STORED) as zf:
        for name, result in zip(archive_entry_names(results), results):
            zf.writestr(name, result.encoded_image)
            logger.debug(f"Added {name} ({result.size_bytes} bytes)")


def build_archive(results: Sequence[CompositeResult]) -> bytes:
    """Build the ZIP archive in memory and return its bytes."""
    buffer = BytesIO()
    _write_entries(buffer, results)
    return buffer.getvalue()


def write_composites_zip(
    results: Sequence[CompositeResult],
    output_path: Path,
) -> Path:
    """
    Write composites to a ZIP archive.

    Args:
        results: Composites in the order they should appear
        output_path: Target .zip file, or an existing directory in which
            ``processed_images.zip`` is created. ".zip" is appended when
            missing.

    Returns:
        Path to the created archive

    Raises:
        OSError: If the output path is not writable
    """
    output_path = Path(output_path)
    if output_path.is_dir():
        output_path = output_path / DEFAULT_ARCHIVE_NAME
    elif output_path.suffix != ".zip":
        output_path = output_path.with_suffix(".zip")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    logger.info(f"Creating ZIP archive at {output_path} ({len(results)} composites)")
    _write_entries(output_path, results)
    return output_path
