"""
Module: compositor.output

Purpose:
    Packaging of finished composites.

Key Functions:
    - write_composites_zip(): Write processed_images.zip
    - build_archive(): In-memory archive bytes
"""

from .zip_writer import (
    DEFAULT_ARCHIVE_NAME,
    archive_entry_names,
    build_archive,
    write_composites_zip,
)

__all__ = [
    "DEFAULT_ARCHIVE_NAME",
    "archive_entry_names",
    "build_archive",
    "write_composites_zip",
]
