"""
Module: compositor.loading

Purpose:
    Input acquisition: photo directories and job files.
"""

from .loader import (
    IMAGE_SUFFIXES,
    JobSettings,
    LoaderError,
    load_job,
    load_photos,
    parse_job,
)

__all__ = [
    "IMAGE_SUFFIXES",
    "JobSettings",
    "LoaderError",
    "load_job",
    "load_photos",
    "parse_job",
]
