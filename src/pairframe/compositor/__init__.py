"""
Module: compositor

Purpose:
    Side-by-side compositing pipeline. Pairs two photo collections and
    renders one 1920x1080 JPEG per pair, each photo transformed inside
    its own half, with an optional corner label.

Key Functions:
    - process_photos(): Pair and composite two collections
    - process_all(): Composite pre-built pairs
    - pair_photos(): Sort and pair by rank
    - compose(): Single composite
    - write_composites_zip(): Package results

Key Classes:
    - CompositorConfig: Pipeline configuration

Dependencies:
    - PIL: Rasterization and encoding
    - numpy: Affine matrices
    - jsonschema: Job-file validation

Used By:
    - pairframe.cli: Command-line entry point
"""

from .config import CompositorConfig
from .pairing import pair_photos, derive_display_name, sort_photos
from .renderer import compose
from .controller import process_all, process_photos, resolve_pair_text
from .output import write_composites_zip, build_archive
from .loading import load_photos, load_job, JobSettings, LoaderError

__all__ = [
    # Config
    "CompositorConfig",
    # Pairing
    "pair_photos",
    "derive_display_name",
    "sort_photos",
    # Rendering
    "compose",
    # Controller
    "process_all",
    "process_photos",
    "resolve_pair_text",
    # Output
    "write_composites_zip",
    "build_archive",
    # Loading
    "load_photos",
    "load_job",
    "JobSettings",
    "LoaderError",
]
