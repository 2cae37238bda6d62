"""
Module: core.errors

Purpose:
    Exception taxonomy shared by every stage of the compositing pipeline.
    Each failure kind is fatal for the pair it occurs in; the batch
    pipeline re-raises it as a BatchError carrying the pair index.

Key Classes:
    - CompositorError: Base class for all pipeline failures
    - DecodeError: A source photo could not be decoded
    - ConfigurationError: Invalid transform, text options or filename
    - SurfaceError: The drawing surface could not be allocated
    - BatchError: Failure surfaced by the batch pipeline

Used By:
    - compositor.pairing, compositor.layout, compositor.renderer
    - compositor.controller: Wraps failures with the pair index
    - cli: Maps failures to exit codes
"""

from __future__ import annotations

from typing import Optional


class CompositorError(Exception):
    """Base class for compositing failures."""
    pass


class ConfigurationError(CompositorError):
    """Transform, text options or filename cannot be used as given."""
    pass


class SurfaceError(CompositorError):
    """Rendering surface could not be created."""
    pass


class DecodeError(CompositorError):
    """
    Source photo could not be decoded.

    Attributes:
        side: "left" or "right"
        filename: Name of the photo that failed
    """

    def __init__(self, side: str, filename: str, reason: str = "") -> None:
        message = f"Failed to load {side} image: {filename}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.side = side
        self.filename = filename


class BatchError(CompositorError):
    """
    Failure raised out of the batch pipeline.

    All results for pairs before ``pair_index`` have already been
    reported through the progress callback.

    Attributes:
        pair_index: Zero-based index of the pair that failed
        cause: Original exception
    """

    def __init__(self, pair_index: int, cause: Exception) -> None:
        super().__init__(f"Pair {pair_index} failed: {cause}")
        self.pair_index = pair_index
        self.cause = cause


class ValidationError(ConfigurationError):
    """Job file does not match its schema."""

    def __init__(
        self,
        message: str,
        path: str = "",
        errors: Optional[list[str]] = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.errors = errors or []
