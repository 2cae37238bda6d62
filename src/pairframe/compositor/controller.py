"""
Module: compositor.controller

Purpose:
    Orchestrate a batch: Pair -> (Compose -> Report progress -> Yield)*

    Composites are produced strictly one after another so only one
    canvas is alive at a time and progress is deterministic. Any failure
    stops the batch and is raised as a BatchError carrying the index of
    the failing pair; results for earlier pairs have already been
    reported through the progress callback by then.

Key Functions:
    - process_all(): Composite every pair in order
    - process_photos(): Pair two photo collections, then process_all()
    - resolve_pair_text(): Per-pair label text

Dependencies:
    - compositor.pairing: Sorting and pairing
    - compositor.renderer: One composite per pair

Used By:
    - cli: Command-line entry point
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from typing import Callable, List, Optional, Sequence

from pairframe.core.errors import BatchError, CompositorError
from pairframe.core.models import CompositeResult, PhotoPair, SourcePhoto, TextOptions
from pairframe.core.models.text import DEFAULT_TEXT_COLOR

from .config import CompositorConfig
from .pairing import pair_photos
from .renderer import compose, create_surface

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]


def resolve_pair_text(options: TextOptions, display_name: str) -> TextOptions:
    """
    Text options for one pair.

    - enabled with explicit text: that text
    - enabled without text: the pair's display name
    - disabled: the display name is recorded but never drawn

    The fill colour defaults to #000000.

    Example:
        >>> resolve_pair_text(TextOptions(enabled=True), "John Smith").text
        'John Smith'
    """
    text = (options.text or display_name) if options.enabled else display_name
    return replace(options, text=text, color=options.color or DEFAULT_TEXT_COLOR)


def process_all(
    pairs: Sequence[PhotoPair],
    on_progress: Optional[ProgressCallback] = None,
    text_options: Optional[TextOptions] = None,
    config: Optional[CompositorConfig] = None,
    *,
    sleep: Callable[[float], None] = time.sleep,
) -> List[CompositeResult]:
    """
    Composite every pair in order.

    After each composite ``on_progress`` receives (i + 1) / total * 100,
    ending at exactly 100.0, then the pipeline pauses for
    ``config.yield_interval_s``.

    Args:
        pairs: Ordered pairs (see pair_photos())
        on_progress: Called once per finished composite
        text_options: Global label settings
        config: Pipeline configuration
        sleep: Pause function between composites

    Returns:
        One CompositeResult per pair, in pair order

    Raises:
        BatchError: First failure, with the index of the failing pair.
            The original error is available as ``cause``/``__cause__``.
            Unexpected errors (e.g. MemoryError) are wrapped the same
            way.

    Example:
        >>> results = process_all(pairs, on_progress=lambda p: print(f"{p:.0f}%"))
    """
    config = config or CompositorConfig()
    text_options = text_options or TextOptions()
    total = len(pairs)
    results: List[CompositeResult] = []

    if total == 0:
        logger.info("No pairs to process")
        return results

    start_time = time.perf_counter()
    logger.info(f"Starting batch of {total} composite(s)")

    # Fail before the first pair if no surface can be allocated at all
    try:
        create_surface(config).close()
    except CompositorError as e:
        raise BatchError(pairs[0].index, e) from e

    with ThreadPoolExecutor(max_workers=config.decode_workers, thread_name_prefix="decode") as pool:
        for position, pair in enumerate(pairs):
            try:
                display_name = pair.require_display_name()
                result = compose(
                    pair.left,
                    pair.right,
                    display_name,
                    resolve_pair_text(text_options, display_name),
                    config,
                    executor=pool,
                )
            except CompositorError as e:
                logger.error(f"Pair {pair.index} ({pair.label}) failed: {e}")
                raise BatchError(pair.index, e) from e
            except Exception as e:
                logger.exception(f"Pair {pair.index} ({pair.label}) failed unexpectedly")
                raise BatchError(pair.index, e) from e

            results.append(result)
            percent = (position + 1) / total * 100
            logger.info(f"Composed {display_name} ({position + 1}/{total})")
            if on_progress is not None:
                on_progress(percent)

            if config.yield_interval_s:
                sleep(config.yield_interval_s)

    elapsed = time.perf_counter() - start_time
    logger.info(f"Batch completed: {total} composite(s) in {elapsed:.2f}s")
    return results


def process_photos(
    left: Sequence[SourcePhoto],
    right: Sequence[SourcePhoto],
    on_progress: Optional[ProgressCallback] = None,
    text_options: Optional[TextOptions] = None,
    config: Optional[CompositorConfig] = None,
    *,
    sleep: Callable[[float], None] = time.sleep,
) -> List[CompositeResult]:
    """
    Pair two collections and composite every pair.

    Args:
        left: "Before" photos, drawn in the left half
        right: "After" photos, drawn in the right half
        on_progress: Called once per finished composite
        text_options: Global label settings
        config: Pipeline configuration

    Returns:
        min(len(left), len(right)) results in sorted-name order

    Raises:
        BatchError: If a left filename yields no display name or a
            composite fails; earlier pairs have been reported by then
    """
    config = config or CompositorConfig()
    pairs = pair_photos(
        left,
        right,
        marker=config.name_marker,
        require_marker=config.require_name_marker,
    )
    return process_all(pairs, on_progress, text_options, config, sleep=sleep)
