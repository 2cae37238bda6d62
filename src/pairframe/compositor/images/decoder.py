"""
Module: compositor.images.decoder

Purpose:
    Decode source photos into RGBA Pillow images. The two photos of a
    pair are decoded concurrently on a thread pool and joined with
    first-failure-wins semantics: the compositor proceeds only when both
    decodes succeed, and the first failure is raised as soon as it
    happens.

Key Functions:
    - decode_photo(): Decode one SourcePhoto
    - decode_pair(): Decode left and right concurrently

Dependencies:
    - PIL: Decoding, EXIF orientation
    - concurrent.futures: Thread pool join

Used By:
    - compositor.renderer: compose()
"""

from __future__ import annotations

import logging
from concurrent.futures import FIRST_EXCEPTION, Executor, Future, ThreadPoolExecutor, wait
from io import BytesIO
from typing import Optional, Tuple

from PIL import Image, ImageOps, UnidentifiedImageError

from pairframe.core.errors import DecodeError
from pairframe.core.models import SourcePhoto

logger = logging.getLogger(__name__)

LEFT = "left"
RIGHT = "right"


def decode_photo(photo: SourcePhoto, side: str) -> Image.Image:
    """
    Fully decode a photo into an RGBA image.

    EXIF orientation is applied so portrait phone photos are upright.

    Args:
        photo: Photo to decode
        side: "left" or "right" (used in the error)

    Returns:
        Loaded RGBA image

    Raises:
        DecodeError: If the source is missing or not a decodable image
    """
    source = photo.source
    try:
        stream = BytesIO(source) if isinstance(source, (bytes, bytearray)) else source
        with Image.open(stream) as img:
            img.load()
            oriented = ImageOps.exif_transpose(img)
            decoded = oriented.convert("RGBA")
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as e:
        raise DecodeError(side, photo.name, str(e)) from e

    logger.debug(f"Decoded {side} photo {photo.name} ({decoded.width}x{decoded.height})")
    return decoded


def decode_pair(
    left: SourcePhoto,
    right: SourcePhoto,
    executor: Optional[Executor] = None,
) -> Tuple[Image.Image, Image.Image]:
    """
    Decode both photos of a pair concurrently.

    Args:
        left: Left photo
        right: Right photo
        executor: Pool to run on; a temporary two-thread pool is used
            when None

    Returns:
        (left_image, right_image)

    Raises:
        DecodeError: For whichever decode failed first
    """
    if executor is None:
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="decode") as pool:
            return decode_pair(left, right, pool)

    futures: Tuple[Future, Future] = (
        executor.submit(decode_photo, left, LEFT),
        executor.submit(decode_photo, right, RIGHT),
    )
    done, pending = wait(futures, return_when=FIRST_EXCEPTION)

    for future in futures:
        if future in done and future.exception() is not None:
            for other in pending:
                other.cancel()
            raise future.exception()

    return futures[0].result(), futures[1].result()
