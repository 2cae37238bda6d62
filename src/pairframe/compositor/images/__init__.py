"""
Module: compositor.images

Purpose:
    Source photo decoding for the compositor.
"""

from .decoder import decode_photo, decode_pair, LEFT, RIGHT

__all__ = ["decode_photo", "decode_pair", "LEFT", "RIGHT"]
