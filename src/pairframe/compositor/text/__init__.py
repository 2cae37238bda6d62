"""
Module: compositor.text

Purpose:
    Label placement and rendering for composites.
"""

from .overlay import TextPlacement, place_text, load_font, measure_text, draw_text

__all__ = [
    "TextPlacement",
    "place_text",
    "load_font",
    "measure_text",
    "draw_text",
]
