"""
Module: text

Purpose:
    Text label options for composites. Mirrors the label settings of the
    job file: font family/size/style, fill colour, anchored corner and
    an optional outline.

Key Classes:
    - TextPosition: One of the four anchored corners
    - TextOptions: Immutable label settings

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - compositor.text.overlay: Placement and rendering
    - compositor.controller: Per-pair text resolution
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

DEFAULT_TEXT_COLOR = "#000000"
DEFAULT_STROKE_COLOR = "#FFFFFF"
DEFAULT_STROKE_WIDTH_PX = 2.0


class TextPosition(str, Enum):
    """Canvas corner the label is anchored to."""
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"

    def __str__(self) -> str:
        return self.value

    @property
    def is_top(self) -> bool:
        return self in (TextPosition.TOP_LEFT, TextPosition.TOP_RIGHT)

    @property
    def is_right(self) -> bool:
        return self in (TextPosition.TOP_RIGHT, TextPosition.BOTTOM_RIGHT)


@dataclass(frozen=True, slots=True)
class TextOptions:
    """
    Label settings (immutable).

    When ``enabled`` is False nothing is drawn regardless of the other
    fields. A ``text`` of None means "use the pair's display name".

    Attributes:
        enabled: Whether the label is rendered
        text: Explicit label text, or None
        font: Font family name
        size_px: Font size in pixels
        bold: Bold weight
        italic: Italic style
        color: Fill colour (None -> #000000)
        position: Anchored corner
        stroke: Draw an outline under the fill
        stroke_color: Outline colour (None -> #FFFFFF)
        stroke_width_px: Outline width (None -> 2)
    """

    enabled: bool = False
    text: Optional[str] = None
    font: str = "Arial"
    size_px: float = 48.0
    bold: bool = False
    italic: bool = False
    color: Optional[str] = None
    position: TextPosition = TextPosition.BOTTOM_LEFT
    stroke: bool = False
    stroke_color: Optional[str] = None
    stroke_width_px: Optional[float] = None

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.size_px <= 0:
            raise ValueError(f"size_px must be positive: {self.size_px}")
        if self.stroke_width_px is not None and self.stroke_width_px < 0:
            raise ValueError(f"stroke_width_px must be non-negative: {self.stroke_width_px}")
        if not isinstance(self.position, TextPosition):
            object.__setattr__(self, "position", TextPosition(self.position))

    # ─────────────────────────────────────────────────────────────────────────
    # Resolved values
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def fill_color(self) -> str:
        return self.color or DEFAULT_TEXT_COLOR

    @property
    def outline_color(self) -> str:
        return self.stroke_color or DEFAULT_STROKE_COLOR

    @property
    def outline_width_px(self) -> float:
        return self.stroke_width_px or DEFAULT_STROKE_WIDTH_PX

    @property
    def font_style(self) -> str:
        """
        Style string composing weight, slant, size and family.

        Example:
            >>> TextOptions(bold=True, italic=True, size_px=32, font="Arial").font_style
            'bold italic 32px Arial'
        """
        parts = []
        if self.bold:
            parts.append("bold")
        if self.italic:
            parts.append("italic")
        parts.append(f"{self.size_px:g}px")
        parts.append(self.font)
        return " ".join(parts)

    @property
    def should_render(self) -> bool:
        """True when enabled and there is non-empty text to draw."""
        return self.enabled and bool(self.text)

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization (job-file keys)
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        return {
            "enabled": self.enabled,
            "text": self.text,
            "font": self.font,
            "size": self.size_px,
            "bold": self.bold,
            "italic": self.italic,
            "color": self.color,
            "position": self.position.value,
            "stroke": self.stroke,
            "strokeColor": self.stroke_color,
            "strokeWidth": self.stroke_width_px,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TextOptions:
        """
        Deserialize from the job-file form.

        Raises:
            ValueError: If position or size are invalid
        """
        defaults = cls()
        stroke_width = data.get("strokeWidth")
        return cls(
            enabled=bool(data.get("enabled", defaults.enabled)),
            text=data.get("text") or None,
            font=data.get("font", defaults.font),
            size_px=float(data.get("size", defaults.size_px)),
            bold=bool(data.get("bold", False)),
            italic=bool(data.get("italic", False)),
            color=data.get("color") or None,
            position=TextPosition(data.get("position", defaults.position.value)),
            stroke=bool(data.get("stroke", False)),
            stroke_color=data.get("strokeColor") or None,
            stroke_width_px=float(stroke_width) if stroke_width is not None else None,
        )
