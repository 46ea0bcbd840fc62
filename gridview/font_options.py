"""Parsing of the editor's guifont setting."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field

DEFAULT_FONT_SIZE = 14.0
_F32_EPSILON = 1.1920929e-07


def points_to_pixels(value: float) -> float:
    """Convert a size in points to pixels at the standard 96/72 ratio.

    On macOS points and pixels are the same.
    """
    if sys.platform == "darwin":
        return value
    pixels_per_inch = 96.0
    points_per_inch = 72.0
    return value * (pixels_per_inch / points_per_inch)


def _parse_float(text: str) -> float | None:
    if not text or "_" in text or text != text.strip():
        return None
    try:
        return float(text)
    except ValueError:
        return None


@dataclass(eq=False)
class FontOptions:
    """Font families and style flags requested by the editor."""

    font_list: list[str] = field(default_factory=list)
    size: float = field(default_factory=lambda: points_to_pixels(DEFAULT_FONT_SIZE))
    bold: bool = False
    italic: bool = False
    allow_float_size: bool = False

    @classmethod
    def parse(cls, guifont_setting: str) -> FontOptions:
        """Parse a setting such as ``Fira_Code,Noto:h12:b:i``."""
        font_list: list[str] = []
        size = DEFAULT_FONT_SIZE
        bold = False
        italic = False
        allow_float_size = False

        parts = iter([part for part in guifont_setting.split(":") if part])

        first = next(parts, None)
        if first is not None:
            parsed = [name.replace("_", " ") for name in first.split(",") if name]
            if parsed:
                font_list = parsed

        for part in parts:
            if part.startswith("h") and len(part) > 1:
                if "." in part:
                    allow_float_size = True
                parsed_size = _parse_float(part[1:])
                if parsed_size is not None:
                    size = parsed_size
            elif part == "b":
                bold = True
            elif part == "i":
                italic = True

        return cls(
            font_list=font_list,
            size=points_to_pixels(size),
            bold=bold,
            italic=italic,
            allow_float_size=allow_float_size,
        )

    def primary_font(self) -> str | None:
        """The first configured font family, if any."""
        return self.font_list[0] if self.font_list else None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FontOptions):
            return NotImplemented
        return (
            self.font_list == other.font_list
            and abs(self.size - other.size) < _F32_EPSILON
            and self.bold == other.bold
            and self.italic == other.italic
        )

    __hash__ = None  # type: ignore[assignment]