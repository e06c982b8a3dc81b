#!/usr/bin/env python3
# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

"""Immutable paint values produced by the cascade: brushes, text styles and borders."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from enum import Enum, IntFlag

from ..core.colors import BLACK, Color
from ..core.errors import ParseError
from ..core.units import Dimension, DimensionUnit

DEFAULT_LINE_WIDTH = 0.2
DEFAULT_ALIGNMENT = "LM"
ALIGNMENT_CODES = frozenset("LCRBATM")


class FontStyle(IntFlag):
    REGULAR = 1
    BOLD = 2
    ITALIC = 4
    UNDERLINE = 8
    STRIKETHROUGH = 16

    @classmethod
    def parse(cls, value: str) -> FontStyle:
        """Parse ``|``-joined style names, e.g. ``"bold|italic"``."""
        result = cls(0)
        for token in value.split("|"):
            name = token.strip().lower()
            member = _FONT_STYLE_NAMES.get(name)
            if member is None:
                raise ParseError(f"unsupported font style `{token.strip()}`", value=value)
            result |= member
        if result != cls.REGULAR and result & cls.REGULAR:
            result &= ~cls.REGULAR
        return result

    @property
    def decorations(self) -> FontStyle:
        return self & ~FontStyle.REGULAR

    def names(self) -> list[str]:
        if not self.decorations:
            return ["regular"]
        return [name for name, member in _FONT_STYLE_NAMES.items() if member in self.decorations]

    def to_text(self) -> str:
        return "|".join(self.names())


_FONT_STYLE_NAMES: dict[str, FontStyle] = {
    "regular": FontStyle.REGULAR,
    "bold": FontStyle.BOLD,
    "italic": FontStyle.ITALIC,
    "underline": FontStyle.UNDERLINE,
    "strikethrough": FontStyle.STRIKETHROUGH,
}


class _ParsableEnum(str, Enum):
    @classmethod
    def parse(cls, value: str):
        normalized = value.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        choices = "/".join(member.value for member in cls)
        raise ParseError(
            f"unsupported {cls._label()} `{value}`: expected {choices}",
            value=value,
        )

    @classmethod
    def _label(cls) -> str:
        return cls.__name__.lower()


class CapStyle(_ParsableEnum):
    CAP = "cap"
    BUTT = "butt"
    SQUARE = "square"

    @classmethod
    def _label(cls) -> str:
        return "line cap style"


class JoinStyle(_ParsableEnum):
    MITER = "miter"
    ROUND = "round"
    BEVEL = "bevel"

    @classmethod
    def _label(cls) -> str:
        return "line join style"


class CellDisplay(_ParsableEnum):
    COLUMN = "column"
    ROW = "row"
    STACK = "stack"

    @classmethod
    def _label(cls) -> str:
        return "cell display"


@dataclass(frozen=True)
class Brush:
    fill: bool = False
    stroke: bool = False
    fill_color: Color = BLACK
    stroke_color: Color = BLACK
    stroke_width: float = DEFAULT_LINE_WIDTH
    cap_style: CapStyle = CapStyle.CAP
    join_style: JoinStyle = JoinStyle.MITER

    @property
    def alpha(self) -> float:
        if self.fill and not self.stroke:
            return self.fill_color.alpha
        return self.stroke_color.alpha


DEFAULT_LINE = Brush(stroke=True)


@dataclass(frozen=True)
class TextBrush:
    brush: Brush = field(default_factory=lambda: Brush(stroke=True))
    font_family: str = ""
    font_size: Dimension = field(default_factory=lambda: Dimension.of(12.0, DimensionUnit.MM))
    base_font_size: float = 0.0
    font_style: FontStyle = FontStyle.REGULAR
    alignment: str = DEFAULT_ALIGNMENT
    display: CellDisplay = CellDisplay.COLUMN

    @property
    def color(self) -> Color:
        return self.brush.stroke_color

    def inherit_from(self, parent: TextBrush, absolute_size: float, unit: DimensionUnit):
        """Copy ``parent`` onto this brush, keeping our own family if the parent has none."""
        return replace(
            parent,
            font_family=parent.font_family or self.font_family,
            font_size=Dimension.of(absolute_size, unit),
            base_font_size=absolute_size,
        )


_SIDES = ("left", "top", "right", "bottom")


@dataclass(frozen=True)
class BorderSet:
    left: Brush | None = None
    top: Brush | None = None
    right: Brush | None = None
    bottom: Brush | None = None

    @property
    def is_empty(self) -> bool:
        return all(side is None for side in self.sides())

    def sides(self) -> tuple[Brush | None, ...]:
        return tuple(getattr(self, name) for name in _SIDES)

    def items(self) -> Iterator[tuple[str, Brush | None]]:
        for name in _SIDES:
            yield name, getattr(self, name)

    def initialized(self, template: Brush) -> BorderSet:
        """Fill every missing side with ``template``."""
        return BorderSet(
            **{name: side if side is not None else template for name, side in self.items()}
        )

    def map_sides(self, update) -> BorderSet:
        return BorderSet(
            **{name: None if side is None else update(side) for name, side in self.items()}
        )


BORDER_SIDES = _SIDES


@dataclass(frozen=True)
class PaintState:
    text_style: TextBrush = field(default_factory=TextBrush)
    line: Brush = DEFAULT_LINE
    background: Brush | None = None
    border: BorderSet = field(default_factory=BorderSet)
    bookmark_title: str = ""

    def border_template(self) -> Brush:
        """The brush a freshly initialised border side starts from."""
        return Brush(
            stroke=True,
            stroke_width=DEFAULT_LINE_WIDTH,
            cap_style=self.line.cap_style,
            join_style=self.line.join_style,
        )

    def inherited(self, absolute_font_size: float, unit: DimensionUnit) -> PaintState:
        """Snapshot handed to a child: text style and background only."""
        return PaintState(
            text_style=TextBrush().inherit_from(self.text_style, absolute_font_size, unit),
            background=self.background,
        )


__all__ = [
    "ALIGNMENT_CODES",
    "BORDER_SIDES",
    "BorderSet",
    "Brush",
    "CapStyle",
    "CellDisplay",
    "DEFAULT_ALIGNMENT",
    "DEFAULT_LINE",
    "DEFAULT_LINE_WIDTH",
    "FontStyle",
    "JoinStyle",
    "PaintState",
    "TextBrush",
]
