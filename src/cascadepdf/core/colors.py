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

from __future__ import annotations

import string
from dataclasses import dataclass

from .errors import ParseError

_HEX_DIGITS = frozenset(string.hexdigits)


@dataclass(frozen=True)
class Color:
    argb: int
    rgb: int
    alpha: float

    @classmethod
    def from_rgb(cls, rgb: int, alpha: float = 1.0) -> Color:
        if not 0 <= rgb <= 0xFFFFFF:
            raise ValueError(f"rgb value out of range: {rgb:#x}")
        if not 0.0 <= alpha <= 1.0:
            raise ValueError(f"alpha must be within [0, 1]: {alpha}")
        return cls(argb=(round(alpha * 255) << 24) | rgb, rgb=rgb, alpha=alpha)

    @property
    def red(self) -> int:
        return (self.rgb >> 16) & 0xFF

    @property
    def green(self) -> int:
        return (self.rgb >> 8) & 0xFF

    @property
    def blue(self) -> int:
        return self.rgb & 0xFF

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.red, self.green, self.blue)

    def __str__(self) -> str:
        return f"#{self.argb:08X}"


BLACK = Color.from_rgb(0x000000)
WHITE = Color.from_rgb(0xFFFFFF)


def parse_color(value: str) -> Color:
    """Parse ``RRGGBB`` or ``AARRGGBB`` hex, with an optional leading ``#``."""
    raw = value.strip()
    digits = raw[1:] if raw.startswith("#") else raw
    if len(digits) not in (6, 8) or not _HEX_DIGITS.issuperset(digits):
        raise ParseError(
            f"invalid color value `{value}`: expected 24 or 32 bit hex",
            value=value,
        )
    parsed = int(digits, 16)
    if len(digits) == 6:
        return Color.from_rgb(parsed, 1.0)
    alpha = ((parsed >> 24) & 0xFF) / 255
    return Color(argb=parsed, rgb=parsed & 0xFFFFFF, alpha=alpha)


__all__ = ["BLACK", "Color", "WHITE", "parse_color"]
