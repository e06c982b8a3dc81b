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

"""Frozen output of the cascade, consumed read-only by the layout emitter."""

from __future__ import annotations

from dataclasses import dataclass

from ..core.units import Dimension, DimensionUnit
from ..model.elements import ElementKind, Font, Orientation
from ..model.paint import PaintState, TextBrush


@dataclass(frozen=True)
class CellBox:
    width: Dimension | None = None
    height: Dimension | None = None
    absolute: bool = False
    left: Dimension | None = None
    top: Dimension | None = None


@dataclass(frozen=True)
class ElementState:
    """What attribute handlers see and return while one element is cascaded."""

    kind: ElementKind
    paint: PaintState
    box: CellBox | None = None
    title: str | None = None


@dataclass(frozen=True)
class ResolvedCell:
    index: int
    text: str
    paint: PaintState
    box: CellBox


@dataclass(frozen=True)
class ResolvedSection:
    kind: ElementKind
    paint: PaintState
    cells: tuple[ResolvedCell, ...] = ()


@dataclass(frozen=True)
class ResolvedPage:
    index: int
    paint: PaintState
    cells: tuple[ResolvedCell, ...] = ()

    @property
    def bookmark_title(self) -> str:
        return self.paint.bookmark_title


@dataclass(frozen=True)
class ResolvedWatermark:
    text: str
    text_style: TextBrush


@dataclass(frozen=True)
class ResolvedDocument:
    title: str | None
    paint: PaintState
    page_size: str
    orientation: Orientation
    display_unit: DimensionUnit
    header: ResolvedSection
    footer: ResolvedSection
    pages: tuple[ResolvedPage, ...]
    watermark: ResolvedWatermark
    fonts: tuple[Font, ...] = ()
    bookmarks: bool = False
    page_bookmark_template: str = ""

    @property
    def page_count(self) -> int:
        return len(self.pages)


__all__ = [
    "CellBox",
    "ElementState",
    "ResolvedCell",
    "ResolvedDocument",
    "ResolvedPage",
    "ResolvedSection",
    "ResolvedWatermark",
]
