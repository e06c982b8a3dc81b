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

"""Abstract drawing surface and document sink used by the layout emitter."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from ..model.elements import Font
from ..model.paint import Brush, TextBrush


@dataclass(frozen=True)
class Rect:
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def center(self) -> tuple[float, float]:
        return (self.left + self.width / 2, self.top + self.height / 2)


class DrawingSurface(ABC):
    """One page's worth of drawing operations, in the document's display unit."""

    @abstractmethod
    def draw_text(
        self,
        width: float,
        height: float,
        text: str,
        style: TextBrush,
        font_size: float,
    ) -> None:
        """Draw ``text`` in a box at the cursor, then advance the cursor per ``style.display``."""
        ...

    @abstractmethod
    def draw_text_at(
        self,
        x: float,
        y: float,
        text: str,
        style: TextBrush,
        font_size: float,
        *,
        angle: float = 0.0,
    ) -> None:
        """Draw ``text`` centred on ``(x, y)``, rotated counter-clockwise by ``angle`` degrees."""
        ...

    @abstractmethod
    def draw_rect(self, rect: Rect, brush: Brush) -> None: ...

    @abstractmethod
    def draw_circle(self, x: float, y: float, radius: float, brush: Brush) -> None: ...

    @abstractmethod
    def draw_line(self, x1: float, y1: float, x2: float, y2: float, brush: Brush) -> None: ...

    @abstractmethod
    def get_xy(self) -> tuple[float, float]: ...

    @abstractmethod
    def set_xy(self, x: float, y: float) -> None: ...

    @abstractmethod
    def drawing_rect(self) -> Rect:
        """The page area inside the margins."""
        ...

    @abstractmethod
    def page_rect(self) -> Rect: ...

    @abstractmethod
    def text_width(self, text: str, style: TextBrush, font_size: float) -> float: ...

    @abstractmethod
    def text_height(self, style: TextBrush, font_size: float) -> float: ...

    @abstractmethod
    def save(self) -> None:
        """Push the current paint state (alpha, line width, font, colours, margins)."""
        ...

    @abstractmethod
    def restore(self) -> None:
        """Pop the most recently saved paint state."""
        ...

    @contextmanager
    def paint_scope(self) -> Iterator[None]:
        self.save()
        try:
            yield
        finally:
            self.restore()


SectionHook = Callable[[DrawingSurface, int, bool], None]
"""Called with ``(surface, page_index, is_footer)`` for each page's header and footer."""


class DocumentSink(ABC):
    """Owns the output document: pages, fonts, metadata and the final write."""

    @abstractmethod
    def set_title(self, title: str) -> None: ...

    @abstractmethod
    def add_fonts(self, fonts: Sequence[Font]) -> None: ...

    @abstractmethod
    def add_page(self, section_hook: SectionHook | None = None) -> DrawingSurface: ...

    @abstractmethod
    def add_bookmark(self, title: str) -> None: ...

    @property
    @abstractmethod
    def page_count(self) -> int: ...

    @abstractmethod
    def save(self, path: str | Path) -> Path:
        """Write the document. The last page's footer hook runs here."""
        ...


__all__ = ["DocumentSink", "DrawingSurface", "Rect", "SectionHook"]
