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

import io
from collections.abc import Sequence
from contextlib import contextmanager, redirect_stderr, redirect_stdout
from pathlib import Path
from typing import Any

from cascadepdf.model.elements import Font
from cascadepdf.model.paint import Brush, CellDisplay, TextBrush
from cascadepdf.render.surface import DocumentSink, DrawingSurface, Rect, SectionHook

# =============================================================================
# Test Constants
# =============================================================================

PAGE_WIDTH = 210.0
PAGE_HEIGHT = 297.0
MARGIN = 10.0
CHAR_WIDTH = 2.0


# =============================================================================
# Output Helpers
# =============================================================================


@contextmanager
def suppress_output():
    with redirect_stdout(io.StringIO()), redirect_stderr(io.StringIO()):
        yield


# =============================================================================
# Recording Surface
# =============================================================================


class RecordingSurface(DrawingSurface):
    """In-memory surface that records draw calls in page coordinates."""

    def __init__(
        self,
        *,
        width: float = PAGE_WIDTH,
        height: float = PAGE_HEIGHT,
        margin: float = MARGIN,
    ) -> None:
        self.width = width
        self.height = height
        self.margin = margin
        self.x = margin
        self.y = margin
        self.ops: list[tuple[Any, ...]] = []
        self.depth = 0

    def draw_text(
        self,
        width: float,
        height: float,
        text: str,
        style: TextBrush,
        font_size: float,
    ) -> None:
        x, y = self.x, self.y
        self.ops.append(("text", x, y, width, height, text, style))
        if style.display is CellDisplay.ROW:
            self.x, self.y = self.margin, y + height
        elif style.display is CellDisplay.STACK:
            self.x, self.y = x, y + height
        else:
            self.x, self.y = x + width, y

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
        self.ops.append(("text_at", x, y, text, style, font_size, angle))

    def draw_rect(self, rect: Rect, brush: Brush) -> None:
        self.ops.append(("rect", rect, brush))

    def draw_circle(self, x: float, y: float, radius: float, brush: Brush) -> None:
        self.ops.append(("circle", x, y, radius, brush))

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, brush: Brush) -> None:
        self.ops.append(("line", x1, y1, x2, y2, brush))

    def get_xy(self) -> tuple[float, float]:
        return (self.x, self.y)

    def set_xy(self, x: float, y: float) -> None:
        self.x, self.y = x, y

    def drawing_rect(self) -> Rect:
        return Rect(
            self.margin,
            self.margin,
            self.width - 2 * self.margin,
            self.height - 2 * self.margin,
        )

    def page_rect(self) -> Rect:
        return Rect(0.0, 0.0, self.width, self.height)

    def text_width(self, text: str, style: TextBrush, font_size: float) -> float:
        return len(text) * CHAR_WIDTH

    def text_height(self, style: TextBrush, font_size: float) -> float:
        return font_size

    def save(self) -> None:
        self.depth += 1

    def restore(self) -> None:
        self.depth -= 1

    def of_kind(self, kind: str) -> list[tuple[Any, ...]]:
        return [op for op in self.ops if op[0] == kind]

    def texts(self) -> list[str]:
        return [op[5] for op in self.of_kind("text")]


# =============================================================================
# Recording Sink
# =============================================================================


class RecordingSink(DocumentSink):
    """Sink that replays header and footer hooks in the order fpdf2 does.

    The header hook runs inside ``add_page``; a page's footer hook runs when the next
    page is added, and the last footer runs in ``save``.
    """

    def __init__(self) -> None:
        self.surface = RecordingSurface()
        self.title: str | None = None
        self.fonts: list[Font] = []
        self.bookmarks: list[str] = []
        self.events: list[tuple[str, int]] = []
        self.saved_to: Path | None = None
        self._hook: SectionHook | None = None
        self._pages = 0

    def set_title(self, title: str) -> None:
        self.title = title

    def add_fonts(self, fonts: Sequence[Font]) -> None:
        self.fonts.extend(fonts)

    def _footer(self) -> None:
        if self._pages and self._hook is not None:
            self.events.append(("footer", self._pages - 1))
            self._hook(self.surface, self._pages - 1, True)

    def add_page(self, section_hook: SectionHook | None = None) -> DrawingSurface:
        self._footer()
        self._hook = section_hook
        self._pages += 1
        self.events.append(("page", self._pages - 1))
        self.surface.ops.append(("page", self._pages - 1))
        self.surface.set_xy(self.surface.margin, self.surface.margin)
        if self._hook is not None:
            self.events.append(("header", self._pages - 1))
            self._hook(self.surface, self._pages - 1, False)
        return self.surface

    def add_bookmark(self, title: str) -> None:
        self.bookmarks.append(title)

    @property
    def page_count(self) -> int:
        return self._pages

    def save(self, path: str | Path) -> Path:
        self._footer()
        self.saved_to = Path(path)
        return self.saved_to
