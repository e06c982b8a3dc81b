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

"""Fixed-box layout of a resolved document onto a drawing surface.

Per page the emitter draws, in order: the header section (through the sink's header
hook), the page background, each page cell, the page border, and finally the footer
section followed by the watermark (through the footer hook).
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from ..cascade.resolved import ResolvedCell, ResolvedDocument, ResolvedSection
from ..cascade.resolver import absolute_font_size
from ..config.loader import DEFAULT_BOOKMARK_TEMPLATE, DEFAULT_PAGE_NUMBER_WIDTH
from ..core.errors import DocumentError
from ..core.units import DEFAULT_UNIT_TABLE, UnitFlags, UnitTable
from ..model.elements import ElementKind
from ..model.paint import BorderSet, FontStyle, PaintState
from .surface import DocumentSink, DrawingSurface, Rect

WATERMARK_ANGLE = 45.0


@dataclass(frozen=True)
class PlacedCell:
    section: ElementKind
    page_index: int
    cell_index: int
    rect: Rect
    text: str


def expand_page_template(template: str, page: int, total: int, *, width: int) -> str:
    """Substitute ``${page}`` (1-based) and ``${total}`` in ``template``."""
    return template.replace("${page}", f"{page:0{width}d}" if width else str(page)).replace(
        "${total}", f"{total:0{width}d}" if width else str(total)
    )


def draw_border(surface: DrawingSurface, border: BorderSet, rect: Rect) -> None:
    edges = {
        "left": (rect.left, rect.top, rect.left, rect.bottom),
        "top": (rect.left, rect.top, rect.right, rect.top),
        "right": (rect.right, rect.top, rect.right, rect.bottom),
        "bottom": (rect.left, rect.bottom, rect.right, rect.bottom),
    }
    for side, brush in border.items():
        if brush is None:
            continue
        surface.draw_line(*edges[side], brush)


@dataclass
class LayoutEmitter:
    document: ResolvedDocument
    units: UnitTable = DEFAULT_UNIT_TABLE
    bookmark_template: str = DEFAULT_BOOKMARK_TEMPLATE
    page_number_width: int = DEFAULT_PAGE_NUMBER_WIDTH
    placed: list[PlacedCell] = field(default_factory=list, init=False)

    def emit(self, sink: DocumentSink) -> list[PlacedCell]:
        self.placed = []
        document = self.document
        try:
            if document.title:
                sink.set_title(document.title)
            sink.add_fonts(document.fonts)
        except DocumentError as exc:
            raise exc.within("error in document") from exc

        for page in document.pages:
            try:
                surface = sink.add_page(self._section_hook)
                if document.bookmarks:
                    sink.add_bookmark(self._bookmark_title(page.index, page.bookmark_title))
                area = surface.drawing_rect()
                if page.paint.background is not None:
                    surface.draw_rect(area, page.paint.background)
                surface.set_xy(area.left, area.top)
            except DocumentError as exc:
                raise exc.within(f"error in page {page.index}") from exc
            for cell in page.cells:
                try:
                    self._emit_cell(surface, cell, page_index=page.index, section=ElementKind.PAGE)
                except DocumentError as exc:
                    raise exc.within(f"error in cell {cell.index} of page {page.index}") from exc
            try:
                draw_border(surface, page.paint.border, area)
            except DocumentError as exc:
                raise exc.within(f"error in page {page.index}") from exc
        return self.placed

    def _bookmark_title(self, page_index: int, own_title: str) -> str:
        template = own_title or self.document.page_bookmark_template or self.bookmark_template
        return self._expand(template, page_index)

    def _expand(self, text: str, page_index: int) -> str:
        return expand_page_template(
            text,
            page_index + 1,
            self.document.page_count,
            width=self.page_number_width,
        )

    def _section_hook(self, surface: DrawingSurface, page_index: int, is_footer: bool) -> None:
        section = self.document.footer if is_footer else self.document.header
        self._emit_section(surface, section, page_index)
        if is_footer:
            try:
                self._emit_watermark(surface)
            except DocumentError as exc:
                raise exc.within("error in document watermark") from exc

    def _emit_section(
        self,
        surface: DrawingSurface,
        section: ResolvedSection,
        page_index: int,
    ) -> None:
        name = section.kind.value
        try:
            band = self._section_band(surface, section.kind)
            if section.paint.background is not None:
                surface.draw_rect(band, section.paint.background)
            if section.cells:
                first = section.cells[0].paint
                line_height = surface.text_height(first.text_style, self._font_size(first))
                surface.set_xy(band.left, band.top + (band.height - line_height) / 2)
        except DocumentError as exc:
            raise exc.within(f"error in {name}") from exc

        for cell in section.cells:
            try:
                self._emit_cell(
                    surface,
                    cell,
                    page_index=page_index,
                    section=section.kind,
                    text=self._expand(cell.text, page_index),
                )
            except DocumentError as exc:
                raise exc.within(f"error in {name} cell {cell.index}") from exc

        try:
            draw_border(surface, section.paint.border, band)
        except DocumentError as exc:
            raise exc.within(f"error in {name}") from exc

    @staticmethod
    def _section_band(surface: DrawingSurface, kind: ElementKind) -> Rect:
        """The margin strip a header or footer is laid out in."""
        page = surface.page_rect()
        area = surface.drawing_rect()
        if kind is ElementKind.FOOTER:
            return Rect(area.left, area.bottom, area.width, page.bottom - area.bottom)
        return Rect(area.left, page.top, area.width, area.top - page.top)

    def _emit_watermark(self, surface: DrawingSurface) -> None:
        watermark = self.document.watermark
        if not watermark.text:
            return
        style = replace(
            watermark.text_style,
            font_style=watermark.text_style.font_style.decorations | FontStyle.BOLD,
        )
        size = absolute_font_size(style, self.document.display_unit, self.units)
        spaced = " ".join(watermark.text)
        x, y = surface.page_rect().center
        surface.draw_text_at(x, y, spaced, style, size, angle=WATERMARK_ANGLE)

    def _font_size(self, paint: PaintState) -> float:
        return absolute_font_size(paint.text_style, self.document.display_unit, self.units)

    def _emit_cell(
        self,
        surface: DrawingSurface,
        cell: ResolvedCell,
        *,
        page_index: int,
        section: ElementKind,
        text: str | None = None,
    ) -> PlacedCell:
        unit = self.document.display_unit
        style = cell.paint.text_style
        content = cell.text if text is None else text
        font_size = self._font_size(cell.paint)
        area = surface.drawing_rect()
        box = cell.box

        horizontal = UnitFlags.LENGTH | UnitFlags.WIDTH
        vertical = UnitFlags.LENGTH | UnitFlags.HEIGHT

        if box.absolute and section is ElementKind.PAGE:
            x, y = surface.get_xy()
            if box.left is not None:
                x = self.units.convert(box.left, horizontal, unit, width=area.width)
            if box.top is not None:
                y = self.units.convert(box.top, vertical, unit, height=area.height)
            surface.set_xy(x, y)
        x, y = surface.get_xy()

        if box.width is None:
            width = surface.text_width(content, style, font_size)
        else:
            width = self.units.convert(box.width, horizontal, unit, width=area.width)
        if box.height is None:
            height = surface.text_height(style, font_size)
        else:
            height = self.units.convert(box.height, vertical, unit, height=area.height)

        rect = Rect(x, y, width, height)
        if cell.paint.background is not None:
            surface.draw_rect(rect, cell.paint.background)
        surface.set_xy(x, y)
        surface.draw_text(width, height, content, style, font_size)
        cursor = surface.get_xy()
        draw_border(surface, cell.paint.border, rect)
        surface.set_xy(*cursor)

        placed = PlacedCell(
            section=section,
            page_index=page_index,
            cell_index=cell.index,
            rect=rect,
            text=content,
        )
        self.placed.append(placed)
        return placed


def render_document(
    document: ResolvedDocument,
    sink: DocumentSink,
    *,
    units: UnitTable = DEFAULT_UNIT_TABLE,
    bookmark_template: str = DEFAULT_BOOKMARK_TEMPLATE,
    page_number_width: int = DEFAULT_PAGE_NUMBER_WIDTH,
) -> list[PlacedCell]:
    emitter = LayoutEmitter(
        document,
        units=units,
        bookmark_template=bookmark_template,
        page_number_width=page_number_width,
    )
    return emitter.emit(sink)


__all__ = [
    "LayoutEmitter",
    "PlacedCell",
    "WATERMARK_ANGLE",
    "draw_border",
    "expand_page_template",
    "render_document",
]
