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

"""Top-down cascade over a document tree.

Each element starts from an inherited snapshot of its parent (text style, and the
background when the parent has one), then its style-list attributes followed by its
inline attributes are reduced through the handler registry. Walk order is document,
watermark, header and its cells, footer and its cells, then each page and its cells.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field, replace

from ..config.loader import DocumentDefaults
from ..core.colors import BLACK
from ..core.errors import DocumentError, ValidationError
from ..core.units import (
    DEFAULT_UNIT_TABLE,
    Dimension,
    DimensionUnit,
    UnitFlags,
    UnitTable,
    points_to_unit,
)
from ..model.elements import Attribute, Cell, Document, ElementKind, Watermark
from ..model.paint import DEFAULT_LINE, Brush, PaintState, TextBrush
from .handlers import DEFAULT_HANDLERS, HandlerRegistry, new_cell_state
from .resolved import (
    ElementState,
    ResolvedCell,
    ResolvedDocument,
    ResolvedPage,
    ResolvedSection,
    ResolvedWatermark,
)
from .styles import StyleRegistry


def base_paint_state(
    defaults: DocumentDefaults,
    unit: DimensionUnit,
    units: UnitTable = DEFAULT_UNIT_TABLE,
) -> PaintState:
    """Paint state every document starts from before its own attributes apply."""
    size = points_to_unit(defaults.font_size_pt, unit, units)
    return PaintState(
        text_style=TextBrush(
            brush=Brush(stroke=True, stroke_color=BLACK),
            font_family=defaults.font_family,
            font_size=Dimension.of(size, unit),
            base_font_size=size,
        ),
        line=DEFAULT_LINE,
    )


def absolute_font_size(
    text_style: TextBrush,
    unit: DimensionUnit,
    units: UnitTable = DEFAULT_UNIT_TABLE,
) -> float:
    return units.convert(
        text_style.font_size,
        UnitFlags.FONT_SIZE,
        unit,
        font_size=text_style.base_font_size,
    )


@dataclass
class CascadeResolver:
    document: Document
    handlers: HandlerRegistry = DEFAULT_HANDLERS
    units: UnitTable = DEFAULT_UNIT_TABLE
    defaults: DocumentDefaults = field(default_factory=DocumentDefaults)

    def __post_init__(self) -> None:
        self.styles = StyleRegistry.from_styles(self.document.styles)

    @property
    def unit(self) -> DimensionUnit:
        return self.document.display_unit

    def resolve(self) -> ResolvedDocument:
        validate_document(self.document, self.styles)
        document = self.document

        doc_state = self._cascade_section(
            "error in document",
            ElementState(
                kind=ElementKind.DOCUMENT,
                paint=base_paint_state(self.defaults, self.unit, self.units),
            ),
            document.style_list,
            document.attributes,
        )
        doc_paint = doc_state.paint

        watermark = self._resolve_watermark(document.watermark, doc_paint)
        header_state = self._cascade_section(
            "error in header",
            self._inherit(ElementKind.HEADER, doc_paint),
            document.header.style_list,
            document.header.attributes,
        )
        header = ResolvedSection(
            kind=ElementKind.HEADER,
            paint=header_state.paint,
            cells=tuple(
                self._resolve_cells(
                    document.header.cells,
                    header_state.paint,
                    lambda index: f"error in header cell {index}",
                )
            ),
        )
        footer_state = self._cascade_section(
            "error in footer",
            self._inherit(ElementKind.FOOTER, doc_paint),
            document.footer.style_list,
            document.footer.attributes,
        )
        footer = ResolvedSection(
            kind=ElementKind.FOOTER,
            paint=footer_state.paint,
            cells=tuple(
                self._resolve_cells(
                    document.footer.cells,
                    footer_state.paint,
                    lambda index: f"error in footer cell {index}",
                )
            ),
        )

        pages: list[ResolvedPage] = []
        for page_index, page in enumerate(document.pages):
            inherited = self._inherit(ElementKind.PAGE, doc_paint)
            page_state = self._cascade_section(
                f"error in page {page_index}",
                replace(
                    inherited,
                    paint=replace(inherited.paint, bookmark_title=page.bookmark_title),
                ),
                page.style_list,
                page.attributes,
            )
            cells = self._resolve_cells(
                page.cells,
                page_state.paint,
                lambda index, page_index=page_index: f"error in cell {index} of page {page_index}",
            )
            pages.append(ResolvedPage(index=page_index, paint=page_state.paint, cells=tuple(cells)))

        return ResolvedDocument(
            title=doc_state.title,
            paint=doc_paint,
            page_size=document.page_size,
            orientation=document.orientation,
            display_unit=self.unit,
            header=header,
            footer=footer,
            pages=tuple(pages),
            watermark=watermark,
            fonts=tuple(document.fonts),
            bookmarks=document.bookmarks,
            page_bookmark_template=document.page_bookmark_template,
        )

    def _inherit(self, kind: ElementKind, parent: PaintState) -> ElementState:
        size = absolute_font_size(parent.text_style, self.unit, self.units)
        return ElementState(kind=kind, paint=parent.inherited(size, self.unit))

    def _merged(self, style_list: Sequence[str], attributes: Sequence[Attribute]):
        return [*self.styles.resolve_style_list(style_list), *attributes]

    def _cascade_section(
        self,
        label: str,
        state: ElementState,
        style_list: Sequence[str],
        attributes: Sequence[Attribute],
    ) -> ElementState:
        try:
            return self.handlers.cascade(state, self._merged(style_list, attributes))
        except DocumentError as exc:
            raise exc.within(label) from exc

    def _resolve_watermark(self, watermark: Watermark, doc_paint: PaintState):
        state = self._cascade_section(
            "error in document watermark",
            self._inherit(ElementKind.WATERMARK, doc_paint),
            watermark.style_list,
            watermark.attributes,
        )
        return ResolvedWatermark(text=watermark.text, text_style=state.paint.text_style)

    def _resolve_cells(
        self,
        cells: Sequence[Cell],
        parent: PaintState,
        label: Callable[[int], str],
    ) -> Iterator[ResolvedCell]:
        for index, cell in enumerate(cells):
            inherited = self._inherit(ElementKind.CELL, parent)
            state = self._cascade_section(
                label(index),
                new_cell_state(inherited.paint),
                cell.style_list,
                cell.attributes,
            )
            if state.box is None:
                raise ValidationError("cell has no layout box", trail=(label(index),))
            yield ResolvedCell(index=index, text=cell.text, paint=state.paint, box=state.box)


def _style_references(document: Document) -> Iterator[tuple[str, Sequence[str]]]:
    yield "document", document.style_list
    yield "document watermark", document.watermark.style_list
    yield "header", document.header.style_list
    for index, cell in enumerate(document.header.cells):
        yield f"header cell {index}", cell.style_list
    yield "footer", document.footer.style_list
    for index, cell in enumerate(document.footer.cells):
        yield f"footer cell {index}", cell.style_list
    for page_index, page in enumerate(document.pages):
        yield f"page {page_index}", page.style_list
        for index, cell in enumerate(page.cells):
            yield f"cell {index} of page {page_index}", cell.style_list


def validate_document(document: Document, styles: StyleRegistry | None = None) -> None:
    if not document.pages:
        raise ValidationError("document needs at least one page")
    if document.display_unit.is_relative:
        raise ValidationError("relative units cannot be used at the document level")
    registry = StyleRegistry.from_styles(document.styles) if styles is None else styles
    for location, style_list in _style_references(document):
        missing = registry.missing(style_list)
        if missing:
            raise ValidationError(
                f"unknown style `{missing[0]}`: style does not exist",
                trail=(f"error in {location}",),
            )


def resolve_document(
    document: Document,
    *,
    handlers: HandlerRegistry = DEFAULT_HANDLERS,
    units: UnitTable = DEFAULT_UNIT_TABLE,
    defaults: DocumentDefaults | None = None,
) -> ResolvedDocument:
    resolver = CascadeResolver(
        document,
        handlers=handlers,
        units=units,
        defaults=defaults or DocumentDefaults(),
    )
    return resolver.resolve()


__all__ = [
    "CascadeResolver",
    "absolute_font_size",
    "base_paint_state",
    "resolve_document",
    "validate_document",
]
