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

"""Fluent construction of documents.

Example::

    template = (
        DocumentBuilder()
        .title("Invoice")
        .style("heading", {"font-size": "150%", "font-style": "bold"})
        .add_page()
        .add_cell("Invoice #42")
        .style_list("heading")
        .builder()
        .build()
    )
    template.render_to_file("invoice.pdf")
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Generic, Self, TypeVar

from .cascade.handlers import DEFAULT_HANDLERS, HandlerRegistry
from .config.loader import DocumentDefaults
from .core.units import DEFAULT_UNIT_TABLE, DimensionUnit, UnitTable
from .formats.fonts import font_data_from_value, font_from_file, parse_font_style
from .model.elements import (
    Attribute,
    Cell,
    Document,
    Element,
    Font,
    Footer,
    Header,
    Orientation,
    Page,
    Style,
    Watermark,
    normalize_page_size,
)
from .model.paint import FontStyle
from .render.service import Template

_P = TypeVar("_P")


class _AttributeMixin:
    _target: Element | Watermark

    def attribute(self, name: str, value: str) -> Self:
        """Set ``name``, replacing an earlier value of the same attribute."""
        self._target.set_attribute(name, value)
        return self

    def attributes(self, values: Mapping[str, str]) -> Self:
        for name, value in values.items():
            self._target.set_attribute(name, value)
        return self

    def style_list(self, *names: str) -> Self:
        self._target.style_list.extend(names)
        return self


class CellBuilder(_AttributeMixin, Generic[_P]):
    def __init__(self, parent: _P, cell: Cell) -> None:
        self._parent = parent
        self._target = cell
        self.cell = cell

    def text(self, text: str) -> Self:
        self.cell.text = text
        return self

    def parent(self) -> _P:
        return self._parent

    def builder(self) -> DocumentBuilder:
        return self._parent.builder()  # type: ignore[attr-defined]


class _CellContainerBuilder(_AttributeMixin):
    def __init__(self, builder: DocumentBuilder, element: Header | Footer | Page) -> None:
        self._builder = builder
        self._target = element
        self.element = element

    def add_cell(self, text: str = "") -> CellBuilder[Self]:
        cell = Cell(text=text)
        self.element.cells.append(cell)
        return CellBuilder(self, cell)

    def builder(self) -> DocumentBuilder:
        return self._builder


class SectionBuilder(_CellContainerBuilder):
    """Header or footer. Cell text may use ``${page}`` and ``${total}``."""


class PageBuilder(_CellContainerBuilder):
    def bookmark_title(self, title: str) -> Self:
        self.element.bookmark_title = title
        return self


class WatermarkBuilder(_AttributeMixin):
    def __init__(self, builder: DocumentBuilder, watermark: Watermark) -> None:
        self._builder = builder
        self._target = watermark
        self.watermark = watermark

    def text(self, text: str) -> Self:
        self.watermark.text = text
        return self

    def builder(self) -> DocumentBuilder:
        return self._builder


class DocumentBuilder(_AttributeMixin):
    def __init__(
        self,
        defaults: DocumentDefaults | None = None,
        *,
        page_size: str | None = None,
        orientation: Orientation | str | None = None,
        units: DimensionUnit | str | None = None,
    ) -> None:
        self.defaults = defaults or DocumentDefaults()
        if isinstance(orientation, str):
            orientation = Orientation.parse(orientation)
        if isinstance(units, str):
            units = DimensionUnit.parse(units)
        self.document = Document(
            page_size=normalize_page_size(page_size or self.defaults.page_size),
            orientation=orientation or self.defaults.orientation,
            display_unit=units or self.defaults.units,
        )
        self._target = self.document

    def title(self, title: str) -> Self:
        return self.attribute("title", title)

    def show_bookmarks(self, enabled: bool = True) -> Self:
        self.document.bookmarks = enabled
        return self

    def page_bookmark_template(self, template: str) -> Self:
        self.document.page_bookmark_template = template
        return self

    def style(self, name: str, attributes: Mapping[str, str]) -> Self:
        """Define ``name``, or append to it if it already exists."""
        new_attributes = [Attribute(name=key, value=value) for key, value in attributes.items()]
        existing = self.document.style(name)
        if existing is None:
            self.document.styles.append(Style(name=name, attributes=new_attributes))
        else:
            existing.attributes.extend(new_attributes)
        return self

    def add_font_from_file(self, name: str, style: FontStyle | str, path: str | Path) -> Self:
        self.document.fonts.append(font_from_file(name, style, path))
        return self

    def add_font_data(self, name: str, style: FontStyle | str, data: str) -> Self:
        parsed_style = parse_font_style(style) if isinstance(style, str) else style
        self.document.fonts.append(
            Font(name=name, style=parsed_style, data=font_data_from_value(data))
        )
        return self

    def watermark(self, text: str = "") -> WatermarkBuilder:
        if text:
            self.document.watermark.text = text
        return WatermarkBuilder(self, self.document.watermark)

    def header(self) -> SectionBuilder:
        return SectionBuilder(self, self.document.header)

    def footer(self) -> SectionBuilder:
        return SectionBuilder(self, self.document.footer)

    def add_page(self) -> PageBuilder:
        page = Page()
        self.document.pages.append(page)
        return PageBuilder(self, page)

    def builder(self) -> DocumentBuilder:
        return self

    def build(
        self,
        *,
        handlers: HandlerRegistry = DEFAULT_HANDLERS,
        units: UnitTable = DEFAULT_UNIT_TABLE,
    ) -> Template:
        return Template.from_document(
            self.document,
            defaults=self.defaults,
            handlers=handlers,
            units=units,
        )


__all__ = [
    "CellBuilder",
    "DocumentBuilder",
    "PageBuilder",
    "SectionBuilder",
    "WatermarkBuilder",
]
