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

"""The source document tree: what authors write, before any cascade is applied."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..core.errors import ParseError
from ..core.units import DimensionUnit
from .paint import FontStyle

PAGE_SIZES_MM: dict[str, tuple[float, float]] = {
    "A3": (297.0, 420.0),
    "A4": (210.0, 297.0),
    "A5": (148.0, 210.0),
    "Legal": (215.9, 355.6),
    "Letter": (215.9, 279.4),
    "Tabloid": (279.4, 431.8),
}


def normalize_page_size(value: str) -> str:
    lowered = value.strip().lower()
    for name in PAGE_SIZES_MM:
        if name.lower() == lowered:
            return name
    raise ParseError(
        f"unsupported page size `{value}`: expected {', '.join(PAGE_SIZES_MM)}",
        value=value,
    )


class Orientation(str, Enum):
    PORTRAIT = "P"
    LANDSCAPE = "L"

    @classmethod
    def parse(cls, value: str) -> Orientation:
        normalized = value.strip().upper()
        if normalized in ("P", "PORTRAIT"):
            return cls.PORTRAIT
        if normalized in ("L", "LANDSCAPE"):
            return cls.LANDSCAPE
        raise ParseError(f"unsupported orientation `{value}`: expected P or L", value=value)


class ElementKind(Enum):
    DOCUMENT = "document"
    WATERMARK = "document.watermark"
    HEADER = "header"
    FOOTER = "footer"
    PAGE = "page"
    CELL = "cell"

    @property
    def prefix(self) -> str:
        return self.value


@dataclass
class Attribute:
    name: str
    value: str


def _normalize_name(name: str) -> str:
    return name.strip().lower()


@dataclass
class Style:
    name: str
    attributes: list[Attribute] = field(default_factory=list)


@dataclass
class Element:
    attributes: list[Attribute] = field(default_factory=list)
    style_list: list[str] = field(default_factory=list)
    bookmark_title: str = ""

    def get_attribute(self, name: str) -> str | None:
        key = _normalize_name(name)
        for attr in reversed(self.attributes):
            if _normalize_name(attr.name) == key:
                return attr.value
        return None

    def set_attribute(self, name: str, value: str) -> None:
        key = _normalize_name(name)
        for attr in self.attributes:
            if _normalize_name(attr.name) == key:
                attr.value = value
                return
        self.attributes.append(Attribute(name=name, value=value))


@dataclass
class Cell(Element):
    text: str = ""


@dataclass
class Header(Element):
    cells: list[Cell] = field(default_factory=list)


@dataclass
class Footer(Element):
    cells: list[Cell] = field(default_factory=list)


@dataclass
class Page(Element):
    cells: list[Cell] = field(default_factory=list)


@dataclass
class Watermark:
    text: str = ""
    style_list: list[str] = field(default_factory=list)
    attributes: list[Attribute] = field(default_factory=list)

    def set_attribute(self, name: str, value: str) -> None:
        key = _normalize_name(name)
        for attr in self.attributes:
            if _normalize_name(attr.name) == key:
                attr.value = value
                return
        self.attributes.append(Attribute(name=name, value=value))


@dataclass
class FontData:
    """Embedded font bytes as hex, or a path to read them from at render time."""

    data: str = ""
    path: str | None = None

    @property
    def is_file(self) -> bool:
        return self.path is not None


@dataclass
class Font:
    name: str
    style: FontStyle = FontStyle.REGULAR
    data: FontData = field(default_factory=FontData)


@dataclass
class Document(Element):
    styles: list[Style] = field(default_factory=list)
    fonts: list[Font] = field(default_factory=list)
    page_size: str = "A4"
    orientation: Orientation = Orientation.PORTRAIT
    display_unit: DimensionUnit = DimensionUnit.MM
    header: Header = field(default_factory=Header)
    footer: Footer = field(default_factory=Footer)
    pages: list[Page] = field(default_factory=list)
    bookmarks: bool = False
    page_bookmark_template: str = ""
    watermark: Watermark = field(default_factory=Watermark)

    def style(self, name: str) -> Style | None:
        for style in self.styles:
            if style.name == name:
                return style
        return None


__all__ = [
    "Attribute",
    "Cell",
    "Document",
    "Element",
    "ElementKind",
    "Font",
    "FontData",
    "Footer",
    "Header",
    "Orientation",
    "PAGE_SIZES_MM",
    "Page",
    "Style",
    "Watermark",
    "normalize_page_size",
]
