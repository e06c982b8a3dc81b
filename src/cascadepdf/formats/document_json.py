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

"""JSON representation of the source document tree."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..config.loader import DocumentDefaults
from ..core.errors import DocumentError, ValidationError
from ..core.units import DimensionUnit
from ..core.validation import (
    optional_str,
    reject_unknown_keys,
    require_bool,
    require_dict,
    require_keys,
    require_list,
    require_str,
)
from ..model.elements import (
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
from .fonts import font_data_from_value, font_data_to_value, parse_font_style

_ELEMENT_KEYS = ("attributes", "style_list", "bookmark_title")
_CELL_KEYS = (*_ELEMENT_KEYS, "text")
_SECTION_KEYS = (*_ELEMENT_KEYS, "cells")
_DOCUMENT_KEYS = (
    *_ELEMENT_KEYS,
    "styles",
    "fonts",
    "size",
    "units",
    "orientation",
    "header",
    "footer",
    "pages",
    "bookmarks",
    "page_bookmark_template",
    "watermark",
)


def document_from_dict(
    data: object,
    *,
    defaults: DocumentDefaults | None = None,
    base_dir: str | Path | None = None,
) -> Document:
    defaults = defaults or DocumentDefaults()
    root = require_dict(data, label="document")
    reject_unknown_keys(root, _DOCUMENT_KEYS, label="document")

    size = optional_str(root, "size", label="document", default=defaults.page_size)
    units = optional_str(root, "units", label="document", default=defaults.units.value)
    orientation = optional_str(
        root, "orientation", label="document", default=defaults.orientation.value
    )
    try:
        page_size = normalize_page_size(size)
        display_unit = DimensionUnit.parse(units)
        parsed_orientation = Orientation.parse(orientation)
    except DocumentError as exc:
        raise exc.within("document") from exc

    document = Document(
        page_size=page_size,
        orientation=parsed_orientation,
        display_unit=display_unit,
        styles=[
            _style_from_dict(item, label=f"document.styles[{index}]")
            for index, item in enumerate(_list(root, "styles", label="document"))
        ],
        fonts=[
            _font_from_dict(item, label=f"document.fonts[{index}]", base_dir=base_dir)
            for index, item in enumerate(_list(root, "fonts", label="document"))
        ],
        header=_section_from_dict(Header, root.get("header"), label="document.header"),
        footer=_section_from_dict(Footer, root.get("footer"), label="document.footer"),
        pages=[
            _section_from_dict(Page, item, label=f"document.pages[{index}]")
            for index, item in enumerate(_list(root, "pages", label="document"))
        ],
        bookmarks=_bool(root, "bookmarks", label="document"),
        page_bookmark_template=optional_str(root, "page_bookmark_template", label="document"),
        watermark=_watermark_from_dict(root.get("watermark")),
    )
    _fill_element(document, root, label="document")
    return document


def document_to_dict(document: Document) -> dict[str, Any]:
    data: dict[str, Any] = _element_to_dict(document)
    data.update(
        {
            "styles": [
                {"name": style.name, "attributes": _attributes_to_list(style.attributes)}
                for style in document.styles
            ],
            "fonts": [
                {
                    "name": font.name,
                    "style": font.style.to_text(),
                    "data": font_data_to_value(font.data),
                }
                for font in document.fonts
            ],
            "size": document.page_size,
            "units": document.display_unit.value,
            "orientation": document.orientation.value,
            "header": _section_to_dict(document.header),
            "footer": _section_to_dict(document.footer),
            "pages": [_section_to_dict(page) for page in document.pages],
            "bookmarks": document.bookmarks,
            "page_bookmark_template": document.page_bookmark_template,
            "watermark": {
                "text": document.watermark.text,
                "style_list": list(document.watermark.style_list),
                "attributes": _attributes_to_list(document.watermark.attributes),
            },
        }
    )
    return data


def loads_document(
    text: str,
    *,
    defaults: DocumentDefaults | None = None,
    base_dir: str | Path | None = None,
) -> Document:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValidationError(
            f"invalid document JSON at line {exc.lineno} column {exc.colno}: {exc.msg}"
        ) from exc
    return document_from_dict(data, defaults=defaults, base_dir=base_dir)


def dumps_document(document: Document, *, indent: int | None = 2) -> str:
    return json.dumps(document_to_dict(document), indent=indent, ensure_ascii=False)


def load_document(path: str | Path, *, defaults: DocumentDefaults | None = None) -> Document:
    source = Path(path)
    text = source.read_text(encoding="utf-8")
    return loads_document(text, defaults=defaults, base_dir=source.resolve().parent)


def save_document(document: Document, path: str | Path) -> Path:
    target = Path(path)
    target.write_text(dumps_document(document) + "\n", encoding="utf-8")
    return target


def _list(mapping: dict[str, Any], key: str, *, label: str) -> list[Any]:
    value = mapping.get(key)
    if value is None:
        return []
    return require_list(value, label=f"{label}.{key}")


def _bool(mapping: dict[str, Any], key: str, *, label: str) -> bool:
    value = mapping.get(key)
    if value is None:
        return False
    return require_bool(value, label=f"{label}.{key}")


def _attributes_from_list(value: object, *, label: str) -> list[Attribute]:
    if value is None:
        return []
    attributes: list[Attribute] = []
    for index, item in enumerate(require_list(value, label=label)):
        item_label = f"{label}[{index}]"
        entry = require_dict(item, label=item_label)
        reject_unknown_keys(entry, ("name", "value"), label=item_label)
        require_keys(entry, ("name", "value"), label=item_label)
        attributes.append(
            Attribute(
                name=require_str(entry["name"], label=f"{item_label}.name", allow_empty=False),
                value=require_str(entry["value"], label=f"{item_label}.value"),
            )
        )
    return attributes


def _style_list_from(value: object, *, label: str) -> list[str]:
    if value is None:
        return []
    return [
        require_str(item, label=f"{label}[{index}]", allow_empty=False)
        for index, item in enumerate(require_list(value, label=label))
    ]


def _fill_element(element: Element, data: dict[str, Any], *, label: str) -> None:
    element.attributes = _attributes_from_list(data.get("attributes"), label=f"{label}.attributes")
    element.style_list = _style_list_from(data.get("style_list"), label=f"{label}.style_list")
    element.bookmark_title = optional_str(data, "bookmark_title", label=label)


def _cell_from_dict(data: object, *, label: str) -> Cell:
    entry = require_dict(data, label=label)
    reject_unknown_keys(entry, _CELL_KEYS, label=label)
    cell = Cell(text=optional_str(entry, "text", label=label))
    _fill_element(cell, entry, label=label)
    return cell


def _section_from_dict(factory, data: object, *, label: str):
    if data is None:
        return factory()
    entry = require_dict(data, label=label)
    reject_unknown_keys(entry, _SECTION_KEYS, label=label)
    section = factory(
        cells=[
            _cell_from_dict(item, label=f"{label}.cells[{index}]")
            for index, item in enumerate(_list(entry, "cells", label=label))
        ]
    )
    _fill_element(section, entry, label=label)
    return section


def _style_from_dict(data: object, *, label: str) -> Style:
    entry = require_dict(data, label=label)
    reject_unknown_keys(entry, ("name", "attributes"), label=label)
    require_keys(entry, ("name",), label=label)
    return Style(
        name=require_str(entry["name"], label=f"{label}.name", allow_empty=False),
        attributes=_attributes_from_list(entry.get("attributes"), label=f"{label}.attributes"),
    )


def _font_from_dict(data: object, *, label: str, base_dir: str | Path | None) -> Font:
    entry = require_dict(data, label=label)
    reject_unknown_keys(entry, ("name", "style", "data"), label=label)
    require_keys(entry, ("name", "data"), label=label)
    try:
        return Font(
            name=require_str(entry["name"], label=f"{label}.name", allow_empty=False),
            style=parse_font_style(optional_str(entry, "style", label=label)),
            data=font_data_from_value(
                require_str(entry["data"], label=f"{label}.data"),
                base_dir=base_dir,
            ),
        )
    except DocumentError as exc:
        raise exc.within(label) from exc


def _watermark_from_dict(data: object) -> Watermark:
    label = "document.watermark"
    if data is None:
        return Watermark()
    entry = require_dict(data, label=label)
    reject_unknown_keys(entry, ("text", "style_list", "attributes"), label=label)
    return Watermark(
        text=optional_str(entry, "text", label=label),
        style_list=_style_list_from(entry.get("style_list"), label=f"{label}.style_list"),
        attributes=_attributes_from_list(entry.get("attributes"), label=f"{label}.attributes"),
    )


def _attributes_to_list(attributes: list[Attribute]) -> list[dict[str, str]]:
    return [{"name": attr.name, "value": attr.value} for attr in attributes]


def _element_to_dict(element: Element) -> dict[str, Any]:
    data: dict[str, Any] = {
        "attributes": _attributes_to_list(element.attributes),
        "style_list": list(element.style_list),
    }
    if element.bookmark_title:
        data["bookmark_title"] = element.bookmark_title
    return data


def _section_to_dict(section: Header | Footer | Page) -> dict[str, Any]:
    data = _element_to_dict(section)
    data["cells"] = [{**_element_to_dict(cell), "text": cell.text} for cell in section.cells]
    return data


__all__ = [
    "document_from_dict",
    "document_to_dict",
    "dumps_document",
    "load_document",
    "loads_document",
    "save_document",
]
