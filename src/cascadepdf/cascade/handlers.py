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

"""Attribute handlers and the registry that dispatches to them.

A handler is a pure function ``(ElementState, value) -> ElementState``. Generic handlers
are looked up by bare attribute name and apply to every element kind except the
watermark; specific handlers are keyed by ``<kind prefix>.<name>`` and run after the
generic one when both exist.
"""

from __future__ import annotations

import functools
import math
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from ..core.colors import parse_color
from ..core.errors import DocumentError, ParseError, ValidationError
from ..core.units import parse_dimension
from ..model.elements import Attribute, ElementKind
from ..model.paint import (
    ALIGNMENT_CODES,
    BORDER_SIDES,
    CapStyle,
    CellDisplay,
    FontStyle,
    JoinStyle,
)
from .resolved import CellBox, ElementState

Handler = Callable[[ElementState, str], ElementState]

_TRUE_VALUES = frozenset({"1", "t", "true"})
_FALSE_VALUES = frozenset({"0", "f", "false"})


def _with_paint(state: ElementState, **changes: object) -> ElementState:
    return replace(state, paint=replace(state.paint, **changes))


def _with_text(state: ElementState, **changes: object) -> ElementState:
    return _with_paint(state, text_style=replace(state.paint.text_style, **changes))


def _with_text_brush(state: ElementState, **changes: object) -> ElementState:
    text_style = state.paint.text_style
    return _with_text(state, brush=replace(text_style.brush, **changes))


def _with_box(state: ElementState, **changes: object) -> ElementState:
    if state.box is None:
        raise ValidationError(f"{state.kind.value} elements have no cell box")
    return replace(state, box=replace(state.box, **changes))


def _parse_bool(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ParseError(f"invalid boolean `{value}`", value=value)


def _parse_line_width(value: str) -> float:
    try:
        width = float(value.strip())
    except ValueError as exc:
        raise ParseError(f"invalid line width `{value}`", value=value) from exc
    if not math.isfinite(width) or width < 0:
        raise ParseError(
            f"invalid line width `{value}`: must be a non-negative number",
            value=value,
        )
    return width


def background_color(state: ElementState, value: str) -> ElementState:
    color = parse_color(value)
    paint = state.paint
    if paint.background is None:
        background = replace(paint.line, fill=True, stroke=False, fill_color=color)
    else:
        background = replace(paint.background, fill=True, fill_color=color)
    return _with_paint(state, background=background)


def border_color(state: ElementState, value: str) -> ElementState:
    color = parse_color(value)
    paint = state.paint
    border = paint.border.initialized(paint.border_template())
    return _with_paint(
        state,
        border=border.map_sides(lambda side: replace(side, stroke_color=color)),
    )


def border_width(state: ElementState, value: str) -> ElementState:
    width = _parse_line_width(value)
    paint = state.paint
    border = paint.border.initialized(paint.border_template())
    return _with_paint(
        state,
        border=border.map_sides(lambda side: replace(side, stroke_width=width)),
    )


def _border_side_handler(side: str, brush_field: str, parse: Callable[[str], object]):
    def handler(state: ElementState, value: str) -> ElementState:
        parsed = parse(value)
        paint = state.paint
        current = getattr(paint.border, side) or paint.border_template()
        updated = replace(current, **{brush_field: parsed})
        return _with_paint(state, border=replace(paint.border, **{side: updated}))

    handler.__name__ = f"border_{side}_{brush_field}"
    return handler


def font_style(state: ElementState, value: str) -> ElementState:
    return _with_text(state, font_style=FontStyle.parse(value))


def font_size(state: ElementState, value: str) -> ElementState:
    return _with_text(state, font_size=parse_dimension(value))


def font_color(state: ElementState, value: str) -> ElementState:
    return _with_text_brush(state, stroke_color=parse_color(value))


def font_family(state: ElementState, value: str) -> ElementState:
    family = value.strip()
    if not family:
        raise ParseError("font family cannot be empty", value=value)
    return _with_text(state, font_family=family)


def line_join_style(state: ElementState, value: str) -> ElementState:
    join = JoinStyle.parse(value)
    state = _with_text_brush(state, join_style=join)
    paint = state.paint
    return _with_paint(
        state,
        line=replace(paint.line, join_style=join),
        border=paint.border.map_sides(lambda side: replace(side, join_style=join)),
    )


def line_cap_style(state: ElementState, value: str) -> ElementState:
    cap = CapStyle.parse(value)
    state = _with_text_brush(state, cap_style=cap)
    paint = state.paint
    return _with_paint(
        state,
        line=replace(paint.line, cap_style=cap),
        border=paint.border.map_sides(lambda side: replace(side, cap_style=cap)),
    )


def document_title(state: ElementState, value: str) -> ElementState:
    return replace(state, title=value)


def cell_text_align(state: ElementState, value: str) -> ElementState:
    alignment = value.strip().upper()
    if not alignment:
        raise ParseError("text alignment cannot be empty", value=value)
    invalid = sorted(set(alignment) - ALIGNMENT_CODES)
    if invalid:
        raise ParseError(
            f"invalid text alignment `{value}`: unsupported {''.join(invalid)!r}, "
            "expected characters from LCRBATM",
            value=value,
        )
    return _with_text(state, alignment=alignment)


def _cell_dimension(box_field: str) -> Handler:
    def handler(state: ElementState, value: str) -> ElementState:
        return _with_box(state, **{box_field: parse_dimension(value)})

    handler.__name__ = f"cell_{box_field}"
    return handler


def cell_absolute(state: ElementState, value: str) -> ElementState:
    return _with_box(state, absolute=_parse_bool(value))


def cell_display(state: ElementState, value: str) -> ElementState:
    return _with_text(state, display=CellDisplay.parse(value))


def _specific_key(kind: ElementKind, name: str) -> str:
    return f"{kind.prefix}.{name}"


@dataclass(frozen=True)
class HandlerRegistry:
    generic: Mapping[str, Handler] = field(default_factory=dict)
    specific: Mapping[str, Handler] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "generic", MappingProxyType(dict(self.generic)))
        object.__setattr__(self, "specific", MappingProxyType(dict(self.specific)))

    def extended(
        self,
        *,
        generic: Mapping[str, Handler] | None = None,
        specific: Mapping[str, Handler] | None = None,
    ) -> HandlerRegistry:
        return HandlerRegistry(
            generic={**self.generic, **(generic or {})},
            specific={**self.specific, **(specific or {})},
        )

    def lookup(self, kind: ElementKind, name: str) -> tuple[Handler | None, Handler | None]:
        key = name.strip().lower()
        generic = None if kind is ElementKind.WATERMARK else self.generic.get(key)
        return generic, self.specific.get(_specific_key(kind, key))

    def supports(self, kind: ElementKind, name: str) -> bool:
        return any(handler is not None for handler in self.lookup(kind, name))

    def apply(self, state: ElementState, attribute: Attribute) -> ElementState:
        generic, specific = self.lookup(state.kind, attribute.name)
        if generic is None and specific is None:
            raise ValidationError(
                f"unsupported attribute `{attribute.name}`",
                attribute=attribute.name,
            )
        try:
            if generic is not None:
                state = generic(state, attribute.value)
            if specific is not None:
                state = specific(state, attribute.value)
        except DocumentError as exc:
            raise exc.within(f"attribute `{attribute.name}`", attribute=attribute.name) from exc
        return state

    def cascade(self, state: ElementState, attributes: Iterable[Attribute]) -> ElementState:
        return functools.reduce(self.apply, attributes, state)


def build_default_handlers() -> HandlerRegistry:
    generic: dict[str, Handler] = {
        "background-color": background_color,
        "border-color": border_color,
        "border-width": border_width,
        "font-style": font_style,
        "font-size": font_size,
        "font-color": font_color,
        "font-family": font_family,
        "line-join-style": line_join_style,
        "line-cap-style": line_cap_style,
    }
    for side in BORDER_SIDES:
        generic[f"border-{side}-width"] = _border_side_handler(
            side, "stroke_width", _parse_line_width
        )
        generic[f"border-{side}-color"] = _border_side_handler(side, "stroke_color", parse_color)

    watermark = ElementKind.WATERMARK
    cell = ElementKind.CELL
    specific: dict[str, Handler] = {
        _specific_key(ElementKind.DOCUMENT, "title"): document_title,
        _specific_key(watermark, "font-color"): font_color,
        _specific_key(watermark, "font-size"): font_size,
        _specific_key(watermark, "font-style"): font_style,
        _specific_key(watermark, "font-family"): font_family,
        _specific_key(cell, "text-align"): cell_text_align,
        _specific_key(cell, "width"): _cell_dimension("width"),
        _specific_key(cell, "height"): _cell_dimension("height"),
        _specific_key(cell, "left"): _cell_dimension("left"),
        _specific_key(cell, "top"): _cell_dimension("top"),
        _specific_key(cell, "absolute"): cell_absolute,
        _specific_key(cell, "display"): cell_display,
    }
    return HandlerRegistry(generic=generic, specific=specific)


DEFAULT_HANDLERS = build_default_handlers()


def new_cell_state(paint) -> ElementState:
    return ElementState(kind=ElementKind.CELL, paint=paint, box=CellBox())


__all__ = [
    "DEFAULT_HANDLERS",
    "Handler",
    "HandlerRegistry",
    "build_default_handlers",
    "new_cell_state",
]
