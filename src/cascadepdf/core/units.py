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

"""Unit-tagged dimensions and conversion between them.

Percentages are stored as fractions: ``parse_dimension("50%").value == 0.5`` while
``original_value`` keeps the literal ``50`` for string rendering. Converting a
percentage needs a width, height or font-size context chosen by ``UnitFlags``.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum, IntFlag
from types import MappingProxyType

from .errors import ParseError, ValidationError

PT_PER_INCH = 72.0
MM_PER_INCH = 25.4


class DimensionUnit(str, Enum):
    MM = "mm"
    CM = "cm"
    IN = "in"
    PERCENT = "%"

    @property
    def is_relative(self) -> bool:
        return self is DimensionUnit.PERCENT

    @classmethod
    def parse(cls, value: str) -> DimensionUnit:
        normalized = value.strip().lower()
        for unit in cls:
            if unit.value == normalized:
                return unit
        raise ParseError(f"unsupported unit `{value}`", value=value)

    def __str__(self) -> str:
        return self.value


class UnitFlags(IntFlag):
    LENGTH = 1
    FONT_SIZE = 2
    WIDTH = 4
    HEIGHT = 8


# Longest suffix first so "mm" is never shadowed by a shorter match.
_SUFFIXES = tuple(sorted(DimensionUnit, key=lambda unit: len(unit.value), reverse=True))


@dataclass(frozen=True)
class Dimension:
    value: float
    original_value: float
    unit: DimensionUnit

    @classmethod
    def of(cls, value: float, unit: DimensionUnit) -> Dimension:
        if unit is DimensionUnit.PERCENT:
            return cls(value=value / 100, original_value=value, unit=unit)
        return cls(value=value, original_value=value, unit=unit)

    @property
    def is_relative(self) -> bool:
        return self.unit.is_relative

    def __str__(self) -> str:
        return f"{_format_number(self.original_value)}{self.unit.value}"


def _format_number(value: float) -> str:
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def parse_dimension(value: str) -> Dimension:
    raw = value.strip()
    lowered = raw.lower()
    for unit in _SUFFIXES:
        if not lowered.endswith(unit.value):
            continue
        number = raw[: len(raw) - len(unit.value)].strip()
        try:
            parsed = float(number)
        except ValueError as exc:
            raise ParseError(f"invalid dimension `{value}`", value=value) from exc
        if not math.isfinite(parsed):
            raise ParseError(f"invalid dimension `{value}`: must be finite", value=value)
        return Dimension.of(parsed, unit)
    raise ParseError(
        f"invalid dimension `{value}`: expected one of mm, cm, in, %",
        value=value,
    )


Converter = Callable[[float, UnitFlags, float, float, float], float]


def _scale(factor: float) -> Converter:
    def convert(value: float, flags: UnitFlags, width: float, height: float, font_size: float):
        return value * factor

    return convert


def _relative(value: float, flags: UnitFlags, width: float, height: float, font_size: float):
    if flags & UnitFlags.FONT_SIZE:
        return value * font_size
    if flags & UnitFlags.WIDTH:
        return value * width
    if flags & UnitFlags.HEIGHT:
        return value * height
    raise ValidationError("percentage needs a width, height or font-size context")


class UnitTable:
    """Immutable conversion table keyed by (source, destination) unit."""

    def __init__(self, converters: Mapping[tuple[DimensionUnit, DimensionUnit], Converter]):
        self._converters = MappingProxyType(dict(converters))

    def converter(self, source: DimensionUnit, dest: DimensionUnit) -> Converter:
        if dest is DimensionUnit.PERCENT:
            raise ValidationError("relative units cannot be a conversion target")
        try:
            return self._converters[(source, dest)]
        except KeyError as exc:
            raise ValidationError(f"no conversion from {source} to {dest}") from exc

    def convert(
        self,
        dimension: Dimension,
        flags: UnitFlags,
        dest: DimensionUnit,
        *,
        width: float = 0.0,
        height: float = 0.0,
        font_size: float = 0.0,
    ) -> float:
        convert = self.converter(dimension.unit, dest)
        return convert(dimension.value, flags, width, height, font_size)

    def __contains__(self, key: object) -> bool:
        return key in self._converters

    def __len__(self) -> int:
        return len(self._converters)


def build_default_unit_table() -> UnitTable:
    mm, cm, inch, pct = (
        DimensionUnit.MM,
        DimensionUnit.CM,
        DimensionUnit.IN,
        DimensionUnit.PERCENT,
    )
    return UnitTable(
        {
            (mm, mm): _scale(1.0),
            (mm, cm): _scale(0.1),
            (mm, inch): _scale(0.0393701),
            (cm, cm): _scale(1.0),
            (cm, mm): _scale(10.0),
            (cm, inch): _scale(0.393701),
            (inch, inch): _scale(1.0),
            (inch, mm): _scale(MM_PER_INCH),
            (inch, cm): _scale(2.54),
            (pct, mm): _relative,
            (pct, cm): _relative,
            (pct, inch): _relative,
        }
    )


DEFAULT_UNIT_TABLE = build_default_unit_table()


def convert_dimension(
    dimension: Dimension,
    flags: UnitFlags,
    dest: DimensionUnit,
    *,
    width: float = 0.0,
    height: float = 0.0,
    font_size: float = 0.0,
    units: UnitTable = DEFAULT_UNIT_TABLE,
) -> float:
    return units.convert(
        dimension,
        flags,
        dest,
        width=width,
        height=height,
        font_size=font_size,
    )


def points_to_unit(points: float, dest: DimensionUnit, units: UnitTable = DEFAULT_UNIT_TABLE):
    inches = Dimension.of(points / PT_PER_INCH, DimensionUnit.IN)
    return units.convert(inches, UnitFlags.LENGTH, dest)


__all__ = [
    "DEFAULT_UNIT_TABLE",
    "Dimension",
    "DimensionUnit",
    "MM_PER_INCH",
    "PT_PER_INCH",
    "UnitFlags",
    "UnitTable",
    "build_default_unit_table",
    "convert_dimension",
    "parse_dimension",
    "points_to_unit",
]
