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

from __future__ import annotations

import math
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from ..core.units import DimensionUnit
from ..model.elements import Orientation, normalize_page_size
from .installer import resolve_config_path

DEFAULT_PAGE_SIZE = "A4"
DEFAULT_FONT_FAMILY = "courier"
DEFAULT_FONT_SIZE_PT = 12.0
DEFAULT_MARGIN_MM = 10.0
DEFAULT_BOOKMARK_TEMPLATE = "Page ${page}"
DEFAULT_PAGE_NUMBER_WIDTH = 4


@dataclass(frozen=True)
class DocumentDefaults:
    page_size: str = DEFAULT_PAGE_SIZE
    orientation: Orientation = Orientation.PORTRAIT
    units: DimensionUnit = DimensionUnit.MM
    margin_mm: float = DEFAULT_MARGIN_MM
    font_family: str = DEFAULT_FONT_FAMILY
    font_size_pt: float = DEFAULT_FONT_SIZE_PT
    bookmark_template: str = DEFAULT_BOOKMARK_TEMPLATE
    page_number_width: int = DEFAULT_PAGE_NUMBER_WIDTH


@dataclass(frozen=True)
class UiDefaults:
    quiet: bool = False
    no_color: bool = False


@dataclass(frozen=True)
class AppConfig:
    path: Path | None = None
    document: DocumentDefaults = field(default_factory=DocumentDefaults)
    ui: UiDefaults = field(default_factory=UiDefaults)


def load_app_config(path: str | Path | None = None) -> AppConfig:
    config_path = resolve_config_path(path)
    data = _load_toml(config_path)
    return AppConfig(
        path=config_path,
        document=_parse_document_defaults(_get_dict(data, "document")),
        ui=_parse_ui_defaults(_get_dict(data, "ui")),
    )


def _parse_document_defaults(cfg: dict[str, object]) -> DocumentDefaults:
    size = _parse_str(cfg.get("size"), field="document.size", default=DEFAULT_PAGE_SIZE)
    orientation = _parse_str(cfg.get("orientation"), field="document.orientation", default="P")
    units = _parse_str(cfg.get("units"), field="document.units", default="mm")
    try:
        page_size = normalize_page_size(size)
        parsed_orientation = Orientation.parse(orientation)
        parsed_units = DimensionUnit.parse(units)
    except ValueError as exc:
        raise ValueError(f"document: {exc}") from exc
    if parsed_units.is_relative:
        raise ValueError("document.units cannot be a relative unit")

    page_number_width = _parse_int(
        cfg.get("page_number_width"),
        field="document.page_number_width",
        default=DEFAULT_PAGE_NUMBER_WIDTH,
    )
    if page_number_width < 0:
        raise ValueError("document.page_number_width must be 0 or a positive integer")

    return DocumentDefaults(
        page_size=page_size,
        orientation=parsed_orientation,
        units=parsed_units,
        margin_mm=_parse_non_negative_float(
            cfg.get("margin"), field="document.margin", default=DEFAULT_MARGIN_MM
        ),
        font_family=_parse_str(
            cfg.get("font_family"), field="document.font_family", default=DEFAULT_FONT_FAMILY
        ),
        font_size_pt=_parse_positive_float(
            cfg.get("font_size_pt"), field="document.font_size_pt", default=DEFAULT_FONT_SIZE_PT
        ),
        bookmark_template=_parse_str(
            cfg.get("bookmark_template"),
            field="document.bookmark_template",
            default=DEFAULT_BOOKMARK_TEMPLATE,
        ),
        page_number_width=page_number_width,
    )


def _parse_ui_defaults(cfg: dict[str, object]) -> UiDefaults:
    return UiDefaults(
        quiet=_parse_bool(cfg.get("quiet"), field="ui.quiet", default=False),
        no_color=_parse_bool(cfg.get("no_color"), field="ui.no_color", default=False),
    )


def _load_toml(path: Path) -> dict[str, object]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _get_dict(data: dict[str, object], key: str) -> dict[str, object]:
    value = data.get(key)
    if isinstance(value, dict):
        return value
    return {}


def _parse_str(value: object, *, field: str, default: str) -> str:
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
    normalized = value.strip()
    if not normalized:
        raise ValueError(f"{field} must be a non-empty string")
    return normalized


def _parse_bool(value: object, *, field: str, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        if value in (0, 1):
            return bool(value)
        raise ValueError(f"{field} must be a boolean")
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
        raise ValueError(f"{field} must be a boolean")
    raise ValueError(f"{field} must be a boolean")


def _parse_int(value: object, *, field: str, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        raise ValueError(f"{field} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as exc:
            raise ValueError(f"{field} must be an integer") from exc
    raise ValueError(f"{field} must be an integer")


def _parse_float(value: object, *, field: str, default: float) -> float:
    if value is None:
        return default
    if isinstance(value, bool):
        raise ValueError(f"{field} must be a number")
    if isinstance(value, (int, float)):
        parsed = float(value)
    elif isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError as exc:
            raise ValueError(f"{field} must be a number") from exc
    else:
        raise ValueError(f"{field} must be a number")
    if not math.isfinite(parsed):
        raise ValueError(f"{field} must be a finite number")
    return parsed


def _parse_positive_float(value: object, *, field: str, default: float) -> float:
    parsed = _parse_float(value, field=field, default=default)
    if parsed <= 0:
        raise ValueError(f"{field} must be a positive number")
    return parsed


def _parse_non_negative_float(value: object, *, field: str, default: float) -> float:
    parsed = _parse_float(value, field=field, default=default)
    if parsed < 0:
        raise ValueError(f"{field} must be 0 or a positive number")
    return parsed
