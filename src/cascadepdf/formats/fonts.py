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

"""Font sources: embedded hex data or ``file://`` references."""

from __future__ import annotations

from pathlib import Path

from ..core.errors import ParseError, ValidationError
from ..model.elements import Font, FontData
from ..model.paint import FontStyle

FILE_PREFIX = "file://"
MAX_FONT_FILE_BYTES = 500 * 1024


def font_data_from_value(value: str, *, base_dir: str | Path | None = None) -> FontData:
    """Interpret a serialized font ``data`` value.

    ``file://`` paths are resolved against ``base_dir`` (or the working directory) and
    checked for existence and size here, so a bad font fails at load time.
    """
    if value.startswith(FILE_PREFIX):
        raw_path = value[len(FILE_PREFIX) :]
        if not raw_path:
            raise ValidationError("font file path cannot be empty")
        path = Path(raw_path).expanduser()
        if not path.is_absolute() and base_dir is not None:
            path = Path(base_dir) / path
        try:
            size = path.stat().st_size
        except OSError as exc:
            raise ValidationError(f"failed to stat font file {path}: {exc.strerror}") from exc
        if size > MAX_FONT_FILE_BYTES:
            raise ValidationError(
                f"font file {path} is too large: {size} bytes (limit {MAX_FONT_FILE_BYTES})"
            )
        return FontData(path=str(path))
    if not value.strip():
        raise ValidationError("missing font data")
    return FontData(data=value.strip())


def font_data_to_value(data: FontData) -> str:
    if data.path is not None:
        return f"{FILE_PREFIX}{data.path}"
    return data.data


def font_bytes(font: Font) -> bytes:
    data = font.data
    if data.path is not None:
        path = Path(data.path)
        try:
            return path.read_bytes()
        except OSError as exc:
            raise ValidationError(
                f"font `{font.name}`: unable to read {path}: {exc.strerror}"
            ) from exc
    try:
        return bytes.fromhex(data.data)
    except ValueError as exc:
        raise ParseError(
            f"font `{font.name}`: invalid hex font data",
            value=data.data[:32],
        ) from exc


def parse_font_style(value: str) -> FontStyle:
    if not value.strip():
        return FontStyle.REGULAR
    return FontStyle.parse(value)


def font_from_file(
    name: str,
    style: FontStyle | str,
    path: str | Path,
) -> Font:
    if not name.strip():
        raise ValidationError("font name cannot be empty")
    parsed_style = parse_font_style(style) if isinstance(style, str) else style
    return Font(
        name=name,
        style=parsed_style,
        data=font_data_from_value(f"{FILE_PREFIX}{Path(path)}"),
    )


__all__ = [
    "FILE_PREFIX",
    "MAX_FONT_FILE_BYTES",
    "font_bytes",
    "font_data_from_value",
    "font_data_to_value",
    "font_from_file",
    "parse_font_style",
]
