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

from collections.abc import Iterable
from typing import Any

from .errors import ValidationError


def require_list(value: object, *, label: str) -> list[Any]:
    """Validate that value is a JSON array."""
    if not isinstance(value, list):
        raise ValidationError(f"{label} must be a list")
    return value


def require_dict(value: object, *, label: str) -> dict[str, Any]:
    """Validate that value is a JSON object."""
    if not isinstance(value, dict):
        raise ValidationError(f"{label} must be an object")
    return value


def require_keys(mapping: dict[str, Any], keys: Iterable[str], *, label: str) -> None:
    """Validate that all keys are present in mapping."""
    for key in keys:
        if key not in mapping:
            raise ValidationError(f"{label}.{key} is required")


def reject_unknown_keys(mapping: dict[str, Any], allowed: Iterable[str], *, label: str) -> None:
    unknown = sorted(set(mapping) - set(allowed))
    if unknown:
        raise ValidationError(f"{label} has unknown keys: {', '.join(unknown)}")


def require_str(value: object, *, label: str, allow_empty: bool = True) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{label} must be a string")
    if not allow_empty and not value.strip():
        raise ValidationError(f"{label} must be a non-empty string")
    return value


def require_bool(value: object, *, label: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"{label} must be a boolean")
    return value


def optional_str(mapping: dict[str, Any], key: str, *, label: str, default: str = "") -> str:
    value = mapping.get(key)
    if value is None:
        return default
    return require_str(value, label=f"{label}.{key}")


__all__ = [
    "optional_str",
    "reject_unknown_keys",
    "require_bool",
    "require_dict",
    "require_keys",
    "require_list",
    "require_str",
]
