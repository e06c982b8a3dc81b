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

from collections.abc import Iterable, Sequence

from ..core.errors import ValidationError
from ..model.elements import Attribute, Style


class StyleRegistry:
    """Named attribute bundles referenced by an element's style list."""

    def __init__(self) -> None:
        self._styles: dict[str, list[Attribute]] = {}

    @classmethod
    def from_styles(cls, styles: Iterable[Style]) -> StyleRegistry:
        registry = cls()
        for style in styles:
            registry.add_style(style.name, style.attributes)
        return registry

    def add_style(self, name: str, attributes: Iterable[Attribute]) -> None:
        if not name.strip():
            raise ValidationError("style name cannot be empty")
        self._styles.setdefault(name, []).extend(
            Attribute(name=attr.name, value=attr.value) for attr in attributes
        )

    def __contains__(self, name: object) -> bool:
        return name in self._styles

    def __len__(self) -> int:
        return len(self._styles)

    def names(self) -> list[str]:
        return list(self._styles)

    def attributes(self, name: str) -> list[Attribute]:
        try:
            return list(self._styles[name])
        except KeyError as exc:
            raise ValidationError(f"unknown style `{name}`: style does not exist") from exc

    def resolve_style_list(self, names: Sequence[str]) -> list[Attribute]:
        resolved: list[Attribute] = []
        for name in names:
            resolved.extend(self.attributes(name))
        return resolved

    def missing(self, names: Iterable[str]) -> list[str]:
        return [name for name in names if name not in self._styles]


__all__ = ["StyleRegistry"]
