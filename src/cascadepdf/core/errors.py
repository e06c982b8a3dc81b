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

"""Error types raised while parsing, resolving and rendering documents.

Every error keeps a breadcrumb trail. Callers that add positional context re-raise
``exc.within(label)`` from the original so the cause is never lost::

    try:
        state = apply(state, attr)
    except DocumentError as exc:
        raise exc.within(f"error in page {index}") from exc
"""

from __future__ import annotations

import copy
from typing import TypeVar

_E = TypeVar("_E", bound="DocumentError")


class DocumentError(Exception):
    """Base class for all document errors."""

    def __init__(
        self,
        message: str,
        *,
        trail: tuple[str, ...] = (),
        attribute: str | None = None,
    ) -> None:
        self.message = message
        self.trail = tuple(trail)
        self.attribute = attribute
        super().__init__(self._render())

    def _render(self) -> str:
        return ": ".join((*self.trail, self.message))

    def within(self: _E, label: str, *, attribute: str | None = None) -> _E:
        wrapped = copy.copy(self)
        wrapped.trail = (label, *self.trail)
        if attribute is not None and wrapped.attribute is None:
            wrapped.attribute = attribute
        wrapped.args = (wrapped._render(),)
        return wrapped

    def __str__(self) -> str:
        return self._render()


class ParseError(DocumentError, ValueError):
    """A malformed color, dimension or enum token."""

    def __init__(
        self,
        message: str,
        *,
        value: str | None = None,
        trail: tuple[str, ...] = (),
        attribute: str | None = None,
    ) -> None:
        self.value = value
        super().__init__(message, trail=trail, attribute=attribute)


class ValidationError(DocumentError, ValueError):
    """A structurally invalid document: missing pages, unknown styles and the like."""


class RenderError(DocumentError, RuntimeError):
    """A failure inside the drawing surface or document sink."""


__all__ = [
    "DocumentError",
    "ParseError",
    "RenderError",
    "ValidationError",
]
