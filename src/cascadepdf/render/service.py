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

from dataclasses import dataclass, field
from pathlib import Path

from ..cascade.handlers import DEFAULT_HANDLERS, HandlerRegistry
from ..cascade.resolved import ResolvedDocument
from ..cascade.resolver import resolve_document
from ..config.loader import DocumentDefaults
from ..core.units import DEFAULT_UNIT_TABLE, UnitTable
from ..formats.document_json import dumps_document, load_document, save_document
from ..model.elements import Document
from .emitter import PlacedCell, render_document
from .fpdf_surface import sink_for
from .surface import DocumentSink


@dataclass(frozen=True)
class Template:
    """A validated document, ready to render any number of times."""

    document: Document
    resolved: ResolvedDocument
    defaults: DocumentDefaults = field(default_factory=DocumentDefaults)
    units: UnitTable = DEFAULT_UNIT_TABLE

    @classmethod
    def from_document(
        cls,
        document: Document,
        *,
        defaults: DocumentDefaults | None = None,
        handlers: HandlerRegistry = DEFAULT_HANDLERS,
        units: UnitTable = DEFAULT_UNIT_TABLE,
    ) -> Template:
        defaults = defaults or DocumentDefaults()
        resolved = resolve_document(document, handlers=handlers, units=units, defaults=defaults)
        return cls(document=document, resolved=resolved, defaults=defaults, units=units)

    def render(self, sink: DocumentSink) -> list[PlacedCell]:
        return render_document(
            self.resolved,
            sink,
            units=self.units,
            bookmark_template=self.defaults.bookmark_template,
            page_number_width=self.defaults.page_number_width,
        )

    def render_to_file(self, path: str | Path) -> Path:
        sink = sink_for(self.resolved, self.defaults)
        self.render(sink)
        return sink.save(path)

    def render_to_bytes(self) -> bytes:
        sink = sink_for(self.resolved, self.defaults)
        self.render(sink)
        return sink.to_bytes()

    def to_json(self) -> str:
        return dumps_document(self.document)

    def save(self, path: str | Path) -> Path:
        return save_document(self.document, path)


def load_template(path: str | Path, *, defaults: DocumentDefaults | None = None) -> Template:
    document = load_document(path, defaults=defaults)
    return Template.from_document(document, defaults=defaults)


__all__ = ["Template", "load_template"]
