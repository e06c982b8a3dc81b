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

from pathlib import Path

import typer

from ...formats import load_document
from ...render.service import Template
from ..core.common import _ctx_value, _load_config, _run_cli
from ..ui import console
from ..ui.summary import print_render_summary

_RENDER_HELP = (
    "Render a JSON document template to PDF.\n\n"
    "Examples:\n"
    "  cascadepdf render invoice.json\n"
    "  cascadepdf render invoice.json -o out/invoice.pdf\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_RENDER_HELP)(render)


def render(
    ctx: typer.Context,
    template: Path = typer.Argument(..., help="JSON document template to render."),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output PDF path (defaults to the template name with a .pdf suffix).",
        rich_help_panel="Outputs",
    ),
    summary: bool = typer.Option(
        False,
        "--summary",
        help="Show a summary panel after rendering.",
        rich_help_panel="Outputs",
    ),
) -> None:
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        config = _load_config(ctx)
        quiet_value = bool(_ctx_value(ctx, "quiet")) or config.ui.quiet
        document = load_document(template, defaults=config.document)
        rendered = Template.from_document(document, defaults=config.document)
        output_path = output or template.with_suffix(".pdf")
        output_path.parent.mkdir(parents=True, exist_ok=True)
        written = rendered.render_to_file(output_path)
        if summary:
            print_render_summary(written, rendered.resolved, quiet=quiet_value)
        elif not quiet_value:
            console.print(str(written))

    _run_cli(_run, debug=debug_value)
