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
from ..ui.summary import print_check_summary

_CHECK_HELP = (
    "Validate a JSON document template without rendering it.\n\n"
    "Examples:\n"
    "  cascadepdf check invoice.json\n"
    "  cascadepdf check invoice.json --tree\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_CHECK_HELP)(check)


def check(
    ctx: typer.Context,
    template: Path = typer.Argument(..., help="JSON document template to validate."),
    tree: bool = typer.Option(
        False,
        "--tree",
        help="Show the resolved style of every element.",
        rich_help_panel="Outputs",
    ),
) -> None:
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        config = _load_config(ctx)
        quiet_value = bool(_ctx_value(ctx, "quiet")) or config.ui.quiet
        document = load_document(template, defaults=config.document)
        checked = Template.from_document(document, defaults=config.document)
        print_check_summary(document, checked.resolved, show_tree=tree, quiet=quiet_value)
        if not quiet_value:
            console.print(f"[success]{template} is valid.[/success]")

    _run_cli(_run, debug=debug_value)
