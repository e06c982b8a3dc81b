#!/usr/bin/env python3
from __future__ import annotations

import typer

from .commands import check as check_command, render as render_command


def register(app: typer.Typer) -> None:
    render_command.register(app)
    check_command.register(app)
