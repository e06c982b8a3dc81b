#!/usr/bin/env python3
from __future__ import annotations

from collections.abc import Sequence

from rich import box
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from ...cascade.resolved import ResolvedCell, ResolvedDocument
from ...cascade.resolver import absolute_font_size
from ...model.paint import BorderSet, PaintState
from .state import THEME, UIContext, get_context, isatty

DEFAULT_CONTEXT = get_context()
console = DEFAULT_CONTEXT.console
console_err = DEFAULT_CONTEXT.console_err


def _resolve_context(context: UIContext | None) -> UIContext:
    return context or DEFAULT_CONTEXT


def configure_ui(*, no_color: bool, quiet: bool = False, context: UIContext | None = None) -> None:
    context = _resolve_context(context)
    context.quiet = quiet
    context.console.no_color = no_color
    context.console_err.no_color = no_color


def build_kv_table(rows: Sequence[tuple[str, str]], *, title: str | None = None) -> Table:
    table = Table(title=title, show_header=False, box=box.SIMPLE, show_lines=False)
    table.add_column("Field", style="bold", no_wrap=True)
    table.add_column("Value")
    for key, value in rows:
        table.add_row(str(key), str(value))
    return table


def panel(title: str, renderable, *, style: str = "panel") -> Panel:
    return Panel(
        renderable,
        title=title,
        title_align="left",
        border_style=style,
        box=box.ROUNDED,
        padding=(1, 2),
    )


def _format_border(border: BorderSet) -> str:
    sides = [
        f"{name}={brush.stroke_width:g} {brush.stroke_color}"
        for name, brush in border.items()
        if brush is not None
    ]
    return ", ".join(sides) if sides else "none"


def describe_paint(paint: PaintState, document: ResolvedDocument) -> str:
    text = paint.text_style
    size = absolute_font_size(text, document.display_unit)
    parts = [
        f"{text.font_family} {size:.2f}{document.display_unit.value}",
        text.font_style.to_text(),
        f"[swatch]{text.color}[/swatch]",
        f"align={text.alignment}",
    ]
    if paint.background is not None:
        parts.append(f"bg={paint.background.fill_color}")
    if not paint.border.is_empty:
        parts.append(f"border=({_format_border(paint.border)})")
    return " ".join(parts)


def _add_cells(node: Tree, cells: Sequence[ResolvedCell], document: ResolvedDocument) -> None:
    for cell in cells:
        label = cell.text if len(cell.text) <= 32 else f"{cell.text[:29]}..."
        paint = describe_paint(cell.paint, document)
        node.add(f"[accent]cell {cell.index}[/accent] {escape(repr(label))} [muted]{paint}[/muted]")


def build_cascade_tree(document: ResolvedDocument) -> Tree:
    title = escape(document.title or "untitled")
    tree = Tree(
        f"[title]{title}[/title] [muted]{describe_paint(document.paint, document)}[/muted]",
        guide_style="muted",
    )
    for section in (document.header, document.footer):
        if not section.cells:
            continue
        node = tree.add(f"[accent]{section.kind.value}[/accent]")
        _add_cells(node, section.cells, document)
    for page in document.pages:
        paint = describe_paint(page.paint, document)
        node = tree.add(f"[accent]page {page.index}[/accent] [muted]{paint}[/muted]")
        _add_cells(node, page.cells, document)
    if document.watermark.text:
        tree.add(f"[accent]watermark[/accent] {escape(repr(document.watermark.text))}")
    return tree


__all__ = [
    "DEFAULT_CONTEXT",
    "THEME",
    "UIContext",
    "build_cascade_tree",
    "build_kv_table",
    "configure_ui",
    "console",
    "console_err",
    "describe_paint",
    "isatty",
    "panel",
]
