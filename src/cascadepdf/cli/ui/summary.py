#!/usr/bin/env python3
from __future__ import annotations

from pathlib import Path

from ...cascade.resolved import ResolvedDocument
from ...model.elements import Document
from . import build_cascade_tree, build_kv_table, console, panel


def _count_cells(document: ResolvedDocument) -> int:
    total = len(document.header.cells) + len(document.footer.cells)
    return total + sum(len(page.cells) for page in document.pages)


def document_summary_rows(
    document: Document,
    resolved: ResolvedDocument,
) -> list[tuple[str, str]]:
    rows = [
        ("Title", resolved.title or "-"),
        ("Page size", f"{resolved.page_size} ({resolved.orientation.name.lower()})"),
        ("Units", resolved.display_unit.value),
        ("Pages", str(resolved.page_count)),
        ("Cells", str(_count_cells(resolved))),
        ("Styles", str(len(document.styles))),
        ("Fonts", ", ".join(font.name for font in resolved.fonts) or "-"),
        ("Bookmarks", "on" if resolved.bookmarks else "off"),
    ]
    if resolved.watermark.text:
        rows.append(("Watermark", resolved.watermark.text))
    return rows


def print_check_summary(
    document: Document,
    resolved: ResolvedDocument,
    *,
    show_tree: bool,
    quiet: bool,
) -> None:
    if quiet:
        return
    console.print(panel("Document", build_kv_table(document_summary_rows(document, resolved))))
    if show_tree:
        console.print(panel("Cascade", build_cascade_tree(resolved)))


def print_render_summary(
    output_path: Path,
    resolved: ResolvedDocument,
    *,
    quiet: bool,
) -> None:
    if quiet:
        return
    rows = [
        ("Output", str(output_path)),
        ("Pages", str(resolved.page_count)),
    ]
    console.print(panel("Rendered", build_kv_table(rows), style="success"))
