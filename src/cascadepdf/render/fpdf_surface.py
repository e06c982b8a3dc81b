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

"""fpdf2 implementation of the drawing surface and document sink."""

from __future__ import annotations

import tempfile
from collections.abc import Iterator, Sequence
from contextlib import AbstractContextManager, contextmanager
from dataclasses import replace
from pathlib import Path

from fpdf import FPDF
from fpdf.errors import FPDFException

from ..cascade.resolved import ResolvedDocument
from ..config.loader import DocumentDefaults
from ..core.errors import DocumentError, RenderError
from ..core.units import DEFAULT_UNIT_TABLE, Dimension, DimensionUnit, UnitFlags, UnitTable
from ..formats.fonts import font_bytes
from ..model.elements import PAGE_SIZES_MM, Font, Orientation
from ..model.paint import Brush, CapStyle, CellDisplay, FontStyle, TextBrush
from .surface import DocumentSink, DrawingSurface, Rect, SectionHook

_CAP_STYLES = {
    CapStyle.CAP: "round",
    CapStyle.BUTT: "butt",
    CapStyle.SQUARE: "square",
}
_FONT_STYLE_CODES = (
    (FontStyle.BOLD, "B"),
    (FontStyle.ITALIC, "I"),
    (FontStyle.UNDERLINE, "U"),
    (FontStyle.STRIKETHROUGH, "S"),
)


def fpdf_font_style(style: FontStyle, *, decorations: bool = True) -> str:
    """Map a FontStyle to fpdf2's style string ("" for regular)."""
    codes = _FONT_STYLE_CODES if decorations else _FONT_STYLE_CODES[:2]
    return "".join(code for flag, code in codes if flag in style)


@contextmanager
def _fpdf_errors(action: str) -> Iterator[None]:
    try:
        yield
    except DocumentError:
        raise
    except (FPDFException, ValueError, OSError) as exc:
        raise RenderError(f"{action} failed: {exc}") from exc


def _brush_graphics(brush: Brush) -> dict[str, object]:
    return {
        "fill_opacity": brush.fill_color.alpha,
        "stroke_opacity": brush.stroke_color.alpha,
        "stroke_cap_style": _CAP_STYLES[brush.cap_style],
        "stroke_join_style": brush.join_style.value,
    }


def _paint_style(brush: Brush) -> str:
    if brush.fill and brush.stroke:
        return "DF"
    if brush.fill:
        return "F"
    return "D"


class FpdfSurface(DrawingSurface):
    def __init__(self, pdf: FPDF) -> None:
        self._pdf = pdf
        self._stack: list[AbstractContextManager[None]] = []

    @property
    def pdf(self) -> FPDF:
        return self._pdf

    def save(self, **graphics: object) -> None:
        with _fpdf_errors("saving paint state"):
            context = self._pdf.local_context(**graphics)
            context.__enter__()
        self._stack.append(context)

    def restore(self) -> None:
        if not self._stack:
            raise RenderError("restore() called without a matching save()")
        context = self._stack.pop()
        with _fpdf_errors("restoring paint state"):
            context.__exit__(None, None, None)

    @contextmanager
    def _styled(self, brush: Brush) -> Iterator[None]:
        self.save(**_brush_graphics(brush))
        try:
            pdf = self._pdf
            pdf.set_line_width(brush.stroke_width)
            pdf.set_draw_color(*brush.stroke_color.as_tuple())
            pdf.set_fill_color(*brush.fill_color.as_tuple())
            yield
        finally:
            self.restore()

    @contextmanager
    def _text_styled(self, style: TextBrush, font_size: float) -> Iterator[None]:
        # PDF text is painted with the fill colour and fill opacity.
        with self._styled(replace(style.brush, fill_color=style.color)):
            pdf = self._pdf
            pdf.set_font(
                style.font_family,
                fpdf_font_style(style.font_style),
                font_size * pdf.k,
            )
            pdf.set_text_color(*style.color.as_tuple())
            yield

    def draw_text(
        self,
        width: float,
        height: float,
        text: str,
        style: TextBrush,
        font_size: float,
    ) -> None:
        pdf = self._pdf
        x, y = pdf.get_x(), pdf.get_y()
        alignment = style.alignment
        horizontal = next((code for code in alignment if code in "LCR"), "L")
        line_height = self.text_height(style, font_size)
        if "T" in alignment:
            text_y, text_h = y, line_height
        elif "B" in alignment or "A" in alignment:
            text_y, text_h = y + height - line_height, line_height
        else:
            text_y, text_h = y, height
        with _fpdf_errors("drawing text"), self._text_styled(style, font_size):
            pdf.set_xy(x, text_y)
            pdf.cell(width, text_h, text, align=horizontal)

        if style.display is CellDisplay.ROW:
            pdf.set_xy(pdf.l_margin, y + height)
        elif style.display is CellDisplay.STACK:
            pdf.set_xy(x, y + height)
        else:
            pdf.set_xy(x + width, y)

    def draw_text_at(
        self,
        x: float,
        y: float,
        text: str,
        style: TextBrush,
        font_size: float,
        *,
        angle: float = 0.0,
    ) -> None:
        pdf = self._pdf
        cursor = (pdf.get_x(), pdf.get_y())
        with _fpdf_errors("drawing text"), self._text_styled(style, font_size):
            width = pdf.get_string_width(text)
            with pdf.rotation(angle, x=x, y=y):
                pdf.set_xy(x - width / 2, y - font_size / 2)
                pdf.cell(width, font_size, text, align="C")
        pdf.set_xy(*cursor)

    def draw_rect(self, rect: Rect, brush: Brush) -> None:
        with _fpdf_errors("drawing rectangle"), self._styled(brush):
            self._pdf.rect(rect.left, rect.top, rect.width, rect.height, style=_paint_style(brush))

    def draw_circle(self, x: float, y: float, radius: float, brush: Brush) -> None:
        with _fpdf_errors("drawing circle"), self._styled(brush):
            self._pdf.ellipse(
                x - radius,
                y - radius,
                radius * 2,
                radius * 2,
                style=_paint_style(brush),
            )

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, brush: Brush) -> None:
        with _fpdf_errors("drawing line"), self._styled(brush):
            self._pdf.line(x1, y1, x2, y2)

    def get_xy(self) -> tuple[float, float]:
        return (self._pdf.get_x(), self._pdf.get_y())

    def set_xy(self, x: float, y: float) -> None:
        self._pdf.set_xy(x, y)

    def drawing_rect(self) -> Rect:
        pdf = self._pdf
        return Rect(
            left=pdf.l_margin,
            top=pdf.t_margin,
            width=pdf.w - pdf.l_margin - pdf.r_margin,
            height=pdf.h - pdf.t_margin - pdf.b_margin,
        )

    def page_rect(self) -> Rect:
        return Rect(0.0, 0.0, self._pdf.w, self._pdf.h)

    def text_width(self, text: str, style: TextBrush, font_size: float) -> float:
        with _fpdf_errors("measuring text"), self._text_styled(style, font_size):
            return self._pdf.get_string_width(text)

    def text_height(self, style: TextBrush, font_size: float) -> float:
        return font_size


class _HookedFPDF(FPDF):
    """FPDF whose header and footer delegate to the layout emitter."""

    def __init__(self, *args: object, **kwargs: object) -> None:
        super().__init__(*args, **kwargs)
        self.layout_hook: SectionHook | None = None
        self.layout_surface: FpdfSurface | None = None

    def header(self) -> None:
        if self.layout_hook is not None and self.layout_surface is not None:
            self.layout_hook(self.layout_surface, self.page_no() - 1, False)

    def footer(self) -> None:
        if self.layout_hook is not None and self.layout_surface is not None:
            self.layout_hook(self.layout_surface, self.page_no() - 1, True)


def page_format(
    page_size: str,
    unit: DimensionUnit,
    units: UnitTable = DEFAULT_UNIT_TABLE,
) -> tuple[float, float]:
    """Portrait page dimensions of ``page_size`` in ``unit``."""
    try:
        width_mm, height_mm = PAGE_SIZES_MM[page_size]
    except KeyError as exc:
        raise RenderError(f"unsupported page size `{page_size}`") from exc
    return (
        units.convert(Dimension.of(width_mm, DimensionUnit.MM), UnitFlags.LENGTH, unit),
        units.convert(Dimension.of(height_mm, DimensionUnit.MM), UnitFlags.LENGTH, unit),
    )


class FpdfDocumentSink(DocumentSink):
    def __init__(
        self,
        *,
        page_size: str = "A4",
        orientation: Orientation = Orientation.PORTRAIT,
        unit: DimensionUnit = DimensionUnit.MM,
        margin_mm: float = DocumentDefaults.margin_mm,
        units: UnitTable = DEFAULT_UNIT_TABLE,
    ) -> None:
        if unit.is_relative:
            raise RenderError("relative units cannot be used at the document level")
        with _fpdf_errors("creating document"):
            pdf = _HookedFPDF(
                orientation=orientation.value,
                unit=unit.value,
                format=page_format(page_size, unit, units),
            )
        margin = units.convert(Dimension.of(margin_mm, DimensionUnit.MM), UnitFlags.LENGTH, unit)
        pdf.set_margins(margin, margin, margin)
        pdf.set_auto_page_break(False, margin=margin)
        pdf.c_margin = 0
        pdf.layout_surface = FpdfSurface(pdf)
        self._pdf = pdf

    @property
    def pdf(self) -> FPDF:
        return self._pdf

    @property
    def surface(self) -> FpdfSurface:
        assert self._pdf.layout_surface is not None
        return self._pdf.layout_surface

    def set_title(self, title: str) -> None:
        self._pdf.set_title(title)

    def add_fonts(self, fonts: Sequence[Font]) -> None:
        if not fonts:
            return
        with tempfile.TemporaryDirectory(prefix="cascadepdf-fonts-") as tmpdir:
            for index, font in enumerate(fonts):
                font_path = Path(tmpdir) / f"font-{index}.ttf"
                font_path.write_bytes(font_bytes(font))
                with _fpdf_errors(f"loading font `{font.name}`"):
                    self._pdf.add_font(
                        font.name,
                        fpdf_font_style(font.style, decorations=False),
                        str(font_path),
                    )

    def add_page(self, section_hook: SectionHook | None = None) -> DrawingSurface:
        self._pdf.layout_hook = section_hook
        with _fpdf_errors("adding page"):
            self._pdf.add_page()
        return self.surface

    def add_bookmark(self, title: str) -> None:
        with _fpdf_errors("adding bookmark"):
            self._pdf.start_section(title, level=0)

    @property
    def page_count(self) -> int:
        return self._pdf.page_no()

    def save(self, path: str | Path) -> Path:
        output_path = Path(path)
        with _fpdf_errors(f"writing {output_path}"):
            output_path.parent.mkdir(parents=True, exist_ok=True)
            self._pdf.output(str(output_path))
        return output_path

    def to_bytes(self) -> bytes:
        with _fpdf_errors("writing document"):
            return bytes(self._pdf.output())


def sink_for(
    document: ResolvedDocument,
    defaults: DocumentDefaults | None = None,
) -> FpdfDocumentSink:
    """Build a sink matching a resolved document's page setup."""
    defaults = defaults or DocumentDefaults()
    return FpdfDocumentSink(
        page_size=document.page_size,
        orientation=document.orientation,
        unit=document.display_unit,
        margin_mm=defaults.margin_mm,
    )


__all__ = [
    "FpdfDocumentSink",
    "FpdfSurface",
    "fpdf_font_style",
    "page_format",
    "sink_for",
]
