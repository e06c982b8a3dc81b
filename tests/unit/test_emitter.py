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

import unittest

from test_support import CHAR_WIDTH, RecordingSink

from cascadepdf.builder import DocumentBuilder
from cascadepdf.cascade.resolver import resolve_document
from cascadepdf.config import DocumentDefaults
from cascadepdf.model.elements import ElementKind
from cascadepdf.model.paint import FontStyle
from cascadepdf.render.emitter import WATERMARK_ANGLE, expand_page_template, render_document

DEFAULT_LINE_HEIGHT = 12 * 25.4 / 72


def _render(builder: DocumentBuilder, sink: RecordingSink | None = None):
    sink = sink or RecordingSink()
    placed = builder.build().render(sink)
    return sink, placed


class TestExpandPageTemplate(unittest.TestCase):
    def test_padding(self) -> None:
        self.assertEqual(expand_page_template("${page}/${total}", 3, 12, width=4), "0003/0012")
        self.assertEqual(expand_page_template("${page}/${total}", 3, 12, width=0), "3/12")
        self.assertEqual(expand_page_template("no tokens", 1, 1, width=4), "no tokens")


class TestLayoutEmitter(unittest.TestCase):
    def test_width_falls_back_to_measured_text(self) -> None:
        builder = DocumentBuilder()
        page = builder.add_page()
        page.add_cell("abcd")
        page.add_cell("xy")
        _, placed = _render(builder)

        first, second = placed
        self.assertEqual(first.rect.left, 10.0)
        self.assertEqual(first.rect.top, 10.0)
        self.assertEqual(first.rect.width, 4 * CHAR_WIDTH)
        self.assertAlmostEqual(first.rect.height, DEFAULT_LINE_HEIGHT)
        self.assertEqual(second.rect.left, 10.0 + 4 * CHAR_WIDTH)
        self.assertEqual(second.rect.top, 10.0)

    def test_percent_width_uses_drawing_area(self) -> None:
        builder = DocumentBuilder()
        builder.add_page().add_cell("x").attribute("width", "50%").attribute("height", "1cm")
        _, placed = _render(builder)
        self.assertEqual(placed[0].rect.width, 95.0)
        self.assertAlmostEqual(placed[0].rect.height, 10.0)

    def test_display_modes_move_the_cursor(self) -> None:
        builder = DocumentBuilder()
        page = builder.add_page()
        page.add_cell("a").attributes({"width": "20mm", "height": "5mm", "display": "stack"})
        page.add_cell("b").attributes({"width": "30mm", "height": "5mm", "display": "row"})
        page.add_cell("c").attributes({"width": "10mm", "height": "5mm"})
        _, placed = _render(builder)

        rects = [(cell.rect.left, cell.rect.top) for cell in placed]
        self.assertEqual(rects[0], (10.0, 10.0))
        self.assertEqual(rects[1], (10.0, 15.0))
        self.assertEqual(rects[2], (10.0, 20.0))

    def test_absolute_cell_uses_page_coordinates(self) -> None:
        builder = DocumentBuilder()
        page = builder.add_page()
        page.add_cell("flow").attribute("width", "30mm")
        page.add_cell("pinned").attributes(
            {"absolute": "true", "left": "50%", "top": "20mm", "width": "10mm"}
        )
        page.add_cell("after").attribute("width", "5mm")
        _, placed = _render(builder)

        self.assertEqual((placed[1].rect.left, placed[1].rect.top), (95.0, 20.0))
        self.assertEqual((placed[2].rect.left, placed[2].rect.top), (105.0, 20.0))

    def test_absolute_cell_keeps_cursor_axis_when_unset(self) -> None:
        builder = DocumentBuilder()
        page = builder.add_page()
        page.add_cell("flow").attribute("width", "30mm")
        page.add_cell("pinned").attributes({"absolute": "1", "top": "100mm"})
        _, placed = _render(builder)
        self.assertEqual((placed[1].rect.left, placed[1].rect.top), (40.0, 100.0))

    def test_absolute_flag_is_ignored_outside_pages(self) -> None:
        builder = DocumentBuilder()
        header_cell = builder.header().add_cell("h")
        header_cell.attributes({"absolute": "true", "left": "50mm", "top": "50mm"})
        builder.footer().add_cell("f").attributes({"absolute": "t", "top": "0mm"})
        builder.add_page()
        sink, placed = _render(builder)
        sink.save("out.pdf")

        offset = (10.0 - DEFAULT_LINE_HEIGHT) / 2
        header = next(cell for cell in placed if cell.section is ElementKind.HEADER)
        footer = next(cell for cell in placed if cell.section is ElementKind.FOOTER)
        self.assertEqual(header.rect.left, 10.0)
        self.assertAlmostEqual(header.rect.top, offset)
        self.assertEqual(footer.rect.left, 10.0)
        self.assertAlmostEqual(footer.rect.top, 287.0 + offset)

    def test_header_and_footer_expand_page_numbers(self) -> None:
        builder = DocumentBuilder()
        builder.header().add_cell("${page}/${total}")
        builder.footer().add_cell("footer ${page}")
        builder.add_page()
        builder.add_page()
        sink, placed = _render(builder)

        headers = [cell.text for cell in placed if cell.section is ElementKind.HEADER]
        self.assertEqual(headers, ["0001/0002", "0002/0002"])
        footers = [cell.text for cell in placed if cell.section is ElementKind.FOOTER]
        self.assertEqual(footers, ["footer 0001"])

        sink.save("out.pdf")
        self.assertEqual(sink.surface.texts()[-1], "footer 0002")

    def test_sections_sit_in_the_margin_bands(self) -> None:
        builder = DocumentBuilder()
        builder.header().add_cell("h")
        builder.footer().add_cell("f")
        builder.add_page()
        builder.add_page()
        _, placed = _render(builder)

        header = next(cell for cell in placed if cell.section is ElementKind.HEADER)
        footer = next(cell for cell in placed if cell.section is ElementKind.FOOTER)
        offset = (10.0 - DEFAULT_LINE_HEIGHT) / 2
        self.assertEqual(header.rect.left, 10.0)
        self.assertAlmostEqual(header.rect.top, offset)
        self.assertAlmostEqual(footer.rect.top, 287.0 + offset)

    def test_hook_order_matches_page_flow(self) -> None:
        builder = DocumentBuilder()
        builder.add_page()
        builder.add_page()
        sink, _ = _render(builder)
        sink.save("out.pdf")
        self.assertEqual(
            sink.events,
            [
                ("page", 0),
                ("header", 0),
                ("footer", 0),
                ("page", 1),
                ("header", 1),
                ("footer", 1),
            ],
        )

    def test_watermark_is_bold_spaced_and_rotated(self) -> None:
        builder = DocumentBuilder()
        builder.watermark("DRAFT").attribute("font-color", "#CCCCCC")
        builder.add_page()
        sink, _ = _render(builder)
        sink.save("out.pdf")

        (op,) = sink.surface.of_kind("text_at")
        _, x, y, text, style, _, angle = op
        self.assertEqual((x, y), (105.0, 148.5))
        self.assertEqual(text, "D R A F T")
        self.assertEqual(angle, WATERMARK_ANGLE)
        self.assertIn(FontStyle.BOLD, style.font_style)
        self.assertEqual(style.color.rgb, 0xCCCCCC)

    def test_page_background_and_border(self) -> None:
        builder = DocumentBuilder()
        builder.add_page().attributes({"background-color": "#EEEEEE", "border-width": "1"})
        sink, _ = _render(builder)

        rects = sink.surface.of_kind("rect")
        self.assertEqual(len(rects), 1)
        self.assertEqual(rects[0][1].left, 10.0)
        self.assertEqual(rects[0][1].width, 190.0)
        self.assertEqual(len(sink.surface.of_kind("line")), 4)

    def test_cell_border_does_not_move_the_cursor(self) -> None:
        builder = DocumentBuilder()
        page = builder.add_page()
        page.add_cell("a").attributes({"width": "10mm", "border-bottom-width": "0.5"})
        page.add_cell("b").attribute("width", "10mm")
        sink, placed = _render(builder)

        (line,) = sink.surface.of_kind("line")
        bottom = 10.0 + DEFAULT_LINE_HEIGHT
        for actual, expected in zip(line[1:5], (10.0, bottom, 20.0, bottom)):
            self.assertAlmostEqual(actual, expected)
        self.assertEqual(placed[1].rect.left, 20.0)

    def test_bookmarks(self) -> None:
        builder = DocumentBuilder().show_bookmarks()
        builder.add_page().bookmark_title("Intro")
        builder.add_page()
        sink, _ = _render(builder)
        self.assertEqual(sink.bookmarks, ["Intro", "Page 0002"])

    def test_page_bookmark_title_expands_page_numbers(self) -> None:
        builder = DocumentBuilder().show_bookmarks()
        builder.add_page()
        builder.add_page().bookmark_title("Chapter ${page} of ${total}")
        sink, _ = _render(builder)
        self.assertEqual(sink.bookmarks, ["Page 0001", "Chapter 0002 of 0002"])

    def test_bookmark_template_and_width_are_configurable(self) -> None:
        builder = DocumentBuilder().show_bookmarks().page_bookmark_template("${page} of ${total}")
        builder.add_page()
        resolved = resolve_document(builder.document)
        sink = RecordingSink()
        render_document(resolved, sink, page_number_width=0)
        self.assertEqual(sink.bookmarks, ["1 of 1"])

    def test_bookmarks_off_by_default(self) -> None:
        builder = DocumentBuilder()
        builder.add_page()
        sink, _ = _render(builder)
        self.assertEqual(sink.bookmarks, [])

    def test_title_and_fonts_reach_the_sink(self) -> None:
        builder = DocumentBuilder(DocumentDefaults()).title("Report")
        builder.add_page()
        sink, _ = _render(builder)
        self.assertEqual(sink.title, "Report")
        self.assertEqual(sink.fonts, [])


if __name__ == "__main__":
    unittest.main()
