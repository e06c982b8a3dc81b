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
from pathlib import Path
from unittest import mock

from rich.console import Console

from cascadepdf.builder import DocumentBuilder
from cascadepdf.cli import ui as ui_module
from cascadepdf.cli.ui import summary as summary_module


def _template():
    builder = DocumentBuilder().title("Report [draft]")
    builder.style("boxed", {"border-width": "1"})
    builder.header().add_cell("${page}")
    builder.watermark("SECRET")
    page = builder.add_page().attribute("background-color", "#EEEEEE")
    page.add_cell("A fairly long cell text that will be shortened").style_list("boxed")
    return builder.build()


def _render(renderable) -> str:
    console = Console(record=True, width=160, color_system=None, theme=ui_module.THEME)
    console.print(renderable)
    return console.export_text()


class TestCascadeTree(unittest.TestCase):
    def test_tree_lists_sections_pages_and_watermark(self) -> None:
        text = _render(ui_module.build_cascade_tree(_template().resolved))
        self.assertIn("Report [draft]", text)
        self.assertIn("header", text)
        self.assertIn("page 0", text)
        self.assertIn("cell 0", text)
        self.assertIn("'A fairly long cell text that ...'", text)
        self.assertIn("watermark 'SECRET'", text)

    def test_describe_paint(self) -> None:
        resolved = _template().resolved
        cell = resolved.pages[0].cells[0]
        description = ui_module.describe_paint(cell.paint, resolved)
        self.assertIn("courier 4.23mm", description)
        self.assertIn("bg=#FFEEEEEE", description)
        self.assertIn("border=(left=1 #FF000000", description)


class TestUISummary(unittest.TestCase):
    def test_summary_rows(self) -> None:
        template = _template()
        rows = dict(summary_module.document_summary_rows(template.document, template.resolved))
        self.assertEqual(rows["Title"], "Report [draft]")
        self.assertEqual(rows["Pages"], "1")
        self.assertEqual(rows["Cells"], "2")
        self.assertEqual(rows["Styles"], "1")
        self.assertEqual(rows["Watermark"], "SECRET")

    def test_print_check_summary_quiet_noop(self) -> None:
        template = _template()
        with mock.patch("cascadepdf.cli.ui.summary.console.print") as print_mock:
            summary_module.print_check_summary(
                template.document,
                template.resolved,
                show_tree=True,
                quiet=True,
            )
        print_mock.assert_not_called()

    @mock.patch("cascadepdf.cli.ui.summary.panel", return_value="PANEL")
    @mock.patch("cascadepdf.cli.ui.summary.build_cascade_tree", return_value="TREE")
    def test_print_check_summary_with_tree(
        self,
        build_cascade_tree: mock.MagicMock,
        panel: mock.MagicMock,
    ) -> None:
        template = _template()
        with mock.patch("cascadepdf.cli.ui.summary.console.print") as print_mock:
            summary_module.print_check_summary(
                template.document,
                template.resolved,
                show_tree=True,
                quiet=False,
            )
        build_cascade_tree.assert_called_once_with(template.resolved)
        self.assertEqual(panel.call_args_list[-1].args, ("Cascade", "TREE"))
        self.assertEqual(print_mock.call_count, 2)

    @mock.patch("cascadepdf.cli.ui.summary.panel", return_value="PANEL")
    def test_print_render_summary(self, panel: mock.MagicMock) -> None:
        template = _template()
        with mock.patch("cascadepdf.cli.ui.summary.console.print") as print_mock:
            summary_module.print_render_summary(Path("out.pdf"), template.resolved, quiet=False)
        print_mock.assert_called_once_with("PANEL")
        self.assertEqual(panel.call_args.args[0], "Rendered")


class TestConfigureUI(unittest.TestCase):
    def test_configure_ui_updates_context(self) -> None:
        context = ui_module.UIContext(
            theme=ui_module.THEME,
            console=Console(),
            console_err=Console(stderr=True),
        )
        ui_module.configure_ui(no_color=True, quiet=True, context=context)
        self.assertTrue(context.quiet)
        self.assertTrue(context.console.no_color)
        self.assertTrue(context.console_err.no_color)


if __name__ == "__main__":
    unittest.main()
