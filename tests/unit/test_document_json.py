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

import json
import tempfile
import unittest
from pathlib import Path

from cascadepdf.config import DocumentDefaults
from cascadepdf.core.errors import ParseError, ValidationError
from cascadepdf.core.units import DimensionUnit
from cascadepdf.formats import (
    document_from_dict,
    document_to_dict,
    dumps_document,
    load_document,
    loads_document,
    save_document,
)
from cascadepdf.model.elements import Orientation
from cascadepdf.model.paint import FontStyle

SAMPLE = {
    "attributes": [{"name": "title", "value": "Invoice"}],
    "style_list": ["base"],
    "styles": [
        {"name": "base", "attributes": [{"name": "font-family", "value": "helvetica"}]},
        {"name": "strong", "attributes": [{"name": "font-style", "value": "bold"}]},
    ],
    "size": "letter",
    "units": "in",
    "orientation": "landscape",
    "header": {"cells": [{"text": "Page ${page} of ${total}"}]},
    "footer": {"attributes": [{"name": "font-size", "value": "80%"}]},
    "pages": [
        {
            "bookmark_title": "Summary",
            "cells": [
                {"text": "Total", "style_list": ["strong"]},
                {"text": "42", "attributes": [{"name": "text-align", "value": "R"}]},
            ],
        }
    ],
    "bookmarks": True,
    "page_bookmark_template": "Sheet ${page}",
    "watermark": {"text": "PAID", "attributes": [{"name": "font-color", "value": "#20FF0000"}]},
}


class TestDocumentFromDict(unittest.TestCase):
    def test_full_document(self) -> None:
        document = document_from_dict(SAMPLE)
        self.assertEqual(document.page_size, "Letter")
        self.assertEqual(document.display_unit, DimensionUnit.IN)
        self.assertEqual(document.orientation, Orientation.LANDSCAPE)
        self.assertEqual(document.get_attribute("title"), "Invoice")
        self.assertEqual(document.style_list, ["base"])
        self.assertEqual([style.name for style in document.styles], ["base", "strong"])
        self.assertEqual(document.header.cells[0].text, "Page ${page} of ${total}")
        self.assertEqual(document.footer.attributes[0].value, "80%")
        page = document.pages[0]
        self.assertEqual(page.bookmark_title, "Summary")
        self.assertEqual([cell.text for cell in page.cells], ["Total", "42"])
        self.assertEqual(page.cells[0].style_list, ["strong"])
        self.assertTrue(document.bookmarks)
        self.assertEqual(document.page_bookmark_template, "Sheet ${page}")
        self.assertEqual(document.watermark.text, "PAID")

    def test_missing_settings_use_defaults(self) -> None:
        defaults = DocumentDefaults(page_size="A5", units=DimensionUnit.CM)
        document = document_from_dict({"pages": [{}]}, defaults=defaults)
        self.assertEqual(document.page_size, "A5")
        self.assertEqual(document.display_unit, DimensionUnit.CM)
        self.assertEqual(document.orientation, Orientation.PORTRAIT)
        self.assertFalse(document.bookmarks)
        self.assertEqual(len(document.pages), 1)

    def test_unknown_keys_are_rejected_with_their_path(self) -> None:
        cases = (
            ({"pages": [], "colour": "red"}, "document has unknown keys: colour"),
            (
                {"pages": [{"cells": [{"txt": "x"}]}]},
                r"document\.pages\[0\]\.cells\[0\] has unknown keys: txt",
            ),
            (
                {"watermark": {"text": "x", "angle": 30}},
                "document.watermark has unknown keys: angle",
            ),
        )
        for data, pattern in cases:
            with self.subTest(pattern=pattern):
                with self.assertRaisesRegex(ValidationError, pattern):
                    document_from_dict(data)

    def test_type_errors(self) -> None:
        cases = (
            ([], "document must be an object"),
            ({"pages": {}}, "document.pages must be a list"),
            ({"bookmarks": "yes"}, "document.bookmarks must be a boolean"),
            (
                {"styles": [{"attributes": []}]},
                r"document\.styles\[0\]\.name is required",
            ),
            (
                {"pages": [{"attributes": [{"name": "font-size"}]}]},
                r"document\.pages\[0\]\.attributes\[0\]\.value is required",
            ),
            ({"pages": [{"cells": [{"text": 5}]}]}, r"cells\[0\]\.text must be a string"),
        )
        for data, pattern in cases:
            with self.subTest(pattern=pattern):
                with self.assertRaisesRegex(ValidationError, pattern):
                    document_from_dict(data)

    def test_bad_page_settings(self) -> None:
        with self.assertRaisesRegex(ParseError, "document: unsupported page size `B5`"):
            document_from_dict({"size": "B5"})
        with self.assertRaisesRegex(ParseError, "document: unsupported unit `pt`"):
            document_from_dict({"units": "pt"})
        with self.assertRaisesRegex(ParseError, "unsupported orientation"):
            document_from_dict({"orientation": "sideways"})

    def test_fonts(self) -> None:
        document = document_from_dict(
            {"fonts": [{"name": "Mono", "style": "bold|italic", "data": "00010000"}]}
        )
        font = document.fonts[0]
        self.assertEqual(font.name, "Mono")
        self.assertEqual(font.style, FontStyle.BOLD | FontStyle.ITALIC)
        self.assertEqual(font.data.data, "00010000")

    def test_font_errors_carry_the_font_path(self) -> None:
        with self.assertRaisesRegex(ValidationError, r"document\.fonts\[0\]: missing font data"):
            document_from_dict({"fonts": [{"name": "Mono", "data": " "}]})


class TestDocumentJson(unittest.TestCase):
    def test_serialized_form_reloads_identically(self) -> None:
        document = document_from_dict(SAMPLE)
        reloaded = loads_document(dumps_document(document))
        self.assertEqual(reloaded, document)
        self.assertEqual(document_to_dict(reloaded), document_to_dict(document))

    def test_dict_uses_wire_names(self) -> None:
        data = document_to_dict(document_from_dict(SAMPLE))
        self.assertEqual(data["size"], "Letter")
        self.assertEqual(data["units"], "in")
        self.assertEqual(data["orientation"], "L")
        self.assertEqual(data["pages"][0]["bookmark_title"], "Summary")
        self.assertNotIn("bookmark_title", data["pages"][0]["cells"][0])

    def test_invalid_json(self) -> None:
        with self.assertRaisesRegex(ValidationError, "invalid document JSON at line 1"):
            loads_document("{not json")

    def test_file_round_trip_and_relative_font_paths(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            (root / "fonts").mkdir()
            (root / "fonts" / "mono.ttf").write_bytes(b"\x00\x01\x00\x00")
            source = root / "doc.json"
            source.write_text(
                json.dumps(
                    {
                        "fonts": [{"name": "Mono", "data": "file://fonts/mono.ttf"}],
                        "pages": [{}],
                    }
                ),
                encoding="utf-8",
            )
            document = load_document(source)
            expected = (root / "fonts" / "mono.ttf").resolve()
            self.assertEqual(Path(document.fonts[0].data.path), expected)

            target = save_document(document, root / "copy.json")
            self.assertTrue(target.read_text(encoding="utf-8").endswith("\n"))
            self.assertEqual(load_document(target), document)


if __name__ == "__main__":
    unittest.main()
