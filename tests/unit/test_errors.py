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

from cascadepdf.core.errors import DocumentError, ParseError, RenderError, ValidationError


class TestDocumentError(unittest.TestCase):
    def test_within_prepends_labels_without_mutating(self) -> None:
        original = ParseError("invalid color value `x`", value="x")
        wrapped = original.within("attribute `font-color`", attribute="font-color")
        outer = wrapped.within("error in page 2")

        self.assertEqual(str(original), "invalid color value `x`")
        self.assertEqual(
            str(outer),
            "error in page 2: attribute `font-color`: invalid color value `x`",
        )
        self.assertEqual(outer.args, (str(outer),))
        self.assertEqual(outer.trail, ("error in page 2", "attribute `font-color`"))
        self.assertIsInstance(outer, ParseError)
        self.assertEqual(outer.value, "x")
        self.assertEqual(outer.attribute, "font-color")

    def test_innermost_attribute_wins(self) -> None:
        error = ValidationError("bad", attribute="inner").within("x", attribute="outer")
        self.assertEqual(error.attribute, "inner")

    def test_builtin_bases(self) -> None:
        self.assertTrue(issubclass(ParseError, ValueError))
        self.assertTrue(issubclass(ValidationError, ValueError))
        self.assertTrue(issubclass(RenderError, RuntimeError))
        for cls in (ParseError, ValidationError, RenderError):
            self.assertTrue(issubclass(cls, DocumentError))


if __name__ == "__main__":
    unittest.main()
