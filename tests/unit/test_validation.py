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

from cascadepdf.core.errors import ValidationError
from cascadepdf.core.validation import (
    optional_str,
    reject_unknown_keys,
    require_bool,
    require_dict,
    require_keys,
    require_list,
    require_str,
)


class TestValidation(unittest.TestCase):
    def test_require_list_accepts_list_only(self) -> None:
        self.assertEqual(require_list([1, 2], label="pages"), [1, 2])
        with self.assertRaisesRegex(ValidationError, "pages must be a list"):
            require_list((1, 2), label="pages")

    def test_require_dict_accepts_and_rejects(self) -> None:
        self.assertEqual(require_dict({"a": 1}, label="document"), {"a": 1})
        with self.assertRaisesRegex(ValidationError, "document must be an object"):
            require_dict([], label="document")

    def test_require_keys_names_missing_key(self) -> None:
        require_keys({"name": "x"}, ["name"], label="styles[0]")
        with self.assertRaisesRegex(ValidationError, r"styles\[0\]\.value is required"):
            require_keys({"name": "x"}, ["name", "value"], label="styles[0]")

    def test_reject_unknown_keys_lists_sorted_names(self) -> None:
        reject_unknown_keys({"text": "a"}, {"text", "attributes"}, label="cell")
        with self.assertRaisesRegex(ValidationError, "cell has unknown keys: colour, zeta"):
            reject_unknown_keys({"zeta": 1, "colour": 2}, {"text"}, label="cell")

    def test_require_str_empty_handling(self) -> None:
        self.assertEqual(require_str("", label="text"), "")
        with self.assertRaisesRegex(ValidationError, "text must be a non-empty string"):
            require_str("  ", label="text", allow_empty=False)
        with self.assertRaisesRegex(ValidationError, "text must be a string"):
            require_str(3, label="text")

    def test_require_bool_rejects_ints(self) -> None:
        self.assertTrue(require_bool(True, label="bookmarks"))
        with self.assertRaisesRegex(ValidationError, "bookmarks must be a boolean"):
            require_bool(1, label="bookmarks")

    def test_optional_str_defaults_and_checks(self) -> None:
        self.assertEqual(optional_str({}, "units", label="document", default="mm"), "mm")
        self.assertEqual(optional_str({"units": "cm"}, "units", label="document"), "cm")
        with self.assertRaisesRegex(ValidationError, r"document\.units must be a string"):
            optional_str({"units": 5}, "units", label="document")


if __name__ == "__main__":
    unittest.main()
