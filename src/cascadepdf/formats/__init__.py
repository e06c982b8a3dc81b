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

from .document_json import (
    document_from_dict,
    document_to_dict,
    dumps_document,
    load_document,
    loads_document,
    save_document,
)
from .fonts import (
    FILE_PREFIX as FONT_FILE_PREFIX,
    MAX_FONT_FILE_BYTES,
    font_bytes,
    font_data_from_value,
    font_from_file,
)

__all__ = [
    "FONT_FILE_PREFIX",
    "MAX_FONT_FILE_BYTES",
    "document_from_dict",
    "document_to_dict",
    "dumps_document",
    "font_bytes",
    "font_data_from_value",
    "font_from_file",
    "load_document",
    "loads_document",
    "save_document",
]
