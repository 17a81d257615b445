#!/usr/bin/env python

"""
drc_supervision/helperfunc.py

===============================================================================

    Copyright (C) 2019 Rudolf Cardinal (rudolf@pobox.com).

    This file is part of drc_supervision.

    This is free software: you can redistribute it and/or modify
    it under the terms of the GNU General Public License as published by
    the Free Software Foundation, either version 3 of the License, or
    (at your option) any later version.

    This software is distributed in the hope that it will be useful,
    but WITHOUT ANY WARRANTY; without even the implied warranty of
    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
    GNU General Public License for more details.

    You should have received a copy of the GNU General Public License
    along with this software. If not, see <https://www.gnu.org/licenses/>.

===============================================================================

Miscellaneous helper functions.

"""

from typing import Any, List, Optional, Sequence

from openpyxl.cell import Cell
from openpyxl.styles import Font
from openpyxl.workbook.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from drc_supervision.constants import (
    FALSE_VALUES,
    MISSING_VALUES,
    TRUE_VALUES,
)


# =============================================================================
# Helper functions
# =============================================================================


def mismatch(actual: List[Any], expected: List[Any]) -> str:
    """
    Provides text to locate a mismatch between two lists.
    """
    n_actual = len(actual)
    n_intended = len(expected)
    if n_actual != n_intended:
        return (
            f"Wrong length: actual has length {n_actual}, "
            f"intended has length {n_intended}"
        )
    for i in range(n_actual):
        if actual[i] != expected[i]:
            return f"Found {actual[i]!r} where {expected[i]!r} was expected"
    return ""


def cell_to_bool(value: Any, default: Optional[bool] = None) -> bool:
    """
    Interprets a spreadsheet cell as a boolean. Blank cells give ``default``;
    if that is ``None``, blanks are an error.

    Raises:
        :exc:`ValueError` if the cell isn't recognizable
    """
    if isinstance(value, str):
        value = value.strip()
    if value in MISSING_VALUES:
        if default is None:
            raise ValueError("Missing boolean value")
        return default
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ValueError(f"Bad boolean value: {value!r}")


def cell_to_str(value: Any) -> Optional[str]:
    """
    Text from a cell, stripped; ``None`` for blanks. Numbers (e.g. numeric
    employee codes) are converted to text.
    """
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    return text or None


def is_empty_row(row: Sequence[Cell]) -> bool:
    """
    Is this an empty spreadsheet row?
    """
    return all(cell.value is None for cell in row)


def read_until_empty_row(ws: Worksheet) -> List[List[Any]]:
    """
    Reads a spreadsheet until the first empty line.
    (Helpful because Excel spreadsheets are sometimes seen as having 1048576
    rows when they don't really).
    """
    rows = []  # type: List[List[Any]]
    for row in ws.iter_rows():
        if is_empty_row(row):
            break
        rows.append([cell.value for cell in row])
    return rows


def bold_cell(cell: Cell) -> None:
    cell.font = Font(bold=True)


def bold_first_row(ws: Worksheet) -> None:
    """
    Makes the heading row bold.
    """
    for cell in ws[1]:
        bold_cell(cell)


def autosize_openpyxl_worksheet_columns(ws: Worksheet) -> None:
    """
    Automatically resize column sizes to their contents. See

    - https://stackoverflow.com/questions/13197574/openpyxl-adjust-column-width-size
    """  # noqa
    dims = {}
    for row in ws.rows:
        for cell in row:
            if cell.value is not None:
                text = str(cell.value)
                text_width = len(text)  # the poor approximation
                dims[cell.column_letter] = max(
                    dims.get(cell.column_letter, 0), text_width
                )
    for col, value in dims.items():
        ws.column_dimensions[col].width = value


def autosize_openpyxl_columns_all_sheets(wb: Workbook) -> None:
    """
    Autosize columns for all sheets in a workbook.
    """
    for sheet_name in wb.sheetnames:
        ws = wb[sheet_name]
        autosize_openpyxl_worksheet_columns(ws)
