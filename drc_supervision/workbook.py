#!/usr/bin/env python

"""
drc_supervision/workbook.py

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

Reading and writing the faculty/scholar register as a spreadsheet.

"""

import datetime
import logging
import os
import sys
from typing import List

from cardinal_pythonlib.cmdline import cmdline_quote
from openpyxl.reader.excel import load_workbook
from openpyxl.workbook.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from drc_supervision.constants import (
    EXT_XLSX,
    SheetHeadings,
    SheetNames,
)
from drc_supervision.directory import Register
from drc_supervision.faculty import FacultyMember
from drc_supervision.helperfunc import (
    autosize_openpyxl_columns_all_sheets,
    bold_first_row,
    cell_to_bool,
    cell_to_str,
    mismatch,
    read_until_empty_row,
)
from drc_supervision.load import get_faculty_with_supervision_load
from drc_supervision.scholar import Scholar
from drc_supervision.version import VERSION, VERSION_DATE

log = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

FACULTY_HEADINGS = [
    SheetHeadings.EMPLOYEE_CODE,
    SheetHeadings.NAME,
    SheetHeadings.DEPARTMENT,
    SheetHeadings.DESIGNATION,
    SheetHeadings.IS_PHD,
    SheetHeadings.NUMBER_OF_PUBLICATIONS,
    SheetHeadings.IS_ACTIVE,
]

SCHOLAR_HEADINGS = [
    SheetHeadings.ROLL_NUMBER,
    SheetHeadings.REGISTRATION_ID,
    SheetHeadings.EMAIL,
    SheetHeadings.NAME,
    SheetHeadings.DEPARTMENT,
    SheetHeadings.SUPERVISOR,
    SheetHeadings.CO_SUPERVISOR,
    SheetHeadings.IS_ACTIVE,
]

LOAD_HEADINGS = [
    SheetHeadings.EMPLOYEE_CODE,
    SheetHeadings.NAME,
    SheetHeadings.DEPARTMENT,
    SheetHeadings.DESIGNATION,
    SheetHeadings.ELIGIBLE,
    SheetHeadings.ELIGIBILITY_REASON,
    SheetHeadings.SUPERVISION_COUNT,
    SheetHeadings.CO_SUPERVISION_COUNT,
    SheetHeadings.CURRENT_LOAD,
    SheetHeadings.MAX_SCHOLARS,
    SheetHeadings.REMAINING_CAPACITY,
    SheetHeadings.STATUS,
    SheetHeadings.CAN_ACCEPT_MORE,
]


# =============================================================================
# Reading
# =============================================================================


def _check_headings(
    rows: List[List], sheetname: str, expected: List[str]
) -> None:
    assert rows, f"Worksheet {sheetname} is empty"
    obtained = [cell_to_str(x) for x in rows[0][: len(expected)]]
    assert obtained == expected, (
        f"Bad headings to worksheet {sheetname}; expected {expected!r}, got "
        f"{obtained!r} ({mismatch(obtained, expected)})"
    )


def _row_value(row: List, index: int):
    return row[index] if index < len(row) else None


def read_register(filename: str) -> Register:
    """
    Reads a file, autodetecting its format, and returns the
    :class:`Register`.
    """
    _, ext = os.path.splitext(filename)
    if ext == EXT_XLSX:
        return read_register_xlsx(filename)
    raise ValueError(
        f"Don't know how to read file type {ext!r} for {filename!r}"
    )


# noinspection DuplicatedCode
def read_register_xlsx(filename: str) -> Register:
    """
    Reads a :class:`Register` from an Excel XLSX file.
    """
    log.info(f"Reading XLSX file: {filename}")
    wb = load_workbook(
        filename,
        read_only=True,
        keep_vba=False,
        data_only=True,
        keep_links=False,
    )
    register = Register()

    # ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
    # Faculty
    # ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

    log.info("... reading faculty...")
    # This will raise an error if the named sheet does not exist:
    ws_faculty = wb[SheetNames.FACULTY]  # type: Worksheet
    f_rows = read_until_empty_row(ws_faculty)
    _check_headings(f_rows, SheetNames.FACULTY, FACULTY_HEADINGS)
    for row_number, row in enumerate(f_rows[1:], start=2):
        where = f"{SheetNames.FACULTY} row {row_number}"
        faculty_id = cell_to_str(_row_value(row, 0))
        assert faculty_id, f"Missing employee code in {where}"
        assert register.find_faculty(faculty_id) is None, (
            f"Duplicate employee code in {where}: {faculty_id!r}"
        )
        n_publications = _row_value(row, 5)
        if n_publications is None:
            n_publications = 0
        assert isinstance(n_publications, int) and n_publications >= 0, (
            f"Bad number of publications in {where}; is {n_publications!r}"
        )
        try:
            is_phd = cell_to_bool(_row_value(row, 4))
            is_active = cell_to_bool(_row_value(row, 6), default=True)
        except ValueError as e:
            raise ValueError(f"{e} in {where}")
        register.add_faculty(
            FacultyMember(
                faculty_id=faculty_id,
                name=cell_to_str(_row_value(row, 1)),
                department_code=cell_to_str(_row_value(row, 2)),
                designation=cell_to_str(_row_value(row, 3)) or "",
                is_phd=is_phd,
                n_publications=n_publications,
                is_active=is_active,
            )
        )
    assert register.n_faculty, "No faculty defined!"
    log.info(f"Number of faculty: {register.n_faculty}")

    # ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
    # Scholars
    # ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

    log.info("... reading scholars...")
    ws_scholars = wb[SheetNames.SCHOLARS]  # type: Worksheet
    s_rows = read_until_empty_row(ws_scholars)
    _check_headings(s_rows, SheetNames.SCHOLARS, SCHOLAR_HEADINGS)
    for row_number, row in enumerate(s_rows[1:], start=2):
        where = f"{SheetNames.SCHOLARS} row {row_number}"
        scholar_id = cell_to_str(_row_value(row, 0))
        assert scholar_id, f"Missing roll number in {where}"
        supervisor_id = cell_to_str(_row_value(row, 5))
        co_supervisor_id = cell_to_str(_row_value(row, 6))
        for fid in (supervisor_id, co_supervisor_id):
            assert fid is None or register.find_faculty(fid), (
                f"Unknown faculty member in {where}: {fid!r}"
            )
        assert not (supervisor_id and supervisor_id == co_supervisor_id), (
            f"Supervisor and co-supervisor are the same person in {where}: "
            f"{supervisor_id!r}"
        )
        try:
            is_active = cell_to_bool(_row_value(row, 7), default=True)
        except ValueError as e:
            raise ValueError(f"{e} in {where}")
        try:
            register.add_scholar(
                Scholar(
                    scholar_id=scholar_id,
                    registration_id=cell_to_str(_row_value(row, 1)) or "",
                    email=cell_to_str(_row_value(row, 2)) or "",
                    name=cell_to_str(_row_value(row, 3)) or "",
                    department_code=cell_to_str(_row_value(row, 4)),
                    supervisor_id=supervisor_id,
                    co_supervisor_id=co_supervisor_id,
                    is_active=is_active,
                )
            )
        except ValueError as e:
            raise ValueError(f"{e} in {where}")
    log.info(f"Number of scholars: {register.n_scholars}")
    wb.close()

    # Existing data may predate the capacity rules; report, don't refuse.
    for faculty in register.all_faculty():
        load = register.count_active_load(faculty.faculty_id)
        if load > faculty.max_scholars:
            log.warning(
                f"{faculty} is over capacity: {load}/{faculty.max_scholars}"
            )
    register.refresh_faculty_supervision_data(
        f.faculty_id for f in register.all_faculty()
    )
    return register


# =============================================================================
# Writing
# =============================================================================


def write_register_xlsx(
    register: Register, filename: str, department_code: str = None
) -> None:
    """
    Writes the register, a supervision load report, and some information
    about how it was made, to an Excel XLSX file.

    Args:
        register:
            The register.
        filename:
            Name of file to write.
        department_code:
            Restrict the load report to one department.
    """
    log.info(f"Writing output to: {filename}")

    wb = Workbook()
    wb.remove(wb.worksheets[0])

    # ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
    # Faculty
    # ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
    fs = wb.create_sheet(SheetNames.FACULTY)
    fs.append(FACULTY_HEADINGS)
    for f in register.all_faculty():
        fs.append(
            [
                f.faculty_id,
                f.name,
                f.department_code,
                f.designation_text,
                int(f.is_phd),
                f.n_publications,
                int(f.is_active),
            ]
        )

    # ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
    # Scholars
    # ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
    ss = wb.create_sheet(SheetNames.SCHOLARS)
    ss.append(SCHOLAR_HEADINGS)
    for s in register.all_scholars():
        ss.append(
            [
                s.scholar_id,
                s.registration_id,
                s.email,
                s.name,
                s.department_code,
                s.supervisor_id,
                s.co_supervisor_id,
                int(s.is_active),
            ]
        )

    # ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
    # Supervision load
    # ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
    ls = wb.create_sheet(SheetNames.SUPERVISION_LOAD)
    ls.append(LOAD_HEADINGS)
    for f, summary in get_faculty_with_supervision_load(
        register, department_code
    ):
        ls.append(
            [
                f.faculty_id,
                f.name,
                f.department_code,
                f.designation_text,
                int(summary.is_eligible),
                summary.eligibility_reason,
                summary.supervision_count,
                summary.co_supervision_count,
                summary.current_load,
                summary.max_capacity,
                summary.remaining_capacity,
                summary.message,
                int(summary.can_accept_more),
            ]
        )

    # ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
    # Software, settings, and summary information
    # ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
    zs = wb.create_sheet(SheetNames.INFORMATION)
    zs.append(["Software", "drc_supervision"])
    zs.append(["Version", VERSION])
    zs.append(["Version date", VERSION_DATE])
    zs.append(["Run at", datetime.datetime.now().isoformat()])
    zs.append(["Command", cmdline_quote(sys.argv)])
    zs.append(["Number of faculty", register.n_faculty])
    zs.append(["Number of scholars", register.n_scholars])
    if department_code:
        zs.append(["Department", department_code])

    for ws in (fs, ss, ls):
        bold_first_row(ws)
    autosize_openpyxl_columns_all_sheets(wb)
    wb.save(filename)
    wb.close()


def write_register(
    register: Register, filename: str, department_code: str = None
) -> None:
    """
    Autodetects the file type from the extension and writes data to that
    file.
    """
    _, ext = os.path.splitext(filename)
    if ext == EXT_XLSX:
        write_register_xlsx(register, filename, department_code)
    else:
        raise ValueError(
            f"Don't know how to write file type {ext!r} for {filename!r}"
        )
