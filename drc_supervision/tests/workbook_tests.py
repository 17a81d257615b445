#!/usr/bin/env python

"""
drc_supervision/tests/workbook_tests.py

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

"""

import logging
import os
import tempfile
import unittest

from openpyxl.reader.excel import load_workbook
from openpyxl.workbook.workbook import Workbook

from drc_supervision.constants import (
    Designation,
    EXIT_FAILURE,
    EXIT_SUCCESS,
    SheetHeadings,
    SheetNames,
)
from drc_supervision.main import main
from drc_supervision.workbook import (
    FACULTY_HEADINGS,
    read_register,
    SCHOLAR_HEADINGS,
    write_register,
)


def write_input(filename: str, extra_scholars: int = 0) -> None:
    wb = Workbook()
    wb.remove(wb.worksheets[0])
    fs = wb.create_sheet(SheetNames.FACULTY)
    fs.append(FACULTY_HEADINGS)
    fs.append(["F1", "Dr Smith", "CSE", "Professor", 1, 6, 1])
    fs.append(["F2", "Dr Jones", "CSE", "Assistant Professor", "Y", 4, None])
    fs.append(["F3", "Dr Lucas", "CSE", "Associate Professor", "N", 20, 1])
    ss = wb.create_sheet(SheetNames.SCHOLARS)
    ss.append(SCHOLAR_HEADINGS)
    for i in range(7 + extra_scholars):
        ss.append([f"R{i}", f"REG{i}", f"r{i}@uni.example", f"Scholar {i}",
                   "CSE", "F1", None, 1])
    ss.append(["R99", "REG99", "r99@uni.example", "Departed", "CSE", "F2",
               "F1", 0])
    ss.append(["R100", "REG100", "r100@uni.example", "Pending", "CSE", None,
               None, None])
    wb.save(filename)
    wb.close()


class WorkbookTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tempdir = tempfile.TemporaryDirectory()
        self.infile = os.path.join(self.tempdir.name, "register.xlsx")
        self.outfile = os.path.join(self.tempdir.name, "out.xlsx")
        write_input(self.infile)

    def tearDown(self) -> None:
        self.tempdir.cleanup()

    def test_read(self) -> None:
        r = read_register(self.infile)
        self.assertEqual(r.n_faculty, 3)
        self.assertEqual(r.n_scholars, 9)
        f1 = r.get_faculty("F1")
        self.assertEqual(f1.designation, Designation.PROFESSOR)
        self.assertEqual(f1.max_scholars, 8)
        self.assertEqual(f1.supervision_load.current_load, 7)
        f2 = r.get_faculty("F2")
        self.assertTrue(f2.is_phd)
        self.assertTrue(f2.is_active)
        self.assertEqual(f2.supervision_load.current_load, 0)
        self.assertFalse(r.get_faculty("F3").is_eligible_for_supervision)
        pending = r.get_scholar("R100")
        self.assertTrue(pending.is_active)
        self.assertEqual(pending.faculty_ids(), set())
        self.assertFalse(r.get_scholar("R99").is_active)

    def test_bad_headings(self) -> None:
        wb = load_workbook(self.infile)
        wb[SheetNames.FACULTY]["A1"] = "Staff_number"
        wb.save(self.infile)
        self.assertRaises(AssertionError, read_register, self.infile)

    def test_unknown_supervisor(self) -> None:
        wb = load_workbook(self.infile)
        wb[SheetNames.SCHOLARS]["F2"] = "F404"
        wb.save(self.infile)
        self.assertRaises(AssertionError, read_register, self.infile)

    def test_same_supervisor_twice(self) -> None:
        wb = load_workbook(self.infile)
        wb[SheetNames.SCHOLARS]["G2"] = "F1"
        wb.save(self.infile)
        with self.assertRaises(AssertionError) as cm:
            read_register(self.infile)
        self.assertIn("row 2", str(cm.exception))

    def test_unsupported_extension(self) -> None:
        self.assertRaises(ValueError, read_register, "register.csv")
        r = read_register(self.infile)
        self.assertRaises(ValueError, write_register, r, "out.ods")

    def test_write(self) -> None:
        r = read_register(self.infile)
        write_register(r, self.outfile)
        wb = load_workbook(self.outfile, read_only=True)
        self.assertEqual(wb.sheetnames, [
            SheetNames.FACULTY,
            SheetNames.SCHOLARS,
            SheetNames.SUPERVISION_LOAD,
            SheetNames.INFORMATION,
        ])
        rows = list(wb[SheetNames.SUPERVISION_LOAD].values)
        heading = list(rows[0])
        self.assertEqual(heading[0], SheetHeadings.EMPLOYEE_CODE)
        by_id = {row[0]: row for row in rows[1:]}
        load_col = heading.index(SheetHeadings.CURRENT_LOAD)
        remaining_col = heading.index(SheetHeadings.REMAINING_CAPACITY)
        self.assertEqual(by_id["F1"][load_col], 7)
        self.assertEqual(by_id["F1"][remaining_col], 1)
        wb.close()
        again = read_register(self.outfile)
        self.assertEqual(again.n_scholars, r.n_scholars)
        self.assertEqual(again.count_active_load("F1"), 7)


class CommandLineTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tempdir = tempfile.TemporaryDirectory()
        self.infile = os.path.join(self.tempdir.name, "register.xlsx")
        self.outfile = os.path.join(self.tempdir.name, "out.xlsx")
        write_input(self.infile)

    def tearDown(self) -> None:
        self.tempdir.cleanup()

    def run_main(self, *args: str) -> int:
        with self.assertRaises(SystemExit) as cm:
            main([self.infile] + list(args))
        return cm.exception.code

    def test_report_only(self) -> None:
        self.assertEqual(self.run_main(), EXIT_SUCCESS)

    def test_check_valid_with_warning(self) -> None:
        # Dr Smith's 8th scholar: allowed, with a warning.
        self.assertEqual(self.run_main("--supervisor", "F1"), EXIT_SUCCESS)

    def test_check_invalid(self) -> None:
        self.assertEqual(
            self.run_main("--supervisor", "F1", "--co_supervisor", "F1"),
            EXIT_FAILURE,
        )
        self.assertEqual(self.run_main("--supervisor", "F3"), EXIT_FAILURE)

    def test_apply_and_save(self) -> None:
        code = self.run_main("--scholar", "R100", "--supervisor", "F1",
                             "--co_supervisor", "F2", "--apply",
                             "--output", self.outfile)
        self.assertEqual(code, EXIT_SUCCESS)
        r = read_register(self.outfile)
        self.assertEqual(r.get_scholar("R100").supervisor_id, "F1")
        self.assertEqual(r.count_active_load("F1"), 8)
        self.assertEqual(r.count_active_load("F2"), 1)
        # Now full:
        write_input(self.infile, extra_scholars=1)
        code = self.run_main("--scholar", "R100", "--supervisor", "F1",
                             "--apply")
        self.assertEqual(code, EXIT_FAILURE)

    def test_apply_needs_a_supervisor(self) -> None:
        self.assertEqual(self.run_main("--scholar", "R100", "--apply"),
                         EXIT_FAILURE)

    def test_apply_ignores_operation(self) -> None:
        with self.assertLogs("drc_supervision.main", logging.WARNING) as cm:
            code = self.run_main("--scholar", "R100", "--supervisor", "F2",
                                 "--operation", "remove", "--apply")
        self.assertEqual(code, EXIT_SUCCESS)
        self.assertTrue(any("--operation remove is ignored" in line
                            for line in cm.output))
