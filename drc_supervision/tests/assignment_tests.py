#!/usr/bin/env python

"""
drc_supervision/tests/assignment_tests.py

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

from typing import List
import unittest

from drc_supervision.assignment import (
    AssignmentValidator,
    validate_supervisor_assignment,
)
from drc_supervision.constants import (
    CapacityStatus,
    Designation,
    Messages,
    Operation,
)
from drc_supervision.directory import Register
from drc_supervision.errors import ScholarNotFound
from drc_supervision.faculty import FacultyMember
from drc_supervision.scholar import Scholar


def professor(fid: str, n_publications: int = 10) -> FacultyMember:
    return FacultyMember(fid, f"Dr {fid}", "CSE", Designation.PROFESSOR,
                         True, n_publications)


def fill(register: Register, fid: str, n: int) -> None:
    for i in range(n):
        register.add_scholar(Scholar(f"{fid}-{i}", f"Scholar {i}", "CSE",
                                     supervisor_id=fid))


class CountingRegister(Register):
    """
    Counts scholar lookups.
    """
    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.scholar_lookups = []  # type: List[str]

    def get_scholar(self, scholar_id: str) -> Scholar:
        self.scholar_lookups.append(scholar_id)
        return super().get_scholar(scholar_id)


class FailingScholarRegister(Register):
    def get_scholar(self, scholar_id: str) -> Scholar:
        raise OSError("disk on fire")


class AssignmentTests(unittest.TestCase):
    def setUp(self) -> None:
        self.register = Register(faculty=[
            professor("A"),
            professor("B"),
            professor("POOR", n_publications=5),
        ])

    def test_both_fine(self) -> None:
        d = validate_supervisor_assignment(self.register, "A", "B")
        self.assertTrue(d.overall_valid)
        self.assertEqual(d.errors, [])
        self.assertEqual(d.warnings, [])
        self.assertEqual(d.supervisor.status, CapacityStatus.OK)
        self.assertEqual(d.co_supervisor.status, CapacityStatus.OK)

    def test_nothing_requested(self) -> None:
        d = validate_supervisor_assignment(self.register)
        self.assertTrue(d.overall_valid)
        self.assertIsNone(d.supervisor)
        self.assertIsNone(d.co_supervisor)

    def test_same_person(self) -> None:
        d = validate_supervisor_assignment(self.register, "A", "A")
        self.assertFalse(d.overall_valid)
        self.assertTrue(d.supervisor.is_valid)
        self.assertTrue(d.co_supervisor.is_valid)
        self.assertEqual(d.errors, [Messages.SAME_PERSON])

    def test_errors_and_warnings_are_prefixed(self) -> None:
        fill(self.register, "B", 6)
        d = validate_supervisor_assignment(self.register, "POOR", "B")
        self.assertFalse(d.overall_valid)
        self.assertEqual(d.errors, [
            "Supervisor: Requires more than 5 publications (current: 5)"
        ])
        self.assertEqual(d.warnings, [
            "Co-Supervisor: Assignment would place faculty near supervision "
            "limit (7/8, 1 remaining)"
        ])

    def test_unknown_co_supervisor(self) -> None:
        d = validate_supervisor_assignment(self.register, "A", "NOBODY")
        self.assertFalse(d.overall_valid)
        self.assertEqual(d.errors,
                         ["Co-Supervisor: " + Messages.FACULTY_NOT_FOUND])

    def test_warnings_do_not_block(self) -> None:
        fill(self.register, "A", 7)
        d = validate_supervisor_assignment(self.register, "A")
        self.assertTrue(d.overall_valid)
        self.assertEqual(len(d.warnings), 1)
        self.assertTrue(d.warnings[0].startswith(Messages.SUPERVISOR_PREFIX))

    def test_unchanged_supervisor_at_capacity_not_rejected(self) -> None:
        fill(self.register, "A", 8)
        # A-0 already has A; editing other details keeps A.
        d = validate_supervisor_assignment(
            self.register, "A", None, Operation.CHANGE, "A-0"
        )
        self.assertTrue(d.overall_valid)
        self.assertEqual(d.supervisor.effective_load, 8)
        # Whereas as a fresh assignment it would overflow.
        d = validate_supervisor_assignment(self.register, "A")
        self.assertFalse(d.overall_valid)

    def test_swap_roles_does_not_double_count(self) -> None:
        fill(self.register, "A", 7)
        fill(self.register, "B", 7)
        self.register.add_scholar(Scholar("X", "Swapper", "CSE",
                                          supervisor_id="A",
                                          co_supervisor_id="B"))
        d = validate_supervisor_assignment(
            self.register, "B", "A", "change", "X"
        )
        self.assertTrue(d.overall_valid)
        self.assertEqual(d.supervisor.effective_load, 8)
        self.assertEqual(d.co_supervisor.effective_load, 8)

    def test_scholar_loaded_once(self) -> None:
        r = CountingRegister(faculty=[professor("A"), professor("B")])
        r.add_scholar(Scholar("X", "X", "CSE", supervisor_id="A"))
        AssignmentValidator(r, r).validate_supervisor_assignment(
            "A", "B", Operation.CHANGE, "X"
        )
        self.assertEqual(r.scholar_lookups, ["X"])

    def test_never_raises(self) -> None:
        r = FailingScholarRegister(faculty=[professor("A")])
        d = validate_supervisor_assignment(r, "A", None, "change", "X")
        self.assertFalse(d.overall_valid)
        self.assertEqual(d.errors, [Messages.ERROR_VALIDATING_ASSIGNMENT])
        self.assertIsNone(d.supervisor)

    def test_missing_scholar_is_not_an_error(self) -> None:
        self.assertRaises(ScholarNotFound, self.register.get_scholar, "X")
        d = validate_supervisor_assignment(
            self.register, "A", None, Operation.CHANGE, "X"
        )
        self.assertTrue(d.overall_valid)
        self.assertEqual(d.supervisor.effective_load, 1)

    def test_as_dict(self) -> None:
        d = validate_supervisor_assignment(self.register, "A").as_dict()
        self.assertEqual(set(d.keys()), {
            "supervisor", "coSupervisor", "overallValid", "warnings",
            "errors",
        })
        self.assertIsNone(d["coSupervisor"])
        self.assertEqual(d["supervisor"]["status"], "ok")
