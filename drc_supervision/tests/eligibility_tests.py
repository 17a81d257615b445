#!/usr/bin/env python

"""
drc_supervision/tests/eligibility_tests.py

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

import unittest

from drc_supervision.constants import Designation, Messages
from drc_supervision.eligibility import (
    check_eligibility,
    max_scholars_for,
    resolve_designation,
)
from drc_supervision.faculty import FacultyMember


class EligibilityTests(unittest.TestCase):
    P = Designation.PROFESSOR
    ASSOC = Designation.ASSOCIATE_PROFESSOR
    ASST = Designation.ASSISTANT_PROFESSOR

    def test_professor_threshold_is_strict(self) -> None:
        for d in (self.P, self.ASSOC):
            r = check_eligibility(d, True, 5)
            self.assertFalse(r.is_eligible)
            self.assertEqual(
                r.reason, "Requires more than 5 publications (current: 5)"
            )
            self.assertTrue(check_eligibility(d, True, 6).is_eligible)

    def test_assistant_threshold_is_strict(self) -> None:
        r = check_eligibility(self.ASST, True, 3)
        self.assertFalse(r.is_eligible)
        self.assertEqual(
            r.reason, "Requires more than 3 publications (current: 3)"
        )
        r = check_eligibility(self.ASST, True, 4)
        self.assertTrue(r.is_eligible)
        self.assertEqual(r.reason, Messages.ELIGIBLE)

    def test_phd_dominates(self) -> None:
        r = check_eligibility(self.P, False, 100)
        self.assertFalse(r.is_eligible)
        self.assertIn("PhD", r.reason)
        # ... even for nonsense designations
        r = check_eligibility("Lecturer", False, 100)
        self.assertEqual(r.reason, Messages.PHD_REQUIRED)

    def test_invalid_designation(self) -> None:
        r = check_eligibility("Lecturer", True, 100)
        self.assertFalse(r.is_eligible)
        self.assertEqual(r.reason, Messages.INVALID_DESIGNATION)
        self.assertEqual(max_scholars_for("Lecturer"), 0)

    def test_designation_text(self) -> None:
        self.assertEqual(resolve_designation("Professor"), self.P)
        self.assertEqual(resolve_designation(" Associate Professor "),
                         self.ASSOC)
        self.assertEqual(resolve_designation("assistant_professor"),
                         self.ASST)
        self.assertIsNone(resolve_designation(None))
        self.assertTrue(check_eligibility("Professor", True, 6))

    def test_max_scholars_follows_designation(self) -> None:
        f = FacultyMember("F1", "Dr A", "CSE", "Professor", True, 6)
        self.assertEqual(f.max_scholars, 8)
        f.designation = self.ASSOC
        self.assertEqual(f.max_scholars, 6)
        f.designation = self.ASST
        self.assertEqual(f.max_scholars, 4)
        with self.assertRaises(AttributeError):
            # noinspection PyPropertyAccess
            f.max_scholars = 20

    def test_negative_publications_refused(self) -> None:
        self.assertRaises(
            AssertionError, FacultyMember, "F1", "Dr A", "CSE", self.P, True,
            -1
        )
