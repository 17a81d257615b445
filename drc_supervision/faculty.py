#!/usr/bin/env python

"""
drc_supervision/faculty.py

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

Faculty member class.

"""

from typing import Optional, TYPE_CHECKING, Union

from cardinal_pythonlib.reprfunc import auto_repr

from drc_supervision.constants import Designation
from drc_supervision.eligibility import (
    check_eligibility,
    EligibilityResult,
    max_scholars_for,
    resolve_designation,
)

if TYPE_CHECKING:
    from drc_supervision.load import SupervisionLoadSummary


# =============================================================================
# FacultyMember
# =============================================================================


class FacultyMember(object):
    """
    A member of faculty who may supervise or co-supervise research scholars.
    """

    def __init__(
        self,
        faculty_id: str,
        name: str,
        department_code: str,
        designation: Union[Designation, str],
        is_phd: bool,
        n_publications: int = 0,
        is_active: bool = True,
    ) -> None:
        """
        Args:
            faculty_id:
                Unique employee code.
            name:
                Display name.
            department_code:
                Code of the owning department.
            designation:
                Academic rank; fixes both the publication threshold and the
                maximum number of scholars. Unrecognized text is kept as-is
                (and makes the faculty member ineligible).
            is_phd:
                Holds a PhD?
            n_publications:
                Number of publications.
            is_active:
                Currently in post?
        """
        assert faculty_id, "Missing faculty employee code"
        assert name, f"Faculty {faculty_id!r}: missing name"
        assert n_publications >= 0, (
            f"Faculty {faculty_id!r}: invalid number of publications; must "
            f"be >=0 but is {n_publications!r}"
        )
        self.faculty_id = faculty_id
        self.name = name
        self.department_code = department_code
        self.designation = resolve_designation(designation) or designation
        self.is_phd = is_phd
        self.n_publications = n_publications
        self.is_active = is_active
        self.supervision_load = None  # type: Optional[SupervisionLoadSummary]
        # ... cached view, refreshed after assignments change; never used
        #     for capacity decisions.

    def __str__(self) -> str:
        return f"{self.name} ({self.faculty_id})"

    def __repr__(self) -> str:
        return auto_repr(self)

    def __lt__(self, other: "FacultyMember") -> bool:
        """
        Default sort is by case-insensitive name.
        """
        return self.name.lower() < other.name.lower()

    @property
    def designation_text(self) -> str:
        if isinstance(self.designation, Designation):
            return self.designation.value
        return str(self.designation)

    @property
    def max_scholars(self) -> int:
        """
        Maximum combined supervision load. Always derived from the
        designation.
        """
        return max_scholars_for(self.designation)

    def eligibility(self) -> EligibilityResult:
        """
        Is this person allowed to supervise at all?
        """
        return check_eligibility(
            self.designation, self.is_phd, self.n_publications
        )

    @property
    def is_eligible_for_supervision(self) -> bool:
        return self.eligibility().is_eligible

    def description(self) -> str:
        """
        Verbose description.
        """
        return (
            f"{self}: {self.designation_text}, dept={self.department_code}, "
            f"PhD={self.is_phd}, publications={self.n_publications}, "
            f"max_scholars={self.max_scholars}"
        )
