#!/usr/bin/env python

"""
drc_supervision/scholar.py

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

Research scholar class.

"""

import copy
from typing import Optional, Set

from cardinal_pythonlib.reprfunc import auto_repr


# =============================================================================
# Scholar
# =============================================================================


class Scholar(object):
    """
    A research scholar, with (optionally) a supervisor and co-supervisor.
    """

    def __init__(
        self,
        scholar_id: str,
        name: str,
        department_code: str,
        registration_id: str = "",
        email: str = "",
        supervisor_id: Optional[str] = None,
        co_supervisor_id: Optional[str] = None,
        is_active: bool = True,
    ) -> None:
        """
        Args:
            scholar_id:
                Unique roll number.
            name:
                Scholar's name.
            department_code:
                Code of the scholar's department.
            registration_id:
                Unique registration ID.
            email:
                Unique e-mail address.
            supervisor_id:
                Employee code of the supervisor, or ``None`` if not yet
                assigned.
            co_supervisor_id:
                Employee code of the co-supervisor, or ``None``.
            is_active:
                Only active scholars count towards supervision load. Setting
                this to ``False`` is a soft delete.
        """
        assert scholar_id, "Missing scholar roll number"
        self.scholar_id = scholar_id
        self.name = name
        self.department_code = department_code
        self.registration_id = registration_id
        self.email = email
        self.supervisor_id = supervisor_id or None
        self.co_supervisor_id = co_supervisor_id or None
        self.is_active = is_active

    def __str__(self) -> str:
        return f"{self.name} ({self.scholar_id})"

    def __repr__(self) -> str:
        return auto_repr(self)

    def __lt__(self, other: "Scholar") -> bool:
        return self.name.lower() < other.name.lower()

    def supervised_by(self, faculty_id: str) -> bool:
        """
        Is this faculty member the supervisor or co-supervisor?
        """
        return faculty_id is not None and faculty_id in (
            self.supervisor_id,
            self.co_supervisor_id,
        )

    def faculty_ids(self) -> Set[str]:
        """
        Employee codes of everyone supervising this scholar.
        """
        return {
            x for x in (self.supervisor_id, self.co_supervisor_id) if x
        }

    def clone(self) -> "Scholar":
        return copy.copy(self)
