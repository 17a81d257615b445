#!/usr/bin/env python

"""
drc_supervision/errors.py

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

Exceptions.

The validators never raise these at their callers; lookups raise the
"not found" errors, and the validators turn them into decisions. The
scholar service raises :class:`SupervisionError` subclasses when it refuses
to save something.

"""

from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from drc_supervision.assignment import AssignmentDecision


# =============================================================================
# Lookup failures
# =============================================================================


class FacultyNotFound(LookupError):
    def __init__(self, faculty_id: str) -> None:
        super().__init__(f"Faculty member not found: {faculty_id!r}")
        self.faculty_id = faculty_id


class ScholarNotFound(LookupError):
    def __init__(self, scholar_id: str) -> None:
        super().__init__(f"Scholar not found: {scholar_id!r}")
        self.scholar_id = scholar_id


# =============================================================================
# Refusals to save
# =============================================================================


class SupervisionError(Exception):
    """
    Base class for "the request is bad" errors (an HTTP layer would map these
    to 400).
    """

    @property
    def errors(self) -> List[str]:
        return [str(self)]

    @property
    def warnings(self) -> List[str]:
        return []


class AssignmentRejected(SupervisionError):
    """
    The supervisor/co-supervisor assignment failed validation.
    """

    def __init__(self, decision: "AssignmentDecision") -> None:
        super().__init__("; ".join(decision.errors))
        self.decision = decision

    @property
    def errors(self) -> List[str]:
        return list(self.decision.errors)

    @property
    def warnings(self) -> List[str]:
        return list(self.decision.warnings)


class DepartmentMismatch(SupervisionError):
    """
    A supervisor must come from the scholar's own department.
    """

    pass
