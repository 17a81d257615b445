#!/usr/bin/env python

"""
drc_supervision/service.py

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

Creating and editing scholars, with supervision checks.

Each request holds a lock on the scholar it edits, then validates and writes
while holding a lock on every faculty member it touches. Two edits of one
scholar therefore cannot overwrite each other, and two requests cannot both
take the last free slot.
Afterwards, the cached load view of each affected faculty member (old and
new) is refreshed.

"""

import logging
from typing import Any, Iterable, List, Optional, Set

from cardinal_pythonlib.reprfunc import auto_repr

from drc_supervision.assignment import AssignmentDecision, AssignmentValidator
from drc_supervision.constants import Operation
from drc_supervision.directory import Register
from drc_supervision.errors import (
    AssignmentRejected,
    DepartmentMismatch,
    FacultyNotFound,
)
from drc_supervision.scholar import Scholar

log = logging.getLogger(__name__)

_UNCHANGED = object()


# =============================================================================
# AssignmentOutcome
# =============================================================================


class AssignmentOutcome(object):
    """
    A saved scholar, plus the decision that allowed it (whose warnings the
    caller may wish to show).
    """

    def __init__(
        self, scholar: Scholar, decision: AssignmentDecision = None
    ) -> None:
        self.scholar = scholar
        self.decision = decision or AssignmentDecision()

    def __repr__(self) -> str:
        return auto_repr(self)

    @property
    def warnings(self) -> List[str]:
        return self.decision.warnings


# =============================================================================
# ScholarService
# =============================================================================


class ScholarService(object):
    """
    Scholar create/update/delete operations against a :class:`Register`.
    """

    def __init__(self, register: Register) -> None:
        self.register = register
        self.validator = AssignmentValidator(register, register)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _check_departments(self, scholar: Scholar) -> None:
        """
        Supervisors must exist and come from the scholar's department.
        """
        for label, fid in (
            ("Supervisor", scholar.supervisor_id),
            ("Co-supervisor", scholar.co_supervisor_id),
        ):
            if not fid:
                continue
            try:
                faculty = self.register.get_faculty(fid)
            except FacultyNotFound:
                # The validator reports this, with the right prefix.
                continue
            if faculty.department_code != scholar.department_code:
                raise DepartmentMismatch(
                    f"{label} must be from the same department"
                )

    def _validate(
        self, scholar: Scholar, operation: Operation
    ) -> AssignmentDecision:
        decision = self.validator.validate_supervisor_assignment(
            supervisor_id=scholar.supervisor_id,
            co_supervisor_id=scholar.co_supervisor_id,
            operation=operation,
            scholar_id=scholar.scholar_id,
        )
        if not decision.overall_valid:
            log.warning(
                f"Assignment for scholar {scholar} rejected: "
                f"{decision.errors}"
            )
            raise AssignmentRejected(decision)
        for w in decision.warnings:
            log.warning(f"Scholar {scholar}: {w}")
        return decision

    def _refresh(self, *faculty_id_sets: Iterable[Optional[str]]) -> None:
        ids = set()  # type: Set[str]
        for s in faculty_id_sets:
            ids.update(x for x in s if x)
        self.register.refresh_faculty_supervision_data(ids)

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def create_scholar(self, scholar: Scholar) -> AssignmentOutcome:
        """
        Adds a new scholar. Supervisors are optional (they can be assigned
        later), but any that are given must pass validation.

        Raises:
            :exc:`AssignmentRejected`, :exc:`DepartmentMismatch`
        """
        faculty_ids = scholar.faculty_ids()
        with self.register.scholar_lock(scholar.scholar_id), \
                self.register.faculty_locks(faculty_ids):
            decision = None
            if faculty_ids:
                self._check_departments(scholar)
                if scholar.is_active:
                    decision = self._validate(scholar, Operation.ASSIGN)
            self.register.add_scholar(scholar)
        log.info(f"Created scholar {scholar}")
        self._refresh(faculty_ids)
        return AssignmentOutcome(scholar, decision)

    def update_scholar(
        self,
        scholar_id: str,
        supervisor_id: Any = _UNCHANGED,
        co_supervisor_id: Any = _UNCHANGED,
        **fields: Any,
    ) -> AssignmentOutcome:
        """
        Edits a scholar. Supervisors not mentioned are left as they are; pass
        ``None`` to clear one. Other keyword arguments set attributes of the
        :class:`Scholar` (e.g. ``name``, ``email``, ``is_active``).

        Keeping an existing supervisor does not count against their
        capacity a second time.

        Raises:
            :exc:`drc_supervision.errors.ScholarNotFound`,
            :exc:`AssignmentRejected`, :exc:`DepartmentMismatch`,
            :exc:`AttributeError` for unknown fields
        """
        with self.register.scholar_lock(scholar_id):
            existing = self.register.get_scholar(scholar_id)
            for key in fields:
                if key == "scholar_id" or not hasattr(existing, key):
                    raise AttributeError(f"Cannot set scholar field {key!r}")
            old_ids = existing.faculty_ids()
            proposed = existing.clone()
            if supervisor_id is not _UNCHANGED:
                proposed.supervisor_id = supervisor_id or None
            if co_supervisor_id is not _UNCHANGED:
                proposed.co_supervisor_id = co_supervisor_id or None
            for key, value in fields.items():
                setattr(proposed, key, value)
            new_ids = proposed.faculty_ids()

            with self.register.faculty_locks(old_ids | new_ids):
                decision = None
                if new_ids:
                    self._check_departments(proposed)
                    if proposed.is_active:
                        # Reactivating brings the scholar back into the
                        # count.
                        operation = (
                            Operation.CHANGE
                            if existing.is_active
                            else Operation.ASSIGN
                        )
                        decision = self._validate(proposed, operation)
                self.register.put_scholar(proposed)
        log.info(f"Updated scholar {proposed}")
        self._refresh(old_ids, new_ids)
        return AssignmentOutcome(proposed, decision)

    def deactivate_scholar(self, scholar_id: str) -> Scholar:
        """
        Soft delete: the scholar stops counting towards anyone's load.
        """
        return self.update_scholar(scholar_id, is_active=False).scholar

    def reactivate_scholar(self, scholar_id: str) -> AssignmentOutcome:
        """
        Undoes a soft delete, if the supervisors still have room.
        """
        return self.update_scholar(scholar_id, is_active=True)

    def delete_scholar(self, scholar_id: str) -> Scholar:
        """
        Permanent delete.
        """
        with self.register.scholar_lock(scholar_id):
            existing = self.register.get_scholar(scholar_id)
            with self.register.faculty_locks(existing.faculty_ids()):
                deleted = self.register.remove_scholar(scholar_id)
        log.info(f"Permanently deleted scholar {deleted}")
        self._refresh(deleted.faculty_ids())
        return deleted
