#!/usr/bin/env python

"""
drc_supervision/capacity.py

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

Can one faculty member take on (or keep) a scholar?

Supervision and co-supervision share one pool, capped by designation. The
"effective load" is what the load would be after the operation:

- assign: one more than now;
- change: the same as now if this faculty member already supervises (or
  co-supervises) the scholar being edited, otherwise one more;
- remove: one fewer, but never below zero.

If the effective load exceeds the cap the request is rejected; if it leaves
two or fewer free slots, it is allowed with a warning.

"""

import logging
from typing import Any, Dict, Optional, Tuple, Union

from cardinal_pythonlib.reprfunc import auto_repr

from drc_supervision.constants import (
    CapacityStatus,
    DEFAULT_OPERATION,
    Messages,
    NEAR_CAPACITY_MARGIN,
    Operation,
)
from drc_supervision.directory import FacultyDirectory, ScholarDirectory
from drc_supervision.errors import FacultyNotFound, ScholarNotFound
from drc_supervision.faculty import FacultyMember

log = logging.getLogger(__name__)

# (supervisor_id, co_supervisor_id) currently recorded for a scholar:
Assignees = Tuple[Optional[str], Optional[str]]


# =============================================================================
# CapacityDecision
# =============================================================================


class CapacityDecision(object):
    """
    Outcome of a capacity check for one faculty member.
    """

    def __init__(
        self,
        status: CapacityStatus,
        message: str,
        faculty_id: str = None,
        faculty_name: str = None,
        designation: str = None,
        current_load: int = None,
        effective_load: int = None,
        max_capacity: int = None,
    ) -> None:
        self.status = status
        self.message = message
        self.faculty_id = faculty_id
        self.faculty_name = faculty_name
        self.designation = designation
        self.current_load = current_load
        self.effective_load = effective_load
        self.max_capacity = max_capacity

    def __str__(self) -> str:
        return f"{self.status.value}: {self.message}"

    def __repr__(self) -> str:
        return auto_repr(self)

    @classmethod
    def error(
        cls,
        message: str,
        faculty: FacultyMember = None,
        faculty_id: str = None,
    ) -> "CapacityDecision":
        """
        A blocking failure that happened before capacity was considered.
        Pass ``faculty_id`` when the faculty member could not be loaded.
        """
        if faculty is None:
            return cls(CapacityStatus.ERROR, message, faculty_id=faculty_id)
        return cls(
            CapacityStatus.ERROR,
            message,
            faculty_id=faculty.faculty_id,
            faculty_name=faculty.name,
            designation=faculty.designation_text,
            max_capacity=faculty.max_scholars,
        )

    @property
    def is_valid(self) -> bool:
        """
        May the assignment go ahead (possibly with a warning)?
        """
        return self.status in (CapacityStatus.OK, CapacityStatus.WARNING)

    @property
    def is_warning(self) -> bool:
        return self.status == CapacityStatus.WARNING

    @property
    def remaining_capacity(self) -> Optional[int]:
        """
        Free slots after the operation (never negative).
        """
        if self.max_capacity is None or self.effective_load is None:
            return None
        return max(0, self.max_capacity - self.effective_load)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "isValid": self.is_valid,
            "status": self.status.value,
            "message": self.message,
            "facultyId": self.faculty_id,
            "facultyName": self.faculty_name,
            "designation": self.designation,
            "currentLoad": self.current_load,
            "effectiveLoad": self.effective_load,
            "maxCapacity": self.max_capacity,
            "remainingCapacity": self.remaining_capacity,
        }


# =============================================================================
# CapacityEvaluator
# =============================================================================


class CapacityEvaluator(object):
    """
    Checks a single faculty member's supervision capacity.
    """

    def __init__(
        self,
        faculty_directory: FacultyDirectory,
        scholar_directory: ScholarDirectory,
    ) -> None:
        self.faculty_directory = faculty_directory
        self.scholar_directory = scholar_directory

    def current_assignees(self, scholar_id: str) -> Optional[Assignees]:
        """
        The scholar's recorded (supervisor, co-supervisor), or ``None`` if
        the scholar can't be found.
        """
        try:
            scholar = self.scholar_directory.get_scholar(scholar_id)
        except ScholarNotFound:
            log.debug(f"Scholar {scholar_id!r} not found")
            return None
        return scholar.supervisor_id, scholar.co_supervisor_id

    def effective_load(
        self,
        faculty_id: str,
        current_load: int,
        operation: Operation,
        scholar_id: str = None,
        current_assignees: Assignees = None,
    ) -> int:
        """
        What the load would be after the operation.
        """
        if operation == Operation.REMOVE:
            return max(0, current_load - 1)
        if operation == Operation.CHANGE and scholar_id:
            if current_assignees is None:
                current_assignees = self.current_assignees(scholar_id)
            if current_assignees is not None and faculty_id in (
                current_assignees
            ):
                # Already counted; keeping them doesn't add load.
                return current_load
        # A new assignment, or an unresolvable change: count it.
        return current_load + 1

    def evaluate(
        self,
        faculty_id: str,
        operation: Union[Operation, str] = DEFAULT_OPERATION,
        scholar_id: str = None,
        current_assignees: Assignees = None,
    ) -> CapacityDecision:
        """
        Checks whether this faculty member can take on the operation.

        Args:
            faculty_id:
                Employee code of the faculty member.
            operation:
                :class:`Operation` (or its name).
            scholar_id:
                Roll number of the scholar being edited; used for
                ``Operation.CHANGE``.
            current_assignees:
                The scholar's recorded (supervisor, co-supervisor), if the
                caller has already looked them up.

        Returns:
            a :class:`CapacityDecision`; never raises.
        """
        try:
            if not isinstance(operation, Operation):
                operation = Operation[operation]
            return self._evaluate(
                faculty_id, operation, scholar_id, current_assignees
            )
        except Exception:
            log.exception(
                f"Error validating supervision load for {faculty_id!r}"
            )
            return CapacityDecision.error(
                Messages.ERROR_VALIDATING_LOAD, faculty_id=faculty_id
            )

    def _evaluate(
        self,
        faculty_id: str,
        operation: Operation,
        scholar_id: Optional[str],
        current_assignees: Optional[Assignees],
    ) -> CapacityDecision:
        try:
            faculty = self.faculty_directory.get_faculty(faculty_id)
        except FacultyNotFound:
            log.info(f"Capacity check: faculty {faculty_id!r} not found")
            return CapacityDecision.error(
                Messages.FACULTY_NOT_FOUND, faculty_id=faculty_id
            )

        eligibility = faculty.eligibility()
        if not eligibility.is_eligible:
            log.info(
                f"Capacity check: {faculty} ineligible: {eligibility.reason}"
            )
            return CapacityDecision.error(eligibility.reason, faculty)

        current_load = self.faculty_directory.count_active_load(faculty_id)
        max_capacity = faculty.max_scholars
        effective_load = self.effective_load(
            faculty_id=faculty_id,
            current_load=current_load,
            operation=operation,
            scholar_id=scholar_id,
            current_assignees=current_assignees,
        )
        remaining = max_capacity - effective_load
        load_str = f"{effective_load}/{max_capacity}"

        if effective_load > max_capacity:
            status = CapacityStatus.REJECTED
            message = (
                f"Assignment would exceed maximum supervision capacity "
                f"({load_str})"
            )
        elif remaining <= NEAR_CAPACITY_MARGIN:
            status = CapacityStatus.WARNING
            message = (
                f"Assignment would place faculty near supervision limit "
                f"({load_str}, {remaining} remaining)"
            )
        else:
            status = CapacityStatus.OK
            message = (
                f"Available for supervision ({load_str}, "
                f"{remaining} remaining)"
            )
        log.debug(
            f"Capacity check: {faculty}, {operation.value}: "
            f"current={current_load}, effective={effective_load}, "
            f"max={max_capacity} -> {status.value}"
        )
        return CapacityDecision(
            status=status,
            message=message,
            faculty_id=faculty.faculty_id,
            faculty_name=faculty.name,
            designation=faculty.designation_text,
            current_load=current_load,
            effective_load=effective_load,
            max_capacity=max_capacity,
        )
