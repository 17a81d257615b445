#!/usr/bin/env python

"""
drc_supervision/load.py

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

Supervision load summaries: a read-only "how full is this person?" view for
display. Capacity decisions do not use this; they count scholars afresh.

"""

import logging
from typing import Any, Dict, List, Optional, Tuple, TYPE_CHECKING

from cardinal_pythonlib.reprfunc import auto_repr

from drc_supervision.constants import LoadStatus, NEAR_CAPACITY_MARGIN, Role
from drc_supervision.errors import FacultyNotFound
from drc_supervision.faculty import FacultyMember

if TYPE_CHECKING:
    from drc_supervision.directory import FacultyDirectory

log = logging.getLogger(__name__)


# =============================================================================
# SupervisionLoadSummary
# =============================================================================


class SupervisionLoadSummary(object):
    """
    Current supervision load of one faculty member.
    """

    def __init__(
        self,
        faculty: FacultyMember,
        supervision_count: int,
        co_supervision_count: int,
    ) -> None:
        """
        Args:
            faculty:
                The faculty member.
            supervision_count:
                Number of active scholars supervised.
            co_supervision_count:
                Number of active scholars co-supervised.
        """
        self.faculty_id = faculty.faculty_id
        self.supervision_count = supervision_count
        self.co_supervision_count = co_supervision_count
        self.current_load = supervision_count + co_supervision_count
        self.max_capacity = faculty.max_scholars
        self.remaining_capacity = max(
            0, self.max_capacity - self.current_load
        )
        eligibility = faculty.eligibility()
        self.is_eligible = eligibility.is_eligible
        self.eligibility_reason = eligibility.reason

        load_str = f"{self.current_load}/{self.max_capacity}"
        if self.current_load >= self.max_capacity:
            self.status = LoadStatus.FULL
            self.message = (
                f"Maximum supervision capacity reached ({load_str})"
            )
            self.severity = "error"
        elif self.remaining_capacity <= NEAR_CAPACITY_MARGIN:
            self.status = LoadStatus.NEAR_LIMIT
            self.message = (
                f"Near supervision limit ({load_str}, "
                f"{self.remaining_capacity} remaining)"
            )
            self.severity = "warning"
        else:
            self.status = LoadStatus.AVAILABLE
            self.message = (
                f"Available for supervision ({load_str}, "
                f"{self.remaining_capacity} remaining)"
            )
            self.severity = "success"

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return auto_repr(self)

    @property
    def capacity_allows_more(self) -> bool:
        return self.status != LoadStatus.FULL

    @property
    def can_accept_more(self) -> bool:
        """
        Room left, and allowed to supervise at all.
        """
        return self.capacity_allows_more and self.is_eligible

    def as_dict(self) -> Dict[str, Any]:
        return {
            "currentLoad": self.current_load,
            "supervisionCount": self.supervision_count,
            "coSupervisionCount": self.co_supervision_count,
            "maxCapacity": self.max_capacity,
            "remainingCapacity": self.remaining_capacity,
            "capacityStatus": {
                "status": self.status.value,
                "message": self.message,
                "canAcceptMore": self.capacity_allows_more,
                "severity": self.severity,
            },
            "isEligible": self.is_eligible,
            "eligibilityReason": self.eligibility_reason,
        }


# =============================================================================
# Queries
# =============================================================================


def summarize_load(
    directory: "FacultyDirectory", faculty: FacultyMember
) -> SupervisionLoadSummary:
    """
    Builds a summary by counting scholars now.
    """
    fid = faculty.faculty_id
    return SupervisionLoadSummary(
        faculty=faculty,
        supervision_count=directory.count_active_load(fid, Role.SUPERVISOR),
        co_supervision_count=directory.count_active_load(
            fid, Role.CO_SUPERVISOR
        ),
    )


def get_supervision_load_summary(
    directory: "FacultyDirectory", faculty_id: str
) -> Optional[SupervisionLoadSummary]:
    """
    Load summary for one faculty member, or ``None`` if they don't exist.
    """
    try:
        faculty = directory.get_faculty(faculty_id)
    except FacultyNotFound:
        return None
    return summarize_load(directory, faculty)


def get_faculty_with_supervision_load(
    directory: "FacultyDirectory", department_code: str = None
) -> List[Tuple[FacultyMember, SupervisionLoadSummary]]:
    """
    All active faculty (optionally, just those in one department), sorted by
    name, each with their current load.
    """
    results = []  # type: List[Tuple[FacultyMember, SupervisionLoadSummary]]
    for faculty in sorted(directory.all_faculty()):
        if not faculty.is_active:
            continue
        if department_code and faculty.department_code != department_code:
            continue
        results.append((faculty, summarize_load(directory, faculty)))
    log.debug(
        f"Supervision load computed for {len(results)} faculty members"
        + (f" in {department_code}" if department_code else "")
    )
    return results
