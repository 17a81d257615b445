#!/usr/bin/env python

"""
drc_supervision/constants.py

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

Constants.

"""

from enum import Enum

from cardinal_pythonlib.enumlike import CaseInsensitiveEnumMeta


# =============================================================================
# Constants
# =============================================================================

NEAR_CAPACITY_MARGIN = 2  # this many free slots or fewer is "near capacity"

EXT_XLSX = ".xlsx"
EXIT_FAILURE = 1
EXIT_SUCCESS = 0

INPUT_TYPES_SUPPORTED = [EXT_XLSX]
OUTPUT_TYPES_SUPPORTED = INPUT_TYPES_SUPPORTED

TRUE_VALUES = [1, True, "Y", "y", "T", "t"]
FALSE_VALUES = [0, False, "N", "n", "F", "f"]
MISSING_VALUES = ["", None]


class SheetNames:
    """
    Sheet names within the register spreadsheet file.
    """

    FACULTY = "Faculty"  # input, output
    INFORMATION = "Information"  # output
    SCHOLARS = "Scholars"  # input, output
    SUPERVISION_LOAD = "Supervision_load"  # output


class SheetHeadings:
    """
    Column headings within the register spreadsheets.
    """

    # Faculty:
    DEPARTMENT = "Department"
    DESIGNATION = "Designation"
    EMPLOYEE_CODE = "Employee_code"
    IS_ACTIVE = "Is_active"
    IS_PHD = "Is_PhD"
    NAME = "Name"
    NUMBER_OF_PUBLICATIONS = "Number_of_publications"

    # Scholars:
    CO_SUPERVISOR = "Co_supervisor"
    EMAIL = "Email"
    REGISTRATION_ID = "Registration_ID"
    ROLL_NUMBER = "Roll_number"
    SUPERVISOR = "Supervisor"

    # Additional for output:
    CAN_ACCEPT_MORE = "Can_accept_more"
    CO_SUPERVISION_COUNT = "N_co_supervising"
    CURRENT_LOAD = "Current_load"
    ELIGIBILITY_REASON = "Eligibility_reason"
    ELIGIBLE = "Eligible"
    MAX_SCHOLARS = "Max_scholars"
    REMAINING_CAPACITY = "Remaining_capacity"
    STATUS = "Status"
    SUPERVISION_COUNT = "N_supervising"


class Messages:
    """
    Human-readable text that callers may match on.
    """

    ELIGIBLE = "Eligible for supervision"
    ERROR_VALIDATING_ASSIGNMENT = "Error validating supervisor assignment"
    ERROR_VALIDATING_LOAD = "Error validating supervision load"
    FACULTY_NOT_FOUND = "Faculty member not found"
    INVALID_DESIGNATION = "Invalid designation"
    PHD_REQUIRED = "PhD required for supervision"
    SAME_PERSON = "Supervisor and co-supervisor cannot be the same person"

    CO_SUPERVISOR_PREFIX = "Co-Supervisor: "
    SUPERVISOR_PREFIX = "Supervisor: "


# =============================================================================
# Enum classes
# =============================================================================


class Designation(Enum, metaclass=CaseInsensitiveEnumMeta):
    """
    Academic rank of a faculty member.
    """

    PROFESSOR = "Professor"
    ASSOCIATE_PROFESSOR = "Associate Professor"
    ASSISTANT_PROFESSOR = "Assistant Professor"


class Operation(Enum, metaclass=CaseInsensitiveEnumMeta):
    """
    What is happening to a faculty member's supervision load?
    """

    ASSIGN = "assign"
    CHANGE = "change"
    REMOVE = "remove"


class Role(Enum, metaclass=CaseInsensitiveEnumMeta):
    """
    The two supervision roles. Both count towards the same capacity pool.
    """

    SUPERVISOR = "supervisor"
    CO_SUPERVISOR = "co-supervisor"


class CapacityStatus(Enum, metaclass=CaseInsensitiveEnumMeta):
    """
    Outcome of a capacity check for one faculty member.
    """

    OK = "ok"
    WARNING = "warning"
    REJECTED = "rejected"
    ERROR = "error"


class LoadStatus(Enum, metaclass=CaseInsensitiveEnumMeta):
    """
    How full is a faculty member right now?
    """

    AVAILABLE = "available"
    NEAR_LIMIT = "near_limit"
    FULL = "full"


# Maximum combined supervision load, by designation:
MAX_SCHOLARS = {
    Designation.PROFESSOR: 8,
    Designation.ASSOCIATE_PROFESSOR: 6,
    Designation.ASSISTANT_PROFESSOR: 4,
}

# Supervision requires strictly MORE publications than this:
MIN_PUBLICATIONS_EXCLUSIVE = {
    Designation.PROFESSOR: 5,
    Designation.ASSOCIATE_PROFESSOR: 5,
    Designation.ASSISTANT_PROFESSOR: 3,
}

DEFAULT_OPERATION = Operation.ASSIGN
