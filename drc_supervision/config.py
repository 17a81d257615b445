#!/usr/bin/env python

"""
drc_supervision/config.py

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

Master config object.

"""

from typing import Any, Dict

from drc_supervision.constants import DEFAULT_OPERATION, Operation


# =============================================================================
# Master config
# =============================================================================


class Config(object):
    """
    Master config object.
    """

    def __init__(
        self,
        filename: str,
        apply: bool = False,
        cmd_args: Dict[str, Any] = None,
        co_supervisor_id: str = None,
        department_code: str = None,
        operation: Operation = DEFAULT_OPERATION,
        output: str = None,
        scholar_id: str = None,
        supervisor_id: str = None,
    ) -> None:
        """
        Args:
            filename:
                Register spreadsheet to read.

            apply:
                Record the proposed assignment against the scholar, if valid?
            cmd_args:
                Copy of command-line arguments
            co_supervisor_id:
                Proposed co-supervisor (employee code).
            department_code:
                Restrict the load report to this department.
            operation:
                How to count the proposed assignment.
            output:
                Spreadsheet to write the register and load report to.
            scholar_id:
                Roll number of the scholar being edited.
            supervisor_id:
                Proposed supervisor (employee code).
        """
        self.filename = filename

        self.apply = apply
        self.co_supervisor_id = co_supervisor_id
        self.department_code = department_code
        self.operation = operation
        self.output = output
        self.scholar_id = scholar_id
        self.supervisor_id = supervisor_id

        self.cmd_args = cmd_args

    def __str__(self) -> str:
        return str(self.cmd_args)

    @property
    def has_proposal(self) -> bool:
        """
        Was an assignment proposed on the command line?
        """
        return bool(self.supervisor_id or self.co_supervisor_id)
