#!/usr/bin/env python

"""
drc_supervision/assignment.py

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

Validation of a (supervisor, co-supervisor) pair for a scholar.

The decision is advisory: callers may save despite warnings, but must not
save when ``overall_valid`` is false.

"""

import logging
from typing import Any, Dict, List, Optional, Union

from cardinal_pythonlib.reprfunc import auto_repr

from drc_supervision.capacity import (
    Assignees,
    CapacityDecision,
    CapacityEvaluator,
)
from drc_supervision.constants import DEFAULT_OPERATION, Messages, Operation
from drc_supervision.directory import (
    FacultyDirectory,
    Register,
    ScholarDirectory,
)

log = logging.getLogger(__name__)


# =============================================================================
# AssignmentDecision
# =============================================================================


class AssignmentDecision(object):
    """
    Combined result for a supervisor and/or co-supervisor.
    """

    def __init__(
        self,
        supervisor: CapacityDecision = None,
        co_supervisor: CapacityDecision = None,
        overall_valid: bool = True,
        errors: List[str] = None,
        warnings: List[str] = None,
    ) -> None:
        self.supervisor = supervisor
        self.co_supervisor = co_supervisor
        self.overall_valid = overall_valid
        self.errors = errors or []  # type: List[str]
        self.warnings = warnings or []  # type: List[str]

    def __str__(self) -> str:
        lines = [f"Valid: {self.overall_valid}"]
        lines += [f"Error: {x}" for x in self.errors]
        lines += [f"Warning: {x}" for x in self.warnings]
        return "\n".join(lines)

    def __repr__(self) -> str:
        return auto_repr(self)

    def __bool__(self) -> bool:
        return self.overall_valid

    def add(self, prefix: str, decision: CapacityDecision) -> None:
        """
        Folds one faculty member's result into the overall decision.
        """
        if not decision.is_valid:
            self.overall_valid = False
            self.errors.append(prefix + decision.message)
        elif decision.is_warning:
            self.warnings.append(prefix + decision.message)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "supervisor": (
                self.supervisor.as_dict() if self.supervisor else None
            ),
            "coSupervisor": (
                self.co_supervisor.as_dict() if self.co_supervisor else None
            ),
            "overallValid": self.overall_valid,
            "warnings": list(self.warnings),
            "errors": list(self.errors),
        }


# =============================================================================
# AssignmentValidator
# =============================================================================


class AssignmentValidator(object):
    """
    Checks both supervision roles for a scholar.
    """

    def __init__(
        self,
        faculty_directory: FacultyDirectory,
        scholar_directory: ScholarDirectory,
    ) -> None:
        self.evaluator = CapacityEvaluator(
            faculty_directory, scholar_directory
        )

    def validate_supervisor_assignment(
        self,
        supervisor_id: str = None,
        co_supervisor_id: str = None,
        operation: Union[Operation, str] = DEFAULT_OPERATION,
        scholar_id: str = None,
    ) -> AssignmentDecision:
        """
        Validates a proposed supervisor/co-supervisor pair.

        Args:
            supervisor_id:
                Employee code of the proposed supervisor, if any.
            co_supervisor_id:
                Employee code of the proposed co-supervisor, if any.
            operation:
                :class:`Operation` (or its name); use ``CHANGE`` with
                ``scholar_id`` when editing an existing scholar.
            scholar_id:
                Roll number of the scholar being edited.

        Returns:
            an :class:`AssignmentDecision`; never raises.
        """
        try:
            if not isinstance(operation, Operation):
                operation = Operation[operation]
            return self._validate(
                supervisor_id, co_supervisor_id, operation, scholar_id
            )
        except Exception:
            log.exception("Error validating supervisor assignment")
            return AssignmentDecision(
                overall_valid=False,
                errors=[Messages.ERROR_VALIDATING_ASSIGNMENT],
            )

    def _validate(
        self,
        supervisor_id: Optional[str],
        co_supervisor_id: Optional[str],
        operation: Operation,
        scholar_id: Optional[str],
    ) -> AssignmentDecision:
        decision = AssignmentDecision()

        current = None  # type: Optional[Assignees]
        if operation == Operation.CHANGE and scholar_id:
            current = self.evaluator.current_assignees(scholar_id)

        if supervisor_id:
            decision.supervisor = self.evaluator.evaluate(
                supervisor_id, operation, scholar_id, current
            )
            decision.add(Messages.SUPERVISOR_PREFIX, decision.supervisor)

        if co_supervisor_id:
            decision.co_supervisor = self.evaluator.evaluate(
                co_supervisor_id, operation, scholar_id, current
            )
            decision.add(
                Messages.CO_SUPERVISOR_PREFIX, decision.co_supervisor
            )

        if (
            supervisor_id
            and co_supervisor_id
            and supervisor_id == co_supervisor_id
        ):
            decision.overall_valid = False
            decision.errors.append(Messages.SAME_PERSON)

        if current is not None:
            old_sv, old_cosv = current
            if old_sv and old_sv != supervisor_id:
                log.info(
                    f"Scholar {scholar_id!r} leaving supervisor {old_sv!r}"
                )
            if old_cosv and old_cosv != co_supervisor_id:
                log.info(
                    f"Scholar {scholar_id!r} leaving co-supervisor "
                    f"{old_cosv!r}"
                )
        return decision


# =============================================================================
# Convenience
# =============================================================================


def validate_supervisor_assignment(
    register: Register,
    supervisor_id: str = None,
    co_supervisor_id: str = None,
    operation: Union[Operation, str] = DEFAULT_OPERATION,
    scholar_id: str = None,
) -> AssignmentDecision:
    """
    Validates against a :class:`Register`, which serves as both directories.
    """
    validator = AssignmentValidator(register, register)
    return validator.validate_supervisor_assignment(
        supervisor_id=supervisor_id,
        co_supervisor_id=co_supervisor_id,
        operation=operation,
        scholar_id=scholar_id,
    )
