#!/usr/bin/env python

"""
drc_supervision/main.py

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

Command-line entry point: check and record research scholar supervision.

"""

import argparse
import logging
import sys
import traceback
from typing import List

from cardinal_pythonlib.argparse_func import (
    RawDescriptionArgumentDefaultsHelpFormatter,
)
from cardinal_pythonlib.cmdline import cmdline_quote
from cardinal_pythonlib.enumlike import keys_descriptions_from_enum
from cardinal_pythonlib.logs import main_only_quicksetup_rootlogger

from drc_supervision.assignment import AssignmentValidator
from drc_supervision.config import Config
from drc_supervision.constants import (
    DEFAULT_OPERATION,
    EXIT_FAILURE,
    EXIT_SUCCESS,
    FALSE_VALUES,
    INPUT_TYPES_SUPPORTED,
    MAX_SCHOLARS,
    MIN_PUBLICATIONS_EXCLUSIVE,
    Operation,
    OUTPUT_TYPES_SUPPORTED,
    SheetHeadings,
    SheetNames,
    TRUE_VALUES,
)
from drc_supervision.directory import Register
from drc_supervision.errors import SupervisionError
from drc_supervision.load import get_faculty_with_supervision_load
from drc_supervision.service import ScholarService
from drc_supervision.workbook import read_register, write_register

log = logging.getLogger(__name__)


# =============================================================================
# Actions
# =============================================================================


def report_load(register: Register, department_code: str = None) -> None:
    """
    Logs everyone's current supervision load.
    """
    lines = ["Supervision load:"]
    for faculty, summary in get_faculty_with_supervision_load(
        register, department_code
    ):
        eligibility = (
            "eligible"
            if summary.is_eligible
            else f"NOT ELIGIBLE: {summary.eligibility_reason}"
        )
        lines.append(
            f"- {faculty} [{faculty.designation_text}]: {summary.message}; "
            f"{eligibility}"
        )
    log.info("\n".join(lines))


def check_proposal(register: Register, config: Config) -> bool:
    """
    Validates the proposed assignment, optionally records it, and says
    whether it was acceptable.
    """
    if config.apply:
        assert config.scholar_id, "--apply requires --scholar"
        if not config.supervisor_id and not config.co_supervisor_id:
            log.error("--apply requires --supervisor and/or --co_supervisor")
            return False
        if config.operation != DEFAULT_OPERATION:
            log.warning(
                f"--operation {config.operation.value} is ignored with "
                "--apply; the scholar's existing supervisors are taken "
                "into account automatically"
            )
        service = ScholarService(register)
        # Roles not mentioned on the command line are left alone.
        changes = {}
        if config.supervisor_id:
            changes["supervisor_id"] = config.supervisor_id
        if config.co_supervisor_id:
            changes["co_supervisor_id"] = config.co_supervisor_id
        try:
            outcome = service.update_scholar(config.scholar_id, **changes)
        except SupervisionError as e:
            for error in e.errors:
                log.error(error)
            for warning in e.warnings:
                log.warning(warning)
            return False
        for warning in outcome.warnings:
            log.warning(warning)
        log.info(f"Recorded supervisors for {outcome.scholar}")
        return True

    validator = AssignmentValidator(register, register)
    decision = validator.validate_supervisor_assignment(
        supervisor_id=config.supervisor_id,
        co_supervisor_id=config.co_supervisor_id,
        operation=config.operation,
        scholar_id=config.scholar_id,
    )
    for result in (decision.supervisor, decision.co_supervisor):
        if result is not None:
            log.info(
                f"{result.faculty_name or '?'}: {result.status.value}: "
                f"{result.message}"
            )
    for error in decision.errors:
        log.error(error)
    for warning in decision.warnings:
        log.warning(warning)
    if decision.overall_valid:
        log.info("Assignment is acceptable.")
    return decision.overall_valid


# =============================================================================
# main
# =============================================================================


def main(args: List[str] = None) -> None:
    """
    Command-line entry point.
    """
    limits = "\n".join(
        f"        {d.value:<22}{MAX_SCHOLARS[d]:<16}"
        f"more than {MIN_PUBLICATIONS_EXCLUSIVE[d]}"
        for d in MAX_SCHOLARS
    )
    # noinspection PyTypeChecker
    parser = argparse.ArgumentParser(
        formatter_class=RawDescriptionArgumentDefaultsHelpFormatter,
        description=f"""
Check research scholar supervision against faculty capacity.

A faculty member may supervise only if they hold a PhD and have enough
publications. Supervising and co-supervising share one capacity limit:

        Designation           Max scholars    Publications needed
{limits}

The input spreadsheet should have the following format (in each case, the
first row is the title row):

    Sheet name:
        {SheetNames.FACULTY}
    Format:
        {SheetHeadings.EMPLOYEE_CODE}  {SheetHeadings.NAME}  {SheetHeadings.DEPARTMENT}  {SheetHeadings.DESIGNATION}  {SheetHeadings.IS_PHD}  {SheetHeadings.NUMBER_OF_PUBLICATIONS}  {SheetHeadings.IS_ACTIVE}
        F001           Dr Smith  CSE         Professor    1       7                        1

    Sheet name:
        {SheetNames.SCHOLARS}
    Format:
        {SheetHeadings.ROLL_NUMBER}  {SheetHeadings.REGISTRATION_ID}  {SheetHeadings.EMAIL}  {SheetHeadings.NAME}  {SheetHeadings.DEPARTMENT}  {SheetHeadings.SUPERVISOR}  {SheetHeadings.CO_SUPERVISOR}  {SheetHeadings.IS_ACTIVE}
        R2024001     REG-1            ...    ...   CSE         F001        F002           1

    Use {TRUE_VALUES} for "yes" and {FALSE_VALUES} for "no".
    A blank {SheetHeadings.IS_ACTIVE} cell means active.
""",  # noqa
    )
    parser.add_argument("--verbose", action="store_true", help="Be verbose")

    file_group = parser.add_argument_group("Files")
    file_group.add_argument(
        "filename",
        type=str,
        help="Register spreadsheet to read. "
        "Input file types supported: " + str(INPUT_TYPES_SUPPORTED),
    )
    file_group.add_argument(
        "--output",
        type=str,
        help="Optional filename to write the register and load report to. "
        "Output types supported: " + str(OUTPUT_TYPES_SUPPORTED),
    )

    report_group = parser.add_argument_group("Report")
    report_group.add_argument(
        "--department",
        type=str,
        default=None,
        help="Only report faculty from this department",
    )

    proposal_group = parser.add_argument_group("Proposed assignment")
    proposal_group.add_argument(
        "--supervisor", type=str, help="Employee code of proposed supervisor"
    )
    proposal_group.add_argument(
        "--co_supervisor",
        type=str,
        help="Employee code of proposed co-supervisor",
    )
    proposal_group.add_argument(
        "--scholar",
        type=str,
        help="Roll number of the scholar being edited (for --operation "
        "change, and for --apply)",
    )
    operation_k, operation_desc = keys_descriptions_from_enum(
        Operation, keys_to_lower=True
    )
    proposal_group.add_argument(
        "--operation",
        type=str,
        choices=operation_k,
        default=DEFAULT_OPERATION.name.lower(),
        help=f"How the proposal affects load. -- {operation_desc} --",
    )
    proposal_group.add_argument(
        "--apply",
        action="store_true",
        help="Record the proposed supervisors against --scholar, if valid "
        "(use --output to save the result)",
    )

    parsed = parser.parse_args(args)
    main_only_quicksetup_rootlogger(
        level=logging.DEBUG if parsed.verbose else logging.INFO
    )

    config = Config(
        filename=parsed.filename,
        apply=parsed.apply,
        cmd_args=vars(parsed),
        co_supervisor_id=parsed.co_supervisor,
        department_code=parsed.department,
        operation=Operation[parsed.operation],
        output=parsed.output,
        scholar_id=parsed.scholar,
        supervisor_id=parsed.supervisor,
    )
    log.info(f"Command: {cmdline_quote(sys.argv)}")
    log.info(f"Config: {config}")
    register = read_register(config.filename)
    log.debug(register)

    ok = True
    if config.has_proposal or config.apply:
        ok = check_proposal(register, config)
    report_load(register, config.department_code)

    if config.output:
        write_register(register, config.output, config.department_code)
    elif config.apply and ok:
        log.warning("Output not saved. Specify the --output option for that.")
    sys.exit(EXIT_SUCCESS if ok else EXIT_FAILURE)


if __name__ == "__main__":
    try:
        main()
    except Exception as _top_level_exception:
        log.critical(str(_top_level_exception))
        log.critical(traceback.format_exc())
        sys.exit(EXIT_FAILURE)
