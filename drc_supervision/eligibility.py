#!/usr/bin/env python

"""
drc_supervision/eligibility.py

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

Is a faculty member allowed to supervise research scholars at all?

Eligibility is independent of how many scholars the faculty member already
has. A PhD is always required; beyond that, the number of publications must
strictly exceed a threshold that depends on designation.

"""

from typing import Optional, Union

from cardinal_pythonlib.reprfunc import auto_repr

from drc_supervision.constants import (
    Designation,
    MAX_SCHOLARS,
    Messages,
    MIN_PUBLICATIONS_EXCLUSIVE,
)


# =============================================================================
# Designation helpers
# =============================================================================


def resolve_designation(
    designation: Union[Designation, str, None]
) -> Optional[Designation]:
    """
    Converts a designation given as text (e.g. ``"Associate Professor"``) or
    as an enum to a :class:`Designation`. Returns ``None`` if it is not a
    recognized designation.
    """
    if isinstance(designation, Designation):
        return designation
    if not isinstance(designation, str):
        return None
    text = designation.strip()
    try:
        return Designation(text)
    except ValueError:
        pass
    try:
        # Also accept the enum name, e.g. "associate_professor".
        return Designation[text.replace(" ", "_")]
    except KeyError:
        return None


def max_scholars_for(designation: Union[Designation, str, None]) -> int:
    """
    Maximum combined supervision load for a designation; 0 if the designation
    is not recognized.
    """
    d = resolve_designation(designation)
    if d is None:
        return 0
    return MAX_SCHOLARS[d]


# =============================================================================
# EligibilityResult
# =============================================================================


class EligibilityResult(object):
    """
    Is someone eligible to supervise, and if not, why not?
    """

    def __init__(self, is_eligible: bool, reason: str) -> None:
        self.is_eligible = is_eligible
        self.reason = reason

    def __str__(self) -> str:
        return self.reason

    def __repr__(self) -> str:
        return auto_repr(self)

    def __bool__(self) -> bool:
        return self.is_eligible

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EligibilityResult):
            return NotImplemented
        return (
            self.is_eligible == other.is_eligible
            and self.reason == other.reason
        )

    def as_dict(self) -> dict:
        return {"isEligible": self.is_eligible, "reason": self.reason}


# =============================================================================
# Eligibility check
# =============================================================================


def check_eligibility(
    designation: Union[Designation, str, None],
    is_phd: bool,
    n_publications: int,
) -> EligibilityResult:
    """
    Applies the supervision eligibility rules.

    Args:
        designation:
            Academic rank.
        is_phd:
            Does the faculty member hold a PhD? This dominates everything
            else.
        n_publications:
            Number of publications. The threshold is strict: a Professor with
            exactly 5 publications is not eligible.

    Returns:
        an :class:`EligibilityResult`
    """
    if not is_phd:
        return EligibilityResult(False, Messages.PHD_REQUIRED)
    d = resolve_designation(designation)
    if d is None:
        return EligibilityResult(False, Messages.INVALID_DESIGNATION)
    threshold = MIN_PUBLICATIONS_EXCLUSIVE[d]
    if n_publications > threshold:
        return EligibilityResult(True, Messages.ELIGIBLE)
    return EligibilityResult(
        False,
        f"Requires more than {threshold} publications "
        f"(current: {n_publications})",
    )
