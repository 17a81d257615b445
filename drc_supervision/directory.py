#!/usr/bin/env python

"""
drc_supervision/directory.py

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

Lookups of faculty and scholars.

The validators only need the two abstract interfaces here. :class:`Register`
is an in-memory implementation of both, used by the command-line tool (which
fills it from a spreadsheet) and by the tests.

Supervision load is always counted from the scholar records at the time of
asking; there is no stored counter that could drift.

"""

from abc import ABC, abstractmethod
from collections import OrderedDict
from contextlib import contextmanager
import logging
import threading
from typing import (
    ContextManager,
    Dict,
    Generator,
    Iterable,
    List,
    Optional,
)

from drc_supervision.constants import Role
from drc_supervision.errors import FacultyNotFound, ScholarNotFound
from drc_supervision.faculty import FacultyMember
from drc_supervision.load import summarize_load
from drc_supervision.scholar import Scholar

log = logging.getLogger(__name__)


# =============================================================================
# Interfaces
# =============================================================================


class FacultyDirectory(ABC):
    """
    Looks up faculty members and counts their scholars.
    """

    @abstractmethod
    def get_faculty(self, faculty_id: str) -> FacultyMember:
        """
        Returns the faculty member, or raises :exc:`FacultyNotFound`.
        """
        raise NotImplementedError

    @abstractmethod
    def count_active_load(self, faculty_id: str, role: Role = None) -> int:
        """
        Number of active scholars for whom this faculty member is supervisor
        (``role=Role.SUPERVISOR``), co-supervisor (``Role.CO_SUPERVISOR``), or
        either (``None``; the combined capacity pool).
        """
        raise NotImplementedError

    @abstractmethod
    def all_faculty(self) -> List[FacultyMember]:
        raise NotImplementedError


class ScholarDirectory(ABC):
    """
    Looks up scholars.
    """

    @abstractmethod
    def get_scholar(self, scholar_id: str) -> Scholar:
        """
        Returns the scholar, or raises :exc:`ScholarNotFound`.
        """
        raise NotImplementedError

    @abstractmethod
    def all_scholars(self) -> List[Scholar]:
        raise NotImplementedError


# =============================================================================
# Register: in-memory faculty and scholars
# =============================================================================


class Register(FacultyDirectory, ScholarDirectory):
    """
    In-memory, thread-safe store of faculty members and scholars.
    """

    def __init__(
        self,
        faculty: Iterable[FacultyMember] = None,
        scholars: Iterable[Scholar] = None,
    ) -> None:
        """
        Args:
            faculty:
                Initial faculty members.
            scholars:
                Initial scholars. Their supervisors must already be present
                in ``faculty``.
        """
        self._lock = threading.RLock()
        self._faculty = OrderedDict()  # type: Dict[str, FacultyMember]
        self._scholars = OrderedDict()  # type: Dict[str, Scholar]
        self._faculty_locks = {}  # type: Dict[str, threading.Lock]
        self._scholar_locks = {}  # type: Dict[str, threading.Lock]
        for f in faculty or []:
            self.add_faculty(f)
        for s in scholars or []:
            self.add_scholar(s)

    def __str__(self) -> str:
        lines = [
            f"Faculty ({self.n_faculty}):",
            "",
        ]
        for f in self.all_faculty():
            lines.append(f"- {f.description()}")
        lines += [
            "",
            f"Scholars ({self.n_scholars}):",
            "",
        ]
        for s in self.all_scholars():
            lines.append(
                f"- {s}: supervisor={s.supervisor_id}, "
                f"co_supervisor={s.co_supervisor_id}, active={s.is_active}"
            )
        return "\n".join(lines)

    # -------------------------------------------------------------------------
    # Faculty
    # -------------------------------------------------------------------------

    @property
    def n_faculty(self) -> int:
        return len(self._faculty)

    def add_faculty(self, faculty: FacultyMember) -> None:
        with self._lock:
            if faculty.faculty_id in self._faculty:
                raise ValueError(
                    f"Duplicate faculty employee code: {faculty.faculty_id!r}"
                )
            self._faculty[faculty.faculty_id] = faculty

    def get_faculty(self, faculty_id: str) -> FacultyMember:
        with self._lock:
            try:
                return self._faculty[faculty_id]
            except KeyError:
                raise FacultyNotFound(faculty_id)

    def find_faculty(self, faculty_id: str) -> Optional[FacultyMember]:
        with self._lock:
            return self._faculty.get(faculty_id)

    def all_faculty(self) -> List[FacultyMember]:
        with self._lock:
            return list(self._faculty.values())

    def count_active_load(self, faculty_id: str, role: Role = None) -> int:
        with self._lock:
            n = 0
            for s in self._scholars.values():
                if not s.is_active:
                    continue
                if role is None:
                    if s.supervised_by(faculty_id):
                        n += 1
                elif role == Role.SUPERVISOR:
                    if s.supervisor_id == faculty_id:
                        n += 1
                elif s.co_supervisor_id == faculty_id:
                    n += 1
            return n

    # -------------------------------------------------------------------------
    # Scholars
    # -------------------------------------------------------------------------

    @property
    def n_scholars(self) -> int:
        return len(self._scholars)

    def add_scholar(self, scholar: Scholar) -> None:
        """
        Adds a new scholar. No capacity checks happen here; see
        :class:`drc_supervision.service.ScholarService`.
        """
        with self._lock:
            if scholar.scholar_id in self._scholars:
                raise ValueError(
                    f"Duplicate scholar roll number: {scholar.scholar_id!r}"
                )
            if (
                scholar.supervisor_id
                and scholar.supervisor_id == scholar.co_supervisor_id
            ):
                raise ValueError(
                    "Supervisor and co-supervisor are the same person: "
                    f"{scholar.supervisor_id!r}"
                )
            for fid in scholar.faculty_ids():
                if fid not in self._faculty:
                    raise FacultyNotFound(fid)
            self._scholars[scholar.scholar_id] = scholar

    def put_scholar(self, scholar: Scholar) -> None:
        """
        Replaces an existing scholar record.
        """
        with self._lock:
            if scholar.scholar_id not in self._scholars:
                raise ScholarNotFound(scholar.scholar_id)
            self._scholars[scholar.scholar_id] = scholar

    def remove_scholar(self, scholar_id: str) -> Scholar:
        """
        Permanently deletes a scholar, returning the deleted record.
        """
        with self._lock:
            try:
                return self._scholars.pop(scholar_id)
            except KeyError:
                raise ScholarNotFound(scholar_id)

    def get_scholar(self, scholar_id: str) -> Scholar:
        with self._lock:
            try:
                return self._scholars[scholar_id]
            except KeyError:
                raise ScholarNotFound(scholar_id)

    def all_scholars(self) -> List[Scholar]:
        with self._lock:
            return list(self._scholars.values())

    def scholars_of(self, faculty_id: str) -> List[Scholar]:
        """
        Active scholars supervised or co-supervised by this faculty member.
        """
        with self._lock:
            return [
                s
                for s in self._scholars.values()
                if s.is_active and s.supervised_by(faculty_id)
            ]

    # -------------------------------------------------------------------------
    # Locking
    # -------------------------------------------------------------------------

    @contextmanager
    def _hold_locks(
        self, table: Dict[str, threading.Lock], keys: Iterable[Optional[str]]
    ) -> Generator[None, None, None]:
        keys = sorted({x for x in keys if x})
        with self._lock:
            locks = [table.setdefault(k, threading.Lock()) for k in keys]
        acquired = []  # type: List[threading.Lock]
        try:
            for lock in locks:
                lock.acquire()
                acquired.append(lock)
            yield
        finally:
            for lock in reversed(acquired):
                lock.release()

    def scholar_lock(self, scholar_id: str) -> ContextManager[None]:
        """
        Holds a lock on one scholar's record, so that a read-modify-write of
        that record cannot interleave with another. Take this before any
        :meth:`faculty_locks`.
        """
        return self._hold_locks(self._scholar_locks, [scholar_id])

    def faculty_locks(
        self, faculty_ids: Iterable[Optional[str]]
    ) -> ContextManager[None]:
        """
        Holds a lock for each of the faculty members, so that nobody else can
        check and change their load meanwhile. Locks are taken in sorted
        order so that two callers can never deadlock.
        """
        return self._hold_locks(self._faculty_locks, faculty_ids)

    # -------------------------------------------------------------------------
    # Aggregate refresh
    # -------------------------------------------------------------------------

    def refresh_faculty_supervision_data(
        self, faculty_ids: Iterable[Optional[str]]
    ) -> None:
        """
        Recomputes the cached supervision load view of each faculty member
        named. Call this after a scholar's supervisors change. Unknown IDs
        are skipped.
        """
        ids = sorted({x for x in faculty_ids if x})
        if not ids:
            return
        for fid in ids:
            faculty = self.find_faculty(fid)
            if faculty is None:
                log.warning(f"Cannot refresh unknown faculty member {fid!r}")
                continue
            faculty.supervision_load = summarize_load(self, faculty)
        log.info(f"Refreshed supervision data for {len(ids)} faculty members")
