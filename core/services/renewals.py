"""Renewal workflow: expiry windows, renewal updates and call outcomes."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Iterable, Optional

from core.domain import ContactOutcome, Student, StudentStatus
from core.services.dates import align, days_between
from core.services.team import percent

EXPIRING_SOON_DAYS = 7
RENEWAL_WINDOW_DAYS = 30


@dataclass(frozen=True)
class RenewalQueues:
    """Students grouped by how close their subscription end is."""

    window: list[Student]
    urgent: list[Student]
    upcoming: list[Student]
    with_difficulties: list[Student]


@dataclass(frozen=True)
class OutcomeRow:
    outcome: ContactOutcome
    label: str
    count: int
    percentage: int


def days_until_end(student: Student, now: datetime) -> Optional[int]:
    if student.end_date is None:
        return None
    return days_between(student.end_date, now)


def _within(days_left: Optional[int], low: int, high: int) -> bool:
    return days_left is not None and low <= days_left <= high


def is_expiring_soon(student: Student, now: datetime, days: int = EXPIRING_SOON_DAYS) -> bool:
    return _within(days_until_end(student, now), 0, days)


def in_renewal_window(student: Student, now: datetime, days: int = RENEWAL_WINDOW_DAYS) -> bool:
    return _within(days_until_end(student, now), 0, days)


def renewal_queues(
    students: Iterable[Student],
    now: datetime,
    expiring_soon_days: int = EXPIRING_SOON_DAYS,
    window_days: int = RENEWAL_WINDOW_DAYS,
) -> RenewalQueues:
    window: list[Student] = []
    urgent: list[Student] = []
    upcoming: list[Student] = []
    for student in students:
        days_left = days_until_end(student, now)
        if not _within(days_left, 0, window_days):
            continue
        window.append(student)
        if days_left <= expiring_soon_days:
            urgent.append(student)
        else:
            upcoming.append(student)
    return RenewalQueues(
        window=window,
        urgent=urgent,
        upcoming=upcoming,
        with_difficulties=[s for s in window if s.has_difficulties],
    )


def apply_renewal(student: Student, now: datetime, renewal_date: Optional[datetime] = None) -> Student:
    """Mark a student renewed.

    A renewal date replaces the end date. Whenever the resulting end date is in
    the future the student goes back to ACTIVE, otherwise the status is kept.
    """
    end_date = renewal_date or student.end_date
    status = student.status
    if end_date is not None:
        now_aligned, end_aligned = align(now, end_date)
        if end_aligned > now_aligned:
            status = StudentStatus.ACTIVE
    return replace(
        student,
        is_renewed=True,
        renewal_date=renewal_date or student.renewal_date,
        end_date=end_date,
        status=status,
    )


def record_contact_outcome(
    student: Student,
    outcome: ContactOutcome,
    now: datetime,
    notes: str = "",
) -> Student:
    return replace(
        student,
        contact_outcome=ContactOutcome(outcome),
        contact_outcome_date=now,
        contact_notes=notes or student.contact_notes,
    )


def contact_outcome_report(students: Iterable[Student]) -> list[OutcomeRow]:
    """Outcome breakdown; every outcome is listed, most frequent first."""
    counts = {outcome: 0 for outcome in ContactOutcome}
    for student in students:
        if student.contact_outcome is not None:
            counts[ContactOutcome(student.contact_outcome)] += 1
    total = sum(counts.values())

    rows = [
        OutcomeRow(
            outcome=outcome,
            label=outcome.label,
            count=count,
            percentage=percent(count, total),
        )
        for outcome, count in counts.items()
    ]
    rows.sort(key=lambda r: r.count, reverse=True)
    return rows
