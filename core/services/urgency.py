from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Union

from core.domain import Student, StudentStatus
from core.services.dates import align, calendar_days_between, coerce_instant, days_between, hours_between

ACTIVE_UNRENEWED_CONTACT_HOURS = 24
LAPSED_CONTACT_DAYS = 10


def is_contact_urgent(student: Student, now: datetime) -> bool:
    """Whether the student is due for a contact at ``now``.

    - active and renewed: any calendar day change since the last contact
    - active, not renewed: a full rolling 24 hours
    - expired or not renewed: a rolling 10 days
    """
    last_contact = student.last_contact_date
    if last_contact is None:
        return False

    if student.status == StudentStatus.ACTIVE:
        if student.is_renewed:
            return calendar_days_between(now, last_contact) >= 1
        return hours_between(now, last_contact) >= ACTIVE_UNRENEWED_CONTACT_HOURS
    return days_between(now, last_contact) >= LAPSED_CONTACT_DAYS


def urgent_students(students: Iterable[Student], now: datetime) -> list[Student]:
    return [s for s in students if is_contact_urgent(s, now)]


def has_expired(end_date: Union[datetime, date, str, None], now: datetime) -> bool:
    """Strictly past the end date. A missing end date never expires."""
    end = coerce_instant(end_date)
    if end is None:
        return False
    now, end = align(now, end)
    return now > end


def students_to_expire(students: Iterable[Student], now: datetime) -> list[Student]:
    """Active students whose subscription has lapsed; input for the expiration sweep."""
    return [s for s in students if s.status == StudentStatus.ACTIVE and has_expired(s.end_date, now)]
