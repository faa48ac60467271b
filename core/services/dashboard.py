from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from core.domain import Student, StudentStatus
from core.services.renewals import EXPIRING_SOON_DAYS, RENEWAL_WINDOW_DAYS, in_renewal_window, is_expiring_soon
from core.services.team import percent
from core.services.urgency import is_contact_urgent


@dataclass
class DashboardSummary:
    total_students: int
    urgent_contacts: int
    expiring_soon: int
    active_rate_pct: int
    renewed: int
    with_difficulties: int
    in_renewal_window: int


def dashboard_summary(
    students: Iterable[Student],
    now: datetime,
    expiring_soon_days: int = EXPIRING_SOON_DAYS,
    window_days: int = RENEWAL_WINDOW_DAYS,
) -> DashboardSummary:
    """Headline counters for the students a viewer can see."""
    snapshot = tuple(students)
    active = sum(1 for s in snapshot if s.status == StudentStatus.ACTIVE)
    return DashboardSummary(
        total_students=len(snapshot),
        urgent_contacts=sum(1 for s in snapshot if is_contact_urgent(s, now)),
        expiring_soon=sum(1 for s in snapshot if is_expiring_soon(s, now, expiring_soon_days)),
        active_rate_pct=percent(active, len(snapshot)),
        renewed=sum(1 for s in snapshot if s.is_renewed),
        with_difficulties=sum(1 for s in snapshot if s.has_difficulties),
        in_renewal_window=sum(1 for s in snapshot if in_renewal_window(s, now, window_days)),
    )
