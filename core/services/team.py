"""Team performance: per-coach caseload and retention rollups.

Only users with the COACH role are subjects. Owners are left out even when
they carry students of their own.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

import pandas as pd

from core.domain import CoachStats, Role, Student, StudentStatus, User
from core.services.urgency import is_contact_urgent

COACH_STATS_COLUMNS = [
    "coach_id",
    "coach_name",
    "active_students",
    "retention_rate",
    "urgent_count",
    "total_students",
    "renewed_count",
]


def percent(part: int, whole: int) -> int:
    """Integer percentage rounded half up; 0 when ``whole`` is 0."""
    if whole == 0:
        return 0
    return (part * 200 + whole) // (2 * whole)


def retention_rate(renewed: int, expired_without_renewal: int) -> int:
    """Renewed share of finished students, as a 0-100 integer.

    A student is finished once renewed or expired without renewal. With no
    finished students the rate is 0.
    """
    return percent(renewed, renewed + expired_without_renewal)


def _coach_stats(coach: User, caseload: list[Student], now: datetime) -> CoachStats:
    active = sum(1 for s in caseload if s.status == StudentStatus.ACTIVE)
    renewed = sum(1 for s in caseload if s.is_renewed)
    expired_no_renewal = sum(1 for s in caseload if s.status == StudentStatus.EXPIRED and not s.is_renewed)
    urgent = sum(1 for s in caseload if is_contact_urgent(s, now))
    return CoachStats(
        coach_id=coach.id,
        coach_name=coach.name,
        active_students=active,
        retention_rate=retention_rate(renewed, expired_no_renewal),
        urgent_count=urgent,
        total_students=len(caseload),
        renewed_count=renewed,
    )


def compute_coach_stats(students: Iterable[Student], users: Iterable[User], now: datetime) -> list[CoachStats]:
    """One CoachStats per coach, heaviest active caseload first.

    Coaches without students still get an all-zero entry. Ties keep the order
    of ``users``.
    """
    student_snapshot = tuple(students)
    coaches = [u for u in tuple(users) if u.role == Role.COACH]

    caseloads: dict[str, list[Student]] = {c.id: [] for c in coaches}
    for student in student_snapshot:
        if student.coach_id in caseloads:
            caseloads[student.coach_id].append(student)

    stats = [_coach_stats(c, caseloads[c.id], now) for c in coaches]
    stats.sort(key=lambda s: s.active_students, reverse=True)
    return stats


def coach_stats_frame(stats: list[CoachStats]) -> pd.DataFrame:
    """Tabular view of coach stats for export, in the given order."""
    if not stats:
        return pd.DataFrame(columns=COACH_STATS_COLUMNS)
    rows = [{col: getattr(s, col) for col in COACH_STATS_COLUMNS} for s in stats]
    return pd.DataFrame(rows, columns=COACH_STATS_COLUMNS)
