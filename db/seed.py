"""Demo data seeder: a small team and a mixed caseload of students.

Student dates are laid out relative to ``now`` so the seeded dashboard always
has something urgent, something expiring and something renewed.
"""
from __future__ import annotations

from datetime import datetime, timedelta

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.db import init_db, session_scope
from core.domain import PackageType, Role, StudentStatus
from core.models import StudentRow, UserRow
from core.services.packages import compute_end_date, compute_lesson_entitlement

DEMO_USERS = [
    ("owner-1", "Olivia Owner", Role.OWNER),
    ("coach-1", "Carlo Coach", Role.COACH),
    ("coach-2", "Giulia Coach", Role.COACH),
    ("renewals-1", "Rita Renewals", Role.RENEWALS),
    ("support-1", "Sam Support", Role.SUPPORT),
]

# (name, package, coach, days since start, hours since last contact, status, renewed)
DEMO_STUDENTS = [
    ("Anna Bianchi", PackageType.SILVER, "coach-1", 5, 2, StudentStatus.ACTIVE, False),
    ("Bruno Verdi", PackageType.GOLD, "coach-1", 55, 30, StudentStatus.ACTIVE, False),
    ("Chiara Neri", PackageType.PLATINUM, "coach-1", 40, 20, StudentStatus.ACTIVE, True),
    ("Dario Russo", PackageType.SILVER, "coach-2", 45, 24 * 12, StudentStatus.EXPIRED, False),
    ("Elena Ferri", PackageType.ELITE, "coach-2", 10, 1, StudentStatus.ACTIVE, False),
    ("Fabio Conti", PackageType.GRANDMASTER, "owner-1", 100, 50, StudentStatus.ACTIVE, False),
    ("Gaia Galli", PackageType.GOLD, "coach-2", 90, 24 * 3, StudentStatus.NOT_RENEWED, False),
]


def seed_users(s: Session) -> int:
    existing = set(s.execute(select(UserRow.id)).scalars().all())
    added = 0
    for user_id, name, role in DEMO_USERS:
        if user_id in existing:
            continue
        s.add(UserRow(id=user_id, name=name, role=role.value))
        added += 1
    s.flush()
    return added


def seed_students(s: Session, now: datetime) -> int:
    if s.execute(select(StudentRow.id)).first() is not None:
        return 0
    for idx, (name, package, coach_id, started_days_ago, contact_hours_ago, status, renewed) in enumerate(DEMO_STUDENTS, start=1):
        start = (now - timedelta(days=started_days_ago)).replace(hour=0, minute=0, second=0, microsecond=0)
        s.add(
            StudentRow(
                id=f"student-{idx}",
                name=name,
                email=f"{name.split()[0].lower()}@demo.coach",
                package=package.value,
                start_date=start,
                end_date=compute_end_date(start, package),
                coach_id=coach_id,
                original_coach_id=coach_id,
                lessons_done=min(started_days_ago // 7, compute_lesson_entitlement(package)),
                total_lessons=compute_lesson_entitlement(package),
                last_contact_date=now - timedelta(hours=contact_hours_ago),
                status=status.value,
                is_renewed=renewed,
                difficulty_tags=["Little time"] if idx % 3 == 0 else [],
                notes="seed",
            )
        )
    s.flush()
    return len(DEMO_STUDENTS)


def main() -> None:
    init_db()
    with session_scope() as s:
        users = seed_users(s)
        students = seed_students(s, datetime.now())
    print(f"Seed complete: users={users} students={students}")


if __name__ == "__main__":
    main()
