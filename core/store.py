"""Table-store operations that load snapshots and persist business-rule output.

Every function takes an open ``Session``; committing is the caller's job
(normally through ``core.db.session_scope``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.config import Settings, get_settings
from core.domain import Student, StudentStatus, User
from core.models import StudentRow, UserRow
from core.services import renewals, students as student_rules
from core.services.dashboard import DashboardSummary, dashboard_summary
from core.services.packages import LessonTotalFix, plan_lesson_total_fix
from core.services.urgency import students_to_expire
from core.validators import ContactOutcomeInput, LessonProgressInput, RenewalInput, StudentCreateInput

logger = logging.getLogger(__name__)


class StudentNotFoundError(LookupError):
    pass


@dataclass(frozen=True)
class Snapshot:
    students: tuple[Student, ...]
    users: tuple[User, ...]


def load_snapshot(s: Session) -> Snapshot:
    users = s.execute(select(UserRow).order_by(UserRow.name)).scalars().all()
    rows = s.execute(select(StudentRow).order_by(StudentRow.name)).scalars().all()
    return Snapshot(
        students=tuple(r.to_record() for r in rows),
        users=tuple(u.to_record() for u in users),
    )


def _row(s: Session, student_id: str) -> StudentRow:
    row = s.get(StudentRow, student_id)
    if row is None:
        raise StudentNotFoundError(student_id)
    return row


def get_student(s: Session, student_id: str) -> Student:
    return _row(s, student_id).to_record()


def add_student(
    s: Session,
    data: StudentCreateInput,
    now: datetime,
    current_user_id: Optional[str] = None,
) -> Student:
    student = student_rules.new_student(data, now, current_user_id=current_user_id)
    s.add(StudentRow.from_record(student))
    s.flush()
    logger.info("Added student", extra={"ctx_student_id": student.id, "ctx_package": student.package.value})
    return student


def add_students(s: Session, new_students: list[Student]) -> int:
    for student in new_students:
        s.add(StudentRow.from_record(student))
    s.flush()
    return len(new_students)


def save_student(s: Session, student: Student) -> Student:
    _row(s, student.id).apply(student)
    s.flush()
    return student


def remove_student(s: Session, student_id: str) -> None:
    s.delete(_row(s, student_id))
    s.flush()


def mark_contacted(s: Session, student_id: str, now: datetime) -> Student:
    return save_student(s, student_rules.mark_contacted(get_student(s, student_id), now))


def record_outcome(s: Session, data: ContactOutcomeInput, now: datetime) -> Student:
    student = renewals.record_contact_outcome(get_student(s, data.student_id), data.outcome, now, data.notes)
    return save_student(s, student)


def renew_student(s: Session, data: RenewalInput, now: datetime) -> Student:
    student = renewals.apply_renewal(get_student(s, data.student_id), now, data.renewal_date)
    return save_student(s, replace(student, call_booked=data.call_booked))


def update_lessons(s: Session, data: LessonProgressInput) -> Student:
    student = replace(
        get_student(s, data.student_id),
        lessons_done=data.lessons_done,
        total_lessons=data.total_lessons,
    )
    return save_student(s, student)


@dataclass(frozen=True)
class RenewalOverview:
    queues: renewals.RenewalQueues
    summary: DashboardSummary


def load_renewal_overview(s: Session, now: datetime, settings: Optional[Settings] = None) -> RenewalOverview:
    """Renewal queues and dashboard counters, windowed by the configured day bounds."""
    settings = settings or get_settings()
    students = load_snapshot(s).students
    return RenewalOverview(
        queues=renewals.renewal_queues(
            students,
            now,
            expiring_soon_days=settings.expiring_soon_days,
            window_days=settings.renewal_window_days,
        ),
        summary=dashboard_summary(
            students,
            now,
            expiring_soon_days=settings.expiring_soon_days,
            window_days=settings.renewal_window_days,
        ),
    )


def run_expiration_sweep(s: Session, now: datetime, batch_size: int = 50) -> list[str]:
    """Flip lapsed ACTIVE students to EXPIRED. Returns the ids that changed."""
    snapshot = load_snapshot(s)
    lapsed = students_to_expire(snapshot.students, now)
    expired_ids: list[str] = []
    for index, student in enumerate(lapsed, start=1):
        _row(s, student.id).status = StudentStatus.EXPIRED.value
        expired_ids.append(student.id)
        if index % batch_size == 0:
            s.flush()
    s.flush()
    logger.info("Expiration sweep done", extra={"ctx_checked": len(snapshot.students), "ctx_expired": len(expired_ids)})
    return expired_ids


def run_lesson_total_fix(s: Session) -> list[LessonTotalFix]:
    """Force every student's lesson total back to the package default."""
    fixes = plan_lesson_total_fix(load_snapshot(s).students)
    for fix in fixes:
        _row(s, fix.student_id).total_lessons = fix.expected_total
    s.flush()
    logger.info("Lesson totals fixed", extra={"ctx_updated": len(fixes)})
    return fixes
