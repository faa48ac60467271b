"""Student lifecycle helpers: creation defaults, contact stamps and tags."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional
from uuid import uuid4

from core.domain import Student, StudentStatus
from core.services.packages import compute_end_date, compute_lesson_entitlement
from core.validators import StudentCreateInput

DIFFICULTY_TAGS: tuple[str, ...] = (
    "Emotional",
    "Operational management",
    "Overtrading",
    "Journaling",
    "Takes few trades",
    "Little time",
    "Low commitment",
    "No trades",
    "Needs concepts repeated",
    "Rushing",
    "Very good",
    "Disappeared",
    "Wants to isolate",
)


def new_student(
    data: StudentCreateInput,
    now: datetime,
    *,
    current_user_id: Optional[str] = None,
    student_id: Optional[str] = None,
) -> Student:
    """Build a freshly enrolled student.

    End date and lesson total come from the package unless the input supplies
    them. The coach falls back to the original coach, then the acting user.
    """
    start = data.start_date
    coach_id = data.coach_id or data.original_coach_id or current_user_id
    return Student(
        id=student_id or str(uuid4()),
        name=data.name,
        email=data.email,
        package=data.package,
        start_date=start,
        end_date=data.end_date or compute_end_date(start, data.package),
        coach_id=coach_id,
        original_coach_id=data.original_coach_id or coach_id,
        lessons_done=data.lessons_done,
        total_lessons=data.total_lessons or compute_lesson_entitlement(data.package),
        last_contact_date=now,
        status=StudentStatus.ACTIVE,
    )


def mark_contacted(student: Student, now: datetime) -> Student:
    return replace(student, last_contact_date=now)


def add_comment(student: Student, comment: str) -> Student:
    return replace(student, coach_comment=comment)


def toggle_tag(student: Student, tag: str) -> Student:
    if tag not in DIFFICULTY_TAGS:
        raise ValueError(f"unknown difficulty tag: {tag!r}")
    if tag in student.difficulty_tags:
        tags = tuple(t for t in student.difficulty_tags if t != tag)
    else:
        tags = student.difficulty_tags + (tag,)
    return replace(student, difficulty_tags=tags)


def reassign_coach(student: Student, coach_id: str) -> Student:
    """Move a student to another coach, remembering who had them first."""
    return replace(
        student,
        coach_id=coach_id,
        original_coach_id=student.original_coach_id or student.coach_id,
    )
