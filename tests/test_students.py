from __future__ import annotations

from datetime import datetime

import pytest

from core.domain import PackageType, StudentStatus
from core.services.students import DIFFICULTY_TAGS, mark_contacted, new_student, reassign_coach, toggle_tag
from core.validators import StudentCreateInput


def test_new_student_derives_package_defaults(now):
    data = StudentCreateInput(name="Mario Rossi", package=PackageType.PLATINUM, start_date=datetime(2024, 3, 1), coach_id="coach-1")
    s = new_student(data, now)
    assert s.total_lessons == 24
    assert s.end_date == datetime(2024, 5, 30)
    assert s.status == StudentStatus.ACTIVE
    assert s.last_contact_date == now
    assert s.original_coach_id == "coach-1"
    assert s.lessons_done == 0


def test_new_student_keeps_explicit_values(now):
    data = StudentCreateInput(
        name="Mario Rossi",
        package=PackageType.SILVER,
        start_date=datetime(2024, 3, 1),
        end_date=datetime(2024, 6, 1),
        total_lessons=12,
        coach_id="coach-1",
    )
    s = new_student(data, now)
    assert s.end_date == datetime(2024, 6, 1)
    assert s.total_lessons == 12


def test_new_student_zero_total_falls_back_to_package(now):
    data = StudentCreateInput(name="A", package=PackageType.GOLD, start_date=datetime(2024, 3, 1), total_lessons=0)
    assert new_student(data, now).total_lessons == 16


def test_new_student_coach_fallbacks(now):
    data = StudentCreateInput(name="A", package=PackageType.GOLD, start_date=datetime(2024, 3, 1))
    s = new_student(data, now, current_user_id="owner-1")
    assert s.coach_id == "owner-1"
    assert s.original_coach_id == "owner-1"

    data = StudentCreateInput(name="A", package=PackageType.GOLD, start_date=datetime(2024, 3, 1), original_coach_id="coach-9")
    assert new_student(data, now, current_user_id="owner-1").coach_id == "coach-9"


def test_grandmaster_enrollment_end_to_end(now):
    data = StudentCreateInput(name="Luca", package="Grandmaster", start_date="2024-01-31", coach_id="coach-1")
    s = new_student(data, now, student_id="student-42")
    assert s.id == "student-42"
    assert s.total_lessons == 56
    assert s.end_date == datetime(2025, 1, 31)


def test_mark_contacted(make_student, now):
    s = make_student(last_contact_date=datetime(2024, 1, 1))
    assert mark_contacted(s, now).last_contact_date == now


def test_toggle_tag_adds_and_removes(make_student):
    tag = DIFFICULTY_TAGS[0]
    s = toggle_tag(make_student(), tag)
    assert s.difficulty_tags == (tag,)
    assert s.has_difficulties
    assert toggle_tag(s, tag).difficulty_tags == ()


def test_toggle_unknown_tag(make_student):
    with pytest.raises(ValueError, match="unknown difficulty tag"):
        toggle_tag(make_student(), "Made up")


def test_reassign_coach_remembers_first_coach(make_student):
    s = reassign_coach(make_student(coach_id="coach-1"), "coach-2")
    assert s.coach_id == "coach-2"
    assert s.original_coach_id == "coach-1"
    assert reassign_coach(s, "coach-3").original_coach_id == "coach-1"
