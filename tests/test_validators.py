"""Tests for Pydantic input validation models."""

from __future__ import annotations

from datetime import datetime

import pytest
from pydantic import ValidationError

from core.domain import ContactOutcome, PackageType
from core.validators import ContactOutcomeInput, LessonProgressInput, RenewalInput, StudentCreateInput


# --- StudentCreateInput ---

def test_student_create_valid():
    data = StudentCreateInput(name=" Mario Rossi ", package="Gold", start_date="2024-03-01")
    assert data.name == "Mario Rossi"
    assert data.package == PackageType.GOLD
    assert data.start_date == datetime(2024, 3, 1)
    assert data.lessons_done == 0
    assert data.total_lessons is None


def test_student_create_blank_name():
    with pytest.raises(ValidationError):
        StudentCreateInput(name="   ", package="Gold", start_date="2024-03-01")


def test_student_create_unknown_package():
    with pytest.raises(ValidationError):
        StudentCreateInput(name="A", package="Bronze", start_date="2024-03-01")


def test_student_create_bad_email():
    with pytest.raises(ValidationError):
        StudentCreateInput(name="A", email="not-an-email", package="Gold", start_date="2024-03-01")


def test_student_create_end_before_start():
    with pytest.raises(ValidationError, match="end_date"):
        StudentCreateInput(name="A", package="Gold", start_date="2024-03-01", end_date="2024-02-01")


def test_student_create_negative_lessons():
    with pytest.raises(ValidationError):
        StudentCreateInput(name="A", package="Gold", start_date="2024-03-01", lessons_done=-1)


# --- Renewal / outcome / progress ---

def test_renewal_input_defaults():
    data = RenewalInput(student_id="s1")
    assert data.renewal_date is None
    assert data.call_booked is False


def test_contact_outcome_input():
    data = ContactOutcomeInput(student_id="s1", outcome="NO_ANSWER")
    assert data.outcome == ContactOutcome.NO_ANSWER


def test_contact_outcome_unknown():
    with pytest.raises(ValidationError):
        ContactOutcomeInput(student_id="s1", outcome="MAYBE")


def test_lesson_progress_requires_positive_total():
    with pytest.raises(ValidationError):
        LessonProgressInput(student_id="s1", lessons_done=1, total_lessons=0)
