from __future__ import annotations

from datetime import timedelta

from core.domain import ContactOutcome, StudentStatus
from core.services.renewals import (
    apply_renewal,
    contact_outcome_report,
    days_until_end,
    in_renewal_window,
    is_expiring_soon,
    record_contact_outcome,
    renewal_queues,
)


def test_days_until_end(make_student, now):
    assert days_until_end(make_student(end_date=now + timedelta(days=5, hours=3)), now) == 5
    assert days_until_end(make_student(end_date=None), now) is None


def test_expiring_soon_bounds(make_student, now):
    assert is_expiring_soon(make_student(end_date=now + timedelta(days=7)), now)
    assert is_expiring_soon(make_student(end_date=now + timedelta(hours=3)), now)
    assert not is_expiring_soon(make_student(end_date=now + timedelta(days=8)), now)
    assert not is_expiring_soon(make_student(end_date=now - timedelta(days=2)), now)
    assert not is_expiring_soon(make_student(end_date=None), now)


def test_renewal_window(make_student, now):
    assert in_renewal_window(make_student(end_date=now + timedelta(days=30)), now)
    assert not in_renewal_window(make_student(end_date=now + timedelta(days=31)), now)


def test_renewal_queues_split(make_student, now):
    urgent = make_student(end_date=now + timedelta(days=3))
    upcoming = make_student(end_date=now + timedelta(days=20), difficulty_tags=("Little time",))
    later = make_student(end_date=now + timedelta(days=60))
    gone = make_student(end_date=now - timedelta(days=3))
    queues = renewal_queues([urgent, upcoming, later, gone], now)
    assert queues.window == [urgent, upcoming]
    assert queues.urgent == [urgent]
    assert queues.upcoming == [upcoming]
    assert queues.with_difficulties == [upcoming]


def test_renewal_queues_custom_windows(make_student, now):
    s = make_student(end_date=now + timedelta(days=10))
    queues = renewal_queues([s], now, expiring_soon_days=14, window_days=14)
    assert queues.urgent == [s]


# ── apply_renewal ────────────────────────────────────────────────────────

def test_renewal_date_becomes_end_date_and_reactivates(make_student, now):
    s = make_student(status=StudentStatus.EXPIRED, end_date=now - timedelta(days=3))
    renewed = apply_renewal(s, now, renewal_date=now + timedelta(days=60))
    assert renewed.is_renewed is True
    assert renewed.end_date == now + timedelta(days=60)
    assert renewed.renewal_date == now + timedelta(days=60)
    assert renewed.status == StudentStatus.ACTIVE


def test_renewal_without_date_keeps_end(make_student, now):
    s = make_student(status=StudentStatus.NOT_RENEWED, end_date=now - timedelta(days=3))
    renewed = apply_renewal(s, now)
    assert renewed.end_date == s.end_date
    assert renewed.status == StudentStatus.NOT_RENEWED
    assert renewed.is_renewed is True


def test_renewal_leaves_original_untouched(make_student, now):
    s = make_student()
    apply_renewal(s, now, renewal_date=now + timedelta(days=10))
    assert s.is_renewed is False


# ── Contact outcomes ─────────────────────────────────────────────────────

def test_record_contact_outcome(make_student, now):
    s = record_contact_outcome(make_student(), ContactOutcome.NEUTRAL_BUSY, now, "call back monday")
    assert s.contact_outcome == ContactOutcome.NEUTRAL_BUSY
    assert s.contact_outcome_date == now
    assert s.contact_notes == "call back monday"


def test_outcome_report_counts_and_percentages(make_student):
    students = [
        make_student(contact_outcome=ContactOutcome.POSITIVE),
        make_student(contact_outcome=ContactOutcome.POSITIVE),
        make_student(contact_outcome=ContactOutcome.NO_ANSWER),
        make_student(),
    ]
    rows = contact_outcome_report(students)
    assert len(rows) == len(ContactOutcome)
    assert rows[0].outcome == ContactOutcome.POSITIVE
    assert rows[0].count == 2
    assert rows[0].percentage == 67
    assert rows[1].outcome == ContactOutcome.NO_ANSWER
    assert rows[1].percentage == 33
    assert sum(r.count for r in rows) == 3


def test_outcome_report_without_outcomes(make_student):
    rows = contact_outcome_report([make_student()])
    assert all(r.count == 0 and r.percentage == 0 for r in rows)
    assert rows[0].label == "Renewed"
