"""Package policy: subscription length and lesson entitlement per tier."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Union

from core.domain import PackageType, Student
from core.services.dates import add_days, add_months

PACKAGE_DURATION_DAYS: dict[PackageType, int] = {
    PackageType.SILVER: 30,
    PackageType.GOLD: 60,
    PackageType.PLATINUM: 90,
    PackageType.ELITE: 180,
}

# Grandmaster runs for calendar months, not a fixed day count.
PACKAGE_DURATION_MONTHS: dict[PackageType, int] = {
    PackageType.GRANDMASTER: 12,
}

PACKAGE_LESSONS: dict[PackageType, int] = {
    PackageType.SILVER: 8,
    PackageType.GOLD: 16,
    PackageType.PLATINUM: 24,
    PackageType.ELITE: 48,
    PackageType.GRANDMASTER: 56,
}

DEFAULT_LESSONS = 20


class UnknownPackageError(ValueError):
    pass


@dataclass(frozen=True)
class LessonTotalFix:
    student_id: str
    package: PackageType
    current_total: int
    expected_total: int


def as_package(value: Union[PackageType, str]) -> PackageType:
    try:
        return PackageType(value)
    except ValueError:
        raise UnknownPackageError(f"unknown package: {value!r}") from None


def compute_end_date(start: datetime, package: Union[PackageType, str]) -> datetime:
    """Subscription end for a package starting at ``start``."""
    tier = as_package(package)
    if tier in PACKAGE_DURATION_MONTHS:
        return add_months(start, PACKAGE_DURATION_MONTHS[tier])
    return add_days(start, PACKAGE_DURATION_DAYS[tier])


def compute_lesson_entitlement(package: Union[PackageType, str]) -> int:
    try:
        tier = PackageType(package)
    except ValueError:
        return DEFAULT_LESSONS
    return PACKAGE_LESSONS.get(tier, DEFAULT_LESSONS)


def plan_lesson_total_fix(students: Iterable[Student]) -> list[LessonTotalFix]:
    """List every student whose lesson total differs from their package default.

    Non-standard totals are not preserved: the fix forces everyone back to the
    table value.
    """
    fixes: list[LessonTotalFix] = []
    for student in students:
        expected = compute_lesson_entitlement(student.package)
        if student.total_lessons != expected:
            fixes.append(
                LessonTotalFix(
                    student_id=student.id,
                    package=student.package,
                    current_total=student.total_lessons,
                    expected_total=expected,
                )
            )
    return fixes
