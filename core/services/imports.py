"""Default-filling for bulk student imports.

Rows arrive already split and mapped to our column names (a list of dicts or
a DataFrame). Bad rows are collected as errors; one dirty row never aborts
the batch.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from pydantic import ValidationError

from core.domain import PackageType, Role, Student, User
from core.services.dates import parse_date_lenient
from core.services.packages import compute_lesson_entitlement
from core.services.students import new_student
from core.validators import StudentCreateInput

logger = logging.getLogger(__name__)

IMPORT_COLUMNS = ["name", "email", "package", "start_date", "coach", "lessons_done", "total_lessons"]
REQUIRED_COLUMNS = ["name"]


@dataclass
class ImportResult:
    students: list[Student] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.students) + len(self.errors)


def _as_rows(data) -> list[dict[str, Any]]:
    if hasattr(data, "notna"):
        data = data.astype(object).where(data.notna(), "")
    if hasattr(data, "to_dict"):
        return data.to_dict("records")
    if isinstance(data, list):
        return data
    return []


def _text(row: dict[str, Any], key: str) -> str:
    value = row.get(key)
    if value is None:
        return ""
    return str(value).strip()


def _int_or(value: str, default: int) -> int:
    try:
        number = float(value)
    except ValueError:
        return default
    # "inf" and "nan" parse as floats but have no integer value
    if not math.isfinite(number):
        return default
    return int(number) or default


def match_coach(coach_name: str, users: list[User]) -> Optional[User]:
    """Case-insensitive substring match on name, else the first coach."""
    needle = coach_name.lower()
    if needle:
        for user in users:
            if needle in user.name.lower():
                return user
    return next((u for u in users if u.role == Role.COACH), None)


def validate_columns(data) -> tuple[bool, list[str]]:
    rows = _as_rows(data)
    cols = set(rows[0].keys()) if rows else set()
    errors = [f"missing: {c}" for c in REQUIRED_COLUMNS if c not in cols]
    return (len(errors) == 0, errors)


def build_import_students(
    data,
    users: list[User],
    now: datetime,
    current_user_id: Optional[str] = None,
) -> ImportResult:
    result = ImportResult()
    for index, row in enumerate(_as_rows(data), start=1):
        name = _text(row, "name")
        if not name:
            result.errors.append(f"row {index}: missing name")
            continue

        package_text = _text(row, "package") or PackageType.SILVER.value
        raw_start = _text(row, "start_date")
        start = parse_date_lenient(raw_start, now=now) if raw_start else now
        start = start.replace(hour=0, minute=0, second=0, microsecond=0)
        coach = match_coach(_text(row, "coach"), users)

        try:
            package = PackageType(package_text)
            payload = StudentCreateInput(
                name=name,
                email=_text(row, "email") or None,
                package=package,
                start_date=start,
                coach_id=coach.id if coach else current_user_id,
                lessons_done=_int_or(_text(row, "lessons_done"), 0),
                total_lessons=_int_or(_text(row, "total_lessons"), compute_lesson_entitlement(package)),
            )
        except (ValueError, ValidationError) as e:
            logger.warning("Skipping import row %d: %s", index, e, extra={"ctx_row": index})
            result.errors.append(f"row {index}: {e}")
            continue

        result.students.append(new_student(payload, now, current_user_id=current_user_id))

    logger.info(
        "Import built %d students, %d rejected",
        len(result.students),
        len(result.errors),
        extra={"ctx_imported": len(result.students), "ctx_rejected": len(result.errors)},
    )
    return result
