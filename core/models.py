from __future__ import annotations

import datetime as dt
from typing import Any

from sqlalchemy import JSON, Boolean, CheckConstraint, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from core.domain import ContactOutcome, PackageType, Role, Student, StudentStatus, User


class Base(DeclarativeBase):
    pass


class UserRow(Base):
    __tablename__ = "users"
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(120))
    role: Mapped[str] = mapped_column(String(20), index=True)
    avatar: Mapped[str | None] = mapped_column(String(255))

    def to_record(self) -> User:
        return User(id=self.id, name=self.name, role=Role(self.role))


class StudentRow(Base):
    __tablename__ = "students"
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(200))
    email: Mapped[str | None] = mapped_column(String(200))
    package: Mapped[str] = mapped_column(String(20))
    start_date: Mapped[dt.datetime] = mapped_column(DateTime)
    end_date: Mapped[dt.datetime | None] = mapped_column(DateTime)
    coach_id: Mapped[str | None] = mapped_column(ForeignKey("users.id"), index=True)
    original_coach_id: Mapped[str | None] = mapped_column(ForeignKey("users.id"))
    lessons_done: Mapped[int] = mapped_column(Integer, default=0)
    total_lessons: Mapped[int] = mapped_column(Integer, default=0)
    last_contact_date: Mapped[dt.datetime | None] = mapped_column(DateTime)
    status: Mapped[str] = mapped_column(String(16), default=StudentStatus.ACTIVE.value, index=True)
    is_renewed: Mapped[bool] = mapped_column(Boolean, default=False)
    renewal_date: Mapped[dt.datetime | None] = mapped_column(DateTime)
    call_booked: Mapped[bool] = mapped_column(Boolean, default=False)
    coach_comment: Mapped[str | None] = mapped_column(Text)
    notes: Mapped[str] = mapped_column(Text, default="")
    difficulty_tags: Mapped[list[str]] = mapped_column(JSON, default=list)
    contact_outcome: Mapped[str | None] = mapped_column(String(32))
    contact_outcome_date: Mapped[dt.datetime | None] = mapped_column(DateTime)
    contact_notes: Mapped[str | None] = mapped_column(Text)
    __table_args__ = (
        CheckConstraint("lessons_done >= 0"),
        CheckConstraint("status in ('ACTIVE', 'EXPIRED', 'NOT_RENEWED')"),
    )

    def to_record(self) -> Student:
        return Student(
            id=self.id,
            name=self.name,
            email=self.email,
            package=PackageType(self.package),
            start_date=self.start_date,
            end_date=self.end_date,
            coach_id=self.coach_id,
            original_coach_id=self.original_coach_id,
            lessons_done=self.lessons_done or 0,
            total_lessons=self.total_lessons or 0,
            last_contact_date=self.last_contact_date,
            status=StudentStatus(self.status),
            is_renewed=bool(self.is_renewed),
            renewal_date=self.renewal_date,
            call_booked=bool(self.call_booked),
            coach_comment=self.coach_comment,
            notes=self.notes or "",
            difficulty_tags=tuple(self.difficulty_tags or ()),
            contact_outcome=ContactOutcome(self.contact_outcome) if self.contact_outcome else None,
            contact_outcome_date=self.contact_outcome_date,
            contact_notes=self.contact_notes,
        )

    @classmethod
    def from_record(cls, student: Student) -> "StudentRow":
        row = cls(id=student.id)
        row.apply(student)
        return row

    def apply(self, student: Student) -> None:
        """Copy every mutable field of ``student`` onto this row."""
        values: dict[str, Any] = {
            "name": student.name,
            "email": student.email,
            "package": PackageType(student.package).value,
            "start_date": student.start_date,
            "end_date": student.end_date,
            "coach_id": student.coach_id,
            "original_coach_id": student.original_coach_id,
            "lessons_done": student.lessons_done,
            "total_lessons": student.total_lessons,
            "last_contact_date": student.last_contact_date,
            "status": StudentStatus(student.status).value,
            "is_renewed": student.is_renewed,
            "renewal_date": student.renewal_date,
            "call_booked": student.call_booked,
            "coach_comment": student.coach_comment,
            "notes": student.notes,
            "difficulty_tags": list(student.difficulty_tags),
            "contact_outcome": ContactOutcome(student.contact_outcome).value if student.contact_outcome else None,
            "contact_outcome_date": student.contact_outcome_date,
            "contact_notes": student.contact_notes,
        }
        for key, value in values.items():
            setattr(self, key, value)
