"""Pydantic validation models for all user-facing data entry points."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from core.domain import ContactOutcome, PackageType


class StudentCreateInput(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    email: Optional[EmailStr] = None
    package: PackageType
    start_date: datetime
    end_date: Optional[datetime] = None
    coach_id: Optional[str] = None
    original_coach_id: Optional[str] = None
    lessons_done: int = Field(default=0, ge=0)
    total_lessons: Optional[int] = Field(default=None, ge=0)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v

    @field_validator("end_date")
    @classmethod
    def end_after_start(cls, v, info):
        start = info.data.get("start_date")
        if v is not None and start is not None and v < start:
            raise ValueError("end_date must be >= start_date")
        return v


class RenewalInput(BaseModel):
    student_id: str = Field(min_length=1)
    renewal_date: Optional[datetime] = None
    call_booked: bool = False


class ContactOutcomeInput(BaseModel):
    student_id: str = Field(min_length=1)
    outcome: ContactOutcome
    notes: str = Field(default="", max_length=1000)


class LessonProgressInput(BaseModel):
    student_id: str = Field(min_length=1)
    lessons_done: int = Field(ge=0)
    total_lessons: int = Field(ge=1)
