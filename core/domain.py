"""Domain records for the coaching back office.

These are plain immutable values: the store loads them, the services in
``core.services`` derive flags and aggregates from them, and nothing in this
module knows about tables or sessions.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class StudentStatus(str, Enum):
    ACTIVE = "ACTIVE"
    EXPIRED = "EXPIRED"
    NOT_RENEWED = "NOT_RENEWED"


class PackageType(str, Enum):
    """Subscription tiers, cheapest first."""

    SILVER = "Silver"
    GOLD = "Gold"
    PLATINUM = "Platinum"
    ELITE = "Elite"
    GRANDMASTER = "Grandmaster"


class Role(str, Enum):
    OWNER = "OWNER"
    COACH = "COACH"
    RENEWALS = "RENEWALS"
    SUPPORT = "SUPPORT"


class ContactOutcome(str, Enum):
    """Result of the last renewal call."""

    POSITIVE = "POSITIVE"
    NEGATIVE_PRICE = "NEGATIVE_PRICE"
    NEGATIVE_NOT_INTERESTED = "NEGATIVE_NOT_INTERESTED"
    NEGATIVE_OTHER = "NEGATIVE_OTHER"
    NEUTRAL_BUSY = "NEUTRAL_BUSY"
    NO_ANSWER = "NO_ANSWER"

    @property
    def label(self) -> str:
        return OUTCOME_LABELS[self]


OUTCOME_LABELS: dict[ContactOutcome, str] = {
    ContactOutcome.POSITIVE: "Renewed",
    ContactOutcome.NEGATIVE_PRICE: "Too expensive",
    ContactOutcome.NEGATIVE_NOT_INTERESTED: "Not interested",
    ContactOutcome.NEGATIVE_OTHER: "Other",
    ContactOutcome.NEUTRAL_BUSY: "Call back",
    ContactOutcome.NO_ANSWER: "No answer",
}


@dataclass(frozen=True)
class User:
    id: str
    name: str
    role: Role


@dataclass(frozen=True)
class Student:
    """A student's subscription snapshot."""

    id: str
    name: str
    package: PackageType
    start_date: datetime
    end_date: Optional[datetime]
    coach_id: Optional[str]
    lessons_done: int
    total_lessons: int
    last_contact_date: Optional[datetime]
    status: StudentStatus
    is_renewed: bool = False
    email: Optional[str] = None
    notes: str = ""
    coach_comment: Optional[str] = None
    difficulty_tags: tuple[str, ...] = ()
    renewal_date: Optional[datetime] = None
    call_booked: bool = False
    original_coach_id: Optional[str] = None
    contact_outcome: Optional[ContactOutcome] = None
    contact_outcome_date: Optional[datetime] = None
    contact_notes: Optional[str] = None

    @property
    def lessons_remaining(self) -> int:
        return max(0, self.total_lessons - self.lessons_done)

    @property
    def has_difficulties(self) -> bool:
        return bool(self.difficulty_tags)


@dataclass(frozen=True)
class CoachStats:
    """Per-coach rollup, recomputed on every call and never stored."""

    coach_id: str
    coach_name: str
    active_students: int
    retention_rate: int
    urgent_count: int
    total_students: int
    renewed_count: int
