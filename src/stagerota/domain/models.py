"""Domain models for the cast scheduling system.

This module contains the core data structures shared by the generator and
the validator: roles, cast members, shows, assignments and generation
results. Every model can be converted to and from the JSON shape used by
the schedule files (``showId``, ``eligibleRoles``, ``callTime`` ...).
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import Optional, Union

OFF = "OFF"
TBC = "TBC"


class Role(Enum):
    """The eight on-stage roles of a performance.

    Declaration order is the canonical role order used for output.
    """

    SARGE = "Sarge"
    POTATO = "Potato"
    MOZZIE = "Mozzie"
    RINGO = "Ringo"
    PARTICLE = "Particle"
    BIN = "Bin"
    CORNISH = "Cornish"
    WHO = "Who"

    @classmethod
    def parse(cls, value: str) -> "Role":
        """Parse a role label, ignoring case."""
        for role in cls:
            if role.value.lower() == str(value).strip().lower():
                return role
        raise ValueError(f"Unknown role: {value!r}")


ROLE_COUNT = len(Role)


class ShowStatus(Enum):
    """Kind of calendar entry in a schedule week."""

    PERFORMANCE = "show"
    TRAVEL = "travel"
    DAY_OFF = "dayoff"


@dataclass(frozen=True)
class CastMember:
    """A performer and the roles they are trained for.

    Attributes:
        name: Unique performer name, normalized to upper case.
        eligible_roles: Roles the performer can be assigned to.
    """

    name: str
    eligible_roles: frozenset[Role] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "name", self.name.strip().upper())
        object.__setattr__(self, "eligible_roles", frozenset(self.eligible_roles))

    def can_play(self, role: Role) -> bool:
        """Check if the performer is eligible for a role."""
        return role in self.eligible_roles

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "eligibleRoles": [r.value for r in Role if r in self.eligible_roles],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CastMember":
        try:
            name = data["name"]
            roles = data.get("eligibleRoles", [])
        except (KeyError, TypeError, AttributeError) as exc:
            raise ValueError(f"Invalid cast member entry: {data!r}") from exc
        return cls(name=name, eligible_roles=frozenset(Role.parse(r) for r in roles))


@dataclass(frozen=True)
class Show:
    """A calendar entry in the schedule week.

    Only entries with ``status == ShowStatus.PERFORMANCE`` take part in
    assignment. Travel days and days off are carried as context.

    Attributes:
        id: Unique show identifier.
        date: Calendar date of the entry.
        time: Curtain-up time.
        call_time: Time the company is called, None when still to be confirmed.
        status: Kind of entry.
    """

    id: str
    date: date
    time: time
    call_time: Optional[time] = None
    status: ShowStatus = ShowStatus.PERFORMANCE

    @property
    def is_performance(self) -> bool:
        return self.status == ShowStatus.PERFORMANCE

    @property
    def starts_at(self) -> datetime:
        """Date and time the show starts."""
        return datetime.combine(self.date, self.time)

    @property
    def label(self) -> str:
        """Short human-readable label, e.g. ``Sat Jan 6 4:00 PM``."""
        hour = self.time.hour % 12 or 12
        suffix = "AM" if self.time.hour < 12 else "PM"
        return (
            f"{self.date.strftime('%a %b')} {self.date.day} "
            f"{hour}:{self.time.minute:02d} {suffix}"
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "time": self.time.strftime("%H:%M"),
            "callTime": self.call_time.strftime("%H:%M") if self.call_time else TBC,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Show":
        try:
            call_time = data.get("callTime") or TBC
            return cls(
                id=str(data["id"]),
                date=date.fromisoformat(data["date"]),
                time=time.fromisoformat(data["time"]),
                call_time=None if call_time == TBC else time.fromisoformat(call_time),
                status=ShowStatus(data.get("status", ShowStatus.PERFORMANCE.value)),
            )
        except (KeyError, TypeError, AttributeError) as exc:
            raise ValueError(f"Invalid show entry: {data!r}") from exc


@dataclass(frozen=True)
class Assignment:
    """A performer's place in one show: a role, or OFF.

    Attributes:
        show_id: ID of the show.
        role: Assigned role, or ``OFF`` when not performing.
        performer: Performer name.
        is_red_day: For OFF rows, True if the performer cannot be called in.
    """

    show_id: str
    role: Union[Role, str]
    performer: str
    is_red_day: bool = False

    @property
    def is_off(self) -> bool:
        return self.role == OFF

    @property
    def role_label(self) -> str:
        return OFF if self.is_off else self.role.value

    def to_dict(self) -> dict:
        data = {
            "showId": self.show_id,
            "role": self.role_label,
            "performer": self.performer,
        }
        if self.is_off:
            data["isRedDay"] = self.is_red_day
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Assignment":
        try:
            raw_role = data["role"]
            role = OFF if str(raw_role).upper() == OFF else Role.parse(raw_role)
            return cls(
                show_id=str(data["showId"]),
                role=role,
                performer=str(data["performer"]).strip().upper(),
                is_red_day=bool(data.get("isRedDay", False)),
            )
        except (KeyError, TypeError, AttributeError) as exc:
            raise ValueError(f"Invalid assignment entry: {data!r}") from exc


@dataclass
class GenerationResult:
    """Outcome of a generation run.

    Attributes:
        success: True only if every role of every performance was filled.
        assignments: Role assignments followed by OFF rows.
        errors: Unfilled-slot messages or a top-level failure message.
        attempts: Number of full randomized attempts made.
        partial: True if the result came from the best-effort partial pass.
    """

    success: bool
    assignments: list[Assignment] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    attempts: int = 0
    partial: bool = False

    @property
    def role_assignments(self) -> list[Assignment]:
        return [a for a in self.assignments if not a.is_off]

    def to_dict(self) -> dict:
        data = {
            "success": self.success,
            "assignments": [a.to_dict() for a in self.assignments],
        }
        if self.errors:
            data["errors"] = list(self.errors)
        return data


def load_shows(entries: list[dict]) -> list[Show]:
    """Build shows from their JSON form."""
    return [Show.from_dict(entry) for entry in entries]


def load_cast(entries: list[dict]) -> list[CastMember]:
    """Build cast members from their JSON form."""
    return [CastMember.from_dict(entry) for entry in entries]


def load_assignments(entries: list[dict]) -> list[Assignment]:
    """Build assignments from their JSON form."""
    return [Assignment.from_dict(entry) for entry in entries]
