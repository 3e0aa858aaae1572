"""Issue and result types produced by schedule validation."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from stagerota.domain.models import Role


class IssueLevel(Enum):
    """How an issue affects schedule validity."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class IssueSeverity(Enum):
    """How much an issue costs in the overall score."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class IssueCategory(Enum):
    """Which rule an issue comes from."""

    ROLE_ELIGIBILITY = "role_eligibility"
    CONFLICTS = "conflicts"
    CONSECUTIVE_SHOWS = "consecutive_shows"
    LOAD_BALANCING = "load_balancing"
    COMPLETENESS = "completeness"
    SPECIAL_DAYS = "special_days"
    SHOW_REFERENCE = "show_reference"


@dataclass
class ValidationIssue:
    """A single finding about a schedule.

    Attributes:
        level: Error, warning or informational note.
        severity: Weight of the issue in scoring.
        category: Rule that produced the issue.
        message: What is wrong, naming the offending performer or show.
        performer: Performer involved, if any.
        show_id: Show involved, if any.
        role: Role involved, if any.
        suggestion: A concrete fix, if one could be found.
    """

    level: IssueLevel
    severity: IssueSeverity
    category: IssueCategory
    message: str
    performer: Optional[str] = None
    show_id: Optional[str] = None
    role: Optional[Role] = None
    suggestion: Optional[str] = None

    @property
    def is_critical(self) -> bool:
        return self.level == IssueLevel.ERROR and self.severity == IssueSeverity.CRITICAL

    def __str__(self) -> str:
        if self.suggestion:
            return f"{self.message} - {self.suggestion}"
        return self.message

    def to_dict(self) -> dict:
        data = {
            "type": self.level.value,
            "severity": self.severity.value,
            "category": self.category.value,
            "message": self.message,
        }
        if self.performer:
            data["performer"] = self.performer
        if self.show_id:
            data["showId"] = self.show_id
        if self.role:
            data["role"] = self.role.value
        if self.suggestion:
            data["suggestion"] = self.suggestion
        return data


@dataclass
class ValidationResult:
    """Result of validating a schedule."""

    is_valid: bool = True
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)

    def add_issue(self, issue: ValidationIssue) -> None:
        """File an issue as an error (marking invalid) or a warning."""
        if issue.level == IssueLevel.ERROR:
            self.errors.append(issue)
            self.is_valid = False
        else:
            self.warnings.append(issue)

    @property
    def critical_errors(self) -> list[ValidationIssue]:
        return [e for e in self.errors if e.is_critical]

    @property
    def error_messages(self) -> list[str]:
        return [str(e) for e in self.errors]

    @property
    def warning_messages(self) -> list[str]:
        return [str(w) for w in self.warnings]

    def to_dict(self) -> dict:
        return {
            "isValid": self.is_valid,
            "errors": self.error_messages,
            "warnings": self.warning_messages,
        }
