"""Comprehensive validation report and schedule scoring."""

import math
from dataclasses import dataclass, field
from enum import Enum

from stagerota.domain.models import Role
from stagerota.validation.issues import IssueLevel, IssueSeverity, ValidationIssue

SEVERITY_PENALTIES = {
    IssueSeverity.CRITICAL: 20,
    IssueSeverity.HIGH: 10,
    IssueSeverity.MEDIUM: 5,
    IssueSeverity.LOW: 2,
}
COMPLETE_SCHEDULE_BONUS = 10


class LoadStatus(Enum):
    """Where a performer's show count falls against the expected range."""

    UNDERUTILIZED = "underutilized"
    OPTIMAL = "optimal"
    OVERWORKED = "overworked"
    CRITICAL = "critical"


class RunSeverity(Enum):
    """Rating of a consecutive-show run."""

    OK = "ok"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass
class LoadBalancingStats:
    """Show count of one performer against the company average.

    Attributes:
        performer: Performer name.
        show_count: Distinct performances the performer appears in.
        expected_min: Lower end of the expected range (70% of average).
        expected_max: Upper end of the expected range (130% of average).
        status: Four-tier rating of the show count.
        variance: Absolute distance from the average.
    """

    performer: str
    show_count: int
    expected_min: int
    expected_max: int
    status: LoadStatus
    variance: float

    def to_dict(self) -> dict:
        return {
            "performer": self.performer,
            "showCount": self.show_count,
            "expectedRange": {"min": self.expected_min, "max": self.expected_max},
            "status": self.status.value,
            "variance": round(self.variance, 2),
        }


@dataclass
class SequenceAnalysis:
    start_label: str
    end_label: str
    count: int
    severity: RunSeverity

    def to_dict(self) -> dict:
        return {
            "startDate": self.start_label,
            "endDate": self.end_label,
            "count": self.count,
            "severity": self.severity.value,
        }


@dataclass
class ConsecutiveShowAnalysis:
    """Consecutive-run profile of one performer."""

    performer: str
    max_consecutive: int
    sequences: list[SequenceAnalysis] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "performer": self.performer,
            "maxConsecutive": self.max_consecutive,
            "sequences": [s.to_dict() for s in self.sequences],
        }


@dataclass
class RoleCompleteness:
    """How many performances have a given role filled."""

    role: Role
    filled_shows: int
    total_shows: int
    completion_percentage: int
    missing_shows: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "role": self.role.value,
            "filledShows": self.filled_shows,
            "totalShows": self.total_shows,
            "completionPercentage": self.completion_percentage,
            "missingShows": list(self.missing_shows),
        }


@dataclass
class SpecialDayHandling:
    """Travel days and days off in the schedule week."""

    travel_days: int = 0
    day_offs: int = 0
    total_special_days: int = 0
    impact_on_scheduling: str = "low"
    invalid_assignments: int = 0

    def to_dict(self) -> dict:
        return {
            "travelDays": self.travel_days,
            "dayOffs": self.day_offs,
            "totalSpecialDays": self.total_special_days,
            "impactOnScheduling": self.impact_on_scheduling,
            "invalidAssignments": self.invalid_assignments,
        }


@dataclass
class ComprehensiveReport:
    """Full analysis of a schedule.

    ``is_valid`` requires every role of every performance to be filled and
    no critical error; ``overall_score`` runs from 0 (unusable) to 100.
    """

    is_valid: bool
    overall_score: int
    completion_percentage: int
    issues: list[ValidationIssue] = field(default_factory=list)
    load_balancing: list[LoadBalancingStats] = field(default_factory=list)
    consecutive_analysis: list[ConsecutiveShowAnalysis] = field(default_factory=list)
    role_completeness: list[RoleCompleteness] = field(default_factory=list)
    special_days: SpecialDayHandling = field(default_factory=SpecialDayHandling)
    recommendations: list[str] = field(default_factory=list)

    @property
    def critical_errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.is_critical]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.level == IssueLevel.WARNING]

    def to_dict(self) -> dict:
        return {
            "isValid": self.is_valid,
            "overallScore": self.overall_score,
            "summary": {
                "totalIssues": len(self.issues),
                "criticalErrors": len(self.critical_errors),
                "warnings": len(self.warnings),
                "completionPercentage": self.completion_percentage,
            },
            "issues": [i.to_dict() for i in self.issues],
            "loadBalancing": [s.to_dict() for s in self.load_balancing],
            "consecutiveAnalysis": [a.to_dict() for a in self.consecutive_analysis],
            "roleCompleteness": [r.to_dict() for r in self.role_completeness],
            "specialDayHandling": self.special_days.to_dict(),
            "recommendations": list(self.recommendations),
        }


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def calculate_overall_score(
    issues: list[ValidationIssue],
    completion_percentage: int,
) -> int:
    """Score a schedule from 0 to 100.

    Start at 100, subtract a fixed penalty per issue by severity, scale by
    slot completion, then add a bonus for a complete schedule without
    errors.

    Args:
        issues: Every issue found in the schedule.
        completion_percentage: Filled role slots as a percentage.

    Returns:
        Score clamped to [0, 100].
    """
    score = 100.0
    for issue in issues:
        score -= SEVERITY_PENALTIES[issue.severity]

    score *= completion_percentage / 100

    has_errors = any(i.level == IssueLevel.ERROR for i in issues)
    if completion_percentage == 100 and not has_errors:
        score = min(100.0, score + COMPLETE_SCHEDULE_BONUS)

    return max(0, min(100, round_half_up(score)))
