"""Validation module for verifying schedule correctness."""

from stagerota.validation.issues import (
    IssueCategory,
    IssueLevel,
    IssueSeverity,
    ValidationIssue,
    ValidationResult,
)
from stagerota.validation.report import (
    ComprehensiveReport,
    ConsecutiveShowAnalysis,
    LoadBalancingStats,
    LoadStatus,
    RoleCompleteness,
    RunSeverity,
    SpecialDayHandling,
    calculate_overall_score,
)
from stagerota.validation.validator import ScheduleValidator

__all__ = [
    "ScheduleValidator",
    # Issues
    "IssueCategory",
    "IssueLevel",
    "IssueSeverity",
    "ValidationIssue",
    "ValidationResult",
    # Comprehensive report
    "ComprehensiveReport",
    "ConsecutiveShowAnalysis",
    "LoadBalancingStats",
    "LoadStatus",
    "RoleCompleteness",
    "RunSeverity",
    "SpecialDayHandling",
    "calculate_overall_score",
]
