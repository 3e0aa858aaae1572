"""Tests for comprehensive schedule analysis and scoring."""

from datetime import date, time, timedelta

import pytest

from stagerota.domain.models import Assignment, CastMember, Role, Show, ShowStatus
from stagerota.domain.roster import DEFAULT_CAST
from stagerota.validation.issues import (
    IssueCategory,
    IssueLevel,
    IssueSeverity,
    ValidationIssue,
)
from stagerota.validation.report import LoadStatus, RunSeverity, calculate_overall_score
from stagerota.validation.validator import ScheduleValidator

LINEUP = {
    Role.SARGE: "PHIL",
    Role.POTATO: "SEAN",
    Role.MOZZIE: "JOE",
    Role.RINGO: "ADAM",
    Role.PARTICLE: "CARY",
    Role.BIN: "MOLLY",
    Role.CORNISH: "JASMINE",
    Role.WHO: "JOSH",
}


def daily_shows(count: int, start: date = date(2024, 1, 1)) -> list[Show]:
    return [
        Show(f"show{i + 1}", start + timedelta(days=i), time(19, 0))
        for i in range(count)
    ]


def full_lineup(show_id: str) -> list[Assignment]:
    return [Assignment(show_id, role, performer) for role, performer in LINEUP.items()]


def issue(level: IssueLevel, severity: IssueSeverity) -> ValidationIssue:
    return ValidationIssue(level, severity, IssueCategory.CONFLICTS, "test issue")


class TestOverallScore:
    """Tests for calculate_overall_score."""

    def test_clean_complete_schedule(self):
        assert calculate_overall_score([], 100) == 100

    def test_error_blocks_bonus(self):
        assert calculate_overall_score([issue(IssueLevel.ERROR, IssueSeverity.HIGH)], 100) == 90

    def test_warnings_keep_bonus(self):
        issues = [issue(IssueLevel.WARNING, IssueSeverity.HIGH)] * 3
        assert calculate_overall_score(issues, 100) == 80

    def test_bonus_capped_at_100(self):
        assert calculate_overall_score([issue(IssueLevel.WARNING, IssueSeverity.LOW)], 100) == 100

    def test_scaled_by_completion(self):
        assert calculate_overall_score([], 50) == 50
        assert calculate_overall_score([issue(IssueLevel.WARNING, IssueSeverity.MEDIUM)], 50) == 48

    def test_clamped_at_zero(self):
        issues = [issue(IssueLevel.ERROR, IssueSeverity.CRITICAL)] * 6
        assert calculate_overall_score(issues, 100) == 0


class TestComprehensiveValidation:
    """Tests for ScheduleValidator.validate_comprehensive."""

    @pytest.fixture
    def validator(self):
        return ScheduleValidator()

    @pytest.fixture
    def lineup_cast(self):
        """Only the eight performers of the standard lineup."""
        return [m for m in DEFAULT_CAST if m.name in LINEUP.values()]

    def test_empty_input(self, validator):
        report = validator.validate_comprehensive([], [], list(DEFAULT_CAST))
        assert report.is_valid
        assert report.overall_score == 100
        assert report.completion_percentage == 100
        assert report.issues == []

    def test_single_full_show(self, validator, lineup_cast):
        shows = daily_shows(1)
        report = validator.validate_comprehensive(shows, full_lineup("show1"), lineup_cast)
        assert report.is_valid
        assert report.overall_score == 100
        assert report.issues == []
        assert report.recommendations == []
        assert all(s.status == LoadStatus.OPTIMAL for s in report.load_balancing)
        assert all(rc.completion_percentage == 100 for rc in report.role_completeness)

    def test_half_filled_show(self, validator, lineup_cast):
        shows = daily_shows(1)
        assignments = [a for a in full_lineup("show1") if a.role in (
            Role.SARGE, Role.POTATO, Role.MOZZIE, Role.RINGO,
        )]
        report = validator.validate_comprehensive(shows, assignments, lineup_cast)
        assert not report.is_valid
        assert report.completion_percentage == 50
        assert report.overall_score < 50
        who = next(rc for rc in report.role_completeness if rc.role == Role.WHO)
        assert who.filled_shows == 0
        assert who.missing_shows == ["Mon Jan 1 7:00 PM"]
        completeness = [i for i in report.issues if i.category == IssueCategory.COMPLETENESS]
        assert len(completeness) == 4
        assert all(i.severity == IssueSeverity.CRITICAL for i in completeness)
        assert "Schedule is 50% complete - assign remaining roles" in report.recommendations

    def test_full_week_with_default_cast(self, validator):
        shows = daily_shows(5)
        assignments = [a for s in shows for a in full_lineup(s.id)]
        report = validator.validate_comprehensive(shows, assignments, list(DEFAULT_CAST))

        assert report.is_valid
        assert report.completion_percentage == 100
        # 8 five-show runs (medium) and 4 unused performers (low), no errors
        assert report.overall_score == 62

        stats = {s.performer: s for s in report.load_balancing}
        assert stats["PHIL"].show_count == 5
        assert stats["PHIL"].expected_min == 2
        assert stats["PHIL"].expected_max == 5
        assert stats["PHIL"].status == LoadStatus.OPTIMAL
        assert stats["CADE"].status == LoadStatus.UNDERUTILIZED
        assert "Implement mandatory breaks between consecutive show sequences" in (
            report.recommendations
        )

    def test_critical_load(self, validator):
        cast = list(DEFAULT_CAST) + [
            CastMember(f"SWING{i}", frozenset({Role.BIN})) for i in range(8)
        ]
        shows = daily_shows(5)
        assignments = [Assignment(s.id, Role.SARGE, "PHIL") for s in shows]
        report = validator.validate_comprehensive(shows, assignments, cast)
        phil = next(s for s in report.load_balancing if s.performer == "PHIL")
        assert phil.status == LoadStatus.CRITICAL
        assert any(
            i.performer == "PHIL" and i.is_critical and i.category == IssueCategory.LOAD_BALANCING
            for i in report.issues
        )

    def test_consecutive_analysis(self, validator):
        shows = daily_shows(6)
        assignments = [Assignment(s.id, Role.SARGE, "PHIL") for s in shows]
        report = validator.validate_comprehensive(shows, assignments, list(DEFAULT_CAST))
        phil = next(a for a in report.consecutive_analysis if a.performer == "PHIL")
        assert phil.max_consecutive == 6
        assert len(phil.sequences) == 1
        assert phil.sequences[0].severity == RunSeverity.CRITICAL
        assert phil.sequences[0].start_label == "Mon Jan 1 7:00 PM"
        assert phil.sequences[0].end_label == "Sat Jan 6 7:00 PM"
        assert not report.is_valid

    def test_short_runs_not_listed(self, validator):
        shows = daily_shows(2)
        assignments = [Assignment(s.id, Role.SARGE, "PHIL") for s in shows]
        report = validator.validate_comprehensive(shows, assignments, list(DEFAULT_CAST))
        phil = next(a for a in report.consecutive_analysis if a.performer == "PHIL")
        assert phil.max_consecutive == 2
        assert phil.sequences == []

    def test_many_special_days_add_info(self, validator, lineup_cast):
        shows = daily_shows(1) + [
            Show("travel1", date(2024, 1, 2), time(10, 0), status=ShowStatus.TRAVEL),
            Show("travel2", date(2024, 1, 3), time(10, 0), status=ShowStatus.TRAVEL),
            Show("off1", date(2024, 1, 4), time(0, 0), status=ShowStatus.DAY_OFF),
            Show("off2", date(2024, 1, 5), time(0, 0), status=ShowStatus.DAY_OFF),
        ]
        report = validator.validate_comprehensive(shows, full_lineup("show1"), lineup_cast)
        assert report.special_days.travel_days == 2
        assert report.special_days.day_offs == 2
        assert report.special_days.impact_on_scheduling == "high"
        info = [i for i in report.issues if i.level == IssueLevel.INFO]
        assert len(info) == 1
        assert info[0].category == IssueCategory.SPECIAL_DAYS
        # Informational notes do not block validity
        assert report.is_valid

    def test_two_special_days_medium_impact(self, validator, lineup_cast):
        shows = daily_shows(1) + [
            Show("travel1", date(2024, 1, 2), time(10, 0), status=ShowStatus.TRAVEL),
            Show("off1", date(2024, 1, 3), time(0, 0), status=ShowStatus.DAY_OFF),
        ]
        report = validator.validate_comprehensive(shows, full_lineup("show1"), lineup_cast)
        assert report.special_days.impact_on_scheduling == "medium"
        assert not any(i.level == IssueLevel.INFO for i in report.issues)

    def test_role_on_special_day_counted(self, validator, lineup_cast):
        shows = daily_shows(1) + [
            Show("travel1", date(2024, 1, 2), time(10, 0), status=ShowStatus.TRAVEL),
        ]
        assignments = full_lineup("show1") + [Assignment("travel1", Role.SARGE, "PHIL")]
        report = validator.validate_comprehensive(shows, assignments, lineup_cast)
        assert report.special_days.invalid_assignments == 1
        assert any(i.category == IssueCategory.SPECIAL_DAYS for i in report.issues)

    def test_to_dict_summary(self, validator):
        shows = daily_shows(6)
        assignments = [Assignment(s.id, Role.SARGE, "PHIL") for s in shows]
        data = validator.validate_comprehensive(shows, assignments, list(DEFAULT_CAST)).to_dict()
        assert data["isValid"] is False
        assert data["summary"]["criticalErrors"] >= 1
        assert data["summary"]["totalIssues"] == len(data["issues"])
        assert data["specialDayHandling"]["impactOnScheduling"] == "low"
        assert {r["role"] for r in data["roleCompleteness"]} == {r.value for r in Role}
