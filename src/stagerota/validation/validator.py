"""Validation module for verifying cast schedules.

This module is the single source of truth for schedule rules on the
output side. It checks any set of assignments, whether produced by the
generator or edited by hand, and explains every problem with a concrete
fix where one exists. Validation never raises: degenerate input yields a
valid, empty result.
"""

import logging
import math
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Optional

from stagerota.domain.models import (
    ROLE_COUNT,
    Assignment,
    CastMember,
    Role,
    Show,
    ShowStatus,
)
from stagerota.domain.policies import (
    REPORTED_CONSECUTIVE_SHOWS,
    DefaultFatiguePolicy,
    FatiguePolicy,
)
from stagerota.domain.timeline import ConsecutiveSequence, ShowTimeline
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
    SequenceAnalysis,
    SpecialDayHandling,
    calculate_overall_score,
    round_half_up,
)

logger = logging.getLogger(__name__)

# Load balancing thresholds
MIN_SHOWS_FOR_UNDERUTILIZED_CHECK = 4
MIN_SHOWS_FOR_OVERWORKED_CHECK = 5
UNDERUTILIZED_SHOW_COUNT = 2
OVERWORKED_FACTOR = 1.5
EXPECTED_RANGE_LOW = 0.7
EXPECTED_RANGE_HIGH = 1.3
CRITICAL_LOAD_FACTOR = 1.5

MAX_LISTED_ALTERNATIVES = 3


@dataclass
class _ScheduleContext:
    """Lookups shared by every check during one validation pass."""

    timeline: ShowTimeline
    cast: list[CastMember]
    cast_map: dict[str, CastMember]
    # performance show id -> role assignments, in input order
    by_show: dict[str, list[Assignment]] = field(default_factory=dict)
    # role assignments that point at unknown shows or special days
    stray: list[Assignment] = field(default_factory=list)

    @property
    def active_count(self) -> int:
        return len(self.timeline)

    def booked(self, show_id: str) -> set[str]:
        return {a.performer for a in self.by_show.get(show_id, [])}

    def ordinals_for(self, performer: str) -> list[int]:
        return [
            self.timeline.index_of(show_id)
            for show_id, rows in self.by_show.items()
            if any(a.performer == performer for a in rows)
        ]

    def show_count(self, performer: str) -> int:
        return len(self.ordinals_for(performer))

    def role_in(self, performer: str, show_id: str) -> Optional[Role]:
        for a in self.by_show.get(show_id, []):
            if a.performer == performer:
                return a.role
        return None

    def average_load(self) -> float:
        """Shows each performer would work if role slots were spread evenly."""
        if not self.cast:
            return 0.0
        return self.active_count * ROLE_COUNT / len(self.cast)


class ScheduleValidator:
    """Validates cast schedules against all business rules.

    Example:
        >>> validator = ScheduleValidator()
        >>> result = validator.validate(shows, assignments, cast)
        >>> if not result.is_valid:
        ...     for error in result.errors:
        ...         print(error)
    """

    def __init__(self, policy: Optional[FatiguePolicy] = None):
        self.policy = policy or DefaultFatiguePolicy()

    def validate(
        self,
        shows: list[Show],
        assignments: list[Assignment],
        cast: list[CastMember],
    ) -> ValidationResult:
        """Validate a schedule.

        Args:
            shows: Every calendar entry of the week, including special days.
            assignments: Role and OFF assignments to check.
            cast: Roster the assignments are checked against.

        Returns:
            ValidationResult with errors, warnings and the validity flag.
        """
        ctx = self._build_context(shows, assignments, cast)
        result = ValidationResult()

        issues: list[ValidationIssue] = []
        issues.extend(self._show_reference_issues(ctx))
        for show in ctx.timeline.shows:
            issues.extend(self._cardinality_issues(ctx, show))
            issues.extend(self._eligibility_issues(ctx, show))
            issues.extend(self._exclusivity_issues(ctx, show))
        issues.extend(self._consecutive_issues(ctx))
        issues.extend(self._distribution_issues(ctx))

        for issue in issues:
            result.add_issue(issue)

        logger.debug(
            "Validated %d assignments: %d errors, %d warnings",
            len(assignments),
            len(result.errors),
            len(result.warnings),
        )
        return result

    def validate_comprehensive(
        self,
        shows: list[Show],
        assignments: list[Assignment],
        cast: list[CastMember],
    ) -> ComprehensiveReport:
        """Analyze a schedule in depth and score it.

        Adds role completeness, four-tier load balancing, consecutive-run
        analysis, special-day handling and recommendations to the basic
        checks.

        Args:
            shows: Every calendar entry of the week, including special days.
            assignments: Role and OFF assignments to analyze.
            cast: Roster the assignments are checked against.

        Returns:
            ComprehensiveReport with an overall score from 0 to 100.
        """
        ctx = self._build_context(shows, assignments, cast)
        issues: list[ValidationIssue] = []

        issues.extend(self._show_reference_issues(ctx))
        for show in ctx.timeline.shows:
            issues.extend(self._eligibility_issues(ctx, show))

        consecutive_analysis = self._analyze_consecutive_shows(ctx)
        issues.extend(self._consecutive_issues(ctx))

        load_balancing = self._analyze_load_balancing(ctx)
        issues.extend(self._load_balancing_issues(load_balancing))

        role_completeness = self._analyze_role_completeness(ctx)
        issues.extend(self._completeness_issues(role_completeness))

        for show in ctx.timeline.shows:
            issues.extend(self._exclusivity_issues(ctx, show))

        special_days = self._analyze_special_days(ctx, assignments)
        if special_days.impact_on_scheduling == "high":
            issues.append(
                ValidationIssue(
                    level=IssueLevel.INFO,
                    severity=IssueSeverity.LOW,
                    category=IssueCategory.SPECIAL_DAYS,
                    message=(
                        f"{special_days.total_special_days} special days "
                        f"may impact cast availability"
                    ),
                    suggestion=(
                        "Ensure adequate cast coverage around travel and "
                        "day-off periods"
                    ),
                )
            )

        completion = self._completion_percentage(ctx)
        recommendations = self._recommendations(
            load_balancing, consecutive_analysis, role_completeness, completion
        )
        score = calculate_overall_score(issues, completion)
        has_critical = any(i.is_critical for i in issues)

        return ComprehensiveReport(
            is_valid=not has_critical and completion == 100,
            overall_score=score,
            completion_percentage=completion,
            issues=issues,
            load_balancing=load_balancing,
            consecutive_analysis=consecutive_analysis,
            role_completeness=role_completeness,
            special_days=special_days,
            recommendations=recommendations,
        )

    def _build_context(
        self,
        shows: list[Show],
        assignments: list[Assignment],
        cast: list[CastMember],
    ) -> _ScheduleContext:
        timeline = ShowTimeline(shows, gap_days=self.policy.consecutive_gap_days())
        ctx = _ScheduleContext(
            timeline=timeline,
            cast=list(cast),
            cast_map={m.name: m for m in cast},
            by_show={show.id: [] for show in timeline.shows},
        )
        for assignment in assignments:
            if assignment.is_off:
                continue
            if assignment.show_id in timeline:
                ctx.by_show[assignment.show_id].append(assignment)
            else:
                ctx.stray.append(assignment)
        return ctx

    def _show_reference_issues(self, ctx: _ScheduleContext) -> list[ValidationIssue]:
        """Role assignments must point at a performance in this schedule."""
        issues = []
        for assignment in ctx.stray:
            entry = ctx.timeline.get(assignment.show_id)
            if entry is None:
                issues.append(
                    ValidationIssue(
                        level=IssueLevel.ERROR,
                        severity=IssueSeverity.CRITICAL,
                        category=IssueCategory.SHOW_REFERENCE,
                        message=(
                            f"{assignment.performer} is assigned to "
                            f"{assignment.role_label} in unknown show "
                            f'"{assignment.show_id}"'
                        ),
                        performer=assignment.performer,
                        show_id=assignment.show_id,
                        role=assignment.role,
                        suggestion="remove the assignment or add the show to the schedule",
                    )
                )
            else:
                kind = "travel day" if entry.status == ShowStatus.TRAVEL else "day off"
                issues.append(
                    ValidationIssue(
                        level=IssueLevel.ERROR,
                        severity=IssueSeverity.HIGH,
                        category=IssueCategory.SPECIAL_DAYS,
                        message=(
                            f"{assignment.performer} is assigned to "
                            f"{assignment.role_label} on {kind} {entry.date.isoformat()}"
                        ),
                        performer=assignment.performer,
                        show_id=assignment.show_id,
                        role=assignment.role,
                        suggestion=f"remove role assignments from the {kind}",
                    )
                )
        return issues

    def _cardinality_issues(
        self, ctx: _ScheduleContext, show: Show
    ) -> list[ValidationIssue]:
        """Each performance needs eight distinct performers covering all roles."""
        rows = ctx.by_show[show.id]
        if not rows:
            return []

        issues = []
        performers = {a.performer for a in rows}
        if len(performers) < ROLE_COUNT:
            missing = ROLE_COUNT - len(performers)
            issues.append(
                ValidationIssue(
                    level=IssueLevel.WARNING,
                    severity=IssueSeverity.MEDIUM,
                    category=IssueCategory.COMPLETENESS,
                    message=(
                        f"Show {show.label}: Missing {missing} "
                        f"performer{'s' if missing > 1 else ''}"
                    ),
                    show_id=show.id,
                    suggestion="assign additional cast members to reach full capacity",
                )
            )
        elif len(performers) > ROLE_COUNT:
            issues.append(
                ValidationIssue(
                    level=IssueLevel.ERROR,
                    severity=IssueSeverity.CRITICAL,
                    category=IssueCategory.CONFLICTS,
                    message=(
                        f"Show {show.label}: Has {len(performers)} performers "
                        f"but can only have {ROLE_COUNT}"
                    ),
                    show_id=show.id,
                    suggestion="remove duplicate assignments",
                )
            )

        holders: dict[Role, list[str]] = defaultdict(list)
        for a in rows:
            holders[a.role].append(a.performer)

        missing_roles = [role for role in Role if role not in holders]
        if missing_roles:
            issues.append(
                ValidationIssue(
                    level=IssueLevel.WARNING,
                    severity=IssueSeverity.MEDIUM,
                    category=IssueCategory.COMPLETENESS,
                    message=(
                        f"Show {show.label}: Missing roles: "
                        f"{', '.join(r.value for r in missing_roles)}"
                    ),
                    show_id=show.id,
                    suggestion="assign performers to these roles",
                )
            )

        for role, names in holders.items():
            if len(names) > 1:
                issues.append(
                    ValidationIssue(
                        level=IssueLevel.ERROR,
                        severity=IssueSeverity.CRITICAL,
                        category=IssueCategory.CONFLICTS,
                        message=(
                            f"Show {show.label}: {role.value} is assigned to "
                            f"{len(names)} performers ({', '.join(names)})"
                        ),
                        show_id=show.id,
                        role=role,
                        suggestion=f"keep one {role.value} and remove the others",
                    )
                )
        return issues

    def _eligibility_issues(
        self, ctx: _ScheduleContext, show: Show
    ) -> list[ValidationIssue]:
        """Performers must be on the roster and trained for their role."""
        issues = []
        for a in ctx.by_show[show.id]:
            member = ctx.cast_map.get(a.performer)
            if member is None:
                issues.append(
                    ValidationIssue(
                        level=IssueLevel.ERROR,
                        severity=IssueSeverity.CRITICAL,
                        category=IssueCategory.ROLE_ELIGIBILITY,
                        message=(
                            f'Show {show.label}: Unknown performer "{a.performer}" '
                            f"assigned to {a.role.value}"
                        ),
                        performer=a.performer,
                        show_id=show.id,
                        role=a.role,
                        suggestion="verify performer name or add to cast list",
                    )
                )
            elif not member.can_play(a.role):
                alternatives = self._alternatives(ctx, a.role, show.id)
                if alternatives:
                    suggestion = (
                        f"replace with eligible performer: "
                        f"{_list_names(alternatives)}"
                    )
                else:
                    suggestion = "no eligible performers available for this role"
                issues.append(
                    ValidationIssue(
                        level=IssueLevel.ERROR,
                        severity=IssueSeverity.CRITICAL,
                        category=IssueCategory.ROLE_ELIGIBILITY,
                        message=f"Show {show.label}: {a.performer} cannot perform {a.role.value}",
                        performer=a.performer,
                        show_id=show.id,
                        role=a.role,
                        suggestion=suggestion,
                    )
                )
        return issues

    def _exclusivity_issues(
        self, ctx: _ScheduleContext, show: Show
    ) -> list[ValidationIssue]:
        """A performer can hold only one role per show."""
        roles_by_performer: dict[str, list[Role]] = defaultdict(list)
        for a in ctx.by_show[show.id]:
            roles_by_performer[a.performer].append(a.role)

        issues = []
        for performer, roles in roles_by_performer.items():
            if len(roles) < 2:
                continue
            alternatives = self._alternatives(ctx, roles[1], show.id)
            if alternatives:
                suggestion = (
                    f"consider reassigning {roles[1].value} to "
                    f"{' or '.join(alternatives[:2])}"
                )
            else:
                suggestion = "reassign one of these roles to another performer"
            issues.append(
                ValidationIssue(
                    level=IssueLevel.ERROR,
                    severity=IssueSeverity.CRITICAL,
                    category=IssueCategory.CONFLICTS,
                    message=(
                        f"Show {show.label}: {performer} assigned to multiple roles "
                        f"({', '.join(r.value for r in roles)})"
                    ),
                    performer=performer,
                    show_id=show.id,
                    role=roles[1],
                    suggestion=suggestion,
                )
            )
        return issues

    def _consecutive_issues(self, ctx: _ScheduleContext) -> list[ValidationIssue]:
        """Long runs of consecutive shows are a burnout risk."""
        critical_run = self.policy.critical_consecutive_shows()
        warning_run = self.policy.warning_consecutive_shows()

        issues = []
        for member in ctx.cast:
            for sequence in ctx.timeline.sequences(ctx.ordinals_for(member.name)):
                if sequence.count < warning_run:
                    continue
                span = self._span_label(ctx, sequence)
                suggestion = self._consecutive_suggestion(ctx, member.name, sequence)
                if sequence.count >= critical_run:
                    issues.append(
                        ValidationIssue(
                            level=IssueLevel.ERROR,
                            severity=IssueSeverity.CRITICAL,
                            category=IssueCategory.CONSECUTIVE_SHOWS,
                            message=(
                                f"{member.name} has {sequence.count} consecutive shows "
                                f"({span}) - critical burnout risk"
                            ),
                            performer=member.name,
                            suggestion=suggestion,
                        )
                    )
                else:
                    issues.append(
                        ValidationIssue(
                            level=IssueLevel.WARNING,
                            severity=IssueSeverity.MEDIUM,
                            category=IssueCategory.CONSECUTIVE_SHOWS,
                            message=(
                                f"{member.name} has {sequence.count} consecutive shows "
                                f"({span}) - consider reducing workload"
                            ),
                            performer=member.name,
                            suggestion=suggestion,
                        )
                    )
        return issues

    def _distribution_issues(self, ctx: _ScheduleContext) -> list[ValidationIssue]:
        """Flag underused and overworked performers."""
        active = ctx.active_count
        overworked_limit = math.ceil(ctx.average_load() * OVERWORKED_FACTOR)

        issues = []
        for member in ctx.cast:
            count = ctx.show_count(member.name)
            if 0 < count < UNDERUTILIZED_SHOW_COUNT and active >= MIN_SHOWS_FOR_UNDERUTILIZED_CHECK:
                issues.append(
                    ValidationIssue(
                        level=IssueLevel.WARNING,
                        severity=IssueSeverity.LOW,
                        category=IssueCategory.LOAD_BALANCING,
                        message=(
                            f"{member.name} only has {count} "
                            f"show{'' if count == 1 else 's'} (underutilized)"
                        ),
                        performer=member.name,
                        suggestion=self._underutilized_suggestion(ctx, member),
                    )
                )
            elif count > overworked_limit and active >= MIN_SHOWS_FOR_OVERWORKED_CHECK:
                issues.append(
                    ValidationIssue(
                        level=IssueLevel.WARNING,
                        severity=IssueSeverity.HIGH,
                        category=IssueCategory.LOAD_BALANCING,
                        message=f"{member.name} has {count} shows (potentially overworked)",
                        performer=member.name,
                        suggestion=self._overworked_suggestion(ctx, member.name),
                    )
                )
        return issues

    def _analyze_consecutive_shows(
        self, ctx: _ScheduleContext
    ) -> list[ConsecutiveShowAnalysis]:
        critical_run = self.policy.critical_consecutive_shows()
        warning_run = self.policy.warning_consecutive_shows()

        analysis = []
        for member in ctx.cast:
            sequences = ctx.timeline.sequences(ctx.ordinals_for(member.name))
            reported = []
            for sequence in sequences:
                if sequence.count < REPORTED_CONSECUTIVE_SHOWS:
                    continue
                if sequence.count >= critical_run:
                    severity = RunSeverity.CRITICAL
                elif sequence.count >= warning_run:
                    severity = RunSeverity.WARNING
                else:
                    severity = RunSeverity.OK
                first = ctx.timeline.show(sequence.start_index)
                last = ctx.timeline.show(sequence.end_index)
                reported.append(
                    SequenceAnalysis(first.label, last.label, sequence.count, severity)
                )
            analysis.append(
                ConsecutiveShowAnalysis(
                    performer=member.name,
                    max_consecutive=max((s.count for s in sequences), default=0),
                    sequences=reported,
                )
            )
        return analysis

    def _analyze_load_balancing(self, ctx: _ScheduleContext) -> list[LoadBalancingStats]:
        average = ctx.average_load()
        expected_min = max(0, math.floor(average * EXPECTED_RANGE_LOW))
        expected_max = math.ceil(average * EXPECTED_RANGE_HIGH)

        stats = []
        for member in ctx.cast:
            count = ctx.show_count(member.name)
            if ctx.active_count == 0:
                status = LoadStatus.OPTIMAL
            elif count == 0 or count < expected_min:
                status = LoadStatus.UNDERUTILIZED
            elif count > expected_max * CRITICAL_LOAD_FACTOR:
                status = LoadStatus.CRITICAL
            elif count > expected_max:
                status = LoadStatus.OVERWORKED
            else:
                status = LoadStatus.OPTIMAL
            stats.append(
                LoadBalancingStats(
                    performer=member.name,
                    show_count=count,
                    expected_min=expected_min,
                    expected_max=expected_max,
                    status=status,
                    variance=abs(count - average),
                )
            )
        return stats

    def _load_balancing_issues(
        self, stats: list[LoadBalancingStats]
    ) -> list[ValidationIssue]:
        issues = []
        for s in stats:
            if s.status == LoadStatus.CRITICAL:
                issues.append(
                    ValidationIssue(
                        level=IssueLevel.ERROR,
                        severity=IssueSeverity.CRITICAL,
                        category=IssueCategory.LOAD_BALANCING,
                        message=f"{s.performer} has {s.show_count} shows (extremely overworked)",
                        performer=s.performer,
                        suggestion=f"Redistribute shows from {s.performer} to other cast members",
                    )
                )
            elif s.status == LoadStatus.OVERWORKED:
                issues.append(
                    ValidationIssue(
                        level=IssueLevel.WARNING,
                        severity=IssueSeverity.HIGH,
                        category=IssueCategory.LOAD_BALANCING,
                        message=f"{s.performer} has {s.show_count} shows (above optimal range)",
                        performer=s.performer,
                        suggestion=f"Consider reducing {s.performer}'s workload",
                    )
                )
            elif s.status == LoadStatus.UNDERUTILIZED:
                issues.append(
                    ValidationIssue(
                        level=IssueLevel.WARNING,
                        severity=IssueSeverity.LOW,
                        category=IssueCategory.LOAD_BALANCING,
                        message=f"{s.performer} has only {s.show_count} shows (underutilized)",
                        performer=s.performer,
                        suggestion=f"Consider assigning more shows to {s.performer}",
                    )
                )
        return issues

    def _analyze_role_completeness(
        self, ctx: _ScheduleContext
    ) -> list[RoleCompleteness]:
        total = ctx.active_count
        completeness = []
        for role in Role:
            filled = [
                show for show in ctx.timeline.shows
                if any(a.role == role for a in ctx.by_show[show.id])
            ]
            missing = [
                show.label for show in ctx.timeline.shows if show not in filled
            ]
            percentage = round_half_up(len(filled) / total * 100) if total else 100
            completeness.append(
                RoleCompleteness(
                    role=role,
                    filled_shows=len(filled),
                    total_shows=total,
                    completion_percentage=percentage,
                    missing_shows=missing,
                )
            )
        return completeness

    def _completeness_issues(
        self, completeness: list[RoleCompleteness]
    ) -> list[ValidationIssue]:
        issues = []
        for rc in completeness:
            if rc.completion_percentage >= 100:
                continue
            if rc.completion_percentage < 50:
                severity = IssueSeverity.CRITICAL
            elif rc.completion_percentage < 80:
                severity = IssueSeverity.HIGH
            else:
                severity = IssueSeverity.MEDIUM
            issues.append(
                ValidationIssue(
                    level=IssueLevel.ERROR,
                    severity=severity,
                    category=IssueCategory.COMPLETENESS,
                    message=(
                        f"Role {rc.role.value} is only {rc.completion_percentage}% complete "
                        f"({rc.filled_shows}/{rc.total_shows} shows)"
                    ),
                    role=rc.role,
                    suggestion=(
                        f"Assign {rc.role.value} for remaining shows: "
                        f"{', '.join(rc.missing_shows)}"
                    ),
                )
            )
        return issues

    def _analyze_special_days(
        self, ctx: _ScheduleContext, assignments: list[Assignment]
    ) -> SpecialDayHandling:
        special = ctx.timeline.special_days
        special_ids = {s.id for s in special}
        total = len(special)
        if total > 3:
            impact = "high"
        elif total > 1:
            impact = "medium"
        else:
            impact = "low"
        return SpecialDayHandling(
            travel_days=sum(1 for s in special if s.status == ShowStatus.TRAVEL),
            day_offs=sum(1 for s in special if s.status == ShowStatus.DAY_OFF),
            total_special_days=total,
            impact_on_scheduling=impact,
            invalid_assignments=sum(
                1 for a in assignments if not a.is_off and a.show_id in special_ids
            ),
        )

    def _completion_percentage(self, ctx: _ScheduleContext) -> int:
        total_slots = ctx.active_count * ROLE_COUNT
        if not total_slots:
            return 100
        filled = sum(
            len({a.role for a in rows}) for rows in ctx.by_show.values()
        )
        return round_half_up(filled / total_slots * 100)

    def _recommendations(
        self,
        load_balancing: list[LoadBalancingStats],
        consecutive_analysis: list[ConsecutiveShowAnalysis],
        role_completeness: list[RoleCompleteness],
        completion: int,
    ) -> list[str]:
        recommendations = []
        if any(s.status == LoadStatus.OVERWORKED for s in load_balancing):
            recommendations.append(
                "Consider redistributing workload among cast members to prevent burnout"
            )
        if any(
            a.max_consecutive >= self.policy.max_consecutive_shows()
            for a in consecutive_analysis
        ):
            recommendations.append(
                "Implement mandatory breaks between consecutive show sequences"
            )
        if any(rc.completion_percentage < 90 for rc in role_completeness):
            recommendations.append(
                "Complete role assignments for all shows to ensure full coverage"
            )
        if completion < 100:
            recommendations.append(
                f"Schedule is {completion}% complete - assign remaining roles"
            )
        return recommendations

    def _alternatives(
        self,
        ctx: _ScheduleContext,
        role: Role,
        show_id: str,
        exclude: Optional[str] = None,
    ) -> list[str]:
        """Eligible performers for a role who are not booked in the show."""
        booked = ctx.booked(show_id)
        return [
            m.name
            for m in ctx.cast
            if m.can_play(role) and m.name not in booked and m.name != exclude
        ]

    def _span_label(self, ctx: _ScheduleContext, sequence: ConsecutiveSequence) -> str:
        first = ctx.timeline.show(sequence.start_index)
        last = ctx.timeline.show(sequence.end_index)
        return f"{first.label} to {last.label}"

    def _consecutive_suggestion(
        self,
        ctx: _ScheduleContext,
        performer: str,
        sequence: ConsecutiveSequence,
    ) -> str:
        """Suggest a swap in the middle of a run."""
        show_id = sequence.midpoint_show_id
        role = ctx.role_in(performer, show_id)
        if role is not None:
            alternatives = self._alternatives(ctx, role, show_id, exclude=performer)
            if alternatives:
                show = ctx.timeline.get(show_id)
                return (
                    f"Replace {performer} with {alternatives[0]} for "
                    f"{role.value} on {show.label}"
                )
        return "Consider redistributing some shows to other cast members"

    def _underutilized_suggestion(
        self, ctx: _ScheduleContext, member: CastMember
    ) -> str:
        unassigned = [
            show for show in ctx.timeline.shows
            if member.name not in ctx.booked(show.id)
        ]
        for show in unassigned[:2]:
            filled = {a.role for a in ctx.by_show[show.id]}
            open_roles = [r for r in Role if member.can_play(r) and r not in filled]
            if open_roles:
                return f"assign {open_roles[0].value} role on {show.label}"
        return "look for opportunities to assign additional roles"

    def _overworked_suggestion(self, ctx: _ScheduleContext, performer: str) -> str:
        ordinals = sorted(ctx.ordinals_for(performer))
        if ordinals:
            show = ctx.timeline.show(ordinals[-1])
            role = ctx.role_in(performer, show.id)
            alternatives = self._alternatives(ctx, role, show.id, exclude=performer)
            if alternatives:
                return f"reassign {role.value} on {show.label} to {alternatives[0]}"
        return "redistribute some assignments to other cast members"


def _list_names(names: list[str]) -> str:
    shown = ", ".join(names[:MAX_LISTED_ALTERNATIVES])
    remaining = len(names) - MAX_LISTED_ALTERNATIVES
    if remaining > 0:
        return f"{shown} or {remaining} others"
    return shown
