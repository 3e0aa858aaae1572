"""Randomized greedy solver for cast assignment.

This module fills the show x role grid the way a company manager would by
hand, many times over:
1. Visit the shows in a random order
2. Fill the hardest roles first (fewest trained performers)
3. Give each role to one of the least-loaded performers who passes every rule
4. Accept the attempt only if the validator finds no critical error

When every attempt fails, a best-effort partial pass fills what it can and
explains every slot it could not.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Optional

from stagerota.domain.models import Assignment, CastMember, Role, Show
from stagerota.domain.policies import (
    DefaultFatiguePolicy,
    FatiguePolicy,
    SchedulerConfig,
)
from stagerota.domain.timeline import ShowTimeline
from stagerota.scheduling.assignment_store import AssignmentStore
from stagerota.scheduling.constraints import ConstraintChecker
from stagerota.validation.validator import ScheduleValidator

logger = logging.getLogger(__name__)

NO_ELIGIBLE_PERFORMER = "no eligible performer in roster"
ALL_ELIGIBLE_UNAVAILABLE = (
    "all eligible performers are booked, at the weekly cap "
    "or at the consecutive-show limit"
)


@dataclass
class SolveOutcome:
    """Role assignments produced by one solver run.

    Attributes:
        assignments: Filled slots, in timeline then role order.
        errors: One message per slot that could not be filled.
        attempts: Full randomized attempts made.
        partial: True if the partial pass produced the assignments.
    """

    assignments: list[Assignment] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    attempts: int = 0
    partial: bool = False

    @property
    def is_complete(self) -> bool:
        return bool(self.assignments) and not self.errors


class HeuristicSolver:
    """Randomized greedy assigner with bounded retries.

    Randomness comes only from the injected ``random.Random``, so a seeded
    generator makes a run reproducible.

    Example:
        >>> solver = HeuristicSolver(rng=random.Random(7))
        >>> outcome = solver.solve(shows, cast)
        >>> outcome.is_complete
        True
    """

    def __init__(
        self,
        policy: Optional[FatiguePolicy] = None,
        config: Optional[SchedulerConfig] = None,
        rng: Optional[random.Random] = None,
        validator: Optional[ScheduleValidator] = None,
    ):
        self.policy = policy or DefaultFatiguePolicy()
        self.config = config or SchedulerConfig()
        self.rng = rng or random.Random()
        self.validator = validator or ScheduleValidator(policy=self.policy)

    def solve(self, shows: list[Show], cast: list[CastMember]) -> SolveOutcome:
        """Assign every role of every performance.

        Args:
            shows: Every calendar entry of the week, including special days.
            cast: Performers available for the run.

        Returns:
            SolveOutcome with a complete grid, or the partial pass result.
        """
        timeline = ShowTimeline(shows, gap_days=self.policy.consecutive_gap_days())
        checker = ConstraintChecker(timeline, cast, self.policy)
        store = AssignmentStore(timeline.show_ids)
        role_order = self._roles_by_difficulty(checker)

        for attempt in range(1, self.config.max_attempts + 1):
            store.clear()
            if not self._attempt(timeline, checker, store, cast):
                logger.debug("Attempt %d failed to fill every slot", attempt)
                continue

            assignments = store.to_assignment_list()
            result = self.validator.validate(shows, assignments, cast)
            if result.critical_errors:
                logger.debug(
                    "Attempt %d rejected with %d critical errors",
                    attempt,
                    len(result.critical_errors),
                )
                continue

            logger.info("Filled %d shows on attempt %d", len(timeline), attempt)
            return SolveOutcome(assignments=assignments, attempts=attempt)

        logger.warning(
            "No complete schedule after %d attempts, running partial pass",
            self.config.max_attempts,
        )
        store.clear()
        errors = self._partial_pass(timeline, checker, store, cast, role_order)
        return SolveOutcome(
            assignments=store.to_assignment_list(),
            errors=errors,
            attempts=self.config.max_attempts,
            partial=True,
        )

    def _attempt(
        self,
        timeline: ShowTimeline,
        checker: ConstraintChecker,
        store: AssignmentStore,
        cast: list[CastMember],
    ) -> bool:
        """Run one randomized greedy fill. Returns False on the first dead end."""
        show_order = list(timeline.show_ids)
        self.rng.shuffle(show_order)

        for show_id in show_order:
            roles = list(Role)
            self.rng.shuffle(roles)
            # Stable sort keeps the shuffled order among equally hard roles
            roles.sort(key=checker.eligible_count)

            for role in roles:
                candidates = [
                    m.name
                    for m in cast
                    if checker.can_assign(store, m.name, show_id, role)
                ]
                if not candidates:
                    logger.debug("No candidate for %s in show %s", role.value, show_id)
                    return False
                store.assign(show_id, role, self._pick(store, candidates))
        return True

    def _pick(self, store: AssignmentStore, candidates: list[str]) -> str:
        """Choose among the least-loaded candidates at random."""
        loads = {name: store.show_count(name) for name in candidates}
        lightest = min(loads.values())
        near_ties = [
            name
            for name in candidates
            if loads[name] - lightest <= self.config.near_tie_margin
        ]
        return self.rng.choice(near_ties)

    def _partial_pass(
        self,
        timeline: ShowTimeline,
        checker: ConstraintChecker,
        store: AssignmentStore,
        cast: list[CastMember],
        role_order: list[Role],
    ) -> list[str]:
        """Fill what can be filled, show by show, with the weekend rule relaxed.

        Candidates that pass every rule are preferred. Eligibility,
        exclusivity, the weekly cap and the consecutive ceiling always hold.
        """
        errors = []
        for show in timeline.shows:
            for role in role_order:
                strict = []
                relaxed = []
                for member in cast:
                    failed = checker.violations(store, member.name, show.id, role)
                    if not failed:
                        strict.append(member.name)
                    elif failed == [ConstraintChecker.WEEKEND]:
                        relaxed.append(member.name)
                    else:
                        logger.debug(
                            "%s rejected for %s in show %s: %s",
                            member.name,
                            role.value,
                            show.id,
                            ", ".join(failed),
                        )

                candidates = strict or relaxed
                if candidates:
                    store.assign(show.id, role, self._pick(store, candidates))
                    continue

                reason = (
                    NO_ELIGIBLE_PERFORMER
                    if checker.eligible_count(role) == 0
                    else ALL_ELIGIBLE_UNAVAILABLE
                )
                errors.append(unfilled_slot_message(role, show, reason))
        return errors

    def _roles_by_difficulty(self, checker: ConstraintChecker) -> list[Role]:
        return sorted(Role, key=checker.eligible_count)


def unfilled_slot_message(role: Role, show: Show, reason: str) -> str:
    return (
        f"Could not assign {role.value} for show on "
        f"{show.date.isoformat()} {show.time.strftime('%H:%M')} ({reason})"
    )
