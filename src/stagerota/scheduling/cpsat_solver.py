"""OR-Tools CP-SAT solver for cast assignment.

This module models the same hard rules as the greedy solver as a
constraint program and solves it with Google OR-Tools CP-SAT. It fills as
many role slots as possible and then evens out show counts across the
company. It is only used when ``SolverType.CPSAT`` is selected.
"""

import logging
from dataclasses import dataclass
from itertools import combinations
from typing import Optional

from ortools.sat.python import cp_model

from stagerota.domain.models import CastMember, Role, Show
from stagerota.domain.policies import (
    DefaultFatiguePolicy,
    FatiguePolicy,
    SchedulerConfig,
)
from stagerota.domain.timeline import ShowTimeline
from stagerota.scheduling.assignment_store import AssignmentStore
from stagerota.scheduling.constraints import SATURDAY, SUNDAY, ConstraintChecker
from stagerota.scheduling.heuristic_solver import (
    ALL_ELIGIBLE_UNAVAILABLE,
    NO_ELIGIBLE_PERFORMER,
    HeuristicSolver,
    SolveOutcome,
    unfilled_slot_message,
)
from stagerota.validation.validator import ScheduleValidator

logger = logging.getLogger(__name__)

# A filled slot always outweighs any improvement in load spread.
FILL_WEIGHT = 1000


@dataclass
class CPSATResult:
    """Raw result from the CP-SAT solver.

    Attributes:
        outcome: Assignments and unfilled-slot messages, None if no solution.
        status: Solver status (OPTIMAL, FEASIBLE, etc.).
        objective_value: Final objective value.
        solve_time_seconds: Time taken to solve.
    """

    outcome: Optional[SolveOutcome]
    status: str
    objective_value: int = 0
    solve_time_seconds: float = 0.0

    @property
    def is_optimal(self) -> bool:
        return self.status == "OPTIMAL"

    @property
    def is_feasible(self) -> bool:
        return self.status in ("OPTIMAL", "FEASIBLE")


class CPSATSolver:
    """Constraint Programming solver using OR-Tools CP-SAT.

    Variables ``x[p, s, r]`` are 1 when performer ``p`` plays role ``r`` in
    show ``s``; only eligible (performer, role) pairs get a variable.

    Constraints:
    - Each role of each show is held by at most one performer
    - Each performer holds at most one role per show
    - Weekly cap on distinct shows per performer
    - No chain of appearances longer than the consecutive ceiling
    - No two-show Saturday directly followed by a two-show Sunday

    Objective: fill as many slots as possible, then minimize the gap
    between the busiest and the least busy performer.
    """

    def __init__(
        self,
        policy: Optional[FatiguePolicy] = None,
        config: Optional[SchedulerConfig] = None,
    ):
        self.policy = policy or DefaultFatiguePolicy()
        self.config = config or SchedulerConfig()

    def solve(self, shows: list[Show], cast: list[CastMember]) -> CPSATResult:
        """Build and solve the model.

        Args:
            shows: Every calendar entry of the week, including special days.
            cast: Performers available for the run.

        Returns:
            CPSATResult with the solver status and, if feasible, the outcome.
        """
        timeline = ShowTimeline(shows, gap_days=self.policy.consecutive_gap_days())
        model = cp_model.CpModel()

        x: dict[tuple[str, str, Role], cp_model.IntVar] = {}
        for member in cast:
            for show in timeline.shows:
                for role in Role:
                    if member.can_play(role):
                        x[member.name, show.id, role] = model.NewBoolVar(
                            f"x_{member.name}_{show.id}_{role.name}"
                        )

        for show in timeline.shows:
            for role in Role:
                holders = [
                    x[m.name, show.id, role] for m in cast if (m.name, show.id, role) in x
                ]
                if holders:
                    model.Add(sum(holders) <= 1)

        # y[p][ordinal] is 1 when the performer appears in that show
        y: dict[str, list[cp_model.IntVar]] = {}
        for member in cast:
            row = []
            for show in timeline.shows:
                var = model.NewBoolVar(f"y_{member.name}_{show.id}")
                roles = [x[member.name, show.id, r] for r in Role if (member.name, show.id, r) in x]
                if roles:
                    model.Add(sum(roles) == var)
                else:
                    model.Add(var == 0)
                row.append(var)
            y[member.name] = row

        for member in cast:
            if y[member.name]:
                model.Add(sum(y[member.name]) <= self.policy.max_shows_per_week())

        self._add_consecutive_constraints(model, timeline, y)
        self._add_weekend_constraints(model, timeline, y)

        loads = []
        for member in cast:
            load = model.NewIntVar(0, len(timeline), f"load_{member.name}")
            model.Add(load == sum(y[member.name]))
            loads.append(load)
        spread = model.NewIntVar(0, len(timeline), "spread")
        if loads:
            max_load = model.NewIntVar(0, len(timeline), "max_load")
            min_load = model.NewIntVar(0, len(timeline), "min_load")
            model.AddMaxEquality(max_load, loads)
            model.AddMinEquality(min_load, loads)
            model.Add(spread == max_load - min_load)

        model.Maximize(FILL_WEIGHT * sum(x.values()) - spread)

        solver = cp_model.CpSolver()
        solver.parameters.max_time_in_seconds = self.config.cpsat_time_limit_seconds
        if self.config.cpsat_num_workers > 0:
            solver.parameters.num_workers = self.config.cpsat_num_workers

        status = solver.Solve(model)

        status_map = {
            cp_model.OPTIMAL: "OPTIMAL",
            cp_model.FEASIBLE: "FEASIBLE",
            cp_model.INFEASIBLE: "INFEASIBLE",
            cp_model.MODEL_INVALID: "MODEL_INVALID",
            cp_model.UNKNOWN: "UNKNOWN",
        }
        status_str = status_map.get(status, "UNKNOWN")
        logger.info("CP-SAT finished with status %s in %.2fs", status_str, solver.WallTime())

        if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
            return CPSATResult(
                outcome=None,
                status=status_str,
                solve_time_seconds=solver.WallTime(),
            )

        outcome = self._extract_solution(solver, x, timeline, cast)
        return CPSATResult(
            outcome=outcome,
            status=status_str,
            objective_value=int(solver.ObjectiveValue()),
            solve_time_seconds=solver.WallTime(),
        )

    def solve_with_fallback(
        self,
        shows: list[Show],
        cast: list[CastMember],
        fallback: HeuristicSolver,
    ) -> SolveOutcome:
        """Solve with CP-SAT, falling back to the greedy solver if it fails.

        The CP-SAT result goes through the same acceptance test as a greedy
        attempt: it is used only if the validator finds no critical error.
        """
        result = self.solve(shows, cast)
        if result.is_feasible and result.outcome is not None:
            validation = ScheduleValidator(self.policy).validate(
                shows, result.outcome.assignments, cast
            )
            if not validation.critical_errors:
                return result.outcome
            logger.warning(
                "CP-SAT solution rejected with %d critical errors",
                len(validation.critical_errors),
            )

        logger.warning("Falling back to heuristic solver (CP-SAT status %s)", result.status)
        return fallback.solve(shows, cast)

    def _add_consecutive_constraints(
        self,
        model: cp_model.CpModel,
        timeline: ShowTimeline,
        y: dict[str, list[cp_model.IntVar]],
    ) -> None:
        """Forbid every chain of shows one longer than the ceiling.

        A chain is a set of shows in which each neighbour is close enough
        to continue a run. Appearing in every show of a chain means a run at
        least that long, whatever else the performer does in between.
        """
        chain_length = self.policy.max_consecutive_shows() + 1
        chains = list(self._chains(timeline, chain_length))
        logger.debug("Adding %d consecutive-show chains per performer", len(chains))
        for row in y.values():
            for chain in chains:
                model.Add(sum(row[i] for i in chain) <= chain_length - 1)

    def _chains(self, timeline: ShowTimeline, length: int):
        shows = timeline.shows

        def extend(chain: list[int]):
            if len(chain) == length:
                yield tuple(chain)
                return
            last = chain[-1]
            for nxt in range(last + 1, len(shows)):
                if not timeline.is_consecutive(shows[last], shows[nxt]):
                    break
                yield from extend(chain + [nxt])

        for start in range(len(shows)):
            yield from extend([start])

    def _add_weekend_constraints(
        self,
        model: cp_model.CpModel,
        timeline: ShowTimeline,
        y: dict[str, list[cp_model.IntVar]],
    ) -> None:
        """Forbid a two-show Saturday followed by a two-show Sunday.

        Only the performer's own double-show days count, so a Saturday and
        the next Sunday with no double in between are adjacent.
        """
        by_date = timeline.shows_by_date()
        double_dates = sorted(d for d, day_shows in by_date.items() if len(day_shows) >= 2)
        if not any(d.weekday() == SATURDAY for d in double_dates):
            return

        for name, row in y.items():
            doubles = {}
            for day in double_dates:
                appearances = [row[timeline.index_of(s.id)] for s in by_date[day]]
                double = model.NewBoolVar(f"double_{name}_{day.isoformat()}")
                model.Add(sum(appearances) >= 2).OnlyEnforceIf(double)
                model.Add(sum(appearances) <= 1).OnlyEnforceIf(double.Not())
                doubles[day] = double

            for saturday, sunday in combinations(double_dates, 2):
                if saturday.weekday() != SATURDAY or sunday.weekday() != SUNDAY:
                    continue
                between = [doubles[d] for d in double_dates if saturday < d < sunday]
                model.Add(doubles[saturday] + doubles[sunday] - sum(between) <= 1)

    def _extract_solution(
        self,
        solver: cp_model.CpSolver,
        x: dict[tuple[str, str, Role], cp_model.IntVar],
        timeline: ShowTimeline,
        cast: list[CastMember],
    ) -> SolveOutcome:
        store = AssignmentStore(timeline.show_ids)
        for (name, show_id, role), var in x.items():
            if solver.Value(var) == 1:
                store.assign(show_id, role, name)

        checker = ConstraintChecker(timeline, cast, self.policy)
        errors = []
        for show_id, role in store.empty_slots():
            reason = (
                NO_ELIGIBLE_PERFORMER
                if checker.eligible_count(role) == 0
                else ALL_ELIGIBLE_UNAVAILABLE
            )
            errors.append(unfilled_slot_message(role, timeline.get(show_id), reason))

        return SolveOutcome(
            assignments=store.to_assignment_list(),
            errors=errors,
            attempts=1,
            partial=bool(errors),
        )
