"""Main scheduler interface.

This module provides the high-level Scheduler class that resolves the
roster, runs the selected solver and hands the result to the RED/OFF day
allocator.
"""

import logging
import random
from typing import Optional, Sequence

from stagerota.domain.models import CastMember, GenerationResult, Show
from stagerota.domain.policies import (
    DefaultFatiguePolicy,
    FatiguePolicy,
    RedDayPolicy,
    SchedulerConfig,
    SolverType,
)
from stagerota.domain.roster import DEFAULT_CAST, RosterProvider
from stagerota.exceptions import RosterUnavailableError, SolverUnavailableError
from stagerota.scheduling.heuristic_solver import HeuristicSolver, SolveOutcome
from stagerota.scheduling.red_days import RedDayAllocator

logger = logging.getLogger(__name__)

NO_CAST_ERROR = "No cast members available: supply a cast list or a roster provider"


class Scheduler:
    """High-level scheduler for generating a week of cast assignments.

    Generation never raises. Infeasible slots come back as messages in a
    partial result, and unexpected errors as a single "Algorithm error".

    Example:
        >>> scheduler = Scheduler(rng=random.Random(42))
        >>> result = scheduler.generate(shows)
        >>> result.success
        True
    """

    def __init__(
        self,
        config: Optional[SchedulerConfig] = None,
        roster_provider: Optional[RosterProvider] = None,
        default_cast: Sequence[CastMember] = DEFAULT_CAST,
        rng: Optional[random.Random] = None,
        fatigue_policy: Optional[FatiguePolicy] = None,
        red_day_policy: Optional[RedDayPolicy] = None,
    ):
        """Initialize scheduler with configuration and policies.

        Args:
            config: Solver selection and retry settings.
            roster_provider: Source of the cast when none is passed to generate.
            default_cast: Roster used when no cast is passed and the provider
                is missing or fails.
            rng: Random source for the greedy solver; seed it for repeatable runs.
            fatigue_policy: Consecutive-show and weekly limits.
            red_day_policy: RED day allowances.
        """
        self.config = config or SchedulerConfig()
        self.roster_provider = roster_provider
        self.default_cast = list(default_cast)
        self.rng = rng or random.Random()
        self.fatigue_policy = fatigue_policy or DefaultFatiguePolicy()
        self.red_day_allocator = RedDayAllocator(red_day_policy)

    def generate(
        self,
        shows: list[Show],
        cast: Optional[list[CastMember]] = None,
    ) -> GenerationResult:
        """Generate assignments for every performance in the week.

        Args:
            shows: Every calendar entry of the week, including special days.
            cast: Roster for this run. When None, the roster provider is
                asked, then the default cast is used.

        Returns:
            GenerationResult with role assignments followed by OFF rows.
        """
        try:
            roster = self._resolve_cast(cast)
            if not roster:
                logger.warning("Generation requested with an empty cast")
                return GenerationResult(success=False, errors=[NO_CAST_ERROR])

            outcome = self._solve(shows, roster)

            assignments = outcome.assignments
            if assignments:
                assignments = self.red_day_allocator.allocate(shows, assignments, roster)

            success = not outcome.errors
            if outcome.partial:
                logger.warning(
                    "Partial schedule with %d unfilled slots", len(outcome.errors)
                )
            else:
                logger.info("Generated %d role assignments", len(outcome.assignments))

            return GenerationResult(
                success=success,
                assignments=assignments,
                errors=list(outcome.errors),
                attempts=outcome.attempts,
                partial=outcome.partial,
            )
        except Exception as exc:
            logger.exception("Schedule generation failed")
            return GenerationResult(success=False, errors=[f"Algorithm error: {exc}"])

    def _resolve_cast(self, cast: Optional[list[CastMember]]) -> list[CastMember]:
        if cast is not None:
            return list(cast)
        if self.roster_provider is not None:
            try:
                return list(self.roster_provider.load_cast())
            except RosterUnavailableError as exc:
                logger.warning("Roster provider failed (%s), using default cast", exc)
        return list(self.default_cast)

    def _solve(self, shows: list[Show], cast: list[CastMember]) -> SolveOutcome:
        heuristic = HeuristicSolver(
            policy=self.fatigue_policy,
            config=self.config,
            rng=self.rng,
        )
        if self.config.solver_type == SolverType.HEURISTIC:
            return heuristic.solve(shows, cast)
        if self.config.solver_type == SolverType.CPSAT:
            from stagerota.scheduling.cpsat_solver import CPSATSolver

            cpsat = CPSATSolver(policy=self.fatigue_policy, config=self.config)
            return cpsat.solve_with_fallback(shows, cast, heuristic)
        raise SolverUnavailableError(f"Unknown solver type: {self.config.solver_type}")
