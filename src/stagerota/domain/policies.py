"""Policy definitions for fatigue and rest rules.

This module contains the configurable limits that the generator, the
constraint checker and the validator share. Keeping them in one place
means the generator's acceptance test and the validator's thresholds can
never drift apart.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

# Longest run of consecutive shows the generator will build.
DEFAULT_MAX_CONSECUTIVE_SHOWS = 5

# Runs of this length are reported as critical burnout risk.
CRITICAL_CONSECUTIVE_SHOWS = DEFAULT_MAX_CONSECUTIVE_SHOWS + 1

# Runs of this length are reported as warnings.
WARNING_CONSECUTIVE_SHOWS = 4

# Shortest run listed in consecutive-show analysis.
REPORTED_CONSECUTIVE_SHOWS = 3

DEFAULT_MAX_SHOWS_PER_WEEK = 6

# Two appearances at most this many whole days apart belong to one run.
DEFAULT_CONSECUTIVE_GAP_DAYS = 2


class FatiguePolicy(ABC):
    """Abstract base class for performer workload limits."""

    @abstractmethod
    def max_consecutive_shows(self) -> int:
        """Longest run of consecutive shows a performer may be given."""
        pass

    @abstractmethod
    def max_shows_per_week(self) -> int:
        """Maximum number of distinct shows per performer per run."""
        pass

    @abstractmethod
    def consecutive_gap_days(self) -> int:
        """Largest gap in whole days that still continues a run."""
        pass

    @abstractmethod
    def warning_consecutive_shows(self) -> int:
        """Run length reported as a warning by the validator."""
        pass

    @abstractmethod
    def critical_consecutive_shows(self) -> int:
        """Run length reported as a critical error by the validator."""
        pass


@dataclass
class DefaultFatiguePolicy(FatiguePolicy):
    """Default touring-company workload limits.

    - At most 5 consecutive shows (a 6th is a critical burnout risk)
    - Runs of 4 or more are flagged as warnings
    - At most 6 shows per week
    - Shows up to 2 days apart count as consecutive
    """

    max_consecutive: int = DEFAULT_MAX_CONSECUTIVE_SHOWS
    max_per_week: int = DEFAULT_MAX_SHOWS_PER_WEEK
    gap_days: int = DEFAULT_CONSECUTIVE_GAP_DAYS
    warning_run: int = WARNING_CONSECUTIVE_SHOWS

    def __post_init__(self):
        if self.max_consecutive < 1:
            raise ValueError("max_consecutive must be at least 1")
        if self.max_per_week < 1:
            raise ValueError("max_per_week must be at least 1")

    def max_consecutive_shows(self) -> int:
        return self.max_consecutive

    def max_shows_per_week(self) -> int:
        return self.max_per_week

    def consecutive_gap_days(self) -> int:
        return self.gap_days

    def warning_consecutive_shows(self) -> int:
        return self.warning_run

    def critical_consecutive_shows(self) -> int:
        return self.max_consecutive + 1


@dataclass
class RedDayPolicy:
    """Limits on RED days (OFF and not callable for cover).

    Attributes:
        single_show_day_limit: RED performers allowed on a one-show date.
        double_show_day_limit: RED performers allowed on a two-show date.
        max_red_days_per_performer: RED dates a performer can receive per run.
    """

    single_show_day_limit: int = 3
    double_show_day_limit: int = 1
    max_red_days_per_performer: int = 1

    def limit_for(self, shows_on_date: int) -> int:
        """Get the RED allowance for a date with the given number of shows."""
        if shows_on_date <= 1:
            return self.single_show_day_limit
        return self.double_show_day_limit


class SolverType(Enum):
    """Available assignment backends."""

    HEURISTIC = "heuristic"  # Randomized greedy with retries (default)
    CPSAT = "cpsat"  # OR-Tools CP-SAT exact model


@dataclass
class SchedulerConfig:
    """Configuration for schedule generation.

    Attributes:
        max_attempts: Full randomized attempts before the partial pass.
        near_tie_margin: Show-count difference treated as a tie when ranking.
        solver_type: Which backend fills the schedule.
        cpsat_time_limit_seconds: Time budget for the CP-SAT backend.
        cpsat_num_workers: Parallel CP-SAT workers (0 = auto).
    """

    max_attempts: int = 50
    near_tie_margin: int = 1
    solver_type: SolverType = SolverType.HEURISTIC
    cpsat_time_limit_seconds: float = 10.0
    cpsat_num_workers: int = 0

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
