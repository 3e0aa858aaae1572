"""Scheduling engine for generating cast assignments."""

from stagerota.scheduling.assignment_store import AssignmentStore
from stagerota.scheduling.constraints import ConstraintChecker
from stagerota.scheduling.heuristic_solver import HeuristicSolver, SolveOutcome
from stagerota.scheduling.red_days import RedDayAllocator, toggle_red_day
from stagerota.scheduling.scheduler import Scheduler

__all__ = [
    # Core scheduler
    "Scheduler",
    # Solvers
    "HeuristicSolver",
    "SolveOutcome",
    # Building blocks
    "AssignmentStore",
    "ConstraintChecker",
    # OFF and RED days
    "RedDayAllocator",
    "toggle_red_day",
]
