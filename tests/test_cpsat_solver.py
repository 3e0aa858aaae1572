"""Tests for the OR-Tools CP-SAT backend."""

import random
from datetime import date, time, timedelta

import pytest

from stagerota.domain.models import CastMember, Role, Show
from stagerota.domain.policies import SchedulerConfig, SolverType
from stagerota.domain.roster import DEFAULT_CAST
from stagerota.domain.timeline import ShowTimeline
from stagerota.scheduling.cpsat_solver import CPSATSolver
from stagerota.scheduling.heuristic_solver import HeuristicSolver
from stagerota.scheduling.scheduler import Scheduler
from stagerota.validation.validator import ScheduleValidator


def daily_shows(count: int, start: date = date(2024, 1, 1)) -> list[Show]:
    return [
        Show(f"show{i + 1}", start + timedelta(days=i), time(19, 0))
        for i in range(count)
    ]


@pytest.fixture
def solver():
    return CPSATSolver(config=SchedulerConfig(cpsat_time_limit_seconds=10.0, cpsat_num_workers=1))


class TestCPSATSolver:
    """Tests for CPSATSolver."""

    def test_fills_full_week(self, solver):
        shows = daily_shows(5)
        cast = list(DEFAULT_CAST)
        result = solver.solve(shows, cast)

        assert result.is_feasible
        assert result.outcome.errors == []
        assert len(result.outcome.assignments) == 40
        validation = ScheduleValidator().validate(shows, result.outcome.assignments, cast)
        assert validation.is_valid, validation.error_messages

    def test_respects_consecutive_ceiling(self, solver):
        shows = daily_shows(7)
        cast = list(DEFAULT_CAST)
        result = solver.solve(shows, cast)
        timeline = ShowTimeline(shows)
        for member in cast:
            ordinals = [
                timeline.index_of(a.show_id)
                for a in result.outcome.assignments
                if a.performer == member.name
            ]
            assert timeline.longest_run(ordinals) <= 5

    def test_unfillable_role_reported(self, solver):
        cast = [m for m in DEFAULT_CAST if not m.can_play(Role.WHO)]
        shows = daily_shows(2)
        result = solver.solve(shows, cast)

        assert result.is_feasible
        assert result.outcome.partial
        assert result.outcome.errors == [
            "Could not assign Who for show on 2024-01-01 19:00 (no eligible performer in roster)",
            "Could not assign Who for show on 2024-01-02 19:00 (no eligible performer in roster)",
        ]
        assert len(result.outcome.assignments) == 14

    def test_weekend_double_double_forbidden(self, solver):
        shows = [
            Show("sat_mat", date(2024, 1, 6), time(16, 0)),
            Show("sat_eve", date(2024, 1, 6), time(21, 0)),
            Show("sun_mat", date(2024, 1, 7), time(16, 0)),
            Show("sun_eve", date(2024, 1, 7), time(19, 0)),
        ]
        cast = [CastMember("ANNA", frozenset({Role.SARGE}))]
        result = solver.solve(shows, cast)

        assert result.is_feasible
        assert len(result.outcome.assignments) == 3
        assert len(result.outcome.errors) == 29

    def test_sole_performer_takes_every_show(self, solver):
        cast = [
            CastMember("CADE", frozenset({Role.RINGO, Role.POTATO})) if m.name == "CADE" else m
            for m in DEFAULT_CAST
        ]
        result = solver.solve(daily_shows(5), cast)
        who = {a.performer for a in result.outcome.assignments if a.role == Role.WHO}
        assert who == {"JOSH"}
        assert result.outcome.errors == []

    def test_no_shows(self, solver):
        result = solver.solve([], list(DEFAULT_CAST))
        assert result.is_optimal
        assert result.outcome.assignments == []


class TestFallback:
    """Tests for solve_with_fallback and scheduler integration."""

    def test_valid_solution_used(self, solver):
        shows = daily_shows(5)
        fallback = HeuristicSolver(rng=random.Random(1))
        outcome = solver.solve_with_fallback(shows, list(DEFAULT_CAST), fallback)
        assert outcome.attempts == 1
        assert outcome.is_complete

    def test_scheduler_with_cpsat(self):
        config = SchedulerConfig(solver_type=SolverType.CPSAT, cpsat_num_workers=1)
        result = Scheduler(config=config, rng=random.Random(2)).generate(daily_shows(5))
        assert result.success
        assert len(result.role_assignments) == 40
