"""Tests for scheduling policies."""

import pytest

from stagerota.domain.policies import (
    CRITICAL_CONSECUTIVE_SHOWS,
    DefaultFatiguePolicy,
    RedDayPolicy,
    SchedulerConfig,
    SolverType,
)


class TestDefaultFatiguePolicy:
    """Tests for DefaultFatiguePolicy."""

    def test_default_consecutive_ceiling(self):
        """The generator builds runs of at most 5 shows."""
        policy = DefaultFatiguePolicy()
        assert policy.max_consecutive_shows() == 5

    def test_critical_threshold_is_one_above_ceiling(self):
        policy = DefaultFatiguePolicy()
        assert policy.critical_consecutive_shows() == 6
        assert policy.critical_consecutive_shows() == CRITICAL_CONSECUTIVE_SHOWS

    def test_default_warning_threshold(self):
        assert DefaultFatiguePolicy().warning_consecutive_shows() == 4

    def test_default_weekly_cap(self):
        assert DefaultFatiguePolicy().max_shows_per_week() == 6

    def test_default_gap_days(self):
        assert DefaultFatiguePolicy().consecutive_gap_days() == 2

    def test_custom_ceiling_moves_critical_threshold(self):
        policy = DefaultFatiguePolicy(max_consecutive=3)
        assert policy.max_consecutive_shows() == 3
        assert policy.critical_consecutive_shows() == 4

    def test_invalid_ceiling_raises(self):
        with pytest.raises(ValueError):
            DefaultFatiguePolicy(max_consecutive=0)

    def test_invalid_weekly_cap_raises(self):
        with pytest.raises(ValueError):
            DefaultFatiguePolicy(max_per_week=0)


class TestRedDayPolicy:
    """Tests for RedDayPolicy."""

    def test_single_show_day_limit(self):
        assert RedDayPolicy().limit_for(1) == 3

    def test_double_show_day_limit(self):
        assert RedDayPolicy().limit_for(2) == 1

    def test_custom_limits(self):
        policy = RedDayPolicy(single_show_day_limit=2, double_show_day_limit=0)
        assert policy.limit_for(1) == 2
        assert policy.limit_for(3) == 0


class TestSchedulerConfig:
    """Tests for SchedulerConfig."""

    def test_defaults(self):
        config = SchedulerConfig()
        assert config.max_attempts == 50
        assert config.near_tie_margin == 1
        assert config.solver_type == SolverType.HEURISTIC

    def test_zero_attempts_raises(self):
        with pytest.raises(ValueError):
            SchedulerConfig(max_attempts=0)

    def test_solver_type_from_cli_value(self):
        assert SolverType("cpsat") == SolverType.CPSAT
