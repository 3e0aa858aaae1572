"""Smoke tests for package imports and the end-to-end flow."""

import importlib
import random
from datetime import date, time, timedelta

import pytest

from stagerota.domain.models import Show
from stagerota.domain.roster import DEFAULT_CAST
from stagerota.scheduling.assignment_store import AssignmentStore
from stagerota.scheduling.scheduler import Scheduler
from stagerota.validation.validator import ScheduleValidator

MODULES = [
    "stagerota.exceptions",
    "stagerota.domain",
    "stagerota.domain.models",
    "stagerota.domain.policies",
    "stagerota.domain.roster",
    "stagerota.domain.timeline",
    "stagerota.scheduling",
    "stagerota.scheduling.assignment_store",
    "stagerota.scheduling.constraints",
    "stagerota.scheduling.heuristic_solver",
    "stagerota.scheduling.cpsat_solver",
    "stagerota.scheduling.red_days",
    "stagerota.scheduling.scheduler",
    "stagerota.validation",
    "stagerota.validation.issues",
    "stagerota.validation.report",
    "stagerota.validation.validator",
    "stagerota.cli",
]


class TestImports:
    """Every module imports cleanly and exports what it lists."""

    @pytest.mark.parametrize("name", MODULES)
    def test_module_imports(self, name):
        module = importlib.import_module(name)
        for exported in getattr(module, "__all__", []):
            assert hasattr(module, exported), f"{name} is missing {exported}"

    def test_assignment_store_annotations(self):
        assert AssignmentStore.performers_in.__annotations__["return"] == set[str]


class TestSmoke:
    """End-to-end smoke tests for the scheduling system."""

    @pytest.fixture
    def scheduler(self):
        """Create a scheduler with a fixed seed."""
        return Scheduler(rng=random.Random(42))

    @pytest.fixture
    def validator(self):
        """Create a validator with default policies."""
        return ScheduleValidator()

    def test_generate_then_validate(self, scheduler, validator):
        shows = [
            Show(f"show{i + 1}", date(2024, 1, 1) + timedelta(days=i), time(19, 0))
            for i in range(5)
        ]
        result = scheduler.generate(shows)
        assert result.success

        validation = validator.validate(shows, result.assignments, list(DEFAULT_CAST))
        assert validation.is_valid, validation.error_messages
