"""Domain models and business rules for cast scheduling."""

from stagerota.domain.models import (
    OFF,
    ROLE_COUNT,
    Assignment,
    CastMember,
    GenerationResult,
    Role,
    Show,
    ShowStatus,
    load_assignments,
    load_cast,
    load_shows,
)
from stagerota.domain.policies import (
    DefaultFatiguePolicy,
    FatiguePolicy,
    RedDayPolicy,
    SchedulerConfig,
    SolverType,
)
from stagerota.domain.roster import (
    DEFAULT_CAST,
    JsonFileRosterProvider,
    RosterProvider,
    StaticRosterProvider,
)
from stagerota.domain.timeline import ConsecutiveSequence, ShowTimeline

__all__ = [
    # Models
    "OFF",
    "ROLE_COUNT",
    "Assignment",
    "CastMember",
    "GenerationResult",
    "Role",
    "Show",
    "ShowStatus",
    "load_assignments",
    "load_cast",
    "load_shows",
    # Policies
    "DefaultFatiguePolicy",
    "FatiguePolicy",
    "RedDayPolicy",
    "SchedulerConfig",
    "SolverType",
    # Roster
    "DEFAULT_CAST",
    "JsonFileRosterProvider",
    "RosterProvider",
    "StaticRosterProvider",
    # Timeline
    "ConsecutiveSequence",
    "ShowTimeline",
]
