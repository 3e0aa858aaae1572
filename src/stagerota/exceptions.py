"""Exception types raised by the scheduling engine.

Input problems and infeasible schedules are reported through result
objects, not exceptions. These types cover the few places where the engine
cannot return a structured result.
"""


class StagerotaError(Exception):
    """Base class for all engine errors."""


class RosterUnavailableError(StagerotaError):
    """The roster provider could not supply a cast list."""


class AssignmentNotFoundError(StagerotaError, LookupError):
    """No OFF assignment exists for the requested performer and show."""

    def __init__(self, show_id: str, performer: str):
        self.show_id = show_id
        self.performer = performer
        super().__init__(
            f"OFF assignment not found for {performer} in show {show_id}"
        )


class SolverUnavailableError(StagerotaError):
    """The requested solver backend cannot be used."""
