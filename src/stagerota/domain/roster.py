"""Cast roster sources.

The engine never reaches for a global roster. Callers either pass a cast
list directly, or hand the scheduler a ``RosterProvider`` plus a fallback
roster such as ``DEFAULT_CAST``.
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union

from stagerota.domain.models import CastMember, Role
from stagerota.exceptions import RosterUnavailableError

DEFAULT_CAST: tuple[CastMember, ...] = (
    CastMember("PHIL", frozenset({Role.SARGE})),
    CastMember("SEAN", frozenset({Role.SARGE, Role.POTATO})),
    CastMember("JAMIE", frozenset({Role.POTATO, Role.RINGO})),
    CastMember("ADAM", frozenset({Role.RINGO, Role.PARTICLE})),
    CastMember("CARY", frozenset({Role.PARTICLE})),
    CastMember("JOE", frozenset({Role.RINGO, Role.MOZZIE})),
    CastMember("JOSE", frozenset({Role.MOZZIE})),
    CastMember("JOSH", frozenset({Role.WHO})),
    CastMember("CADE", frozenset({Role.WHO, Role.RINGO, Role.POTATO})),
    CastMember("MOLLY", frozenset({Role.BIN, Role.CORNISH})),
    CastMember("JASMINE", frozenset({Role.BIN, Role.CORNISH})),
    CastMember("SERENA", frozenset({Role.BIN, Role.CORNISH})),
)


class RosterProvider(ABC):
    """Source of the current cast list."""

    @abstractmethod
    def load_cast(self) -> list[CastMember]:
        """Return the current cast.

        Raises:
            RosterUnavailableError: If the roster cannot be loaded.
        """
        pass


class StaticRosterProvider(RosterProvider):
    """Provider backed by a fixed in-memory list."""

    def __init__(self, cast: list[CastMember]):
        self._cast = list(cast)

    def load_cast(self) -> list[CastMember]:
        return list(self._cast)


class JsonFileRosterProvider(RosterProvider):
    """Provider that reads ``[{"name": ..., "eligibleRoles": [...]}]`` from disk.

    A ``{"castMembers": [...]}`` wrapper, as returned by the roster
    service, is accepted too.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load_cast(self) -> list[CastMember]:
        try:
            with open(self.path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise RosterUnavailableError(
                f"Failed to load cast members from {self.path}: {exc}"
            ) from exc

        if isinstance(data, dict):
            data = data.get("castMembers", [])
        try:
            return [CastMember.from_dict(entry) for entry in data]
        except ValueError as exc:
            raise RosterUnavailableError(str(exc)) from exc
