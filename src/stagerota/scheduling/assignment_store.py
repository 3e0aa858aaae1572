"""Mutable show x role grid used while building a schedule."""

from typing import Iterable, Optional

from stagerota.domain.models import Assignment, Role


class AssignmentStore:
    """Per-show, per-role grid of performer names.

    The store is allocated once per generation run and cleared between
    attempts. It performs no validation of its own.

    Attributes:
        show_ids: Performance IDs, in the order rows are emitted.
    """

    def __init__(self, show_ids: Iterable[str]):
        self.show_ids: list[str] = list(show_ids)
        self._grid: dict[str, dict[Role, Optional[str]]] = {}
        self.clear()

    def clear(self) -> None:
        """Reset every show to all roles empty."""
        self._grid = {
            show_id: {role: None for role in Role} for show_id in self.show_ids
        }

    def assign(self, show_id: str, role: Role, performer: Optional[str]) -> None:
        self._grid[show_id][role] = performer

    def get(self, show_id: str, role: Role) -> Optional[str]:
        return self._grid[show_id][role]

    def performers_in(self, show_id: str) -> set[str]:
        """Performers holding any role in a show."""
        return {name for name in self._grid[show_id].values() if name}

    def show_ids_for(self, performer: str) -> list[str]:
        """Shows in which a performer holds a role, in store order."""
        return [
            show_id
            for show_id in self.show_ids
            if performer in self._grid[show_id].values()
        ]

    def show_count(self, performer: str) -> int:
        """Number of distinct shows a performer appears in."""
        return len(self.show_ids_for(performer))

    def empty_slots(self) -> list[tuple[str, Role]]:
        return [
            (show_id, role)
            for show_id in self.show_ids
            for role in Role
            if self._grid[show_id][role] is None
        ]

    def is_complete(self) -> bool:
        return not self.empty_slots()

    def to_assignment_list(self) -> list[Assignment]:
        """Flatten filled cells into assignments, in show then role order."""
        return [
            Assignment(show_id=show_id, role=role, performer=performer)
            for show_id in self.show_ids
            for role, performer in self._grid[show_id].items()
            if performer
        ]
