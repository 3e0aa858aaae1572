"""OFF and RED day allocation.

Every performer without a role in a performance gets an OFF row for it. A
few OFF performers per date are additionally marked RED: off for the whole
date and not callable for emergency cover.
"""

import logging
from dataclasses import replace
from datetime import date
from typing import Optional

from stagerota.domain.models import OFF, Assignment, CastMember, Show
from stagerota.domain.policies import RedDayPolicy
from stagerota.domain.timeline import ShowTimeline
from stagerota.exceptions import AssignmentNotFoundError

logger = logging.getLogger(__name__)


class RedDayAllocator:
    """Adds OFF rows to role assignments and grants RED days.

    Rules:
    - One OFF row per performance for each cast member without a role in it
    - Only performers OFF for every show on a date can get RED on that date
    - One-show dates allow more RED performers than two-show dates
    - Each performer gets at most the policy's number of RED dates per run
    - One-show dates are handled first, then multi-show dates, each in date order
    """

    def __init__(self, policy: Optional[RedDayPolicy] = None):
        self.policy = policy or RedDayPolicy()

    def allocate(
        self,
        shows: list[Show],
        assignments: list[Assignment],
        cast: list[CastMember],
    ) -> list[Assignment]:
        """Append OFF rows, with RED flags, to role assignments.

        Args:
            shows: Every calendar entry of the week.
            assignments: Role assignments from a solver. Existing OFF rows
                are discarded and rebuilt.
            cast: Roster used for the run.

        Returns:
            Role assignments followed by OFF rows in timeline order.
        """
        timeline = ShowTimeline(shows)
        roles = [a for a in assignments if not a.is_off]

        performing: dict[str, set[str]] = {show.id: set() for show in timeline.shows}
        for a in roles:
            if a.show_id in performing:
                performing[a.show_id].add(a.performer)

        off_by_show = {
            show.id: [m.name for m in cast if m.name not in performing[show.id]]
            for show in timeline.shows
        }
        red = self._grant_red_days(timeline, off_by_show, cast)

        off_rows = [
            Assignment(
                show_id=show.id,
                role=OFF,
                performer=name,
                is_red_day=(show.date, name) in red,
            )
            for show in timeline.shows
            for name in off_by_show[show.id]
        ]
        logger.debug(
            "Added %d OFF rows with %d RED dates", len(off_rows), len(red)
        )
        return roles + off_rows

    def _grant_red_days(
        self,
        timeline: ShowTimeline,
        off_by_show: dict[str, list[str]],
        cast: list[CastMember],
    ) -> set[tuple[date, str]]:
        by_date = timeline.shows_by_date()
        # Single-show dates first so double-show days cannot starve them
        ordered_dates = sorted(by_date, key=lambda d: (len(by_date[d]) > 1, d))

        granted: dict[str, int] = {}
        red: set[tuple[date, str]] = set()
        for day in ordered_dates:
            day_shows = by_date[day]
            off_all_day = [
                m.name
                for m in cast
                if all(m.name in off_by_show[s.id] for s in day_shows)
            ]
            limit = self.policy.limit_for(len(day_shows))
            count = 0
            for name in off_all_day:
                if count >= limit:
                    break
                if granted.get(name, 0) >= self.policy.max_red_days_per_performer:
                    continue
                red.add((day, name))
                granted[name] = granted.get(name, 0) + 1
                count += 1
        return red


def toggle_red_day(
    assignments: list[Assignment],
    show_id: str,
    performer: str,
) -> list[Assignment]:
    """Flip the RED flag on a performer's OFF row for one show.

    Args:
        assignments: Current schedule.
        show_id: Show whose OFF row to change.
        performer: Performer name (case-insensitive).

    Returns:
        A new assignment list; the input is left untouched.

    Raises:
        AssignmentNotFoundError: If the performer has no OFF row in the show.
    """
    name = performer.strip().upper()
    for index, a in enumerate(assignments):
        if a.show_id == show_id and a.performer == name and a.is_off:
            updated = list(assignments)
            updated[index] = replace(a, is_red_day=not a.is_red_day)
            return updated
    raise AssignmentNotFoundError(show_id, name)
