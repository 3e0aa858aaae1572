"""Chronological index over the performances of a schedule week.

The timeline is the shared cache for the generator and the validator: the
performance subset in (date, time) order, the show -> ordinal map, and the
consecutive-run analysis built on top of them. A timeline is immutable;
when the show list changes, build a new one.
"""

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from stagerota.domain.models import Show
from stagerota.domain.policies import DEFAULT_CONSECUTIVE_GAP_DAYS


@dataclass(frozen=True)
class ConsecutiveSequence:
    """A run of a performer's appearances with no gap above the limit.

    Attributes:
        start_index: Timeline ordinal of the first show in the run.
        end_index: Timeline ordinal of the last show in the run.
        count: Number of appearances in the run.
        start_date: Date of the first show.
        end_date: Date of the last show.
        show_ids: IDs of the shows in the run, in order.
    """

    start_index: int
    end_index: int
    count: int
    start_date: date
    end_date: date
    show_ids: tuple[str, ...]

    @property
    def midpoint_show_id(self) -> str:
        return self.show_ids[len(self.show_ids) // 2]


class ShowTimeline:
    """Sorted performance index for one show list.

    Example:
        >>> timeline = ShowTimeline(shows)
        >>> timeline.index_of("sat_eve")
        5
        >>> timeline.longest_run([0, 1, 2, 5])
        3
    """

    def __init__(
        self,
        shows: Iterable[Show],
        gap_days: int = DEFAULT_CONSECUTIVE_GAP_DAYS,
    ):
        all_shows = list(shows)
        self.gap_days = gap_days
        # sorted() is stable, so same-time shows keep their input order
        self._shows: tuple[Show, ...] = tuple(
            sorted(
                (s for s in all_shows if s.is_performance),
                key=lambda s: (s.date, s.time),
            )
        )
        self._index: dict[str, int] = {
            show.id: ordinal for ordinal, show in enumerate(self._shows)
        }
        self._all: dict[str, Show] = {show.id: show for show in all_shows}

    @property
    def shows(self) -> tuple[Show, ...]:
        """Performances in chronological order."""
        return self._shows

    @property
    def show_ids(self) -> list[str]:
        return [show.id for show in self._shows]

    @property
    def special_days(self) -> list[Show]:
        """Non-performance entries (travel days, days off)."""
        return [s for s in self._all.values() if not s.is_performance]

    def __len__(self) -> int:
        return len(self._shows)

    def __contains__(self, show_id: object) -> bool:
        return show_id in self._index

    def index_of(self, show_id: str) -> int:
        """Ordinal of a performance in the timeline.

        Raises:
            KeyError: If the ID is not a performance in this timeline.
        """
        return self._index[show_id]

    def show(self, ordinal: int) -> Show:
        return self._shows[ordinal]

    def get(self, show_id: str) -> Optional[Show]:
        """Look up any calendar entry by ID, performance or not."""
        return self._all.get(show_id)

    def shows_by_date(self) -> dict[date, list[Show]]:
        """Group performances by calendar date, in date order."""
        grouped: dict[date, list[Show]] = defaultdict(list)
        for show in self._shows:
            grouped[show.date].append(show)
        return dict(grouped)

    def is_consecutive(self, earlier: Show, later: Show) -> bool:
        """Check if two appearances belong to the same run.

        The gap is measured between start times and floored to whole days,
        so a show at 21:00 followed by one at 20:00 two days later counts.
        """
        return (later.starts_at - earlier.starts_at).days <= self.gap_days

    def sequences(self, ordinals: Iterable[int]) -> list[ConsecutiveSequence]:
        """Split a performer's appearances into maximal consecutive runs.

        Args:
            ordinals: Timeline ordinals where the performer appears.
                Duplicates are ignored.

        Returns:
            Every run, including runs of a single show, in timeline order.
        """
        ordered = sorted(set(ordinals))
        if not ordered:
            return []

        runs: list[list[int]] = [[ordered[0]]]
        for previous, current in zip(ordered, ordered[1:]):
            if self.is_consecutive(self._shows[previous], self._shows[current]):
                runs[-1].append(current)
            else:
                runs.append([current])

        return [self._make_sequence(run) for run in runs]

    def longest_run(self, ordinals: Iterable[int]) -> int:
        """Length of the longest consecutive run among the given ordinals."""
        runs = self.sequences(ordinals)
        return max((run.count for run in runs), default=0)

    def _make_sequence(self, run: list[int]) -> ConsecutiveSequence:
        first = self._shows[run[0]]
        last = self._shows[run[-1]]
        return ConsecutiveSequence(
            start_index=run[0],
            end_index=run[-1],
            count=len(run),
            start_date=first.date,
            end_date=last.date,
            show_ids=tuple(self._shows[i].id for i in run),
        )
